"""Corrélation des maisons entre deux cartes (overlays).

La comparaison de maisons est calculée en amont: quatre tables à plat
(points et cuspides de chaque sujet projetés dans les maisons de l'autre).
Ce module ne calcule rien, il retrouve la maison projetée d'un point ou d'une
cuspide. L'absence d'un point est un cas normal et donne None.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal

from chart_insights.domain.models import HouseComparison, PointInHouse

ProjectionDirection = Literal["first_in_second", "second_in_first"]

FIRST_IN_SECOND = "first_in_second"
SECOND_IN_FIRST = "second_in_first"

_POINT_TABLES = MappingProxyType(
    {
        FIRST_IN_SECOND: "first_points_in_second_houses",
        SECOND_IN_FIRST: "second_points_in_first_houses",
    }
)
_CUSP_TABLES = MappingProxyType(
    {
        FIRST_IN_SECOND: "first_cusps_in_second_houses",
        SECOND_IN_FIRST: "second_cusps_in_first_houses",
    }
)

# La cuspide de la maison I est publiée sous l'un ou l'autre nom.
CUSP_ALIASES = MappingProxyType(
    {
        "Ascendant": ("Ascendant", "First_House"),
        "First_House": ("First_House", "Ascendant"),
    }
)

ORDINAL_HOUSE_NAMES = (
    "First House",
    "Second House",
    "Third House",
    "Fourth House",
    "Fifth House",
    "Sixth House",
    "Seventh House",
    "Eighth House",
    "Ninth House",
    "Tenth House",
    "Eleventh House",
    "Twelfth House",
)

HOUSE_PLACEHOLDER = "-"


def _records(
    comparison: HouseComparison | None, tables: MappingProxyType, direction: str
) -> list[PointInHouse]:
    if comparison is None:
        return []
    attr = tables.get(direction)
    if attr is None:
        return []
    return getattr(comparison, attr)


def _search(records: list[PointInHouse], point_name: str) -> int | None:
    for record in records:
        if record.point_name == point_name:
            return record.projected_house_number
    return None


def find_projected_house(
    point_name: str,
    comparison: HouseComparison | None,
    direction: ProjectionDirection,
) -> int | None:
    """Maison (1-12) dans laquelle `point_name` tombe dans l'autre carte.

    Recherche exacte et sensible à la casse; None si le point, la comparaison
    ou la direction est absent.
    """
    return _search(_records(comparison, _POINT_TABLES, direction), point_name)


def find_projected_cusp_house(
    cusp_name: str,
    comparison: HouseComparison | None,
    direction: ProjectionDirection,
) -> int | None:
    """Maison projetée d'une cuspide; "Ascendant" et "First_House" sont équivalents."""
    records = _records(comparison, _CUSP_TABLES, direction)
    for candidate in CUSP_ALIASES.get(cusp_name, (cusp_name,)):
        found = _search(records, candidate)
        if found is not None:
            return found
    return None


class HouseOverlayIndex:
    """Index nom → projection construit une fois par comparaison.

    Donne les mêmes réponses que `find_projected_house` et
    `find_projected_cusp_house` (la première occurrence d'un nom l'emporte),
    sans rebalayer les listes à chaque recherche.
    """

    def __init__(self, comparison: HouseComparison | None):
        self._points: dict[str, dict[str, PointInHouse]] = {}
        self._cusps: dict[str, dict[str, PointInHouse]] = {}
        for direction in (FIRST_IN_SECOND, SECOND_IN_FIRST):
            self._points[direction] = self._index(
                _records(comparison, _POINT_TABLES, direction)
            )
            self._cusps[direction] = self._index(
                _records(comparison, _CUSP_TABLES, direction)
            )

    @staticmethod
    def _index(records: list[PointInHouse]) -> dict[str, PointInHouse]:
        index: dict[str, PointInHouse] = {}
        for record in records:
            index.setdefault(record.point_name, record)
        return index

    def house_of(self, point_name: str, direction: ProjectionDirection) -> int | None:
        record = self._points.get(direction, {}).get(point_name)
        return record.projected_house_number if record else None

    def cusp_house_of(self, cusp_name: str, direction: ProjectionDirection) -> int | None:
        table = self._cusps.get(direction, {})
        for candidate in CUSP_ALIASES.get(cusp_name, (cusp_name,)):
            record = table.get(candidate)
            if record is not None:
                return record.projected_house_number
        return None


def format_ordinal_house(number: int | None) -> str:
    """1 → "First House" ... 12 → "Twelfth House"; tout le reste → "-"."""
    if isinstance(number, bool) or not isinstance(number, int):
        return HOUSE_PLACEHOLDER
    if 1 <= number <= len(ORDINAL_HOUSE_NAMES):
        return ORDINAL_HOUSE_NAMES[number - 1]
    return HOUSE_PLACEHOLDER
