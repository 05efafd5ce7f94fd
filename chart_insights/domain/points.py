"""Catégories de points et comparaison de noms.

Les noms reçus du service suivent la convention `Medium_Coeli`,
`True_North_Lunar_Node`, ...; certaines sources écrivent `Midheaven` ou
`MC`. `point_key` ramène tous ces libellés à une clé de comparaison unique.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from chart_insights.domain.models import Subject

LUMINARIES = frozenset({"sun", "moon"})
PERSONAL_PLANETS = frozenset({"sun", "moon", "mercury", "venus", "mars"})
SOCIAL_PLANETS = frozenset({"jupiter", "saturn"})
ANGLES = frozenset({"ascendant", "medium_coeli", "descendant", "imum_coeli"})
PRIMARY_ANGLES = frozenset({"ascendant", "medium_coeli"})

POINT_ALIASES = MappingProxyType(
    {
        "midheaven": "medium_coeli",
        "mc": "medium_coeli",
        "asc": "ascendant",
        "ic": "imum_coeli",
        "dsc": "descendant",
        "desc": "descendant",
    }
)


def point_key(name: str | None) -> str:
    """Clé normalisée d'un nom de point (minuscules, `_` comme séparateur)."""
    if not name:
        return ""
    key = "_".join(name.strip().lower().replace("_", " ").split())
    return POINT_ALIASES.get(key, key)


# Ordre d'affichage: luminaires, planètes personnelles, sociales,
# transpersonnelles, puis points calculés et angles.
PLANET_ORDER = (
    "Sun",
    "Moon",
    "Mercury",
    "Venus",
    "Mars",
    "Jupiter",
    "Saturn",
    "Uranus",
    "Neptune",
    "Pluto",
    "Chiron",
    "Mean Lilith",
    "True North Lunar Node",
    "True South Lunar Node",
    "Ascendant",
    "Midheaven",
    "Descendant",
    "Imum Coeli",
    "Vertex",
    "Part of Fortune",
)
UNORDERED_INDEX = 999

_ORDER_INDEX = MappingProxyType({point_key(name): i for i, name in enumerate(PLANET_ORDER)})


def sort_index(name: str | None) -> int:
    """Rang d'un point dans `PLANET_ORDER`; les points inconnus passent à la fin."""
    return _ORDER_INDEX.get(point_key(name), UNORDERED_INDEX)


def sort_active_points(active_points: Iterable[str], subject: Subject | None = None) -> list[str]:
    """Trie les clés de points actifs dans l'ordre d'affichage canonique.

    Le nom du point dans `subject`, quand il est présent, sert au classement.
    Tri stable: les points hors de `PLANET_ORDER` gardent leur ordre d'entrée.
    """

    def rank(key: str) -> int:
        point = subject.point(key) if subject is not None else None
        return sort_index(point.name if point is not None else key)

    return sorted(active_points, key=rank)
