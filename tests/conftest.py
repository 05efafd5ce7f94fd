"""Configuration de test pour pytest avec gestion des chemins et fabriques de données.

Ce module configure pytest pour résoudre les imports `chart_insights` en ajoutant la racine du
projet au sys.path, et fournit des fabriques de points, d'aspects, de sujets et de comparaisons
de maisons pour construire des résultats de carte compacts dans les tests.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from chart_insights...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from chart_insights.domain.models import (  # noqa: E402
    Aspect,
    HouseComparison,
    Point,
    PointInHouse,
    Subject,
)


@pytest.fixture
def make_point():
    """Fabrique de `Point` avec des valeurs par défaut raisonnables."""

    def _make(name: str, sign: str = "Aries", position: float = 10.0, house: str | None = None, **extra):
        return Point(name=name, sign=sign, position=position, house=house, **extra)

    return _make


@pytest.fixture
def make_aspect():
    """Fabrique d'`Aspect` (noms, type, orbe et propriétaires optionnels)."""

    def _make(
        p1: str,
        p2: str,
        aspect: str = "trine",
        orbit: float = 1.0,
        p1_owner: str | None = None,
        p2_owner: str | None = None,
        **extra,
    ):
        return Aspect(
            p1_name=p1,
            p2_name=p2,
            aspect=aspect,
            orbit=orbit,
            p1_owner=p1_owner,
            p2_owner=p2_owner,
            **extra,
        )

    return _make


@pytest.fixture
def make_subject(make_point):
    """Fabrique de `Subject` à partir d'un dict nom → (signe, degré, maison)."""

    def _make(name: str, placements: dict[str, tuple] | None = None):
        points = {}
        for point_name, placement in (placements or {}).items():
            sign, position, *rest = placement
            points[point_name] = make_point(point_name, sign, position, rest[0] if rest else None)
        return Subject(name=name, points=points)

    return _make


@pytest.fixture
def make_comparison():
    """Fabrique de `HouseComparison`; chaque liste est un dict nom → maison."""

    def _records(mapping: dict[str, int] | None, owner: str | None) -> list[PointInHouse]:
        return [
            PointInHouse(
                point_name=name,
                point_sign="Aries",
                point_degree=1.0,
                projected_house_number=house,
                projected_house_name=f"House_{house}",
                point_owner_name=owner,
            )
            for name, house in (mapping or {}).items()
        ]

    def _make(
        first_points: dict[str, int] | None = None,
        second_points: dict[str, int] | None = None,
        first_cusps: dict[str, int] | None = None,
        second_cusps: dict[str, int] | None = None,
        first_name: str = "Natal",
        second_name: str = "Other",
    ):
        return HouseComparison(
            first_subject_name=first_name,
            second_subject_name=second_name,
            first_points_in_second_houses=_records(first_points, first_name),
            second_points_in_first_houses=_records(second_points, second_name),
            first_cusps_in_second_houses=_records(first_cusps, first_name),
            second_cusps_in_first_houses=_records(second_cusps, second_name),
        )

    return _make
