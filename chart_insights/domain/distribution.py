"""Répartition des points actifs par élément et par modalité.

Le service de calcul fournit normalement `element_distribution` et
`quality_distribution`; certaines cartes (retours, compositions) les renvoient
à zéro. Ces fonctions les recalculent alors à partir des points actifs du sujet,
en lisant l'élément/la modalité du point ou, à défaut, ceux de son signe.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from types import MappingProxyType

from chart_insights.domain.models import ElementDistribution, Point, QualityDistribution, Subject
from chart_insights.domain.points import point_key
from chart_insights.domain.rulership import normalize_sign

ELEMENTS = ("fire", "earth", "air", "water")
QUALITIES = ("cardinal", "fixed", "mutable")

ELEMENT_BY_SIGN = MappingProxyType(
    {
        "Aries": "fire",
        "Taurus": "earth",
        "Gemini": "air",
        "Cancer": "water",
        "Leo": "fire",
        "Virgo": "earth",
        "Libra": "air",
        "Scorpio": "water",
        "Sagittarius": "fire",
        "Capricorn": "earth",
        "Aquarius": "air",
        "Pisces": "water",
    }
)

QUALITY_BY_SIGN = MappingProxyType(
    {
        "Aries": "cardinal",
        "Taurus": "fixed",
        "Gemini": "mutable",
        "Cancer": "cardinal",
        "Leo": "fixed",
        "Virgo": "mutable",
        "Libra": "cardinal",
        "Scorpio": "fixed",
        "Sagittarius": "mutable",
        "Capricorn": "cardinal",
        "Aquarius": "fixed",
        "Pisces": "mutable",
    }
)


def point_element(point: Point) -> str | None:
    if point.element:
        return point.element.strip().lower()
    return ELEMENT_BY_SIGN.get(normalize_sign(point.sign))


def point_quality(point: Point) -> str | None:
    if point.quality:
        return point.quality.strip().lower()
    return QUALITY_BY_SIGN.get(normalize_sign(point.sign))


def _active_subject_points(subject: Subject | None, active_points: Iterable[str]) -> list[Point]:
    if subject is None:
        return []
    by_key = {point_key(name): point for name, point in subject.points.items()}
    wanted = [point_key(name) for name in active_points]
    if not wanted:
        return list(by_key.values())
    return [by_key[key] for key in dict.fromkeys(wanted) if key in by_key]


def _count(values: Iterable[str | None], categories: tuple[str, ...]) -> dict[str, int]:
    counts = dict.fromkeys(categories, 0)
    for value in values:
        if value in counts:
            counts[value] += 1
    return counts


def _percent(count: int, total: int) -> int:
    # arrondi au plus proche, moitiés vers le haut
    return math.floor(count * 100 / total + 0.5)


def element_counts(subject: Subject | None, active_points: Iterable[str] = ()) -> dict[str, int]:
    """Effectif par élément des points actifs (aucun point actif = tous les points)."""
    points = _active_subject_points(subject, active_points)
    return _count((point_element(p) for p in points), ELEMENTS)


def quality_counts(subject: Subject | None, active_points: Iterable[str] = ()) -> dict[str, int]:
    points = _active_subject_points(subject, active_points)
    return _count((point_quality(p) for p in points), QUALITIES)


def is_zero_element_distribution(distribution: ElementDistribution | None) -> bool:
    if distribution is None:
        return True
    return all(getattr(distribution, f"{name}_percentage") == 0 for name in ELEMENTS)


def is_zero_quality_distribution(distribution: QualityDistribution | None) -> bool:
    if distribution is None:
        return True
    return all(getattr(distribution, f"{name}_percentage") == 0 for name in QUALITIES)


def compute_element_distribution(
    subject: Subject | None,
    active_points: Iterable[str] = (),
    reported: ElementDistribution | None = None,
) -> ElementDistribution | None:
    """Répartition par élément, avec pourcentages arrondis à l'entier.

    La répartition fournie par le service est conservée si elle n'est pas nulle.
    Sinon elle est recalculée sur les points actifs; sans aucun point classable,
    la valeur fournie est renvoyée telle quelle (éventuellement None).
    """
    if not is_zero_element_distribution(reported):
        return reported
    counts = element_counts(subject, active_points)
    total = sum(counts.values())
    if total == 0:
        return reported
    percentages = {f"{name}_percentage": _percent(counts[name], total) for name in ELEMENTS}
    return ElementDistribution(**counts, **percentages)


def compute_quality_distribution(
    subject: Subject | None,
    active_points: Iterable[str] = (),
    reported: QualityDistribution | None = None,
) -> QualityDistribution | None:
    """Répartition par modalité; mêmes règles que `compute_element_distribution`."""
    if not is_zero_quality_distribution(reported):
        return reported
    counts = quality_counts(subject, active_points)
    total = sum(counts.values())
    if total == 0:
        return reported
    percentages = {f"{name}_percentage": _percent(counts[name], total) for name in QUALITIES}
    return QualityDistribution(**counts, **percentages)
