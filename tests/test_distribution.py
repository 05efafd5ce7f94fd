"""Tests des répartitions par élément et par modalité des points actifs."""

from __future__ import annotations

from chart_insights.domain.distribution import (
    compute_element_distribution,
    compute_quality_distribution,
    element_counts,
    is_zero_element_distribution,
    point_element,
    point_quality,
    quality_counts,
)
from chart_insights.domain.models import ElementDistribution, QualityDistribution

THIRD_ROUNDED = 33
TWO_THIRDS_ROUNDED = 67


def test_point_element_and_quality(make_point) -> None:
    """L'élément du point prime; sinon celui du signe (abréviations comprises)."""
    assert point_element(make_point("Sun", "Leo")) == "fire"
    assert point_quality(make_point("Sun", "Sco")) == "fixed"
    assert point_element(make_point("Sun", "Leo", element="Air")) == "air"
    assert point_element(make_point("Sun", "Ophiuchus")) is None


def test_counts_follow_active_points(make_subject) -> None:
    subject = make_subject(
        "Alice",
        {"Sun": ("Leo", 1.0), "Moon": ("Cancer", 2.0), "Medium_Coeli": ("Gemini", 3.0)},
    )
    assert element_counts(subject, ["sun", "Midheaven"]) == {"fire": 1, "earth": 0, "air": 1, "water": 0}
    assert quality_counts(subject) == {"cardinal": 1, "fixed": 1, "mutable": 1}
    assert element_counts(None, ["Sun"]) == {"fire": 0, "earth": 0, "air": 0, "water": 0}


def test_reported_distribution_is_kept_when_not_zero(make_subject) -> None:
    subject = make_subject("Alice", {"Sun": ("Leo", 1.0)})
    reported = ElementDistribution(water=3, water_percentage=100)
    assert compute_element_distribution(subject, [], reported) is reported


def test_zero_distribution_is_recomputed(make_subject) -> None:
    """Pourcentages arrondis à l'entier le plus proche."""
    subject = make_subject(
        "Alice",
        {"Sun": ("Aries", 1.0), "Moon": ("Cancer", 2.0), "Mars": ("Taurus", 3.0)},
    )
    assert is_zero_element_distribution(ElementDistribution())

    qualities = compute_quality_distribution(subject, [], QualityDistribution())
    assert (qualities.cardinal, qualities.fixed, qualities.mutable) == (2, 1, 0)
    assert qualities.cardinal_percentage == TWO_THIRDS_ROUNDED
    assert qualities.fixed_percentage == THIRD_ROUNDED

    elements = compute_element_distribution(subject)
    assert (elements.fire, elements.water, elements.earth) == (1, 1, 1)
    assert elements.fire_percentage == THIRD_ROUNDED


def test_nothing_to_count_returns_reported(make_subject) -> None:
    subject = make_subject("Alice", {"Sun": ("Ophiuchus", 1.0)})
    assert compute_element_distribution(subject) is None
    reported = QualityDistribution()
    assert compute_quality_distribution(subject, [], reported) is reported
