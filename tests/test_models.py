"""Tests des modèles d'entrée (regroupement des points, valeurs nulles, aspects)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chart_insights.domain.models import Aspect, ChartResult, Subject


def test_flat_points_are_collected() -> None:
    """Les points renvoyés à plat par le service sont indexés par leur nom."""
    subject = Subject.model_validate(
        {
            "name": "Alice",
            "city": "Paris",
            "sun": {"name": "Sun", "sign": "Leo", "position": 15.5, "house": "First_House"},
            "medium_coeli": {"name": "Medium_Coeli", "sign": "Aries", "position": 2.0},
            "houses_names_list": ["First_House"],
        }
    )
    assert subject.city == "Paris"
    assert set(subject.points) == {"Sun", "Medium_Coeli"}
    assert subject.point("medium coeli").sign == "Aries"
    assert subject.point("Pluto") is None
    assert subject.ascendant is None


def test_aspect_movement_and_swap() -> None:
    aspect = Aspect(
        p1_name="Moon",
        p2_name="Sun",
        aspect="trine",
        orbit=1.0,
        aspect_movement="separating",
        p1_owner="Bob",
        p2_owner="Alice",
    )
    assert aspect.aspect_movement == "Separating"
    swapped = aspect.swapped()
    assert (swapped.p1_name, swapped.p1_owner) == ("Sun", "Alice")
    assert (swapped.p2_name, swapped.p2_owner) == ("Moon", "Bob")
    assert aspect.p1_name == "Moon"


def test_invalid_movement_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Aspect(p1_name="Sun", p2_name="Moon", aspect="trine", orbit=1.0, aspect_movement="static")


def test_chart_result_nulls_and_subjects() -> None:
    natal = Subject(name="Alice")
    chart = ChartResult(chart_type="Natal", subject=natal, aspects=None, active_points=None)
    assert chart.aspects == []
    assert chart.active_points == []
    assert chart.primary_subject is natal
    assert chart.secondary_subject is None
