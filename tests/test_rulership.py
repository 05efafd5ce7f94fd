"""Tests des maîtrises planétaires (tables classique/moderne et maître de l'Ascendant)."""

from __future__ import annotations

import pytest

from chart_insights.domain.rulership import (
    CLASSICAL_RULERS,
    MODERN_OVERRIDES,
    ZODIAC_SIGNS,
    ascendant_ruler,
    normalize_sign,
    rulership_table,
    sign_ruler,
)

ZODIAC_SIGN_COUNT = 12


def test_reference_rulers() -> None:
    assert sign_ruler("Scorpio", "classical") == "Mars"
    assert sign_ruler("Scorpio", "modern") == "Pluto"
    assert sign_ruler("Leo", "modern") == "Sun"


def test_tables_are_total() -> None:
    """Chaque signe a exactement un maître dans chaque régime."""
    for mode in ("classical", "modern"):
        table = rulership_table(mode)
        assert list(table) == list(ZODIAC_SIGNS)
        assert len(table) == ZODIAC_SIGN_COUNT
        assert all(table.values())


def test_modern_overrides_exactly_three_signs() -> None:
    classical = rulership_table("classical")
    modern = rulership_table("modern")
    changed = {sign for sign in ZODIAC_SIGNS if classical[sign] != modern[sign]}
    assert changed == set(MODERN_OVERRIDES)
    assert modern["Aquarius"] == "Uranus"
    assert modern["Pisces"] == "Neptune"


def test_classical_rulers_use_the_seven_traditional_bodies() -> None:
    assert set(CLASSICAL_RULERS.values()) == {
        "Sun",
        "Moon",
        "Mercury",
        "Venus",
        "Mars",
        "Jupiter",
        "Saturn",
    }


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("scorpio", "Scorpio"), (" LEO ", "Leo"), ("Scorpione", "Scorpio"), ("Cap", "Capricorn")],
)
def test_sign_aliases(raw: str, expected: str) -> None:
    assert normalize_sign(raw) == expected


def test_unknown_sign_and_mode() -> None:
    """Signe inconnu → None; régime inconnu → régime classique."""
    assert sign_ruler("Ophiuchus") is None
    assert sign_ruler(None) is None
    assert sign_ruler("Scorpio", "esoteric") == "Mars"


def test_ascendant_ruler_found(make_subject) -> None:
    subject = make_subject(
        "Alice",
        {"Ascendant": ("Scorpio", 3.5, "First_House"), "Mars": ("Leo", 12.0, "Tenth_House"), "Pluto": ("Libra", 2.0)},
    )
    assert ascendant_ruler(subject, "classical").name == "Mars"
    assert ascendant_ruler(subject, "modern").name == "Pluto"


def test_ascendant_ruler_respects_active_points(make_subject) -> None:
    """Un maître désactivé n'est pas retourné; les noms actifs sont comparés normalisés."""
    subject = make_subject("Alice", {"Ascendant": ("Aries", 3.5), "Mars": ("Leo", 12.0)})
    assert ascendant_ruler(subject, "classical", ["Sun", "Moon"]) is None
    assert ascendant_ruler(subject, "classical", ["mars"]).name == "Mars"
    assert ascendant_ruler(subject, "classical", []).name == "Mars"


def test_ascendant_ruler_missing_data(make_subject) -> None:
    assert ascendant_ruler(None) is None
    assert ascendant_ruler(make_subject("Alice", {"Sun": ("Leo", 1.0)})) is None
    assert ascendant_ruler(make_subject("Alice", {"Ascendant": ("Leo", 1.0)})) is None
