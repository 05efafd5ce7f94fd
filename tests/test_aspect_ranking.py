"""Tests du classement des aspects clés et de la recherche des paires "titre".

Couvre les propriétés attendues du classement (longueur, sous-ensemble, aspects majeurs
uniquement, déterminisme, ordre par palier puis orbe) et un scénario de synastrie complet.
"""

from __future__ import annotations

import pytest

from chart_insights.domain.aspect_ranking import (
    DEFAULT_MAX_RESULTS,
    LOWEST_TIER,
    MAJOR_ASPECTS,
    aspect_tier,
    find_best_aspect,
    find_first_best_aspect,
    find_synastry_key_aspect,
    is_moving_owner,
    pair_predicate,
    rank_key_aspects,
)

SYNASTRY_ASPECT_COUNT = 12
MAJOR_COUNT = 8
SATURN_SUN_ORB = 0.5
MERCURY_VENUS_ORB = 4.0
TIGHT_ORB = 0.1
WIDE_ORB = 5.0


@pytest.fixture
def synastry_aspects(make_aspect):
    """Douze aspects (8 majeurs, 4 mineurs) entre deux cartes."""
    return [
        make_aspect("Mercury", "Venus", "trine", MERCURY_VENUS_ORB, "Alice", "Bob"),
        make_aspect("Sun", "Moon", "quincunx", 0.01, "Alice", "Bob"),
        make_aspect("Sun", "Moon", "conjunction", 0.3, "Alice", "Bob"),
        make_aspect("Neptune", "Pluto", "sextile", 0.01, "Alice", "Bob"),
        make_aspect("Moon", "Jupiter", "trine", 0.2, "Alice", "Bob"),
        make_aspect("Mars", "Saturn", "semi-square", 0.02, "Alice", "Bob"),
        make_aspect("Saturn", "Sun", "square", SATURN_SUN_ORB, "Transit", "Natal"),
        make_aspect("Venus", "Mars", "sextile", TIGHT_ORB, "Alice", "Bob"),
        make_aspect("Venus", "Pluto", "quintile", 0.03, "Alice", "Bob"),
        make_aspect("Ascendant", "Uranus", "square", 0.05, "Alice", "Bob"),
        make_aspect("Moon", "Mars", "sesquiquadrate", 0.04, "Alice", "Bob"),
        make_aspect("Sun", "Mercury", "opposition", 2.0, "Alice", "Bob"),
    ]


def test_synastry_scenario_places_slow_transit_first(synastry_aspects) -> None:
    """Le carré Saturne–Soleil (palier 1) passe devant des aspects plus serrés."""
    assert len(synastry_aspects) == SYNASTRY_ASPECT_COUNT
    ranked = rank_key_aspects(synastry_aspects, DEFAULT_MAX_RESULTS)

    assert len(ranked) == DEFAULT_MAX_RESULTS
    assert (ranked[0].p1_name, ranked[0].p2_name, ranked[0].aspect) == ("Saturn", "Sun", "square")
    assert [(a.p1_name, a.p2_name) for a in ranked] == [
        ("Saturn", "Sun"),
        ("Sun", "Moon"),
        ("Sun", "Mercury"),
        ("Moon", "Jupiter"),
        ("Venus", "Mars"),
        ("Mercury", "Venus"),
    ]


def test_ranking_properties(synastry_aspects) -> None:
    """Longueur bornée, sous-ensemble, majeurs uniquement, ordre (palier, orbe)."""
    for max_results in (1, 3, DEFAULT_MAX_RESULTS, SYNASTRY_ASPECT_COUNT):
        ranked = rank_key_aspects(synastry_aspects, max_results)
        assert len(ranked) <= max_results
        assert all(any(a is b for b in synastry_aspects) for a in ranked)
        assert all(a.aspect in MAJOR_ASPECTS for a in ranked)
        keys = [(aspect_tier(a), abs(a.orbit)) for a in ranked]
        assert keys == sorted(keys)

    assert len(rank_key_aspects(synastry_aspects, SYNASTRY_ASPECT_COUNT)) == MAJOR_COUNT


def test_ranking_is_deterministic(synastry_aspects) -> None:
    assert rank_key_aspects(synastry_aspects) == rank_key_aspects(synastry_aspects)


def test_equal_orbs_keep_input_order(make_aspect) -> None:
    first = make_aspect("Uranus", "Neptune", "trine", 1.0)
    second = make_aspect("Pluto", "Uranus", "square", 1.0)
    assert rank_key_aspects([first, second]) == [first, second]
    assert rank_key_aspects([second, first]) == [second, first]


def test_empty_and_minor_only_inputs(make_aspect) -> None:
    assert rank_key_aspects([]) == []
    assert rank_key_aspects([make_aspect("Sun", "Moon", "quincunx", 0.1)]) == []
    assert rank_key_aspects([make_aspect("Sun", "Moon", "trine", 0.1)], 0) == []


@pytest.mark.parametrize(
    ("p1", "p2", "kind", "owners", "expected"),
    [
        ("Saturn", "Sun", "square", ("Transit", "Natal"), 1),
        ("Venus", "Jupiter", "trine", ("Natal", "Transit"), 1),
        ("Jupiter", "Ascendant", "trine", ("Transit", "Natal"), 1),
        ("Saturn", "Sun", "square", ("Alice", "Bob"), 3),
        ("Sun", "Mars", "opposition", (None, None), 2),
        ("Sun", "Mars", "trine", (None, None), 3),
        ("Venus", "Neptune", "sextile", (None, None), 4),
        ("Medium_Coeli", "Uranus", "square", (None, None), 5),
        ("Uranus", "Pluto", "sextile", (None, None), LOWEST_TIER),
    ],
)
def test_aspect_tiers(make_aspect, p1, p2, kind, owners, expected) -> None:
    aspect = make_aspect(p1, p2, kind, 1.0, *owners)
    assert aspect_tier(aspect) == expected


def test_moving_owner_names(make_aspect) -> None:
    """Un nom de sujet fourni comme carte mobile active le palier 1."""
    aspect = make_aspect("Saturn", "Moon", "square", 3.0, "Return 2026", "Alice")
    assert aspect_tier(aspect) == 3
    assert aspect_tier(aspect, ["Return 2026"]) == 1
    assert is_moving_owner("Solar_Return")
    assert is_moving_owner("transiting")
    assert is_moving_owner("Transits")
    assert not is_moving_owner(None)
    assert not is_moving_owner("Alice")


def test_strict_tier_dominance(make_aspect) -> None:
    """Un palier inférieur l'emporte quel que soit l'écart d'orbe."""
    wide_transit = make_aspect("Jupiter", "Mercury", "trine", WIDE_ORB, "Transit", "Natal")
    exact_conjunction = make_aspect("Sun", "Venus", "conjunction", 0.0)
    assert rank_key_aspects([exact_conjunction, wide_transit]) == [wide_transit, exact_conjunction]


def test_find_best_aspect_tightest_match(make_aspect) -> None:
    loose = make_aspect("Sun", "Moon", "trine", 3.0)
    tight = make_aspect("Moon", "Sun", "square", -0.4)
    other = make_aspect("Venus", "Mars", "trine", 0.1)
    aspects = [loose, tight, other]
    predicate = pair_predicate(["Sun"], ["Moon"])

    assert find_best_aspect(aspects, predicate) is tight
    assert find_best_aspect(aspects, predicate, allow_either_direction=False) is loose
    assert find_best_aspect(aspects, predicate, max_orb=0.2) is None
    assert find_best_aspect([], predicate) is None


def test_find_best_aspect_first_wins_on_ties(make_aspect) -> None:
    first = make_aspect("Sun", "Moon", "trine", 1.0)
    second = make_aspect("Sun", "Moon", "sextile", 1.0)
    assert find_best_aspect([first, second], pair_predicate(["Sun"], ["Moon"])) is first


def test_predicate_chain_order_is_callers(make_aspect) -> None:
    """Le premier prédicat qui trouve un aspect l'emporte, même moins serré."""
    sun_sun = make_aspect("Sun", "Sun", "conjunction", 2.0)
    moon_moon = make_aspect("Moon", "Moon", "trine", 0.1)
    aspects = [sun_sun, moon_moon]
    chain = (
        pair_predicate(["Sun"], ["Moon"]),
        pair_predicate(["Sun"], ["Sun"]),
        pair_predicate(["Sun", "Moon"], ["Sun", "Moon"]),
    )
    assert find_first_best_aspect(aspects, chain) is sun_sun
    assert find_first_best_aspect(aspects, chain[2:]) is moon_moon
    assert find_first_best_aspect(aspects, chain[:1]) is None


def test_synastry_key_aspect_prefers_ascendants(make_aspect) -> None:
    sun_moon = make_aspect("Sun", "Moon", "conjunction", 1.0, "Alice", "Bob")
    asc_asc = make_aspect("Ascendant", "Ascendant", "trine", 3.0, "Alice", "Bob")
    assert find_synastry_key_aspect([sun_moon, asc_asc]) is asc_asc


def test_synastry_key_aspect_luminaries_before_tighter_aspects(make_aspect) -> None:
    venus_mars = make_aspect("Mars", "Venus", "conjunction", 0.5, "Alice", "Bob")
    moon_sun = make_aspect("Moon", "Sun", "trine", 2.0, "Alice", "Bob")
    far_asc = make_aspect("Ascendant", "Ascendant", "square", 11.0, "Alice", "Bob")
    assert find_synastry_key_aspect([venus_mars, moon_sun, far_asc]) is moon_sun


def test_synastry_key_aspect_falls_back_to_tightest_major(make_aspect) -> None:
    """Sans paire prioritaire: l'aspect majeur le plus serré (5°, puis 10°)."""
    quincunx = make_aspect("Mercury", "Pluto", "quincunx", 0.1, "Alice", "Bob")
    sextile = make_aspect("Mercury", "Jupiter", "sextile", 2.0, "Alice", "Bob")
    wide = make_aspect("Mars", "Venus", "conjunction", 7.0, "Alice", "Bob")
    assert find_synastry_key_aspect([quincunx, wide, sextile]) is sextile
    assert find_synastry_key_aspect([quincunx, wide]) is wide
    assert find_synastry_key_aspect([quincunx]) is None
    assert find_synastry_key_aspect([]) is None
