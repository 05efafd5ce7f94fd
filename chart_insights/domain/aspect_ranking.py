"""Classement des aspects par importance astrologique.

Objectif du module
------------------
- Ne retenir que les aspects majeurs (ptolémaïques) pour les "aspects clés".
- Attribuer à chaque aspect un palier d'importance (1 = le plus important)
  à partir d'une table de règles déclarative.
- Trier par palier puis par orbe croissant (tri stable), et tronquer.
- Rechercher le meilleur aspect d'une paire "titre" (Soleil–Lune, Vénus–Mars)
  à travers une chaîne de prédicats fournie par l'appelant.

Toutes les fonctions sont pures: même entrée, même sortie.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from chart_insights.domain.models import Aspect
from chart_insights.domain.points import (
    ANGLES,
    LUMINARIES,
    PERSONAL_PLANETS,
    PRIMARY_ANGLES,
    SOCIAL_PLANETS,
    point_key,
)

AspectPredicate = Callable[[Aspect], bool]

# Les aspects mineurs restent visibles dans la grille, jamais parmi les aspects clés.
MAJOR_ASPECTS = frozenset({"conjunction", "opposition", "square", "trine", "sextile"})

# Libellés de propriétaire désignant la carte "mobile" (transits, retours).
MOVING_OWNER_TAGS = frozenset(
    {"transit", "transits", "transiting", "return", "solar return", "lunar return"}
)

DEFAULT_MAX_RESULTS = 6
LOWEST_TIER = 6


def aspect_kind(aspect: Aspect) -> str:
    return " ".join(aspect.aspect.strip().lower().split())


def is_major_aspect(aspect: Aspect) -> bool:
    return aspect_kind(aspect) in MAJOR_ASPECTS


def _owner_key(owner: str | None) -> str:
    if not owner:
        return ""
    return " ".join(owner.strip().lower().replace("_", " ").replace("-", " ").split())


def is_moving_owner(owner: str | None, moving_owners: Iterable[str] = ()) -> bool:
    """Vrai si `owner` désigne la carte mobile (libellé générique ou nom fourni)."""
    if owner is None:
        return False
    return _owner_key(owner) in MOVING_OWNER_TAGS or owner in moving_owners


def _endpoints(aspect: Aspect) -> tuple[tuple[str, str | None], tuple[str, str | None]]:
    return (
        (point_key(aspect.p1_name), aspect.p1_owner),
        (point_key(aspect.p2_name), aspect.p2_owner),
    )


def _slow_transit_to_personal(aspect: Aspect, moving_owners: frozenset[str]) -> bool:
    first, second = _endpoints(aspect)
    for (name, owner), (other, _) in ((first, second), (second, first)):
        if (
            name in SOCIAL_PLANETS
            and is_moving_owner(owner, moving_owners)
            and (other in PERSONAL_PLANETS or other in ANGLES)
        ):
            return True
    return False


def _personal_conjunction_or_opposition(aspect: Aspect, _moving: frozenset[str]) -> bool:
    return (
        aspect_kind(aspect) in {"conjunction", "opposition"}
        and point_key(aspect.p1_name) in PERSONAL_PLANETS
        and point_key(aspect.p2_name) in PERSONAL_PLANETS
    )


def _involves(names: frozenset[str]) -> Callable[[Aspect, frozenset[str]], bool]:
    def rule(aspect: Aspect, _moving: frozenset[str]) -> bool:
        return point_key(aspect.p1_name) in names or point_key(aspect.p2_name) in names

    return rule


# (palier, règle) évalués dans l'ordre; le premier qui s'applique l'emporte.
TIER_RULES: tuple[tuple[int, Callable[[Aspect, frozenset[str]], bool]], ...] = (
    (1, _slow_transit_to_personal),
    (2, _personal_conjunction_or_opposition),
    (3, _involves(LUMINARIES)),
    (4, _involves(frozenset({"venus", "mars"}))),
    (5, _involves(PRIMARY_ANGLES)),
)


def aspect_tier(aspect: Aspect, moving_owners: Iterable[str] | None = None) -> int:
    """Palier d'importance d'un aspect (1 = le plus significatif, 6 = le reste).

    Args:
        aspect: Aspect à classer.
        moving_owners: Noms de propriétaires à traiter comme carte mobile
            (transit/retour), en plus des libellés génériques.
    """
    moving = frozenset(moving_owners or ())
    for tier, rule in TIER_RULES:
        if rule(aspect, moving):
            return tier
    return LOWEST_TIER


def rank_key_aspects(
    aspects: Sequence[Aspect],
    max_results: int = DEFAULT_MAX_RESULTS,
    moving_owners: Iterable[str] | None = None,
) -> list[Aspect]:
    """Retourne au plus `max_results` aspects majeurs, du plus au moins significatif.

    Démarche:
    - filtre les aspects majeurs;
    - trie par (palier, orbe) avec un tri stable, l'ordre d'entrée départage
      les égalités;
    - tronque à `max_results`.

    Une liste vide (ou sans aspect majeur) donne une liste vide.
    """
    if max_results <= 0:
        return []
    moving = frozenset(moving_owners or ())
    majors = [a for a in aspects if is_major_aspect(a)]
    ranked = sorted(majors, key=lambda a: (aspect_tier(a, moving), abs(a.orbit)))
    return ranked[:max_results]


def pair_predicate(first_names: Iterable[str], second_names: Iterable[str]) -> AspectPredicate:
    """Prédicat "p1 ∈ first_names et p2 ∈ second_names" (noms comparés normalisés)."""
    firsts = frozenset(point_key(n) for n in first_names)
    seconds = frozenset(point_key(n) for n in second_names)

    def predicate(aspect: Aspect) -> bool:
        return point_key(aspect.p1_name) in firsts and point_key(aspect.p2_name) in seconds

    return predicate


def find_best_aspect(
    aspects: Sequence[Aspect],
    predicate: AspectPredicate,
    allow_either_direction: bool = True,
    max_orb: float | None = None,
) -> Aspect | None:
    """Aspect le plus serré satisfaisant `predicate`, ou None.

    Avec `allow_either_direction`, le prédicat est aussi évalué sur l'aspect
    aux extrémités inversées (Lune–Soleil compte pour Soleil–Lune). L'aspect
    retourné est toujours l'objet d'origine. À orbe égal, le premier gagne.
    """
    best: Aspect | None = None
    for aspect in aspects:
        if max_orb is not None and abs(aspect.orbit) > max_orb:
            continue
        matched = predicate(aspect) or (allow_either_direction and predicate(aspect.swapped()))
        if matched and (best is None or abs(aspect.orbit) < abs(best.orbit)):
            best = aspect
    return best


def find_first_best_aspect(
    aspects: Sequence[Aspect],
    predicates: Iterable[AspectPredicate],
    allow_either_direction: bool = True,
    max_orb: float | None = None,
) -> Aspect | None:
    """Évalue une chaîne de prédicats de plus en plus larges, dans l'ordre donné.

    Le premier prédicat qui trouve un aspect l'emporte; l'ordre de repli est
    entièrement décidé par l'appelant.
    """
    for predicate in predicates:
        found = find_best_aspect(aspects, predicate, allow_either_direction, max_orb)
        if found is not None:
            return found
    return None


SYNASTRY_KEY_ORB = 10.0
SYNASTRY_TIGHT_ORB = 5.0

# (prédicat, orbe maximal), du plus spécifique au plus large.
SYNASTRY_KEY_ASPECT_CHAIN: tuple[tuple[AspectPredicate, float], ...] = (
    (pair_predicate(["Ascendant"], ["Ascendant"]), SYNASTRY_KEY_ORB),
    (pair_predicate(["Sun"], ["Sun", "Moon"]), SYNASTRY_KEY_ORB),
    (is_major_aspect, SYNASTRY_TIGHT_ORB),
    (is_major_aspect, SYNASTRY_KEY_ORB),
)


def find_synastry_key_aspect(aspects: Sequence[Aspect]) -> Aspect | None:
    """Aspect clé d'une synastrie.

    Ascendant–Ascendant, puis Soleil–Soleil ou Soleil–Lune (dans un sens ou
    l'autre) à 10° au plus; à défaut l'aspect majeur le plus serré à 5°, puis à 10°.
    """
    for predicate, max_orb in SYNASTRY_KEY_ASPECT_CHAIN:
        found = find_best_aspect(aspects, predicate, max_orb=max_orb)
        if found is not None:
            return found
    return None
