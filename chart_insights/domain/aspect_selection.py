"""Sélection des aspects pertinents selon le type de carte.

Objectif du module
------------------
- Choisir, pour un type de carte canonique, le sous-ensemble d'aspects qui a
  un sens (internes à une carte, ou croisés entre deux cartes).
- Écarter les aspects impliquant des points désactivés par l'utilisateur.
- Écarter, pour la vue "aspects clés" uniquement, les aspects vrais par
  construction (Soleil–Soleil d'un retour solaire, Lune–Lune d'un retour lunaire).

Appartenance des extrémités: un aspect est "croisé" quand ses deux
propriétaires sont renseignés et différents, "interne" sinon. Une liste dont
aucun aspect ne porte de propriétaires est prise telle quelle: le service
l'a déjà produite pour la relation demandée.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from types import MappingProxyType

from chart_insights.domain.aspect_ranking import aspect_kind
from chart_insights.domain.chart_types import (
    COMPOSITE,
    LUNAR_RETURN,
    NATAL,
    RETURN_CHART_TYPES,
    SOLAR_RETURN,
    SYNASTRY,
    TRANSIT,
)
from chart_insights.domain.models import Aspect, ChartResult
from chart_insights.domain.points import point_key

# type de carte → point dont la conjonction à lui-même définit la carte
INHERENT_SELF_CONJUNCTIONS = MappingProxyType(
    {
        SOLAR_RETURN: "sun",
        LUNAR_RETURN: "moon",
    }
)


def _has_owners(aspect: Aspect) -> bool:
    return bool(aspect.p1_owner) and bool(aspect.p2_owner)


def is_cross_chart(aspect: Aspect) -> bool:
    return _has_owners(aspect) and aspect.p1_owner != aspect.p2_owner


def internal_aspects(aspects: Iterable[Aspect]) -> list[Aspect]:
    return [a for a in aspects if not is_cross_chart(a)]


def cross_chart_aspects(aspects: Sequence[Aspect]) -> list[Aspect]:
    if not any(_has_owners(a) for a in aspects):
        return list(aspects)
    return [a for a in aspects if is_cross_chart(a)]


def active_point_keys(*charts: ChartResult | None) -> frozenset[str]:
    """Union des points actifs des cartes fournies (clés normalisées)."""
    keys: set[str] = set()
    for chart in charts:
        if chart is not None:
            keys.update(point_key(name) for name in chart.active_points)
    return frozenset(keys)


def filter_active_aspects(aspects: Iterable[Aspect], active: frozenset[str]) -> list[Aspect]:
    """Retire les aspects dont une extrémité est désactivée; ensemble vide = pas de filtre."""
    if not active:
        return list(aspects)
    return [
        a
        for a in aspects
        if point_key(a.p1_name) in active and point_key(a.p2_name) in active
    ]


def _is_dual_wheel(primary: ChartResult, secondary: ChartResult | None) -> bool:
    if secondary is not None:
        return True
    return primary.first_subject is not None and primary.second_subject is not None


def _select_by_type(
    chart_type: str, primary: ChartResult, secondary: ChartResult | None
) -> list[Aspect]:
    secondary_aspects = secondary.aspects if secondary is not None else []
    if chart_type in (NATAL, COMPOSITE):
        return internal_aspects(primary.aspects)
    if chart_type == TRANSIT:
        combined = [*primary.aspects, *secondary_aspects]
        return cross_chart_aspects(combined) or combined
    if chart_type == SYNASTRY:
        return cross_chart_aspects([*primary.aspects, *secondary_aspects])
    if chart_type in RETURN_CHART_TYPES:
        source = secondary_aspects or primary.aspects
        if _is_dual_wheel(primary, secondary):
            return cross_chart_aspects(source)
        return internal_aspects(source)
    return []


def select_relevant_aspects(
    chart_type: str,
    primary: ChartResult,
    secondary: ChartResult | None = None,
) -> list[Aspect]:
    """Aspects pertinents pour `chart_type` (type canonique), points inactifs exclus.

    - natal, composite: aspects internes à l'unique sujet;
    - transit: aspects transit ↔ natal, sinon la liste combinée complète;
    - synastry: aspects sujet 1 ↔ sujet 2;
    - solar/lunar return: retour ↔ natal en double roue, sinon aspects
      internes au retour (les aspects de la carte de retour sont préférés);
    - unknown: aucun aspect.

    Les aspects inhérents ne sont pas retirés ici: cette liste alimente aussi
    la grille complète. Voir `exclude_inherent_aspects`.
    """
    selected = _select_by_type(chart_type, primary, secondary)
    return filter_active_aspects(selected, active_point_keys(primary, secondary))


def is_inherent_aspect(chart_type: str, aspect: Aspect) -> bool:
    """Vrai pour un aspect présent par définition dans ce type de carte."""
    point = INHERENT_SELF_CONJUNCTIONS.get(chart_type)
    if point is None:
        return False
    return (
        aspect_kind(aspect) == "conjunction"
        and point_key(aspect.p1_name) == point
        and point_key(aspect.p2_name) == point
    )


def exclude_inherent_aspects(chart_type: str, aspects: Iterable[Aspect]) -> list[Aspect]:
    return [a for a in aspects if not is_inherent_aspect(chart_type, a)]
