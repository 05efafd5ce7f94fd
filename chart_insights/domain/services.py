"""Service métier de dérivation des insights d'une carte.

Objectif du module
------------------
- Enchaîner normalisation du type, sélection des aspects, classement,
  corrélation des maisons et maîtrises pour produire une vue `ChartInsights`.
"""

from __future__ import annotations

import structlog

from chart_insights.domain.aspect_ranking import (
    DEFAULT_MAX_RESULTS,
    find_synastry_key_aspect,
    rank_key_aspects,
)
from chart_insights.domain.aspect_selection import (
    active_point_keys,
    exclude_inherent_aspects,
    select_relevant_aspects,
)
from chart_insights.domain.chart_types import (
    RETURN_CHART_TYPES,
    SYNASTRY,
    TRANSIT,
    UNKNOWN,
    resolve_chart_type,
    resolve_effective_subject,
)
from chart_insights.domain.distribution import (
    compute_element_distribution,
    compute_quality_distribution,
)
from chart_insights.domain.highlights import build_highlights
from chart_insights.domain.house_projection import HouseOverlayIndex
from chart_insights.domain.key_aspects import build_key_aspect_rows
from chart_insights.domain.models import Aspect, ChartInsights, ChartResult
from chart_insights.domain.points import sort_active_points

log = structlog.get_logger(__name__)


class InsightService:
    """Service pur et sans état de dérivation des insights.

    Responsabilités:
    - Choisir les aspects pertinents selon le type de carte et les points actifs.
    - Classer les aspects clés et les préparer pour l'affichage.
    - Produire les highlights du type de carte (maisons projetées, maître de l'Ascendant).
    """

    def __init__(self, rulership_mode: str = "classical", max_key_aspects: int = DEFAULT_MAX_RESULTS):
        """Initialise le service avec ses préférences par défaut.

        Paramètres:
        - rulership_mode: régime de maîtrise utilisé quand l'appel n'en précise pas.
        - max_key_aspects: nombre maximal d'aspects clés par défaut.
        """
        self.rulership_mode = rulership_mode
        self.max_key_aspects = max_key_aspects

    @staticmethod
    def _moving_owners(chart_type: str, chart: ChartResult, secondary: ChartResult | None) -> list[str]:
        if chart_type != TRANSIT and chart_type not in RETURN_CHART_TYPES:
            return []
        second = chart.secondary_subject or (secondary.primary_subject if secondary else None)
        return [second.name] if second is not None and second.name else []

    def _rank(
        self,
        chart_type: str,
        relevant: list[Aspect],
        moving_owners: list[str],
        max_key_aspects: int | None,
    ) -> list[Aspect]:
        return rank_key_aspects(
            exclude_inherent_aspects(chart_type, relevant),
            self.max_key_aspects if max_key_aspects is None else max_key_aspects,
            moving_owners,
        )

    def key_aspects(
        self,
        chart: ChartResult,
        secondary: ChartResult | None = None,
        max_key_aspects: int | None = None,
        chart_type: str | None = None,
    ) -> list[Aspect]:
        """Aspects clés seuls (classés, tronqués), sans highlights.

        `chart_type`, s'il est fourni, prime sur le type porté par `chart`.
        Retour: liste vide pour un type de carte inconnu.
        """
        canonical = resolve_chart_type(chart_type, chart.chart_type)
        if canonical == UNKNOWN:
            return []
        relevant = select_relevant_aspects(canonical, chart, secondary)
        moving = self._moving_owners(canonical, chart, secondary)
        return self._rank(canonical, relevant, moving, max_key_aspects)

    def derive(
        self,
        chart: ChartResult,
        secondary: ChartResult | None = None,
        rulership_mode: str | None = None,
        max_key_aspects: int | None = None,
        chart_type: str | None = None,
    ) -> ChartInsights:
        """Produit la vue complète d'insights pour un résultat de carte.

        Démarche:
        - Résout le type de carte (inconnu → vue vide).
        - Résout le sujet mis en avant et l'index des maisons projetées.
        - Sélectionne les aspects (grille), retire les aspects inhérents, classe.
        - Construit les lignes d'aspects clés et les highlights.
        - Ordonne les points actifs et complète les répartitions élément/modalité.

        Paramètres:
        - chart: résultat principal (carte simple, ou double avec deux sujets).
        - secondary: résultat secondaire en double roue (transit, retour), optionnel.
        - rulership_mode: "classical" ou "modern"; défaut du service sinon.
        - max_key_aspects: plafond d'aspects clés; défaut du service sinon.
        - chart_type: type demandé par l'appelant ("lunar-return", ...); prime
          sur `chart.chart_type`, dont les libellés de retour sont ambigus.

        Retour: `ChartInsights`.
        """
        canonical = resolve_chart_type(chart_type, chart.chart_type)
        if canonical == UNKNOWN:
            log.info("chart_type_unknown", raw_type=chart_type or chart.chart_type)
            return ChartInsights(chart_type=UNKNOWN)

        mode = rulership_mode or self.rulership_mode
        primary_subject = chart.primary_subject
        secondary_subject = chart.secondary_subject or (secondary.primary_subject if secondary else None)
        effective = resolve_effective_subject(canonical, primary_subject, secondary_subject)
        comparison = chart.house_comparison or (secondary.house_comparison if secondary else None)
        overlay = HouseOverlayIndex(comparison)
        active = active_point_keys(chart, secondary)
        active_names = chart.active_points or (secondary.active_points if secondary else [])

        grid = select_relevant_aspects(canonical, chart, secondary)
        moving = self._moving_owners(canonical, chart, secondary)
        ranked = self._rank(canonical, grid, moving, max_key_aspects)
        highlights = build_highlights(canonical, effective, grid, overlay, mode, active)
        log.debug(
            "chart_insights_derived",
            chart_type=canonical,
            aspects=len(grid),
            key_aspects=len(ranked),
            highlights=len(highlights),
        )
        return ChartInsights(
            chart_type=canonical,
            key_aspects=ranked,
            key_aspect_rows=build_key_aspect_rows(canonical, ranked, moving),
            highlights=highlights,
            aspect_grid=grid,
            active_points=sort_active_points(active_names, primary_subject),
            element_distribution=compute_element_distribution(
                primary_subject, active_names, chart.element_distribution
            ),
            quality_distribution=compute_quality_distribution(
                primary_subject, active_names, chart.quality_distribution
            ),
            synastry_key_aspect=find_synastry_key_aspect(grid) if canonical == SYNASTRY else None,
        )
