"""Routes de dérivation des insights d'une carte.

Objectif du module
------------------
- Offrir des endpoints REST qui reçoivent un résultat de carte déjà calculé
  et renvoient la vue dérivée (aspects clés, highlights, grille d'aspects).
"""

from fastapi import APIRouter

from chart_insights.api.schemas import InsightsRequest, KeyAspectsResponse
from chart_insights.core.container import container
from chart_insights.domain.chart_types import resolve_chart_type
from chart_insights.domain.models import ChartInsights

router = APIRouter(prefix="/insights", tags=["insights"])


@router.post("", response_model=ChartInsights)
def derive_insights(payload: InsightsRequest):
    """Dérive la vue complète d'insights; type de carte inconnu → vue vide."""
    return container.insights.derive(
        payload.chart,
        secondary=payload.secondary,
        rulership_mode=payload.rulership_mode,
        max_key_aspects=payload.max_key_aspects,
        chart_type=payload.chart_type,
    )


@router.post("/key-aspects", response_model=KeyAspectsResponse)
def key_aspects(payload: InsightsRequest):
    """Renvoie uniquement les aspects clés classés et tronqués."""
    return KeyAspectsResponse(
        chart_type=resolve_chart_type(payload.chart_type, payload.chart.chart_type),
        key_aspects=container.insights.key_aspects(
            payload.chart,
            secondary=payload.secondary,
            max_key_aspects=payload.max_key_aspects,
            chart_type=payload.chart_type,
        ),
    )
