# Schémas Pydantic exposés par l'API (requêtes et réponses).

from pydantic import BaseModel, Field

from chart_insights.domain.models import Aspect, ChartResult
from chart_insights.domain.rulership import RulershipMode

MAX_KEY_ASPECTS_LIMIT = 20


class InsightsRequest(BaseModel):
    """Requête de dérivation des insights d'une carte.

    Champs:
    - chart: ChartResult (résultat principal renvoyé par le service de calcul)
    - secondary: ChartResult | None (second résultat en double roue: transit, retour)
    - rulership_mode: "classical" | "modern" | None (défaut: configuration)
    - max_key_aspects: int | None (1 à 20; défaut: configuration)
    - chart_type: str | None ("solar-return", "lunar-return", ...; prime sur chart.chart_type)
    """

    chart: ChartResult
    chart_type: str | None = None
    secondary: ChartResult | None = None
    rulership_mode: RulershipMode | None = None
    max_key_aspects: int | None = Field(None, ge=1, le=MAX_KEY_ASPECTS_LIMIT)


class KeyAspectsResponse(BaseModel):
    """Aspects clés classés, sans highlights.

    Champs:
    - chart_type: str (type canonique)
    - key_aspects: list[Aspect]
    """

    chart_type: str
    key_aspects: list[Aspect]


class RulershipResponse(BaseModel):
    """Maître d'un signe selon un régime de maîtrise."""

    sign: str
    mode: RulershipMode
    ruler: str


class RulershipTableResponse(BaseModel):
    mode: RulershipMode
    rulers: dict[str, str]
