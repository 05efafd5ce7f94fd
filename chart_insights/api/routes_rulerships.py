"""Routes de consultation des maîtrises planétaires.

Expose la table signe → maître et le maître d'un signe donné, selon le régime
demandé ou, à défaut, celui de la configuration.
"""

from fastapi import APIRouter

from chart_insights.api.schemas import RulershipResponse, RulershipTableResponse
from chart_insights.apigw.errors import ErrorCodes, not_found
from chart_insights.core.container import container
from chart_insights.domain.rulership import RulershipMode, normalize_sign, rulership_table, sign_ruler

router = APIRouter(prefix="/rulerships", tags=["rulerships"])


@router.get("", response_model=RulershipTableResponse)
def get_rulership_table(mode: RulershipMode | None = None):
    """Table complète des maîtres, dans l'ordre du zodiaque."""
    mode = mode or container.settings.RULERSHIP_MODE
    return RulershipTableResponse(mode=mode, rulers=rulership_table(mode))


@router.get("/{sign}", response_model=RulershipResponse)
def get_sign_ruler(sign: str, mode: RulershipMode | None = None):
    """Maître d'un signe (noms anglais, italiens ou abréviations), sinon 404."""
    mode = mode or container.settings.RULERSHIP_MODE
    canonical = normalize_sign(sign)
    if canonical is None:
        raise not_found(f"Unknown sign: {sign}", code=ErrorCodes.UNKNOWN_SIGN, details={"sign": sign})
    return RulershipResponse(sign=canonical, mode=mode, ruler=sign_ruler(canonical, mode))
