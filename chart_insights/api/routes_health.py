"""
Endpoint de santé pour vérifier la disponibilité de l'API.

Expose `/health` pour signaler l'état général de l'application et le régime
de maîtrise configuré.
"""


from fastapi import APIRouter

from chart_insights.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API."""
    return {
        "status": "ok",
        "app": container.settings.APP_NAME,
        "rulership_mode": container.settings.RULERSHIP_MODE,
    }
