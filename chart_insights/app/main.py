"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares,
gestion d'erreurs, routes et configuration du moteur d'insights.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter le middleware de contexte (request id, timing)
- Brancher les handlers d'erreurs standard
- Monter les routers (santé, insights, maîtrises)
"""

from __future__ import annotations

from fastapi import FastAPI

from chart_insights.api.routes_health import router as health_router
from chart_insights.api.routes_insights import router as insights_router
from chart_insights.api.routes_rulerships import router as rulerships_router
from chart_insights.apigw.errors import register_error_handlers
from chart_insights.core.container import container
from chart_insights.core.logging import setup_logging
from chart_insights.middlewares.request_context import RequestContextMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog) au niveau `LOG_LEVEL`
    - Lit les paramètres d'exécution
    - Ajoute le middleware de traçabilité
    - Publie les routes de santé, d'insights et de maîtrises
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(insights_router)
    app.include_router(rulerships_router)
    return app


app = create_app()
