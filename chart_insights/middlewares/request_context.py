"""Middleware Starlette pour l'identifiant de requête et la mesure du temps de traitement.

Ce module implémente un middleware qui:
- propage (ou génère) l'en-tête X-Request-ID et l'expose dans `request.state`;
- lie l'identifiant au contexte structlog le temps de la requête;
- ajoute l'en-tête X-Process-Time-ms avec la durée de traitement.
"""

import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

log = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware de contexte de requête (identifiant et durée).

    Chaque ligne de log émise pendant la requête porte `request_id`, ce qui
    permet de relier une réponse d'erreur (`trace_id`) aux logs serveur.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Request-ID",
        timing_header: str = "X-Process-Time-ms",
    ) -> None:
        """Initialise le middleware avec les noms d'en-têtes spécifiés.

        Args:
            app: Application ASGI à wrapper.
            header_name: Nom de l'en-tête HTTP pour l'ID de requête.
            timing_header: Nom de l'en-tête HTTP pour le temps de traitement.
        """
        super().__init__(app)
        self.header_name = header_name
        self.timing_header = timing_header

    async def dispatch(self, request, call_next: Callable):
        """Traite une requête en la rattachant à un identifiant unique et en la chronométrant.

        Args:
            request: Requête HTTP entrante.
            call_next: Fonction pour appeler le middleware suivant.

        Returns:
            Response: Réponse HTTP avec en-têtes d'identifiant et de durée.
        """
        request_id = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = int((time.perf_counter() - start) * 1000)
            response.headers[self.header_name] = request_id
            response.headers[self.timing_header] = str(duration_ms)
            log.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=duration_ms,
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
