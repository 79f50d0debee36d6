"""Middleware Starlette de contexte de requête.

Pour chaque requête HTTP:
- identifiant de requête (`X-Request-ID` reçu ou généré), exposé dans `request.state.request_id`
  pour les enveloppes d'erreur et renvoyé dans la réponse;
- contexte structlog (`request_id`, méthode, chemin) lié le temps du traitement;
- durée de traitement renvoyée dans `X-Process-Time-ms`, requêtes lentes journalisées.
"""

import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

log = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time-ms"
SLOW_REQUEST_MS = 1000


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Identifiant de requête, contexte de log et mesure de durée."""

    def __init__(self, app: ASGIApp, slow_ms: int = SLOW_REQUEST_MS) -> None:
        """Initialise le middleware.

        Args:
            app: Application ASGI à wrapper.
            slow_ms: Seuil (ms) au-delà duquel la requête est journalisée comme lente.
        """
        super().__init__(app)
        self.slow_ms = slow_ms

    async def dispatch(self, request, call_next: Callable):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            request_id=request_id, method=request.method, path=request.url.path
        ):
            response = await call_next(request)
            duration_ms = int((time.perf_counter() - start) * 1000)
            if duration_ms >= self.slow_ms:
                log.warning("slow_request", ms=duration_ms, status=response.status_code)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = str(duration_ms)
        return response
