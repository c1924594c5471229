"""Middleware Starlette pour mesurer le temps de traitement des requêtes.

Ajoute l'en-tête X-Process-Time-ms et journalise les requêtes plus lentes que le seuil configuré
(le calcul d'éphémérides est l'opération bloquante du service).
"""

import time
from collections.abc import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

log = structlog.get_logger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """Mesure la durée de traitement de chaque requête HTTP."""

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Process-Time-ms",
        slow_threshold_ms: int = 2000,
    ) -> None:
        """Initialise le middleware.

        Args:
            app: Application ASGI à wrapper.
            header_name: Nom de l'en-tête HTTP pour le temps de traitement.
            slow_threshold_ms: Durée au-delà de laquelle la requête est signalée comme lente.
        """
        super().__init__(app)
        self.header_name = header_name
        self.slow_threshold_ms = slow_threshold_ms

    async def dispatch(self, request, call_next: Callable):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers[self.header_name] = str(duration_ms)
        if duration_ms >= self.slow_threshold_ms:
            log.warning(
                "slow_request",
                method=request.method,
                path=request.url.path,
                duration_ms=duration_ms,
            )
        return response
