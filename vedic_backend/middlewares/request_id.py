"""Middleware Starlette d'identifiant de requête.

Chaque réponse porte l'en-tête X-Request-ID. L'identifiant est aussi exposé comme `trace_id` aux
enveloppes d'erreur et lié au contexte structlog le temps de la requête.
"""

from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reprend l'identifiant fourni par l'appelant, ou en génère un (UUID4)."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        """Initialise le middleware.

        Args:
            app: Application ASGI à wrapper.
            header_name: Nom de l'en-tête lu sur la requête et recopié sur la réponse.
        """
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next: Callable):
        request_id = request.headers.get(self.header_name) or str(uuid4())
        request.state.trace_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers[self.header_name] = request_id
        return response
