"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares, routes, métriques,
gestion d'erreurs et configuration de l'API de thème védique.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (CORS, request id, timing, métriques)
- Monter les routers (santé, astrologie, métriques)
"""

from __future__ import annotations

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vedic_backend.api.routes_astrology import router as astrology_router
from vedic_backend.api.routes_health import router as health_router
from vedic_backend.apigw.errors import register_error_handlers
from vedic_backend.app.metrics import PrometheusMiddleware, metrics_router
from vedic_backend.app.tracing import setup_tracing
from vedic_backend.core.container import container
from vedic_backend.core.logging import setup_logging
from vedic_backend.middlewares.request_id import RequestIDMiddleware
from vedic_backend.middlewares.timing import TimingMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes de santé, d'astrologie et de métriques
    """
    settings = container.settings
    setup_logging(
        settings.LOG_LEVEL, settings.LOG_JSON, cache_loggers=settings.APP_ENV != "test"
    )
    setup_tracing(settings)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.CORS_ORIGINS],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(astrology_router)
    app.include_router(metrics_router)

    structlog.get_logger(__name__).info(
        "app_initialized",
        app_env=settings.APP_ENV,
        engine=container.astrology_service.engine_name,
    )
    return app


app = create_app()


def run() -> None:
    """Point d'entrée console: sert l'application avec uvicorn."""
    settings = container.settings
    uvicorn.run(
        "vedic_backend.app.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
