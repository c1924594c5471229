"""Configuration de logging basée sur structlog.

Objectif du module
------------------
- Fournir une configuration de logs structurés lisibles en développement.
- Basculer vers un rendu JSON en production (`LOG_JSON=true`).
"""

import logging
import sys

import structlog


def setup_logging(level: str = "INFO", json_logs: bool = False, cache_loggers: bool = True):
    """Configure structlog pour produire des logs détaillés et filtrables.

    `cache_loggers=False` garde les loggers reconfigurables (requis par `capture_logs` en test).
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, stream=sys.stdout, format="%(message)s")

    timestamper = structlog.processors.TimeStamper(fmt="ISO")
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            timestamper,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=cache_loggers,
    )
