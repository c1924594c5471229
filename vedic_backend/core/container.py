"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, moteur astro, service) et expose un singleton
`container` utilisé par le reste de l'application.
"""

import structlog

from vedic_backend.core.settings import Settings, get_settings
from vedic_backend.domain.services import AstrologyService
from vedic_backend.infra.astro.base import AstroEngine
from vedic_backend.infra.astro.fake_deterministic import FakeDeterministicAstro

log = structlog.get_logger(__name__)


def build_astro_engine(settings: Settings) -> AstroEngine | None:
    """Construit le moteur demandé par `ASTRO_ENGINE`, ou None s'il est indisponible.

    Un moteur absent n'empêche pas le démarrage: les requêtes échouent alors en 503.
    """
    kind = (settings.ASTRO_ENGINE or "").lower()
    if kind == "fake":
        return FakeDeterministicAstro()
    if kind == "swisseph":
        try:
            from vedic_backend.infra.astro.swisseph_engine import (  # noqa: PLC0415
                SwissEphemerisEngine,
            )

            return SwissEphemerisEngine(
                ayanamsa=settings.ASTRO_AYANAMSA,
                node=settings.ASTRO_NODE,
                ephe_path=settings.SE_EPHE_PATH,
            )
        except Exception as err:
            log.error("astro_engine_unavailable", engine=kind, error=repr(err))
            return None
    log.error("astro_engine_unknown", engine=kind)
    return None


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.astro = build_astro_engine(self.settings)
        self.astrology_service = AstrologyService(
            self.astro, default_timezone_offset=self.settings.DEFAULT_TIMEZONE_OFFSET
        )


container = Container()
