from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

import structlog
from opentelemetry import trace

from vedic_backend.app.metrics import (
    ASTROLOGY_REQUESTS,
    ATMAKARAK_TOTAL,
    ENGINE_LATENCY,
    UNKNOWN_SIGNS_TOTAL,
)
from vedic_backend.domain.derivation import derive_summary
from vedic_backend.domain.entities import (
    DEFAULT_TIMEZONE_OFFSET,
    UNKNOWN_SIGN,
    AstrologySummary,
    BirthQuery,
    Chart,
)
from vedic_backend.domain.errors import (
    AstrologyError,
    CollaboratorUnavailableError,
    InputValidationError,
    MalformedChartError,
)
from vedic_backend.domain.validation import validate_birth_input

tracer = trace.get_tracer(__name__)

# Marque un fuseau absent de la requête (distinct d'un `None` explicite, qui est invalide).
TIMEZONE_OMITTED = object()


class AstrologyService:
    """Service métier: validation → moteur de thème → contrôle de structure → dérivation.

    Responsabilités:
    - Refuser toute entrée invalide avant d'appeler le moteur.
    - Classer les échecs (validation, moteur indisponible, thème mal formé) en erreurs typées.
    - Dériver le résumé (signes principaux et Atmakarak) du thème renvoyé.
    """

    def __init__(self, astro_engine, default_timezone_offset: float = DEFAULT_TIMEZONE_OFFSET):
        """Initialise le service avec ses dépendances.

        Paramètres:
        - astro_engine: moteur `AstroEngine`, ou None si aucun moteur n'a pu être chargé.
        - default_timezone_offset: décalage appliqué lorsque l'appelant n'en fournit pas.
        """
        self.astro = astro_engine
        self.default_timezone_offset = default_timezone_offset

    @property
    def engine_name(self) -> str:
        return getattr(self.astro, "name", "unavailable") if self.astro else "unavailable"

    def get_astrology_data(
        self,
        date_of_birth: Any,
        time_of_birth: Any,
        latitude: Any,
        longitude: Any,
        timezone_offset: Any = TIMEZONE_OMITTED,
    ) -> AstrologySummary:
        """Calcule le résumé astrologique d'une naissance.

        Paramètres:
        - timezone_offset: omis, applique le décalage par défaut; `None` explicite est rejeté
          par la validation.

        Retour: `AstrologySummary` (signes Lune/Soleil/Ascendant, Atmakarak, thème brut).

        Erreurs: `InputValidationError`, `CollaboratorUnavailableError`, `MalformedChartError`,
        ou `AstrologyError` pour tout autre échec.
        """
        if timezone_offset is TIMEZONE_OMITTED:
            timezone_offset = self.default_timezone_offset
        log = structlog.get_logger(__name__).bind(
            date_of_birth=date_of_birth,
            time_of_birth=time_of_birth,
            lat=latitude,
            lng=longitude,
        )
        log.info("astrology_calculation_started")

        try:
            errors = validate_birth_input(
                date_of_birth, time_of_birth, latitude, longitude, timezone_offset
            )
            if errors:
                raise InputValidationError(errors)

            query = BirthQuery(
                date_of_birth=date_of_birth,
                time_of_birth=time_of_birth,
                latitude=latitude,
                longitude=longitude,
                timezone_offset=timezone_offset,
            )
            chart = self._compute_chart(query, log)
            self._check_chart(chart)
            summary = derive_summary(chart)
        except AstrologyError as err:
            ASTROLOGY_REQUESTS.labels(err.code.lower()).inc()
            log.error(
                "astrology_calculation_failed",
                stage=err.stage,
                code=err.code,
                detail=err.detail,
                exc_info=err.__cause__ is not None,
            )
            raise
        except Exception as err:
            ASTROLOGY_REQUESTS.labels("internal_error").inc()
            log.exception("astrology_calculation_failed", stage="derivation")
            raise AstrologyError(
                f"Astrology calculation failed: {err}", stage="derivation"
            ) from err

        ASTROLOGY_REQUESTS.labels("success").inc()
        ATMAKARAK_TOTAL.labels(summary.atmakarak).inc()
        for field in ("moon_sign", "sun_sign", "ascendant"):
            if getattr(summary, field) == UNKNOWN_SIGN:
                UNKNOWN_SIGNS_TOTAL.labels(field).inc()
        log.info(
            "astrology_calculation_succeeded",
            moon_sign=summary.moon_sign,
            sun_sign=summary.sun_sign,
            ascendant=summary.ascendant,
            atmakarak=summary.atmakarak,
        )
        return summary

    def _compute_chart(self, query: BirthQuery, log) -> Chart:
        engine = self.astro
        if engine is None or not callable(getattr(engine, "get_birth_chart", None)):
            raise CollaboratorUnavailableError(
                "Chart engine not loaded or missing get_birth_chart", stage="engine"
            )

        log.debug("astrology_engine_call", engine=self.engine_name)
        start = time.perf_counter()
        with tracer.start_as_current_span("astro.get_birth_chart") as span:
            span.set_attribute("astro.engine", self.engine_name)
            try:
                chart = engine.get_birth_chart(
                    query.date_of_birth,
                    query.time_of_birth,
                    query.latitude,
                    query.longitude,
                    query.timezone_offset,
                )
            except Exception as err:
                span.record_exception(err)
                raise CollaboratorUnavailableError(
                    f"Chart engine failed: {err}", stage="engine"
                ) from err
            finally:
                ENGINE_LATENCY.labels(self.engine_name).observe(time.perf_counter() - start)
        return chart

    @staticmethod
    def _check_chart(chart: Any) -> None:
        if chart is None:
            raise MalformedChartError("Chart engine returned no chart", stage="chart_check")
        if not isinstance(chart, Mapping):
            raise MalformedChartError(
                f"Chart engine returned {type(chart).__name__}, expected a mapping",
                stage="chart_check",
            )
        if not isinstance(chart.get("meta"), Mapping):
            raise MalformedChartError("Birth chart missing required meta data", stage="chart_check")
