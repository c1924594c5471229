"""Erreurs métier du calcul astrologique.

Chaque erreur porte un code machine, un statut HTTP et un message destiné à l'appelant. La cause
d'origine est chaînée (`raise ... from err`) et journalisée, jamais exposée dans le message.
"""

from __future__ import annotations

from typing import Any

from vedic_backend.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_SERVICE_UNAVAILABLE,
)


class AstrologyError(Exception):
    """Erreur de base du pipeline validation → moteur → dérivation."""

    code = "INTERNAL_ERROR"
    status_code = HTTP_INTERNAL_SERVER_ERROR
    user_message = "An unexpected error occurred"

    def __init__(
        self,
        detail: str | None = None,
        *,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        # `detail` reste interne (logs); `message` est ce que voit l'appelant.
        self.detail = detail
        self.message = self.user_message
        self.stage = stage
        self.details = details
        super().__init__(detail or self.message)


class InputValidationError(AstrologyError):
    """Une ou plusieurs valeurs d'entrée ne respectent pas les règles de validation."""

    code = "VALIDATION_ERROR"
    status_code = HTTP_BAD_REQUEST
    user_message = "Invalid input parameters"

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            f"Input validation failed: {', '.join(self.errors)}",
            stage="validation",
            details={"errors": self.errors},
        )
        self.message = f"{self.user_message}: {self.detail}"


class CollaboratorUnavailableError(AstrologyError):
    """Le moteur de calcul est absent, mal configuré ou a échoué."""

    code = "SERVICE_UNAVAILABLE"
    status_code = HTTP_SERVICE_UNAVAILABLE
    user_message = "Astrology calculation service is currently unavailable"


class MalformedChartError(AstrologyError):
    """Le moteur a renvoyé un thème structurellement invalide."""

    code = "MALFORMED_CHART"
    status_code = HTTP_INTERNAL_SERVER_ERROR
    user_message = "Failed to generate valid birth chart data"


class EngineError(RuntimeError):
    """Levée par un adaptateur de moteur lorsque la bibliothèque sous-jacente échoue."""
