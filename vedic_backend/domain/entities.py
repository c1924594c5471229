"""
Entités du domaine métier.

Ce module définit les modèles de données principaux utilisés par le service de thème védique.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEZONE_OFFSET = 5.5
UNKNOWN_SIGN = "Unknown"

# Thème brut renvoyé par le moteur: structure non typée, champs tous optionnels.
Chart = dict[str, Any]


class BirthQuery(BaseModel):
    """Données de naissance transmises au moteur de calcul."""

    model_config = ConfigDict(frozen=True)

    date_of_birth: str  # YYYY-MM-DD
    time_of_birth: str  # HH:MM:SS
    latitude: float
    longitude: float
    timezone_offset: float = DEFAULT_TIMEZONE_OFFSET  # heures, ex: 5.5 pour IST


class AstrologySummary(BaseModel):
    """Résumé normalisé d'un thème: signes principaux, Atmakarak et thème brut."""

    moon_sign: str = UNKNOWN_SIGN
    sun_sign: str = UNKNOWN_SIGN
    ascendant: str = UNKNOWN_SIGN
    atmakarak: str = "Sun"
    # Thème conservé tel quel (même objet), sans revalidation des clés.
    birth_chart: Any = Field(default_factory=dict)
