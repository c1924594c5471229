# Schémas Pydantic exposés par l'API (requêtes et réponses).

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AstrologyDataRequest(BaseModel):
    """Modèle de requête pour `/astrology-data`.

    Les champs sont volontairement non typés: les valeurs brutes sont transmises au validateur
    métier qui produit des messages explicites plutôt qu'une erreur de coercition.

    Champs:
    - dateOfBirth: str (YYYY-MM-DD)
    - timeOfBirth: str (HH:MM:SS)
    - lat: float (latitude décimale)
    - lng: float (longitude décimale)
    - timezone: float (décalage en heures, alias `timezoneOffset`; 5.5 si omis, `null` rejeté)
    """

    model_config = ConfigDict(extra="ignore")

    dateOfBirth: Any = None
    timeOfBirth: Any = None
    lat: Any = None
    lng: Any = None
    timezone: Any = None
    timezoneOffset: Any = None

    def missing_required(self) -> bool:
        """Vrai si un champ obligatoire est absent, nul ou vide."""
        return (
            not self.dateOfBirth
            or not self.timeOfBirth
            or self.lat is None
            or self.lng is None
        )

    def timezone_provided(self) -> bool:
        """Vrai si `timezone` ou `timezoneOffset` figure dans le corps, même à `null`."""
        return bool({"timezone", "timezoneOffset"} & self.model_fields_set)

    def timezone_value(self) -> Any:
        """Décalage fourni par l'appelant, `timezone` prioritaire (valeur brute, `null` compris)."""
        if "timezone" in self.model_fields_set:
            return self.timezone
        return self.timezoneOffset


class AstrologyDataResponse(BaseModel):
    """Résumé astrologique renvoyé au client.

    Champs:
    - moonSign, sunSign, ascendant: signe ou "Unknown"
    - atmakarak: planète de l'âme (jamais vide, "Sun" par défaut)
    - birthChart: thème brut du moteur, non modifié
    """

    model_config = ConfigDict(populate_by_name=True)

    moon_sign: str = Field(alias="moonSign")
    sun_sign: str = Field(alias="sunSign")
    ascendant: str
    atmakarak: str
    birth_chart: Any = Field(alias="birthChart")


class ErrorResponse(BaseModel):
    """Enveloppe d'erreur standard (documentation OpenAPI)."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None
