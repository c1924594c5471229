"""
Route de calcul du résumé astrologique védique.

Expose `POST /astrology-data`: valide les données de naissance, interroge le moteur de thème puis
renvoie signes Lune/Soleil/Ascendant, Atmakarak et thème brut.
"""

from fastapi import APIRouter

from vedic_backend.api.schemas import (
    AstrologyDataRequest,
    AstrologyDataResponse,
    ErrorResponse,
)
from vedic_backend.apigw.errors import bad_request
from vedic_backend.core.container import container

router = APIRouter(tags=["astrology"])


@router.post(
    "/astrology-data",
    response_model=AstrologyDataResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
def astrology_data(payload: AstrologyDataRequest):
    """
    Calcule le résumé astrologique d'une naissance.

    Paramètres:
    - payload: `AstrologyDataRequest` (dateOfBirth, timeOfBirth, lat, lng, timezone optionnel).

    Retour:
    - `AstrologyDataResponse` (moonSign, sunSign, ascendant, atmakarak, birthChart).
    """
    if payload.missing_required():
        raise bad_request("Missing required fields")

    extra = {}
    if payload.timezone_provided():
        extra["timezone_offset"] = payload.timezone_value()

    summary = container.astrology_service.get_astrology_data(
        payload.dateOfBirth,
        payload.timeOfBirth,
        payload.lat,
        payload.lng,
        **extra,
    )
    return AstrologyDataResponse(**summary.model_dump())
