"""Validation des données de naissance avant l'appel au moteur de calcul.

Toutes les règles sont évaluées (pas d'arrêt à la première erreur) afin que l'appelant puisse
corriger l'ensemble des problèmes en un seul aller-retour. Une liste vide signifie que l'entrée est
acceptée.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any

from vedic_backend.domain.entities import DEFAULT_TIMEZONE_OFFSET

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_RE = re.compile(r"\d{2}:\d{2}:\d{2}", re.ASCII)

MIN_YEAR = 1900
MAX_YEAR = 2100
MIN_TIMEZONE_OFFSET = -12
MAX_TIMEZONE_OFFSET = 14


def _is_number(value: Any) -> bool:
    """Vrai pour un int/float réel (bool exclu, NaN exclu)."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not math.isnan(value)


def _validate_date(date_of_birth: Any) -> list[str]:
    if not date_of_birth or not isinstance(date_of_birth, str):
        return ["Date string is required"]
    if not DATE_RE.fullmatch(date_of_birth):
        return ["Date must be in YYYY-MM-DD format"]
    try:
        parsed = dt.date.fromisoformat(date_of_birth)
    except ValueError:
        return ["Invalid date provided"]
    if parsed.year < MIN_YEAR or parsed.year > MAX_YEAR:
        return [f"Date must be between {MIN_YEAR} and {MAX_YEAR}"]
    return []


def _validate_time(time_of_birth: Any) -> list[str]:
    if not time_of_birth or not isinstance(time_of_birth, str):
        return ["Time string is required"]
    if not TIME_RE.fullmatch(time_of_birth):
        return ["Time must be in HH:MM:SS format"]
    hours, minutes, seconds = (int(part) for part in time_of_birth.split(":"))
    errors = []
    if hours > 23:
        errors.append("Hours must be between 00 and 23")
    if minutes > 59:
        errors.append("Minutes must be between 00 and 59")
    if seconds > 59:
        errors.append("Seconds must be between 00 and 59")
    return errors


def _validate_range(value: Any, label: str, low: float, high: float) -> list[str]:
    if not _is_number(value):
        return [f"{label} must be a valid number"]
    if value < low or value > high:
        return [f"{label} must be between {low} and {high}"]
    return []


def validate_birth_input(
    date_of_birth: Any,
    time_of_birth: Any,
    latitude: Any,
    longitude: Any,
    timezone_offset: Any = DEFAULT_TIMEZONE_OFFSET,
) -> list[str]:
    """
    Valide les paramètres de naissance et retourne la liste des violations.

    Args:
        date_of_birth: Date au format YYYY-MM-DD, année comprise entre 1900 et 2100.
        time_of_birth: Heure locale au format HH:MM:SS.
        latitude: Latitude en degrés décimaux, [-90, 90].
        longitude: Longitude en degrés décimaux, [-180, 180].
        timezone_offset: Décalage horaire en heures, [-12, 14]. Omis: 5.5.

    Returns:
        list[str]: Messages de violation, chacun nommant le champ fautif. Vide si valide.
    """
    errors: list[str] = []
    errors.extend(_validate_date(date_of_birth))
    errors.extend(_validate_time(time_of_birth))
    errors.extend(_validate_range(latitude, "Latitude", -90, 90))
    errors.extend(_validate_range(longitude, "Longitude", -180, 180))
    errors.extend(
        _validate_range(timezone_offset, "Timezone", MIN_TIMEZONE_OFFSET, MAX_TIMEZONE_OFFSET)
    )
    return errors
