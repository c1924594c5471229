"""
Dérivation du résumé astrologique à partir du thème brut du moteur.

Le thème est traité comme une donnée non fiable: toute entrée absente ou mal formée se dégrade vers
une valeur sentinelle (`"Unknown"` pour les signes, `"Sun"` pour l'Atmakarak) sans lever
d'exception.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import structlog

from vedic_backend.domain.entities import UNKNOWN_SIGN, AstrologySummary, Chart

log = structlog.get_logger(__name__)

# Ordre d'itération significatif: en cas d'égalité, le premier candidat l'emporte.
ATMAKARAK_CANDIDATES = ("Su", "Mo", "Ma", "Me", "Ju", "Ve", "Sa")

PLANET_NAMES = {
    "Su": "Sun",
    "Mo": "Moon",
    "Ma": "Mars",
    "Me": "Mercury",
    "Ju": "Jupiter",
    "Ve": "Venus",
    "Sa": "Saturn",
}

DEFAULT_ATMAKARAK = "Sun"
MIN_DEGREE = 0.0
MAX_DEGREE = 360.0


def _meta(chart: Any) -> Mapping[str, Any] | None:
    if not isinstance(chart, Mapping):
        return None
    meta = chart.get("meta")
    return meta if isinstance(meta, Mapping) else None


def extract_sign(meta: Mapping[str, Any] | None, code: str) -> str:
    """Retourne le `rashi` du corps `code`, ou "Unknown" si absent/vide."""
    if not isinstance(meta, Mapping):
        return UNKNOWN_SIGN
    body = meta.get(code)
    if not isinstance(body, Mapping):
        return UNKNOWN_SIGN
    rashi = body.get("rashi")
    if not isinstance(rashi, str) or not rashi:
        return UNKNOWN_SIGN
    return rashi


def coerce_degree(raw: Any) -> float | None:
    """Convertit un degré brut en float dans [0, 360], sinon None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        degree = float(raw)
    elif isinstance(raw, str):
        try:
            degree = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(degree) or degree < MIN_DEGREE or degree > MAX_DEGREE:
        return None
    return degree


def _scan_atmakarak(meta: Mapping[str, Any]) -> str:
    max_degree = 0.0
    winner = "Su"
    valid = []

    for code in ATMAKARAK_CANDIDATES:
        body = meta.get(code)
        raw = body.get("degree") if isinstance(body, Mapping) else None
        if raw is None:
            log.warning("atmakarak_degree_missing", planet=code)
            continue
        degree = coerce_degree(raw)
        if degree is None:
            log.warning("atmakarak_degree_invalid", planet=code, degree=repr(raw))
            continue
        valid.append(code)
        if degree > max_degree:
            max_degree = degree
            winner = code

    if not valid:
        log.warning("atmakarak_no_valid_degrees", default=DEFAULT_ATMAKARAK)
        return DEFAULT_ATMAKARAK

    log.debug(
        "atmakarak_calculated",
        planet=winner,
        degree=max_degree,
        valid_planets=len(valid),
    )
    return PLANET_NAMES.get(winner, DEFAULT_ATMAKARAK)


def calculate_atmakarak(chart: Any) -> str:
    """
    Détermine l'Atmakarak (planète de l'âme): la planète au degré le plus élevé.

    Seuls les sept corps classiques sont candidats (Rahu/Ketu exclus). Un degré absent, non
    numérique ou hors de [0, 360] écarte la planète au lieu de compter comme 0. Comparaison stricte:
    le premier candidat dans l'ordre Su, Mo, Ma, Me, Ju, Ve, Sa gagne les égalités.

    Args:
        chart: Thème brut renvoyé par le moteur (mapping contenant `meta`).

    Returns:
        str: Nom complet de la planète; "Sun" à défaut de données exploitables.
    """
    try:
        meta = _meta(chart)
        if meta is None:
            log.warning("atmakarak_chart_without_meta", default=DEFAULT_ATMAKARAK)
            return DEFAULT_ATMAKARAK
        return _scan_atmakarak(meta)
    except Exception:
        log.exception("atmakarak_calculation_failed", default=DEFAULT_ATMAKARAK)
        return DEFAULT_ATMAKARAK


def derive_summary(chart: Chart) -> AstrologySummary:
    """Construit le résumé (signes Lune/Soleil/Ascendant, Atmakarak) d'un thème."""
    meta = _meta(chart)
    summary = AstrologySummary(
        moon_sign=extract_sign(meta, "Mo"),
        sun_sign=extract_sign(meta, "Su"),
        ascendant=extract_sign(meta, "As"),
        atmakarak=calculate_atmakarak(chart),
        birth_chart=chart,
    )
    if UNKNOWN_SIGN == summary.moon_sign == summary.sun_sign == summary.ascendant:
        log.warning("all_major_signs_unknown")
    return summary
