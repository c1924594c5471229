"""
Fakes et utilitaires de construction de thèmes pour les tests unitaires.

Ce module fournit un constructeur de thèmes minimaux et des moteurs factices au comportement
contrôlé (échec, thème mal formé) pour exercer chaque branche d'erreur du service.
"""

from __future__ import annotations

from typing import Any

from vedic_backend.infra.astro.base import AstroEngine


def make_chart(degrees: dict[str, Any], signs: dict[str, Any] | None = None) -> dict[str, Any]:
    """Construit un thème minimal `{"meta": {...}}` à partir de degrés et de signes."""
    meta: dict[str, Any] = {}
    for code, degree in degrees.items():
        meta.setdefault(code, {})["degree"] = degree
    for code, rashi in (signs or {}).items():
        meta.setdefault(code, {})["rashi"] = rashi
    return {"meta": meta}


class StaticChartEngine(AstroEngine):
    """Moteur factice renvoyant toujours le même objet et mémorisant ses appels."""

    name = "static"

    def __init__(self, chart: Any):
        self.chart = chart
        self.calls: list[tuple] = []

    def get_birth_chart(self, date_of_birth, time_of_birth, latitude, longitude, timezone_offset):
        self.calls.append((date_of_birth, time_of_birth, latitude, longitude, timezone_offset))
        return self.chart


class FailingEngine(AstroEngine):
    """Moteur factice qui échoue systématiquement."""

    name = "failing"

    def __init__(self, exc: Exception | None = None):
        self.exc = exc or RuntimeError("ephemeris files missing")

    def get_birth_chart(self, date_of_birth, time_of_birth, latitude, longitude, timezone_offset):
        raise self.exc
