"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `vedic_backend` en ajoutant la racine du
projet au sys.path, force le moteur factice et fournit des thèmes de test.
"""

import os
import sys
from typing import Any

import pytest

# Ensure project root is on sys.path so that
# imports like `from vedic_backend...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Le conteneur est construit à l'import: fixer l'environnement avant tout import applicatif.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("ASTRO_ENGINE", "fake")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("OTLP_ENDPOINT", None)

from tests.fakes import make_chart  # noqa: E402


@pytest.fixture
def full_chart() -> dict[str, Any]:
    """Thème complet: sept planètes à degrés distincts, Rahu/Ketu et ascendant."""
    return make_chart(
        {
            "Su": 10.0,
            "Mo": 95.5,
            "Ma": 120.25,
            "Me": 20.0,
            "Ju": 330.75,
            "Ve": 45.0,
            "Sa": 280.0,
            "Ra": 359.0,
            "Ke": 179.0,
            "As": 350.0,
        },
        {"Su": "Aries", "Mo": "Cancer", "As": "Pisces"},
    )


@pytest.fixture
def valid_birth() -> dict[str, Any]:
    """Données de naissance valides (corps de requête)."""
    return {
        "dateOfBirth": "1990-06-15",
        "timeOfBirth": "14:30:00",
        "lat": 28.6,
        "lng": 77.2,
    }
