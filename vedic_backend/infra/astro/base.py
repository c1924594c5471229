"""Interface de base pour les moteurs de calcul de thème natal."""

from __future__ import annotations

from abc import ABC, abstractmethod

from vedic_backend.domain.entities import Chart

# Codes des corps tels qu'exposés dans `chart["meta"]`.
GRAHA_NAMES = {
    "Su": "Sun",
    "Mo": "Moon",
    "Ma": "Mars",
    "Me": "Mercury",
    "Ju": "Jupiter",
    "Ve": "Venus",
    "Sa": "Saturn",
    "Ra": "Rahu",
    "Ke": "Ketu",
    "As": "Ascendant",
}

RASHIS = [
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
]

NAKSHATRAS = [
    "Ashwini",
    "Bharani",
    "Krittika",
    "Rohini",
    "Mrigashira",
    "Ardra",
    "Punarvasu",
    "Pushya",
    "Ashlesha",
    "Magha",
    "Purva Phalguni",
    "Uttara Phalguni",
    "Hasta",
    "Chitra",
    "Swati",
    "Vishakha",
    "Anuradha",
    "Jyeshtha",
    "Mula",
    "Purva Ashadha",
    "Uttara Ashadha",
    "Shravana",
    "Dhanishta",
    "Shatabhisha",
    "Purva Bhadrapada",
    "Uttara Bhadrapada",
    "Revati",
]

NAKSHATRA_SPAN = 360.0 / 27


def body_record(code: str, longitude: float, speed: float = 0.0) -> dict:
    """Construit l'entrée `meta[code]` pour une longitude sidérale donnée."""
    lon = longitude % 360.0
    rashi_index = int(lon // 30)
    nakshatra_index = int(lon // NAKSHATRA_SPAN)
    pada = int((lon % NAKSHATRA_SPAN) // (NAKSHATRA_SPAN / 4)) + 1
    return {
        "graha": GRAHA_NAMES.get(code, code),
        "longitude": round(lon, 6),
        "degree": round(lon, 6),
        "signDegree": round(lon - rashi_index * 30, 6),
        "rashi": RASHIS[rashi_index],
        "rashiIndex": rashi_index,
        "nakshatra": {"name": NAKSHATRAS[nakshatra_index], "pada": pada},
        "isRetrograde": speed < 0,
    }


class AstroEngine(ABC):
    """Interface abstraite d'un moteur de thème natal (collaborateur externe)."""

    name: str = "abstract"

    @abstractmethod
    def get_birth_chart(
        self,
        date_of_birth: str,
        time_of_birth: str,
        latitude: float,
        longitude: float,
        timezone_offset: float,
    ) -> Chart:
        """Calcule le thème natal; `meta` associe chaque code de corps à son enregistrement."""
        ...
