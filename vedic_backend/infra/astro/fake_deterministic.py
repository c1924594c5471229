"""Moteur de thème natal déterministe pour les tests et le développement.

Ce module implémente un moteur factice qui produit toujours le même thème, sans dépendance à Swiss
Ephemeris.
"""

from vedic_backend.domain.entities import Chart
from vedic_backend.infra.astro.base import AstroEngine, body_record

FIXED_LONGITUDES = {
    "Su": 60.5,  # Gemini
    "Mo": 95.2,  # Cancer
    "Ma": 200.0,
    "Me": 45.3,
    "Ju": 250.7,
    "Ve": 310.9,  # plus haut degré
    "Sa": 280.1,
    "Ra": 15.0,
    "Ke": 195.0,
    "As": 130.4,  # Leo
}


class FakeDeterministicAstro(AstroEngine):
    """Moteur factice déterministe.

    Produit un thème prévisible (Lune en Cancer, Soleil en Gemini, Ascendant Leo, Atmakarak Venus)
    quelles que soient les données de naissance.
    """

    name = "fake"

    def get_birth_chart(
        self,
        date_of_birth: str,
        time_of_birth: str,
        latitude: float,
        longitude: float,
        timezone_offset: float,
    ) -> Chart:
        """Retourne un thème fixe enrichi des paramètres d'entrée."""
        return {
            "meta": {code: body_record(code, lon) for code, lon in FIXED_LONGITUDES.items()},
            "input": {
                "dateOfBirth": date_of_birth,
                "timeOfBirth": time_of_birth,
                "lat": latitude,
                "lng": longitude,
                "timezone": timezone_offset,
            },
        }
