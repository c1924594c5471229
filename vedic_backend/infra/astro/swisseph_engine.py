"""
Moteur de thème natal védique basé sur Swiss Ephemeris (pyswisseph).

Ce module calcule les longitudes sidérales des sept planètes classiques, des nœuds lunaires
(Rahu/Ketu) et de l'ascendant, puis les expose au format `meta` attendu par la couche de
dérivation.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

import structlog
import swisseph as swe

from vedic_backend.domain.entities import Chart
from vedic_backend.domain.errors import EngineError
from vedic_backend.infra.astro.base import AstroEngine, body_record

log = structlog.get_logger(__name__)

AYANAMSAS = {
    "lahiri": swe.SIDM_LAHIRI,
    "raman": swe.SIDM_RAMAN,
    "krishnamurti": swe.SIDM_KRISHNAMURTI,
    "fagan_bradley": swe.SIDM_FAGAN_BRADLEY,
}

PLANETS = {
    "Su": swe.SUN,
    "Mo": swe.MOON,
    "Ma": swe.MARS,
    "Me": swe.MERCURY,
    "Ju": swe.JUPITER,
    "Ve": swe.VENUS,
    "Sa": swe.SATURN,
}

NODES = {"mean": swe.MEAN_NODE, "true": swe.TRUE_NODE}


def local_to_julian_day(date_of_birth: str, time_of_birth: str, timezone_offset: float) -> float:
    """Convertit une date/heure locale et un décalage (heures) en jour julien UT."""
    local = dt.datetime.fromisoformat(f"{date_of_birth}T{time_of_birth}")
    ut = local - dt.timedelta(hours=timezone_offset)
    hour = ut.hour + ut.minute / 60 + ut.second / 3600
    return swe.julday(ut.year, ut.month, ut.day, hour)


class SwissEphemerisEngine(AstroEngine):
    """
    Moteur sidéral Swiss Ephemeris.

    Sans fichiers d'éphémérides (`SE_EPHE_PATH`), la bibliothèque se replie sur l'éphéméride
    Moshier intégrée.
    """

    name = "swisseph"

    def __init__(
        self,
        ayanamsa: str = "lahiri",
        node: str = "mean",
        ephe_path: str | None = None,
    ):
        """
        Initialise le moteur et configure le mode sidéral.

        Args:
            ayanamsa: Nom de l'ayanamsa (lahiri, raman, krishnamurti, fagan_bradley).
            node: Nœud lunaire utilisé pour Rahu ("mean" ou "true").
            ephe_path: Répertoire des fichiers .se1 (optionnel).
        """
        key = ayanamsa.lower()
        if key not in AYANAMSAS:
            raise ValueError(f"Unsupported ayanamsa: {ayanamsa}")
        if node.lower() not in NODES:
            raise ValueError(f"Unsupported node type: {node}")
        self.ayanamsa = key
        self.node = node.lower()
        if ephe_path:
            swe.set_ephe_path(ephe_path)
        swe.set_sid_mode(AYANAMSAS[key], 0, 0)
        self._flags = swe.FLG_SWIEPH | swe.FLG_SIDEREAL | swe.FLG_SPEED

    def _longitude(self, jd_ut: float, body: int) -> tuple[float, float]:
        xx, _ = swe.calc_ut(jd_ut, body, self._flags)
        return xx[0] % 360.0, xx[3]

    def get_birth_chart(
        self,
        date_of_birth: str,
        time_of_birth: str,
        latitude: float,
        longitude: float,
        timezone_offset: float,
    ) -> Chart:
        """
        Calcule le thème natal sidéral.

        Returns:
            Chart: `meta` (Su, Mo, Ma, Me, Ju, Ve, Sa, Ra, Ke, As), `input` et `ayanamsa`.

        Raises:
            EngineError: si Swiss Ephemeris échoue.
        """
        try:
            jd_ut = local_to_julian_day(date_of_birth, time_of_birth, timezone_offset)
            meta: dict[str, Any] = {}
            for code, body in PLANETS.items():
                lon, speed = self._longitude(jd_ut, body)
                meta[code] = body_record(code, lon, speed)

            rahu_lon, rahu_speed = self._longitude(jd_ut, NODES[self.node])
            meta["Ra"] = body_record("Ra", rahu_lon, rahu_speed)
            meta["Ke"] = body_record("Ke", rahu_lon + 180.0, rahu_speed)

            # Ascendant tropical (maisons égales) moins l'ayanamsa
            _cusps, ascmc = swe.houses(jd_ut, latitude, longitude, b"E")
            ayanamsa_value = swe.get_ayanamsa_ut(jd_ut)
            meta["As"] = body_record("As", ascmc[0] - ayanamsa_value)
        except (swe.Error, ValueError, OverflowError) as err:
            raise EngineError(f"Swiss Ephemeris calculation failed: {err}") from err

        log.debug("swisseph_chart_computed", jd_ut=jd_ut, ayanamsa=self.ayanamsa)
        return {
            "meta": meta,
            "input": {
                "dateOfBirth": date_of_birth,
                "timeOfBirth": time_of_birth,
                "lat": latitude,
                "lng": longitude,
                "timezone": timezone_offset,
                "julianDayUT": jd_ut,
            },
            "ayanamsa": {"name": self.ayanamsa, "value": ayanamsa_value},
        }
