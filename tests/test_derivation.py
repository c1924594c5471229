"""Tests pour la dérivation du résumé astrologique et de l'Atmakarak.

Ce module couvre l'extraction des signes avec repli "Unknown", le balayage des degrés, la règle
d'égalité (premier candidat gagnant) et les replis vers "Sun".
"""

from __future__ import annotations

from collections import OrderedDict

import pytest
from structlog.testing import capture_logs

from tests.fakes import make_chart
from vedic_backend.domain.derivation import (
    ATMAKARAK_CANDIDATES,
    calculate_atmakarak,
    coerce_degree,
    derive_summary,
    extract_sign,
)


def test_candidate_order_is_fixed() -> None:
    """Teste l'ordre d'itération qui détermine la règle d'égalité."""
    assert ATMAKARAK_CANDIDATES == ("Su", "Mo", "Ma", "Me", "Ju", "Ve", "Sa")


def test_highest_degree_wins(full_chart) -> None:
    """Teste que la planète au plus haut degré est retenue (Rahu exclu)."""
    assert calculate_atmakarak(full_chart) == "Jupiter"


@pytest.mark.parametrize(
    ("code", "name"),
    [
        ("Su", "Sun"),
        ("Mo", "Moon"),
        ("Ma", "Mars"),
        ("Me", "Mercury"),
        ("Ju", "Jupiter"),
        ("Ve", "Venus"),
        ("Sa", "Saturn"),
    ],
)
def test_each_planet_can_win(code: str, name: str) -> None:
    """Teste la correspondance code → nom complet pour chaque candidat."""
    degrees = {c: 10.0 for c in ATMAKARAK_CANDIDATES}
    degrees[code] = 300.0
    assert calculate_atmakarak(make_chart(degrees)) == name


def test_tie_goes_to_earlier_planet() -> None:
    """Teste que Soleil et Mars à 200° donnent le Soleil."""
    chart = make_chart(
        {"Su": 200, "Mo": 10, "Ma": 200, "Me": 30, "Ju": 40, "Ve": 50, "Sa": 60}
    )
    assert calculate_atmakarak(chart) == "Sun"


def test_tie_between_later_planets() -> None:
    """Teste l'égalité entre Vénus et Saturne: Vénus l'emporte."""
    chart = make_chart({"Su": 1, "Ve": 250.5, "Sa": 250.5})
    assert calculate_atmakarak(chart) == "Venus"


def test_order_of_meta_keys_does_not_matter() -> None:
    """Teste que l'ordre du mapping ne change pas la règle d'égalité."""
    meta = OrderedDict()
    meta["Sa"] = {"degree": 100}
    meta["Mo"] = {"degree": 100}
    assert calculate_atmakarak({"meta": meta}) == "Moon"


def test_zero_degree_only_planet_keeps_default() -> None:
    """Teste qu'un degré 0 valide ne dépasse pas le maximum initial: Soleil par défaut."""
    chart = make_chart({"Mo": 0})
    assert calculate_atmakarak(chart) == "Sun"


def test_missing_degrees_are_skipped_not_zeroed() -> None:
    """Teste qu'une planète sans degré est ignorée."""
    chart = make_chart({"Ma": 5.0})
    chart["meta"]["Su"] = {"rashi": "Leo"}
    assert calculate_atmakarak(chart) == "Mars"


@pytest.mark.parametrize("bad", [None, "abc", [], {}, True, float("nan"), float("inf"), -0.0001, 360.0001])
def test_invalid_degree_is_skipped(bad) -> None:
    """Teste qu'un degré invalide n'empoisonne pas la comparaison."""
    chart = make_chart({"Su": 10.0, "Sa": bad, "Me": 20.0})
    assert calculate_atmakarak(chart) == "Mercury"


@pytest.mark.parametrize("boundary", [0, 0.0, 360, 360.0])
def test_boundary_degrees_are_valid(boundary) -> None:
    """Teste que 0 et 360 sont inclus dans l'intervalle."""
    assert coerce_degree(boundary) == float(boundary)


def test_degree_of_360_wins() -> None:
    """Teste qu'un degré de 360 exactement est pris en compte."""
    chart = make_chart({"Su": 359.9, "Sa": 360})
    assert calculate_atmakarak(chart) == "Saturn"


def test_numeric_string_degree_is_coerced() -> None:
    """Teste la coercition d'une chaîne numérique."""
    assert coerce_degree(" 123.5 ") == 123.5
    chart = make_chart({"Su": 10, "Ju": "200.5"})
    assert calculate_atmakarak(chart) == "Jupiter"


@pytest.mark.parametrize(
    "chart",
    [
        None,
        {},
        {"meta": None},
        {"meta": "broken"},
        {"meta": {}},
        {"meta": {"Su": "not-a-mapping", "Mo": 42}},
        make_chart({"Ra": 350.0, "Ke": 170.0}),
        [1, 2, 3],
    ],
)
def test_no_valid_data_falls_back_to_sun(chart) -> None:
    """Teste le repli sur le Soleil sans lever d'exception."""
    assert calculate_atmakarak(chart) == "Sun"


def test_unexpected_failure_falls_back_to_sun() -> None:
    """Teste qu'une erreur inattendue pendant le balayage donne le Soleil."""

    class ExplodingMeta(dict):
        def get(self, key, default=None):
            raise RuntimeError("boom")

    assert calculate_atmakarak({"meta": ExplodingMeta()}) == "Sun"


def test_invalid_degree_logs_warning() -> None:
    """Teste que les planètes écartées sont signalées dans les logs."""
    chart = make_chart({"Su": 10.0, "Mo": "abc"})
    with capture_logs() as logs:
        calculate_atmakarak(chart)
    events = [entry["event"] for entry in logs]
    assert "atmakarak_degree_invalid" in events
    assert "atmakarak_degree_missing" in events


def test_extract_sign_fallbacks() -> None:
    """Teste le repli "Unknown" pour une entrée absente, vide ou non textuelle."""
    meta = {
        "Mo": {"rashi": "Cancer"},
        "Su": {"degree": 12.0},
        "As": {"rashi": ""},
        "Ma": {"rashi": 7},
        "Me": None,
    }
    assert extract_sign(meta, "Mo") == "Cancer"
    assert extract_sign(meta, "Su") == "Unknown"
    assert extract_sign(meta, "As") == "Unknown"
    assert extract_sign(meta, "Ma") == "Unknown"
    assert extract_sign(meta, "Me") == "Unknown"
    assert extract_sign(meta, "Ju") == "Unknown"
    assert extract_sign(None, "Mo") == "Unknown"


def test_derive_summary_partial_chart() -> None:
    """Teste Lune en Cancer et Soleil sans rashi: sunSign "Unknown"."""
    chart = make_chart({"Su": 15.0}, {"Mo": "Cancer"})
    summary = derive_summary(chart)
    assert summary.moon_sign == "Cancer"
    assert summary.sun_sign == "Unknown"
    assert summary.ascendant == "Unknown"
    assert summary.atmakarak == "Sun"


def test_derive_summary_passes_chart_through(full_chart) -> None:
    """Teste que le thème brut est renvoyé tel quel."""
    summary = derive_summary(full_chart)
    assert summary.moon_sign == "Cancer"
    assert summary.sun_sign == "Aries"
    assert summary.ascendant == "Pisces"
    assert summary.atmakarak == "Jupiter"
    assert summary.birth_chart == full_chart


def test_derive_summary_warns_when_all_signs_unknown() -> None:
    """Teste l'avertissement lorsque les trois signes sont inconnus."""
    with capture_logs() as logs:
        summary = derive_summary({"meta": {}})
    assert summary.atmakarak == "Sun"
    assert any(entry["event"] == "all_major_signs_unknown" for entry in logs)


def test_derive_summary_keeps_unusual_chart() -> None:
    """Teste qu'un thème à clés non textuelles ne fait pas échouer la dérivation."""
    chart = {"meta": {"Su": {"degree": 42.0, "rashi": "Taurus"}, 7: None}, 1: "x"}
    summary = derive_summary(chart)
    assert summary.sun_sign == "Taurus"
    assert summary.birth_chart is chart
