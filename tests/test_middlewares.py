"""Tests pour les middlewares d'identifiant de requête et de mesure du temps."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from vedic_backend.middlewares.request_id import RequestIDMiddleware
from vedic_backend.middlewares.timing import TimingMiddleware

UUID_LENGTH = 36


def _app(**timing_kwargs) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(TimingMiddleware, **timing_kwargs)

    @app.get("/echo")
    def echo(request: Request):
        return {"trace_id": request.state.trace_id}

    return app


def test_request_id_is_generated() -> None:
    """Teste la génération d'un identifiant lorsqu'aucun n'est fourni."""
    r = TestClient(_app()).get("/echo")
    request_id = r.headers["X-Request-ID"]
    assert len(request_id) == UUID_LENGTH
    assert r.json()["trace_id"] == request_id


def test_request_id_is_propagated() -> None:
    """Teste la reprise de l'identifiant fourni par l'appelant."""
    r = TestClient(_app()).get("/echo", headers={"X-Request-ID": "abc"})
    assert r.headers["X-Request-ID"] == "abc"
    assert r.json()["trace_id"] == "abc"


def test_timing_header() -> None:
    """Teste l'ajout de l'en-tête de durée."""
    r = TestClient(_app()).get("/echo")
    assert int(r.headers["X-Process-Time-ms"]) >= 0


def test_custom_timing_header() -> None:
    """Teste un nom d'en-tête personnalisé."""
    r = TestClient(_app(header_name="X-Elapsed")).get("/echo")
    assert "X-Elapsed" in r.headers


def test_slow_request_is_logged() -> None:
    """Teste l'avertissement lorsque la durée atteint le seuil configuré."""
    with capture_logs() as logs:
        TestClient(_app(slow_threshold_ms=0)).get("/echo")
    slow = [entry for entry in logs if entry["event"] == "slow_request"]
    assert len(slow) == 1
    assert slow[0]["path"] == "/echo"
    assert slow[0]["method"] == "GET"
