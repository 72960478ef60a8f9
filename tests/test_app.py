from __future__ import annotations

from fastapi.testclient import TestClient

from garden.factory import create_app
from tests.support import make_settings


def test_root(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert "POST /measurements" in body["routes"]


def test_security_headers(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert "Strict-Transport-Security" not in resp.headers


def test_health_counts_measurements(seeded_client: TestClient) -> None:
    resp = seeded_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "measurements": 6}


def test_unseeded_store_starts_empty(client: TestClient) -> None:
    assert client.get("/health").json()["measurements"] == 0


def test_docs_disabled_in_production() -> None:
    app = create_app(make_settings(env="production", docs_enabled=True))
    with TestClient(app) as client:
        assert client.get("/docs").status_code == 404
        assert "Strict-Transport-Security" in client.get("/").headers


def test_untrusted_host_rejected(client: TestClient) -> None:
    resp = client.get("/", headers={"Host": "evil.example.com"})
    assert resp.status_code == 400


def test_unhandled_errors_render_500(settings) -> None:
    app = create_app(settings)

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Something broke!"}


def test_startup_seeds_demo_data_when_enabled() -> None:
    app = create_app(make_settings(seed_demo_data=True))
    with TestClient(app) as client:
        assert client.get("/health").json()["measurements"] == 6
        assert len(client.get("/measurements/2015-09-01").json()) == 6
