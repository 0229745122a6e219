from __future__ import annotations

import redis


def test_health_ok(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert (body["status"], body["db"], body["registry"]) == ("ok", "ok", "ok")


def test_health_degraded_when_registry_down(app, client, monkeypatch):
    def _down(*args, **kwargs):
        raise redis.ConnectionError("down")

    monkeypatch.setattr(app.extensions["redis_client"], "ping", _down)
    resp = client.get("/api/health")
    assert resp.status_code == 503
    assert resp.get_json()["registry"] == "fail"


def test_request_id_echoed(client):
    resp = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"
