from __future__ import annotations

from fastapi.testclient import TestClient

from printrelay.main import create_app
from printrelay.services.job_store import MemoryJobStore

from .conftest import API_KEY


def _stats(client) -> dict:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["time"]
    return body["stats"]


def test_healthz_counts_jobs_by_status(client, client_headers, agent_headers) -> None:
    assert _stats(client) == {
        "totalJobs": 0,
        "pendingJobs": 0,
        "processingJobs": 0,
        "completedJobs": 0,
        "errorJobs": 0,
    }

    ids = [
        client.post("/api/print/jobs", json={"printerName": "P1", "payload": "x"}, headers=client_headers).json()["jobId"]
        for _ in range(3)
    ]
    client.get("/api/print/jobs/pending", params={"limit": 2}, headers=agent_headers)
    stats = _stats(client)
    assert stats["totalJobs"] == 3
    assert stats["pendingJobs"] == 1
    assert stats["processingJobs"] == 2

    client.post(f"/api/print/jobs/{ids[0]}/ack", json={"status": "done"}, headers=agent_headers)
    after = _stats(client)
    assert after["completedJobs"] == stats["completedJobs"] + 1
    assert after["processingJobs"] == 1

    client.post(f"/api/print/jobs/{ids[1]}/ack", json={"status": "error", "errorDetail": "jam"}, headers=agent_headers)
    assert _stats(client)["errorJobs"] == 1


def test_preflight_short_circuits(client) -> None:
    resp = client.options(
        "/api/print/jobs",
        headers={"Origin": "http://localhost:4200", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.content == b""
    assert resp.headers["access-control-allow-origin"] == "http://localhost:4200"
    assert "X-Pairing-Token" in resp.headers["access-control-allow-headers"]


def test_origin_echoed_only_on_match(client) -> None:
    allowed = client.get("/healthz", headers={"Origin": "http://localhost:4200"})
    assert allowed.headers["access-control-allow-origin"] == "http://localhost:4200"

    denied = client.get("/healthz", headers={"Origin": "https://evil.example"})
    assert denied.status_code == 200
    assert "access-control-allow-origin" not in denied.headers


def test_unexpected_failure_is_internal_error() -> None:
    class BrokenStore(MemoryJobStore):
        async def get(self, job_id):
            raise RuntimeError("disk on fire")

    app = create_app(BrokenStore(), api_key=API_KEY)
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/api/print/jobs/anything")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Internal server error"}
        assert client.get("/healthz").status_code == 200
