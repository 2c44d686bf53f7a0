from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from printrelay.main import create_app
from printrelay.services.job_store import MemoryJobStore

API_KEY = "test-api-key"
AGENT_TOKEN = "test-pairing-token"


@pytest.fixture
def store() -> MemoryJobStore:
    return MemoryJobStore()


@pytest.fixture
def app(store):
    return create_app(
        store,
        api_key=API_KEY,
        agent_token=AGENT_TOKEN,
        allowed_origins=["http://localhost:4200"],
        claim_on_dispatch=True,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def client_headers() -> dict[str, str]:
    return {"X-API-Key": API_KEY}


@pytest.fixture
def agent_headers() -> dict[str, str]:
    return {"X-Pairing-Token": AGENT_TOKEN}
