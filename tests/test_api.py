"""Tests for the HTTP API."""

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from erpbridge import __version__
from erpbridge.api.main import create_app
from erpbridge.api.routes.events import event_stream
from erpbridge.config import Settings
from erpbridge.events.progress_bus import DEFAULT_CAPACITY, ProgressBus, progress_bus
from erpbridge.migration.planner import PlanStore

FORENSIC = {
    "results": {
        "FI_TRANSACTIONS": {"count": 100},
        "MM_MATERIALS": {"count": 50},
    },
}


@pytest.fixture
def bus():
    return ProgressBus(capacity=50)


@pytest.fixture
def store():
    return PlanStore()


@pytest.fixture
def client(bus, store):
    app = create_app(bus=bus, plan_store=store, settings=Settings())
    return TestClient(app)


class TestHealth:
    """Test the health endpoint."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__, "sseClients": 0}


class TestEventHistory:
    """Test event history queries."""

    def test_empty_history(self, client):
        response = client.get("/api/events/history")

        assert response.status_code == 200
        assert response.json() == {"events": [], "clients": 0}

    def test_history_filters(self, client, bus):
        bus.emit("extraction:start", {"runId": "r1"})
        bus.emit("migration:start", {"objectId": "BANK_MASTER"})
        bus.emit("migration:complete", {"objectId": "BANK_MASTER"})

        events = client.get("/api/events/history", params={"type": "migration"}).json()["events"]
        assert [e["type"] for e in events] == ["migration:start", "migration:complete"]

        latest = client.get("/api/events/history", params={"count": 1}).json()["events"]
        assert latest[0]["type"] == "migration:complete"
        assert latest[0]["data"] == {"objectId": "BANK_MASTER"}

    def test_negative_count_rejected(self, client):
        assert client.get("/api/events/history", params={"count": -1}).status_code == 422


class TestEventStream:
    """Test the server-sent event stream."""

    @pytest.mark.asyncio
    async def test_stream_starts_with_connected_frame(self, bus, store):
        app = create_app(bus=bus, plan_store=store, settings=Settings())
        bus.emit("migration:start", {"objectId": "BANK_MASTER"})

        async def receive():
            return {"type": "http.request", "body": b"", "more_body": False}

        scope = {"type": "http", "method": "GET", "path": "/api/events", "headers": [], "query_string": b"", "app": app}
        response = await event_stream(Request(scope, receive), replay=1)

        assert "/api/events" in [route.path for route in app.routes]
        assert response.media_type == "text/event-stream"
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert bus.client_count == 1

        first = await response.body_iterator.__anext__()
        second = await response.body_iterator.__anext__()
        await response.body_iterator.aclose()

        assert first.startswith("event: connected\n")
        assert second.startswith("event: migration:start\n")
        assert bus.client_count == 0


class TestSharedBus:
    """Test the default bus wiring."""

    @pytest.fixture(autouse=True)
    def _restore_capacity(self):
        yield
        progress_bus.resize(DEFAULT_CAPACITY)

    def test_capacity_from_settings(self):
        app = create_app(settings=Settings(event_history_capacity=2))

        assert app.state.progress_bus is progress_bus
        assert progress_bus.capacity == 2
        for n in range(3):
            progress_bus.emit("system:info", {"n": n})

        events = TestClient(app).get("/api/events/history").json()["events"]
        assert [e["data"]["n"] for e in events] == [1, 2]


class TestPlanEndpoints:
    """Test plan generation and retrieval."""

    def test_create_and_fetch_plan(self, client, store):
        response = client.post("/api/migration/plan", json={
            "forensicResult": FORENSIC,
            "options": {"includeModules": ["FI"]},
        })

        assert response.status_code == 200
        plan = response.json()
        assert plan["scope"]["activeModules"] == ["FI"]
        assert plan["executionPlan"]["totalWaves"] == 4
        assert store.state == PlanStore.AVAILABLE

        latest = client.get("/api/migration/plan/latest")
        assert latest.status_code == 200
        assert latest.json() == plan

    def test_uses_recorded_forensic_result(self, client, store):
        store.record_forensic(FORENSIC)
        response = client.post("/api/migration/plan", json={})

        assert response.status_code == 200
        assert response.json()["scope"]["activeModules"] == ["FI", "MM"]

    def test_second_plan_refreshes(self, client, store):
        client.post("/api/migration/plan", json={"forensicResult": FORENSIC})
        client.post("/api/migration/plan", json={"forensicResult": FORENSIC, "options": {"excludeModules": ["MM"]}})

        assert store.state == PlanStore.REFRESHED
        assert store.latest()["scope"]["activeModules"] == ["FI"]

    def test_missing_forensic_result(self, client):
        response = client.post("/api/migration/plan", json={"options": {}})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationError"
        assert body["message"] == "No forensic data available"

    def test_no_plan_yet(self, client):
        response = client.get("/api/migration/plan/latest")

        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"
