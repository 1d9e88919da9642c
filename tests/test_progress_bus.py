"""Tests for the progress bus and SSE framing."""

import json

import pytest

from erpbridge.errors import RuleValidationError
from erpbridge.events.progress_bus import CLIENT_QUEUE_SIZE, ProgressBus
from erpbridge.events.sse import KEEPALIVE_FRAME, format_sse_message, stream_frames


def parse_frame(frame):
    event_line, data_line = frame.strip().split("\n")
    return event_line[len("event: "):], json.loads(data_line[len("data: "):])


class TestEmit:
    """Test emission and history."""

    def test_ids_are_sequential(self, bus):
        first = bus.emit("migration:start", {"objectId": "BANK_MASTER"})
        second = bus.emit("migration:complete", {"objectId": "BANK_MASTER"})

        assert (first.id, second.id) == (1, 2)
        assert first.type == "migration:start"
        assert first.timestamp

    def test_resize_keeps_newest(self, bus):
        for n in range(5):
            bus.emit("system:info", {"n": n})
        bus.resize(2)

        assert bus.capacity == 2
        assert [e["data"]["n"] for e in bus.history()] == [3, 4]
        with pytest.raises(ValueError):
            bus.resize(0)

    def test_unknown_type_rejected(self, bus):
        with pytest.raises(RuleValidationError):
            bus.emit("migration:exploded", {})
        assert bus.history() == []

    def test_payload_is_copied(self, bus):
        payload = {"rows": [1, 2]}
        bus.emit("system:info", payload)
        payload["rows"].append(3)

        assert bus.history()[0]["data"] == {"rows": [1, 2]}

    def test_history_filters_and_limits(self, bus):
        bus.emit("extraction:start", {})
        bus.emit("migration:start", {"n": 1})
        bus.emit("migration:progress", {"n": 2})
        bus.emit("migration:complete", {"n": 3})

        assert [e["type"] for e in bus.history(type="migration")] == [
            "migration:start", "migration:progress", "migration:complete",
        ]
        assert [e["data"]["n"] for e in bus.history(count=2, type="migration")] == [2, 3]
        assert bus.history(count=0) == []
        assert len(bus.history()) == 4

    def test_history_is_bounded(self):
        bus = ProgressBus(capacity=3)
        for i in range(5):
            bus.emit("system:info", {"i": i})

        assert [e["data"]["i"] for e in bus.history()] == [2, 3, 4]

    def test_clear_history(self, bus):
        bus.emit("system:info", {})
        bus.clear_history()

        assert bus.history() == []

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            ProgressBus(capacity=0)


class TestSubscribers:
    """Test handler delivery."""

    def test_handlers_run_in_order(self, bus):
        seen = []
        bus.subscribe(lambda e: seen.append(("a", e["type"])))
        bus.subscribe(lambda e: seen.append(("b", e["type"])))
        bus.emit("agent:start", {})

        assert seen == [("a", "agent:start"), ("b", "agent:start")]

    def test_failing_handler_does_not_block_others(self, bus):
        seen = []

        def broken(event):
            raise RuntimeError("handler bug")

        bus.subscribe(broken)
        bus.subscribe(lambda e: seen.append(e["id"]))
        bus.emit("agent:progress", {})

        assert seen == [1]

    def test_unsubscribe(self, bus):
        seen = []
        unsubscribe = bus.subscribe(lambda e: seen.append(e))
        bus.emit("system:health", {})
        unsubscribe()
        unsubscribe()
        bus.emit("system:health", {})

        assert len(seen) == 1

    def test_handler_cannot_mutate_history(self, bus):
        bus.subscribe(lambda e: e["data"].clear())
        bus.emit("system:info", {"keep": True})

        assert bus.history()[0]["data"] == {"keep": True}


class TestSSEClients:
    """Test streaming clients attached to the bus."""

    @pytest.mark.asyncio
    async def test_connected_frame_then_replay(self, bus):
        bus.emit("migration:start", {"n": 1})
        bus.emit("migration:progress", {"n": 2})
        bus.emit("migration:complete", {"n": 3})
        client = bus.connect_sse(replay=2)

        frames = [parse_frame(f) for f in client.pending()]
        assert frames[0][0] == "connected"
        assert frames[0][1]["clientId"] == client.id
        assert [f[1]["data"]["n"] for f in frames[1:]] == [2, 3]
        assert bus.client_count == 1

    @pytest.mark.asyncio
    async def test_live_events_are_queued(self, bus):
        client = bus.connect_sse()
        client.pending()
        bus.emit("extraction:progress", {"extractorId": "FI_CONFIG"})

        event, data = parse_frame(await client.next_frame())
        assert event == "extraction:progress"
        assert data["data"]["extractorId"] == "FI_CONFIG"

    @pytest.mark.asyncio
    async def test_close_removes_client(self, bus):
        client = bus.connect_sse()
        client.close()

        assert bus.client_count == 0
        assert client.push("frame") is False

    @pytest.mark.asyncio
    async def test_full_client_is_pruned(self, bus):
        client = bus.connect_sse()
        for _ in range(CLIENT_QUEUE_SIZE):
            bus.emit("system:info", {})

        assert client.closed
        assert bus.client_count == 0


class TestSSEFormatting:
    """Test frame formatting and streaming."""

    def test_format_sse_message(self):
        assert format_sse_message("connected", {"a": 1}) == 'event: connected\ndata: {"a": 1}\n\n'

    @pytest.mark.asyncio
    async def test_stream_until_disconnect(self, bus):
        client = bus.connect_sse()
        bus.emit("migration:start", {})
        answers = iter([False, False, True])

        async def is_disconnected():
            return next(answers)

        frames = [f async for f in stream_frames(client, is_disconnected)]

        assert [parse_frame(f)[0] for f in frames] == ["connected", "migration:start"]
        assert client.closed
        assert bus.client_count == 0

    @pytest.mark.asyncio
    async def test_keepalive_when_idle(self, bus):
        client = bus.connect_sse()
        client.pending()
        answers = iter([False, True])

        async def is_disconnected():
            return next(answers)

        frames = [f async for f in stream_frames(client, is_disconnected, keepalive_seconds=0.01)]

        assert frames == [KEEPALIVE_FRAME]
