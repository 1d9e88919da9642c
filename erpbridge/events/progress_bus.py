"""In-process progress bus with bounded replay history."""

import asyncio
import copy
import itertools
import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional

from ..errors import RuleValidationError
from .sse import format_sse_message

logger = logging.getLogger(__name__)

EVENT_TYPES = (
    "extraction:start",
    "extraction:progress",
    "extraction:complete",
    "extraction:error",
    "migration:start",
    "migration:progress",
    "migration:complete",
    "migration:error",
    "agent:start",
    "agent:progress",
    "agent:complete",
    "agent:error",
    "system:health",
    "system:info",
    "connected",
)

DEFAULT_CAPACITY = 1000
CLIENT_QUEUE_SIZE = 1000

Handler = Callable[[Dict[str, Any]], None]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ProgressEvent:
    """A single published event."""
    id: int
    type: str
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation (a deep copy of ``data``)."""
        return {
            "id": self.id,
            "type": self.type,
            "data": copy.deepcopy(self.data),
            "timestamp": self.timestamp,
        }


class SSEClient:
    """One streaming consumer attached to a bus."""

    def __init__(self, bus: "ProgressBus", client_id: str, max_queue: int = CLIENT_QUEUE_SIZE):
        self.id = client_id
        self._bus = bus
        self._queue: "asyncio.Queue[str]" = asyncio.Queue(maxsize=max_queue)
        self.closed = False

    def push(self, frame: str) -> bool:
        """Queue a frame; returns False when the client can no longer accept it."""
        if self.closed:
            return False
        try:
            self._queue.put_nowait(frame)
        except asyncio.QueueFull:
            return False
        return True

    async def next_frame(self) -> str:
        """Wait for the next queued frame."""
        return await self._queue.get()

    def pending(self) -> List[str]:
        """Drain and return the frames queued so far without waiting."""
        frames = []
        while not self._queue.empty():
            frames.append(self._queue.get_nowait())
        return frames

    def close(self) -> None:
        """Detach from the bus."""
        if not self.closed:
            self.closed = True
            self._bus._remove_client(self)


class ProgressBus:
    """
    Single-process publish/subscribe hub for lifecycle events.

    Emission is synchronous and strictly FIFO: subscribers run in
    registration order and a failing subscriber never prevents delivery
    to the others. The last ``capacity`` events are kept for replay.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._history: Deque[ProgressEvent] = deque(maxlen=capacity)
        self._handlers: List[Handler] = []
        self._clients: List[SSEClient] = []
        self._ids = itertools.count(1)

    def resize(self, capacity: int) -> None:
        """Change the replay capacity, keeping the newest events that still fit."""
        if capacity < 1:
            raise ValueError("capacity must be positive")
        if capacity != self.capacity:
            self.capacity = capacity
            self._history = deque(self._history, maxlen=capacity)

    def emit(self, event_type: str, data: Optional[Dict[str, Any]] = None) -> ProgressEvent:
        """
        Publish an event to subscribers, SSE clients and the history buffer.

        Args:
            event_type: One of ``EVENT_TYPES``
            data: JSON-serializable payload

        Returns:
            The recorded event
        """
        if event_type not in EVENT_TYPES:
            raise RuleValidationError(f"Unknown event type: {event_type}", [event_type])

        event = ProgressEvent(
            id=next(self._ids),
            type=event_type,
            data=copy.deepcopy(data or {}),
        )
        self._history.append(event)

        for handler in list(self._handlers):
            try:
                handler(event.to_dict())
            except Exception as e:
                logger.error(f"Progress handler failed for {event_type}: {e}", exc_info=True)

        if self._clients:
            frame = format_sse_message(event.type, event.to_dict())
            for client in list(self._clients):
                if not client.push(frame):
                    logger.warning(f"Pruning unresponsive SSE client {client.id}")
                    client.close()

        return event

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        """
        Register a handler called with each event dict.

        Returns:
            A callable that removes the handler again
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def history(self, count: Optional[int] = None, type: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Return recent events, oldest first.

        Args:
            count: Return at most this many of the newest matching events
            type: Prefix filter on the event type (``migration`` matches ``migration:start``)
        """
        events = [e for e in self._history if not type or e.type.startswith(type)]
        if count is not None:
            events = events[-count:] if count > 0 else []
        return [e.to_dict() for e in events]

    def clear_history(self) -> None:
        self._history.clear()

    def connect_sse(self, replay: int = 0) -> SSEClient:
        """
        Attach a streaming client.

        The client's queue starts with a ``connected`` frame followed by the
        last ``replay`` events; every later emission is appended.
        """
        client = SSEClient(self, str(uuid.uuid4()))
        client.push(format_sse_message("connected", {"clientId": client.id, "timestamp": _now()}))
        if replay > 0:
            for event in list(self._history)[-replay:]:
                client.push(format_sse_message(event.type, event.to_dict()))
        self._clients.append(client)
        logger.debug(f"SSE client {client.id} connected ({len(self._clients)} total)")
        return client

    def _remove_client(self, client: SSEClient) -> None:
        if client in self._clients:
            self._clients.remove(client)
            logger.debug(f"SSE client {client.id} disconnected")

    @property
    def client_count(self) -> int:
        return len(self._clients)


# Shared by the HTTP surface and the CLI.
progress_bus = ProgressBus()
