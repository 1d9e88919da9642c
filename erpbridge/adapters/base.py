"""Base source adapter interface."""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..errors import BridgeError, RemoteProtocolError, SourceConnectionError, TransportTimeout
from ..models.profile import AdapterProfile, RunMode

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


@dataclass
class Telemetry:
    """Request counters kept per connection."""
    total_requests: int = 0
    success_count: int = 0
    failure_count: int = 0
    avg_latency_ms: float = 0.0
    last_status: Optional[str] = None

    def record(self, latency_ms: float, ok: bool, status: str) -> None:
        """Fold one call into the counters."""
        self.total_requests += 1
        if ok:
            self.success_count += 1
        else:
            self.failure_count += 1
        self.avg_latency_ms += (latency_ms - self.avg_latency_ms) / self.total_requests
        self.last_status = status

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "totalRequests": self.total_requests,
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "avgLatencyMs": round(self.avg_latency_ms, 2),
            "lastStatus": self.last_status,
        }


@dataclass
class TableData:
    """Rows returned by a table read."""
    table: str
    rows: List[Dict[str, Any]] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"table": self.table, "rows": self.rows, "fields": self.fields, "rowCount": self.row_count}


class BaseSourceAdapter(ABC):
    """
    Base class for all source-system adapters.

    Every public operation is a coroutine that is timed, counted in
    ``telemetry`` and bounded by the profile timeout. Subclasses provide
    a live and a mock implementation of each operation; the profile mode
    decides which one runs.
    """

    source_system = "GENERIC"

    def __init__(
        self,
        profile: Optional[AdapterProfile] = None,
        mode: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        **options: Any,
    ):
        """
        Initialize the adapter.

        Args:
            profile: Connection profile; a mock profile is created when omitted
            mode: Overrides the profile mode ("live" or "mock")
            timeout_ms: Overrides the profile timeout
            **options: Adapter-specific options (e.g. ``transport``, ``company``)
        """
        self.profile = profile or AdapterProfile(
            name=self.source_system.lower(),
            source_system=self.source_system,
        )
        self.mode = RunMode(mode) if mode else self.profile.mode
        self.timeout_ms = timeout_ms or self.profile.timeout_ms or DEFAULT_TIMEOUT_MS
        self.options = options
        self.telemetry = Telemetry()
        self._connected = False
        self._system_info: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def is_mock(self) -> bool:
        return self.mode == RunMode.MOCK

    async def _call(self, operation: str, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """
        Run one adapter operation with timeout, telemetry and error mapping.

        Raises:
            TransportTimeout: The call exceeded ``timeout_ms``
            SourceConnectionError: The implementation hit an ``OSError``
            RemoteProtocolError: Any other untyped failure, e.g. a malformed payload
            BridgeError: Any typed error raised by the implementation
        """
        started = time.monotonic()

        def elapsed() -> float:
            return (time.monotonic() - started) * 1000

        try:
            result = await asyncio.wait_for(func(*args, **kwargs), timeout=self.timeout_ms / 1000)
        except asyncio.TimeoutError:
            self.telemetry.record(elapsed(), False, "timeout")
            raise TransportTimeout(f"{self.source_system}.{operation}", self.timeout_ms) from None
        except BridgeError as e:
            self.telemetry.record(elapsed(), False, e.code)
            raise
        except OSError as e:
            self.telemetry.record(elapsed(), False, "connection_error")
            raise SourceConnectionError(f"{operation} failed", profile=self.name, cause=e) from e
        except Exception as e:
            self.telemetry.record(elapsed(), False, "protocol_error")
            raise RemoteProtocolError(f"{operation} returned an unexpected payload: {e!r}") from e

        self.telemetry.record(elapsed(), True, "ok")
        return result

    async def connect(self) -> Dict[str, Any]:
        """
        Open the connection. Idempotent.

        Returns:
            Basic system information reported on connect
        """
        if self._connected:
            return self._system_info or {}
        impl = self._mock_connect if self.is_mock else self._live_connect
        self._system_info = await self._call("connect", impl)
        self._connected = True
        logger.info(f"Connected {self.source_system} adapter '{self.name}' ({self.mode.value})")
        return self._system_info

    async def disconnect(self) -> None:
        """Close the connection. Idempotent."""
        if not self._connected:
            return
        await self._close()
        self._connected = False
        logger.info(f"Disconnected {self.source_system} adapter '{self.name}'")

    async def read_table(
        self,
        name: str,
        fields: Optional[List[str]] = None,
        max_rows: Optional[int] = None,
        filter: Optional[str] = None,
    ) -> TableData:
        """
        Read rows from a source table.

        Args:
            name: Table name
            fields: Columns to return, all when omitted
            max_rows: Row limit
            filter: Source-specific filter expression

        Returns:
            TableData with the rows read
        """
        await self.connect()
        impl = self._mock_read_table if self.is_mock else self._live_read_table
        rows = await self._call("readTable", impl, name, fields, max_rows, filter)
        return TableData(table=name, rows=rows, fields=list(fields or (rows[0].keys() if rows else [])))

    async def query_entities(self, entity_set: str, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Query a business entity set.

        Returns:
            Dict with ``entities`` and ``totalCount``
        """
        await self.connect()
        impl = self._mock_query_entities if self.is_mock else self._live_query_entities
        entities = await self._call("queryEntities", impl, entity_set, query or {})
        return {"entities": entities, "totalCount": len(entities)}

    async def system_info(self) -> Dict[str, Any]:
        """Return descriptive information about the source system."""
        await self.connect()
        impl = self._mock_system_info if self.is_mock else self._live_system_info
        return await self._call("systemInfo", impl)

    async def health_check(self) -> Dict[str, Any]:
        """
        Check that the source system answers.

        Returns:
            Dict with ``healthy``, ``latencyMs`` and ``details``
        """
        started = time.monotonic()
        try:
            info = await self.system_info()
        except BridgeError as e:
            return {
                "healthy": False,
                "latencyMs": round((time.monotonic() - started) * 1000),
                "details": {"code": e.code, "error": e.message},
            }
        return {
            "healthy": True,
            "latencyMs": round((time.monotonic() - started) * 1000),
            "details": {"mode": self.mode.value, "systemId": info.get("systemId")},
        }

    async def _close(self) -> None:
        """Release transport resources."""

    # Live implementations

    @abstractmethod
    async def _live_connect(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def _live_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def _live_query_entities(self, entity_set, query) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def _live_system_info(self) -> Dict[str, Any]:
        pass

    # Mock implementations

    async def _mock_connect(self) -> Dict[str, Any]:
        return await self._mock_system_info()

    @abstractmethod
    async def _mock_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        pass

    async def _mock_query_entities(self, entity_set, query) -> List[Dict[str, Any]]:
        top = int(query.get("top", 3))
        return [{"id": f"{entity_set}_{i + 1}", "entitySet": entity_set} for i in range(min(top, 3))]

    @abstractmethod
    async def _mock_system_info(self) -> Dict[str, Any]:
        pass
