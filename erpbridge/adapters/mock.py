"""In-memory adapter serving fixture tables."""

from typing import Any, Dict, List, Optional

from .base import BaseSourceAdapter
from ..errors import RemoteProtocolError


def select_rows(
    rows: List[Dict[str, Any]],
    fields: Optional[List[str]] = None,
    max_rows: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Copy rows, keeping only ``fields`` and at most ``max_rows`` entries."""
    selected = rows[:max_rows] if max_rows else rows
    if fields:
        return [{f: row[f] for f in fields if f in row} for row in selected]
    return [dict(row) for row in selected]


class MockAdapter(BaseSourceAdapter):
    """
    Adapter backed by a dict of table name to rows.

    Always runs the mock code path, whatever the profile says. Reading a
    table that is not in the fixture raises ``RemoteProtocolError`` with
    status 404, like a live system would for a missing table.
    """

    source_system = "MOCK"

    def __init__(self, *args: Any, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None, **kwargs: Any):
        kwargs.setdefault("mode", "mock")
        super().__init__(*args, **kwargs)
        self.tables = {name.upper(): rows for name, rows in (tables or {}).items()}
        self.system = dict(self.options.get("system_info") or {"systemId": "MOCK", "release": "1.0"})

    async def _mock_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        if name.upper() not in self.tables:
            raise RemoteProtocolError(f"Table {name} not found", status_code=404)
        return select_rows(self.tables[name.upper()], fields, max_rows)

    async def _mock_system_info(self) -> Dict[str, Any]:
        return dict(self.system)

    async def _live_connect(self) -> Dict[str, Any]:
        return await self._mock_connect()

    async def _live_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        return await self._mock_read_table(name, fields, max_rows, filter)

    async def _live_query_entities(self, entity_set, query) -> List[Dict[str, Any]]:
        return await self._mock_query_entities(entity_set, query)

    async def _live_system_info(self) -> Dict[str, Any]:
        return await self._mock_system_info()
