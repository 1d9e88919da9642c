"""SAP ECC / S/4HANA adapter."""

import logging
from typing import Any, Dict, List, Optional

from .base import BaseSourceAdapter
from .http import HttpTransport
from ..errors import RemoteProtocolError

logger = logging.getLogger(__name__)

DEFAULT_TABLE_SERVICE = "/sap/opu/odata/sap/ZTABLE_READER_SRV"

MOCK_SYSTEM_INFO = {
    "systemId": "S4H",
    "release": "2023",
    "client": "100",
    "database": "HDB",
    "kernel": "793",
    "modules": ["FI", "CO", "MM", "SD", "PP", "PM", "HR", "BW", "BASIS"],
}

MOCK_DEFAULT_FIELDS = ["FIELD1", "FIELD2", "FIELD3"]


def decode_odata(payload: Any) -> List[Dict[str, Any]]:
    """Pull the entity list out of an OData V2 (``d.results``) or V4 (``value``) body."""
    if isinstance(payload, dict):
        if "d" in payload:
            body = payload["d"]
            items = body.get("results", [body]) if isinstance(body, dict) else body
        elif "value" in payload:
            items = payload["value"]
        else:
            raise RemoteProtocolError("Unrecognized OData payload", response=list(payload.keys()))
    elif isinstance(payload, list):
        items = payload
    else:
        raise RemoteProtocolError("Unrecognized OData payload")
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise RemoteProtocolError("OData entity list is not a list of objects", response=items)
    return [{k: v for k, v in item.items() if k != "__metadata"} for item in items]


class SapAdapter(BaseSourceAdapter):
    """
    Adapter for SAP systems.

    Table reads go through an OData table-reader service and entity
    queries through standard OData services. In mock mode every table
    returns up to five synthetic rows of the form ``<TABLE>_<FIELD>_VALUE``.
    """

    source_system = "SAP"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._transport: Optional[HttpTransport] = self.options.get("transport")
        self.table_service = self.options.get("table_service", DEFAULT_TABLE_SERVICE)

    @property
    def transport(self) -> HttpTransport:
        if self._transport is None:
            self._transport = HttpTransport(self.profile)
        return self._transport

    async def _live_connect(self) -> Dict[str, Any]:
        return await self._live_system_info()

    async def _live_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"$format": "json"}
        if fields:
            params["$select"] = ",".join(fields)
        if max_rows:
            params["$top"] = max_rows
        if filter:
            params["$filter"] = filter
        payload = await self.transport.get(f"{self.table_service}/{name}", params)
        return decode_odata(payload)

    async def _live_query_entities(self, entity_set, query) -> List[Dict[str, Any]]:
        params = {f"${k}" if not k.startswith("$") else k: v for k, v in query.items()}
        params.setdefault("$format", "json")
        payload = await self.transport.get(entity_set, params)
        return decode_odata(payload)

    async def _live_system_info(self) -> Dict[str, Any]:
        components = decode_odata(await self.transport.get(
            f"{self.table_service}/CVERS", {"$format": "json", "$select": "COMPONENT,RELEASE"}
        ))
        basis = next((c for c in components if c.get("COMPONENT") in ("SAP_BASIS", "S4CORE")), {})
        return {
            "systemId": self.profile.options.get("system_id") or self.profile.name.upper(),
            "release": basis.get("RELEASE"),
            "client": self.profile.client,
            "components": components,
        }

    async def _mock_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        fields = fields or MOCK_DEFAULT_FIELDS
        count = min(max_rows or 100, 5)
        template = {f: f"{name}_{f}_VALUE" for f in fields}
        return [{**template, "ROW_INDEX": i + 1} for i in range(count)]

    async def _mock_system_info(self) -> Dict[str, Any]:
        return dict(MOCK_SYSTEM_INFO, client=self.profile.client or MOCK_SYSTEM_INFO["client"])

    async def _close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None
