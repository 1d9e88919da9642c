"""Infor M3 adapter (MI programs over the M3 REST API)."""

import logging
from typing import Any, Dict, List, Optional

from .base import BaseSourceAdapter
from .http import HttpTransport
from .mock import select_rows
from ..errors import RemoteProtocolError

logger = logging.getLogger(__name__)

# Tables are not read directly in M3; each maps to an MI program/transaction.
TABLE_PROGRAM_MAP = {
    "MITMAS": {"program": "MMS200", "transaction": "LstByNam", "key_field": "ITNO"},
    "OCUSMA": {"program": "CRS610", "transaction": "LstByName", "key_field": "CUNO"},
    "CIDMAS": {"program": "CRS620", "transaction": "LstByName", "key_field": "SUNO"},
    "OOLINE": {"program": "OIS100", "transaction": "LstLines", "key_field": "ORNO"},
    "MPLINE": {"program": "PPS200", "transaction": "LstLines", "key_field": "PUNO"},
    "MITBAL": {"program": "MMS200", "transaction": "LstByNam", "key_field": "ITNO"},
    "FSLEDG": {"program": "GLS200", "transaction": "LstVoucher", "key_field": "VONO"},
    "CMNFCN": {"program": "CMNFCN", "transaction": "GetBasicData", "key_field": "CONO"},
}

FIELD_PREFIXES = {
    "IT": "Item",
    "WH": "Warehouse",
    "CU": "Customer",
    "SU": "Supplier",
    "OR": "Order",
    "PU": "Purchase",
    "VO": "Voucher",
    "CO": "Company",
}

MOCK_TABLE_DATA = {
    "MITMAS": [
        {"ITNO": "A001", "ITDS": "Widget Alpha", "ITTY": "001", "STAT": "20", "UNMS": "EA", "FUDS": "Standard widget A"},
        {"ITNO": "A002", "ITDS": "Widget Beta", "ITTY": "001", "STAT": "20", "UNMS": "EA", "FUDS": "Standard widget B"},
        {"ITNO": "B001", "ITDS": "Gear Assembly", "ITTY": "002", "STAT": "20", "UNMS": "PC", "FUDS": "Drive gear assembly"},
        {"ITNO": "B002", "ITDS": "Motor Housing", "ITTY": "002", "STAT": "20", "UNMS": "PC", "FUDS": "Motor housing unit"},
    ],
    "OCUSMA": [
        {"CUNO": "CUST001", "CUNM": "Acme Corp", "STAT": "20", "CUTP": "0", "CUA1": "100 Main St"},
        {"CUNO": "CUST002", "CUNM": "Global Ltd", "STAT": "20", "CUTP": "0", "CUA1": "200 Oak Ave"},
    ],
    "CIDMAS": [
        {"SUNO": "SUPP001", "SUNM": "Parts Plus", "STAT": "20", "SUTY": "0"},
        {"SUNO": "SUPP002", "SUNM": "Metal Works", "STAT": "20", "SUTY": "0"},
    ],
    "CMNFCN": [
        {"CONO": "100", "CONM": "M3 Main Company", "DIVI": "AAA", "CCUR": "USD"},
    ],
}


def decode_mi_records(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Flatten ``MIRecord``/``NameValue`` pairs into plain dicts with trimmed values."""
    if not isinstance(payload, dict):
        raise RemoteProtocolError("Unrecognized MI payload", response=payload)
    if payload.get("@type") == "ServerReturnedNOK" or "ErrorMessage" in payload:
        raise RemoteProtocolError(payload.get("Message") or payload.get("ErrorMessage", "MI call failed"), response=payload)
    records = payload.get("MIRecord") or []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise RemoteProtocolError("MIRecord is not a list of records", response=payload)
    rows = []
    for record in records:
        pairs = record.get("NameValue") or []
        if not isinstance(pairs, list) or not all(isinstance(nv, dict) and "Name" in nv for nv in pairs):
            raise RemoteProtocolError("NameValue is not a list of name/value pairs", response=record)
        rows.append({nv["Name"]: str(nv.get("Value") or "").strip() for nv in pairs})
    return rows


class InforM3Adapter(BaseSourceAdapter):
    """Adapter for Infor M3, translating table reads to MI transactions."""

    source_system = "INFOR_M3"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.company = str(self.options.get("company", self.profile.options.get("company", "100")))
        self.division = self.options.get("division", self.profile.options.get("division"))
        self._transport: Optional[HttpTransport] = self.options.get("transport")

    @property
    def transport(self) -> HttpTransport:
        if self._transport is None:
            self._transport = HttpTransport(self.profile)
        return self._transport

    @staticmethod
    def program_for(table: str) -> Optional[Dict[str, str]]:
        """Return the MI program mapping for a table, if any."""
        return TABLE_PROGRAM_MAP.get(table.upper())

    async def _execute(self, program: str, transaction: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = {"CONO": self.company, **params}
        payload = await self.transport.get(f"/m3api-rest/execute/{program}/{transaction}", query)
        return decode_mi_records(payload)

    async def _live_connect(self) -> Dict[str, Any]:
        return await self._live_system_info()

    async def _live_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        mapping = self.program_for(name)
        if mapping is None:
            raise RemoteProtocolError(f"No MI program mapped for table {name}", status_code=404)
        params: Dict[str, Any] = {}
        if max_rows:
            params["maxrecs"] = max_rows
        if fields:
            params["returncols"] = ",".join(fields)
        return await self._execute(mapping["program"], mapping["transaction"], params)

    async def _live_query_entities(self, entity_set, query) -> List[Dict[str, Any]]:
        program, _, transaction = entity_set.partition("/")
        return await self._execute(program, transaction or "LstByNumber", dict(query))

    async def _live_system_info(self) -> Dict[str, Any]:
        rows = await self._execute("CMNFCN", "GetBasicData", {})
        company = rows[0] if rows else {}
        return {
            "product": "Infor M3",
            "systemId": f"M3-{self.company}",
            "company": self.company,
            "companyName": company.get("CONM"),
            "currency": company.get("CCUR"),
        }

    async def _mock_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        return select_rows(MOCK_TABLE_DATA.get(name.upper(), []), fields, max_rows)

    async def _mock_system_info(self) -> Dict[str, Any]:
        return {
            "product": "Infor M3",
            "systemId": f"M3-{self.company}",
            "company": self.company,
            "companyName": "M3 Main Company",
            "division": self.division or "AAA",
            "currency": "USD",
            "version": "13.4",
            "database": "DB2",
            "modules": ["MMS", "OIS", "PPS", "GLS", "CRS", "MWS", "APS", "MNS"],
            "fieldPrefixes": FIELD_PREFIXES,
            "tableMappings": list(TABLE_PROGRAM_MAP),
        }

    async def _close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None
