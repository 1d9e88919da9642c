"""Infor LN adapter."""

import logging
from typing import Any, Dict, List, Optional

from .base import BaseSourceAdapter
from .http import HttpTransport
from .mock import select_rows
from .sap import decode_odata

logger = logging.getLogger(__name__)

MOCK_TABLES = {
    "tcibd001": [
        {"ITEM": "ITEM-001", "DSCA": "Steel Plate 4mm", "CITG": "01", "CSIG": "A", "CUNI": "KG", "STAP": 1},
        {"ITEM": "ITEM-002", "DSCA": "Copper Wire 2mm", "CITG": "02", "CSIG": "A", "CUNI": "M", "STAP": 1},
        {"ITEM": "ITEM-003", "DSCA": "Aluminum Sheet 3mm", "CITG": "01", "CSIG": "B", "CUNI": "KG", "STAP": 1},
        {"ITEM": "ITEM-004", "DSCA": "Brass Fitting 1in", "CITG": "03", "CSIG": "A", "CUNI": "EA", "STAP": 1},
    ],
    "tccom100": [
        {"BPID": "CUST-001", "NAMA": "Acme Manufacturing", "BPST": "Active", "CCUR": "USD"},
        {"BPID": "CUST-002", "NAMA": "Global Industries", "BPST": "Active", "CCUR": "EUR"},
        {"BPID": "VEND-001", "NAMA": "Steel Works Inc", "BPST": "Active", "CCUR": "USD"},
    ],
    "tccom130": [
        {"CADR": "CUST-001", "NAMA": "Acme Manufacturing", "CCTY": "US", "CITY": "Chicago"},
        {"CADR": "CUST-002", "NAMA": "Global Industries", "CCTY": "DE", "CITY": "Munich"},
        {"CADR": "VEND-001", "NAMA": "Steel Works Inc", "CCTY": "US", "CITY": "Pittsburgh"},
    ],
    "tcemm030": [
        {"CPAC": "tc", "CMOD": "Common", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "td", "CMOD": "Distribution", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "ti", "CMOD": "Manufacturing", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "tf", "CMOD": "Finance", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "tp", "CMOD": "Project", "VERS": "10.7.0", "STAT": "Active"},
    ],
    "tccom000": [
        {"COMP": "100", "DSCA": "Main Company", "CCUR": "USD", "CTRY": "US"},
    ],
}


class InforLNAdapter(BaseSourceAdapter):
    """
    Adapter for Infor LN.

    LN tables carry a three-digit company suffix (``tcibd001`` for company
    100 is stored as ``tcibd001100``); callers pass the base name.
    """

    source_system = "INFOR_LN"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.company = str(self.options.get("company", self.profile.options.get("company", "100")))
        self._transport: Optional[HttpTransport] = self.options.get("transport")

    @property
    def transport(self) -> HttpTransport:
        if self._transport is None:
            self._transport = HttpTransport(self.profile)
        return self._transport

    def full_table_name(self, table: str) -> str:
        """Append the company suffix to a base table name."""
        return f"{table}{self.company.zfill(3)}"

    async def _live_connect(self) -> Dict[str, Any]:
        return await self._live_system_info()

    async def _live_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if fields:
            params["$select"] = ",".join(fields)
        if max_rows:
            params["$top"] = max_rows
        if filter:
            params["$filter"] = filter
        payload = await self.transport.get(f"/LN/lnapi/odata/tables/{self.full_table_name(name)}", params)
        return decode_odata(payload)

    async def _live_query_entities(self, entity_set, query) -> List[Dict[str, Any]]:
        params = {f"${k}" if not k.startswith("$") else k: v for k, v in query.items()}
        payload = await self.transport.get(f"/LN/lnapi/odata/{entity_set}", params)
        return decode_odata(payload)

    async def _live_system_info(self) -> Dict[str, Any]:
        companies = await self._live_read_table("tccom000", None, 1, None)
        company = companies[0] if companies else {}
        return {
            "product": "Infor LN",
            "systemId": f"LN-{self.company}",
            "company": self.company,
            "companyName": company.get("DSCA"),
            "currency": company.get("CCUR"),
        }

    async def _mock_read_table(self, name, fields, max_rows, filter) -> List[Dict[str, Any]]:
        return select_rows(MOCK_TABLES.get(name.lower(), []), fields, max_rows)

    async def _mock_system_info(self) -> Dict[str, Any]:
        return {
            "product": "Infor LN",
            "systemId": f"LN-{self.company}",
            "version": "10.7",
            "company": self.company,
            "companyName": "Main Company",
            "currency": "USD",
            "country": "US",
            "database": "Oracle",
            "modules": [
                {"code": row["CPAC"], "name": row["CMOD"], "version": row["VERS"]}
                for row in MOCK_TABLES["tcemm030"]
            ],
        }

    async def _close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None
