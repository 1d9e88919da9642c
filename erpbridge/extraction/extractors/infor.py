"""Infor LN, Infor M3 and Lawson extractors."""

import copy
from typing import Any, Dict, List

from ..base import ExpectedTable, ExtractorRun, Subject, TableExtractorSpec
from ...adapters.infor_ln import MOCK_TABLES as LN_TABLES
from ...adapters.infor_m3 import MOCK_TABLE_DATA as M3_TABLES
from ...models.results import ExtractorCategory


def _rows(tables: Dict[str, List[Dict[str, Any]]], name: str) -> List[Dict[str, Any]]:
    return copy.deepcopy(tables.get(name, []))


class LnCompanyExtractor(TableExtractorSpec):
    extractor_id = "INFOR_LN_COMPANY"
    name = "LN Companies and Packages"
    module = "LN"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("tccom000", "Companies", critical=True),
        ExpectedTable("tcemm030", "Package combinations"),
    )
    subjects = (
        Subject("companies", "tccom000"),
        Subject("packages", "tcemm030"),
    )

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {"companies": _rows(LN_TABLES, "tccom000"), "packages": _rows(LN_TABLES, "tcemm030")}


class LnItemExtractor(TableExtractorSpec):
    extractor_id = "INFOR_LN_ITEMS"
    name = "LN Item Master"
    module = "LN"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (ExpectedTable("tcibd001", "Items general", critical=True),)
    subjects = (Subject("items", "tcibd001", max_rows=50000),)
    primary_subject = "items"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {"items": _rows(LN_TABLES, "tcibd001")}


class LnBusinessPartnerExtractor(TableExtractorSpec):
    extractor_id = "INFOR_LN_BUSINESS_PARTNERS"
    name = "LN Business Partners"
    module = "LN"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("tccom100", "Business partners", critical=True),
        ExpectedTable("tccom130", "Addresses", critical=True),
    )
    subjects = (
        Subject("partners", "tccom100", max_rows=50000),
        Subject("addresses", "tccom130", max_rows=50000),
    )
    primary_subject = "partners"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {"partners": _rows(LN_TABLES, "tccom100"), "addresses": _rows(LN_TABLES, "tccom130")}


class M3ItemExtractor(TableExtractorSpec):
    extractor_id = "INFOR_M3_ITEMS"
    name = "M3 Item Master"
    module = "M3"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("MITMAS", "Item master", critical=True),
        ExpectedTable("MITBAL", "Item warehouse balance"),
    )
    subjects = (
        Subject("items", "MITMAS", max_rows=50000),
        Subject("balances", "MITBAL", max_rows=50000),
    )
    primary_subject = "items"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        items = _rows(M3_TABLES, "MITMAS")
        return {
            "items": items,
            "balances": [{"ITNO": i["ITNO"], "WHLO": "100", "STQT": run.rng.randint(0, 500)} for i in items],
        }


class M3CustomerExtractor(TableExtractorSpec):
    extractor_id = "INFOR_M3_CUSTOMERS"
    name = "M3 Customers"
    module = "M3"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (ExpectedTable("OCUSMA", "Customer master", critical=True),)
    subjects = (Subject("customers", "OCUSMA", max_rows=50000),)
    primary_subject = "customers"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {"customers": _rows(M3_TABLES, "OCUSMA")}


class M3SupplierExtractor(TableExtractorSpec):
    extractor_id = "INFOR_M3_SUPPLIERS"
    name = "M3 Suppliers"
    module = "M3"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (ExpectedTable("CIDMAS", "Supplier master", critical=True),)
    subjects = (Subject("suppliers", "CIDMAS", max_rows=50000),)
    primary_subject = "suppliers"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {"suppliers": _rows(M3_TABLES, "CIDMAS")}


class LawsonConfigExtractor(TableExtractorSpec):
    extractor_id = "LAWSON_CONFIG"
    name = "Lawson Configuration"
    module = "LAWSON"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("COMPANY", "Lawson company master", critical=True),
        ExpectedTable("PROCESSLEVEL", "Process level hierarchy", critical=True),
        ExpectedTable("ACCOUNTINGUNIT", "Accounting unit definitions", critical=True),
        ExpectedTable("SYSTEMPARAMS", "System-wide parameters"),
    )
    subjects = (
        Subject("companies", "COMPANY"),
        Subject("processLevels", "PROCESSLEVEL"),
        Subject("accountingUnits", "ACCOUNTINGUNIT"),
        Subject("systemParams", "SYSTEMPARAMS"),
    )

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "companies": [{"COMPANY": 100, "NAME": "Lawson Health Partners", "CURRENCY_CODE": "USD"}],
            "processLevels": [{"COMPANY": 100, "PROCESS_LEVEL": "HQ", "NAME": "Headquarters"}],
            "accountingUnits": [
                {"COMPANY": 100, "ACCT_UNIT": u, "DESCRIPTION": d} for u, d in (("1000", "Administration"), ("2000", "Clinical"))
            ],
            "systemParams": [{"PARAM": "FISCAL_YEAR_START", "VALUE": "01"}],
        }


class LawsonSecurityExtractor(TableExtractorSpec):
    extractor_id = "LAWSON_SECURITY"
    name = "Lawson Security"
    module = "LAWSON"
    category = ExtractorCategory.METADATA
    expected_tables = (
        ExpectedTable("USERPROFILE", "User profile records", critical=True),
        ExpectedTable("SECURITYCLASS", "Security class definitions", critical=True),
        ExpectedTable("TOKENACCESS", "Token-based access assignments", critical=True),
        ExpectedTable("LANDMARKSEC", "Landmark security roles"),
    )
    subjects = (
        Subject("users", "USERPROFILE"),
        Subject("securityClasses", "SECURITYCLASS"),
        Subject("tokenAccess", "TOKENACCESS"),
        Subject("landmarkRoles", "LANDMARKSEC"),
    )
    primary_subject = "users"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        users = ["jdoe", "asmith", "lawson_batch"]
        return {
            "users": [{"USER_NAME": u, "STATUS": "A"} for u in users],
            "securityClasses": [{"SEC_CLASS": c} for c in ("GL_ADMIN", "AP_CLERK")],
            "tokenAccess": [{"SEC_CLASS": "AP_CLERK", "TOKEN": "AP20.1", "ACCESS": "ALL"}],
            "landmarkRoles": [],
        }
