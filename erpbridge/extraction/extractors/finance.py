"""Financial accounting and controlling extractors."""

from typing import Any, Dict, List

from ..base import ExpectedTable, ExtractorRun, Subject, TableExtractorSpec
from ...models.results import ExtractorCategory

COMPANY_CODES = [
    {"BUKRS": "1000", "BUTXT": "US Operations", "LAND1": "US", "WAERS": "USD", "KTOPL": "INT", "PERIV": "K4"},
    {"BUKRS": "2000", "BUTXT": "German Operations", "LAND1": "DE", "WAERS": "EUR", "KTOPL": "INT", "PERIV": "K4"},
    {"BUKRS": "3000", "BUTXT": "UK Operations", "LAND1": "GB", "WAERS": "GBP", "KTOPL": "INT", "PERIV": "K4"},
]


class FiConfigExtractor(TableExtractorSpec):
    extractor_id = "FI_CONFIG"
    name = "FI Configuration"
    module = "FI"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("T001", "Company codes", critical=True),
        ExpectedTable("T003", "Document types", critical=True),
        ExpectedTable("T004", "Charts of accounts", critical=True),
        ExpectedTable("TBSL", "Posting keys", critical=True),
        ExpectedTable("T030", "Automatic account determination", critical=True),
        ExpectedTable("T007A", "Tax keys", critical=True),
        ExpectedTable("T005", "Countries", critical=True),
        ExpectedTable("T001B", "Posting period variants"),
        ExpectedTable("T042", "Payment program settings"),
        ExpectedTable("T014", "Credit control areas"),
        ExpectedTable("FINSC_LEDGER", "Ledgers"),
    )
    subjects = (
        Subject("companyCodes", "T001", ("BUKRS", "BUTXT", "LAND1", "WAERS", "KTOPL", "PERIV")),
        Subject("documentTypes", "T003", ("BLART", "NUMKR", "KOARS")),
        Subject("chartsOfAccounts", "T004", ("KTOPL", "DSPRA", "SAKLN")),
        Subject("postingKeys", "TBSL", ("BSCHL", "SHKZG", "KOART")),
        Subject("accountDetermination", "T030", ("KTOPL", "KTOSL", "KONTS")),
        Subject("taxKeys", "T007A", ("KALSM", "MWSKZ", "MWART")),
        Subject("countries", "T005", ("LAND1", "WAERS", "KALSM")),
        Subject("postingPeriods", "T001B", ("BUKRS", "MKOAR", "FRYE1", "FRPE1", "TOYE1", "TOPE1")),
        Subject("paymentProgram", "T042", ("BUKRS", "ABSBU")),
        Subject("creditControlAreas", "T014", ("KKBER", "WAERS")),
        Subject("ledgers", "FINSC_LEDGER", ("RLDNR", "XLEADING")),
    )

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "companyCodes": [dict(c) for c in COMPANY_CODES],
            "documentTypes": [
                {"BLART": b, "NUMKR": f"{i:02d}", "KOARS": k}
                for i, (b, k) in enumerate([("SA", "ADKMS"), ("KR", "AKS"), ("DR", "ADS"), ("AA", "AS")], 1)
            ],
            "chartsOfAccounts": [{"KTOPL": "INT", "DSPRA": "E", "SAKLN": "10"}],
            "postingKeys": [
                {"BSCHL": "40", "SHKZG": "S", "KOART": "S"},
                {"BSCHL": "50", "SHKZG": "H", "KOART": "S"},
                {"BSCHL": "31", "SHKZG": "H", "KOART": "K"},
                {"BSCHL": "01", "SHKZG": "S", "KOART": "D"},
            ],
            "accountDetermination": [
                {"KTOPL": "INT", "KTOSL": "BSX", "KONTS": "0000300000"},
                {"KTOPL": "INT", "KTOSL": "WRX", "KONTS": "0000191100"},
            ],
            "taxKeys": [{"KALSM": "TAXUS", "MWSKZ": "I1", "MWART": "V"}, {"KALSM": "TAXD", "MWSKZ": "V1", "MWART": "V"}],
            "countries": [{"LAND1": c["LAND1"], "WAERS": c["WAERS"], "KALSM": ""} for c in COMPANY_CODES],
            "postingPeriods": [
                {"BUKRS": c["BUKRS"], "MKOAR": "+", "FRYE1": "2024", "FRPE1": "001", "TOYE1": "2024", "TOPE1": "012"}
                for c in COMPANY_CODES
            ],
            "paymentProgram": [{"BUKRS": c["BUKRS"], "ABSBU": c["BUKRS"]} for c in COMPANY_CODES],
            "creditControlAreas": [{"KKBER": "1000", "WAERS": "USD"}],
            "ledgers": [{"RLDNR": "0L", "XLEADING": "X"}, {"RLDNR": "2L", "XLEADING": ""}],
        }


class CompanyCodeExtractor(TableExtractorSpec):
    extractor_id = "FI_COMPANY_CODES"
    name = "Company Codes"
    module = "FI"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("T001", "Company codes", critical=True),
        ExpectedTable("T880", "Global company data"),
    )
    subjects = (
        Subject("companyCodes", "T001", ("BUKRS", "BUTXT", "LAND1", "WAERS", "KTOPL", "PERIV")),
        Subject("companies", "T880", ("RCOMP", "NAME1", "CURR")),
    )
    primary_subject = "companyCodes"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "companyCodes": [dict(c) for c in COMPANY_CODES],
            "companies": [{"RCOMP": c["BUKRS"], "NAME1": c["BUTXT"], "CURR": c["WAERS"]} for c in COMPANY_CODES],
        }


class GlAccountExtractor(TableExtractorSpec):
    extractor_id = "FI_GL_ACCOUNTS"
    name = "G/L Accounts"
    module = "FI"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("SKA1", "G/L account master (chart of accounts)", critical=True),
        ExpectedTable("SKAT", "G/L account texts", critical=True),
        ExpectedTable("SKB1", "G/L account master (company code)", critical=True),
    )
    subjects = (
        Subject("accounts", "SKA1", ("KTOPL", "SAKNR", "XBILK", "KTOKS"), max_rows=20000),
        Subject("texts", "SKAT", ("KTOPL", "SAKNR", "TXT50"), max_rows=20000, filter="SPRAS = 'E'"),
        Subject("companyCodeData", "SKB1", ("BUKRS", "SAKNR", "WAERS", "XOPVW", "MWSKZ"), max_rows=50000),
    )
    primary_subject = "accounts"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        accounts = [
            ("0000100000", "Petty Cash", "X"),
            ("0000113100", "Bank Account", "X"),
            ("0000140000", "Trade Receivables", "X"),
            ("0000160000", "Trade Payables", "X"),
            ("0000300000", "Raw Materials Inventory", "X"),
            ("0000400000", "Material Consumption", ""),
            ("0000800000", "Sales Revenue", ""),
            ("0000890000", "Cost of Goods Sold", ""),
        ]
        return {
            "accounts": [
                {"KTOPL": "INT", "SAKNR": n, "XBILK": bs, "KTOKS": "SAKO"} for n, _, bs in accounts
            ],
            "texts": [{"KTOPL": "INT", "SAKNR": n, "TXT50": t} for n, t, _ in accounts],
            "companyCodeData": [
                {"BUKRS": c["BUKRS"], "SAKNR": n, "WAERS": c["WAERS"], "XOPVW": "X" if n in ("0000140000", "0000160000") else "", "MWSKZ": ""}
                for c in COMPANY_CODES for n, _, _ in accounts
            ],
        }


class FiTransactionExtractor(TableExtractorSpec):
    extractor_id = "FI_TRANSACTIONS"
    name = "FI Documents"
    module = "FI"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("BKPF", "Accounting document headers", critical=True),
        ExpectedTable("BSEG", "Accounting document segments", critical=True),
        ExpectedTable("BSID", "Open customer items", critical=True),
        ExpectedTable("BSIK", "Open vendor items", critical=True),
        ExpectedTable("ACDOCA", "Universal journal entries", critical=True),
        ExpectedTable("BSAD", "Cleared customer items"),
        ExpectedTable("BSAK", "Cleared vendor items"),
    )
    subjects = (
        Subject("headers", "BKPF", ("BUKRS", "BELNR", "GJAHR", "BLART", "BUDAT", "WAERS"), max_rows=10000),
        Subject("lineItems", "BSEG", ("BUKRS", "BELNR", "GJAHR", "BUZEI", "BSCHL", "HKONT", "DMBTR"), max_rows=10000),
        Subject("openReceivables", "BSID", ("BUKRS", "KUNNR", "BELNR", "DMBTR"), max_rows=10000),
        Subject("openPayables", "BSIK", ("BUKRS", "LIFNR", "BELNR", "DMBTR"), max_rows=10000),
        Subject("journalEntries", "ACDOCA", ("RLDNR", "RBUKRS", "GJAHR", "BELNR", "RACCT", "HSL"), max_rows=10000),
        Subject("clearedReceivables", "BSAD", ("BUKRS", "KUNNR", "BELNR"), max_rows=1000),
        Subject("clearedPayables", "BSAK", ("BUKRS", "LIFNR", "BELNR"), max_rows=1000),
    )
    primary_subject = "headers"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        headers = []
        items = []
        for i in range(6):
            company = COMPANY_CODES[i % len(COMPANY_CODES)]
            belnr = f"{100000000 + i:010d}"
            amount = round(run.rng.uniform(100, 50000), 2)
            headers.append({
                "BUKRS": company["BUKRS"], "BELNR": belnr, "GJAHR": "2024",
                "BLART": "SA", "BUDAT": f"202403{i + 10:02d}", "WAERS": company["WAERS"],
            })
            items.append({"BUKRS": company["BUKRS"], "BELNR": belnr, "GJAHR": "2024", "BUZEI": "001",
                          "BSCHL": "40", "HKONT": "0000400000", "DMBTR": amount})
            items.append({"BUKRS": company["BUKRS"], "BELNR": belnr, "GJAHR": "2024", "BUZEI": "002",
                          "BSCHL": "50", "HKONT": "0000113100", "DMBTR": amount})
        return {
            "headers": headers,
            "lineItems": items,
            "openReceivables": [{"BUKRS": "1000", "KUNNR": "0000100001", "BELNR": "0090000001", "DMBTR": 1250.0}],
            "openPayables": [{"BUKRS": "1000", "LIFNR": "0000200001", "BELNR": "5100000001", "DMBTR": 980.5}],
            "journalEntries": [
                {"RLDNR": "0L", "RBUKRS": i["BUKRS"], "GJAHR": "2024", "BELNR": i["BELNR"], "RACCT": i["HKONT"], "HSL": i["DMBTR"]}
                for i in items
            ],
            "clearedReceivables": [],
            "clearedPayables": [],
            "count": run.rng.randint(25000, 150000),
        }


class CoConfigExtractor(TableExtractorSpec):
    extractor_id = "CO_CONFIG"
    name = "CO Configuration"
    module = "CO"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("TKA01", "Controlling areas", critical=True),
        ExpectedTable("TKA02", "Controlling area assignment", critical=True),
        ExpectedTable("T811", "Allocation cycles", critical=True),
        ExpectedTable("SETHEADER", "Set headers"),
        ExpectedTable("SETLEAF", "Set values"),
        ExpectedTable("TKA50", "Activity types"),
    )
    subjects = (
        Subject("controllingAreas", "TKA01", ("KOKRS", "BEZEI", "WAERS", "KTOPL")),
        Subject("assignments", "TKA02", ("BUKRS", "KOKRS")),
        Subject("allocationCycles", "T811", ("TAB", "CYCLE", "SDATE")),
        Subject("setHeaders", "SETHEADER", ("SETCLASS", "SETNAME")),
        Subject("setValues", "SETLEAF", ("SETCLASS", "SETNAME", "VALFROM", "VALTO")),
        Subject("activityTypes", "TKA50", ("KOKRS", "LSTAR")),
    )

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "controllingAreas": [{"KOKRS": "1000", "BEZEI": "Global CO Area", "WAERS": "USD", "KTOPL": "INT"}],
            "assignments": [{"BUKRS": c["BUKRS"], "KOKRS": "1000"} for c in COMPANY_CODES],
            "allocationCycles": [{"TAB": "T811C", "CYCLE": "OVHD01", "SDATE": "20240101"}],
            "setHeaders": [{"SETCLASS": "0101", "SETNAME": "CC_HIER"}],
            "setValues": [{"SETCLASS": "0101", "SETNAME": "CC_HIER", "VALFROM": "1000", "VALTO": "1999"}],
            "activityTypes": [{"KOKRS": "1000", "LSTAR": a} for a in ("MACH", "LABOR", "SETUP")],
        }


class CostCenterExtractor(TableExtractorSpec):
    extractor_id = "CO_COST_CENTERS"
    name = "Cost Centers"
    module = "CO"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("CSKS", "Cost center master", critical=True),
        ExpectedTable("CSKT", "Cost center texts"),
        ExpectedTable("CSKA", "Cost elements", critical=True),
    )
    subjects = (
        Subject("costCenters", "CSKS", ("KOKRS", "KOSTL", "DATBI", "BUKRS", "KOSAR", "VERAK")),
        Subject("texts", "CSKT", ("KOKRS", "KOSTL", "KTEXT"), filter="SPRAS = 'E'"),
        Subject("costElements", "CSKA", ("KTOPL", "KSTAR")),
    )
    primary_subject = "costCenters"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        names = ["Administration", "Finance", "Sales", "Production", "Maintenance", "IT Services"]
        centers = [f"{1000 + i * 10:010d}" for i in range(len(names))]
        return {
            "costCenters": [
                {"KOKRS": "1000", "KOSTL": k, "DATBI": "99991231", "BUKRS": "1000", "KOSAR": "F", "VERAK": f"MANAGER{i}"}
                for i, k in enumerate(centers)
            ],
            "texts": [{"KOKRS": "1000", "KOSTL": k, "KTEXT": n} for k, n in zip(centers, names)],
            "costElements": [{"KTOPL": "INT", "KSTAR": k} for k in ("0000400000", "0000890000", "0000943000")],
        }


class ProfitCenterExtractor(TableExtractorSpec):
    extractor_id = "CO_PROFIT_CENTERS"
    name = "Profit Centers"
    module = "CO"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("CEPC", "Profit center master", critical=True),
        ExpectedTable("CEPCT", "Profit center texts"),
    )
    subjects = (
        Subject("profitCenters", "CEPC", ("KOKRS", "PRCTR", "DATBI", "VERAK", "SEGMENT")),
        Subject("texts", "CEPCT", ("KOKRS", "PRCTR", "KTEXT"), filter="SPRAS = 'E'"),
    )
    primary_subject = "profitCenters"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        names = ["North America", "Europe", "Spare Parts", "Services"]
        centers = [f"PC{1000 + i:08d}" for i in range(len(names))]
        return {
            "profitCenters": [
                {"KOKRS": "1000", "PRCTR": p, "DATBI": "99991231", "VERAK": "CONTROLLER", "SEGMENT": "SEG1"} for p in centers
            ],
            "texts": [{"KOKRS": "1000", "PRCTR": p, "KTEXT": n} for p, n in zip(centers, names)],
        }


class InternalOrderExtractor(TableExtractorSpec):
    extractor_id = "CO_INTERNAL_ORDERS"
    name = "Internal Orders"
    module = "CO"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("AUFK", "Order master", critical=True),
        ExpectedTable("COBK", "CO document headers", critical=True),
        ExpectedTable("COEP", "CO line items", critical=True),
        ExpectedTable("COSP", "External cost totals", critical=True),
        ExpectedTable("COSS", "Internal cost totals", critical=True),
    )
    subjects = (
        Subject("orders", "AUFK", ("AUFNR", "AUART", "KOKRS", "BUKRS", "KTEXT", "PHAS1"), filter="AUTYP = '01'"),
        Subject("documents", "COBK", ("KOKRS", "BELNR", "GJAHR", "VRGNG"), max_rows=5000),
        Subject("lineItems", "COEP", ("KOKRS", "BELNR", "BUZEI", "OBJNR", "WKGBTR"), max_rows=5000),
        Subject("externalTotals", "COSP", ("OBJNR", "GJAHR", "KSTAR", "WKG001"), max_rows=5000),
        Subject("internalTotals", "COSS", ("OBJNR", "GJAHR", "KSTAR", "WKG001"), max_rows=5000),
    )
    primary_subject = "orders"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        orders = [f"{400000 + i:012d}" for i in range(4)]
        return {
            "orders": [
                {"AUFNR": o, "AUART": "0100", "KOKRS": "1000", "BUKRS": "1000", "KTEXT": f"Marketing campaign {i + 1}", "PHAS1": "X"}
                for i, o in enumerate(orders)
            ],
            "documents": [{"KOKRS": "1000", "BELNR": "0200000001", "GJAHR": "2024", "VRGNG": "COIN"}],
            "lineItems": [
                {"KOKRS": "1000", "BELNR": "0200000001", "BUZEI": "001", "OBJNR": f"OR{orders[0]}",
                 "WKGBTR": round(run.rng.uniform(500, 5000), 2)}
            ],
            "externalTotals": [{"OBJNR": f"OR{o}", "GJAHR": "2024", "KSTAR": "0000400000", "WKG001": 0.0} for o in orders],
            "internalTotals": [],
            "count": run.rng.randint(200, 2000),
        }
