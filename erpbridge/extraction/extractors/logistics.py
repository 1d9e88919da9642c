"""Materials management and sales & distribution extractors."""

from typing import Any, Dict, List

from ..base import ExpectedTable, ExtractorRun, Subject, TableExtractorSpec
from ...models.results import ExtractorCategory

PLANTS = [
    {"WERKS": "1000", "NAME1": "Chicago Plant", "BWKEY": "1000", "LAND1": "US"},
    {"WERKS": "2000", "NAME1": "Hamburg Plant", "BWKEY": "2000", "LAND1": "DE"},
]

MATERIALS = [
    ("RM-1001", "ROH", "Steel sheet 2mm", "KG"),
    ("RM-1002", "ROH", "Aluminium bar", "KG"),
    ("SF-2001", "HALB", "Machined housing", "EA"),
    ("FG-3001", "FERT", "Pump assembly A100", "EA"),
    ("FG-3002", "FERT", "Pump assembly A200", "EA"),
    ("TR-4001", "HAWA", "Gasket kit", "EA"),
]

CUSTOMERS = [
    ("0000100001", "Acme Industrial Supply", "Chicago", "US"),
    ("0000100002", "ACME Industrial Supply Inc", "Chicago", "US"),
    ("0000100003", "Nordwind Maschinenbau GmbH", "Hamburg", "DE"),
    ("0000100004", "Britannia Fluid Systems Ltd", "Leeds", "GB"),
    ("0000100005", "Great Lakes Pumps", "Detroit", "US"),
]


class MmConfigExtractor(TableExtractorSpec):
    extractor_id = "MM_CONFIG"
    name = "MM Configuration"
    module = "MM"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("T024E", "Purchasing organizations", critical=True),
        ExpectedTable("T024", "Purchasing groups", critical=True),
        ExpectedTable("T156", "Movement types", critical=True),
        ExpectedTable("T161", "Purchasing document types", critical=True),
        ExpectedTable("T001W", "Plants", critical=True),
        ExpectedTable("T001L", "Storage locations", critical=True),
        ExpectedTable("T023", "Material groups"),
    )
    subjects = (
        Subject("purchasingOrgs", "T024E", ("EKORG", "EKOTX", "BUKRS")),
        Subject("purchasingGroups", "T024", ("EKGRP", "EKNAM")),
        Subject("movementTypes", "T156", ("BWART", "SHKZG")),
        Subject("poDocumentTypes", "T161", ("BSTYP", "BSART")),
        Subject("plants", "T001W", ("WERKS", "NAME1", "BWKEY", "LAND1")),
        Subject("storageLocations", "T001L", ("WERKS", "LGORT", "LGOBE")),
        Subject("materialGroups", "T023", ("MATKL", "WGBEZ")),
    )

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "purchasingOrgs": [{"EKORG": "1000", "EKOTX": "Central Purchasing", "BUKRS": "1000"}],
            "purchasingGroups": [{"EKGRP": g, "EKNAM": n} for g, n in (("001", "Raw materials"), ("002", "MRO"))],
            "movementTypes": [{"BWART": b, "SHKZG": s} for b, s in (("101", "S"), ("201", "H"), ("261", "H"), ("311", "H"))],
            "poDocumentTypes": [{"BSTYP": "F", "BSART": t} for t in ("NB", "FO", "UB")],
            "plants": [dict(p) for p in PLANTS],
            "storageLocations": [
                {"WERKS": p["WERKS"], "LGORT": s, "LGOBE": d} for p in PLANTS for s, d in (("0001", "Raw"), ("0002", "Finished"))
            ],
            "materialGroups": [{"MATKL": "001", "WGBEZ": "Metals"}, {"MATKL": "002", "WGBEZ": "Assemblies"}],
        }


class MaterialExtractor(TableExtractorSpec):
    extractor_id = "MM_MATERIALS"
    name = "Material Master"
    module = "MM"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("MARA", "General material data", critical=True),
        ExpectedTable("MAKT", "Material descriptions", critical=True),
        ExpectedTable("MARC", "Plant data for material", critical=True),
        ExpectedTable("MBEW", "Material valuation", critical=True),
        ExpectedTable("MVKE", "Sales data for material"),
    )
    subjects = (
        Subject("materials", "MARA", ("MATNR", "MTART", "MEINS", "MATKL", "BRGEW", "GEWEI"), max_rows=50000),
        Subject("descriptions", "MAKT", ("MATNR", "MAKTX"), max_rows=50000, filter="SPRAS = 'E'"),
        Subject("plantData", "MARC", ("MATNR", "WERKS", "DISMM", "BESKZ"), max_rows=50000),
        Subject("valuation", "MBEW", ("MATNR", "BWKEY", "VPRSV", "STPRS", "VERPR"), max_rows=50000),
        Subject("salesData", "MVKE", ("MATNR", "VKORG", "VTWEG"), max_rows=50000),
    )
    primary_subject = "materials"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        return {
            "materials": [
                {"MATNR": m, "MTART": t, "MEINS": u, "MATKL": "001" if t == "ROH" else "002",
                 "BRGEW": round(run.rng.uniform(0.5, 40), 3), "GEWEI": "KG"}
                for m, t, _, u in MATERIALS
            ],
            "descriptions": [{"MATNR": m, "MAKTX": d} for m, _, d, _ in MATERIALS],
            "plantData": [
                {"MATNR": m, "WERKS": p["WERKS"], "DISMM": "PD", "BESKZ": "F" if t in ("ROH", "HAWA") else "E"}
                for m, t, _, _ in MATERIALS for p in PLANTS
            ],
            "valuation": [
                {"MATNR": m, "BWKEY": "1000", "VPRSV": "S" if t == "FERT" else "V",
                 "STPRS": round(run.rng.uniform(10, 900), 2), "VERPR": round(run.rng.uniform(10, 900), 2)}
                for m, t, _, _ in MATERIALS
            ],
            "salesData": [{"MATNR": m, "VKORG": "1000", "VTWEG": "10"} for m, t, _, _ in MATERIALS if t == "FERT"],
            "count": run.rng.randint(5000, 60000),
        }


class PurchasingExtractor(TableExtractorSpec):
    extractor_id = "MM_PURCHASING"
    name = "Purchasing Documents"
    module = "MM"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("EKKO", "Purchasing document headers", critical=True),
        ExpectedTable("EKPO", "Purchasing document items", critical=True),
        ExpectedTable("EINA", "Purchasing info records"),
        ExpectedTable("EINE", "Info record purchasing org data"),
    )
    subjects = (
        Subject("orders", "EKKO", ("EBELN", "BSART", "LIFNR", "EKORG", "BEDAT", "WAERS"), max_rows=10000),
        Subject("items", "EKPO", ("EBELN", "EBELP", "MATNR", "MENGE", "NETPR", "WERKS"), max_rows=10000),
        Subject("infoRecords", "EINA", ("INFNR", "MATNR", "LIFNR")),
        Subject("infoRecordPrices", "EINE", ("INFNR", "EKORG", "NETPR")),
    )
    primary_subject = "orders"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        orders = [f"45000{i:05d}" for i in range(1, 6)]
        return {
            "orders": [
                {"EBELN": o, "BSART": "NB", "LIFNR": f"00002000{i % 3 + 1:02d}", "EKORG": "1000",
                 "BEDAT": f"202402{i + 1:02d}", "WAERS": "USD"}
                for i, o in enumerate(orders)
            ],
            "items": [
                {"EBELN": o, "EBELP": "00010", "MATNR": MATERIALS[i % 2][0], "MENGE": run.rng.randint(10, 500),
                 "NETPR": round(run.rng.uniform(2, 50), 2), "WERKS": "1000"}
                for i, o in enumerate(orders)
            ],
            "infoRecords": [{"INFNR": "5300000001", "MATNR": "RM-1001", "LIFNR": "0000200001"}],
            "infoRecordPrices": [{"INFNR": "5300000001", "EKORG": "1000", "NETPR": 4.25}],
            "count": run.rng.randint(3000, 40000),
        }


class InventoryExtractor(TableExtractorSpec):
    extractor_id = "MM_INVENTORY"
    name = "Inventory"
    module = "MM"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("MARD", "Storage location stock", critical=True),
        ExpectedTable("MKPF", "Material document headers"),
        ExpectedTable("MSEG", "Material document segments"),
    )
    subjects = (
        Subject("stock", "MARD", ("MATNR", "WERKS", "LGORT", "LABST", "INSME", "SPEME"), max_rows=50000),
        Subject("documents", "MKPF", ("MBLNR", "MJAHR", "BUDAT"), max_rows=5000),
        Subject("movements", "MSEG", ("MBLNR", "MJAHR", "ZEILE", "BWART", "MATNR", "MENGE"), max_rows=5000),
    )
    primary_subject = "stock"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "stock": [
                {"MATNR": m, "WERKS": "1000", "LGORT": "0001" if t in ("ROH", "HALB") else "0002",
                 "LABST": run.rng.randint(0, 2500), "INSME": 0, "SPEME": 0}
                for m, t, _, _ in MATERIALS
            ],
            "documents": [{"MBLNR": "4900000001", "MJAHR": "2024", "BUDAT": "20240305"}],
            "movements": [{"MBLNR": "4900000001", "MJAHR": "2024", "ZEILE": "0001", "BWART": "101", "MATNR": "RM-1001", "MENGE": 200}],
        }


class SdConfigExtractor(TableExtractorSpec):
    extractor_id = "SD_CONFIG"
    name = "SD Configuration"
    module = "SD"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("TVKO", "Sales organizations", critical=True),
        ExpectedTable("TVTW", "Distribution channels", critical=True),
        ExpectedTable("TSPA", "Divisions", critical=True),
        ExpectedTable("TVAK", "Sales document types", critical=True),
        ExpectedTable("TVLK", "Delivery types", critical=True),
        ExpectedTable("TVFK", "Billing types", critical=True),
        ExpectedTable("TVAP", "Item categories"),
        ExpectedTable("T683", "Pricing procedures"),
    )
    subjects = (
        Subject("salesOrgs", "TVKO", ("VKORG", "BUKRS", "WAERS")),
        Subject("distributionChannels", "TVTW", ("VTWEG",)),
        Subject("divisions", "TSPA", ("SPART",)),
        Subject("orderTypes", "TVAK", ("AUART", "VBTYP")),
        Subject("deliveryTypes", "TVLK", ("LFART",)),
        Subject("billingTypes", "TVFK", ("FKART", "VBTYP")),
        Subject("itemCategories", "TVAP", ("PSTYV",)),
        Subject("pricingProcedures", "T683", ("KVEWE", "KAPPL", "KALSM")),
    )

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "salesOrgs": [{"VKORG": "1000", "BUKRS": "1000", "WAERS": "USD"}, {"VKORG": "2000", "BUKRS": "2000", "WAERS": "EUR"}],
            "distributionChannels": [{"VTWEG": v} for v in ("10", "20")],
            "divisions": [{"SPART": "00"}],
            "orderTypes": [{"AUART": a, "VBTYP": "C"} for a in ("OR", "RO", "ZOR")],
            "deliveryTypes": [{"LFART": "LF"}],
            "billingTypes": [{"FKART": "F2", "VBTYP": "M"}, {"FKART": "G2", "VBTYP": "O"}],
            "itemCategories": [{"PSTYV": p} for p in ("TAN", "TANN")],
            "pricingProcedures": [{"KVEWE": "A", "KAPPL": "V", "KALSM": "RVAA01"}],
        }


class CustomerExtractor(TableExtractorSpec):
    extractor_id = "SD_CUSTOMERS"
    name = "Customer Master"
    module = "SD"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("KNA1", "General customer data", critical=True),
        ExpectedTable("KNB1", "Customer company code data", critical=True),
        ExpectedTable("KNVV", "Customer sales data"),
        ExpectedTable("KNVP", "Customer partner functions"),
    )
    subjects = (
        Subject("customers", "KNA1", ("KUNNR", "NAME1", "ORT01", "LAND1", "STCD1", "KTOKD"), max_rows=50000),
        Subject("companyCodeData", "KNB1", ("KUNNR", "BUKRS", "AKONT", "ZTERM"), max_rows=50000),
        Subject("salesData", "KNVV", ("KUNNR", "VKORG", "VTWEG", "SPART", "KDGRP"), max_rows=50000),
        Subject("partners", "KNVP", ("KUNNR", "VKORG", "PARVW", "KUNN2"), max_rows=50000),
    )
    primary_subject = "customers"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        return {
            "customers": [
                {"KUNNR": k, "NAME1": n, "ORT01": c, "LAND1": l, "STCD1": "", "KTOKD": "0001"} for k, n, c, l in CUSTOMERS
            ],
            "companyCodeData": [{"KUNNR": k, "BUKRS": "1000", "AKONT": "0000140000", "ZTERM": "0001"} for k, *_ in CUSTOMERS],
            "salesData": [{"KUNNR": k, "VKORG": "1000", "VTWEG": "10", "SPART": "00", "KDGRP": "01"} for k, *_ in CUSTOMERS],
            "partners": [{"KUNNR": k, "VKORG": "1000", "PARVW": "WE", "KUNN2": k} for k, *_ in CUSTOMERS],
            "count": run.rng.randint(2000, 25000),
        }


class SalesExtractor(TableExtractorSpec):
    extractor_id = "SD_SALES"
    name = "Sales Documents"
    module = "SD"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("VBAK", "Sales document headers", critical=True),
        ExpectedTable("VBAP", "Sales document items", critical=True),
        ExpectedTable("LIKP", "Delivery headers", critical=True),
        ExpectedTable("LIPS", "Delivery items", critical=True),
        ExpectedTable("VBRK", "Billing headers", critical=True),
        ExpectedTable("VBRP", "Billing items", critical=True),
    )
    subjects = (
        Subject("orders", "VBAK", ("VBELN", "AUART", "VKORG", "KUNNR", "ERDAT", "NETWR", "WAERK"), max_rows=10000),
        Subject("orderItems", "VBAP", ("VBELN", "POSNR", "MATNR", "KWMENG", "NETWR"), max_rows=10000),
        Subject("deliveries", "LIKP", ("VBELN", "LFART", "WADAT"), max_rows=10000),
        Subject("deliveryItems", "LIPS", ("VBELN", "POSNR", "VGBEL", "LFIMG"), max_rows=10000),
        Subject("invoices", "VBRK", ("VBELN", "FKART", "FKDAT", "NETWR"), max_rows=10000),
        Subject("invoiceItems", "VBRP", ("VBELN", "POSNR", "AUBEL", "NETWR"), max_rows=10000),
    )
    primary_subject = "orders"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        orders = []
        items = []
        for i in range(5):
            vbeln = f"{10000 + i:010d}"
            value = round(run.rng.uniform(500, 20000), 2)
            orders.append({"VBELN": vbeln, "AUART": "OR", "VKORG": "1000", "KUNNR": CUSTOMERS[i][0],
                           "ERDAT": f"202404{i + 1:02d}", "NETWR": value, "WAERK": "USD"})
            items.append({"VBELN": vbeln, "POSNR": "000010", "MATNR": "FG-3001", "KWMENG": run.rng.randint(1, 20), "NETWR": value})
        return {
            "orders": orders,
            "orderItems": items,
            "deliveries": [{"VBELN": "0080000001", "LFART": "LF", "WADAT": "20240410"}],
            "deliveryItems": [{"VBELN": "0080000001", "POSNR": "000010", "VGBEL": orders[0]["VBELN"], "LFIMG": 2}],
            "invoices": [{"VBELN": "0090000001", "FKART": "F2", "FKDAT": "20240412", "NETWR": orders[0]["NETWR"]}],
            "invoiceItems": [{"VBELN": "0090000001", "POSNR": "000010", "AUBEL": orders[0]["VBELN"], "NETWR": orders[0]["NETWR"]}],
            "count": run.rng.randint(10000, 90000),
        }


class PricingExtractor(TableExtractorSpec):
    extractor_id = "SD_PRICING"
    name = "Pricing Conditions"
    module = "SD"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("T685", "Condition types", critical=True),
        ExpectedTable("KONH", "Condition headers"),
        ExpectedTable("KONP", "Condition items", critical=True),
    )
    subjects = (
        Subject("conditionTypes", "T685", ("KVEWE", "KAPPL", "KSCHL")),
        Subject("conditionHeaders", "KONH", ("KNUMH", "KSCHL", "DATAB", "DATBI"), max_rows=20000),
        Subject("conditionItems", "KONP", ("KNUMH", "KOPOS", "KBETR", "KONWA"), max_rows=20000),
    )
    primary_subject = "conditionItems"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        records = [f"{i:010d}" for i in range(1, 4)]
        return {
            "conditionTypes": [{"KVEWE": "A", "KAPPL": "V", "KSCHL": k} for k in ("PR00", "K004", "MWST")],
            "conditionHeaders": [{"KNUMH": r, "KSCHL": "PR00", "DATAB": "20240101", "DATBI": "99991231"} for r in records],
            "conditionItems": [
                {"KNUMH": r, "KOPOS": "01", "KBETR": round(run.rng.uniform(50, 1500), 2), "KONWA": "USD"} for r in records
            ],
        }
