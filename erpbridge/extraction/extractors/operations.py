"""Production, plant maintenance, warehouse, transport and trade extractors."""

from typing import Any, Dict, List

from ..base import ExpectedTable, ExtractorRun, Subject, TableExtractorSpec
from ...models.results import ExtractorCategory

WORK_CENTERS = [("ASSY01", "Assembly line 1"), ("MACH01", "CNC machining"), ("PAINT1", "Paint shop")]


class ProductionOrderExtractor(TableExtractorSpec):
    extractor_id = "PP_PRODUCTION"
    name = "Production Orders"
    module = "PP"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("AFKO", "Order header PP", critical=True),
        ExpectedTable("AFPO", "Order items"),
        ExpectedTable("RESB", "Reservations"),
    )
    subjects = (
        Subject("orders", "AFKO", ("AUFNR", "PLNBEZ", "GAMNG", "GSTRP", "GLTRP"), max_rows=10000),
        Subject("orderItems", "AFPO", ("AUFNR", "POSNR", "MATNR", "PSMNG"), max_rows=10000),
        Subject("reservations", "RESB", ("RSNUM", "RSPOS", "MATNR", "BDMNG"), max_rows=10000),
    )
    primary_subject = "orders"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        orders = [f"{1000000 + i:012d}" for i in range(3)]
        return {
            "orders": [
                {"AUFNR": o, "PLNBEZ": "FG-3001", "GAMNG": run.rng.randint(10, 200), "GSTRP": "20240501", "GLTRP": "20240510"}
                for o in orders
            ],
            "orderItems": [{"AUFNR": o, "POSNR": "0001", "MATNR": "FG-3001", "PSMNG": 50} for o in orders],
            "reservations": [{"RSNUM": "0000012345", "RSPOS": "0001", "MATNR": "SF-2001", "BDMNG": 50}],
            "count": run.rng.randint(500, 8000),
        }


class BomExtractor(TableExtractorSpec):
    extractor_id = "PP_BOM"
    name = "Bills of Material"
    module = "PP"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("MAST", "Material to BOM link", critical=True),
        ExpectedTable("STKO", "BOM headers", critical=True),
        ExpectedTable("STPO", "BOM items", critical=True),
    )
    subjects = (
        Subject("links", "MAST", ("MATNR", "WERKS", "STLAN", "STLNR", "STLAL")),
        Subject("headers", "STKO", ("STLNR", "STLAL", "BMENG", "STLST")),
        Subject("items", "STPO", ("STLNR", "STLKN", "IDNRK", "MENGE", "MEINS")),
    )
    primary_subject = "links"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "links": [
                {"MATNR": "FG-3001", "WERKS": "1000", "STLAN": "1", "STLNR": "00000001", "STLAL": "01"},
                {"MATNR": "SF-2001", "WERKS": "1000", "STLAN": "1", "STLNR": "00000002", "STLAL": "01"},
            ],
            "headers": [
                {"STLNR": "00000001", "STLAL": "01", "BMENG": 1, "STLST": "01"},
                {"STLNR": "00000002", "STLAL": "01", "BMENG": 1, "STLST": "01"},
            ],
            "items": [
                {"STLNR": "00000001", "STLKN": "00000001", "IDNRK": "SF-2001", "MENGE": 1, "MEINS": "EA"},
                {"STLNR": "00000001", "STLKN": "00000002", "IDNRK": "TR-4001", "MENGE": 2, "MEINS": "EA"},
                {"STLNR": "00000002", "STLKN": "00000001", "IDNRK": "RM-1002", "MENGE": 3.5, "MEINS": "KG"},
            ],
        }


class RoutingExtractor(TableExtractorSpec):
    extractor_id = "PP_ROUTING"
    name = "Routings"
    module = "PP"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("PLKO", "Task list headers", critical=True),
        ExpectedTable("PLPO", "Task list operations", critical=True),
        ExpectedTable("MAPL", "Material to task list link"),
    )
    subjects = (
        Subject("headers", "PLKO", ("PLNTY", "PLNNR", "PLNAL", "WERKS", "VERWE")),
        Subject("operations", "PLPO", ("PLNTY", "PLNNR", "VORNR", "ARBID", "LTXA1")),
        Subject("materialLinks", "MAPL", ("MATNR", "WERKS", "PLNTY", "PLNNR")),
    )
    primary_subject = "headers"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "headers": [{"PLNTY": "N", "PLNNR": "50000001", "PLNAL": "01", "WERKS": "1000", "VERWE": "1"}],
            "operations": [
                {"PLNTY": "N", "PLNNR": "50000001", "VORNR": f"{(i + 1) * 10:04d}", "ARBID": wc, "LTXA1": text}
                for i, (wc, text) in enumerate(WORK_CENTERS)
            ],
            "materialLinks": [{"MATNR": "FG-3001", "WERKS": "1000", "PLNTY": "N", "PLNNR": "50000001"}],
        }


class EquipmentExtractor(TableExtractorSpec):
    extractor_id = "PM_EQUIPMENT"
    name = "Equipment and Functional Locations"
    module = "PM"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("EQUI", "Equipment master", critical=True),
        ExpectedTable("EQKT", "Equipment texts", critical=True),
        ExpectedTable("IFLOT", "Functional locations", critical=True),
        ExpectedTable("IFLOTX", "Functional location texts"),
    )
    subjects = (
        Subject("equipment", "EQUI", ("EQUNR", "EQTYP", "HERST", "SERGE", "INBDT")),
        Subject("texts", "EQKT", ("EQUNR", "EQKTX"), filter="SPRAS = 'E'"),
        Subject("functionalLocations", "IFLOT", ("TPLNR", "FLTYP", "IWERK")),
        Subject("locationTexts", "IFLOTX", ("TPLNR", "PLTXT")),
    )
    primary_subject = "equipment"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        items = [("10000001", "CNC lathe"), ("10000002", "Paint robot"), ("10000003", "Air compressor")]
        return {
            "equipment": [
                {"EQUNR": e, "EQTYP": "M", "HERST": "VENDOR", "SERGE": f"SN-{run.rng.randint(10000, 99999)}", "INBDT": "20190301"}
                for e, _ in items
            ],
            "texts": [{"EQUNR": e, "EQKTX": t} for e, t in items],
            "functionalLocations": [{"TPLNR": "1000-PROD-01", "FLTYP": "M", "IWERK": "1000"}],
            "locationTexts": [{"TPLNR": "1000-PROD-01", "PLTXT": "Production hall 1"}],
            "count": run.rng.randint(300, 5000),
        }


class MaintenanceExtractor(TableExtractorSpec):
    extractor_id = "PM_MAINTENANCE"
    name = "Maintenance Plans and Notifications"
    module = "PM"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("MPLA", "Maintenance plans", critical=True),
        ExpectedTable("MPOS", "Maintenance items", critical=True),
        ExpectedTable("QMIH", "Maintenance notifications", critical=True),
    )
    subjects = (
        Subject("plans", "MPLA", ("WARPL", "WPTXT", "STRAT")),
        Subject("items", "MPOS", ("WAPOS", "WARPL", "EQUNR")),
        Subject("notifications", "QMIH", ("QMNUM", "EQUNR", "AUSVN", "MSAUS"), max_rows=5000),
    )
    primary_subject = "plans"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "plans": [{"WARPL": "000000000001", "WPTXT": "Lathe quarterly service", "STRAT": "A"}],
            "items": [{"WAPOS": "000000000001", "WARPL": "000000000001", "EQUNR": "10000001"}],
            "notifications": [
                {"QMNUM": f"{10000000 + i:012d}", "EQUNR": "10000002", "AUSVN": f"2024060{i + 1}", "MSAUS": "X" if i == 0 else ""}
                for i in range(3)
            ],
        }


class WorkCenterExtractor(TableExtractorSpec):
    extractor_id = "PM_WORK_CENTERS"
    name = "Work Centers"
    module = "PM"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("CRHD", "Work center headers", critical=True),
        ExpectedTable("CRHS", "Work center hierarchy"),
        ExpectedTable("T024I", "Maintenance planner groups"),
    )
    subjects = (
        Subject("workCenters", "CRHD", ("OBJID", "ARBPL", "WERKS", "VERWE")),
        Subject("hierarchy", "CRHS", ("OBJID_HY", "OBJID_UP")),
        Subject("plannerGroups", "T024I", ("IWERK", "INGRP", "INNAM")),
    )
    primary_subject = "workCenters"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "workCenters": [
                {"OBJID": f"{i + 1:08d}", "ARBPL": wc, "WERKS": "1000", "VERWE": "0001"} for i, (wc, _) in enumerate(WORK_CENTERS)
            ],
            "hierarchy": [],
            "plannerGroups": [{"IWERK": "1000", "INGRP": "100", "INNAM": "Mechanical"}],
        }


class WarehouseExtractor(TableExtractorSpec):
    extractor_id = "EWM_WAREHOUSE"
    name = "Warehouse Management"
    module = "EWM"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("T300", "Warehouse numbers", critical=True),
        ExpectedTable("T301", "Storage types", critical=True),
        ExpectedTable("LQUA", "Quants", critical=True),
        ExpectedTable("LTBK", "Transfer requirement headers"),
    )
    subjects = (
        Subject("warehouses", "T300", ("LGNUM",)),
        Subject("storageTypes", "T301", ("LGNUM", "LGTYP")),
        Subject("quants", "LQUA", ("LGNUM", "LQNUM", "MATNR", "LGPLA", "VERME"), max_rows=20000),
        Subject("transferRequirements", "LTBK", ("LGNUM", "TBNUM", "BWLVS"), max_rows=5000),
    )
    primary_subject = "quants"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "warehouses": [{"LGNUM": "100"}],
            "storageTypes": [{"LGNUM": "100", "LGTYP": t} for t in ("001", "002", "902")],
            "quants": [
                {"LGNUM": "100", "LQNUM": f"{i + 1:010d}", "MATNR": m, "LGPLA": f"01-0{i + 1}-A", "VERME": run.rng.randint(1, 400)}
                for i, m in enumerate(("FG-3001", "FG-3002", "TR-4001"))
            ],
            "transferRequirements": [],
        }


class TransportExtractor(TableExtractorSpec):
    extractor_id = "TM_TRANSPORT"
    name = "Shipments"
    module = "TM"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("VTTK", "Shipment headers", critical=True),
        ExpectedTable("VTTP", "Shipment items"),
    )
    subjects = (
        Subject("shipments", "VTTK", ("TKNUM", "SHTYP", "TDLNR", "DTABF"), max_rows=5000),
        Subject("items", "VTTP", ("TKNUM", "TPNUM", "VBELN"), max_rows=5000),
    )
    primary_subject = "shipments"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "shipments": [{"TKNUM": "0000010001", "SHTYP": "0001", "TDLNR": "0000200003", "DTABF": "20240412"}],
            "items": [{"TKNUM": "0000010001", "TPNUM": "0001", "VBELN": "0080000001"}],
        }


class TradeComplianceExtractor(TableExtractorSpec):
    extractor_id = "GTS_COMPLIANCE"
    name = "Foreign Trade Data"
    module = "GTS"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("T604", "Commodity codes", critical=True),
        ExpectedTable("EIPO", "Foreign trade item data"),
    )
    subjects = (
        Subject("commodityCodes", "T604", ("LAND1", "STAWN")),
        Subject("foreignTradeItems", "EIPO", ("EXNUM", "EXPOS", "STAWN", "HERKL"), max_rows=5000),
    )
    primary_subject = "commodityCodes"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "commodityCodes": [{"LAND1": "US", "STAWN": "84137000"}, {"LAND1": "DE", "STAWN": "84137030"}],
            "foreignTradeItems": [{"EXNUM": "0000000001", "EXPOS": "000001", "STAWN": "84137000", "HERKL": "US"}],
        }
