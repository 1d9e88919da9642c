"""SAP ECC warehouse, transportation and global trade objects."""

from typing import Any, Dict, List

from ..field_mapping import FieldMapping
from ..quality import QualityChecks, RangeCheck
from .common import ECCObjectSpec

WAREHOUSE_PLANTS = {"WH01": ("1000", "0001"), "WH02": ("2000", "0002")}
STORAGE_TYPES = {
    "001": "High Rack",
    "002": "Bulk Storage",
    "003": "Fixed Bin",
    "010": "Goods Receipt",
    "020": "Goods Issue",
    "100": "Interim Storage",
}


class WarehouseStructure(ECCObjectSpec):
    """WM storage bins with their quants, mapped onto EWM warehouse structures."""

    object_id = "WAREHOUSE_STRUCTURE"
    name = "Warehouse Structure"
    source_table = "LAGP"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Bin (LAGP)
            FieldMapping("LGNUM", "WarehouseNumber"),
            FieldMapping("LNUMT", "WarehouseDescription"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("LGORT", "StorageLocation"),
            FieldMapping("LGTYP", "StorageType"),
            FieldMapping("LTYPT", "StorageTypeDescription"),
            FieldMapping("LGPLA", "StorageBin"),
            FieldMapping("LGBER", "StorageSection"),
            FieldMapping("KOBER", "PickingArea"),
            FieldMapping("LPTYP", "StorageBinType"),
            FieldMapping("LGEWI", "MaximumWeight", convert="toDecimal"),
            FieldMapping("MGEWI", "CurrentWeight", convert="toDecimal"),
            FieldMapping("GEWEI", "WeightUnit"),
            FieldMapping("ANZLE", "MaxStorageUnits", convert="toInteger"),
            # Quant (LQUA)
            FieldMapping("LQNUM", "QuantNumber"),
            FieldMapping("MATNR", "Product", convert="padLeft40"),
            FieldMapping("CHARG", "Batch"),
            FieldMapping("BESTQ", "StockCategory"),
            FieldMapping("GESME", "TotalStockQuantity", convert="toDecimal"),
            FieldMapping("VERME", "AvailableQuantity", convert="toDecimal"),
            FieldMapping("MEINS", "BaseUnitOfMeasure"),
            FieldMapping("WDATU", "GoodsReceiptDate", convert="toDate"),
            FieldMapping("SKZUA", "BlockIndicator", convert="toBoolean"),
            # EWM target structure
            FieldMapping("EWM_WH", "EWMWarehouse"),
            FieldMapping("EWM_ST", "EWMStorageType"),
            FieldMapping("EWM_BIN", "EWMStorageBin"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["WarehouseNumber", "StorageType", "StorageBin"],
            exact_duplicate=["WarehouseNumber", "StorageType", "StorageBin"],
        )

    def extract_mock(self, rng):
        records = []
        for warehouse, (plant, location) in WAREHOUSE_PLANTS.items():
            for storage_type, description in STORAGE_TYPES.items():
                main_storage = storage_type <= "003"
                for b in range(1, 6 if main_storage else 3):
                    counter = len(records) + 1
                    stock = rng.randint(10, 509)
                    bin_id = f"{storage_type}-{b:03d}"
                    records.append({
                        "LGNUM": warehouse,
                        "LNUMT": f"Warehouse {warehouse}",
                        "WERKS": plant,
                        "LGORT": location,
                        "LGTYP": storage_type,
                        "LTYPT": description,
                        "LGPLA": bin_id,
                        "LGBER": "MAIN" if main_storage else "STAGING",
                        "KOBER": f"PA{storage_type}" if main_storage else "",
                        "LPTYP": "PALLET" if storage_type == "001" else "CARTON",
                        "LGEWI": "2000" if storage_type == "001" else "500",
                        "MGEWI": str(rng.randint(0, 399)),
                        "GEWEI": "KG",
                        "ANZLE": "4" if storage_type == "001" else "1",
                        "LQNUM": f"Q{counter:06d}",
                        "MATNR": f"MAT{(counter - 1) % 10 + 1:05d}",
                        "CHARG": f"BATCH{counter:03d}" if counter % 3 == 0 else "",
                        "BESTQ": "",
                        "GESME": str(stock),
                        "VERME": str(rng.randint(0, stock)),
                        "MEINS": "EA",
                        "WDATU": "20240115",
                        "SKZUA": "",
                        "EWM_WH": f"/SCWM/{warehouse}",
                        "EWM_ST": f"/SCWM/{storage_type}",
                        "EWM_BIN": f"/SCWM/{bin_id}",
                    })
        return records


# route, description, from (country, region, zone), to (country, region, zone), km, days, mode
ROUTES = [
    ("RT0001", "NYC to Chicago", ("US", "NY", "Z01"), ("US", "IL", "Z02"), 790, 2, "ROAD"),
    ("RT0002", "NYC to LA", ("US", "NY", "Z01"), ("US", "CA", "Z05"), 2800, 5, "ROAD"),
    ("RT0003", "Chicago to Houston", ("US", "IL", "Z02"), ("US", "TX", "Z03"), 1090, 2, "ROAD"),
    ("RT0004", "NYC to London", ("US", "NY", "Z01"), ("GB", "LN", "Z10"), 5570, 14, "SEA"),
    ("RT0005", "LA to Shanghai", ("US", "CA", "Z05"), ("CN", "SH", "Z20"), 11500, 21, "SEA"),
    ("RT0006", "Frankfurt to Munich", ("DE", "HE", "Z30"), ("DE", "BY", "Z31"), 400, 1, "ROAD"),
    ("RT0007", "NYC to Frankfurt", ("US", "NY", "Z01"), ("DE", "HE", "Z30"), 6200, 2, "AIR"),
    ("RT0008", "Tokyo to Shanghai", ("JP", "TK", "Z40"), ("CN", "SH", "Z20"), 1800, 3, "SEA"),
    ("RT0009", "Munich to Milan", ("DE", "BY", "Z31"), ("IT", "LM", "Z32"), 590, 1, "ROAD"),
    ("RT0010", "Houston to Mexico City", ("US", "TX", "Z03"), ("MX", "DF", "Z50"), 1550, 3, "ROAD"),
]
# mode -> (carrier, carrier name, legs, mode of transport, lane type, cost rate)
TRANSPORT_MODES = {
    "ROAD": ("CARR001", "FastFreight Inc.", 1, "01", "TRUCK", "2.20"),
    "SEA": ("CARR002", "Ocean Global Shipping", 3, "02", "OCEAN", "0.80"),
    "AIR": ("CARR003", "AirExpress Logistics", 2, "03", "AIR", "5.50"),
}


class TransportRoute(ECCObjectSpec):
    object_id = "TRANSPORT_ROUTE"
    name = "Transportation Route"
    source_table = "TVRO"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("ROUTE", "TransportationRoute"),
            FieldMapping("BEZEI", "RouteDescription"),
            FieldMapping("VSART", "ShippingType"),
            FieldMapping("VSBED", "ShippingCondition"),
            FieldMapping("TRAZT", "TransitDays", convert="toInteger"),
            FieldMapping("DISTZ", "Distance", convert="toDecimal"),
            FieldMapping("MEDST", "DistanceUnit"),
            FieldMapping("ALAND", "SourceCountry", convert="toUpperCase"),
            FieldMapping("AREGIO", "SourceRegion"),
            FieldMapping("AZONE", "SourceTransportZone"),
            FieldMapping("VSTEL", "ShippingPoint"),
            FieldMapping("LLAND", "DestCountry", convert="toUpperCase"),
            FieldMapping("LREGIO", "DestRegion"),
            FieldMapping("LZONE", "DestTransportZone"),
            FieldMapping("TDLNR", "CarrierPartner"),
            FieldMapping("TDLNR_NAME", "CarrierName"),
            FieldMapping("VSARTTR", "ModeOfTransport"),
            FieldMapping("LEG_IND", "IsMultiLeg", convert="toBoolean"),
            FieldMapping("LEG_SEQ", "LegSequence", convert="toInteger"),
            FieldMapping("VIA_POINT", "ViaPoint"),
            FieldMapping("COST_RATE", "CostRate", convert="toDecimal"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("TM_LANE_ID", "TMLaneId"),
            FieldMapping("TM_LANE_TYPE", "TMLaneType"),
            FieldMapping("ACTIVE", "IsActive", convert="toBoolean"),
            FieldMapping("VALID_FROM", "ValidFrom", convert="toDate"),
            FieldMapping("VALID_TO", "ValidTo", convert="toDate"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["TransportationRoute", "SourceCountry", "DestCountry"],
            exact_duplicate=["TransportationRoute", "LegSequence"],
            ranges=[RangeCheck("TransitDays", 0, 60)],
        )

    def extract_mock(self, rng):
        records = []
        for route, description, source, destination, distance, days, mode in ROUTES:
            carrier, carrier_name, legs, transport_mode, lane_type, cost_rate = TRANSPORT_MODES[mode]
            for leg in range(1, legs + 1):
                records.append({
                    "ROUTE": route,
                    "BEZEI": description,
                    "VSART": mode,
                    "VSBED": "02" if mode == "AIR" else "01",
                    "TRAZT": str(days),
                    "DISTZ": str(distance),
                    "MEDST": "KM",
                    "ALAND": source[0],
                    "AREGIO": source[1],
                    "AZONE": source[2],
                    "VSTEL": "1000",
                    "LLAND": destination[0],
                    "LREGIO": destination[1],
                    "LZONE": destination[2],
                    "TDLNR": carrier,
                    "TDLNR_NAME": carrier_name,
                    "VSARTTR": transport_mode,
                    "LEG_IND": "Y" if legs > 1 else "N",
                    "LEG_SEQ": str(leg),
                    "VIA_POINT": f"VIA_{route}_{leg}" if leg < legs else "",
                    "COST_RATE": cost_rate,
                    "WAERS": "USD",
                    "TM_LANE_ID": f"LANE_{route}",
                    "TM_LANE_TYPE": lane_type,
                    "ACTIVE": "X",
                    "VALID_FROM": "20200101",
                    "VALID_TO": "99991231",
                })
        return records


SCREENING_ENTRIES = [
    ("BP001", "Acme Global", "US", "CLEAR", "0"),
    ("BP002", "EuroTrade GmbH", "DE", "CLEAR", "0"),
    ("BP003", "Asia Pacific Ltd", "SG", "REVIEW", "72"),
    ("BP004", "Blocked Entity LLC", "IR", "BLOCKED", "98"),
    ("BP005", "CaribTrade Inc", "CU", "BLOCKED", "95"),
]
EXPORT_CONTROL_ENTRIES = [
    ("3A001", "Electronics", "CN", "X"),
    ("5A002", "Encryption", "RU", "X"),
    ("1C350", "Chemicals", "IN", ""),
    ("9A004", "Propulsion", "KR", ""),
]
TARIFF_ENTRIES = [
    ("8471.30.01", "Laptops", "0", "CN", "", ""),
    ("8703.23.00", "Automobiles", "2.5", "DE", "X", "EU-FTA"),
    ("3004.90.92", "Pharmaceuticals", "0", "IN", "", ""),
    ("6110.20.20", "Cotton Sweaters", "16.5", "BD", "X", "GSP"),
    ("2204.21.50", "Wine", "6.3", "FR", "X", "EU-FTA"),
    ("0901.11.00", "Coffee beans", "0", "BR", "", ""),
    ("7108.12.10", "Gold", "0", "ZA", "", ""),
    ("8517.12.00", "Smartphones", "0", "KR", "X", "KORUS"),
]
LICENSE_ENTRIES = [
    ("GENERAL", "LIC-GEN-001", "999999", "50000", "EA", "20251231"),
    ("INDIVIDUAL", "LIC-IND-001", "1000", "750", "KG", "20240930"),
    ("INDIVIDUAL", "LIC-IND-002", "500", "100", "EA", "20250630"),
    ("GENERAL", "LIC-GEN-002", "999999", "120000", "EA", "20261231"),
]


class TradeCompliance(ECCObjectSpec):
    """
    Global Trade Services records: sanctioned party screening, export
    control classification, customs tariff numbers and trade licenses.
    """

    object_id = "TRADE_COMPLIANCE"
    name = "Trade Compliance"
    source_system = "GTS"
    source_table = "/SAPSLL/PNTPR"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("COMPL_ID", "ComplianceId"),
            FieldMapping("COMPL_TYPE", "ComplianceType"),
            FieldMapping("DESCRIPTION", "Description"),
            # Sanctioned party list screening
            FieldMapping("PARTNER", "BusinessPartner"),
            FieldMapping("PARTNER_NAME", "PartnerName"),
            FieldMapping("COUNTRY", "Country", convert="toUpperCase"),
            FieldMapping("SPL_STATUS", "ScreeningStatus"),
            FieldMapping("SPL_LIST", "SanctionsList"),
            FieldMapping("SPL_MATCH_SCORE", "MatchScore", convert="toDecimal"),
            FieldMapping("LAST_SCREENED", "LastScreenedDate", convert="toDate"),
            # Export control
            FieldMapping("ECCN", "ExportControlClass"),
            FieldMapping("DEST_COUNTRY", "DestinationCountry", convert="toUpperCase"),
            FieldMapping("LICENSE_REQ", "LicenseRequired", convert="toBoolean"),
            # Customs tariff
            FieldMapping("HS_CODE", "HSCode"),
            FieldMapping("TARIFF_RATE", "TariffRate", convert="toDecimal"),
            FieldMapping("ORIGIN_COUNTRY", "CountryOfOrigin", convert="toUpperCase"),
            FieldMapping("PREF_ELIGIBLE", "PreferenceEligible", convert="toBoolean"),
            FieldMapping("FTA_CODE", "FreeTradeAgreement"),
            # Licenses
            FieldMapping("LICENSE_NO", "LicenseNumber"),
            FieldMapping("LICENSE_TYPE", "LicenseType"),
            FieldMapping("LICENSE_QTY", "LicensedQuantity", convert="toDecimal"),
            FieldMapping("LICENSE_USED", "UsedQuantity", convert="toDecimal"),
            FieldMapping("LICENSE_UNIT", "QuantityUnit"),
            FieldMapping("LICENSE_VALID", "LicenseValidTo", convert="toDate"),
            FieldMapping("MATNR", "Product", convert="padLeft40"),
            FieldMapping("STATUS", "RecordStatus"),
            FieldMapping("VALID_FROM", "ValidFrom", convert="toDate"),
            FieldMapping("VALID_TO", "ValidTo", convert="toDate"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ComplianceId", "ComplianceType"],
            exact_duplicate=["ComplianceId"],
            ranges=[RangeCheck("MatchScore", 0, 100)],
        )

    def extract_mock(self, rng):
        records: List[Dict[str, Any]] = []

        def add(kind: str, prefix: str, description: str, **fields: str) -> None:
            number = len(records) + 1
            records.append({
                "COMPL_ID": f"{prefix}{number:04d}",
                "COMPL_TYPE": kind,
                "DESCRIPTION": description,
                "STATUS": "ACTIVE",
                "VALID_FROM": "20200101",
                "VALID_TO": "99991231",
                **fields,
            })

        for partner, partner_name, country, status, score in SCREENING_ENTRIES:
            add("SPL_SCREENING", "SPL", f"SPL Check: {partner_name}",
                PARTNER=partner, PARTNER_NAME=partner_name, COUNTRY=country,
                SPL_STATUS=status, SPL_LIST="SDN", SPL_MATCH_SCORE=score, LAST_SCREENED="20240601")
        for eccn, text, destination, required in EXPORT_CONTROL_ENTRIES:
            add("EXPORT_CONTROL", "EXP", f"Export: {eccn} - {text}",
                ECCN=eccn, DEST_COUNTRY=destination, LICENSE_REQ=required,
                MATNR=f"MAT{len(records) + 1:05d}")
        for hs_code, text, rate, origin, preference, agreement in TARIFF_ENTRIES:
            add("CUSTOMS_TARIFF", "TAR", f"HS {hs_code}: {text}",
                HS_CODE=hs_code, TARIFF_RATE=rate, ORIGIN_COUNTRY=origin,
                PREF_ELIGIBLE=preference, FTA_CODE=agreement, MATNR=f"MAT{len(records) + 1:05d}")
        for license_type, number, quantity, used, unit, valid in LICENSE_ENTRIES:
            add("TRADE_LICENSE", "LIC", f"License {number}",
                LICENSE_NO=number, LICENSE_TYPE=license_type, LICENSE_QTY=quantity,
                LICENSE_USED=used, LICENSE_UNIT=unit, LICENSE_VALID=valid)
        return records


LOGISTICS_OBJECTS = (WarehouseStructure, TransportRoute, TradeCompliance)
