"""SAP ECC materials management and purchasing migration objects."""

from typing import List

from ..field_mapping import FieldMapping
from ..quality import QualityChecks
from .common import ECCObjectSpec, month

MATERIAL_TYPES = ["ROH", "HALB", "FERT", "HAWA", "ROH"]
BASE_UNITS = ["KG", "EA", "L", "M", "PC"]
PLANTS = ["1000", "2000", "3000"]
SUPPLIERS = ["VEND001", "VEND002", "VEND003", "VEND004", "VEND005"]


def material_number(i: int) -> str:
    return f"MAT{i:05d}"


class MaterialMaster(ECCObjectSpec):
    object_id = "MATERIAL_MASTER"
    name = "Material Master"
    source_table = "MARA"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # General data (MARA)
            FieldMapping("MATNR", "Product", convert="padLeft18"),
            FieldMapping("MTART", "ProductType"),
            FieldMapping("MBRSH", "IndustrySector"),
            FieldMapping("MATKL", "ProductGroup"),
            FieldMapping("MEINS", "BaseUnit"),
            FieldMapping("BRGEW", "GrossWeight", convert="toDecimal"),
            FieldMapping("NTGEW", "NetWeight", convert="toDecimal"),
            FieldMapping("GEWEI", "WeightUnit"),
            FieldMapping("EAN11", "GTIN"),
            FieldMapping("LVORM", "IsMarkedForDeletion", convert="toBoolean"),
            FieldMapping("BISMT", "OldMaterialNumber"),
            FieldMapping("SPART", "Division"),
            FieldMapping("ERSDA", "CreationDate", convert="toDate"),
            FieldMapping("MAKTX", "ProductDescription"),
            # Plant data (MARC)
            FieldMapping("WERKS", "Plant"),
            FieldMapping("EKGRP", "PurchasingGroup"),
            FieldMapping("DISMM", "MRPType"),
            FieldMapping("DISPO", "MRPController"),
            FieldMapping("DISLS", "LotSizingProcedure"),
            FieldMapping("MINBE", "ReorderPoint", convert="toDecimal"),
            FieldMapping("EISBE", "SafetyStock", convert="toDecimal"),
            FieldMapping("PLIFZ", "PlannedDeliveryTime", convert="toInteger"),
            FieldMapping("BESKZ", "ProcurementType"),
            FieldMapping("XCHPF", "IsBatchManaged", convert="toBoolean"),
            # Storage location data (MARD)
            FieldMapping("LGORT", "StorageLocation"),
            FieldMapping("LABST", "UnrestrictedStock", convert="toDecimal"),
            FieldMapping("INSME", "QualityInspectionStock", convert="toDecimal"),
            FieldMapping("SPEME", "BlockedStock", convert="toDecimal"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["Product", "ProductType", "BaseUnit"],
            exact_duplicate=["Product", "Plant", "StorageLocation"],
        )

    def extract_mock(self, rng):
        records = []
        for i in range(1, 26):
            material_type = MATERIAL_TYPES[(i - 1) % 5]
            gross = rng.uniform(0.5, 100.5)
            for plant in PLANTS:
                for location in ("0001", "0002"):
                    records.append({
                        "MATNR": material_number(i),
                        "MTART": material_type,
                        "MBRSH": "M",
                        "MATKL": f"{(i - 1) % 5 + 1:03d}",
                        "MEINS": BASE_UNITS[(i - 1) % 5],
                        "BRGEW": f"{gross:.3f}",
                        "NTGEW": f"{gross * 0.9:.3f}",
                        "GEWEI": "KG",
                        "EAN11": f"400{i:010d}",
                        "LVORM": "X" if i == 25 else "",
                        "BISMT": f"OLD-{i:04d}" if i % 6 == 0 else "",
                        "SPART": "01",
                        "ERSDA": "20180101",
                        "MAKTX": f"Material {i} ({material_type})",
                        "WERKS": plant,
                        "EKGRP": f"{i % 4 + 1:03d}",
                        "DISMM": "PD" if material_type in ("ROH", "HALB") else "VB",
                        "DISPO": f"{i % 3 + 1:03d}",
                        "DISLS": "EX",
                        "MINBE": str(rng.randint(10, 200)),
                        "EISBE": str(rng.randint(5, 100)),
                        "PLIFZ": str(rng.randint(1, 30)),
                        "BESKZ": "E" if material_type in ("HALB", "FERT") else "F",
                        "XCHPF": "X" if i % 5 == 0 else "",
                        "LGORT": location,
                        "LABST": str(rng.randint(0, 5000)),
                        "INSME": "0",
                        "SPEME": str(rng.randint(0, 20)) if i % 7 == 0 else "0",
                    })
        return records


class PurchaseOrder(ECCObjectSpec):
    object_id = "PURCHASE_ORDER"
    name = "Purchase Order (Open)"
    source_table = "EKKO"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Header (EKKO)
            FieldMapping("EBELN", "PurchaseOrder", convert="padLeft10"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("BSART", "PurchaseOrderType"),
            FieldMapping("AEDAT", "CreationDate", convert="toDate"),
            FieldMapping("ERNAM", "CreatedByUser"),
            FieldMapping("LIFNR", "Supplier"),
            FieldMapping("ZTERM", "PaymentTerms"),
            FieldMapping("EKORG", "PurchasingOrganization"),
            FieldMapping("EKGRP", "PurchasingGroup"),
            FieldMapping("WAERS", "DocumentCurrency"),
            FieldMapping("BEDAT", "PurchaseOrderDate", convert="toDate"),
            FieldMapping("INCO1", "Incoterms"),
            # Item (EKPO)
            FieldMapping("EBELP", "PurchaseOrderItem", convert="padLeft5"),
            FieldMapping("MATNR", "Material", convert="padLeft18"),
            FieldMapping("TXZ01", "ShortText"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("LGORT", "StorageLocation"),
            FieldMapping("MENGE", "OrderQuantity", convert="toDecimal"),
            FieldMapping("MEINS", "OrderUnit"),
            FieldMapping("NETPR", "NetPriceAmount", convert="toDecimal"),
            FieldMapping("NETWR", "NetOrderValue", convert="toDecimal"),
            FieldMapping("MWSKZ", "TaxCode"),
            FieldMapping("KNTTP", "AccountAssignmentCategory"),
            FieldMapping("WEBRE", "IsGoodsReceiptBased", convert="toBoolean"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["PurchaseOrder", "PurchaseOrderItem", "Supplier", "PurchasingOrganization"],
            exact_duplicate=["PurchaseOrder", "PurchaseOrderItem"],
        )

    def extract_mock(self, rng):
        records = []
        for i in range(1, 16):
            order = str(4500000000 + i)
            supplier = SUPPLIERS[(i - 1) % 5]
            for item in (1, 2):
                material = (i + item) % 25 + 1
                quantity = rng.randint(10, 500)
                price = rng.uniform(5, 250)
                records.append({
                    "EBELN": order,
                    "BUKRS": "1000" if i <= 10 else "2000",
                    "BSART": "NB",
                    "AEDAT": f"2024{month(i)}05",
                    "ERNAM": "BUYER01",
                    "LIFNR": supplier,
                    "ZTERM": "NT30",
                    "EKORG": "1000" if i <= 10 else "2000",
                    "EKGRP": f"{i % 4 + 1:03d}",
                    "WAERS": "USD" if i <= 10 else "EUR",
                    "BEDAT": f"2024{month(i)}05",
                    "INCO1": "FOB",
                    "EBELP": str(item * 10),
                    "MATNR": material_number(material),
                    "TXZ01": f"Material {material}",
                    "WERKS": "1000" if i <= 10 else "2000",
                    "LGORT": "0001",
                    "MENGE": str(quantity),
                    "MEINS": BASE_UNITS[(material - 1) % 5],
                    "NETPR": f"{price:.2f}",
                    "NETWR": f"{price * quantity:.2f}",
                    "MWSKZ": "V1",
                    "KNTTP": "",
                    "WEBRE": "X",
                })
        return records


class SourceList(ECCObjectSpec):
    object_id = "SOURCE_LIST"
    name = "Source List"
    source_table = "EORD"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("MATNR", "Material", convert="padLeft18"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("ZEORD", "SourceListRecord", convert="padLeft5"),
            FieldMapping("VDATU", "ValidFrom", convert="toDate"),
            FieldMapping("BDATU", "ValidTo", convert="toDate"),
            FieldMapping("LIFNR", "Supplier"),
            FieldMapping("EKORG", "PurchasingOrganization"),
            FieldMapping("FLIFN", "FixedSupplier", convert="toBoolean"),
            FieldMapping("NOTKZ", "BlockedSupplier", convert="toBoolean"),
            FieldMapping("AUTET", "SourceListUsage"),
            FieldMapping("EBELN", "AgreementNumber"),
            FieldMapping("ERDAT", "CreatedDate", convert="toDate"),
            FieldMapping("ERNAM", "CreatedBy"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["Material", "Plant", "Supplier", "ValidFrom"],
            exact_duplicate=["Material", "Plant", "Supplier", "ValidFrom"],
        )

    def extract_mock(self, rng):
        records = []
        for i in range(1, 11):
            for entry in range(1, 4):
                records.append({
                    "MATNR": material_number(i),
                    "WERKS": "1000",
                    "ZEORD": str(entry),
                    "VDATU": "20240101",
                    "BDATU": "99991231",
                    "LIFNR": SUPPLIERS[(i + entry) % 5],
                    "EKORG": "1000",
                    "FLIFN": "X" if entry == 1 else "",
                    "NOTKZ": "X" if entry == 3 and i % 4 == 0 else "",
                    "AUTET": "1" if entry == 1 else "",
                    "EBELN": f"55{i:08d}" if entry == 1 else "",
                    "ERDAT": "20231215",
                    "ERNAM": "BUYER01",
                })
        return records


def _outline_agreement_mappings(number_target: str, item_target: str) -> List[FieldMapping]:
    return [
        FieldMapping("EBELN", number_target, convert="padLeft10"),
        FieldMapping("BUKRS", "CompanyCode"),
        FieldMapping("BSART", "DocumentType"),
        FieldMapping("LIFNR", "Supplier"),
        FieldMapping("EKORG", "PurchasingOrganization"),
        FieldMapping("EKGRP", "PurchasingGroup"),
        FieldMapping("WAERS", "Currency"),
        FieldMapping("KDATB", "ValidityStart", convert="toDate"),
        FieldMapping("KDATE", "ValidityEnd", convert="toDate"),
        FieldMapping("ZTERM", "PaymentTerms"),
        FieldMapping("INCO1", "Incoterms"),
        FieldMapping("EBELP", item_target, convert="padLeft5"),
        FieldMapping("MATNR", "Material", convert="padLeft18"),
        FieldMapping("WERKS", "Plant"),
        FieldMapping("KTMNG", "TargetQuantity", convert="toDecimal"),
        FieldMapping("MEINS", "UnitOfMeasure"),
        FieldMapping("NETPR", "NetPrice", convert="toDecimal"),
        FieldMapping("PEINH", "PriceUnit", convert="toInteger"),
        FieldMapping("MWSKZ", "TaxCode"),
    ]


class SchedulingAgreement(ECCObjectSpec):
    object_id = "SCHEDULING_AGREEMENT"
    name = "Scheduling Agreement"
    source_table = "EKKO"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            *_outline_agreement_mappings("AgreementNumber", "AgreementItem"),
            FieldMapping("ABRUF", "GoodsReceiptQuantity", convert="toDecimal"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["AgreementNumber", "AgreementItem", "Supplier", "Material"],
            exact_duplicate=["AgreementNumber", "AgreementItem"],
        )

    def extract_mock(self, rng):
        records = []
        for s, supplier in enumerate(SUPPLIERS, start=1):
            for item in range(1, 5):
                material = (s * 4 + item) % 25 + 1
                target = rng.randint(1000, 10000)
                records.append({
                    "EBELN": str(5500000000 + s),
                    "BUKRS": "1000",
                    "BSART": "LP",
                    "LIFNR": supplier,
                    "EKORG": "1000",
                    "EKGRP": "001",
                    "WAERS": "USD",
                    "KDATB": "20240101",
                    "KDATE": "20251231",
                    "ZTERM": "NT30",
                    "INCO1": "FCA",
                    "EBELP": str(item * 10),
                    "MATNR": material_number(material),
                    "WERKS": "1000",
                    "KTMNG": str(target),
                    "MEINS": BASE_UNITS[(material - 1) % 5],
                    "NETPR": f"{rng.uniform(1, 100):.2f}",
                    "PEINH": "1",
                    "MWSKZ": "V1",
                    "ABRUF": str(target // 3),
                })
        return records


class PurchaseContract(ECCObjectSpec):
    object_id = "PURCHASE_CONTRACT"
    name = "Purchase Contract"
    source_table = "EKKO"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            *_outline_agreement_mappings("ContractNumber", "ContractItem"),
            FieldMapping("KTWRT", "TargetValue", convert="toDecimal"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ContractNumber", "ContractItem", "Supplier"],
            exact_duplicate=["ContractNumber", "ContractItem"],
        )

    def extract_mock(self, rng):
        records = []
        for c in range(1, 6):
            # Value contracts (MK) carry no material
            value_contract = c == 5
            for item in range(1, 6):
                material = (c * 5 + item) % 25 + 1
                quantity = rng.randint(500, 5000)
                price = rng.uniform(2, 150)
                records.append({
                    "EBELN": str(4600000000 + c),
                    "BUKRS": "1000" if c <= 3 else "2000",
                    "BSART": "WK" if value_contract else "MK",
                    "LIFNR": SUPPLIERS[c - 1],
                    "EKORG": "1000" if c <= 3 else "2000",
                    "EKGRP": "002",
                    "WAERS": "USD" if c <= 3 else "EUR",
                    "KDATB": "20240101",
                    "KDATE": "20261231",
                    "ZTERM": "NT60",
                    "INCO1": "DAP",
                    "EBELP": str(item * 10),
                    "MATNR": "" if value_contract else material_number(material),
                    "WERKS": "1000" if c <= 3 else "2000",
                    "KTMNG": "" if value_contract else str(quantity),
                    "MEINS": BASE_UNITS[(material - 1) % 5],
                    "NETPR": f"{price:.2f}",
                    "PEINH": "1",
                    "MWSKZ": "V1",
                    "KTWRT": f"{price * quantity:.2f}",
                })
        return records


class BatchMaster(ECCObjectSpec):
    object_id = "BATCH_MASTER"
    name = "Batch Master"
    source_table = "MCH1"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("MATNR", "Material", convert="padLeft18"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("CHARG", "BatchNumber"),
            FieldMapping("ERSDA", "CreatedDate", convert="toDate"),
            FieldMapping("ERNAM", "CreatedBy"),
            FieldMapping("ZUSTD", "BatchStatus", value_map={"": "RELEASED", "X": "RESTRICTED"}, default="RELEASED"),
            FieldMapping("LGORT", "StorageLocation"),
            FieldMapping("HSDAT", "ManufactureDate", convert="toDate"),
            FieldMapping("VFDAT", "ShelfLifeExpDate", convert="toDate"),
            FieldMapping("CLABS", "UnrestrictedStock", convert="toDecimal"),
            FieldMapping("CINSM", "QualityInspStock", convert="toDecimal"),
            FieldMapping("LIFNR", "Supplier"),
            FieldMapping("HERKL", "CountryOfOrigin", convert="toUpperCase"),
            FieldMapping("MEINS", "BaseUnitOfMeasure"),
            FieldMapping("LVORM", "IsMarkedForDeletion", convert="toBoolean"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["Material", "BatchNumber", "Plant"],
            exact_duplicate=["Material", "BatchNumber", "Plant"],
        )

    def extract_mock(self, rng):
        # Batch-managed materials are every fifth one
        records = []
        for m, material in enumerate((5, 10, 15, 20, 25)):
            for b in range(1, 8):
                records.append({
                    "MATNR": material_number(material),
                    "WERKS": "1000",
                    "CHARG": f"B2024{m + 1:02d}{b:03d}",
                    "ERSDA": f"2024{month(b)}01",
                    "ERNAM": "QM_USER",
                    "ZUSTD": "X" if b == 7 else "",
                    "LGORT": "0001",
                    "HSDAT": f"2024{month(b)}01",
                    "VFDAT": f"2026{month(b)}01",
                    "CLABS": str(rng.randint(50, 1000)),
                    "CINSM": str(rng.randint(0, 50)) if b == 7 else "0",
                    "LIFNR": SUPPLIERS[b % 5],
                    "HERKL": "US" if b % 2 else "DE",
                    "MEINS": BASE_UNITS[(material - 1) % 5],
                    "LVORM": "",
                })
        return records


MATERIALS_OBJECTS = (
    MaterialMaster, PurchaseOrder, SourceList, SchedulingAgreement, PurchaseContract, BatchMaster,
)
