"""SAP ECC sales and distribution migration objects."""

from typing import Any, Dict, List

from ..field_mapping import FieldMapping
from ..quality import FuzzyCheck, QualityChecks
from .common import CUSTOMER_ROLE, ECCObjectSpec, VENDOR_ROLE

CITIES = ["New York", "Chicago", "Los Angeles", "Houston", "Phoenix"]
EMPTY_PARTNER = "0000000000"


def _has_value(value: Any) -> bool:
    return value not in (None, "", EMPTY_PARTNER)


class BusinessPartner(ECCObjectSpec):
    """
    Customers and vendors converted into S/4HANA business partners.

    Customer and vendor records of the same entity (same name and city,
    case-insensitive) are merged into one partner carrying both roles.
    """

    object_id = "BUSINESS_PARTNER"
    name = "Business Partner"
    source_table = "KNA1"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # General data
            FieldMapping("PARTNER", "BusinessPartner", convert="padLeft10"),
            FieldMapping("TYPE", "BusinessPartnerCategory",
                         value_map={"1": "1", "2": "2", "ORG": "2", "PERSON": "1"}, default="2"),
            FieldMapping("NAME1", "BusinessPartnerFullName"),
            FieldMapping("NAME2", "OrganizationBPName2"),
            FieldMapping("SORTL", "SearchTerm1", convert="toUpperCase"),
            FieldMapping("STCEG", "TaxNumber1"),
            FieldMapping("STCD1", "TaxNumber2"),
            FieldMapping("BRSCH", "IndustrySector"),
            FieldMapping("KTOKD", "BusinessPartnerGrouping"),
            FieldMapping("LOEVM", "IsMarkedForDeletion", convert="toBoolean"),
            FieldMapping("SPERR", "IsBlocked", convert="toBoolean"),
            FieldMapping("SPRAS", "Language", convert="toUpperCase"),
            FieldMapping("ERDAT", "CreationDate", convert="toDate"),
            FieldMapping("KUNNR", "Customer", convert="padLeft10"),
            FieldMapping("LIFNR", "Supplier", convert="padLeft10"),
            # Address
            FieldMapping("STRAS", "StreetName"),
            FieldMapping("ORT01", "CityName"),
            FieldMapping("REGIO", "Region"),
            FieldMapping("PSTLZ", "PostalCode"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            FieldMapping("TELF1", "PhoneNumber"),
            FieldMapping("SMTP_ADDR", "EmailAddress"),
            FieldMapping("ADRNR", "AddressID"),
            FieldMapping("TIME_ZONE", "TimeZone"),
            FieldMapping("TRANSPZONE", "TransportZone"),
            # Bank
            FieldMapping("BANKS", "BankCountry", convert="toUpperCase"),
            FieldMapping("BANKL", "BankNumber"),
            FieldMapping("BANKN", "BankAccount"),
            FieldMapping("KOINH", "BankAccountHolder"),
            FieldMapping("SWIFT", "SWIFTCode"),
            FieldMapping("IBAN", "IBANNumber"),
            # Customer role
            FieldMapping("KUKLA", "CustomerClassification"),
            FieldMapping("AKONT", "ReconciliationAccount", convert="padLeft10"),
            FieldMapping("ZTERM", "PaymentTerms"),
            FieldMapping("VKORG", "SalesOrganization"),
            FieldMapping("VTWEG", "DistributionChannel"),
            FieldMapping("SPART", "Division"),
            FieldMapping("KDGRP", "CustomerGroup"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("KALKS", "PricingProcedure"),
            # Supplier role
            FieldMapping("EKORG", "PurchasingOrganization"),
            FieldMapping("EKGRP", "PurchasingGroup"),
            FieldMapping("WEBRE", "GoodsReceiptBased", convert="toBoolean"),
            FieldMapping("REPRF", "CheckDoubleInvoice", convert="toBoolean"),
            FieldMapping("MWSKZ", "TaxCode"),
            FieldMapping("MINBW", "MinimumOrderValue", convert="toDecimal"),
            FieldMapping("VERKF", "ContactPerson"),
            FieldMapping("INCO1", "Incoterms"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["BusinessPartner", "BusinessPartnerFullName", "Country"],
            exact_duplicate=["TaxNumber1"],
            fuzzy_duplicate=FuzzyCheck(("BusinessPartnerFullName", "StreetName"), 0.85),
        )

    def post_transform(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        merged: Dict[str, Dict[str, Any]] = {}
        for row in rows:
            key = f"{str(row.get('BusinessPartnerFullName') or '').upper()}|{str(row.get('CityName') or '').upper()}"
            existing = merged.get(key)
            if existing is None:
                existing = dict(row)
                existing["Roles"] = []
                merged[key] = existing
            else:
                for field_name, value in row.items():
                    if not _has_value(existing.get(field_name)) and _has_value(value):
                        existing[field_name] = value
            if _has_value(row.get("Customer")) and CUSTOMER_ROLE not in existing["Roles"]:
                existing["Roles"].append(CUSTOMER_ROLE)
            if _has_value(row.get("Supplier")) and VENDOR_ROLE not in existing["Roles"]:
                existing["Roles"].append(VENDOR_ROLE)
        return list(merged.values())

    def extract_mock(self, rng):
        records = []
        for i in range(1, 51):
            records.append({
                "PARTNER": str(100000 + i),
                "TYPE": "ORG",
                "NAME1": f"Customer Corp {i}",
                "SORTL": f"CUST{i:03d}",
                "STCEG": f"US{100000000 + i}",
                "STCD1": str(200000000 + i),
                "BRSCH": "MANU",
                "KTOKD": "D",
                "SPRAS": "EN",
                "ERDAT": "20200115",
                "KUNNR": str(100000 + i),
                "LIFNR": "",
                "STRAS": f"{100 + i} Main Street",
                "ORT01": CITIES[(i - 1) % 5],
                "REGIO": "NY",
                "PSTLZ": f"1{i:04d}",
                "LAND1": "US",
                "TELF1": f"212-555-{i:04d}",
                "SMTP_ADDR": f"contact{i}@customer{i}.com",
                "ADRNR": str(300000 + i),
                "TIME_ZONE": "EST",
                "TRANSPZONE": "TZ01",
                "BANKS": "US",
                "BANKL": "021000021",
                "BANKN": str(400000000 + i),
                "KOINH": f"Customer Corp {i}",
                "SWIFT": "CHASUS33",
                "KUKLA": "A",
                "AKONT": "140000",
                "ZTERM": "0030",
                "VKORG": "1000",
                "VTWEG": "10",
                "SPART": "00",
                "KDGRP": "01",
                "WAERS": "USD",
                "KALKS": "1",
            })
        for i in range(1, 31):
            records.append({
                "PARTNER": str(200000 + i),
                "TYPE": "ORG",
                "NAME1": f"Vendor Supplies {i}",
                "SORTL": f"VEND{i:03d}",
                "STCEG": f"US{500000000 + i}",
                "STCD1": str(600000000 + i),
                "BRSCH": "RETL",
                "KTOKD": "K",
                "SPRAS": "EN",
                "ERDAT": "20190601",
                "KUNNR": "",
                "LIFNR": str(200000 + i),
                "STRAS": f"{200 + i} Supply Ave",
                "ORT01": CITIES[(i - 1) % 5],
                "REGIO": "CA",
                "PSTLZ": f"9{i:04d}",
                "LAND1": "US",
                "TELF1": f"310-555-{i:04d}",
                "SMTP_ADDR": f"ap{i}@vendor{i}.com",
                "ADRNR": str(700000 + i),
                "TIME_ZONE": "PST",
                "TRANSPZONE": "TZ02",
                "BANKS": "US",
                "BANKL": "021000089",
                "BANKN": str(800000000 + i),
                "KOINH": f"Vendor Supplies {i}",
                "SWIFT": "CITIUS33",
                "EKORG": "1000",
                "EKGRP": "001",
                "WEBRE": "X",
                "REPRF": "X",
                "MWSKZ": "V1",
                "MINBW": "100.00",
                "VERKF": f"Contact Person {i}",
                "INCO1": "FOB",
            })
        # Vendor records of the first five customers
        for i in range(1, 6):
            records.append({
                "PARTNER": str(300000 + i),
                "TYPE": "ORG",
                "NAME1": f"Customer Corp {i}",
                "SORTL": f"BOTH{i:03d}",
                "STCEG": f"US{100000000 + i}",
                "BRSCH": "MANU",
                "KTOKD": "K",
                "SPRAS": "EN",
                "ERDAT": "20210301",
                "KUNNR": "",
                "LIFNR": str(300000 + i),
                "STRAS": f"{100 + i} Main Street",
                "ORT01": CITIES[(i - 1) % 5],
                "REGIO": "NY",
                "PSTLZ": f"1{i:04d}",
                "LAND1": "US",
                "TELF1": f"212-555-{i:04d}",
                "ADRNR": str(900000 + i),
                "EKORG": "1000",
                "EKGRP": "002",
                "WEBRE": "X",
                "MWSKZ": "V2",
                "MINBW": "500.00",
                "VERKF": f"Dual Contact {i}",
                "INCO1": "CIF",
            })
        return records


class SalesOrder(ECCObjectSpec):
    object_id = "SALES_ORDER"
    name = "Sales Order (Open)"
    source_table = "VBAK"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Header (VBAK)
            FieldMapping("VBELN", "SalesOrder", convert="padLeft10"),
            FieldMapping("AUART", "SalesOrderType"),
            FieldMapping("VKORG", "SalesOrganization"),
            FieldMapping("VTWEG", "DistributionChannel"),
            FieldMapping("SPART", "Division"),
            FieldMapping("VKBUR", "SalesOffice"),
            FieldMapping("KUNNR", "SoldToParty", convert="padLeft10"),
            FieldMapping("KUNWE", "ShipToParty", convert="padLeft10"),
            FieldMapping("KUNRE", "BillToParty", convert="padLeft10"),
            FieldMapping("KUNRG", "Payer", convert="padLeft10"),
            FieldMapping("ERDAT", "CreationDate", convert="toDate"),
            FieldMapping("AUDAT", "SalesOrderDate", convert="toDate"),
            FieldMapping("VDATU", "RequestedDeliveryDate", convert="toDate"),
            FieldMapping("WAERK", "TransactionCurrency"),
            FieldMapping("NETWR", "TotalNetAmount", convert="toDecimal"),
            FieldMapping("KALSM", "PricingProcedure"),
            FieldMapping("INCO1", "Incoterms"),
            FieldMapping("INCO2", "IncotermsLocation"),
            FieldMapping("ZTERM", "PaymentTerms"),
            FieldMapping("BSTNK", "CustomerPurchaseOrderNumber"),
            FieldMapping("BSTDK", "CustomerPurchaseOrderDate", convert="toDate"),
            # Item (VBAP)
            FieldMapping("POSNR", "SalesOrderItem"),
            FieldMapping("MATNR", "Material", convert="padLeft40"),
            FieldMapping("ARKTX", "SalesOrderItemText"),
            FieldMapping("PSTYV", "SalesOrderItemCategory"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("LGORT", "StorageLocation"),
            FieldMapping("KWMENG", "RequestedQuantity", convert="toDecimal"),
            FieldMapping("VRKME", "RequestedQuantityUnit"),
            FieldMapping("NETPR", "NetPriceAmount", convert="toDecimal"),
            FieldMapping("KPEIN", "NetPriceQuantity", convert="toInteger"),
            FieldMapping("NETWR_I", "NetAmount", convert="toDecimal"),
            FieldMapping("MWSKZ", "TaxCode"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("VSTEL", "ShippingPoint"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["SalesOrder", "SalesOrderItem", "SoldToParty", "SalesOrganization"],
            exact_duplicate=["SalesOrder", "SalesOrderItem"],
        )

    def extract_mock(self, rng):
        order_types = ["OR", "OR", "RE", "OR", "CR"]
        customers = ["0000100001", "0000100005", "0000100010", "0000100020", "0000100030"]
        materials = ["MAT00002", "MAT00004", "MAT00007", "MAT00010", "MAT00015"]
        records = []
        for h in range(1, 16):
            customer = customers[(h - 1) % 5]
            order_month = f"{1 + h % 12:02d}"
            total = rng.uniform(1000, 100000)
            for i in range(1, 3 + h % 4):
                unit = "KG" if i % 3 == 0 else "EA"
                records.append({
                    "VBELN": str(5000000 + h),
                    "AUART": order_types[(h - 1) % 5],
                    "VKORG": "1000",
                    "VTWEG": "10",
                    "SPART": "00",
                    "VKBUR": "BU02" if h % 3 == 0 else "BU01",
                    "KUNNR": customer,
                    "KUNWE": customer,
                    "KUNRE": customer,
                    "KUNRG": customer,
                    "ERDAT": f"2024{order_month}15",
                    "AUDAT": f"2024{order_month}15",
                    "VDATU": f"2024{min(12, 2 + h % 12):02d}01",
                    "WAERK": "USD",
                    "NETWR": f"{total:.2f}",
                    "KALSM": "RVAA01",
                    "INCO1": "FOB",
                    "INCO2": "Customer Warehouse",
                    "ZTERM": "0030",
                    "BSTNK": f"PO-CUST-{h}",
                    "BSTDK": f"2024{order_month}10",
                    "POSNR": f"{i * 10:06d}",
                    "MATNR": materials[(h + i - 2) % 5],
                    "ARKTX": f"Sales item {h}-{i}",
                    "PSTYV": "TAN",
                    "WERKS": "2000" if h % 2 == 0 else "1000",
                    "LGORT": "0001",
                    "KWMENG": str(5 * (i + h % 10)),
                    "VRKME": unit,
                    "NETPR": f"{rng.uniform(50, 1000):.2f}",
                    "KPEIN": "1",
                    "NETWR_I": f"{rng.uniform(500, 10000):.2f}",
                    "MWSKZ": "A1",
                    "PRCTR": f"PC{'20' if h % 2 == 0 else '10'}01",
                    "VSTEL": "2000" if h % 2 == 0 else "1000",
                })
        return records


# type -> (description, usage, calculation type, rate range, percentage)
CONDITION_TYPES = {
    "PR00": ("Gross Price", "A", "C", (50, 5000), False),
    "K004": ("Material Discount", "A", "A", (3, 25), True),
    "MWST": ("Output Tax", "A", "A", (5, 20), True),
    "RB00": ("Freight", "A", "C", (10, 500), False),
    "RA01": ("Rebate", "B", "A", (1, 10), True),
}
SALES_ORGS = ["1000", "2000", "3000"]
TAX_RATES = [7, 10, 19]


class PricingCondition(ECCObjectSpec):
    object_id = "PRICING_CONDITION"
    name = "Pricing Condition"
    source_table = "KONH"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Header (KONH)
            FieldMapping("KNUMH", "ConditionRecordNumber"),
            FieldMapping("KOPOS", "ConditionSequentialNumber"),
            FieldMapping("KSCHL", "ConditionType"),
            FieldMapping("KAPPL", "Application"),
            FieldMapping("KVEWE", "ConditionUsage"),
            FieldMapping("DATAB", "ValidFrom", convert="toDate"),
            FieldMapping("DATBI", "ValidTo", convert="toDate"),
            FieldMapping("VAKEY", "VariableKey"),
            FieldMapping("ERDAT", "CreatedOn", convert="toDate"),
            FieldMapping("ERNAM", "CreatedBy"),
            FieldMapping("KOSRT", "ConditionDescription"),
            # Item (KONP)
            FieldMapping("KBETR", "ConditionRate", convert="toDecimal"),
            FieldMapping("KONWA", "ConditionCurrency"),
            FieldMapping("KPEIN", "ConditionPricingUnit", convert="toInteger"),
            FieldMapping("KMEIN", "ConditionUnitOfMeasure"),
            FieldMapping("KUMZA", "NumeratorForConversion", convert="toInteger"),
            FieldMapping("KUMNE", "DenominatorForConversion", convert="toInteger"),
            FieldMapping("MXWRT", "MaximumConditionValue", convert="toDecimal"),
            FieldMapping("STFKZ", "ScaleType"),
            FieldMapping("KZBZG", "ScaleBasisIndicator"),
            FieldMapping("KRECH", "CalculationType"),
            FieldMapping("LOEVM_KO", "ConditionIsDeleted", convert="toBoolean"),
            # Assignment
            FieldMapping("MATNR", "Material", convert="padLeft40"),
            FieldMapping("KUNNR", "Customer"),
            FieldMapping("VKORG", "SalesOrganization"),
            FieldMapping("VTWEG", "DistributionChannel"),
            FieldMapping("SPART", "Division"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ConditionRecordNumber", "ConditionType", "ValidFrom"],
            exact_duplicate=["ConditionRecordNumber", "ConditionSequentialNumber"],
        )

    def extract_mock(self, rng):
        customers = [str(100000 + c) for c in range(1, 11)]
        # (condition type, count, scoped to material, scoped to customer, valid-from year)
        plan = [
            ("PR00", 15, True, True, 2023),
            ("K004", 10, True, True, 2023),
            ("MWST", 9, False, False, 2020),
            ("RB00", 6, False, True, 2023),
            ("RA01", 5, False, True, 2024),
        ]
        records = []
        for condition_type, count, by_material, by_customer, year in plan:
            description, usage, calc_type, (low, high), percent = CONDITION_TYPES[condition_type]
            for i in range(count):
                if condition_type == "MWST":
                    rate = TAX_RATES[i % 3]
                else:
                    rate = low + (high - low) * i // count
                material = f"MAT{i + 1:05d}" if by_material else ""
                customer = customers[i % 10] if by_customer else ""
                records.append(self._condition_record(
                    len(records) + 1, condition_type, description, usage, calc_type, rate, percent,
                    material=material,
                    customer=customer,
                    sales_org=SALES_ORGS[i % 3],
                    channel="10" if condition_type == "RA01" or i % 2 == 0 else "20",
                    division="00" if condition_type in ("MWST", "RA01") else f"{i % 3:02d}",
                    year=year,
                ))
        return records

    @staticmethod
    def _condition_record(index, condition_type, description, usage, calc_type, rate, percent,
                          material, customer, sales_org, channel, division, year) -> Dict[str, Any]:
        return {
            "KNUMH": f"{index:010d}",
            "KOPOS": "01",
            "KSCHL": condition_type,
            "KAPPL": "V",
            "KVEWE": usage,
            "DATAB": f"{year}0101",
            "DATBI": "99991231",
            "VAKEY": "",
            "ERDAT": "20240101",
            "ERNAM": "MIGRATION",
            "KOSRT": f"{description} - {material or customer or 'General'}",
            "KBETR": f"{rate}.000" if percent else f"{rate}.00",
            "KONWA": "%" if percent else "USD",
            "KPEIN": "" if percent else "1",
            "KMEIN": "" if percent else "EA",
            "KUMZA": "1",
            "KUMNE": "1",
            "MXWRT": {"K004": "10000.00", "RA01": "50000.00"}.get(condition_type, ""),
            "STFKZ": "" if condition_type == "PR00" else "A",
            "KZBZG": "B" if percent else "C",
            "KRECH": calc_type,
            "LOEVM_KO": "",
            "MATNR": material,
            "KUNNR": customer,
            "VKORG": sales_org,
            "VTWEG": channel,
            "SPART": division,
        }


SALES_OBJECTS = (BusinessPartner, SalesOrder, PricingCondition)
