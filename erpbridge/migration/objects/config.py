"""Customizing (configuration) migration objects for FI, CO, MM and SD."""

from typing import Any, Dict, List, Tuple

from ..field_mapping import FieldMapping
from ..quality import QualityChecks
from .common import ECCObjectSpec

ConfigItem = Tuple[str, str, str, Dict[str, Any]]


class ConfigObjectSpec(ECCObjectSpec):
    """
    Configuration entries flattened into one row per item.

    Each row carries ``CONFIG_TYPE``, ``CONFIG_KEY`` and ``CONFIG_DESC`` plus
    the columns of the customizing table the item comes from.
    """

    def config_mappings(self) -> List[FieldMapping]:
        raise NotImplementedError

    def config_items(self) -> List[ConfigItem]:
        raise NotImplementedError

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("CONFIG_TYPE", "ConfigCategory"),
            FieldMapping("CONFIG_KEY", "ConfigKey"),
            FieldMapping("CONFIG_DESC", "ConfigDescription"),
            *self.config_mappings(),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ConfigCategory", "ConfigKey", "ConfigDescription"],
            exact_duplicate=["ConfigCategory", "ConfigKey"],
        )

    def extract_mock(self, rng):
        return [
            {"CONFIG_TYPE": category, "CONFIG_KEY": key, "CONFIG_DESC": description, **extra}
            for category, key, description, extra in self.config_items()
        ]


class FIConfig(ConfigObjectSpec):
    object_id = "FI_CONFIG"
    name = "Finance Configuration"

    def config_mappings(self):
        return [
            # Company code (T001)
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("BUTXT", "CompanyName"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("KTOPL", "ChartOfAccounts"),
            FieldMapping("PERIV", "FiscalYearVariant"),
            # GL account ranges
            FieldMapping("SAKNR", "GLAccount", convert="padLeft10"),
            FieldMapping("KTOKS", "AccountGroup"),
            FieldMapping("XBILK", "IsBalanceSheetAccount", convert="toBoolean"),
            # Fiscal year variant (T009)
            FieldMapping("ANZBP", "NumberOfPostingPeriods", convert="toInteger"),
            FieldMapping("ANZSP", "NumberOfSpecialPeriods", convert="toInteger"),
            # Document types (T003)
            FieldMapping("BLART", "DocumentType"),
            FieldMapping("NUMKR", "NumberRangeKey"),
            # Tax codes (T007A)
            FieldMapping("MWSKZ", "TaxCode"),
            FieldMapping("TAX_RATE", "TaxRate", convert="toDecimal"),
            FieldMapping("TAX_TYPE", "TaxType"),
            # Payment terms (T052)
            FieldMapping("ZTERM", "PaymentTerms"),
            FieldMapping("ZFAEL", "NetDueDays", convert="toInteger"),
            FieldMapping("ZPRZ1", "Discount1Percent", convert="toDecimal"),
            FieldMapping("ZTAG1", "Discount1Days", convert="toInteger"),
            # Number ranges (NRIV)
            FieldMapping("NROBJ", "NumberRangeObject"),
            FieldMapping("FROMNR", "NumberRangeFrom"),
            FieldMapping("TONR", "NumberRangeTo"),
            FieldMapping("NRLEVEL", "CurrentNumber"),
        ]

    def config_items(self):
        items: List[ConfigItem] = []
        for code, name, country, currency in [
            ("1000", "Global HQ", "US", "USD"),
            ("2000", "Europe Operations", "DE", "EUR"),
            ("3000", "Asia Pacific", "SG", "SGD"),
        ]:
            items.append(("COMPANY_CODE", code, f"Company Code {code} - {name}", {
                "BUKRS": code, "BUTXT": name, "LAND1": country, "WAERS": currency, "KTOPL": "YCOA", "PERIV": "K4",
            }))
        for start, description, balance_sheet in [
            ("0010000000", "Balance Sheet - Assets", "X"),
            ("0020000000", "Balance Sheet - Liabilities", "X"),
            ("0030000000", "Balance Sheet - Equity", "X"),
            ("0040000000", "P&L - Revenue", ""),
            ("0050000000", "P&L - COGS", ""),
            ("0060000000", "P&L - Expenses", ""),
        ]:
            end = start[:3] + "9999999"
            items.append(("GL_ACCOUNT_RANGE", f"{start}-{end}", description, {
                "SAKNR": start, "KTOKS": "BS" if balance_sheet else "PL", "XBILK": balance_sheet,
            }))
        items.append(("FISCAL_YEAR_VARIANT", "K4", "Calendar Year, 4 Special Periods", {"ANZBP": "12", "ANZSP": "4"}))
        for code, description, number_range in [
            ("SA", "GL Account Document", "01"), ("KR", "Vendor Invoice", "19"),
            ("DR", "Customer Invoice", "01"), ("DZ", "Customer Payment", "15"),
            ("KZ", "Vendor Payment", "15"), ("AB", "Accounting Document", "01"),
            ("AA", "Asset Posting", "01"),
        ]:
            items.append(("DOCUMENT_TYPE", code, description, {"BLART": code, "NUMKR": number_range}))
        for code, description, rate, kind in [
            ("I0", "Tax Exempt Input", "0", "input"), ("I1", "Standard Input Tax", "19", "input"),
            ("I2", "Reduced Input Tax", "7", "input"), ("O0", "Tax Exempt Output", "0", "output"),
            ("O1", "Standard Output Tax", "19", "output"), ("O2", "Reduced Output Tax", "7", "output"),
            ("V0", "US Sales Tax Exempt", "0", "output"), ("V1", "US Sales Tax", "8.25", "output"),
        ]:
            items.append(("TAX_CODE", code, description, {"MWSKZ": code, "TAX_RATE": rate, "TAX_TYPE": kind}))
        for code, description, days, discount_days, discount in [
            ("0001", "Due immediately", "0", "0", "0"), ("NT30", "Net 30 days", "30", "0", "0"),
            ("NT60", "Net 60 days", "60", "0", "0"), ("2N10", "2% 10, Net 30", "30", "10", "2"),
            ("3N15", "3% 15, Net 45", "45", "15", "3"),
        ]:
            items.append(("PAYMENT_TERMS", code, description, {
                "ZTERM": code, "ZFAEL": days, "ZPRZ1": discount, "ZTAG1": discount_days,
            }))
        for obj, start, end, current in [
            ("FI_DOC", "0100000000", "0199999999", "0142387651"),
            ("PO_NUM", "4500000000", "4599999999", "4502340125"),
            ("SO_NUM", "0000000001", "0099999999", "0003100245"),
            ("MAT_NUM", "000000000000000001", "000000000099999999", "000000000000185042"),
        ]:
            items.append(("NUMBER_RANGE", obj, f"Number Range: {obj}", {
                "NROBJ": obj, "FROMNR": start, "TONR": end, "NRLEVEL": current,
            }))
        return items


class COConfig(ConfigObjectSpec):
    object_id = "CO_CONFIG"
    name = "Controlling Configuration"

    def config_mappings(self):
        return [
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("KTOPL", "ChartOfAccounts"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("PERIV", "FiscalYearVariant"),
            FieldMapping("KOSAR", "CostCenterCategory"),
            FieldMapping("KSTAR", "CostElement", convert="padLeft10"),
            FieldMapping("KATYP", "CostElementCategory"),
            FieldMapping("LSTAR", "ActivityType"),
            FieldMapping("LATYP", "ActivityTypeCategory"),
            FieldMapping("LEINH", "UnitOfMeasure"),
            FieldMapping("PRICE", "PlannedPrice", convert="toDecimal"),
            FieldMapping("STAGR", "StatisticalKeyFigure"),
            FieldMapping("STAGR_UNIT", "KeyFigureUnit"),
            FieldMapping("STAGR_TYPE", "KeyFigureType"),
            FieldMapping("ALLOC_TYPE", "AllocationType"),
            FieldMapping("ALLOC_CYCLE", "AllocationCycleName"),
        ]

    def config_items(self):
        items: List[ConfigItem] = [
            ("CONTROLLING_AREA", "1000", "Global Controlling Area", {
                "KOKRS": "1000", "KTOPL": "YCOA", "WAERS": "USD", "PERIV": "K4",
            }),
        ]
        for code, description in [
            ("E", "Production"), ("F", "Administration"), ("H", "Management"),
            ("L", "Logistics"), ("P", "Project"), ("V", "Sales & Distribution"),
        ]:
            items.append(("CC_CATEGORY", code, f"Cost Center Category: {description}", {"KOSAR": code}))
        for code, category, description in [
            ("400000", "1", "Revenue - Domestic"), ("410000", "1", "Revenue - Export"),
            ("500000", "1", "Material Costs"), ("600000", "1", "Personnel Costs"),
            ("610000", "1", "External Services"), ("620000", "1", "Depreciation"),
            ("900000", "41", "Assessment Allocation"), ("910000", "42", "Internal Activity Allocation"),
            ("920000", "43", "Overhead Surcharge"),
        ]:
            items.append(("COST_ELEMENT", code.zfill(10), description, {"KSTAR": code, "KATYP": category}))
        for code, description, category, unit, price in [
            ("LABOR", "Direct Labor", "1", "H", "75.00"), ("MACHINE", "Machine Hours", "1", "H", "120.00"),
            ("SETUP", "Setup Time", "1", "H", "90.00"), ("ENERGY", "Energy Consumption", "1", "KWH", "0.12"),
            ("OVHD", "Overhead Allocation", "3", "PCT", "0"),
        ]:
            items.append(("ACTIVITY_TYPE", code, description, {
                "LSTAR": code, "LATYP": category, "LEINH": unit, "PRICE": price,
            }))
        for code, description, unit, kind in [
            ("HEADCNT", "Headcount", "EA", "fixed"), ("SQMETER", "Square Meters", "M2", "fixed"),
            ("PCHOURS", "PC Hours", "H", "total"), ("TRNOVER", "Revenue Share", "PCT", "total"),
        ]:
            items.append(("STAT_KEY_FIGURE", code, description, {
                "STAGR": code, "STAGR_UNIT": unit, "STAGR_TYPE": kind,
            }))
        for cycle, description, kind in [
            ("ASSESS01", "Facility Cost Assessment", "assessment"),
            ("DISTR01", "IT Cost Distribution", "distribution"),
            ("ASSESS02", "Admin Overhead Assessment", "assessment"),
        ]:
            items.append(("ALLOCATION_CYCLE", cycle, description, {"ALLOC_TYPE": kind, "ALLOC_CYCLE": cycle}))
        return items


class MMConfig(ConfigObjectSpec):
    object_id = "MM_CONFIG"
    name = "Materials Management Configuration"

    def config_mappings(self):
        return [
            FieldMapping("WERKS", "Plant"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("FABKL", "FactoryCalendar"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            FieldMapping("LGORT", "StorageLocation"),
            FieldMapping("EKORG", "PurchasingOrganization"),
            FieldMapping("EKGRP", "PurchasingGroup"),
            FieldMapping("MTART", "MaterialType"),
            FieldMapping("MTREF", "ReferenceMaterialType"),
            FieldMapping("NUMKR", "NumberRangeKey"),
            FieldMapping("MATKL", "MaterialGroup"),
            FieldMapping("KTOKK", "VendorAccountGroup"),
        ]

    def config_items(self):
        items: List[ConfigItem] = []
        plants = [
            ("1100", "US Manufacturing", "1000", "US"), ("1200", "US Distribution", "1000", "US"),
            ("2100", "DE Manufacturing", "2000", "DE"), ("2200", "DE Distribution", "2000", "DE"),
            ("3100", "SG Operations", "3000", "SG"),
        ]
        for code, name, company, country in plants:
            items.append(("PLANT", code, f"Plant {code} - {name}", {
                "WERKS": code, "BUKRS": company, "FABKL": country, "LAND1": country,
            }))
        for plant, code, description in [
            ("1100", "0001", "Raw Materials"), ("1100", "0002", "Finished Goods"),
            ("1100", "0003", "Quality Inspection"), ("1200", "0001", "Distribution Stock"),
            ("2100", "0001", "Raw Materials"), ("2100", "0002", "Finished Goods"),
            ("3100", "0001", "General Stock"),
        ]:
            items.append(("STORAGE_LOCATION", f"{plant}-{code}", description, {"WERKS": plant, "LGORT": code}))
        for code, description, company in [
            ("1000", "US Purchasing", "1000"), ("2000", "EU Purchasing", "2000"), ("3000", "APAC Purchasing", "3000"),
        ]:
            items.append(("PURCHASING_ORG", code, description, {"EKORG": code, "BUKRS": company}))
        for code, description in [
            ("001", "Direct Materials"), ("002", "Indirect Materials"), ("003", "Services"), ("004", "Capital Equipment"),
        ]:
            items.append(("PURCHASING_GROUP", code, description, {"EKGRP": code}))
        for code, description, reference, number_range in [
            ("ROH", "Raw Material", "", "01"), ("HALB", "Semi-Finished", "", "01"),
            ("FERT", "Finished Product", "", "01"), ("HAWA", "Trading Goods", "", "02"),
            ("DIEN", "Service", "", "03"), ("NLAG", "Non-Stock Material", "", "03"),
            ("VERP", "Packaging Material", "ROH", "01"),
        ]:
            items.append(("MATERIAL_TYPE", code, description, {
                "MTART": code, "MTREF": reference, "NUMKR": number_range,
            }))
        for code, description in [
            ("001", "Metals & Alloys"), ("002", "Plastics & Polymers"), ("003", "Electronics"),
            ("004", "Chemicals"), ("005", "Packaging"),
        ]:
            items.append(("MATERIAL_GROUP", code, description, {"MATKL": code}))
        for code, description in [
            ("LIEF", "Standard Vendor"), ("KRED", "Creditor (one-time)"), ("CPDI", "Intercompany Vendor"),
        ]:
            items.append(("VENDOR_ACCOUNT_GROUP", code, description, {"KTOKK": code}))
        return items


class SDConfig(ConfigObjectSpec):
    object_id = "SD_CONFIG"
    name = "Sales and Distribution Configuration"

    def config_mappings(self):
        return [
            FieldMapping("VKORG", "SalesOrganization"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("VTWEG", "DistributionChannel"),
            FieldMapping("SPART", "Division"),
            FieldMapping("AUART", "SalesDocumentType"),
            FieldMapping("NUMKI", "InternalNumberRange"),
            FieldMapping("NUMKE", "ExternalNumberRange"),
            FieldMapping("LFART", "DeliveryType"),
            FieldMapping("FKART", "BillingType"),
            FieldMapping("KALSM", "PricingProcedure"),
            FieldMapping("KSCHL", "ConditionType"),
        ]

    def config_items(self):
        items: List[ConfigItem] = []
        for code, description, company in [
            ("1000", "US Sales", "1000"), ("2000", "EU Sales", "2000"), ("3000", "APAC Sales", "3000"),
        ]:
            items.append(("SALES_ORG", code, description, {"VKORG": code, "BUKRS": company}))
        for code, description in [("10", "Direct Sales"), ("20", "Wholesale"), ("30", "Retail"), ("40", "E-Commerce")]:
            items.append(("DIST_CHANNEL", code, description, {"VTWEG": code}))
        for code, description in [
            ("00", "Cross-Division"), ("01", "Industrial Products"), ("02", "Consumer Products"), ("03", "Services"),
        ]:
            items.append(("DIVISION", code, description, {"SPART": code}))
        for code, description, internal, external in [
            ("OR", "Standard Order", "01", "02"), ("RE", "Returns", "03", ""),
            ("SO", "Rush Order", "01", ""), ("CR", "Credit Memo Request", "05", ""),
            ("DR", "Debit Memo Request", "05", ""), ("QT", "Quotation", "10", ""),
            ("IN", "Inquiry", "10", ""), ("KE", "Consignment Fill-Up", "01", ""),
        ]:
            items.append(("SALES_DOC_TYPE", code, description, {"AUART": code, "NUMKI": internal, "NUMKE": external}))
        for code, description in [
            ("LF", "Outbound Delivery"), ("NL", "Replenishment Delivery"), ("EL", "Inbound Delivery"), ("LR", "Return Delivery"),
        ]:
            items.append(("DELIVERY_TYPE", code, description, {"LFART": code}))
        for code, description in [
            ("F2", "Invoice"), ("G2", "Credit Memo"), ("L2", "Debit Memo"), ("S1", "Cancellation"), ("F8", "Pro-forma Invoice"),
        ]:
            items.append(("BILLING_TYPE", code, description, {"FKART": code}))
        for procedure, description in [("RVAA01", "Standard Pricing"), ("RVAA02", "Pricing with Rebates")]:
            items.append(("PRICING_PROCEDURE", procedure, description, {"KALSM": procedure}))
        for code, description in [
            ("PR00", "Base Price"), ("K004", "Material Discount"), ("K005", "Customer Discount"),
            ("K007", "Customer/Material Discount"), ("KF00", "Freight"), ("MWST", "Tax (Output)"),
        ]:
            items.append(("CONDITION_TYPE", code, description, {"KSCHL": code}))
        return items


CONFIG_OBJECTS = (FIConfig, COConfig, MMConfig, SDConfig)
