"""SAP ECC controlling and project system migration objects."""

from typing import List

from ..field_mapping import FieldMapping
from ..quality import QualityChecks, RangeCheck
from .common import ECCObjectSpec, month

COST_CENTER_NAMES = [
    "Production Line 1", "Production Line 2", "Administration", "Finance Dept",
    "Human Resources", "IT Department", "Sales Domestic", "Sales Export",
    "Warehouse Ops", "Quality Control", "R&D Lab", "Maintenance",
    "Executive Office", "Legal Department", "Marketing", "Customer Service",
    "Procurement", "Engineering", "Facilities", "Training Center",
]


class CostCenter(ECCObjectSpec):
    object_id = "COST_CENTER"
    name = "Cost Center"
    source_table = "CSKS"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("DATBI", "ValidityEndDate", convert="toDate"),
            FieldMapping("DATAB", "ValidityStartDate", convert="toDate"),
            FieldMapping("KTEXT", "CostCenterName"),
            FieldMapping("LTEXT", "CostCenterDescription"),
            FieldMapping("VERAK", "PersonResponsible"),
            FieldMapping("VERAK_USE", "ResponsibleUser"),
            FieldMapping("KOSAR", "CostCenterCategory"),
            FieldMapping("KHINR", "CostCenterHierarchyArea"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("GSBER", "BusinessArea"),
            FieldMapping("FUNC_AREA", "FunctionalArea"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            FieldMapping("ORT01", "City"),
            FieldMapping("PSTLZ", "PostalCode"),
            FieldMapping("REGIO", "Region"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("SPRAS", "Language", convert="toUpperCase"),
            FieldMapping("BKZKP", "LockIndicator", convert="toBoolean"),
            FieldMapping("PKZRV", "ActualRevenueCCtr"),
            FieldMapping("SEGMENT", "Segment"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ControllingArea", "CostCenter", "CostCenterName", "ValidityStartDate"],
            exact_duplicate=["ControllingArea", "CostCenter", "ValidityStartDate"],
        )

    def extract_mock(self, rng):
        categories = ["E", "F", "H", "L", "P"]
        records = []
        for i in range(1, 21):
            name = COST_CENTER_NAMES[i - 1]
            first_site = i <= 10
            records.append({
                "KOKRS": "1000",
                "KOSTL": f"CC{i:04d}",
                "DATBI": "99991231",
                "DATAB": "20200101",
                "KTEXT": name,
                "LTEXT": f"{name} - Company 1000",
                "VERAK": f"Manager {i}",
                "VERAK_USE": f"MGR{i:03d}",
                "KOSAR": categories[(i - 1) % 5],
                "KHINR": "H1",
                "BUKRS": "1000" if i <= 15 else "2000",
                "GSBER": "BU01",
                "FUNC_AREA": f"FA{(i - 1) % 4 + 1:02d}",
                "PRCTR": f"PC{(i - 1) % 5 + 1:04d}",
                "WERKS": "1000" if first_site else "2000",
                "LAND1": "US",
                "ORT01": "New York" if first_site else "Chicago",
                "PSTLZ": "10001" if first_site else "60601",
                "REGIO": "NY" if first_site else "IL",
                "WAERS": "USD",
                "SPRAS": "EN",
                "BKZKP": "",
                "PKZRV": "" if i <= 5 else "X",
                "SEGMENT": "SEG1",
            })
        return records


COST_ELEMENTS = [
    # cost element, category, description
    ("400000", "11", "Revenue - Domestic"),
    ("410000", "11", "Revenue - Export"),
    ("420000", "12", "Sales Deductions"),
    ("500000", "1", "Cost of Goods Sold"),
    ("510000", "1", "Raw Material Consumption"),
    ("520000", "1", "Packaging Material"),
    ("600000", "1", "Salaries"),
    ("601000", "1", "Wages"),
    ("610000", "1", "Social Security"),
    ("620000", "1", "Pension Contributions"),
    ("630000", "1", "Travel Expenses"),
    ("640000", "1", "Depreciation"),
    ("650000", "1", "Rent and Leases"),
    ("660000", "1", "Utilities"),
    ("670000", "1", "Maintenance and Repairs"),
    ("680000", "1", "Insurance"),
    ("690000", "1", "Consulting Fees"),
    ("700000", "1", "Interest Expense"),
    ("710000", "1", "Bank Charges"),
    ("720000", "1", "IT Services"),
    ("730000", "1", "Marketing Expenses"),
    ("740000", "1", "Training"),
    ("750000", "1", "Office Supplies"),
    ("760000", "1", "Telecommunications"),
    ("770000", "1", "Freight Out"),
    ("900000", "42", "Assessment - Facilities"),
    ("901000", "42", "Assessment - IT"),
    ("902000", "42", "Assessment - HR"),
    ("910000", "43", "Activity Allocation - Labor"),
    ("911000", "43", "Activity Allocation - Machine"),
    ("920000", "41", "Overhead Surcharge - Material"),
    ("921000", "41", "Overhead Surcharge - Production"),
    ("930000", "21", "Internal Settlement"),
    ("940000", "31", "Order Results Analysis"),
    ("950000", "90", "Statistical Headcount"),
]


class CostElement(ECCObjectSpec):
    object_id = "COST_ELEMENT"
    name = "Cost Element Master"
    source_table = "CSKA"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("KSTAR", "CostElement", convert="padLeft10"),
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("KATYP", "CostElementCategory"),
            FieldMapping("DATAB", "ValidFrom", convert="toDate"),
            FieldMapping("DATBI", "ValidTo", convert="toDate"),
            FieldMapping("KTEXT", "Description"),
            FieldMapping("SPRAS", "Language", convert="toUpperCase"),
            FieldMapping("SAKNR", "GLAccount", convert="padLeft10"),
            FieldMapping("KTOPL", "ChartOfAccounts"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("ERDAT", "CreatedDate", convert="toDate"),
            FieldMapping("USNAM", "CreatedBy"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["CostElement", "ControllingArea"],
            exact_duplicate=["CostElement", "ControllingArea"],
        )

    def extract_mock(self, rng):
        return [
            {
                "KSTAR": element,
                "KOKRS": "1000",
                "BUKRS": "1000",
                "KATYP": category,
                "DATAB": "20150101",
                "DATBI": "99991231",
                "KTEXT": description,
                "SPRAS": "EN",
                # Secondary cost elements (category 21 and above) have no GL account
                "SAKNR": element if int(category) < 20 else "",
                "KTOPL": "CAUS",
                "PRCTR": "",
                "WAERS": "USD",
                "ERDAT": "20150101",
                "USNAM": "MIGRATION",
            }
            for element, category, description in COST_ELEMENTS
        ]


PROFIT_CENTERS = [
    # profit center, name, segment
    ("PC0001", "Industrial Products", "SEG1"),
    ("PC0002", "Consumer Products", "SEG1"),
    ("PC0003", "Services", "SEG2"),
    ("PC0004", "Spare Parts", "SEG2"),
    ("PC0005", "Shared Services", "SEG3"),
    ("PC1001", "North America Sales", "SEG1"),
    ("PC1002", "Europe Sales", "SEG1"),
    ("PC2001", "Manufacturing Plant 1000", "SEG2"),
    ("PC2002", "Manufacturing Plant 2000", "SEG2"),
    ("PC9999", "Dummy Profit Center", "SEG3"),
]


class ProfitCenter(ECCObjectSpec):
    """Profit center master data from the EC-PCA tables."""

    object_id = "PROFIT_CENTER"
    name = "Profit Center"
    source_table = "CEPC"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("DATBI", "ValidityEndDate", convert="toDate"),
            FieldMapping("DATAB", "ValidityStartDate", convert="toDate"),
            FieldMapping("KTEXT", "ProfitCenterName"),
            FieldMapping("LTEXT", "ProfitCenterLongName"),
            FieldMapping("VERAK", "PersonResponsible"),
            FieldMapping("ABTEI", "Department"),
            FieldMapping("KHINR", "ProfitCenterStandardHierarchy"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("SEGMENT", "Segment"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("LOCK_IND", "IsBlocked", convert="toBoolean"),
            FieldMapping("ERSDA", "CreationDate", convert="toDate"),
            FieldMapping("USNAM", "CreatedByUser"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ControllingArea", "ProfitCenter", "ProfitCenterName", "ValidityStartDate"],
            exact_duplicate=["ControllingArea", "ProfitCenter", "ValidityEndDate"],
        )

    def extract_mock(self, rng):
        return [
            {
                "KOKRS": "1000",
                "PRCTR": profit_center,
                "DATBI": "99991231",
                "DATAB": "20200101",
                "KTEXT": name[:20],
                "LTEXT": name,
                "VERAK": f"Controller {i}",
                "ABTEI": "FIN",
                "KHINR": "PCH_STD",
                "BUKRS": "2000" if "Europe" in name or "2000" in name else "1000",
                "SEGMENT": segment,
                "LAND1": "DE" if "Europe" in name else "US",
                "WAERS": "EUR" if "Europe" in name else "USD",
                "LOCK_IND": "X" if profit_center == "PC9999" else "",
                "ERSDA": "20200101",
                "USNAM": "MIGRATION",
            }
            for i, (profit_center, name, segment) in enumerate(PROFIT_CENTERS, start=1)
        ]


class ProfitSegment(ECCObjectSpec):
    object_id = "PROFIT_SEGMENT"
    name = "Profitability Segment"
    source_table = "CE4"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("PAOBJNR", "ProfitabilitySegmentNumber"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("KNDNR", "Customer"),
            FieldMapping("LAND1", "CustomerCountry", convert="toUpperCase"),
            FieldMapping("KDGRP", "CustomerGroup"),
            FieldMapping("ARTNR", "Material"),
            FieldMapping("MATKL", "MaterialGroup"),
            FieldMapping("VKORG", "SalesOrganization"),
            FieldMapping("VTWEG", "DistributionChannel"),
            FieldMapping("SPART", "Division"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("GJAHR", "FiscalYear"),
            FieldMapping("PERDE", "Period"),
            FieldMapping("VV010", "RevenueAmount", convert="toDecimal"),
            FieldMapping("VV030", "DiscountAmount", convert="toDecimal"),
            FieldMapping("VV140", "COGSAmount", convert="toDecimal"),
            FieldMapping("VV060", "QuantitySold", convert="toDecimal"),
            FieldMapping("WAERS", "Currency"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ProfitabilitySegmentNumber", "ControllingArea", "FiscalYear"],
            exact_duplicate=["ProfitabilitySegmentNumber"],
        )

    def extract_mock(self, rng):
        countries = ["US", "US", "DE", "GB", "FR"]
        records = []
        for i in range(30):
            revenue = rng.uniform(5000, 105000)
            quantity = rng.randint(10, 1009)
            records.append({
                "PAOBJNR": str(100001 + i),
                "BUKRS": "1000" if i < 20 else "2000",
                "KOKRS": "1000",
                "KNDNR": f"CUST{i % 10 + 1:03d}",
                "LAND1": countries[i % 5],
                "KDGRP": f"{i % 3 + 1:02d}",
                "ARTNR": f"MAT{i % 15 + 1:05d}",
                "MATKL": f"{i % 5 + 1:03d}",
                "VKORG": "1000" if i < 20 else "2000",
                "VTWEG": "10" if i % 2 == 0 else "20",
                "SPART": "01",
                "WERKS": "1000" if i < 20 else "2000",
                "PRCTR": f"PC{i % 5 + 1:04d}",
                "GJAHR": "2024",
                "PERDE": month(i),
                "VV010": f"{revenue:.2f}",
                "VV030": f"{revenue * 0.05:.2f}",
                "VV140": f"{revenue * 0.6:.2f}",
                "VV060": str(quantity),
                "WAERS": "USD" if i < 20 else "EUR",
            })
        return records


class InternalOrder(ECCObjectSpec):
    object_id = "INTERNAL_ORDER"
    name = "Internal Order"
    source_table = "AUFK"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("AUFNR", "InternalOrder", convert="padLeft12"),
            FieldMapping("AUART", "OrderType"),
            FieldMapping("AUTYP", "OrderCategory"),
            FieldMapping("KTEXT", "OrderDescription"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("KOSTV", "ResponsibleCostCenter", convert="padLeft10"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("ERDAT", "CreationDate", convert="toDate"),
            FieldMapping("ERNAM", "CreatedByUser"),
            FieldMapping("PHAS1", "IsReleased", convert="toBoolean"),
            FieldMapping("PHAS2", "IsTechnicallyComplete", convert="toBoolean"),
            FieldMapping("PHAS3", "IsClosed", convert="toBoolean"),
            FieldMapping("LOEKZ", "IsDeleted", convert="toBoolean"),
            FieldMapping("OBJNR", "ObjectNumber"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["InternalOrder", "OrderType", "CompanyCode", "ControllingArea"],
            exact_duplicate=["InternalOrder"],
        )

    def extract_mock(self, rng):
        order_types = [("0100", "Overhead Order"), ("0200", "Investment Order"), ("0400", "Marketing Campaign")]
        records = []
        for i in range(1, 26):
            order_type, label = order_types[i % 3]
            order = f"{400000 + i}"
            closed = i % 7 == 0
            records.append({
                "AUFNR": order,
                "AUART": order_type,
                "AUTYP": "01",
                "KTEXT": f"{label} {i}",
                "BUKRS": "1000" if i <= 18 else "2000",
                "KOKRS": "1000",
                "KOSTV": f"CC{i % 20 + 1:04d}",
                "PRCTR": f"PC{i % 5 + 1:04d}",
                "WERKS": "1000" if i <= 18 else "2000",
                "WAERS": "USD",
                "ERDAT": f"2023{month(i)}01",
                "ERNAM": "CONTROLLER",
                "PHAS1": "" if closed else "X",
                "PHAS2": "X" if i % 5 == 0 else "",
                "PHAS3": "X" if closed else "",
                "LOEKZ": "",
                "OBJNR": f"OR{order.zfill(12)}",
            })
        return records


PROJECTS = [
    # project, description, company code
    ("P-1001", "ERP Modernization", "1000"),
    ("P-1002", "Plant Expansion Ohio", "1000"),
    ("P-2001", "Warehouse Automation EU", "2000"),
]


class WBSElement(ECCObjectSpec):
    object_id = "WBS_ELEMENT"
    name = "WBS Element"
    source_table = "PRPS"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("PSPID", "ProjectDefinition"),
            FieldMapping("POST1", "ProjectDescription"),
            FieldMapping("VERNR", "PersonResponsible"),
            FieldMapping("PROFL", "ProjectProfile"),
            FieldMapping("POSID", "WBSElement"),
            FieldMapping("POST1_WBS", "WBSDescription"),
            FieldMapping("STUFE", "WBSLevel", convert="toInteger"),
            FieldMapping("UP", "WBSElementParent"),
            FieldMapping("PBUKR", "CompanyCode"),
            FieldMapping("PKOKR", "ControllingArea"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("PLFAZ", "PlannedStartDate", convert="toDate"),
            FieldMapping("PLSEZ", "PlannedEndDate", convert="toDate"),
            FieldMapping("BELKZ", "AccountAssignmentElement", convert="toBoolean"),
            FieldMapping("PLAKZ", "PlanningElement", convert="toBoolean"),
            FieldMapping("FAKKZ", "BillingElement", convert="toBoolean"),
            FieldMapping("WAERS", "Currency"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["WBSElement", "WBSDescription", "CompanyCode", "ControllingArea"],
            exact_duplicate=["WBSElement"],
            ranges=[RangeCheck("WBSLevel", 1, 10)],
        )

    def extract_mock(self, rng):
        # Each project has one root, two phases and three work packages
        phases = ["Design", "Execution"]
        records = []
        for number, (project, description, company) in enumerate(PROJECTS, start=1):
            elements = [(project, description, 1, "")]
            for p, phase in enumerate(phases, start=1):
                elements.append((f"{project}.{p}", f"{description} - {phase}", 2, project))
            for w in range(1, 4):
                elements.append((f"{project}.2.{w}", f"{description} - Work Package {w}", 3, f"{project}.2"))
            for element, text, level, parent in elements:
                records.append({
                    "PSPID": project,
                    "POST1": description,
                    "VERNR": f"{number:08d}",
                    "PROFL": "ZPS0001",
                    "POSID": element,
                    "POST1_WBS": text,
                    "STUFE": level,
                    "UP": parent,
                    "PBUKR": company,
                    "PKOKR": "1000",
                    "PRCTR": f"PC{number:04d}",
                    "WERKS": company,
                    "PLFAZ": "20240101",
                    "PLSEZ": "20251231",
                    "BELKZ": "X" if level == 3 else "",
                    "PLAKZ": "X",
                    "FAKKZ": "X" if level == 1 else "",
                    "WAERS": "EUR" if company == "2000" else "USD",
                })
        return records


CONTROLLING_OBJECTS = (CostCenter, CostElement, ProfitCenter, ProfitSegment, InternalOrder, WBSElement)
