"""SAP ECC production planning, quality and plant maintenance objects."""

from typing import Any, Dict, List

from ..field_mapping import FieldMapping
from ..quality import QualityChecks
from .common import ECCObjectSpec, month

PLANTS = ["1000", "2000"]


class ProductionOrder(ECCObjectSpec):
    object_id = "PRODUCTION_ORDER"
    name = "Production Order"
    source_table = "AUFK"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("AUFNR", "OrderNumber"),
            FieldMapping("AUART", "OrderType"),
            FieldMapping("KTEXT", "OrderDescription"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("MATNR", "Material", convert="padLeft40"),
            FieldMapping("GAMNG", "OrderQuantity", convert="toDecimal"),
            FieldMapping("GMEIN", "UnitOfMeasure"),
            FieldMapping("ERDAT", "CreatedDate", convert="toDate"),
            FieldMapping("STATUS", "SystemStatus"),
            FieldMapping("OBJNR", "ObjectNumber"),
            # Dates (AFKO)
            FieldMapping("GSTRP", "BasicStartDate", convert="toDate"),
            FieldMapping("GLTRP", "BasicFinishDate", convert="toDate"),
            FieldMapping("GSTRS", "ScheduledStart", convert="toDate"),
            FieldMapping("GLTRS", "ScheduledFinish", convert="toDate"),
            FieldMapping("GSTRI", "ActualStartDate", convert="toDate"),
            FieldMapping("GLTRI", "ActualFinishDate", convert="toDate"),
            # Master data references
            FieldMapping("PLNNR", "RoutingNumber"),
            FieldMapping("STLNR", "BOMNumber"),
            FieldMapping("VERID", "ProductionVersion"),
            FieldMapping("PLNUM", "PlannedOrderNumber"),
            FieldMapping("FEVOR", "ProductionSupervisor"),
            FieldMapping("ARBPL", "WorkCenter"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("LGORT", "StorageLocation"),
            # Quantities (AFPO)
            FieldMapping("PSAMG", "ScrapQuantity", convert="toDecimal"),
            FieldMapping("IGMNG", "TotalConfirmedQty", convert="toDecimal"),
            FieldMapping("WEMNG", "GoodsReceiptQuantity", convert="toDecimal"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["OrderNumber", "OrderType", "Plant", "Material"],
            exact_duplicate=["OrderNumber"],
        )

    def extract_mock(self, rng):
        order_types = ["PP01", "PP01", "PP02", "PP01", "PP03"]
        finished = ["FERT-PUMP-100", "FERT-MOTOR-200", "FERT-VALVE-300", "FERT-GEAR-400", "FERT-FRAME-500"]
        semi = ["HALB-SHAFT-110", "HALB-HOUS-210", "HALB-SEAL-310", "HALB-BEAR-410", "HALB-FLNG-510"]
        work_centers = ["WC-ASSY", "WC-MACH", "WC-PACK", "WC-WELD", "WC-PAINT"]
        records = []
        for i in range(1, 21):
            is_finished = i % 2 == 1
            material = (finished if is_finished else semi)[(i - 1) % 5]
            plant = PLANTS[(i - 1) % 2]
            quantity = 50 + i * 10
            has_actual = i <= 12
            confirmed = int(quantity * rng.uniform(0.6, 0.95)) if has_actual else 0
            period = f"2024{month(i)}"
            records.append({
                "AUFNR": str(1000000 + i),
                "AUART": order_types[(i - 1) % 5],
                "KTEXT": f"Production of {material}",
                "BUKRS": plant,
                "WERKS": plant,
                "MATNR": material,
                "GAMNG": str(quantity),
                "GMEIN": "EA" if is_finished else "PC",
                "ERDAT": f"{period}05",
                "STATUS": "REL CNF" if has_actual else "CRTD REL",
                "OBJNR": f"OR{1000000 + i}",
                "GSTRP": f"{period}10",
                "GLTRP": f"{period}25",
                "GSTRS": f"{period}11",
                "GLTRS": f"{period}24",
                "GSTRI": f"{period}12" if has_actual else "",
                "GLTRI": f"{period}23" if has_actual and i <= 8 else "",
                "PLNNR": f"RTG-{(i - 1) % 5 + 1:04d}",
                "STLNR": f"BOM-{(i - 1) % 5 + 1:04d}",
                "VERID": "0001",
                "PLNUM": str(9000000 + i) if i % 3 == 0 else "",
                "FEVOR": f"PG{(i - 1) % 3 + 1:02d}",
                "ARBPL": work_centers[(i - 1) % 5],
                "KOSTL": f"CC{(i - 1) % 10 + 1:04d}",
                "PRCTR": f"PC{(i - 1) % 5 + 1:04d}",
                "LGORT": ["0001", "0002", "0003"][(i - 1) % 3],
                "PSAMG": str(int(quantity * 0.02)),
                "IGMNG": str(confirmed),
                "WEMNG": str(confirmed) if has_actual and i <= 8 else "0",
            })
        return records


BOM_HEADERS = [
    ("FERT001", "Finished Product A", "1000"),
    ("FERT002", "Finished Product B", "1000"),
    ("FERT003", "Finished Product C", "2000"),
    ("HALB001", "Semi-Finished D", "1000"),
    ("HALB002", "Semi-Finished E", "2000"),
]
BOM_COMPONENTS = ["ROH001", "ROH002", "ROH003", "ROH004", "ROH005", "HALB001", "HALB002"]
ROUTING_WORK_CENTERS = ["WC-ASSY", "WC-MACH", "WC-PACK", "WC-QUAL", "WC-WELD"]


class BOMRouting(ECCObjectSpec):
    """
    Bills of material and routings in one object.

    Each row is either a ``BOM_ITEM`` or a ``ROUTING_OP``; fields of the
    other record type stay empty.
    """

    object_id = "BOM_ROUTING"
    name = "BOM and Routing"
    source_table = "STPO"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("RECORD_TYPE", "RecordType"),
            FieldMapping("MATNR", "Material", convert="padLeft40"),
            FieldMapping("WERKS", "Plant"),
            # BOM header and item (STKO/STPO)
            FieldMapping("STLNR", "BOMNumber"),
            FieldMapping("STLAL", "BOMAlternative"),
            FieldMapping("STLAN", "BOMUsage"),
            FieldMapping("DATUV", "BOMValidFrom", convert="toDate"),
            FieldMapping("STKTX", "BOMDescription"),
            FieldMapping("BMENG", "BaseQuantity", convert="toDecimal"),
            FieldMapping("BMEIN", "BaseUnit"),
            FieldMapping("POSNR", "ItemNumber"),
            FieldMapping("POSTP", "ItemCategory"),
            FieldMapping("IDNRK", "ComponentMaterial", convert="padLeft40"),
            FieldMapping("MENGE", "ComponentQuantity", convert="toDecimal"),
            FieldMapping("MEINS", "ComponentUnit"),
            FieldMapping("AENNR", "ChangeNumber"),
            # Routing header and operation (PLKO/PLPO)
            FieldMapping("PLNTY", "RoutingType"),
            FieldMapping("PLNNR", "RoutingGroup"),
            FieldMapping("PLNAL", "RoutingGroupCounter"),
            FieldMapping("KTEXT", "RoutingDescription"),
            FieldMapping("VORNR", "OperationNumber"),
            FieldMapping("LTXA1", "OperationDescription"),
            FieldMapping("ARBPL", "WorkCenter"),
            FieldMapping("STEUS", "ControlKey"),
            FieldMapping("VGW01", "SetupTime", convert="toDecimal"),
            FieldMapping("VGW02", "MachineTime", convert="toDecimal"),
            FieldMapping("VGW03", "LaborTime", convert="toDecimal"),
            FieldMapping("VGE01", "TimeUnit"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["Material", "Plant", "RecordType"],
            exact_duplicate=["Material", "Plant", "RecordType", "ItemNumber", "OperationNumber"],
        )

    def extract_mock(self, rng):
        records = []
        for index, (material, description, plant) in enumerate(BOM_HEADERS):
            component_count = 4 + index % 3
            for i in range(1, component_count + 1):
                records.append({
                    "RECORD_TYPE": "BOM_ITEM",
                    "MATNR": material,
                    "WERKS": plant,
                    "STLNR": f"BOM_{material}",
                    "STLAL": "01",
                    "STLAN": "1",
                    "DATUV": "20200101",
                    "STKTX": f"BOM for {description}",
                    "BMENG": "1",
                    "BMEIN": "EA",
                    "POSNR": f"{i * 10:04d}",
                    "POSTP": "L" if i < component_count else "N",
                    "IDNRK": BOM_COMPONENTS[(i - 1) % len(BOM_COMPONENTS)],
                    "MENGE": "2" if i <= 2 else "1",
                    "MEINS": "EA",
                    "AENNR": "ECN-001" if i == 1 else "",
                })
            for o in range(1, 4 + index % 2):
                work_center = ROUTING_WORK_CENTERS[(o - 1) % 5]
                records.append({
                    "RECORD_TYPE": "ROUTING_OP",
                    "MATNR": material,
                    "WERKS": plant,
                    "PLNTY": "N",
                    "PLNNR": f"RTG_{material}",
                    "PLNAL": "01",
                    "KTEXT": f"Routing for {description}",
                    "VORNR": f"{o * 10:04d}",
                    "LTXA1": f"{work_center} Operation",
                    "ARBPL": work_center,
                    "STEUS": "PP01",
                    "VGW01": str(5 + o),
                    "VGW02": str(10 + o * 5),
                    "VGW03": str(8 + o * 3),
                    "VGE01": "MIN",
                })
        return records


INSPECTION_PLANS = [
    ("QP001", "Incoming Inspection - Raw Materials", "MAT00001", "5"),
    ("QP002", "In-Process Inspection - Assembly", "MAT00003", "5"),
    ("QP003", "Final Inspection - Finished Goods", "MAT00005", "5"),
    ("QP004", "Vendor Quality Audit", "", "6"),
    ("QP005", "Periodic Calibration Check", "", "6"),
]
INSPECTION_OPERATIONS = [
    ("0010", "Visual Inspection", "QC-01", "QM01"),
    ("0020", "Dimensional Check", "QC-02", "QM01"),
    ("0030", "Functional Test", "QC-03", "QM02"),
]
# number, text, type (Q qualitative, M measured), target, upper, lower, unit
CHARACTERISTICS = [
    ("001", "Surface Quality", "Q", 0, 0, 0, ""),
    ("002", "Length (mm)", "M", 100, 100.5, 99.5, "MM"),
    ("003", "Weight (g)", "M", 250, 252, 248, "G"),
]


class InspectionPlan(ECCObjectSpec):
    object_id = "INSPECTION_PLAN"
    name = "Inspection Plan"
    source_table = "PLKO"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("PLNTY", "TaskListType"),
            FieldMapping("PLNNR", "TaskListGroup"),
            FieldMapping("PLNAL", "TaskListGroupCounter"),
            FieldMapping("KTEXT", "TaskListDescription"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("VERWE", "TaskListUsage"),
            FieldMapping("STATU", "TaskListStatus"),
            FieldMapping("MATNR", "Material", convert="padLeft40"),
            FieldMapping("DATUV", "KeyDate", convert="toDate"),
            FieldMapping("SLWBEZ", "InspectionPoint"),
            # Operation
            FieldMapping("VORNR", "OperationNumber"),
            FieldMapping("LTXA1", "OperationDescription"),
            FieldMapping("ARBPL", "WorkCenter"),
            FieldMapping("STEUS", "ControlKey"),
            FieldMapping("VGW01", "StandardValue1", convert="toDecimal"),
            FieldMapping("VGE01", "Unit1"),
            # Inspection characteristic (PLMK)
            FieldMapping("MERKNR", "CharacteristicNumber"),
            FieldMapping("VERWMERKM", "MasterInspCharacteristic"),
            FieldMapping("KURZTEXT", "CharacteristicText"),
            FieldMapping("CHAR_TYPE", "CharacteristicType"),
            FieldMapping("SOLLWERT", "TargetValue", convert="toDecimal"),
            FieldMapping("TOLERANZOB", "UpperLimit", convert="toDecimal"),
            FieldMapping("TOLERANZUN", "LowerLimit", convert="toDecimal"),
            FieldMapping("MASSEINHSW", "UnitOfMeasure"),
            FieldMapping("STICHPRVER", "SamplingProcedure"),
            FieldMapping("PROBEMGEH", "SampleSize", convert="toInteger"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["TaskListGroup", "Plant", "OperationNumber"],
            exact_duplicate=["TaskListGroup", "TaskListGroupCounter", "OperationNumber", "CharacteristicNumber"],
        )

    def extract_mock(self, rng):
        records = []
        for group, description, material, usage in INSPECTION_PLANS:
            for operation, op_text, work_center, control_key in INSPECTION_OPERATIONS:
                for number, text, char_type, target, upper, lower, unit in CHARACTERISTICS:
                    records.append({
                        "PLNTY": "Q",
                        "PLNNR": group,
                        "PLNAL": "01",
                        "KTEXT": description,
                        "WERKS": "1000",
                        "VERWE": usage,
                        "STATU": "4",
                        "MATNR": material,
                        "DATUV": "20240101",
                        "SLWBEZ": "SP01",
                        "VORNR": operation,
                        "LTXA1": op_text,
                        "ARBPL": work_center,
                        "STEUS": control_key,
                        "VGW01": "0.50",
                        "VGE01": "H",
                        "MERKNR": number,
                        "VERWMERKM": f"MIC-{number}",
                        "KURZTEXT": text,
                        "CHAR_TYPE": char_type,
                        "SOLLWERT": str(target),
                        "TOLERANZOB": str(upper),
                        "TOLERANZUN": str(lower),
                        "MASSEINHSW": unit,
                        "STICHPRVER": "SP-FIX5",
                        "PROBEMGEH": "5",
                    })
        return records


# category -> (manufacturers, models)
EQUIPMENT_TYPES = {
    "PUMP": (["Grundfos", "KSB", "Sulzer"], ["GP-200", "KS-350", "SZ-500"]),
    "MOTOR": (["Siemens", "ABB", "WEG"], ["SM-110", "AB-220", "WG-375"]),
    "CONVEYOR": (["Hytrol", "Dorner", "FlexLink"], ["HY-2400", "DN-3200", "FL-1800"]),
    "COMPRESSOR": (["Atlas Copco", "Kaeser", "Ingersoll Rand"], ["AC-750", "KA-500", "IR-900"]),
    "GENERATOR": (["Caterpillar", "Cummins", "Kohler"], ["CT-1000", "CM-800", "KH-600"]),
}
EQUIPMENT_LOCATIONS = ["PROD-HALL-A", "PROD-HALL-B", "UTIL-ROOM", "MAINT-SHOP", "WAREHOUSE"]


class EquipmentMaster(ECCObjectSpec):
    object_id = "EQUIPMENT_MASTER"
    name = "Equipment Master"
    source_table = "EQUI"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("EQUNR", "EquipmentNumber", convert="padLeft18"),
            FieldMapping("EQKTX", "EquipmentDescription"),
            FieldMapping("EQTYP", "EquipmentCategory"),
            FieldMapping("EQART", "ObjectType"),
            FieldMapping("HERST", "Manufacturer"),
            FieldMapping("TYPBZ", "ModelNumber"),
            FieldMapping("SERGE", "SerialNumber"),
            FieldMapping("BAUJJ", "ConstructionYear", convert="toInteger"),
            FieldMapping("BAUMM", "ConstructionMonth", convert="toInteger"),
            FieldMapping("INBDT", "StartupDate", convert="toDate"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("STORT", "Location"),
            FieldMapping("TIDNR", "TechnicalIdentNumber"),
            # Maintenance data (EQUZ/ILOA)
            FieldMapping("IWERK", "MaintenancePlant"),
            FieldMapping("INGRP", "MaintenancePlannerGroup"),
            FieldMapping("GEWRK", "MainWorkCenter"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("HEQUI", "SuperiorEquipment"),
            FieldMapping("ANLNR", "AssetNumber"),
            FieldMapping("TPLNR", "FunctionalLocation"),
            FieldMapping("ABCKZ", "ABCIndicator"),
            FieldMapping("BRGEW", "EquipmentWeight", convert="toDecimal"),
            FieldMapping("GEWEI", "WeightUnit"),
            FieldMapping("STATUS", "SystemStatus"),
            FieldMapping("DATAB", "ValidFrom", convert="toDate"),
            FieldMapping("DATBI", "ValidTo", convert="toDate"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["EquipmentNumber", "EquipmentDescription", "Plant"],
            exact_duplicate=["EquipmentNumber"],
        )

    def extract_mock(self, rng):
        categories = list(EQUIPMENT_TYPES)
        records = []
        for e in range(1, 31):
            category = categories[(e - 1) % 5]
            manufacturers, models = EQUIPMENT_TYPES[category]
            maker = (e - 1) % 3
            plant = PLANTS[0] if e <= 20 else PLANTS[1]
            year = 2015 + e % 9
            built = f"{year}{e % 12 + 1:02d}"
            weight = 2000 + e * 50 if category == "GENERATOR" else 100 + e * 15
            records.append({
                "EQUNR": f"EQ{e:08d}",
                "EQKTX": f"{manufacturers[maker]} {category.capitalize()} Unit {e}",
                "EQTYP": category[0],
                "EQART": category,
                "HERST": manufacturers[maker],
                "TYPBZ": models[maker],
                "SERGE": f"{category[:2]}-{e:06d}",
                "BAUJJ": str(year),
                "BAUMM": str(e % 12 + 1),
                "INBDT": f"{built}15",
                "BUKRS": plant,
                "WERKS": plant,
                "STORT": EQUIPMENT_LOCATIONS[(e - 1) % 5],
                "TIDNR": f"TID-{category}-{e:04d}",
                "IWERK": plant,
                "INGRP": f"MPG{(e - 1) % 3 + 1:02d}",
                "GEWRK": f"WC-M{(e - 1) % 5 + 1:03d}",
                "KOSTL": f"CC{plant[-2:]}{(e - 1) % 5 + 1:02d}",
                "HEQUI": f"EQ{e - 1:08d}" if e % 6 == 0 else "",
                "ANLNR": f"{e:012d}",
                "TPLNR": f"{plant}-PR-LN{(e - 1) % 2 + 1:02d}",
                "ABCKZ": "A" if e % 10 <= 3 else "B" if e % 10 <= 6 else "C",
                "BRGEW": f"{weight:.1f}",
                "GEWEI": "KG",
                "STATUS": "INAC" if e % 15 == 0 else "AVLB",
                "DATAB": f"{built}01",
                "DATBI": "99991231",
            })
        return records


FL_AREAS = [("PR", "Production Area", "PRODUCTION"), ("UT", "Utilities Area", "UTILITIES"), ("WH", "Warehouse Area", "LOGISTICS")]
FL_LINES = [("LN01", "Line 1"), ("LN02", "Line 2")]
FL_STATIONS = [("ST01", "Station 1 - Intake"), ("ST02", "Station 2 - Processing")]


class FunctionalLocation(ECCObjectSpec):
    """Plant, area, line and station hierarchy; parents precede children."""

    object_id = "FUNCTIONAL_LOCATION"
    name = "Functional Location"
    source_table = "IFLOT"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("TPLNR", "FunctionalLocation"),
            FieldMapping("FLTYP", "FuncLocCategory"),
            FieldMapping("PLTXT", "FuncLocDescription"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("SWERK", "Plant"),
            FieldMapping("STORT", "Location"),
            FieldMapping("BEBER", "PlantSection"),
            FieldMapping("IWERK", "MaintenancePlant"),
            FieldMapping("INGRP", "PlannerGroup"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("GEWRK", "MainWorkCenter"),
            FieldMapping("EINZL", "SingleInstallation", convert="toBoolean"),
            FieldMapping("ABCKZ", "ABCIndicator"),
            FieldMapping("TPLMA", "SuperiorFuncLocation"),
            FieldMapping("HEQUI", "EquipmentInstalled"),
            FieldMapping("KLASSE", "ClassNumber"),
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("DATAB", "ValidFrom", convert="toDate"),
            FieldMapping("ERDAT", "CreationDate", convert="toDate"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["FunctionalLocation", "Plant"],
            exact_duplicate=["FunctionalLocation"],
        )

    def extract_mock(self, rng):
        records: List[Dict[str, Any]] = []

        def add(location, description, plant, parent, level, section="", area_code="MAIN", equipment=""):
            counter = len(records) + 1
            records.append({
                "TPLNR": location,
                "FLTYP": "A",
                "PLTXT": description,
                "BUKRS": plant,
                "SWERK": plant,
                "STORT": area_code,
                "BEBER": section,
                "IWERK": plant,
                "INGRP": f"MPG{(counter - 1) % 3 + 1:02d}",
                "KOSTL": f"CC{plant[-2:]}{(counter - 1) % 5 + 1:02d}",
                "GEWRK": f"WC-{'A' if level < 3 else 'M'}{(counter - 1) % 5 + 1:03d}",
                "EINZL": "X" if level == 4 else "",
                "ABCKZ": "A" if level < 3 else "B",
                "TPLMA": parent,
                "HEQUI": equipment,
                "KLASSE": ["CL_FL_PLANT", "CL_FL_AREA", "CL_FL_LINE", "CL_FL_STATION"][level - 1],
                "KOKRS": "1000",
                "DATAB": "20200101",
                "ERDAT": "20200101",
            })
            return counter

        for plant in PLANTS:
            add(plant, f"Plant {plant} - Main Location", plant, "", 1)
            for code, area_text, section in FL_AREAS:
                area = f"{plant}-{code}"
                add(area, f"{area_text} - Plant {plant}", plant, plant, 2, section, code)
                if code == "WH" and plant != "1000":
                    continue
                lines = FL_LINES if code == "PR" else FL_LINES[:1]
                stations = {"PR": FL_STATIONS, "UT": FL_STATIONS[:1]}.get(code, [])
                for line_code, line_text in lines:
                    line = f"{area}-{line_code}"
                    add(line, f"{line_text} - {area_text} - Plant {plant}", plant, area, 3, section, code)
                    for station_code, station_text in stations:
                        counter = len(records) + 1
                        equipment = f"EQ{counter:08d}" if counter % 3 == 0 else ""
                        add(f"{line}-{station_code}", f"{station_text} - {line_text} - Plant {plant}",
                            plant, line, 4, section, code, equipment)
        return records


# (category code, work center type, usage, names)
WORK_CENTER_CATEGORIES = [
    ("A", "ASSEMBLY", "0001", ["Assembly Line 1", "Assembly Line 2", "Assembly Line 3"]),
    ("M", "MACHINING", "0002", ["CNC Milling Center", "CNC Lathe Station", "Drill Press Bay"]),
    ("T", "TESTING", "0003", ["Quality Test Lab", "Stress Test Cell", "Calibration Bench"]),
    ("P", "PACKAGING", "0004", ["Pack Line 1", "Pack Line 2", "Palletizing Station"]),
    ("S", "PAINTING", "0005", ["Paint Booth 1", "Paint Booth 2", "Powder Coat Line"]),
]


class WorkCenter(ECCObjectSpec):
    object_id = "WORK_CENTER"
    name = "Work Center"
    source_table = "CRHD"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("OBJID", "WorkCenterInternalID"),
            FieldMapping("ARBPL", "WorkCenterNumber"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("VERWE", "WorkCenterCategoryCode"),
            FieldMapping("KTEXT", "WorkCenterDescription"),
            FieldMapping("VERAN", "PersonResponsible"),
            FieldMapping("VGWTS", "StandardValueKey"),
            FieldMapping("KAPID", "CapacityID"),
            FieldMapping("NORMALKAPA", "LaborCapacity", convert="toDecimal"),
            FieldMapping("MEINS", "CapacityUnitOfMeasure"),
            FieldMapping("STEUS", "ControlKey"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("LSTAR", "ActivityType"),
            FieldMapping("ANGEBOT", "AvailableCapacity", convert="toDecimal"),
            FieldMapping("BEGDA", "ValidFrom", convert="toDate"),
            FieldMapping("ENDDA", "ValidTo", convert="toDate"),
            FieldMapping("WC_TYPE", "WorkCenterType"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("KOKRS", "ControllingArea"),
            FieldMapping("SPRAS", "Language", convert="toUpperCase"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["WorkCenterNumber", "Plant"],
            exact_duplicate=["WorkCenterNumber", "Plant"],
        )

    def extract_mock(self, rng):
        records = []
        for plant in PLANTS:
            for code, wc_type, usage, names in WORK_CENTER_CATEGORIES:
                # Plant 2000 runs two work centers per category
                for n, text in enumerate(names if plant == "1000" else names[:2]):
                    counter = len(records) + 1
                    number = f"WC-{code}{counter:03d}"
                    records.append({
                        "OBJID": str(10000 + counter),
                        "ARBPL": number,
                        "WERKS": plant,
                        "VERWE": usage,
                        "KTEXT": text,
                        "VERAN": f"WC_MGR_{plant[-2:]}{n + 1:02d}",
                        "VGWTS": f"SAP{(counter - 1) % 6 + 1:03d}",
                        "KAPID": f"KAP-{number}",
                        "NORMALKAPA": f"{rng.randint(80, 99):.1f}",
                        "MEINS": "H",
                        "STEUS": "QM01" if code == "T" else "PP01",
                        "KOSTL": f"CC{plant[-2:]}{(counter - 1) % 5 + 1:02d}",
                        "LSTAR": f"LAT{(counter - 1) % 4 + 1:03d}",
                        "ANGEBOT": f"{rng.randint(160, 239):.1f}",
                        "BEGDA": "20200101",
                        "ENDDA": "99991231",
                        "WC_TYPE": wc_type,
                        "BUKRS": plant,
                        "KOKRS": "1000",
                        "SPRAS": "en",
                    })
        return records


MAINTENANCE_ORDER_TYPES = {
    "PM01": "Corrective Maintenance",
    "PM02": "Preventive Maintenance",
    "PM03": "Condition-Based Maintenance",
}


class MaintenanceOrder(ECCObjectSpec):
    object_id = "MAINTENANCE_ORDER"
    name = "Maintenance Order"
    source_table = "AUFK"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("AUFNR", "OrderNumber"),
            FieldMapping("AUART", "OrderType"),
            FieldMapping("AUTYP", "OrderCategory"),
            FieldMapping("KTEXT", "OrderDescription"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("TPLNR", "FunctionalLocation"),
            FieldMapping("EQUNR", "EquipmentNumber"),
            FieldMapping("IWERK", "MaintenancePlant"),
            FieldMapping("INGPR", "PlannerGroup"),
            FieldMapping("GEWRK", "MainWorkCenter"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("PRIOK", "Priority"),
            FieldMapping("ILART", "MaintenanceActivityType"),
            FieldMapping("ERDAT", "CreatedDate", convert="toDate"),
            # Dates and work
            FieldMapping("GSTRP", "BasicStartDate", convert="toDate"),
            FieldMapping("GLTRP", "BasicFinishDate", convert="toDate"),
            FieldMapping("GSTRI", "ActualStartDate", convert="toDate"),
            FieldMapping("GLTRI", "ActualFinishDate", convert="toDate"),
            FieldMapping("ARBEI", "PlannedWork", convert="toDecimal"),
            FieldMapping("ISMNW", "ActualWork", convert="toDecimal"),
            FieldMapping("QMNUM", "NotificationNumber"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("IPHAS", "Phase"),
            FieldMapping("SYSTD", "SystemStatus"),
            FieldMapping("WARPL", "MaintenancePlan"),
            FieldMapping("ABNUM", "MaintenanceCallNumber"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["OrderNumber", "OrderType", "Plant"],
            exact_duplicate=["OrderNumber"],
        )

    def extract_mock(self, rng):
        order_types = list(MAINTENANCE_ORDER_TYPES)
        functional_locations = ["1000-PR-LN01", "1000-PR-LN02", "1000-UT-LN01", "2000-PR-LN01", "2000-UT-LN01"]
        equipment = [f"EQ{n:08d}" for n in range(1, 6)]
        work_centers = ["PM-MECH", "PM-ELEC", "PM-INST", "PM-PIPE", "PM-HVAC"]
        records = []
        for i in range(1, 26):
            order_type = order_types[(i - 1) % 3]
            preventive = order_type == "PM02"
            plant = PLANTS[(i - 1) % 2]
            has_actual = i <= 15
            period = f"2024{month(i)}"
            records.append({
                "AUFNR": str(4000000 + i),
                "AUART": order_type,
                "AUTYP": "30",
                "KTEXT": f"{MAINTENANCE_ORDER_TYPES[order_type]} - {equipment[(i - 1) % 5]}",
                "BUKRS": plant,
                "WERKS": plant,
                "TPLNR": functional_locations[(i - 1) % 5],
                "EQUNR": equipment[(i - 1) % 5],
                "IWERK": plant,
                "INGPR": f"IG{(i - 1) % 3 + 1:02d}",
                "GEWRK": work_centers[(i - 1) % 5],
                "KOSTL": f"CC{(i - 1) % 10 + 1:04d}",
                "PRCTR": f"PC{(i - 1) % 5 + 1:04d}",
                "PRIOK": str((i - 1) % 4 + 1),
                "ILART": f"{(i - 1) % 4 + 1:03d}",
                "ERDAT": "20240115",
                "GSTRP": f"{period}01",
                "GLTRP": f"{period}15",
                "GSTRI": f"{period}03" if has_actual else "",
                "GLTRI": f"{period}12" if has_actual else "",
                "ARBEI": str((2 + i % 8) * 10),
                "ISMNW": str((2 + i % 6) * 10) if has_actual else "0",
                "QMNUM": str(10000000 + i) if i % 3 == 0 else "",
                "WAERS": "USD",
                "IPHAS": "5" if has_actual else "3",
                "SYSTD": "REL CNF" if has_actual else "REL",
                "WARPL": f"MP-{(i - 1) % 5 + 1:03d}" if preventive else "",
                "ABNUM": str(i) if preventive else "",
            })
        return records


PLANT_OBJECTS = (
    ProductionOrder, BOMRouting, InspectionPlan, EquipmentMaster,
    FunctionalLocation, WorkCenter, MaintenanceOrder,
)
