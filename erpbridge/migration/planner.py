"""
Migration planning from forensic extraction results.

Turns what a forensic run discovered into a list of migration objects
with priorities, volume and effort estimates, dependency waves, risks
and recommendations.

Flow: ``ForensicRun.run()`` -> ``MigrationPlanner.plan()`` -> ``MigrationObjectRegistry.run_all()``
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .dependency_graph import DependencyGraph, default_graph
from ..errors import ValidationError

logger = logging.getLogger(__name__)

# Extraction module -> migration object ids
MODULE_OBJECT_MAP: Dict[str, List[str]] = {
    "FI": ["GL_BALANCE", "GL_ACCOUNT_MASTER", "CUSTOMER_OPEN_ITEM", "VENDOR_OPEN_ITEM", "FIXED_ASSET", "ASSET_ACQUISITION", "FI_CONFIG"],
    "CO": ["COST_CENTER", "COST_ELEMENT", "PROFIT_CENTER", "PROFIT_SEGMENT", "INTERNAL_ORDER", "WBS_ELEMENT", "CO_CONFIG"],
    "MM": ["MATERIAL_MASTER", "PURCHASE_ORDER", "SOURCE_LIST", "SCHEDULING_AGREEMENT", "PURCHASE_CONTRACT", "BATCH_MASTER", "PRICING_CONDITION", "MM_CONFIG"],
    "SD": ["SALES_ORDER", "PRICING_CONDITION", "SD_CONFIG"],
    "PP": ["PRODUCTION_ORDER", "BOM_ROUTING", "INSPECTION_PLAN"],
    "PM": ["EQUIPMENT_MASTER", "FUNCTIONAL_LOCATION", "WORK_CENTER", "MAINTENANCE_ORDER"],
    "HR": ["EMPLOYEE_MASTER", "BANK_MASTER", "BUSINESS_PARTNER"],
    "EWM": ["WAREHOUSE_STRUCTURE"],
    "TM": ["TRANSPORT_ROUTE"],
    "GTS": ["TRADE_COMPLIANCE"],
    "BW": ["BW_EXTRACTOR"],
    "BASIS": ["RFC_DESTINATION", "IDOC_CONFIG", "WEB_SERVICE", "BATCH_JOB"],
}

# Extractors whose successful result marks a module as active
MODULE_INDICATORS: Dict[str, List[str]] = {
    "FI": ["FI_TRANSACTIONS", "FI_GL_ACCOUNTS", "FI_COMPANY_CODES"],
    "CO": ["CO_COST_CENTERS", "CO_PROFIT_CENTERS", "CO_INTERNAL_ORDERS"],
    "MM": ["MM_MATERIALS", "MM_PURCHASING", "MM_INVENTORY"],
    "SD": ["SD_SALES", "SD_PRICING", "SD_CUSTOMERS"],
    "PP": ["PP_PRODUCTION", "PP_BOM", "PP_ROUTING"],
    "PM": ["PM_EQUIPMENT", "PM_MAINTENANCE", "PM_WORK_CENTERS"],
    "HR": ["HR_EMPLOYEES", "HR_ORG_STRUCTURE"],
    "EWM": ["EWM_WAREHOUSE"],
    "TM": ["TM_TRANSPORT"],
    "GTS": ["GTS_COMPLIANCE"],
    "BW": ["BW_EXTRACTORS"],
    "BASIS": ["BASIS_RFC", "BASIS_IDOC", "BASIS_BATCH_JOBS"],
}

# Object id -> extractor whose result gives the volume estimate
OBJECT_EXTRACTOR_MAP: Dict[str, str] = {
    "GL_BALANCE": "FI_TRANSACTIONS",
    "GL_ACCOUNT_MASTER": "FI_GL_ACCOUNTS",
    "BUSINESS_PARTNER": "SD_CUSTOMERS",
    "MATERIAL_MASTER": "MM_MATERIALS",
    "PURCHASE_ORDER": "MM_PURCHASING",
    "SALES_ORDER": "SD_SALES",
    "COST_CENTER": "CO_COST_CENTERS",
    "PROFIT_CENTER": "CO_PROFIT_CENTERS",
    "EMPLOYEE_MASTER": "HR_EMPLOYEES",
    "EQUIPMENT_MASTER": "PM_EQUIPMENT",
}

# Planning hours: base plus hours per thousand records
COMPLEXITY_MAP: Dict[str, Dict[str, float]] = {
    "GL_BALANCE": {"base": 40, "perThousandRecords": 2},
    "GL_ACCOUNT_MASTER": {"base": 16, "perThousandRecords": 0.5},
    "BUSINESS_PARTNER": {"base": 60, "perThousandRecords": 3},
    "MATERIAL_MASTER": {"base": 48, "perThousandRecords": 2.5},
    "PURCHASE_ORDER": {"base": 32, "perThousandRecords": 1.5},
    "SALES_ORDER": {"base": 32, "perThousandRecords": 1.5},
    "FIXED_ASSET": {"base": 36, "perThousandRecords": 2},
    "COST_CENTER": {"base": 12, "perThousandRecords": 0.3},
    "PROFIT_CENTER": {"base": 12, "perThousandRecords": 0.3},
    "EMPLOYEE_MASTER": {"base": 48, "perThousandRecords": 3},
}
DEFAULT_COMPLEXITY = {"base": 20, "perThousandRecords": 1}

PRIORITY: Dict[str, int] = {
    "FI_CONFIG": 100, "CO_CONFIG": 100, "MM_CONFIG": 100, "SD_CONFIG": 100,
    "GL_ACCOUNT_MASTER": 95, "COST_CENTER": 95, "PROFIT_CENTER": 95,
    "BUSINESS_PARTNER": 90, "BANK_MASTER": 90, "MATERIAL_MASTER": 90,
    "GL_BALANCE": 85, "CUSTOMER_OPEN_ITEM": 85, "VENDOR_OPEN_ITEM": 85,
    "FIXED_ASSET": 80, "COST_ELEMENT": 80,
    "PURCHASE_ORDER": 75, "SALES_ORDER": 75,
    "EMPLOYEE_MASTER": 70,
    "EQUIPMENT_MASTER": 65, "FUNCTIONAL_LOCATION": 65,
}
DEFAULT_PRIORITY = 50

INTERFACE_OBJECTS = ("RFC_DESTINATION", "IDOC_CONFIG", "WEB_SERVICE", "BATCH_JOB")
MASTER_DATA_OBJECTS = (
    "GL_ACCOUNT_MASTER", "BUSINESS_PARTNER", "MATERIAL_MASTER", "COST_CENTER",
    "PROFIT_CENTER", "BANK_MASTER", "EMPLOYEE_MASTER", "EQUIPMENT_MASTER",
    "FUNCTIONAL_LOCATION", "WORK_CENTER",
)
TRANSACTIONAL_OBJECTS = (
    "GL_BALANCE", "CUSTOMER_OPEN_ITEM", "VENDOR_OPEN_ITEM", "PURCHASE_ORDER",
    "SALES_ORDER", "FIXED_ASSET", "PRODUCTION_ORDER", "MAINTENANCE_ORDER",
)

LOW_CONFIDENCE_THRESHOLD = 70
HIGH_VOLUME_THRESHOLD = 100000
# 6 productive hours a day, 2 FTEs
HOURS_PER_CALENDAR_DAY = 12


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _option(options: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in options and options[camel] is not None:
        return options[camel]
    if snake in options and options[snake] is not None:
        return options[snake]
    return default


def _is_config(object_id: str) -> bool:
    return object_id.endswith("_CONFIG")


def _result_ok(result: Any) -> bool:
    if not result:
        return False
    return not (isinstance(result, dict) and result.get("error"))


class MigrationPlanner:
    """Builds a migration plan from a forensic result."""

    def __init__(self, graph: Optional[DependencyGraph] = None):
        self.graph = graph or default_graph

    def plan(self, forensic_result: Optional[Mapping[str, Any]], options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Generate a migration plan.

        Args:
            forensic_result: ``{results, confidence, gapReport, humanValidation}``
                as produced by a forensic run
            options: ``includeModules``, ``excludeModules``, ``excludeObjects``,
                ``includeInterfaces`` (default True), ``includeConfig`` (default True);
                snake_case spellings are accepted too

        Returns:
            Plan dict with camelCase keys

        Raises:
            ValidationError: No forensic data was supplied
        """
        if not forensic_result or not isinstance(forensic_result, Mapping):
            raise ValidationError("No forensic data available")
        options = options or {}
        include_interfaces = _option(options, "includeInterfaces", "include_interfaces", True) is not False
        include_config = _option(options, "includeConfig", "include_config", True) is not False
        results = forensic_result.get("results") or {}

        active_modules = self._identify_active_modules(results)
        logger.info(f"Active modules detected: {', '.join(m['module'] for m in active_modules) or 'none'}")

        include_modules = _option(options, "includeModules", "include_modules")
        if include_modules:
            wanted = {m.upper() for m in include_modules}
            active_modules = [m for m in active_modules if m["module"] in wanted]
        exclude_modules = _option(options, "excludeModules", "exclude_modules")
        if exclude_modules:
            unwanted = {m.upper() for m in exclude_modules}
            active_modules = [m for m in active_modules if m["module"] not in unwanted]

        object_ids = self._map_modules_to_objects(active_modules, include_interfaces, include_config)
        exclude_objects = _option(options, "excludeObjects", "exclude_objects")
        if exclude_objects:
            excluded = set(exclude_objects)
            object_ids = [o for o in object_ids if o not in excluded]

        object_ids, prerequisites = self._add_prerequisites(object_ids)
        objects = self._build_object_details(object_ids, prerequisites, results)
        by_id = {o["objectId"]: o for o in objects}
        waves = self.graph.get_execution_waves(object_ids)

        risks = self._assess_risks(forensic_result, objects)
        plan = {
            "generatedAt": datetime.now(timezone.utc).isoformat(),
            "scope": {
                "activeModules": [m["module"] for m in active_modules],
                "totalObjects": len(object_ids),
                "totalEstimatedRecords": sum(o["estimatedRecords"] for o in objects),
            },
            "objects": objects,
            "executionPlan": {
                "waves": [
                    {
                        "waveNumber": number,
                        "objectIds": wave,
                        "canRunInParallel": True,
                        "objects": [by_id[o] for o in wave if o in by_id],
                    }
                    for number, wave in enumerate(waves, start=1)
                ],
                "totalWaves": len(waves),
            },
            "effort": self._estimate_effort(objects),
            "risks": risks,
            "confidence": dict(forensic_result.get("confidence") or {}),
            "recommendations": self._recommendations(objects, risks),
        }
        logger.info(f"Migration plan: {len(object_ids)} objects in {len(waves)} waves")
        return plan

    def _identify_active_modules(self, results: Mapping[str, Any]) -> List[Dict[str, Any]]:
        modules = []
        for module, indicators in MODULE_INDICATORS.items():
            found = [i for i in indicators if _result_ok(results.get(i))]
            if not found:
                continue
            estimated = 0
            for extractor_id in found:
                result = results[extractor_id]
                if not isinstance(result, dict):
                    continue
                records = result.get("records")
                if records is not None:
                    estimated += len(records) if isinstance(records, list) else int(result.get("recordCount") or 0)
                elif result.get("count"):
                    estimated += int(result["count"])
            modules.append({
                "module": module,
                "extractorsFound": len(found),
                "extractorsTotal": len(indicators),
                "coverage": int(round_half_up(len(found) / len(indicators) * 100)),
                "estimatedRecords": estimated,
            })
        # Most complete first; ties keep the indicator order
        modules.sort(key=lambda m: -m["coverage"])
        return modules

    @staticmethod
    def _map_modules_to_objects(modules: List[Dict[str, Any]], include_interfaces: bool, include_config: bool) -> List[str]:
        object_ids: List[str] = []
        for module in modules:
            for object_id in MODULE_OBJECT_MAP.get(module["module"], []):
                if not include_config and _is_config(object_id):
                    continue
                if not include_interfaces and object_id in INTERFACE_OBJECTS:
                    continue
                if object_id not in object_ids:
                    object_ids.append(object_id)
        return object_ids

    def _add_prerequisites(self, object_ids: List[str]):
        """Append every transitive prerequisite that is not already planned."""
        needed = list(object_ids)
        for object_id in object_ids:
            for dep in self.graph.get_transitive_dependencies(object_id):
                if dep not in needed:
                    needed.append(dep)
        added = needed[len(object_ids):]
        if added:
            logger.info(f"Added {len(added)} prerequisite objects: {', '.join(added)}")
        return needed, set(added)

    def _build_object_details(self, object_ids: List[str], prerequisites, results: Mapping[str, Any]) -> List[Dict[str, Any]]:
        details = []
        for object_id in object_ids:
            complexity = COMPLEXITY_MAP.get(object_id, DEFAULT_COMPLEXITY)
            records = self._estimate_object_records(object_id, results)
            hours = complexity["base"] + records / 1000 * complexity["perThousandRecords"]
            details.append({
                "objectId": object_id,
                "priority": PRIORITY.get(object_id, DEFAULT_PRIORITY),
                "estimatedRecords": records,
                "estimatedHours": round_half_up(hours, 1),
                "complexityBase": complexity["base"],
                "dependencies": self.graph.get_dependencies(object_id),
                "isPrerequisite": object_id in prerequisites,
            })
        # Stable sort: equal priorities keep planning order
        details.sort(key=lambda o: -o["priority"])
        return details

    @staticmethod
    def _estimate_object_records(object_id: str, results: Mapping[str, Any]) -> int:
        extractor_id = OBJECT_EXTRACTOR_MAP.get(object_id)
        result = results.get(extractor_id) if extractor_id else None
        if not isinstance(result, dict):
            return 0
        if isinstance(result.get("records"), list):
            return len(result["records"])
        for key in ("count", "recordCount"):
            if result.get(key):
                return int(result[key])
        # Refined later during profiling
        return 0

    @staticmethod
    def _assess_risks(forensic_result: Mapping[str, Any], objects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        risks: List[Dict[str, Any]] = []

        confidence = forensic_result.get("confidence") or {}
        overall = confidence.get("overall")
        if isinstance(overall, (int, float)) and overall < LOW_CONFIDENCE_THRESHOLD:
            risks.append({
                "level": "high",
                "category": "data-completeness",
                "description": f"Extraction confidence is {overall}%; significant data gaps may exist",
                "mitigation": "Re-run extraction with elevated source authorization, review gap report",
            })

        gap_report = forensic_result.get("gapReport") or {}
        missing = (gap_report.get("extraction") or {}).get("missingCriticalTables") or []
        if missing:
            risks.append({
                "level": "high",
                "category": "missing-data",
                "description": f"{len(missing)} critical tables not extracted",
                "tables": list(missing),
                "mitigation": "Ensure authorization for listed tables, re-extract",
            })

        auth_count = (gap_report.get("authorization") or {}).get("count") or 0
        if auth_count > 0:
            risks.append({
                "level": "medium",
                "category": "authorization",
                "description": f"{auth_count} tables could not be read due to authorization",
                "mitigation": "Request additional roles for the extraction user",
            })

        high_volume = [o["objectId"] for o in objects if o["estimatedRecords"] > HIGH_VOLUME_THRESHOLD]
        if high_volume:
            risks.append({
                "level": "medium",
                "category": "data-volume",
                "description": f"{len(high_volume)} objects have >100K records; may need batched migration",
                "objects": high_volume,
                "mitigation": "Plan for incremental/delta migration, increase batch sizes",
            })

        human_validation = forensic_result.get("humanValidation") or []
        if len(human_validation) > 3:
            risks.append({
                "level": "low",
                "category": "validation",
                "description": f"{len(human_validation)} items require human validation before migration",
                "mitigation": "Schedule validation workshops with business stakeholders",
            })
        return risks

    @staticmethod
    def _estimate_effort(objects: List[Dict[str, Any]]) -> Dict[str, Any]:
        total_hours = sum(o["estimatedHours"] for o in objects)
        config_hours = sum(o["estimatedHours"] for o in objects if _is_config(o["objectId"]))
        ids = [o["objectId"] for o in objects]
        return {
            "totalEstimatedHours": int(round_half_up(total_hours)),
            "configurationHours": int(round_half_up(config_hours)),
            "dataMigrationHours": int(round_half_up(total_hours - config_hours)),
            "estimatedCalendarDays": math.ceil(total_hours / HOURS_PER_CALENDAR_DAY),
            "breakdown": {
                "config": sum(1 for i in ids if _is_config(i)),
                "masterData": sum(1 for i in ids if i in MASTER_DATA_OBJECTS),
                "transactional": sum(1 for i in ids if i in TRANSACTIONAL_OBJECTS),
                "interfaces": sum(1 for i in ids if i in INTERFACE_OBJECTS),
            },
        }

    @staticmethod
    def _recommendations(objects: List[Dict[str, Any]], risks: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        recommendations: List[Dict[str, Any]] = [{
            "phase": "profile",
            "action": "Run data profiling on all master data objects before migration",
            "objects": [o["objectId"] for o in objects if o["estimatedRecords"] > 0 and o["priority"] >= 85],
        }]

        high_risks = [r["description"] for r in risks if r["level"] == "high"]
        if high_risks:
            recommendations.append({
                "phase": "pre-migration",
                "action": "Resolve high-risk items before starting migration",
                "details": high_risks,
            })

        config_objects = [o["objectId"] for o in objects if _is_config(o["objectId"])]
        if config_objects:
            recommendations.append({
                "phase": "configure",
                "action": "Migrate configuration objects first; they are prerequisites for data",
                "objects": config_objects,
            })

        if any(o["objectId"] == "BUSINESS_PARTNER" for o in objects):
            recommendations.append({
                "phase": "profile",
                "action": "Run fuzzy duplicate detection on Business Partners before migration",
                "details": "Customers and vendors may overlap; use BP merge logic",
            })
        return recommendations


class PlanStore:
    """
    Remembers the last forensic result and the last plan.

    ``state`` moves from ``missing`` to ``available`` on the first saved
    plan and to ``refreshed`` on every later one.
    """

    MISSING = "missing"
    AVAILABLE = "available"
    REFRESHED = "refreshed"

    def __init__(self):
        self._plan: Optional[Dict[str, Any]] = None
        self._forensic: Optional[Dict[str, Any]] = None
        self.state = self.MISSING

    def record_forensic(self, forensic_result: Dict[str, Any]) -> None:
        self._forensic = forensic_result

    @property
    def forensic_result(self) -> Optional[Dict[str, Any]]:
        return self._forensic

    def save(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        self.state = self.AVAILABLE if self._plan is None else self.REFRESHED
        self._plan = plan
        return plan

    def latest(self) -> Optional[Dict[str, Any]]:
        return self._plan

    def clear(self) -> None:
        self._plan = None
        self._forensic = None
        self.state = self.MISSING
