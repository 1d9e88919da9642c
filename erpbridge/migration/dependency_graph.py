"""Migration object dependencies and execution ordering."""

import logging
from typing import Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

# Key depends on values (values must be migrated first)
DEPENDENCIES: Dict[str, List[str]] = {
    "GL_BALANCE": ["GL_ACCOUNT_MASTER"],
    "GL_ACCOUNT_MASTER": [],
    "CUSTOMER_OPEN_ITEM": ["BUSINESS_PARTNER"],
    "VENDOR_OPEN_ITEM": ["BUSINESS_PARTNER"],
    "BUSINESS_PARTNER": ["BANK_MASTER"],
    "MATERIAL_MASTER": [],
    "PURCHASE_ORDER": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "SALES_ORDER": ["BUSINESS_PARTNER", "MATERIAL_MASTER", "PRICING_CONDITION"],
    "FIXED_ASSET": ["COST_CENTER"],
    "ASSET_ACQUISITION": ["FIXED_ASSET"],
    "COST_CENTER": ["PROFIT_CENTER"],
    "COST_ELEMENT": [],
    "PROFIT_CENTER": [],
    "PROFIT_SEGMENT": ["PROFIT_CENTER"],
    "BANK_MASTER": [],
    "EMPLOYEE_MASTER": ["BUSINESS_PARTNER"],
    "EQUIPMENT_MASTER": ["FUNCTIONAL_LOCATION"],
    "FUNCTIONAL_LOCATION": [],
    "WORK_CENTER": ["COST_CENTER"],
    "MAINTENANCE_ORDER": ["EQUIPMENT_MASTER", "WORK_CENTER"],
    "PRODUCTION_ORDER": ["MATERIAL_MASTER", "WORK_CENTER"],
    "BATCH_MASTER": ["MATERIAL_MASTER"],
    "SOURCE_LIST": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "SCHEDULING_AGREEMENT": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "PURCHASE_CONTRACT": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "PRICING_CONDITION": ["MATERIAL_MASTER"],
    "FI_CONFIG": [],
    "CO_CONFIG": [],
    "MM_CONFIG": [],
    "SD_CONFIG": [],
    "WBS_ELEMENT": ["PROFIT_CENTER", "COST_CENTER"],
    "INTERNAL_ORDER": ["COST_CENTER"],
    "RFC_DESTINATION": [],
    "IDOC_CONFIG": [],
    "WEB_SERVICE": [],
    "BATCH_JOB": [],
    "WAREHOUSE_STRUCTURE": [],
    "TRANSPORT_ROUTE": [],
    "TRADE_COMPLIANCE": [],
    "BW_EXTRACTOR": [],
    "BOM_ROUTING": ["MATERIAL_MASTER", "WORK_CENTER"],
    "INSPECTION_PLAN": ["MATERIAL_MASTER"],
    "INFOR_LN_GL_ACCOUNT": [],
    "INFOR_LN_GL_JOURNAL": ["INFOR_LN_GL_ACCOUNT"],
    "INFOR_LN_BUSINESS_PARTNER": [],
    "INFOR_LN_ITEM_MASTER": [],
    "INFOR_M3_CUSTOMER": [],
    "INFOR_M3_VENDOR": [],
    "INFOR_M3_GL_ACCOUNT": [],
    "INFOR_M3_GL_JOURNAL": ["INFOR_M3_GL_ACCOUNT"],
    "INFOR_M3_ITEM_MASTER": [],
}


class DependencyGraph:
    """
    Orders migration objects so that prerequisites run first.

    All orderings follow the order of the input ids, so the same input
    always yields the same order.
    """

    def __init__(self, dependencies: Optional[Dict[str, List[str]]] = None):
        source = DEPENDENCIES if dependencies is None else dependencies
        self.dependencies: Dict[str, List[str]] = {k: list(v) for k, v in source.items()}

    def set_dependencies(self, object_id: str, deps: Iterable[str]) -> None:
        self.dependencies[object_id] = list(deps)

    def get_dependencies(self, object_id: str) -> List[str]:
        """Direct prerequisites of an object."""
        return list(self.dependencies.get(object_id, []))

    def get_transitive_dependencies(self, object_id: str) -> List[str]:
        """Every prerequisite of an object, nearest first."""
        result: List[str] = []
        visited: Set[str] = {object_id}

        def walk(current: str) -> None:
            direct = self.get_dependencies(current)
            for dep in direct:
                if dep not in result:
                    result.append(dep)
            for dep in direct:
                if dep not in visited:
                    visited.add(dep)
                    walk(dep)

        walk(object_id)
        return result

    def get_execution_order(self, object_ids: Iterable[str]) -> List[str]:
        """Topological order restricted to ``object_ids``."""
        object_ids = list(dict.fromkeys(object_ids))
        available = set(object_ids)
        visited: Set[str] = set()
        order: List[str] = []

        def visit(object_id: str) -> None:
            if object_id in visited:
                return
            visited.add(object_id)
            for dep in self.get_dependencies(object_id):
                if dep in available:
                    visit(dep)
            order.append(object_id)

        for object_id in object_ids:
            visit(object_id)
        return order

    def get_execution_waves(self, object_ids: Iterable[str]) -> List[List[str]]:
        """
        Group objects into waves whose members can run in parallel.

        A cycle puts all remaining objects into one final wave.
        """
        object_ids = list(dict.fromkeys(object_ids))
        available = set(object_ids)
        completed: Set[str] = set()
        waves: List[List[str]] = []

        while len(completed) < len(object_ids):
            wave = [
                object_id for object_id in object_ids
                if object_id not in completed
                and all(d in completed for d in self.get_dependencies(object_id) if d in available)
            ]
            if not wave:
                remaining = [object_id for object_id in object_ids if object_id not in completed]
                logger.warning(f"Circular dependency detected, forcing: {', '.join(remaining)}")
                waves.append(remaining)
                break
            waves.append(wave)
            completed.update(wave)

        return waves

    def detect_circular_dependencies(self) -> List[List[str]]:
        """Return every cycle found, each closed by repeating its first id."""
        cycles: List[List[str]] = []
        visited: Set[str] = set()
        in_stack: Set[str] = set()

        def dfs(object_id: str, path: List[str]) -> None:
            if object_id in in_stack:
                start = path.index(object_id)
                cycles.append(path[start:] + [object_id])
                return
            if object_id in visited:
                return
            visited.add(object_id)
            in_stack.add(object_id)
            for dep in self.get_dependencies(object_id):
                dfs(dep, path + [object_id])
            in_stack.discard(object_id)

        for object_id in self.dependencies:
            dfs(object_id, [])
        return cycles

    def validate(self, registered_ids: Iterable[str]) -> Dict[str, object]:
        """Check that every declared dependency is a registered object."""
        registered = set(registered_ids)
        issues = [
            {"objectId": object_id, "missingDependency": dep}
            for object_id, deps in self.dependencies.items()
            for dep in deps
            if dep not in registered
        ]
        return {
            "valid": not issues,
            "issues": issues,
            "circularDependencies": self.detect_circular_dependencies(),
        }


default_graph = DependencyGraph()


def get_dependencies(object_id: str) -> List[str]:
    return default_graph.get_dependencies(object_id)


def get_transitive_dependencies(object_id: str) -> List[str]:
    return default_graph.get_transitive_dependencies(object_id)


def get_execution_order(object_ids: Iterable[str]) -> List[str]:
    return default_graph.get_execution_order(object_ids)


def get_execution_waves(object_ids: Iterable[str]) -> List[List[str]]:
    return default_graph.get_execution_waves(object_ids)


def detect_circular_dependencies() -> List[List[str]]:
    return default_graph.detect_circular_dependencies()
