"""Built-in migration objects."""

from typing import List, Type

from .config import CONFIG_OBJECTS
from .controlling import CONTROLLING_OBJECTS
from .finance import FINANCE_OBJECTS
from .infor_ln import INFOR_LN_OBJECTS
from .infor_m3 import INFOR_M3_OBJECTS
from .logistics import LOGISTICS_OBJECTS
from .materials import MATERIALS_OBJECTS
from .people import PEOPLE_OBJECTS
from .plant import PLANT_OBJECTS
from .sales import SALES_OBJECTS
from .technical import TECHNICAL_OBJECTS
from ..base import MigrationObjectSpec
from ..registry import MigrationObjectRegistry

SAP_OBJECTS: List[Type[MigrationObjectSpec]] = [
    *FINANCE_OBJECTS,
    *CONTROLLING_OBJECTS,
    *CONFIG_OBJECTS,
    *MATERIALS_OBJECTS,
    *SALES_OBJECTS,
    *PLANT_OBJECTS,
    *PEOPLE_OBJECTS,
    *LOGISTICS_OBJECTS,
    *TECHNICAL_OBJECTS,
]

INFOR_OBJECTS: List[Type[MigrationObjectSpec]] = [*INFOR_LN_OBJECTS, *INFOR_M3_OBJECTS]

BUILTIN_OBJECTS = SAP_OBJECTS + INFOR_OBJECTS


def register_builtin_objects(registry: MigrationObjectRegistry, include_infor: bool = True) -> MigrationObjectRegistry:
    """Register every built-in migration object on ``registry``."""
    for spec_class in (BUILTIN_OBJECTS if include_infor else SAP_OBJECTS):
        registry.register(spec_class)
    return registry


def create_default_registry(include_infor: bool = True) -> MigrationObjectRegistry:
    return register_builtin_objects(MigrationObjectRegistry(), include_infor=include_infor)
