"""Built-in extractor specs."""

from typing import List, Type

from .analytics import BwExtractor
from .basis import (
    BatchJobExtractor,
    DataDictionaryExtractor,
    IdocExtractor,
    RfcDestinationExtractor,
    SecurityExtractor,
    SystemInfoExtractor,
)
from .finance import (
    CoConfigExtractor,
    CompanyCodeExtractor,
    CostCenterExtractor,
    FiConfigExtractor,
    FiTransactionExtractor,
    GlAccountExtractor,
    InternalOrderExtractor,
    ProfitCenterExtractor,
)
from .infor import (
    LawsonConfigExtractor,
    LawsonSecurityExtractor,
    LnBusinessPartnerExtractor,
    LnCompanyExtractor,
    LnItemExtractor,
    M3CustomerExtractor,
    M3ItemExtractor,
    M3SupplierExtractor,
)
from .logistics import (
    CustomerExtractor,
    InventoryExtractor,
    MaterialExtractor,
    MmConfigExtractor,
    PricingExtractor,
    PurchasingExtractor,
    SalesExtractor,
    SdConfigExtractor,
)
from .operations import (
    BomExtractor,
    EquipmentExtractor,
    MaintenanceExtractor,
    ProductionOrderExtractor,
    RoutingExtractor,
    TradeComplianceExtractor,
    TransportExtractor,
    WarehouseExtractor,
    WorkCenterExtractor,
)
from .people import EmployeeExtractor, OrgStructureExtractor
from ..base import ExtractorSpec
from ..registry import ExtractorRegistry

SAP_EXTRACTORS: List[Type[ExtractorSpec]] = [
    SystemInfoExtractor,
    DataDictionaryExtractor,
    FiConfigExtractor,
    CompanyCodeExtractor,
    GlAccountExtractor,
    FiTransactionExtractor,
    CoConfigExtractor,
    CostCenterExtractor,
    ProfitCenterExtractor,
    InternalOrderExtractor,
    MmConfigExtractor,
    MaterialExtractor,
    PurchasingExtractor,
    InventoryExtractor,
    SdConfigExtractor,
    CustomerExtractor,
    SalesExtractor,
    PricingExtractor,
    ProductionOrderExtractor,
    BomExtractor,
    RoutingExtractor,
    EquipmentExtractor,
    MaintenanceExtractor,
    WorkCenterExtractor,
    EmployeeExtractor,
    OrgStructureExtractor,
    WarehouseExtractor,
    TransportExtractor,
    TradeComplianceExtractor,
    BwExtractor,
    RfcDestinationExtractor,
    IdocExtractor,
    BatchJobExtractor,
    SecurityExtractor,
]

INFOR_EXTRACTORS: List[Type[ExtractorSpec]] = [
    LnCompanyExtractor,
    LnItemExtractor,
    LnBusinessPartnerExtractor,
    M3ItemExtractor,
    M3CustomerExtractor,
    M3SupplierExtractor,
    LawsonConfigExtractor,
    LawsonSecurityExtractor,
]

BUILTIN_EXTRACTORS = SAP_EXTRACTORS + INFOR_EXTRACTORS


def register_builtin_extractors(registry: ExtractorRegistry, include_infor: bool = True) -> ExtractorRegistry:
    """Register every built-in extractor spec on ``registry``."""
    for spec_class in (BUILTIN_EXTRACTORS if include_infor else SAP_EXTRACTORS):
        registry.register(spec_class)
    return registry
