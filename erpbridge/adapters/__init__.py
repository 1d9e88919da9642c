"""Source-system adapters."""

from .base import BaseSourceAdapter, TableData, Telemetry
from .connection_manager import ConnectionManager
from .infor_ln import InforLNAdapter
from .infor_m3 import InforM3Adapter
from .mock import MockAdapter
from .registry import SourceAdapterRegistry, adapter_registry
from .sap import SapAdapter

__all__ = [
    "BaseSourceAdapter",
    "TableData",
    "Telemetry",
    "ConnectionManager",
    "InforLNAdapter",
    "InforM3Adapter",
    "MockAdapter",
    "SapAdapter",
    "SourceAdapterRegistry",
    "adapter_registry",
]
