"""Source-system name to adapter class registry."""

import logging
from typing import Any, Dict, List, Optional, Type

from .base import BaseSourceAdapter
from .infor_ln import InforLNAdapter
from .infor_m3 import InforM3Adapter
from .sap import SapAdapter
from ..errors import RuleValidationError

logger = logging.getLogger(__name__)

BUILTIN_ADAPTERS: Dict[str, Type[BaseSourceAdapter]] = {
    "SAP": SapAdapter,
    "INFOR_M3": InforM3Adapter,
    "INFOR_LN": InforLNAdapter,
}


class SourceAdapterRegistry:
    """
    Case-insensitive mapping of source-system names to adapter classes.

    Pre-populated with the built-in SAP and Infor adapters.
    """

    def __init__(self, builtins: bool = True):
        self._adapters: Dict[str, Type[BaseSourceAdapter]] = {}
        if builtins:
            for name, cls in BUILTIN_ADAPTERS.items():
                self.register(name, cls)

    @staticmethod
    def _key(name: str) -> str:
        return (name or "").strip().upper()

    def register(self, name: str, adapter_class: Type[BaseSourceAdapter]) -> None:
        """
        Register an adapter class under a source-system name.

        Raises:
            RuleValidationError: The name is empty or the class is not a
                ``BaseSourceAdapter`` subclass
        """
        key = self._key(name)
        errors = []
        if not key:
            errors.append("adapter name must not be empty")
        if not isinstance(adapter_class, type) or not issubclass(adapter_class, BaseSourceAdapter):
            errors.append(f"{adapter_class!r} is not a BaseSourceAdapter subclass")
        if errors:
            raise RuleValidationError("Invalid adapter registration", errors)

        if key in self._adapters and self._adapters[key] is not adapter_class:
            logger.warning(f"Replacing adapter registered for {key}")
        self._adapters[key] = adapter_class

    def get(self, name: str) -> Optional[Type[BaseSourceAdapter]]:
        return self._adapters.get(self._key(name))

    def has(self, name: str) -> bool:
        return self._key(name) in self._adapters

    def create(self, name: str, **options: Any) -> BaseSourceAdapter:
        """
        Instantiate the adapter registered under ``name``.

        Args:
            name: Source-system name (case-insensitive)
            **options: Passed to the adapter constructor (``profile``, ``mode``, ...)

        Raises:
            RuleValidationError: Nothing is registered under ``name``
        """
        adapter_class = self.get(name)
        if adapter_class is None:
            raise RuleValidationError(f"No adapter registered for {name}", [f"unknown source system: {name}"])
        return adapter_class(**options)

    def list_systems(self) -> List[str]:
        return sorted(self._adapters)

    def unregister(self, name: str) -> bool:
        return self._adapters.pop(self._key(name), None) is not None

    def clear(self) -> None:
        self._adapters.clear()


adapter_registry = SourceAdapterRegistry()
