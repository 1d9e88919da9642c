"""Migration object registry and the wave runner."""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from .base import MigrationObjectRunner, MigrationObjectSpec
from .dependency_graph import DependencyGraph, default_graph
from ..errors import NotFoundError, RuleValidationError
from ..events.progress_bus import ProgressBus, progress_bus
from ..models.profile import RunMode
from ..models.results import ObjectRunResult

logger = logging.getLogger(__name__)


class MigrationObjectRegistry:
    """Holds migration object spec classes keyed by object id."""

    def __init__(self, graph: Optional[DependencyGraph] = None):
        self._objects: Dict[str, Type[MigrationObjectSpec]] = {}
        self.graph = graph or default_graph

    def register(self, spec_class: Type[MigrationObjectSpec]) -> Type[MigrationObjectSpec]:
        """
        Register a migration object spec class.

        Raises:
            RuleValidationError: The class is not a ``MigrationObjectSpec``
                or declares no ``object_id``
        """
        if not isinstance(spec_class, type) or not issubclass(spec_class, MigrationObjectSpec):
            raise RuleValidationError("Invalid migration object registration", [f"{spec_class!r} is not a MigrationObjectSpec subclass"])
        if not spec_class.object_id:
            raise RuleValidationError("Invalid migration object registration", [f"{spec_class.__name__} declares no object_id"])
        if spec_class.object_id in self._objects:
            logger.warning(f"Replacing migration object {spec_class.object_id}")
        self._objects[spec_class.object_id] = spec_class
        return spec_class

    def get(self, object_id: str) -> Optional[Type[MigrationObjectSpec]]:
        return self._objects.get(object_id)

    def has(self, object_id: str) -> bool:
        return object_id in self._objects

    def list_ids(self) -> List[str]:
        return list(self._objects)

    def list_objects(self) -> List[Dict[str, Any]]:
        return [spec.identity() for spec in self._objects.values()]

    @property
    def size(self) -> int:
        return len(self._objects)

    def create(self, object_id: str, mode: Union[str, RunMode] = RunMode.MOCK, **kwargs: Any) -> MigrationObjectRunner:
        """
        Build a runner for a registered object.

        Raises:
            NotFoundError: No object is registered under ``object_id``
        """
        spec_class = self._objects.get(object_id)
        if spec_class is None:
            raise NotFoundError(f"Unknown migration object: {object_id}", {"objectId": object_id})
        return MigrationObjectRunner(spec_class, mode=mode, **kwargs)

    async def run_all(
        self,
        mode: Union[str, RunMode] = RunMode.MOCK,
        object_ids: Optional[Iterable[str]] = None,
        bus: Optional[ProgressBus] = None,
        **kwargs: Any,
    ) -> Dict[str, ObjectRunResult]:
        """
        Run objects wave by wave in dependency order.

        Objects inside one wave run concurrently. A failed object does not
        stop the objects that follow it.

        Args:
            mode: ``mock`` or ``live``
            object_ids: Objects to run, all registered ones by default
            bus: Progress bus, the shared one by default
            **kwargs: Passed to each ``MigrationObjectRunner``

        Returns:
            Results keyed by object id, in execution order
        """
        ids = list(object_ids) if object_ids is not None else self.list_ids()
        unknown = [i for i in ids if i not in self._objects]
        if unknown:
            raise NotFoundError(f"Unknown migration object(s): {', '.join(unknown)}", {"objectIds": unknown})

        bus = bus or progress_bus
        waves = self.graph.get_execution_waves(ids)
        logger.info(f"Running {len(ids)} migration object(s) in {len(waves)} wave(s)")

        results: Dict[str, ObjectRunResult] = {}
        for number, wave in enumerate(waves, start=1):
            logger.info(f"Wave {number}: {', '.join(wave)}")
            runners = [self.create(object_id, mode=mode, bus=bus, **kwargs) for object_id in wave]
            outcomes = await asyncio.gather(*(runner.run() for runner in runners))
            for object_id, outcome in zip(wave, outcomes):
                results[object_id] = outcome
        return results
