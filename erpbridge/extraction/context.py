"""Per-run extraction context."""

import asyncio
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .checkpoint import CheckpointStore
from .coverage import CoverageTracker
from ..adapters.base import BaseSourceAdapter
from ..models.profile import RunMode


@dataclass(frozen=True)
class Caches:
    """Source metadata shared by all extractors of a run. Replaced, never mutated."""
    system_info: Optional[Dict[str, Any]] = None
    data_dictionary: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ExtractionContext:
    """
    Everything an extractor needs for one run.

    The context itself is immutable; ``with_caches`` returns a new one.
    ``coverage`` and ``checkpoints`` are append/write stores owned by the run.
    """
    mode: RunMode = RunMode.MOCK
    adapter: Optional[BaseSourceAdapter] = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    checkpoints: Optional[CheckpointStore] = None
    coverage: CoverageTracker = field(default_factory=CoverageTracker)
    caches: Caches = field(default_factory=Caches)
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "mode", RunMode(self.mode))
        if self.checkpoints is None:
            object.__setattr__(self, "checkpoints", CheckpointStore(run_id=self.run_id))

    @classmethod
    def create(
        cls,
        mode: str = "mock",
        adapter: Optional[BaseSourceAdapter] = None,
        checkpoint_dir: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> "ExtractionContext":
        """Build a context with a checkpoint store rooted at ``checkpoint_dir``."""
        run_id = run_id or uuid.uuid4().hex[:12]
        return cls(
            mode=RunMode(mode),
            adapter=adapter,
            run_id=run_id,
            checkpoints=CheckpointStore(checkpoint_dir, run_id=run_id),
        )

    @property
    def system_info(self) -> Optional[Dict[str, Any]]:
        return self.caches.system_info

    @property
    def data_dictionary(self) -> Optional[Dict[str, Any]]:
        return self.caches.data_dictionary

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()

    def with_caches(self, **changes: Any) -> "ExtractionContext":
        """Return a copy whose ``Caches`` has the given fields replaced."""
        return replace(self, caches=replace(self.caches, **changes))
