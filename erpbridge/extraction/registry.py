"""Extractor registry and the bounded-concurrency runner."""

import asyncio
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Type

from .base import ExtractorRunner, ExtractorSpec
from .context import ExtractionContext
from ..errors import RuleValidationError
from ..events.progress_bus import ProgressBus, progress_bus
from ..models.results import ExtractorCategory

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


class ExtractorRegistry:
    """Holds extractor spec classes keyed by extractor id."""

    def __init__(self):
        self._extractors: Dict[str, Type[ExtractorSpec]] = {}

    def register(self, spec_class: Type[ExtractorSpec]) -> Type[ExtractorSpec]:
        """
        Register an extractor spec class.

        Raises:
            RuleValidationError: The class is not an ``ExtractorSpec`` or
                declares no ``extractor_id``/``module``
        """
        errors = []
        if not isinstance(spec_class, type) or not issubclass(spec_class, ExtractorSpec):
            errors.append(f"{spec_class!r} is not an ExtractorSpec subclass")
        else:
            if not spec_class.extractor_id:
                errors.append(f"{spec_class.__name__} declares no extractor_id")
            if not spec_class.module:
                errors.append(f"{spec_class.__name__} declares no module")
        if errors:
            raise RuleValidationError("Invalid extractor registration", errors)

        if spec_class.extractor_id in self._extractors:
            logger.warning(f"Replacing extractor {spec_class.extractor_id}")
        self._extractors[spec_class.extractor_id] = spec_class
        return spec_class

    def unregister(self, extractor_id: str) -> bool:
        return self._extractors.pop(extractor_id, None) is not None

    def get(self, extractor_id: str) -> Optional[Type[ExtractorSpec]]:
        return self._extractors.get(extractor_id)

    def has(self, extractor_id: str) -> bool:
        return extractor_id in self._extractors

    def get_all(self) -> List[Type[ExtractorSpec]]:
        return list(self._extractors.values())

    def get_by_module(self, module: str) -> List[Type[ExtractorSpec]]:
        return [e for e in self._extractors.values() if e.module.upper() == module.upper()]

    def get_by_category(self, category: str) -> List[Type[ExtractorSpec]]:
        category = ExtractorCategory(category)
        return [e for e in self._extractors.values() if ExtractorCategory(e.category) == category]

    def clear(self) -> None:
        self._extractors.clear()

    @property
    def size(self) -> int:
        return len(self._extractors)

    def select(
        self,
        modules: Optional[Iterable[str]] = None,
        categories: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
    ) -> List[Type[ExtractorSpec]]:
        """Return registered specs matching every given filter, in registration order."""
        module_set = {m.upper() for m in modules} if modules else None
        category_set = {ExtractorCategory(c) for c in categories} if categories else None
        excluded = set(exclude or ())
        return [
            e for e in self._extractors.values()
            if (module_set is None or e.module.upper() in module_set)
            and (category_set is None or ExtractorCategory(e.category) in category_set)
            and e.extractor_id not in excluded
        ]

    async def run_all(
        self,
        ctx: ExtractionContext,
        concurrency: int = DEFAULT_CONCURRENCY,
        modules: Optional[Iterable[str]] = None,
        categories: Optional[Iterable[str]] = None,
        bus: Optional[ProgressBus] = None,
        resume: bool = False,
        exclude: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """
        Run the selected extractors with at most ``concurrency`` in flight.

        A failing extractor is logged and reported as ``{"error": ...}``;
        the others keep running. Setting ``ctx.cancel_event`` stops new
        extractors from being admitted.

        Args:
            ctx: Run context
            concurrency: Maximum number of extractors running at once
            modules: Only run extractors of these modules
            categories: Only run extractors of these categories
            bus: Progress bus, the shared one by default
            resume: Reuse results of extractors checkpointed as complete
            exclude: Extractor ids to leave out

        Returns:
            Results keyed by extractor id, in completion order
        """
        if concurrency < 1:
            raise RuleValidationError("concurrency must be at least 1", [f"concurrency={concurrency}"])

        bus = bus or progress_bus
        selected = self.select(modules, categories, exclude)
        total = len(selected)
        results: Dict[str, Any] = {}
        counters = {"completed": 0, "failed": 0}
        started = time.monotonic()

        bus.emit("extraction:start", {
            "runId": ctx.run_id,
            "mode": ctx.mode.value,
            "total": total,
            "concurrency": concurrency,
            "extractorIds": [e.extractor_id for e in selected],
        })
        logger.info(f"Running {total} extractor(s) with concurrency {concurrency} ({ctx.mode.value})")

        queue: "asyncio.Queue[Type[ExtractorSpec]]" = asyncio.Queue()
        for spec_class in selected:
            queue.put_nowait(spec_class)

        async def worker() -> None:
            while not queue.empty() and not ctx.cancelled:
                spec_class = queue.get_nowait()
                extractor_id = spec_class.extractor_id
                status = "completed"
                try:
                    results[extractor_id] = await ExtractorRunner(spec_class, ctx).extract(resume=resume)
                except Exception as e:
                    logger.error(f"Extractor {extractor_id} failed: {e}", exc_info=True)
                    results[extractor_id] = {"error": str(e)}
                    counters["failed"] += 1
                    status = "failed"
                counters["completed"] += 1
                bus.emit("extraction:progress", {
                    "runId": ctx.run_id,
                    "extractorId": extractor_id,
                    "completed": counters["completed"],
                    "total": total,
                    "status": status,
                })

        try:
            await asyncio.gather(*(worker() for _ in range(min(concurrency, total))))
            report = ctx.coverage.get_report()
            await ctx.checkpoints.save_coverage(report)
        except Exception as e:
            logger.error(f"Extraction run {ctx.run_id} failed: {e}", exc_info=True)
            bus.emit("extraction:error", {"runId": ctx.run_id, "reason": "failed", "error": str(e)})
            raise

        summary = {
            "runId": ctx.run_id,
            "total": total,
            "completed": counters["completed"],
            "failed": counters["failed"],
            "durationMs": round((time.monotonic() - started) * 1000),
            "coverage": {k: report[k] for k in ("extracted", "skipped", "failed", "coverage")},
            "criticalMissed": len(report["critical_missed"]),
        }

        if ctx.cancelled:
            logger.warning(f"Extraction run {ctx.run_id} cancelled after {counters['completed']}/{total}")
            bus.emit("extraction:error", {**summary, "reason": "cancelled"})
        else:
            logger.info(f"Extraction run {ctx.run_id} finished: {counters['completed']} done, {counters['failed']} failed")
            bus.emit("extraction:complete", summary)

        return results
