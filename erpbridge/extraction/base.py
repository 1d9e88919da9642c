"""Base extractor interface and the generic runner."""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type, Union

from .checkpoint import COMPLETE_STEP
from .context import ExtractionContext
from .coverage import CoverageStatus
from ..errors import AuthenticationError, BridgeError
from ..models.profile import RunMode
from ..models.results import ExtractorCategory

logger = logging.getLogger(__name__)

RESULT_STEP = "result"


@dataclass(frozen=True)
class ExpectedTable:
    """A table an extractor is expected to read."""
    name: str
    description: str = ""
    critical: bool = False


@dataclass(frozen=True)
class Subject:
    """One logical subject area filled from one table read."""
    name: str
    table: str
    fields: Optional[Tuple[str, ...]] = None
    max_rows: Optional[int] = None
    filter: Optional[str] = None


@dataclass
class TableRead:
    """Outcome of a single table read; failures are values, not exceptions."""
    table: str
    status: CoverageStatus
    rows: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CoverageStatus.EXTRACTED

    @property
    def row_count(self) -> int:
        return len(self.rows)


class ExtractorSpec:
    """
    Declarative description of one extractor.

    Subclasses set the identity attributes and implement ``extract_live``
    and/or ``extract_mock``. Both receive an ``ExtractorRun`` and return a
    mapping of subject name to rows (or any JSON-serializable summary).
    """

    extractor_id: str = ""
    name: str = ""
    module: str = ""
    category: ExtractorCategory = ExtractorCategory.CONFIG
    expected_tables: Tuple[ExpectedTable, ...] = ()

    def get_expected_tables(self) -> List[ExpectedTable]:
        return list(self.expected_tables)

    @classmethod
    def identity(cls) -> Dict[str, Any]:
        return {
            "extractorId": cls.extractor_id,
            "name": cls.name,
            "module": cls.module,
            "category": ExtractorCategory(cls.category).value,
        }

    async def extract_live(self, run: "ExtractorRun") -> Dict[str, Any]:
        raise NotImplementedError(f"{self.extractor_id} has no live extraction")

    async def extract_mock(self, run: "ExtractorRun") -> Dict[str, Any]:
        raise NotImplementedError(f"{self.extractor_id} has no mock extraction")


class TableExtractorSpec(ExtractorSpec):
    """
    Extractor whose output is one row list per declared ``Subject``.

    Live mode reads each subject's table in order. Mock mode takes rows
    from ``fixtures()`` and records them as extracted coverage. When
    ``primary_subject`` is set the result also carries a ``count``; mock
    fixtures may supply their own volume estimate under that key.
    """

    subjects: Tuple[Subject, ...] = ()
    primary_subject: Optional[str] = None

    def fixtures(self, run: "ExtractorRun") -> Dict[str, List[Dict[str, Any]]]:
        return {}

    async def extract_live(self, run: "ExtractorRun") -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for subject in self.subjects:
            read = await run.read_table(
                subject.table,
                fields=list(subject.fields) if subject.fields else None,
                max_rows=subject.max_rows,
                filter=subject.filter,
            )
            result[subject.name] = read.rows
        if self.primary_subject:
            result["count"] = len(result.get(self.primary_subject, []))
        return result

    async def extract_mock(self, run: "ExtractorRun") -> Dict[str, Any]:
        data = self.fixtures(run)
        result: Dict[str, Any] = {}
        for subject in self.subjects:
            rows = data.get(subject.name, [])
            run.use_fixture(subject.table, rows)
            result[subject.name] = rows
        for key, value in data.items():
            result.setdefault(key, value)
        if self.primary_subject:
            result.setdefault("count", len(result.get(self.primary_subject, [])))
        return result


class ExtractorRun:
    """
    Call-site helper handed to a spec for one extraction.

    Table reads return ``TableRead`` values and record coverage as a side
    effect, so a spec never needs its own error handling for reads.
    """

    def __init__(self, spec: ExtractorSpec, context: ExtractionContext):
        self.spec = spec
        self.context = context
        self.extractor_id = spec.extractor_id
        self.logger = logger.getChild(spec.extractor_id)
        self.rng = random.Random(f"{context.run_id}:{spec.extractor_id}")
        self._critical = {t.name: t.critical for t in spec.get_expected_tables()}

    def _record(self, table: str, status: CoverageStatus, row_count: Optional[int] = None, reason: Optional[str] = None) -> None:
        self.context.coverage.record(self.extractor_id, table, status, row_count=row_count, reason=reason)

    async def read_table(
        self,
        table: str,
        fields: Optional[List[str]] = None,
        max_rows: Optional[int] = None,
        filter: Optional[str] = None,
    ) -> TableRead:
        """
        Read a table through the context adapter and record its coverage.

        Returns:
            TableRead; on failure ``rows`` is empty and ``error`` is set
        """
        if self.context.cancelled:
            self._record(table, CoverageStatus.SKIPPED, reason="cancelled")
            return TableRead(table, CoverageStatus.SKIPPED, error="cancelled")

        adapter = self.context.adapter
        if adapter is None:
            self._record(table, CoverageStatus.SKIPPED, reason="no adapter connection")
            return TableRead(table, CoverageStatus.SKIPPED, error="no adapter connection")

        try:
            data = await adapter.read_table(table, fields=fields, max_rows=max_rows, filter=filter)
        except BridgeError as e:
            reason = f"authorization: {e.message}" if isinstance(e, AuthenticationError) else e.message
            self._record(table, CoverageStatus.FAILED, reason=reason)
            if self._critical.get(table):
                self.logger.warning(f"Critical table {table} failed: {reason}")
            else:
                self.logger.debug(f"Table {table} failed: {reason}")
            return TableRead(table, CoverageStatus.FAILED, error=reason)

        self._record(table, CoverageStatus.EXTRACTED, row_count=data.row_count)
        return TableRead(table, CoverageStatus.EXTRACTED, rows=data.rows)

    def use_fixture(self, table: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Record fixture rows served in mock mode as extracted."""
        self._record(table, CoverageStatus.EXTRACTED, row_count=len(rows))
        return rows

    async def step(self, step_id: str, producer: Callable[[], Awaitable[Any]]) -> Any:
        """
        Run a checkpointed step, or return its saved value when one exists.

        Args:
            step_id: Step key within this extractor
            producer: Coroutine function computing the step value
        """
        checkpoints = self.context.checkpoints
        if await checkpoints.exists(self.extractor_id, step_id):
            self.logger.debug(f"Resuming step {step_id} from checkpoint")
            return await checkpoints.load(self.extractor_id, step_id)
        value = await producer()
        await checkpoints.save(self.extractor_id, step_id, value)
        return value


class ExtractorRunner:
    """Runs one extractor spec against a context."""

    def __init__(self, spec: Union[ExtractorSpec, Type[ExtractorSpec]], context: ExtractionContext):
        self.spec = spec() if isinstance(spec, type) else spec
        self.context = context

    async def extract(self, resume: bool = False) -> Dict[str, Any]:
        """
        Dispatch on the context mode and return the extractor's result unchanged.

        Args:
            resume: Return the checkpointed result when the extractor already finished
        """
        spec, ctx = self.spec, self.context
        ctx.coverage.expect(spec.extractor_id, spec.get_expected_tables())

        if resume and await ctx.checkpoints.exists(spec.extractor_id, COMPLETE_STEP):
            cached = await ctx.checkpoints.load(spec.extractor_id, RESULT_STEP)
            if cached is not None:
                logger.info(f"Skipping {spec.extractor_id}: completed in a previous attempt")
                return cached

        run = ExtractorRun(spec, ctx)
        if ctx.mode == RunMode.LIVE:
            result = await spec.extract_live(run)
        else:
            result = await spec.extract_mock(run)

        await ctx.checkpoints.save(spec.extractor_id, RESULT_STEP, result)
        await ctx.checkpoints.save(spec.extractor_id, COMPLETE_STEP, {
            "status": "completed",
            "completedAt": datetime.now(timezone.utc).isoformat(),
            "resultKeys": list(result.keys()) if isinstance(result, dict) else [],
        })
        return result
