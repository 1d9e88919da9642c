"""Migration object spec and the generic ETVL runner."""

import logging
import math
import random
import time
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from .field_mapping import FieldMapping, FieldMappingEngine
from .quality import DataQualityChecker, QualityChecks, QualityReport
from ..adapters.base import BaseSourceAdapter
from ..errors import MigrationObjectError, RuleValidationError, ValidationError
from ..events.progress_bus import ProgressBus, progress_bus
from ..models.profile import RunMode
from ..models.results import ObjectRunResult, PhaseResult, PhaseStatus
from ..safety import check_operation

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100
LOAD_OPERATION = "migration.load_staging"


class MigrationObjectSpec:
    """
    Declarative description of one migration object.

    Subclasses set the identity attributes, return their field mappings
    and quality checks, and produce source rows through ``extract_mock``
    (and optionally ``extract_live``).
    """

    object_id: str = ""
    name: str = ""
    source_system: Optional[str] = None
    target_system: str = "S4HANA"
    source_table: Optional[str] = None

    def __init__(self, seed: Optional[Any] = None):
        self.seed = self.object_id if seed is None else seed

    def field_mappings(self) -> List[FieldMapping]:
        raise NotImplementedError(f"{type(self).__name__} declares no field mappings")

    def metadata_mappings(self) -> List[FieldMapping]:
        """Constant columns naming the source system and the object."""
        return [
            FieldMapping.constant("SourceSystem", self.source_system),
            FieldMapping.constant("MigrationObjectId", self.object_id),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks()

    def post_transform(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Hook run on the mapped rows, e.g. to merge records."""
        return rows

    def extract_mock(self, rng: random.Random) -> List[Dict[str, Any]]:
        """Fixture rows; only ``rng`` may be used as a source of randomness."""
        return []

    def mock_rows(self) -> List[Dict[str, Any]]:
        """Fixture rows for this spec's seed."""
        return self.extract_mock(random.Random(str(self.seed)))

    async def extract_live(self, adapter: BaseSourceAdapter) -> List[Dict[str, Any]]:
        """Read ``source_table`` through the adapter."""
        if not self.source_table:
            logger.warning(f"{self.object_id} has no source table, falling back to mock rows")
            return self.mock_rows()
        data = await adapter.read_table(self.source_table)
        return data.rows

    @classmethod
    def identity(cls) -> Dict[str, Any]:
        return {
            "objectId": cls.object_id,
            "name": cls.name,
            "sourceSystem": cls.source_system,
            "targetSystem": cls.target_system,
        }


def _elapsed_ms(started: float) -> int:
    return round((time.monotonic() - started) * 1000)


class MigrationObjectRunner:
    """
    Runs one migration object through extract, transform, validate and load.

    The run status is ``failed`` when a phase raises, ``completed_with_errors``
    when transform or validation reported problems, otherwise ``completed``.
    Load is simulated; in live mode it is subject to the safety gate.
    """

    def __init__(
        self,
        spec: Union[MigrationObjectSpec, Type[MigrationObjectSpec]],
        mode: Union[str, RunMode] = RunMode.MOCK,
        adapter: Optional[BaseSourceAdapter] = None,
        bus: Optional[ProgressBus] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        dry_run: Any = True,
        seed: Optional[Any] = None,
    ):
        """
        Initialize the runner.

        Args:
            spec: Spec instance or class (instantiated with ``seed``)
            mode: ``mock`` or ``live``
            adapter: Source adapter, required in live mode
            bus: Progress bus, the shared one by default
            batch_size: Records per simulated load batch
            dry_run: Only ``False`` lets the live load pass the safety gate
            seed: Seed for mock rows when ``spec`` is a class

        Raises:
            RuleValidationError: The field mappings are invalid
            ValidationError: Live mode without an adapter, or a bad batch size
        """
        self.spec = spec(seed=seed) if isinstance(spec, type) else spec
        self.mode = RunMode(mode)
        if self.mode == RunMode.LIVE and adapter is None:
            raise ValidationError(f"{self.spec.object_id}: live mode requires an adapter")
        if batch_size < 1:
            raise ValidationError(f"batch_size must be at least 1, got {batch_size}")

        self.adapter = adapter
        self.bus = bus or progress_bus
        self.batch_size = batch_size
        self.dry_run = dry_run
        self.logger = logger.getChild(self.spec.object_id or type(self.spec).__name__)

        self.engine = FieldMappingEngine(self.spec.field_mappings(), object_id=self.spec.object_id)
        validation = self.engine.validate_mappings()
        if not validation["valid"]:
            raise RuleValidationError(f"Invalid field mappings for {self.spec.object_id}", validation["errors"])
        self.checker = DataQualityChecker()

    @property
    def object_id(self) -> str:
        return self.spec.object_id

    async def extract(self) -> Tuple[List[Dict[str, Any]], PhaseResult]:
        started = time.monotonic()
        self.logger.info(f"Extracting {self.spec.name} ({self.mode.value})")
        if self.mode == RunMode.LIVE:
            rows = await self.spec.extract_live(self.adapter)
        else:
            rows = self.spec.mock_rows()
        phase = PhaseResult(
            status=PhaseStatus.COMPLETED,
            record_count=len(rows),
            duration_ms=_elapsed_ms(started),
            details={"sourceTable": self.spec.source_table},
        )
        return rows, phase

    def transform(self, rows: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], PhaseResult]:
        started = time.monotonic()
        self.logger.info(f"Transforming {len(rows)} records")
        self.engine.reset_stats()
        transformed = self.engine.apply_batch(rows)
        mapped_count = len(transformed)
        transformed = self.spec.post_transform(transformed)
        errors = self.engine.errors
        phase = PhaseResult(
            status=PhaseStatus.COMPLETED_WITH_ERRORS if errors else PhaseStatus.COMPLETED,
            record_count=len(transformed),
            duration_ms=_elapsed_ms(started),
            details={
                "mappingSummary": self.engine.get_summary(),
                "transformErrors": [e.to_dict() for e in errors[:50]],
            },
        )
        if len(transformed) != mapped_count:
            phase.details["mergedCount"] = mapped_count - len(transformed)
        return transformed, phase

    def validate(self, rows: List[Dict[str, Any]]) -> Tuple[QualityReport, PhaseResult]:
        started = time.monotonic()
        self.logger.info(f"Validating {len(rows)} records")
        report = self.checker.run(rows, self.spec.quality_checks())
        if report.violation_count:
            self.logger.warning(
                f"{self.spec.object_id}: {report.violation_count} quality violation(s), status {report.status}"
            )
        report_dict = report.to_dict()
        report_dict.pop("totalRecords")
        phase = PhaseResult(
            status=PhaseStatus.COMPLETED_WITH_ERRORS if report.violation_count else PhaseStatus.COMPLETED,
            record_count=len(rows),
            duration_ms=_elapsed_ms(started),
            details=report_dict,
        )
        return report, phase

    def load(self, rows: List[Dict[str, Any]]) -> PhaseResult:
        """
        Simulate loading ``rows`` into the target.

        Nothing is written anywhere. In live mode the ``migration.load_staging``
        gate decision is recorded and a denial skips the phase.
        """
        started = time.monotonic()
        details: Dict[str, Any] = {
            "simulated": True,
            "batchSize": self.batch_size,
            "targetSystem": self.spec.target_system,
        }

        if self.mode == RunMode.LIVE:
            decision = check_operation(LOAD_OPERATION, self.dry_run)
            details["gate"] = {"operation": LOAD_OPERATION, **decision.to_dict()}
            if not decision.allowed:
                self.logger.warning(f"Load skipped for {self.spec.object_id}: {decision.reason}")
                return PhaseResult(
                    status=PhaseStatus.SKIPPED,
                    duration_ms=_elapsed_ms(started),
                    details={**details, "reason": decision.reason, "successCount": 0, "errorCount": 0, "batches": 0},
                )

        self.logger.info(f"Loading {len(rows)} records")
        details.update({
            "successCount": len(rows),
            "errorCount": 0,
            "batches": math.ceil(len(rows) / self.batch_size),
        })
        return PhaseResult(
            status=PhaseStatus.COMPLETED,
            record_count=len(rows),
            duration_ms=_elapsed_ms(started),
            details=details,
        )

    async def run(self) -> ObjectRunResult:
        """
        Run all four phases.

        Returns:
            ObjectRunResult with one PhaseResult per executed phase
        """
        spec = self.spec
        started = time.monotonic()
        result = ObjectRunResult(object_id=spec.object_id, name=spec.name)
        self.logger.info(f"Running migration object {spec.name}")
        self.bus.emit("migration:start", {
            "objectId": spec.object_id,
            "name": spec.name,
            "mode": self.mode.value,
            "sourceSystem": spec.source_system,
            "targetSystem": spec.target_system,
        })

        phase_name = "extract"
        try:
            rows, result.phases["extract"] = await self.extract()
            self._progress("extract", result.phases["extract"])

            phase_name = "transform"
            transformed, result.phases["transform"] = self.transform(rows)
            result.records = transformed
            self._progress("transform", result.phases["transform"])

            phase_name = "validate"
            _, result.phases["validate"] = self.validate(transformed)
            self._progress("validate", result.phases["validate"])

            phase_name = "load"
            result.phases["load"] = self.load(transformed)
            self._progress("load", result.phases["load"])
        except Exception as e:
            error = MigrationObjectError(f"{spec.name} failed during {phase_name}: {e}", phase_name, e)
            self.logger.error(error.message, exc_info=True)
            result.phases[phase_name] = PhaseResult(status=PhaseStatus.FAILED, error=str(e))
            result.status = PhaseStatus.FAILED
            result.error = error.message
            result.stats = self._build_stats(result, started)
            self.bus.emit("migration:error", {
                "objectId": spec.object_id,
                "phase": phase_name,
                "error": error.message,
            })
            return result

        if any(p.status == PhaseStatus.COMPLETED_WITH_ERRORS for p in result.phases.values()):
            result.status = PhaseStatus.COMPLETED_WITH_ERRORS
        else:
            result.status = PhaseStatus.COMPLETED
        result.stats = self._build_stats(result, started)

        self.logger.info(f"{spec.name} finished: {result.status.value}")
        self.bus.emit("migration:complete", {
            "objectId": spec.object_id,
            "status": result.status.value,
            "stats": result.stats,
        })
        return result

    def _progress(self, phase: str, outcome: PhaseResult) -> None:
        self.bus.emit("migration:progress", {
            "objectId": self.spec.object_id,
            "phase": phase,
            "status": outcome.status.value,
            "recordCount": outcome.record_count,
        })

    @staticmethod
    def _build_stats(result: ObjectRunResult, started: float) -> Dict[str, Any]:
        phases = result.phases
        validate = phases.get("validate")
        load = phases.get("load")
        return {
            "totalDurationMs": _elapsed_ms(started),
            "extractedRecords": phases["extract"].record_count if "extract" in phases else 0,
            "transformedRecords": phases["transform"].record_count if "transform" in phases else 0,
            "validationStatus": validate.details.get("qualityStatus", "n/a") if validate else "n/a",
            "loadedRecords": load.details.get("successCount", 0) if load else 0,
            "loadErrors": load.details.get("errorCount", 0) if load else 0,
        }
