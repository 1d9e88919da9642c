"""Per-table extraction coverage ledger."""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


class CoverageStatus(str, Enum):
    EXTRACTED = "extracted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class CoverageRecord:
    """One observed table outcome."""
    extractor_id: str
    table: str
    status: CoverageStatus
    row_count: Optional[int] = None
    reason: Optional[str] = None
    recorded_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


class CoverageTracker:
    """
    Append-only record of which tables each extractor read.

    Reports look at the latest entry per (extractor, table); tables an
    extractor declared as critical but never extracted are reported as
    ``critical_missed``.
    """

    def __init__(self):
        self._log: List[CoverageRecord] = []
        self._expected: Dict[str, Dict[str, bool]] = {}

    def expect(self, extractor_id: str, tables: Iterable[Any]) -> None:
        """Declare the tables an extractor is expected to cover."""
        declared = self._expected.setdefault(extractor_id, {})
        for table in tables:
            declared[table.name] = bool(table.critical)

    def record(
        self,
        extractor_id: str,
        table: str,
        status: CoverageStatus,
        row_count: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> CoverageRecord:
        entry = CoverageRecord(
            extractor_id=extractor_id,
            table=table,
            status=CoverageStatus(status),
            row_count=row_count,
            reason=reason,
            recorded_at=datetime.now(timezone.utc).isoformat(),
        )
        self._log.append(entry)
        return entry

    def entries(self, extractor_id: Optional[str] = None) -> List[CoverageRecord]:
        return [e for e in self._log if extractor_id is None or e.extractor_id == extractor_id]

    def _latest(self, extractor_id: Optional[str]) -> Dict[Tuple[str, str], CoverageRecord]:
        latest: Dict[Tuple[str, str], CoverageRecord] = {}
        for entry in self.entries(extractor_id):
            latest[(entry.extractor_id, entry.table)] = entry
        return latest

    def get_report(self, extractor_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Aggregate coverage.

        Args:
            extractor_id: Restrict the report to one extractor

        Returns:
            Dict with ``extracted``, ``skipped`` and ``failed`` counts,
            ``critical_missed`` (list of ``{extractorId, table}``), ``tables``
            (latest entry per table) and ``coverage`` percentage over
            expected tables
        """
        latest = self._latest(extractor_id)
        counts = {status.value: 0 for status in CoverageStatus}
        for entry in latest.values():
            counts[entry.status.value] += 1

        critical_missed = []
        expected_total = 0
        expected_covered = 0
        for ext_id, tables in self._expected.items():
            if extractor_id is not None and ext_id != extractor_id:
                continue
            for table, critical in tables.items():
                expected_total += 1
                entry = latest.get((ext_id, table))
                covered = entry is not None and entry.status == CoverageStatus.EXTRACTED
                if covered:
                    expected_covered += 1
                elif critical:
                    critical_missed.append({
                        "extractorId": ext_id,
                        "table": table,
                        "reason": entry.reason if entry else "not attempted",
                    })

        return {
            **counts,
            "critical_missed": critical_missed,
            "coverage": round(expected_covered / expected_total * 100) if expected_total else 0,
            "tables": [e.to_dict() for e in latest.values()],
        }

    def expected_tables(self) -> Dict[str, Dict[str, bool]]:
        return {ext_id: dict(tables) for ext_id, tables in self._expected.items()}
