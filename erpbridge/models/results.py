"""Run result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ExtractorCategory(str, Enum):
    """What kind of information an extractor pulls."""
    CONFIG = "config"
    MASTERDATA = "masterdata"
    PROCESS = "process"
    METADATA = "metadata"
    INTERFACE = "interface"


class PhaseStatus(str, Enum):
    """Status of a migration phase or a whole migration object run."""
    PENDING = "pending"
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class PhaseResult:
    """Outcome of one ETVL phase."""
    status: PhaseStatus = PhaseStatus.PENDING
    record_count: int = 0
    duration_ms: int = 0
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = {
            "status": self.status.value,
            "recordCount": self.record_count,
            "durationMs": self.duration_ms,
            **self.details,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ObjectRunResult:
    """Result of running one migration object through all phases."""
    object_id: str
    name: str
    status: PhaseStatus = PhaseStatus.PENDING
    phases: Dict[str, PhaseResult] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)
    records: list = field(default_factory=list, repr=False)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        """Check if the run finished without failing."""
        return self.status != PhaseStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = {
            "objectId": self.object_id,
            "name": self.name,
            "status": self.status.value,
            "phases": {name: phase.to_dict() for name, phase in self.phases.items()},
            "stats": self.stats,
        }
        if self.error:
            data["error"] = self.error
        return data
