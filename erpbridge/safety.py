"""
Safety gate for platform operations.

Read operations are always allowed. Write operations are allowed only
when the caller passes ``dry_run=False`` explicitly; omitting the flag
denies the write.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import UnknownOperation, ValidationError

logger = logging.getLogger(__name__)

TIER_NAMES = {
    1: "assessment",
    2: "development",
    3: "staging",
    4: "production",
}

# Operation -> required security tier; tier 1 is read-only
OPERATION_TIERS: Dict[str, int] = {
    # Extraction
    "extraction.run": 1,
    "extraction.export": 1,
    "extraction.schedule": 1,
    "extraction.profile": 1,
    # Migration analysis
    "migration.analyze": 1,
    "migration.assess": 1,
    "migration.map_fields": 1,
    "migration.compare": 1,
    "migration.plan": 1,
    # Migration development
    "migration.transform": 2,
    "migration.validate": 2,
    "migration.load_sandbox": 2,
    "migration.test_run": 2,
    "migration.generate_template": 2,
    # Migration staging
    "migration.load_staging": 3,
    "migration.cutover_rehearsal": 3,
    "migration.data_reconciliation": 3,
    # Migration production
    "migration.load_production": 4,
    "migration.cutover_execute": 4,
    "migration.go_live": 4,
    # Transport management
    "transport.create": 2,
    "transport.modify": 2,
    "transport.release": 3,
    "transport.import": 4,
    "transport.import_staging": 3,
    "transport.import_production": 4,
    # Code changes
    "code.read": 1,
    "code.analyze": 1,
    "code.generate": 2,
    "code.write_sandbox": 2,
    "code.write_dev": 2,
    "code.activate_staging": 3,
    "code.activate_production": 4,
    # Configuration
    "config.read": 1,
    "config.export": 1,
    "config.change_sandbox": 2,
    "config.change_dev": 2,
    "config.change_staging": 3,
    "config.change_production": 4,
    # System administration
    "system.info": 1,
    "system.health_check": 1,
    "system.connection_test": 1,
    "system.user_management": 3,
    "system.auth_config": 4,
    "system.security_policy": 4,
    # Infor
    "infor.query_bod": 1,
    "infor.profile_db": 1,
    "infor.run_assessment": 1,
    "infor.execute_m3api": 2,
    "infor.migrate_object": 2,
    "infor.migrate_staging": 3,
    "infor.migrate_production": 4,
}

READ_OPERATIONS = frozenset(op for op, tier in OPERATION_TIERS.items() if tier == 1)
WRITE_OPERATIONS = frozenset(op for op, tier in OPERATION_TIERS.items() if tier > 1)

REASON_UNKNOWN = "unknown-operation"
REASON_LIVE_CONFIRMED = "write-operation-live-mode-confirmed"
REASON_LIVE_REQUIRED = "write-operation-requires-explicit-live-mode"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class GateDecision:
    """Whether an operation may proceed."""
    allowed: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {"allowed": self.allowed}
        if self.reason is not None:
            data["reason"] = self.reason
        return data


def operation_tier(operation: str) -> Optional[int]:
    """Security tier of an operation, ``None`` when unknown."""
    return OPERATION_TIERS.get(operation)


def check_operation(operation: str, dry_run: Any = UNSET) -> GateDecision:
    """
    Decide whether ``operation`` may run.

    Args:
        operation: Dotted operation name
        dry_run: Only the exact value ``False`` confirms a write

    Returns:
        GateDecision
    """
    if operation in READ_OPERATIONS:
        return GateDecision(True)
    if operation in WRITE_OPERATIONS:
        if dry_run is False:
            return GateDecision(True, REASON_LIVE_CONFIRMED)
        return GateDecision(False, REASON_LIVE_REQUIRED)
    return GateDecision(False, REASON_UNKNOWN)


def check_request(operation: str, params: Optional[Mapping[str, Any]] = None) -> GateDecision:
    """Evaluate a request whose parameters may carry ``dryRun`` or ``dry_run``."""
    params = params or {}
    if "dryRun" in params:
        return check_operation(operation, params["dryRun"])
    if "dry_run" in params:
        return check_operation(operation, params["dry_run"])
    return check_operation(operation)


def require_allowed(operation: str, dry_run: Any = UNSET) -> GateDecision:
    """
    Like ``check_operation`` but raises on denial.

    Raises:
        UnknownOperation: The operation is not known
        ValidationError: A write was requested without explicit live mode
    """
    decision = check_operation(operation, dry_run)
    if decision.allowed:
        if decision.reason:
            logger.warning(f"Write operation {operation} confirmed for live mode")
        return decision
    logger.warning(f"Safety gate denied {operation}: {decision.reason}")
    if decision.reason == REASON_UNKNOWN:
        raise UnknownOperation(operation)
    raise ValidationError(
        f"Operation {operation} requires dry_run=False",
        {"operation": operation, "reason": decision.reason, "tier": TIER_NAMES[OPERATION_TIERS[operation]]},
    )
