"""Data quality checks run on transformed migration rows."""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Pattern, Union

logger = logging.getLogger(__name__)

FUZZY_ROW_LIMIT = 10000
DEFAULT_FUZZY_THRESHOLD = 0.85


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings."""
    if not a or not b:
        return len(a or b or "")
    row = list(range(len(a) + 1))
    for j in range(1, len(b) + 1):
        prev = row[0]
        row[0] = j
        for i in range(1, len(a) + 1):
            current = row[i]
            if a[i - 1] == b[j - 1]:
                row[i] = prev
            else:
                row[i] = 1 + min(prev, row[i], row[i - 1])
            prev = current
    return row[len(a)]


def normalized_similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]; two empty strings are identical."""
    longest = max(len(a or ""), len(b or ""))
    if longest == 0:
        return 1.0
    return 1 - levenshtein(a, b) / longest


@dataclass(frozen=True)
class FuzzyCheck:
    keys: tuple
    threshold: float = DEFAULT_FUZZY_THRESHOLD


@dataclass(frozen=True)
class RangeCheck:
    field: str
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class ReferentialCheck:
    field: str
    valid_values: frozenset


@dataclass(frozen=True)
class FormatCheck:
    field: str
    pattern: Union[str, Pattern]
    description: Optional[str] = None


@dataclass
class QualityChecks:
    """Checks declared by a migration object."""
    required: List[str] = field(default_factory=list)
    exact_duplicate: Optional[List[str]] = None
    fuzzy_duplicate: Optional[FuzzyCheck] = None
    ranges: List[RangeCheck] = field(default_factory=list)
    referential: List[ReferentialCheck] = field(default_factory=list)
    formats: List[FormatCheck] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QualityChecks":
        """Create from the dictionary form used in configuration files."""
        exact = data.get("exactDuplicate")
        fuzzy = data.get("fuzzyDuplicate")
        return cls(
            required=list(data.get("required", [])),
            exact_duplicate=list(exact["keys"]) if exact else None,
            fuzzy_duplicate=FuzzyCheck(tuple(fuzzy["keys"]), fuzzy.get("threshold", DEFAULT_FUZZY_THRESHOLD)) if fuzzy else None,
            ranges=[RangeCheck(r["field"], r.get("min"), r.get("max")) for r in data.get("range", [])],
            referential=[ReferentialCheck(r["field"], frozenset(r["validSet"])) for r in data.get("referential", [])],
            formats=[FormatCheck(f["field"], f["pattern"], f.get("description")) for f in data.get("format", [])],
        )


@dataclass
class CheckResult:
    """Outcome of one quality check."""
    name: str
    severity: str  # error, warning, pass
    message: str
    details: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.details)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "severity": self.severity,
            "message": self.message,
            "count": self.count,
            "details": self.details,
        }


@dataclass
class QualityReport:
    """All check results for one batch of rows."""
    total_records: int
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for c in self.checks if c.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for c in self.checks if c.severity == "warning")

    @property
    def violation_count(self) -> int:
        return sum(c.count for c in self.checks)

    @property
    def status(self) -> str:
        if self.error_count:
            return "failed"
        if self.warning_count:
            return "warnings"
        return "passed"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "qualityStatus": self.status,
            "totalRecords": self.total_records,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "violationCount": self.violation_count,
            "checks": [c.to_dict() for c in self.checks],
        }


def _blank(value: Any) -> bool:
    return value is None or value == ""


def _present(value: Any) -> bool:
    """A usable required value: a non-empty string or a number (not a bool)."""
    if isinstance(value, str):
        return value != ""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _key_text(value: Any) -> str:
    return "" if _blank(value) else str(value)


def _as_number(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class DataQualityChecker:
    """
    Validates migration rows for completeness, duplicates and value rules.

    Supports:
    - Required fields
    - Exact duplicates on a composite key
    - Fuzzy duplicates by Levenshtein similarity
    - Referential integrity against a value set
    - Regex format checks
    - Inclusive numeric ranges
    """

    def run(self, rows: List[Dict[str, Any]], checks: Optional[QualityChecks] = None) -> QualityReport:
        """
        Run every configured check.

        Args:
            rows: Transformed rows
            checks: Checks to run; an empty report when omitted

        Returns:
            QualityReport
        """
        checks = checks or QualityChecks()
        report = QualityReport(total_records=len(rows))

        if checks.required:
            report.checks.append(self.check_required(rows, checks.required))
        if checks.exact_duplicate:
            report.checks.append(self.find_exact_duplicates(rows, checks.exact_duplicate))
        if checks.fuzzy_duplicate:
            fuzzy = checks.fuzzy_duplicate
            report.checks.append(self.find_fuzzy_duplicates(rows, fuzzy.keys, fuzzy.threshold))
        for ref in checks.referential:
            report.checks.append(self.check_referential_integrity(rows, ref.field, ref.valid_values))
        for fmt in checks.formats:
            report.checks.append(self.check_format(rows, fmt.field, fmt.pattern, fmt.description))
        for rng in checks.ranges:
            report.checks.append(self.check_range(rows, rng.field, rng.min, rng.max))

        if report.status != "passed":
            logger.debug(f"Quality status {report.status}: {report.violation_count} violation(s)")
        return report

    def check_required(self, rows: List[Dict[str, Any]], fields: Iterable[str]) -> CheckResult:
        fields = list(fields)
        missing = [
            {"row": i, "field": f}
            for i, row in enumerate(rows)
            for f in fields
            if not _present(row.get(f))
        ]
        joined = ", ".join(fields)
        return CheckResult(
            name="required",
            severity="error" if missing else "pass",
            message=f"{len(missing)} missing required value(s) across fields: {joined}" if missing
            else f"All required fields present: {joined}",
            details=missing,
        )

    def find_exact_duplicates(self, rows: List[Dict[str, Any]], keys: Iterable[str]) -> CheckResult:
        keys = list(keys)
        seen: Dict[str, int] = {}
        duplicates = []
        for i, row in enumerate(rows):
            key = "|".join(_key_text(row.get(k)) for k in keys)
            if key in seen:
                duplicates.append({"row": i, "duplicateOf": seen[key], "key": key})
            else:
                seen[key] = i
        joined = ", ".join(keys)
        return CheckResult(
            name="exactDuplicate",
            severity="error" if duplicates else "pass",
            message=f"{len(duplicates)} exact duplicate(s) on keys: {joined}" if duplicates
            else f"No exact duplicates on keys: {joined}",
            details=duplicates,
        )

    def find_fuzzy_duplicates(
        self,
        rows: List[Dict[str, Any]],
        keys: Iterable[str],
        threshold: float = DEFAULT_FUZZY_THRESHOLD,
    ) -> CheckResult:
        """
        Flag row pairs whose concatenated key values are at least ``threshold`` similar.

        Comparison is quadratic, so only the first ``FUZZY_ROW_LIMIT`` rows
        are compared.
        """
        keys = list(keys)
        strings = [" ".join(_key_text(row.get(k)).lower().strip() for k in keys) for row in rows]
        limit = min(len(rows), FUZZY_ROW_LIMIT)
        if len(rows) > limit:
            logger.warning(f"Fuzzy duplicate check limited to the first {limit} of {len(rows)} rows")

        candidates = []
        for i in range(limit):
            for j in range(i + 1, limit):
                similarity = normalized_similarity(strings[i], strings[j])
                if similarity >= threshold:
                    candidates.append({"rowA": i, "rowB": j, "similarity": round(similarity, 2)})

        return CheckResult(
            name="fuzzyDuplicate",
            severity="warning" if candidates else "pass",
            message=f"{len(candidates)} potential fuzzy duplicate(s) (threshold: {threshold})" if candidates
            else f"No fuzzy duplicates detected (threshold: {threshold})",
            details=candidates,
        )

    def check_referential_integrity(self, rows: List[Dict[str, Any]], field_name: str, valid_values: Iterable[Any]) -> CheckResult:
        valid = set(valid_values)
        violations = [
            {"row": i, "field": field_name, "value": row.get(field_name)}
            for i, row in enumerate(rows)
            if not _blank(row.get(field_name)) and row.get(field_name) not in valid
        ]
        return CheckResult(
            name="referentialIntegrity",
            severity="error" if violations else "pass",
            message=f"{len(violations)} referential integrity violation(s) on {field_name}" if violations
            else f"Referential integrity OK for {field_name}",
            details=violations,
        )

    def check_format(self, rows: List[Dict[str, Any]], field_name: str, pattern: Union[str, Pattern], description: Optional[str] = None) -> CheckResult:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        violations = [
            {"row": i, "field": field_name, "value": row.get(field_name)}
            for i, row in enumerate(rows)
            if not _blank(row.get(field_name)) and not regex.search(str(row.get(field_name)))
        ]
        label = description or regex.pattern
        return CheckResult(
            name="format",
            severity="warning" if violations else "pass",
            message=f"{len(violations)} format violation(s) on {field_name} ({label})" if violations
            else f"Format OK for {field_name}",
            details=violations,
        )

    def check_range(self, rows: List[Dict[str, Any]], field_name: str, min_value: Optional[float] = None, max_value: Optional[float] = None) -> CheckResult:
        violations = []
        for i, row in enumerate(rows):
            number = _as_number(row.get(field_name))
            if number is None:
                continue
            if min_value is not None and number < min_value:
                violations.append({"row": i, "field": field_name, "value": number, "reason": f"below min {min_value}"})
            if max_value is not None and number > max_value:
                violations.append({"row": i, "field": field_name, "value": number, "reason": f"above max {max_value}"})
        bounds = f"{'-inf' if min_value is None else min_value}..{'inf' if max_value is None else max_value}"
        return CheckResult(
            name="range",
            severity="warning" if violations else "pass",
            message=f"{len(violations)} range violation(s) on {field_name} ({bounds})" if violations
            else f"Range OK for {field_name}",
            details=violations,
        )
