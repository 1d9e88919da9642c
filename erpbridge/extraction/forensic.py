"""Forensic extraction run: metadata first, then everything else, then gap analysis."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .base import ExtractorRunner
from .context import ExtractionContext
from .registry import DEFAULT_CONCURRENCY, ExtractorRegistry
from ..events.progress_bus import ProgressBus, progress_bus

logger = logging.getLogger(__name__)

METADATA_EXTRACTORS = ("SYSTEM_INFO", "DATA_DICTIONARY")

HUMAN_VALIDATION_CHECKLIST = [
    "Verify the number of active users matches business expectations",
    "Confirm all company codes in scope are accounted for",
    "Validate that all interfaces are documented and active",
    "Review custom code objects for business-critical processes",
    "Verify batch job schedules match operational requirements",
    "Confirm data archiving policies and historical data availability",
    "Validate authorization concept against compliance requirements",
]

CRITICAL_WEIGHT = 2
STANDARD_WEIGHT = 1


def confidence_grade(score: int) -> str:
    if score >= 90:
        return "A"
    if score >= 75:
        return "B"
    if score >= 60:
        return "C"
    return "D"


def analyze_gaps(ctx: ExtractionContext, results: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a run's coverage into the forensic result consumed by the planner.

    Confidence weighs each expected table (critical ones double) and
    scores the share of that weight that was actually extracted.

    Returns:
        Dict with ``results``, ``coverage``, ``confidence``, ``gapReport``
        and ``humanValidation``
    """
    report = ctx.coverage.get_report()
    latest = {(t["extractor_id"], t["table"]): t for t in report["tables"]}

    expected_weight = 0
    covered_weight = 0
    for extractor_id, tables in ctx.coverage.expected_tables().items():
        for table, critical in tables.items():
            weight = CRITICAL_WEIGHT if critical else STANDARD_WEIGHT
            expected_weight += weight
            entry = latest.get((extractor_id, table))
            if entry and entry["status"] == "extracted":
                covered_weight += weight
    overall = round(covered_weight / expected_weight * 100) if expected_weight else 0

    missing_critical = sorted({m["table"] for m in report["critical_missed"]})
    auth_failures = [
        {"table": t["table"], "extractor": t["extractor_id"], "error": t["reason"]}
        for t in report["tables"]
        if t["status"] == "failed" and (t["reason"] or "").startswith("authorization")
    ]
    failed_extractors = sorted(k for k, v in results.items() if isinstance(v, dict) and "error" in v)

    checklist = list(HUMAN_VALIDATION_CHECKLIST)
    if auth_failures:
        checklist.append("Request additional authorization for tables that returned auth errors")
    if failed_extractors:
        checklist.append("Review extractors that failed: " + ", ".join(failed_extractors))

    return {
        "runId": ctx.run_id,
        "results": results,
        "coverage": {k: report[k] for k in ("extracted", "skipped", "failed", "coverage")},
        "confidence": {"overall": overall, "grade": confidence_grade(overall)},
        "gapReport": {
            "extraction": {
                "missingCriticalTables": missing_critical,
                "coveragePct": report["coverage"],
                "failedExtractors": failed_extractors,
            },
            "authorization": {"count": len(auth_failures), "tables": auth_failures},
        },
        "humanValidation": checklist,
    }


class ForensicRun:
    """
    Runs a complete forensic extraction against one context.

    The metadata extractors run first; their output replaces the
    context caches before the remaining extractors start.
    """

    def __init__(self, registry: ExtractorRegistry, bus: Optional[ProgressBus] = None):
        self.registry = registry
        self.bus = bus or progress_bus

    async def _run_metadata(self, ctx: ExtractionContext, resume: bool) -> Dict[str, Any]:
        results: Dict[str, Any] = {}
        for extractor_id in METADATA_EXTRACTORS:
            spec_class = self.registry.get(extractor_id)
            if spec_class is None:
                continue
            try:
                results[extractor_id] = await ExtractorRunner(spec_class, ctx).extract(resume=resume)
            except Exception as e:
                logger.error(f"Metadata extractor {extractor_id} failed: {e}", exc_info=True)
                results[extractor_id] = {"error": str(e)}
        return results

    async def run(
        self,
        ctx: ExtractionContext,
        concurrency: int = DEFAULT_CONCURRENCY,
        modules: Optional[Iterable[str]] = None,
        categories: Optional[Iterable[str]] = None,
        resume: bool = False,
    ) -> Dict[str, Any]:
        """
        Extract, then analyze gaps.

        Returns:
            The forensic result (see ``analyze_gaps``)
        """
        metadata = await self._run_metadata(ctx, resume)
        system_info = metadata.get("SYSTEM_INFO")
        dictionary = metadata.get("DATA_DICTIONARY")
        ctx = ctx.with_caches(
            system_info=system_info if system_info and "error" not in system_info else None,
            data_dictionary=dictionary if dictionary and "error" not in dictionary else None,
        )

        results = await self.registry.run_all(
            ctx,
            concurrency=concurrency,
            modules=modules,
            categories=categories,
            bus=self.bus,
            resume=resume,
            exclude=METADATA_EXTRACTORS,
        )
        forensic = analyze_gaps(ctx, {**metadata, **results})
        logger.info(
            f"Forensic run {ctx.run_id}: confidence {forensic['confidence']['overall']}% "
            f"({len(forensic['gapReport']['extraction']['missingCriticalTables'])} critical tables missing)"
        )
        return forensic

    async def progress(self, ctx: ExtractionContext) -> Dict[str, Any]:
        """Summarize checkpoint progress of a (possibly interrupted) run."""
        progress = await ctx.checkpoints.get_progress()
        pending: List[str] = [
            e.extractor_id for e in self.registry.get_all()
            if not progress.get(e.extractor_id, {}).get("complete")
        ]
        return {"runId": ctx.run_id, "extractors": progress, "pending": pending}
