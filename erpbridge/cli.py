"""Command-line entry point: extraction, migration, planning and the safety gate."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .adapters.connection_manager import ConnectionManager
from .config import Settings
from .errors import BridgeError
from .extraction.context import ExtractionContext
from .extraction.extractors import register_builtin_extractors
from .extraction.forensic import ForensicRun
from .extraction.registry import ExtractorRegistry
from .logging_config import configure_logging
from .migration.objects import create_default_registry
from .migration.planner import MigrationPlanner
from .models.profile import RunMode
from .safety import UNSET, check_operation

logger = logging.getLogger(__name__)


def _write_output(data: Any, path: Optional[str]) -> None:
    text = json.dumps(data, indent=2, default=str)
    if path:
        with open(path, "w") as f:
            f.write(text)
        print(f"Saved to {path}")
    else:
        print(text)


async def _open_adapter(manager: ConnectionManager, settings: Settings, profile: Optional[str]):
    """Load profiles from the environment and connect the requested one."""
    if not profile:
        raise BridgeError("Live mode requires --profile", code="CLI_ERROR")
    manager.load_from_env(prefix=settings.connection_env_prefix)
    adapter = manager.get(profile)
    await adapter.connect()
    return adapter


async def run_extract(args, settings: Settings) -> int:
    """Run a forensic extraction and print coverage and confidence."""
    registry = register_builtin_extractors(ExtractorRegistry(), include_infor=not args.sap_only)
    mode = args.mode or settings.mode
    manager = ConnectionManager(default_timeout_ms=settings.default_timeout_ms)
    try:
        adapter = None
        if mode == RunMode.LIVE.value:
            adapter = await _open_adapter(manager, settings, args.profile)
        ctx = ExtractionContext.create(
            mode=mode,
            adapter=adapter,
            checkpoint_dir=args.checkpoint_dir or settings.checkpoint_dir,
            run_id=args.run_id,
        )
        forensic = await ForensicRun(registry).run(
            ctx,
            concurrency=args.concurrency or settings.extraction_concurrency,
            modules=args.modules,
            resume=args.resume,
        )
        await ctx.checkpoints.save_coverage(forensic["coverage"])
    finally:
        await manager.disconnect_all()

    if args.output:
        _write_output(forensic, args.output)
    summary = {
        "runId": forensic["runId"],
        "coverage": forensic["coverage"],
        "confidence": forensic["confidence"],
        "gapReport": forensic["gapReport"],
    }
    print(json.dumps(summary, indent=2, default=str))
    return 0


async def run_migrate(args, settings: Settings) -> int:
    """Run one, several or all migration objects."""
    registry = create_default_registry()
    object_ids: Optional[List[str]] = args.objects or None
    mode = args.mode or settings.mode
    manager = ConnectionManager(default_timeout_ms=settings.default_timeout_ms)
    try:
        adapter = None
        if mode == RunMode.LIVE.value:
            adapter = await _open_adapter(manager, settings, args.profile)
        results = await registry.run_all(
            mode=mode,
            object_ids=object_ids,
            adapter=adapter,
            batch_size=args.batch_size,
            dry_run=not args.no_dry_run,
        )
    finally:
        await manager.disconnect_all()

    summary: Dict[str, Any] = {
        object_id: {"status": result.status.value, "stats": result.stats, "error": result.error}
        for object_id, result in results.items()
    }
    if args.output:
        _write_output({k: v.to_dict() for k, v in results.items()}, args.output)

    print("\n" + "=" * 60)
    print("MIGRATION COMPLETE")
    print("=" * 60)
    for object_id, item in summary.items():
        print(f"{object_id:30} {item['status']:22} {item['stats'].get('transformedRecords', 0)} records")
    failed = [k for k, v in summary.items() if v["status"] == "failed"]
    if failed:
        print(f"\nFailed: {', '.join(failed)}")
        return 1
    return 0


def run_plan(args) -> int:
    """Build a migration plan from a forensic result file."""
    with open(args.input) as f:
        forensic = json.load(f)

    options: Dict[str, Any] = {
        "includeInterfaces": not args.no_interfaces,
        "includeConfig": not args.no_config,
    }
    if args.include_modules:
        options["includeModules"] = args.include_modules
    if args.exclude_modules:
        options["excludeModules"] = args.exclude_modules
    if args.exclude_objects:
        options["excludeObjects"] = args.exclude_objects

    plan = MigrationPlanner().plan(forensic, options)
    _write_output(plan, args.output)
    return 0


def run_gate(args) -> int:
    """Evaluate an operation against the safety gate."""
    dry_run: Any = UNSET
    if args.dry_run is not None:
        dry_run = args.dry_run == "true"
    decision = check_operation(args.operation, dry_run)
    print(json.dumps({"operation": args.operation, **decision.to_dict()}, indent=2))
    return 0 if decision.allowed else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="erpbridge",
        description="ERP Bridge - forensic extraction and migration planning for legacy ERP systems",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--log-format", choices=["text", "json"], help="Log output format")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Forensic extraction
    extract_parser = subparsers.add_parser("extract", help="Run a forensic extraction")
    extract_parser.add_argument("--mode", choices=["mock", "live"], help="Defaults to ERPBRIDGE_MODE (mock)")
    extract_parser.add_argument("--profile", help="Connection profile name (live mode)")
    extract_parser.add_argument("--modules", nargs="+", help="Only run extractors of these modules")
    extract_parser.add_argument("--concurrency", type=int, help="Extractors running at once")
    extract_parser.add_argument("--checkpoint-dir", help="Checkpoint directory (default: ERPBRIDGE_CHECKPOINT_DIR or ./checkpoints)")
    extract_parser.add_argument("--run-id", help="Run id (reuse to resume)")
    extract_parser.add_argument("--resume", action="store_true", help="Reuse completed checkpoints")
    extract_parser.add_argument("--sap-only", action="store_true", help="Skip Infor and Lawson extractors")
    extract_parser.add_argument("--output", help="Write the full forensic result to this file")

    # Migration objects
    migrate_parser = subparsers.add_parser("migrate", help="Run migration objects")
    migrate_parser.add_argument("objects", nargs="*", help="Object ids (all when omitted)")
    migrate_parser.add_argument("--mode", choices=["mock", "live"], help="Defaults to ERPBRIDGE_MODE (mock)")
    migrate_parser.add_argument("--profile", help="Connection profile name (live mode)")
    migrate_parser.add_argument("--batch-size", type=int, default=100)
    migrate_parser.add_argument("--no-dry-run", action="store_true", help="Confirm the staging load in live mode")
    migrate_parser.add_argument("--output", help="Write full results to this file")

    # Planning
    plan_parser = subparsers.add_parser("plan", help="Plan a migration from a forensic result")
    plan_parser.add_argument("--input", required=True, help="Path to forensic result JSON file")
    plan_parser.add_argument("--include-modules", nargs="+")
    plan_parser.add_argument("--exclude-modules", nargs="+")
    plan_parser.add_argument("--exclude-objects", nargs="+")
    plan_parser.add_argument("--no-interfaces", action="store_true", help="Leave out interface objects")
    plan_parser.add_argument("--no-config", action="store_true", help="Leave out configuration objects")
    plan_parser.add_argument("--output", help="Output file path")

    # Safety gate
    gate_parser = subparsers.add_parser("gate", help="Check whether an operation may run")
    gate_parser.add_argument("operation", help="Dotted operation name, e.g. migration.load_staging")
    gate_parser.add_argument("--dry-run", choices=["true", "false"], help="Omit to leave the flag unset")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except BridgeError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1
    configure_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        fmt=args.log_format or settings.log_format,
    )

    try:
        if args.command == "extract":
            return asyncio.run(run_extract(args, settings))
        if args.command == "migrate":
            return asyncio.run(run_migrate(args, settings))
        if args.command == "plan":
            return run_plan(args)
        if args.command == "gate":
            return run_gate(args)
    except BridgeError as e:
        logger.error(e.message)
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(str(e))
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
