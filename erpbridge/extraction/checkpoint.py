"""Per-run checkpoint store."""

import asyncio
import json
import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..errors import CheckpointError, RuleValidationError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
COMPLETE_STEP = "_complete"
COVERAGE_FILE = "coverage.json"

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.\-]+$")


def _check_id(kind: str, value: str) -> str:
    if not value or not _SAFE_ID.match(value) or value in (".", ".."):
        raise RuleValidationError(f"Invalid {kind}: {value!r}", [f"{kind} must match {_SAFE_ID.pattern}"])
    return value


class CheckpointStore:
    """
    Key/value store under (extractor id, step id), scoped to one run.

    With a ``root`` directory, each value is a JSON file at
    ``<root>/<run_id>/<extractor_id>/<step_id>.json`` wrapped in a
    versioned envelope. Without one, values stay in memory. Values must
    be JSON-serializable; they are recovery hints, not a database.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None, run_id: str = "default"):
        self.run_id = _check_id("run id", run_id)
        self.root = Path(root) if root is not None else None
        self._memory: Dict[str, Dict[str, Any]] = {}

    @property
    def run_dir(self) -> Optional[Path]:
        return self.root / self.run_id if self.root is not None else None

    def _path(self, extractor_id: str, step_id: str) -> Path:
        return self.run_dir / _check_id("extractor id", extractor_id) / f"{_check_id('step id', step_id)}.json"

    # Blocking helpers, run off the event loop.

    def _write(self, path: Path, envelope: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        with open(tmp, "w") as f:
            json.dump(envelope, f, indent=2, default=str)
        tmp.replace(path)

    def _read(self, path: Path) -> Optional[Dict[str, Any]]:
        if not path.exists():
            return None
        try:
            with open(path) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CheckpointError(f"Unreadable checkpoint {path}", {"path": str(path), "cause": str(e)}) from e

    def _unwrap(self, envelope: Optional[Dict[str, Any]], where: str) -> Any:
        if envelope is None:
            return None
        version = envelope.get("schemaVersion")
        if version != SCHEMA_VERSION:
            raise CheckpointError(
                f"Unsupported checkpoint schema version {version!r} at {where}",
                {"schemaVersion": version, "supported": SCHEMA_VERSION},
            )
        return envelope.get("value")

    # Public API

    async def save(self, extractor_id: str, step_id: str, value: Any) -> None:
        """Store a value, replacing any previous one."""
        envelope = {
            "schemaVersion": SCHEMA_VERSION,
            "extractorId": _check_id("extractor id", extractor_id),
            "stepId": _check_id("step id", step_id),
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "value": value,
        }
        if self.run_dir is None:
            # Round-trip so memory and disk stores hand back the same shapes.
            self._memory.setdefault(extractor_id, {})[step_id] = json.loads(json.dumps(envelope, default=str))
            return
        await asyncio.to_thread(self._write, self._path(extractor_id, step_id), envelope)
        logger.debug(f"Checkpoint saved: {extractor_id}/{step_id}")

    async def load(self, extractor_id: str, step_id: str) -> Any:
        """
        Return the stored value or None.

        Raises:
            CheckpointError: The file is unreadable or has an unknown schema version
        """
        if self.run_dir is None:
            envelope = self._memory.get(extractor_id, {}).get(step_id)
        else:
            envelope = await asyncio.to_thread(self._read, self._path(extractor_id, step_id))
        return self._unwrap(envelope, f"{extractor_id}/{step_id}")

    async def exists(self, extractor_id: str, step_id: str) -> bool:
        if self.run_dir is None:
            return step_id in self._memory.get(extractor_id, {})
        return await asyncio.to_thread(self._path(extractor_id, step_id).exists)

    async def is_complete(self, extractor_id: str) -> bool:
        return await self.exists(extractor_id, COMPLETE_STEP)

    async def clear(self, extractor_id: str) -> None:
        """Drop every checkpoint of one extractor."""
        if self.run_dir is None:
            self._memory.pop(extractor_id, None)
            return
        directory = self.run_dir / _check_id("extractor id", extractor_id)
        await asyncio.to_thread(shutil.rmtree, directory, True)

    async def clear_all(self) -> None:
        """Drop every checkpoint of this run."""
        self._memory.clear()
        if self.run_dir is not None:
            await asyncio.to_thread(shutil.rmtree, self.run_dir, True)

    def _scan(self) -> Dict[str, Dict[str, Any]]:
        progress: Dict[str, Dict[str, Any]] = {}
        if self.run_dir is None:
            for extractor_id, steps in self._memory.items():
                progress[extractor_id] = {"complete": COMPLETE_STEP in steps, "checkpointCount": len(steps)}
            return progress
        if not self.run_dir.exists():
            return progress
        for directory in sorted(p for p in self.run_dir.iterdir() if p.is_dir()):
            steps = [p.stem for p in directory.glob("*.json")]
            progress[directory.name] = {"complete": COMPLETE_STEP in steps, "checkpointCount": len(steps)}
        return progress

    async def get_progress(self) -> Dict[str, Dict[str, Any]]:
        """Return ``{extractor_id: {complete, checkpointCount}}`` for this run."""
        return await asyncio.to_thread(self._scan)

    async def save_coverage(self, report: Dict[str, Any]) -> Optional[Path]:
        """Write a coverage report next to the run's checkpoints."""
        if self.run_dir is None:
            return None
        path = self.run_dir / COVERAGE_FILE
        envelope = {
            "schemaVersion": SCHEMA_VERSION,
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "value": report,
        }
        await asyncio.to_thread(self._write, path, envelope)
        return path
