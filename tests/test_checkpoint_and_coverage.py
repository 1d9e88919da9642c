"""Tests for checkpoints and the coverage ledger."""

import json

import pytest

from erpbridge.errors import CheckpointError, RuleValidationError
from erpbridge.extraction.base import ExpectedTable
from erpbridge.extraction.checkpoint import COMPLETE_STEP, SCHEMA_VERSION, CheckpointStore
from erpbridge.extraction.coverage import CoverageStatus, CoverageTracker


class TestCheckpointStore:
    """Test memory and disk checkpoint stores."""

    @pytest.mark.asyncio
    async def test_memory_round_trip(self, memory_store):
        await memory_store.save("FI_CONFIG", "companyCodes", [{"BUKRS": "1000"}])

        assert await memory_store.exists("FI_CONFIG", "companyCodes")
        assert await memory_store.load("FI_CONFIG", "companyCodes") == [{"BUKRS": "1000"}]
        assert await memory_store.load("FI_CONFIG", "other") is None

    @pytest.mark.asyncio
    async def test_disk_layout(self, disk_store, tmp_path):
        await disk_store.save("FI_CONFIG", "result", {"count": 3})
        path = tmp_path / "test-run" / "FI_CONFIG" / "result.json"

        envelope = json.loads(path.read_text())
        assert envelope["schemaVersion"] == SCHEMA_VERSION
        assert envelope["extractorId"] == "FI_CONFIG"
        assert envelope["value"] == {"count": 3}
        assert await disk_store.load("FI_CONFIG", "result") == {"count": 3}

    @pytest.mark.asyncio
    async def test_disk_survives_new_store(self, disk_store, tmp_path):
        await disk_store.save("MM_MATERIALS", COMPLETE_STEP, {"status": "completed"})
        reopened = CheckpointStore(tmp_path, run_id="test-run")

        assert await reopened.is_complete("MM_MATERIALS")

    @pytest.mark.asyncio
    async def test_unknown_schema_version(self, disk_store, tmp_path):
        path = tmp_path / "test-run" / "X" / "step.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"schemaVersion": 99, "value": 1}))

        with pytest.raises(CheckpointError):
            await disk_store.load("X", "step")

    @pytest.mark.asyncio
    async def test_corrupt_file(self, disk_store, tmp_path):
        path = tmp_path / "test-run" / "X" / "step.json"
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        with pytest.raises(CheckpointError):
            await disk_store.load("X", "step")

    @pytest.mark.asyncio
    async def test_rejects_path_traversal(self, memory_store):
        with pytest.raises(RuleValidationError):
            await memory_store.save("../etc", "step", 1)
        with pytest.raises(RuleValidationError):
            CheckpointStore(run_id="a/b")

    @pytest.mark.asyncio
    async def test_progress_and_clear(self, disk_store):
        await disk_store.save("A", "s1", 1)
        await disk_store.save("A", COMPLETE_STEP, {})
        await disk_store.save("B", "s1", 1)

        progress = await disk_store.get_progress()
        assert progress == {
            "A": {"complete": True, "checkpointCount": 2},
            "B": {"complete": False, "checkpointCount": 1},
        }

        await disk_store.clear("A")
        assert not await disk_store.exists("A", "s1")
        await disk_store.clear_all()
        assert await disk_store.get_progress() == {}

    @pytest.mark.asyncio
    async def test_memory_progress(self, memory_store):
        await memory_store.save("A", COMPLETE_STEP, {})

        assert await memory_store.get_progress() == {"A": {"complete": True, "checkpointCount": 1}}

    @pytest.mark.asyncio
    async def test_save_coverage(self, disk_store, memory_store):
        path = await disk_store.save_coverage({"coverage": 80})

        assert json.loads(path.read_text())["value"] == {"coverage": 80}
        assert await memory_store.save_coverage({"coverage": 80}) is None


class TestCoverageTracker:
    """Test coverage aggregation."""

    def test_report(self):
        tracker = CoverageTracker()
        tracker.expect("FI_GL", [ExpectedTable("SKA1", critical=True), ExpectedTable("SKAT"), ExpectedTable("SKB1", critical=True)])
        tracker.record("FI_GL", "SKA1", CoverageStatus.EXTRACTED, row_count=10)
        tracker.record("FI_GL", "SKAT", CoverageStatus.SKIPPED, reason="cancelled")
        tracker.record("FI_GL", "SKB1", CoverageStatus.FAILED, reason="authorization: denied")

        report = tracker.get_report()
        assert report["extracted"] == 1
        assert report["skipped"] == 1
        assert report["failed"] == 1
        assert report["coverage"] == 33
        assert report["critical_missed"] == [{"extractorId": "FI_GL", "table": "SKB1", "reason": "authorization: denied"}]

    def test_latest_entry_wins(self):
        tracker = CoverageTracker()
        tracker.expect("X", [ExpectedTable("T1", critical=True)])
        tracker.record("X", "T1", "failed", reason="timeout")
        tracker.record("X", "T1", "extracted", row_count=5)

        report = tracker.get_report()
        assert report["failed"] == 0
        assert report["coverage"] == 100
        assert report["critical_missed"] == []
        assert len(tracker.entries("X")) == 2

    def test_unattempted_critical_table(self):
        tracker = CoverageTracker()
        tracker.expect("X", [ExpectedTable("T1", critical=True)])

        assert tracker.get_report()["critical_missed"][0]["reason"] == "not attempted"

    def test_report_for_one_extractor(self):
        tracker = CoverageTracker()
        tracker.expect("A", [ExpectedTable("T1")])
        tracker.expect("B", [ExpectedTable("T2")])
        tracker.record("A", "T1", "extracted")

        assert tracker.get_report("A")["coverage"] == 100
        assert tracker.get_report("B")["coverage"] == 0
        assert tracker.get_report()["coverage"] == 50

    def test_empty(self):
        assert CoverageTracker().get_report()["coverage"] == 0
