"""Tests for extractor specs, the concurrent runner and forensic runs."""

import asyncio

import pytest

from erpbridge.adapters.http import HttpTransport
from erpbridge.adapters.mock import MockAdapter
from erpbridge.adapters.sap import SapAdapter
from erpbridge.errors import AuthenticationError, RuleValidationError
from erpbridge.extraction.base import (
    ExpectedTable,
    ExtractorRun,
    ExtractorRunner,
    ExtractorSpec,
    Subject,
    TableExtractorSpec,
)
from erpbridge.extraction.context import ExtractionContext
from erpbridge.extraction.extractors import INFOR_EXTRACTORS, SAP_EXTRACTORS, register_builtin_extractors
from erpbridge.extraction.forensic import ForensicRun, analyze_gaps, confidence_grade
from erpbridge.extraction.registry import ExtractorRegistry
from erpbridge.models.profile import AdapterProfile, AuthKind, Credentials
from erpbridge.models.results import ExtractorCategory


class LedgerExtractor(TableExtractorSpec):
    extractor_id = "TEST_LEDGER"
    name = "Test Ledger"
    module = "FI"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("T001", critical=True),
        ExpectedTable("SKA1", critical=True),
        ExpectedTable("BKPF", critical=True),
        ExpectedTable("SKAT"),
    )
    subjects = (
        Subject("companyCodes", "T001", ("BUKRS",)),
        Subject("accounts", "SKA1"),
        Subject("documents", "BKPF"),
        Subject("texts", "SKAT"),
    )
    primary_subject = "accounts"

    def fixtures(self, run):
        return {"companyCodes": [{"BUKRS": "1000"}], "accounts": [{"SAKNR": "1"}, {"SAKNR": "2"}]}


class BoomExtractor(ExtractorSpec):
    extractor_id = "TEST_BOOM"
    name = "Always fails"
    module = "MM"
    category = ExtractorCategory.PROCESS

    async def extract_mock(self, run):
        raise RuntimeError("boom")


class CountingExtractor(ExtractorSpec):
    extractor_id = "TEST_COUNTING"
    name = "Counts calls"
    module = "SD"
    calls = 0

    async def extract_mock(self, run):
        CountingExtractor.calls += 1
        return {"calls": CountingExtractor.calls}


class DeniedAdapter(MockAdapter):
    async def _mock_read_table(self, name, fields, max_rows, filter):
        if name == "BKPF":
            raise AuthenticationError("no access to BKPF")
        return await super()._mock_read_table(name, fields, max_rows, filter)


class SlowLedgerAdapter(MockAdapter):
    async def _mock_read_table(self, name, fields, max_rows, filter):
        if name == "BKPF":
            await asyncio.sleep(1)
        return await super()._mock_read_table(name, fields, max_rows, filter)


class ParallelExtractor(ExtractorSpec):
    module = "PP"
    in_flight = 0
    peak = 0

    async def extract_mock(self, run):
        ParallelExtractor.in_flight += 1
        ParallelExtractor.peak = max(ParallelExtractor.peak, ParallelExtractor.in_flight)
        await asyncio.sleep(0.01)
        ParallelExtractor.in_flight -= 1
        return {"done": True}


class SplitTableExtractor(TableExtractorSpec):
    extractor_id = "TEST_SPLIT"
    module = "FI"
    expected_tables = (ExpectedTable("T001", critical=True), ExpectedTable("BAD"))
    subjects = (Subject("companyCodes", "T001"), Subject("broken", "BAD"))


class JsonResponse:
    def __init__(self, payload):
        self.status_code = 200
        self._payload = payload

    def json(self):
        return self._payload


class PayloadSession:
    """Answers every GET with the body registered for the URL's last path segment."""

    def __init__(self, bodies):
        self.bodies = bodies

    def request(self, method, url, **kwargs):
        return JsonResponse(self.bodies[url.rsplit("/", 1)[-1]])

    def close(self):
        pass


@pytest.fixture
def registry():
    registry = ExtractorRegistry()
    registry.register(LedgerExtractor)
    registry.register(BoomExtractor)
    return registry


class TestLiveExtraction:
    """Test table reads through an adapter."""

    @pytest.mark.asyncio
    async def test_reads_and_records_coverage(self, mock_adapter):
        ctx = ExtractionContext.create(mode="live", adapter=mock_adapter, run_id="live-run")
        result = await ExtractorRunner(LedgerExtractor, ctx).extract()

        assert result["companyCodes"] == [{"BUKRS": "1000"}, {"BUKRS": "2000"}]
        assert result["count"] == 3
        assert result["documents"] == []

        report = ctx.coverage.get_report()
        assert report["extracted"] == 2
        assert report["failed"] == 2
        assert report["coverage"] == 50
        assert [m["table"] for m in report["critical_missed"]] == ["BKPF"]

    @pytest.mark.asyncio
    async def test_confidence_weighs_critical_tables(self, mock_adapter):
        ctx = ExtractionContext.create(mode="live", adapter=mock_adapter, run_id="live-run")
        result = await ExtractorRunner(LedgerExtractor, ctx).extract()
        forensic = analyze_gaps(ctx, {"TEST_LEDGER": result})

        assert forensic["confidence"] == {"overall": 57, "grade": "D"}
        assert forensic["gapReport"]["extraction"]["missingCriticalTables"] == ["BKPF"]
        assert forensic["gapReport"]["authorization"]["count"] == 0

    @pytest.mark.asyncio
    async def test_authorization_failures(self, fixture_tables):
        ctx = ExtractionContext.create(mode="live", adapter=DeniedAdapter(tables=fixture_tables), run_id="auth-run")
        result = await ExtractorRunner(LedgerExtractor, ctx).extract()
        forensic = analyze_gaps(ctx, {"TEST_LEDGER": result})

        auth = forensic["gapReport"]["authorization"]
        assert auth["count"] == 1
        assert auth["tables"][0]["table"] == "BKPF"
        assert auth["tables"][0]["error"].startswith("authorization")
        assert len(forensic["humanValidation"]) == 8

    @pytest.mark.asyncio
    async def test_no_adapter_skips_tables(self):
        ctx = ExtractionContext.create(mode="live", run_id="no-adapter")
        await ExtractorRunner(LedgerExtractor, ctx).extract()

        report = ctx.coverage.get_report()
        assert report["skipped"] == 4
        assert {t["reason"] for t in report["tables"]} == {"no adapter connection"}

    @pytest.mark.asyncio
    async def test_cancelled_context_skips_tables(self, mock_adapter):
        ctx = ExtractionContext.create(mode="live", adapter=mock_adapter, run_id="cancelled")
        ctx.cancel()
        await ExtractorRunner(LedgerExtractor, ctx).extract()

        assert ctx.coverage.get_report()["skipped"] == 4

    @pytest.mark.asyncio
    async def test_table_timeout_is_coverage_failure(self, fixture_tables, bus):
        adapter = SlowLedgerAdapter(tables=fixture_tables, timeout_ms=50)
        ctx = ExtractionContext.create(mode="live", adapter=adapter, run_id="slow-run")
        registry = ExtractorRegistry()
        registry.register(LedgerExtractor)

        results = await registry.run_all(ctx, bus=bus)

        result = results["TEST_LEDGER"]
        assert "error" not in result
        assert result["companyCodes"] == [{"BUKRS": "1000"}, {"BUKRS": "2000"}]
        assert result["count"] == 3
        assert result["documents"] == []

        tables = {t["table"]: t for t in ctx.coverage.get_report()["tables"]}
        assert tables["BKPF"]["status"] == "failed"
        assert "timed out after 50ms" in tables["BKPF"]["reason"]
        assert tables["SKA1"]["status"] == "extracted"

    @pytest.mark.asyncio
    async def test_malformed_payload_is_table_failure(self, bus):
        profile = AdapterProfile(
            name="dev",
            base_url="https://sap.example.com",
            auth_kind=AuthKind.BASIC,
            credentials=Credentials(username="user", password="pw"),
            mode="live",
        )
        session = PayloadSession({
            "CVERS": {"d": {"results": [{"COMPONENT": "S4CORE", "RELEASE": "107"}]}},
            "T001": {"value": [{"BUKRS": "1000"}]},
            "BAD": {"value": None},
        })
        adapter = SapAdapter(profile=profile, transport=HttpTransport(profile, session=session))
        ctx = ExtractionContext.create(mode="live", adapter=adapter, run_id="bad-payload")
        registry = ExtractorRegistry()
        registry.register(SplitTableExtractor)

        results = await registry.run_all(ctx, bus=bus)

        assert results["TEST_SPLIT"] == {"companyCodes": [{"BUKRS": "1000"}], "broken": []}
        tables = {t["table"]: t for t in ctx.coverage.get_report()["tables"]}
        assert tables["T001"]["status"] == "extracted"
        assert tables["BAD"]["status"] == "failed"
        assert bus.history(type="extraction:complete")[0]["data"]["failed"] == 0


class TestMockExtraction:
    """Test fixture-driven extraction."""

    @pytest.mark.asyncio
    async def test_fixture_rows_count_as_extracted(self, mock_context):
        result = await ExtractorRunner(LedgerExtractor(), mock_context).extract()

        assert result["count"] == 2
        assert result["texts"] == []
        assert mock_context.coverage.get_report()["coverage"] == 100

    @pytest.mark.asyncio
    async def test_resume_returns_checkpointed_result(self, mock_context):
        CountingExtractor.calls = 0
        first = await ExtractorRunner(CountingExtractor, mock_context).extract()
        second = await ExtractorRunner(CountingExtractor, mock_context).extract(resume=True)
        third = await ExtractorRunner(CountingExtractor, mock_context).extract()

        assert first == second == {"calls": 1}
        assert third == {"calls": 2}
        assert await mock_context.checkpoints.is_complete("TEST_COUNTING")

    @pytest.mark.asyncio
    async def test_step_is_checkpointed(self, mock_context):
        run = ExtractorRun(LedgerExtractor(), mock_context)
        calls = []

        async def produce():
            calls.append(1)
            return {"rows": 5}

        assert await run.step("volume", produce) == {"rows": 5}
        assert await run.step("volume", produce) == {"rows": 5}
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_live_only_spec_in_mock_mode(self, mock_context):
        class LiveOnly(ExtractorSpec):
            extractor_id = "LIVE_ONLY"
            module = "FI"

        with pytest.raises(NotImplementedError):
            await ExtractorRunner(LiveOnly, mock_context).extract()


class TestExtractorRegistry:
    """Test registration, selection and concurrent runs."""

    def test_register_validation(self):
        registry = ExtractorRegistry()

        with pytest.raises(RuleValidationError):
            registry.register(dict)

        class Nameless(ExtractorSpec):
            module = "FI"

        with pytest.raises(RuleValidationError):
            registry.register(Nameless)

    def test_select(self, registry):
        assert registry.select(modules=["fi"]) == [LedgerExtractor]
        assert registry.select(categories=["process"]) == [BoomExtractor]
        assert registry.select(exclude=["TEST_LEDGER"]) == [BoomExtractor]
        assert registry.get_by_module("MM") == [BoomExtractor]
        assert registry.size == 2
        assert registry.unregister("TEST_BOOM")
        assert not registry.has("TEST_BOOM")

    @pytest.mark.asyncio
    async def test_concurrency_must_be_positive(self, registry, mock_context, bus):
        with pytest.raises(RuleValidationError):
            await registry.run_all(mock_context, concurrency=0, bus=bus)

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, registry, mock_context, bus):
        results = await registry.run_all(mock_context, concurrency=2, bus=bus)

        assert results["TEST_BOOM"] == {"error": "boom"}
        assert results["TEST_LEDGER"]["count"] == 2

        types = [e["type"] for e in bus.history(type="extraction")]
        assert types[0] == "extraction:start"
        assert types[-1] == "extraction:complete"
        assert types.count("extraction:progress") == 2

        progress = {e["data"]["extractorId"]: e["data"]["status"] for e in bus.history(type="extraction:progress")}
        assert progress == {"TEST_LEDGER": "completed", "TEST_BOOM": "failed"}

        complete = bus.history(type="extraction:complete")[0]["data"]
        assert complete["total"] == 2
        assert complete["failed"] == 1

    @pytest.mark.asyncio
    async def test_concurrency_cap(self, mock_context, bus):
        registry = ExtractorRegistry()
        for i in range(8):
            registry.register(type(f"Parallel{i}", (ParallelExtractor,), {"extractor_id": f"TEST_PARALLEL_{i}"}))
        ParallelExtractor.in_flight = 0
        ParallelExtractor.peak = 0

        results = await registry.run_all(mock_context, concurrency=2, bus=bus)

        assert len(results) == 8
        assert ParallelExtractor.peak == 2
        assert ParallelExtractor.in_flight == 0

    @pytest.mark.asyncio
    async def test_run_all_module_filter(self, registry, mock_context, bus):
        results = await registry.run_all(mock_context, modules=["FI"], bus=bus)

        assert list(results) == ["TEST_LEDGER"]
        assert bus.history(type="extraction:start")[0]["data"]["extractorIds"] == ["TEST_LEDGER"]

    @pytest.mark.asyncio
    async def test_cancelled_run(self, registry, mock_context, bus):
        mock_context.cancel()
        results = await registry.run_all(mock_context, bus=bus)

        assert results == {}
        error = bus.history(type="extraction:error")[0]["data"]
        assert error["reason"] == "cancelled"
        assert bus.history(type="extraction:complete") == []

    @pytest.mark.asyncio
    async def test_coverage_saved_with_checkpoints(self, registry, tmp_path, bus):
        ctx = ExtractionContext.create(mode="mock", checkpoint_dir=str(tmp_path), run_id="disk-run")
        await registry.run_all(ctx, bus=bus)

        assert (tmp_path / "disk-run" / "coverage.json").exists()
        assert (tmp_path / "disk-run" / "TEST_LEDGER" / "_complete.json").exists()
        assert not (tmp_path / "disk-run" / "TEST_BOOM" / "_complete.json").exists()


class TestForensicRun:
    """Test full forensic runs over the built-in extractors."""

    def test_builtin_catalog(self):
        registry = register_builtin_extractors(ExtractorRegistry())

        assert len(SAP_EXTRACTORS) == 34
        assert len(INFOR_EXTRACTORS) == 8
        assert registry.size == 42
        assert register_builtin_extractors(ExtractorRegistry(), include_infor=False).size == 34

    def test_grades(self):
        assert [confidence_grade(s) for s in (95, 90, 80, 60, 59)] == ["A", "A", "B", "C", "D"]

    @pytest.mark.asyncio
    async def test_mock_run_for_finance(self, mock_context, bus):
        registry = register_builtin_extractors(ExtractorRegistry())
        forensic = await ForensicRun(registry, bus).run(mock_context, modules=["FI"])

        assert set(forensic["results"]) == {
            "SYSTEM_INFO", "DATA_DICTIONARY", "FI_CONFIG", "FI_COMPANY_CODES", "FI_GL_ACCOUNTS", "FI_TRANSACTIONS",
        }
        assert forensic["results"]["FI_GL_ACCOUNTS"]["count"] == 8
        assert 25000 <= forensic["results"]["FI_TRANSACTIONS"]["count"] <= 150000
        assert forensic["confidence"] == {"overall": 100, "grade": "A"}
        assert forensic["gapReport"]["extraction"]["missingCriticalTables"] == []
        assert len(forensic["humanValidation"]) == 7

        start = bus.history(type="extraction:start")[0]["data"]
        assert "SYSTEM_INFO" not in start["extractorIds"]
        assert start["total"] == 4

    @pytest.mark.asyncio
    async def test_mock_volumes_are_deterministic_per_run(self, bus):
        registry = register_builtin_extractors(ExtractorRegistry())

        async def volume(run_id):
            ctx = ExtractionContext.create(mode="mock", run_id=run_id)
            forensic = await ForensicRun(registry, bus).run(ctx, modules=["FI"])
            return forensic["results"]["FI_TRANSACTIONS"]["count"]

        assert await volume("run-a") == await volume("run-a")

    @pytest.mark.asyncio
    async def test_progress(self, mock_context, bus):
        registry = register_builtin_extractors(ExtractorRegistry())
        forensic_run = ForensicRun(registry, bus)
        await forensic_run.run(mock_context, modules=["FI"])
        progress = await forensic_run.progress(mock_context)

        assert progress["runId"] == "test-run"
        assert progress["extractors"]["FI_CONFIG"]["complete"]
        assert "FI_CONFIG" not in progress["pending"]
        assert "SYSTEM_INFO" not in progress["pending"]
        assert "CO_CONFIG" in progress["pending"]
