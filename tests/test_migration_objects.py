"""Tests for migration objects, the ETVL runner and the registry."""

import pytest

from erpbridge.adapters.mock import MockAdapter
from erpbridge.errors import NotFoundError, RuleValidationError, ValidationError
from erpbridge.migration.base import MigrationObjectRunner, MigrationObjectSpec
from erpbridge.migration.field_mapping import FieldMapping
from erpbridge.migration.objects import BUILTIN_OBJECTS, INFOR_OBJECTS, SAP_OBJECTS, create_default_registry
from erpbridge.migration.objects.technical import (
    IMPACT_PRIORITY,
    classify_batch_job,
    classify_bw_extractor,
    classify_idoc_flow,
    classify_rfc_destination,
)
from erpbridge.migration.quality import QualityChecks
from erpbridge.migration.registry import MigrationObjectRegistry
from erpbridge.models.results import PhaseStatus


class CustomerObject(MigrationObjectSpec):
    object_id = "TEST_CUSTOMER"
    name = "Test Customer"
    source_system = "ECC"
    source_table = "KNA1"

    def field_mappings(self):
        return [
            FieldMapping("KUNNR", "Customer", convert="padLeft10"),
            FieldMapping("NAME1", "Name"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self):
        return QualityChecks(required=["Customer", "Name"], exact_duplicate=["Customer"])

    def extract_mock(self, rng):
        return [
            {"KUNNR": str(i), "NAME1": f"Customer {i}", "LAND1": rng.choice(["us", "de"])}
            for i in range(1, 13)
        ]


class DirtyObject(CustomerObject):
    object_id = "TEST_DIRTY"

    def extract_mock(self, rng):
        return [{"KUNNR": "1", "NAME1": "A"}, {"KUNNR": "1", "NAME1": ""}]


class BrokenObject(CustomerObject):
    object_id = "TEST_BROKEN"

    def extract_mock(self, rng):
        raise RuntimeError("source exploded")


class BadMappingObject(CustomerObject):
    object_id = "TEST_BAD_MAPPING"

    def field_mappings(self):
        return [FieldMapping("A", "X"), FieldMapping("B", "X")]


class TestRunner:
    """Test the four-phase runner."""

    @pytest.mark.asyncio
    async def test_mock_run_completes(self, bus):
        result = await MigrationObjectRunner(CustomerObject, bus=bus, batch_size=5).run()

        assert result.status == PhaseStatus.COMPLETED
        assert list(result.phases) == ["extract", "transform", "validate", "load"]
        assert result.stats["extractedRecords"] == 12
        assert result.stats["transformedRecords"] == 12
        assert result.stats["validationStatus"] == "passed"
        assert result.stats["loadedRecords"] == 12
        assert result.phases["load"].details["batches"] == 3
        assert result.phases["load"].details["simulated"] is True
        assert result.records[0]["Customer"] == "0000000001"
        assert result.records[0]["SourceSystem"] == "ECC"
        assert result.records[0]["MigrationObjectId"] == "TEST_CUSTOMER"

    @pytest.mark.asyncio
    async def test_events_emitted_in_order(self, bus):
        await MigrationObjectRunner(CustomerObject, bus=bus).run()
        types = [e["type"] for e in bus.history()]

        assert types == ["migration:start"] + ["migration:progress"] * 4 + ["migration:complete"]
        phases = [e["data"]["phase"] for e in bus.history(type="migration:progress")]
        assert phases == ["extract", "transform", "validate", "load"]

    @pytest.mark.asyncio
    async def test_validation_errors_mark_run(self, bus):
        result = await MigrationObjectRunner(DirtyObject, bus=bus).run()

        assert result.status == PhaseStatus.COMPLETED_WITH_ERRORS
        assert result.phases["validate"].status == PhaseStatus.COMPLETED_WITH_ERRORS
        assert result.stats["validationStatus"] == "failed"
        # Load still runs on the validated rows
        assert result.phases["load"].status == PhaseStatus.COMPLETED
        validate = result.phases["validate"].to_dict()
        assert "totalRecords" not in validate
        assert validate["errorCount"] == 2

    @pytest.mark.asyncio
    async def test_phase_failure_is_reported(self, bus):
        result = await MigrationObjectRunner(BrokenObject, bus=bus).run()

        assert result.status == PhaseStatus.FAILED
        assert not result.success
        assert result.phases["extract"].status == PhaseStatus.FAILED
        assert "source exploded" in result.error
        assert result.stats["extractedRecords"] == 0
        assert bus.history(type="migration:error")[0]["data"]["phase"] == "extract"

    def test_invalid_mappings_rejected(self):
        with pytest.raises(RuleValidationError):
            MigrationObjectRunner(BadMappingObject)

    def test_live_requires_adapter(self):
        with pytest.raises(ValidationError):
            MigrationObjectRunner(CustomerObject, mode="live")

    def test_batch_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            MigrationObjectRunner(CustomerObject, batch_size=0)

    @pytest.mark.asyncio
    async def test_live_load_denied_without_explicit_flag(self, bus):
        adapter = MockAdapter(tables={"KNA1": [{"KUNNR": "7", "NAME1": "Live Co", "LAND1": "fr"}]})
        result = await MigrationObjectRunner(CustomerObject, mode="live", adapter=adapter, bus=bus).run()

        assert result.stats["extractedRecords"] == 1
        assert result.records[0]["Country"] == "FR"
        load = result.phases["load"]
        assert load.status == PhaseStatus.SKIPPED
        assert load.details["gate"] == {
            "operation": "migration.load_staging",
            "allowed": False,
            "reason": "write-operation-requires-explicit-live-mode",
        }
        assert result.stats["loadedRecords"] == 0
        assert result.status == PhaseStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_live_load_confirmed(self, bus):
        adapter = MockAdapter(tables={"KNA1": [{"KUNNR": "7", "NAME1": "Live Co", "LAND1": "fr"}]})
        result = await MigrationObjectRunner(CustomerObject, mode="live", adapter=adapter, bus=bus, dry_run=False).run()

        assert result.phases["load"].status == PhaseStatus.COMPLETED
        assert result.phases["load"].details["gate"]["allowed"] is True
        assert result.stats["loadedRecords"] == 1

    def test_mock_rows_are_seeded(self):
        assert CustomerObject().mock_rows() == CustomerObject().mock_rows()
        assert CustomerObject(seed="a").mock_rows() == CustomerObject(seed="a").mock_rows()


class TestBuiltinObjects:
    """Test every built-in object in mock mode."""

    def test_counts(self):
        assert len(SAP_OBJECTS) == 42
        assert len(INFOR_OBJECTS) == 9
        ids = [spec.object_id for spec in BUILTIN_OBJECTS]
        assert len(set(ids)) == len(ids)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("spec_class", BUILTIN_OBJECTS, ids=lambda s: s.object_id)
    async def test_mock_run(self, spec_class, bus):
        expected = len(spec_class().mock_rows())
        result = await MigrationObjectRunner(spec_class, bus=bus).run()

        assert result.status != PhaseStatus.FAILED, result.error
        assert expected > 0
        assert result.stats["extractedRecords"] == expected
        assert result.phases["transform"].details["mappingSummary"]["errors"] == 0

    @pytest.mark.parametrize("spec_class", BUILTIN_OBJECTS, ids=lambda s: s.object_id)
    def test_mock_rows_deterministic(self, spec_class):
        assert spec_class().mock_rows() == spec_class().mock_rows()

    @pytest.mark.asyncio
    async def test_business_partner_merges_customers_and_vendors(self, bus):
        result = await create_default_registry().create("BUSINESS_PARTNER", bus=bus).run()

        assert result.stats["extractedRecords"] == 85
        assert result.stats["transformedRecords"] == 80
        assert result.phases["transform"].details["mergedCount"] == 5
        merged = [r for r in result.records if len(r["Roles"]) == 2]
        assert len(merged) == 5
        assert all(set(r["Roles"]) == {"FLCU01", "FLVN01"} for r in merged)

    @pytest.mark.asyncio
    async def test_infor_ln_gl_account(self, bus):
        result = await create_default_registry().create("INFOR_LN_GL_ACCOUNT", bus=bus).run()

        assert result.stats["extractedRecords"] == 40
        assert result.phases["validate"].status == PhaseStatus.COMPLETED
        assert all(r["SourceSystem"] == "INFOR_LN" for r in result.records)
        assert all(len(r["SKA1-SAKNR"]) == 10 for r in result.records)


class TestTechnicalClassification:
    """Test the S/4HANA impact rules of the technical objects."""

    def test_bw_extractor(self):
        classification = classify_bw_extractor("0FI_GL_14")

        assert classification["action"] == "replace-with-cds"
        assert classification["replacement"] == "I_GL_14"
        assert classification["impact"] == "HIGH"
        assert IMPACT_PRIORITY[classification["impact"]] == "P1"

    def test_bw_custom_and_standard(self):
        assert classify_bw_extractor("ZCUSTOM_SALES_RPT")["action"] == "update"
        assert classify_bw_extractor("2LIS_11_VAHDR")["impact"] == "MEDIUM"
        assert classify_bw_extractor("0MATERIAL_ATTR") == {
            "action": "keep",
            "replacement": "",
            "impact": "LOW",
            "notes": "Standard extractor; no known S/4HANA impact",
        }

    def test_rfc_destination(self):
        assert classify_rfc_destination("APO_PROD", "3") == "decommission"
        assert classify_rfc_destination("SOLMAN_BACK", "3") == "replace-with-cloud-alm"
        assert classify_rfc_destination("ARIBA_NETWORK", "H") == "route-via-cpi"
        assert classify_rfc_destination("LEGACY_HOST", "T") == "replace-with-cpi"
        assert classify_rfc_destination("LEGACY_HOST", "3") == "keep-redirect"
        assert classify_rfc_destination("LEGACY_HOST", "G") == "review"

    def test_idoc_flow(self):
        assert classify_idoc_flow("DEBMAS", "CRM_SYS")["replacement"].startswith("BUMAS")
        assert classify_idoc_flow("MATMAS05", "MES")["strategy"] == "update-segments"
        assert classify_idoc_flow("ORDERS", "APO_SYS")["strategy"] == "decommission"
        assert classify_idoc_flow("ORDERS", "EDI_PARTNER")["strategy"] == "keep-review"

    def test_batch_job(self):
        assert classify_batch_job("RSBTCDEL2", "daily", 5) == "keep"
        assert classify_batch_job("Z_ARCHIVE_PROC", "monthly", 480) == "review-performance"
        assert classify_batch_job("Z_EDI_PROC", "hourly", 3) == "convert-to-app-job"
        assert classify_batch_job("ZCL_MM_VENDOR_EVAL", "weekly", 30) == "review-compatibility"


class TestRegistry:
    """Test registration and the wave runner."""

    def test_default_registry(self):
        registry = create_default_registry()

        assert registry.size == 51
        assert registry.has("GL_ACCOUNT_MASTER")
        assert create_default_registry(include_infor=False).size == 42

    def test_list_objects(self):
        registry = MigrationObjectRegistry()
        registry.register(CustomerObject)

        assert registry.list_objects() == [{
            "objectId": "TEST_CUSTOMER",
            "name": "Test Customer",
            "sourceSystem": "ECC",
            "targetSystem": "S4HANA",
        }]

    def test_register_rejects_non_specs(self):
        registry = MigrationObjectRegistry()

        with pytest.raises(RuleValidationError):
            registry.register(dict)
        with pytest.raises(RuleValidationError):
            registry.register(MigrationObjectSpec)

    def test_create_unknown(self):
        with pytest.raises(NotFoundError):
            MigrationObjectRegistry().create("NOPE")

    @pytest.mark.asyncio
    async def test_run_all_unknown(self, bus):
        with pytest.raises(NotFoundError):
            await create_default_registry().run_all(object_ids=["NOPE"], bus=bus)

    @pytest.mark.asyncio
    async def test_run_all_follows_dependencies(self, bus):
        registry = create_default_registry()
        results = await registry.run_all(object_ids=["CUSTOMER_OPEN_ITEM", "BUSINESS_PARTNER", "BANK_MASTER"], bus=bus)

        assert list(results) == ["BANK_MASTER", "BUSINESS_PARTNER", "CUSTOMER_OPEN_ITEM"]
        assert all(r.success for r in results.values())
        started = [e["data"]["objectId"] for e in bus.history(type="migration:start")]
        assert started.index("BANK_MASTER") < started.index("BUSINESS_PARTNER") < started.index("CUSTOMER_OPEN_ITEM")

    @pytest.mark.asyncio
    async def test_failed_object_does_not_stop_others(self, bus):
        registry = MigrationObjectRegistry()
        registry.register(BrokenObject)
        registry.register(CustomerObject)
        results = await registry.run_all(bus=bus)

        assert results["TEST_BROKEN"].status == PhaseStatus.FAILED
        assert results["TEST_CUSTOMER"].status == PhaseStatus.COMPLETED
