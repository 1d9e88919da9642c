"""Tests for migration planning."""

import pytest

from erpbridge.errors import ValidationError
from erpbridge.migration.planner import MigrationPlanner, PlanStore, round_half_up


@pytest.fixture
def planner():
    return MigrationPlanner()


@pytest.fixture
def finance_forensic():
    return {"results": {"FI_TRANSACTIONS": {"count": 100}}}


def object_ids(plan):
    return [o["objectId"] for o in plan["objects"]]


class TestActiveModules:
    """Test module detection and module filters."""

    def test_finance_scope(self, planner, finance_forensic):
        plan = planner.plan(finance_forensic)

        assert plan["scope"]["activeModules"] == ["FI"]
        assert plan["scope"]["totalObjects"] == 11
        assert plan["scope"]["totalEstimatedRecords"] == 100

    def test_failed_extractors_do_not_activate_modules(self, planner):
        plan = planner.plan({"results": {"FI_TRANSACTIONS": {"error": "timeout"}}})

        assert plan["scope"]["activeModules"] == []
        assert plan["objects"] == []
        assert plan["executionPlan"] == {"waves": [], "totalWaves": 0}

    def test_modules_sorted_by_coverage(self, planner):
        plan = planner.plan({"results": {
            "FI_TRANSACTIONS": {"count": 100},
            "CO_COST_CENTERS": {"count": 10},
            "CO_PROFIT_CENTERS": {"count": 5},
        }})

        assert plan["scope"]["activeModules"] == ["CO", "FI"]

    def test_include_and_exclude_modules(self, planner):
        forensic = {"results": {"FI_TRANSACTIONS": {"count": 100}, "CO_COST_CENTERS": {"count": 10}}}

        assert planner.plan(forensic, {"includeModules": ["co"]})["scope"]["activeModules"] == ["CO"]
        assert planner.plan(forensic, {"excludeModules": ["FI"]})["scope"]["activeModules"] == ["CO"]
        assert planner.plan(forensic, {"include_modules": ["FI"]})["scope"]["activeModules"] == ["FI"]

    @pytest.mark.parametrize("forensic", [None, {}, ["FI_TRANSACTIONS"]])
    def test_requires_forensic_data(self, planner, forensic):
        with pytest.raises(ValidationError, match="No forensic data available"):
            planner.plan(forensic)


class TestObjects:
    """Test object selection and estimates."""

    def test_prerequisites_added(self, planner, finance_forensic):
        plan = planner.plan(finance_forensic)
        prerequisites = sorted(o["objectId"] for o in plan["objects"] if o["isPrerequisite"])

        assert prerequisites == ["BANK_MASTER", "BUSINESS_PARTNER", "COST_CENTER", "PROFIT_CENTER"]

    def test_sorted_by_priority(self, planner, finance_forensic):
        plan = planner.plan(finance_forensic)

        assert object_ids(plan) == [
            "FI_CONFIG",
            "GL_ACCOUNT_MASTER", "COST_CENTER", "PROFIT_CENTER",
            "BUSINESS_PARTNER", "BANK_MASTER",
            "GL_BALANCE", "CUSTOMER_OPEN_ITEM", "VENDOR_OPEN_ITEM",
            "FIXED_ASSET",
            "ASSET_ACQUISITION",
        ]

    def test_volume_and_hours(self, planner, finance_forensic):
        plan = planner.plan(finance_forensic)
        by_id = {o["objectId"]: o for o in plan["objects"]}

        assert by_id["GL_BALANCE"]["estimatedRecords"] == 100
        assert by_id["GL_BALANCE"]["estimatedHours"] == 40.2
        assert by_id["GL_BALANCE"]["dependencies"] == ["GL_ACCOUNT_MASTER"]
        assert by_id["ASSET_ACQUISITION"]["estimatedHours"] == 20
        assert by_id["ASSET_ACQUISITION"]["priority"] == 50

    def test_records_list_counts_rows(self, planner):
        plan = planner.plan({"results": {"FI_GL_ACCOUNTS": {"records": [{}, {}, {}]}}})
        by_id = {o["objectId"]: o for o in plan["objects"]}

        assert by_id["GL_ACCOUNT_MASTER"]["estimatedRecords"] == 3

    def test_exclude_objects(self, planner, finance_forensic):
        plan = planner.plan(finance_forensic, {"exclude_objects": ["ASSET_ACQUISITION"]})

        assert "ASSET_ACQUISITION" not in object_ids(plan)
        assert plan["scope"]["totalObjects"] == 10

    def test_exclude_config(self, planner, finance_forensic):
        assert "FI_CONFIG" not in object_ids(planner.plan(finance_forensic, {"includeConfig": False}))
        assert "FI_CONFIG" not in object_ids(planner.plan(finance_forensic, {"include_config": False}))

    def test_exclude_interfaces(self, planner):
        forensic = {"results": {"BASIS_RFC": {"count": 3}}}

        assert object_ids(planner.plan(forensic)) != []
        assert object_ids(planner.plan(forensic, {"includeInterfaces": False})) == []


class TestExecutionPlan:
    """Test waves and effort."""

    def test_waves(self, planner, finance_forensic):
        execution = planner.plan(finance_forensic)["executionPlan"]

        assert [w["objectIds"] for w in execution["waves"]] == [
            ["GL_ACCOUNT_MASTER", "FI_CONFIG", "BANK_MASTER", "PROFIT_CENTER"],
            ["GL_BALANCE", "BUSINESS_PARTNER", "COST_CENTER"],
            ["CUSTOMER_OPEN_ITEM", "VENDOR_OPEN_ITEM", "FIXED_ASSET"],
            ["ASSET_ACQUISITION"],
        ]
        assert execution["totalWaves"] == 4
        assert execution["waves"][0]["waveNumber"] == 1
        assert execution["waves"][3]["objects"][0]["objectId"] == "ASSET_ACQUISITION"

    def test_effort(self, planner, finance_forensic):
        effort = planner.plan(finance_forensic)["effort"]

        assert effort["totalEstimatedHours"] == 276
        assert effort["configurationHours"] == 20
        assert effort["dataMigrationHours"] == 256
        assert effort["estimatedCalendarDays"] == 24
        assert effort["breakdown"] == {"config": 1, "masterData": 5, "transactional": 4, "interfaces": 0}


class TestRisksAndRecommendations:
    """Test risk assessment."""

    def test_clean_result_has_no_risks(self, planner, finance_forensic):
        plan = planner.plan(finance_forensic)

        assert plan["risks"] == []
        assert [r["phase"] for r in plan["recommendations"]] == ["profile", "configure", "profile"]
        assert plan["recommendations"][0]["objects"] == ["GL_BALANCE"]
        assert "Business Partners" in plan["recommendations"][2]["action"]

    def test_every_risk_category(self, planner):
        forensic = {
            "results": {"FI_TRANSACTIONS": {"count": 150000}},
            "confidence": {"overall": 60, "grade": "C"},
            "gapReport": {
                "extraction": {"missingCriticalTables": ["BKPF", "BSEG"]},
                "authorization": {"count": 2},
            },
            "humanValidation": ["a", "b", "c", "d"],
        }
        plan = planner.plan(forensic)
        risks = {r["category"]: r for r in plan["risks"]}

        assert list(risks) == ["data-completeness", "missing-data", "authorization", "data-volume", "validation"]
        assert risks["missing-data"]["tables"] == ["BKPF", "BSEG"]
        assert risks["data-volume"]["objects"] == ["GL_BALANCE"]
        assert plan["confidence"] == {"overall": 60, "grade": "C"}

        pre_migration = [r for r in plan["recommendations"] if r["phase"] == "pre-migration"]
        assert len(pre_migration[0]["details"]) == 2

    def test_confidence_threshold(self, planner):
        forensic = {"results": {"FI_TRANSACTIONS": {"count": 1}}, "confidence": {"overall": 70}}

        assert planner.plan(forensic)["risks"] == []


class TestRounding:
    """Test half-up rounding."""

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(1.24, 1) == 1.2
        assert round_half_up(33.333) == 33


class TestPlanStore:
    """Test plan storage states."""

    def test_states(self):
        store = PlanStore()
        assert store.state == PlanStore.MISSING
        assert store.latest() is None

        store.save({"n": 1})
        assert store.state == PlanStore.AVAILABLE
        store.save({"n": 2})
        assert store.state == PlanStore.REFRESHED
        assert store.latest() == {"n": 2}

        store.record_forensic({"results": {}})
        store.clear()
        assert store.state == PlanStore.MISSING
        assert store.forensic_result is None
