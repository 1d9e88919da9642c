"""Tests for the safety gate."""

import pytest

from erpbridge.errors import UnknownOperation, ValidationError
from erpbridge.safety import (
    OPERATION_TIERS,
    READ_OPERATIONS,
    REASON_LIVE_CONFIRMED,
    REASON_LIVE_REQUIRED,
    REASON_UNKNOWN,
    WRITE_OPERATIONS,
    check_operation,
    check_request,
    operation_tier,
    require_allowed,
)


class TestCheckOperation:
    """Test gate decisions."""

    def test_read_operation_always_allowed(self):
        for dry_run in (True, False, None):
            decision = check_operation("extraction.run", dry_run)
            assert decision.allowed
            assert decision.reason is None
        assert check_operation("extraction.run").allowed

    def test_write_denied_without_flag(self):
        decision = check_operation("migration.load_staging")

        assert not decision.allowed
        assert decision.reason == REASON_LIVE_REQUIRED

    def test_write_denied_for_truthy_or_falsy_lookalikes(self):
        for dry_run in (True, None, 0, "false", ""):
            assert not check_operation("migration.load_staging", dry_run).allowed

    def test_write_allowed_only_with_explicit_false(self):
        decision = check_operation("migration.load_staging", False)

        assert decision.allowed
        assert decision.reason == REASON_LIVE_CONFIRMED

    def test_unknown_operation(self):
        decision = check_operation("system.format_disk", False)

        assert not decision.allowed
        assert decision.reason == REASON_UNKNOWN

    def test_to_dict_omits_empty_reason(self):
        assert check_operation("code.read").to_dict() == {"allowed": True}
        assert check_operation("code.generate").to_dict() == {
            "allowed": False,
            "reason": REASON_LIVE_REQUIRED,
        }


class TestTiers:
    """Test the operation table."""

    def test_read_and_write_sets_partition_the_table(self):
        assert READ_OPERATIONS.isdisjoint(WRITE_OPERATIONS)
        assert READ_OPERATIONS | WRITE_OPERATIONS == set(OPERATION_TIERS)

    def test_tiers(self):
        assert operation_tier("migration.plan") == 1
        assert operation_tier("migration.load_production") == 4
        assert operation_tier("nope") is None


class TestRequests:
    """Test request parameter handling and the raising variant."""

    def test_camel_case_flag(self):
        assert check_request("transport.create", {"dryRun": False}).allowed

    def test_snake_case_flag(self):
        assert check_request("transport.create", {"dry_run": False}).allowed

    def test_missing_flag_denies_write(self):
        assert not check_request("transport.create", {}).allowed
        assert not check_request("transport.create").allowed

    def test_require_allowed_raises_unknown(self):
        with pytest.raises(UnknownOperation):
            require_allowed("does.not_exist")

    def test_require_allowed_raises_validation(self):
        with pytest.raises(ValidationError) as exc_info:
            require_allowed("config.change_production")

        assert exc_info.value.details["tier"] == "production"

    def test_require_allowed_passes(self):
        assert require_allowed("config.change_dev", dry_run=False).allowed
