"""Tests for the command-line interface."""

import json

import pytest

from erpbridge.cli import build_parser, main
from erpbridge.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    configure_logging("INFO", "text")


@pytest.fixture
def forensic_file(tmp_path):
    path = tmp_path / "forensic.json"
    path.write_text(json.dumps({"results": {"FI_TRANSACTIONS": {"count": 100}}}))
    return path


class TestParser:
    """Test argument parsing."""

    def test_gate_arguments(self):
        args = build_parser().parse_args(["gate", "migration.load_staging", "--dry-run", "false"])

        assert args.command == "gate"
        assert args.operation == "migration.load_staging"
        assert args.dry_run == "false"

    def test_migrate_defaults(self):
        args = build_parser().parse_args(["migrate"])

        assert args.objects == []
        assert args.mode is None
        assert args.batch_size == 100
        assert not args.no_dry_run

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out


class TestGateCommand:
    """Test the safety gate command."""

    def test_read_operation_allowed(self, capsys):
        assert main(["gate", "migration.plan"]) == 0
        assert json.loads(capsys.readouterr().out)["allowed"] is True

    def test_write_requires_live_mode(self, capsys):
        assert main(["gate", "migration.load_staging"]) == 1
        decision = json.loads(capsys.readouterr().out)
        assert decision["operation"] == "migration.load_staging"
        assert decision["allowed"] is False
        assert decision["reason"] == "write-operation-requires-explicit-live-mode"

    def test_write_confirmed(self, capsys):
        assert main(["gate", "migration.load_staging", "--dry-run", "false"]) == 0
        assert json.loads(capsys.readouterr().out)["reason"] == "write-operation-live-mode-confirmed"

    def test_dry_run_true_denied(self):
        assert main(["gate", "migration.load_production", "--dry-run", "true"]) == 1

    def test_unknown_operation(self, capsys):
        assert main(["gate", "migration.drop_everything", "--dry-run", "false"]) == 1
        assert json.loads(capsys.readouterr().out)["reason"] == "unknown-operation"


class TestPlanCommand:
    """Test planning from a forensic result file."""

    def test_plan_to_file(self, forensic_file, tmp_path, capsys):
        output = tmp_path / "plan.json"

        assert main(["plan", "--input", str(forensic_file), "--output", str(output), "--no-config"]) == 0
        plan = json.loads(output.read_text())
        assert plan["scope"]["activeModules"] == ["FI"]
        assert "FI_CONFIG" not in [o["objectId"] for o in plan["objects"]]
        assert "Saved to" in capsys.readouterr().out

    def test_plan_to_stdout(self, forensic_file, capsys):
        assert main(["plan", "--input", str(forensic_file), "--exclude-objects", "ASSET_ACQUISITION"]) == 0
        plan = json.loads(capsys.readouterr().out)
        assert plan["scope"]["totalObjects"] == 10

    def test_missing_input_file(self, tmp_path):
        assert main(["plan", "--input", str(tmp_path / "missing.json")]) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")

        assert main(["plan", "--input", str(path)]) == 1

    def test_empty_forensic_result(self, tmp_path, capsys):
        path = tmp_path / "empty.json"
        path.write_text("{}")

        assert main(["plan", "--input", str(path)]) == 1
        assert '"error": "ValidationError"' in capsys.readouterr().err


class TestRunCommands:
    """Test mock extraction and migration runs."""

    def test_extract_mock(self, tmp_path, capsys):
        output = tmp_path / "forensic.json"
        checkpoints = tmp_path / "checkpoints"

        assert main([
            "extract", "--modules", "FI", "--run-id", "cli-run",
            "--checkpoint-dir", str(checkpoints), "--output", str(output),
        ]) == 0
        forensic = json.loads(output.read_text())
        assert forensic["runId"] == "cli-run"
        assert "FI_TRANSACTIONS" in forensic["results"]
        assert (checkpoints / "cli-run" / "coverage.json").exists()

    def test_checkpoint_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ERPBRIDGE_CHECKPOINT_DIR", str(tmp_path))

        assert main(["extract", "--modules", "FI", "--run-id", "env-run"]) == 0
        assert (tmp_path / "env-run" / "coverage.json").exists()
        assert (tmp_path / "env-run" / "FI_CONFIG" / "_complete.json").exists()

    def test_mode_from_environment(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("ERPBRIDGE_MODE", "live")

        assert main(["extract", "--checkpoint-dir", str(tmp_path)]) == 1
        assert "Live mode requires --profile" in capsys.readouterr().err
        assert main(["migrate", "BANK_MASTER", "--mode", "mock"]) == 0

    def test_invalid_settings(self, monkeypatch, capsys):
        monkeypatch.setenv("ERPBRIDGE_MODE", "staging")

        assert main(["gate", "migration.plan"]) == 1
        assert '"error": "RuleValidationError"' in capsys.readouterr().err

    def test_extract_live_requires_profile(self, tmp_path):
        assert main(["extract", "--mode", "live", "--checkpoint-dir", str(tmp_path)]) == 1

    def test_migrate_mock(self, capsys):
        assert main(["migrate", "BANK_MASTER"]) == 0
        out = capsys.readouterr().out
        assert "MIGRATION COMPLETE" in out
        assert "BANK_MASTER" in out
