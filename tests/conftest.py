"""Shared fixtures."""

import pytest

from erpbridge.adapters.mock import MockAdapter
from erpbridge.events.progress_bus import ProgressBus
from erpbridge.extraction.checkpoint import CheckpointStore
from erpbridge.extraction.context import ExtractionContext


@pytest.fixture
def bus():
    """A private progress bus so tests never see each other's events."""
    return ProgressBus(capacity=100)


@pytest.fixture
def memory_store():
    return CheckpointStore(run_id="test-run")


@pytest.fixture
def disk_store(tmp_path):
    return CheckpointStore(tmp_path, run_id="test-run")


@pytest.fixture
def mock_context():
    """Mock-mode context with a fixed run id."""
    return ExtractionContext.create(mode="mock", run_id="test-run")


@pytest.fixture
def fixture_tables():
    return {
        "T001": [
            {"BUKRS": "1000", "BUTXT": "US Operations", "WAERS": "USD"},
            {"BUKRS": "2000", "BUTXT": "German Operations", "WAERS": "EUR"},
        ],
        "SKA1": [
            {"SAKNR": "0000100000", "KTOPL": "INT"},
            {"SAKNR": "0000113100", "KTOPL": "INT"},
            {"SAKNR": "0000140000", "KTOPL": "INT"},
        ],
    }


@pytest.fixture
def mock_adapter(fixture_tables):
    return MockAdapter(tables=fixture_tables)
