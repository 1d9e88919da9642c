"""Extraction framework: extractor specs, checkpoints, coverage and the concurrent runner."""

from .base import (
    ExpectedTable,
    ExtractorRun,
    ExtractorRunner,
    ExtractorSpec,
    Subject,
    TableExtractorSpec,
    TableRead,
)
from .checkpoint import CheckpointStore
from .context import Caches, ExtractionContext
from .coverage import CoverageRecord, CoverageStatus, CoverageTracker
from .forensic import ForensicRun, analyze_gaps
from .registry import ExtractorRegistry

__all__ = [
    "Caches",
    "CheckpointStore",
    "CoverageRecord",
    "CoverageStatus",
    "CoverageTracker",
    "ExpectedTable",
    "ExtractionContext",
    "ExtractorRegistry",
    "ExtractorRun",
    "ExtractorRunner",
    "ExtractorSpec",
    "ForensicRun",
    "Subject",
    "TableExtractorSpec",
    "TableRead",
    "analyze_gaps",
]
