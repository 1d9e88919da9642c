"""Shared data models."""

from .profile import AdapterProfile, AuthKind, Credentials, RunMode
from .results import (
    ExtractorCategory,
    PhaseResult,
    PhaseStatus,
    ObjectRunResult,
)

__all__ = [
    "AdapterProfile",
    "AuthKind",
    "Credentials",
    "RunMode",
    "ExtractorCategory",
    "PhaseResult",
    "PhaseStatus",
    "ObjectRunResult",
]
