"""Migration objects: field mapping, quality checks, dependency ordering and planning."""

from .base import MigrationObjectRunner, MigrationObjectSpec
from .dependency_graph import (
    DEPENDENCIES,
    DependencyGraph,
    detect_circular_dependencies,
    get_dependencies,
    get_execution_order,
    get_execution_waves,
    get_transitive_dependencies,
)
from .field_mapping import CONVERTERS, Conversion, FieldMapping, FieldMappingEngine, MappingKind
from .planner import MigrationPlanner, PlanStore
from .quality import (
    DataQualityChecker,
    FormatCheck,
    FuzzyCheck,
    QualityChecks,
    QualityReport,
    RangeCheck,
    ReferentialCheck,
    levenshtein,
    normalized_similarity,
)
from .registry import MigrationObjectRegistry
from .objects import create_default_registry, register_builtin_objects

__all__ = [
    "CONVERTERS",
    "Conversion",
    "DEPENDENCIES",
    "DataQualityChecker",
    "DependencyGraph",
    "FieldMapping",
    "FieldMappingEngine",
    "FormatCheck",
    "FuzzyCheck",
    "MappingKind",
    "MigrationObjectRegistry",
    "MigrationObjectRunner",
    "MigrationObjectSpec",
    "MigrationPlanner",
    "PlanStore",
    "QualityChecks",
    "QualityReport",
    "RangeCheck",
    "ReferentialCheck",
    "create_default_registry",
    "detect_circular_dependencies",
    "get_dependencies",
    "get_execution_order",
    "get_execution_waves",
    "get_transitive_dependencies",
    "levenshtein",
    "normalized_similarity",
    "register_builtin_objects",
]
