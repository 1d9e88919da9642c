"""Declarative field-mapping engine for migration objects."""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..errors import TransformError

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for a mapping without a default (``None`` is a valid default)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class Conversion(str, Enum):
    """Built-in value conversions."""
    TO_UPPER_CASE = "toUpperCase"
    TO_LOWER_CASE = "toLowerCase"
    TRIM = "trim"
    TO_DATE = "toDate"
    TO_DECIMAL = "toDecimal"
    TO_INTEGER = "toInteger"
    TO_BOOLEAN = "toBoolean"
    STRIP_LEADING_ZEROS = "stripLeadingZeros"
    PAD_LEFT_4 = "padLeft4"
    PAD_LEFT_5 = "padLeft5"
    PAD_LEFT_8 = "padLeft8"
    PAD_LEFT_10 = "padLeft10"
    PAD_LEFT_12 = "padLeft12"
    PAD_LEFT_18 = "padLeft18"
    PAD_LEFT_40 = "padLeft40"


class MappingKind(str, Enum):
    """How a mapping produces its target value."""
    CONSTANT = "constant"
    DIRECT = "direct"
    CONVERTED = "converted"
    MAPPED = "mapped"
    TRANSFORMED = "transformed"
    CONCATENATED = "concatenated"


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def to_upper_case(value: Any) -> str:
    return "" if _is_empty(value) else str(value).upper()


def to_lower_case(value: Any) -> str:
    return "" if _is_empty(value) else str(value).lower()


def trim(value: Any) -> str:
    return "" if _is_empty(value) else str(value).strip()


_COMPACT_DATE = re.compile(r"\d{8}")


def to_date(value: Any) -> Any:
    """Turn ``YYYYMMDD`` into ``YYYY-MM-DD``; anything else is returned as is."""
    if _is_empty(value):
        return ""
    text = str(value)
    if _COMPACT_DATE.fullmatch(text):
        return f"{text[:4]}-{text[4:6]}-{text[6:]}"
    return value


def to_decimal(value: Any) -> float:
    if _is_empty(value) or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


def to_integer(value: Any) -> int:
    """Parse and truncate toward zero; unparseable input yields 0."""
    if _is_empty(value) or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    number = to_decimal(value)
    return math.trunc(number)


def to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().upper() in ("X", "Y", "1", "TRUE", "T")
    return value is True or value == 1


def strip_leading_zeros(value: Any) -> str:
    if _is_empty(value):
        return ""
    return str(value).lstrip("0") or "0"


def pad_left(width: int) -> Callable[[Any], str]:
    """Build a converter left-padding with ``'0'`` to ``width``."""
    def convert(value: Any) -> str:
        return "" if _is_empty(value) else str(value).rjust(width, "0")
    convert.__name__ = f"pad_left_{width}"
    return convert


CONVERTERS: Dict[str, Callable[[Any], Any]] = {
    Conversion.TO_UPPER_CASE.value: to_upper_case,
    Conversion.TO_LOWER_CASE.value: to_lower_case,
    Conversion.TRIM.value: trim,
    Conversion.TO_DATE.value: to_date,
    Conversion.TO_DECIMAL.value: to_decimal,
    Conversion.TO_INTEGER.value: to_integer,
    Conversion.TO_BOOLEAN.value: to_boolean,
    Conversion.STRIP_LEADING_ZEROS.value: strip_leading_zeros,
    Conversion.PAD_LEFT_4.value: pad_left(4),
    Conversion.PAD_LEFT_5.value: pad_left(5),
    Conversion.PAD_LEFT_8.value: pad_left(8),
    Conversion.PAD_LEFT_10.value: pad_left(10),
    Conversion.PAD_LEFT_12.value: pad_left(12),
    Conversion.PAD_LEFT_18.value: pad_left(18),
    Conversion.PAD_LEFT_40.value: pad_left(40),
}


@dataclass(frozen=True)
class FieldMapping:
    """
    One target column of a migration object.

    Resolution order: ``value_map`` (a hit is final; a miss falls back to
    ``default`` when set, otherwise keeps the raw value), then ``default``
    for an absent or empty value, then ``transform(value, row)``, then
    ``convert``.
    """
    source: Optional[str]
    target: str
    convert: Optional[Union[str, Conversion, Callable[[Any], Any]]] = None
    value_map: Optional[Dict[str, Any]] = None
    default: Any = MISSING
    transform: Optional[Callable[[Any, Dict[str, Any]], Any]] = None
    sources: Optional[tuple] = None
    separator: str = " "

    @classmethod
    def constant(cls, target: str, value: Any) -> "FieldMapping":
        """Mapping that always yields ``value``."""
        return cls(source=None, target=target, default=value)

    @classmethod
    def concat(cls, target: str, sources: Iterable[str], separator: str = " ") -> "FieldMapping":
        """Mapping joining several non-empty source columns."""
        return cls(source=None, target=target, sources=tuple(sources), separator=separator)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldMapping":
        """Create from the dictionary form (``valueMap`` and ``value_map`` both accepted)."""
        sources = data.get("sources")
        return cls(
            source=data.get("source"),
            target=data.get("target", ""),
            convert=data.get("convert"),
            value_map=data.get("valueMap", data.get("value_map")),
            default=data.get("default", MISSING),
            transform=data.get("transform"),
            sources=tuple(sources) if sources else None,
            separator=data.get("separator", " "),
        )

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def kind(self) -> MappingKind:
        if self.sources:
            return MappingKind.CONCATENATED
        if not self.source:
            return MappingKind.CONSTANT
        if self.value_map is not None:
            return MappingKind.MAPPED
        if self.transform is not None:
            return MappingKind.TRANSFORMED
        if self.convert is not None:
            return MappingKind.CONVERTED
        return MappingKind.DIRECT

    def default_value(self, row: Dict[str, Any]) -> Any:
        return self.default(row) if callable(self.default) else self.default

    def describe(self) -> str:
        origin = self.source or (",".join(self.sources) if self.sources else "<constant>")
        return f"{origin}->{self.target}"


def resolve_converter(convert: Union[str, Conversion, Callable[[Any], Any], None]) -> Optional[Callable[[Any], Any]]:
    if convert is None:
        return None
    if callable(convert) and not isinstance(convert, str):
        return convert
    return CONVERTERS.get(Conversion(convert).value if isinstance(convert, Conversion) else convert)


class FieldMappingEngine:
    """
    Applies an ordered list of field mappings to source rows.

    A mapping that raises records a ``TransformError`` and leaves its
    target as ``None``; the remaining mappings still run.
    """

    def __init__(self, mappings: Iterable[Union[FieldMapping, Dict[str, Any]]], object_id: Optional[str] = None, pass_through: bool = False):
        """
        Initialize the engine.

        Args:
            mappings: Field mappings, as ``FieldMapping`` or dictionaries
            object_id: Owning migration object, reported in errors
            pass_through: Copy unmapped source columns to the target row
        """
        self.mappings: List[FieldMapping] = [
            m if isinstance(m, FieldMapping) else FieldMapping.from_dict(m) for m in mappings
        ]
        self.object_id = object_id
        self.pass_through = pass_through
        self.errors: List[TransformError] = []
        self._stats = {"processed": 0, "mapped": 0, "unmapped": 0, "errors": 0}

    def _resolve(self, mapping: FieldMapping, row: Dict[str, Any]) -> Any:
        if mapping.sources:
            parts = [str(row[s]) for s in mapping.sources if not _is_empty(row.get(s))]
            value: Any = mapping.separator.join(parts)
        elif not mapping.source:
            return mapping.default_value(row) if mapping.has_default else None
        else:
            value = row.get(mapping.source)

        if mapping.value_map is not None:
            hit, mapped = self._lookup(mapping.value_map, value)
            if hit:
                value = mapped
            elif mapping.has_default:
                value = mapping.default_value(row)
        elif _is_empty(value) and mapping.has_default:
            value = mapping.default_value(row)

        if mapping.transform is not None:
            value = mapping.transform(value, row)

        if mapping.convert is not None:
            converter = resolve_converter(mapping.convert)
            value = converter(value)
        return value

    @staticmethod
    def _lookup(value_map: Dict[str, Any], value: Any) -> tuple:
        if value is None:
            return False, None
        if value in value_map:
            return True, value_map[value]
        key = str(value)
        if key in value_map:
            return True, value_map[key]
        return False, None

    def apply_record(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Map one source row to a target row.

        Args:
            row: Source row

        Returns:
            Target row with one key per mapping, in mapping order
        """
        target: Dict[str, Any] = {}
        used_sources = set()

        for mapping in self.mappings:
            if mapping.source:
                used_sources.add(mapping.source)
            if mapping.sources:
                used_sources.update(mapping.sources)
            try:
                target[mapping.target] = self._resolve(mapping, row)
                self._stats["mapped"] += 1
            except Exception as e:
                self._stats["errors"] += 1
                error = TransformError(
                    f"Mapping {mapping.describe()} failed: {e}",
                    object_id=self.object_id,
                    mapping=mapping.describe(),
                )
                self.errors.append(error)
                logger.warning(f"Transform error for {mapping.target}: {e}")
                target[mapping.target] = None

        if self.pass_through:
            for key, value in row.items():
                if key not in used_sources and key not in target:
                    target[key] = value
                    self._stats["unmapped"] += 1

        self._stats["processed"] += 1
        return target

    def apply_batch(self, rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Map every row, preserving order."""
        return [self.apply_record(row) for row in rows]

    def validate_mappings(self) -> Dict[str, Any]:
        """
        Check the mapping list for definition errors.

        Returns:
            Dict with ``valid`` and ``errors``
        """
        errors = []
        targets = set()

        for i, mapping in enumerate(self.mappings):
            if not mapping.target:
                errors.append(f"Mapping[{i}]: missing target field")
            if not mapping.source and not mapping.sources and not mapping.has_default:
                errors.append(f"Mapping[{i}]: no source, sources, or default defined")
            if mapping.convert is not None:
                try:
                    known = resolve_converter(mapping.convert) is not None
                except ValueError:
                    known = False
                if not known:
                    errors.append(f"Mapping[{i}]: unknown converter '{mapping.convert}'")
            if mapping.target and mapping.target in targets:
                errors.append(f"Mapping[{i}]: duplicate target '{mapping.target}'")
            if mapping.target:
                targets.add(mapping.target)

        return {"valid": not errors, "errors": errors}

    def get_summary(self) -> Dict[str, Any]:
        """Get processing statistics."""
        return {"totalMappings": len(self.mappings), **self._stats}

    def reset_stats(self) -> None:
        self._stats = {"processed": 0, "mapped": 0, "unmapped": 0, "errors": 0}
        self.errors = []
