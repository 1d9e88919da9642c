"""Tests for the field-mapping engine."""

import pytest

from erpbridge.migration.field_mapping import (
    CONVERTERS,
    FieldMapping,
    FieldMappingEngine,
    MappingKind,
    pad_left,
    strip_leading_zeros,
    to_boolean,
    to_date,
    to_decimal,
    to_integer,
)


class TestConverters:
    """Test the built-in conversions."""

    def test_to_date_compact(self):
        assert to_date("20240131") == "2024-01-31"

    def test_to_date_leaves_other_values(self):
        assert to_date("2024-01-31") == "2024-01-31"
        assert to_date("2024013") == "2024013"
        assert to_date(None) == ""

    def test_to_decimal(self):
        assert to_decimal("12.50") == 12.5
        assert to_decimal("abc") == 0
        assert to_decimal("") == 0
        assert to_decimal("inf") == 0

    def test_to_integer_truncates(self):
        assert to_integer("42") == 42
        assert to_integer("12.9") == 12
        assert to_integer("-3.7") == -3
        assert to_integer(None) == 0
        assert to_integer("x") == 0

    def test_to_boolean(self):
        for truthy in ("X", "x", "Y", "1", "TRUE", "t", True, 1):
            assert to_boolean(truthy) is True
        for falsy in ("", "N", "0", "no", None, False, 0):
            assert to_boolean(falsy) is False

    def test_strip_leading_zeros(self):
        assert strip_leading_zeros("0000123") == "123"
        assert strip_leading_zeros("000") == "0"
        assert strip_leading_zeros("") == ""

    def test_pad_left(self):
        assert pad_left(10)("12345") == "0000012345"
        assert pad_left(4)("123456") == "123456"
        assert CONVERTERS["padLeft18"]("42") == "0" * 16 + "42"
        assert CONVERTERS["padLeft10"]("") == ""

    def test_empty_string_conversions(self):
        for name in ("toUpperCase", "toLowerCase", "trim", "stripLeadingZeros"):
            assert CONVERTERS[name](None) == ""


class TestFieldMapping:
    """Test mapping resolution."""

    def test_direct_and_converted(self):
        engine = FieldMappingEngine([
            FieldMapping("NAME1", "Name"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
        ])

        assert engine.apply_record({"NAME1": "Acme", "LAND1": "us"}) == {"Name": "Acme", "Country": "US"}

    def test_value_map_hit_is_final(self):
        engine = FieldMappingEngine([
            FieldMapping("TYPE", "Category", value_map={"ORG": "2", "PERSON": "1"}, default="9"),
        ])

        assert engine.apply_record({"TYPE": "ORG"})["Category"] == "2"

    def test_value_map_miss_uses_default(self):
        engine = FieldMappingEngine([
            FieldMapping("TYPE", "Category", value_map={"ORG": "2"}, default="9"),
        ])

        assert engine.apply_record({"TYPE": "GROUP"})["Category"] == "9"

    def test_value_map_miss_without_default_keeps_raw(self):
        engine = FieldMappingEngine([FieldMapping("TYPE", "Category", value_map={"ORG": "2"})])

        assert engine.apply_record({"TYPE": "GROUP"})["Category"] == "GROUP"

    def test_value_map_matches_stringified_keys(self):
        engine = FieldMappingEngine([FieldMapping("DIR", "Direction", value_map={"1": "INBOUND"})])

        assert engine.apply_record({"DIR": 1})["Direction"] == "INBOUND"

    def test_default_fills_empty_value(self):
        engine = FieldMappingEngine([FieldMapping("SPRAS", "Language", default="EN")])

        assert engine.apply_record({"SPRAS": ""})["Language"] == "EN"
        assert engine.apply_record({})["Language"] == "EN"
        assert engine.apply_record({"SPRAS": "DE"})["Language"] == "DE"

    def test_callable_default_sees_row(self):
        engine = FieldMappingEngine([
            FieldMapping(None, "Key", default=lambda row: f"{row['A']}-{row['B']}"),
        ])

        assert engine.apply_record({"A": "1", "B": "2"})["Key"] == "1-2"

    def test_transform_runs_before_convert(self):
        engine = FieldMappingEngine([
            FieldMapping("AMT", "Amount", transform=lambda v, row: f"-{v}" if row.get("SHKZG") == "H" else v, convert="toDecimal"),
        ])

        assert engine.apply_record({"AMT": "10.5", "SHKZG": "H"})["Amount"] == -10.5
        assert engine.apply_record({"AMT": "10.5", "SHKZG": "S"})["Amount"] == 10.5

    def test_constant_and_concat(self):
        engine = FieldMappingEngine([
            FieldMapping.constant("SourceSystem", "ECC"),
            FieldMapping.concat("FullName", ["NAME1", "NAME2"]),
        ])

        row = engine.apply_record({"NAME1": "Acme", "NAME2": "", "OTHER": 1})
        assert row == {"SourceSystem": "ECC", "FullName": "Acme"}

    def test_pass_through_copies_unmapped_columns(self):
        engine = FieldMappingEngine([FieldMapping("A", "X")], pass_through=True)

        assert engine.apply_record({"A": 1, "B": 2}) == {"X": 1, "B": 2}
        assert engine.get_summary()["unmapped"] == 1

    def test_failing_transform_records_error(self):
        def explode(value, row):
            raise ValueError("bad value")

        engine = FieldMappingEngine([
            FieldMapping("A", "X", transform=explode),
            FieldMapping("B", "Y"),
        ], object_id="TEST")

        row = engine.apply_record({"A": 1, "B": 2})
        assert row == {"X": None, "Y": 2}
        assert len(engine.errors) == 1
        assert engine.errors[0].object_id == "TEST"
        assert engine.get_summary()["errors"] == 1

    def test_kinds(self):
        assert FieldMapping.constant("T", 1).kind == MappingKind.CONSTANT
        assert FieldMapping("A", "T").kind == MappingKind.DIRECT
        assert FieldMapping("A", "T", convert="trim").kind == MappingKind.CONVERTED
        assert FieldMapping("A", "T", value_map={}).kind == MappingKind.MAPPED
        assert FieldMapping("A", "T", transform=lambda v, r: v).kind == MappingKind.TRANSFORMED
        assert FieldMapping.concat("T", ["A", "B"]).kind == MappingKind.CONCATENATED

    def test_from_dict(self):
        mapping = FieldMapping.from_dict({"source": "A", "target": "B", "valueMap": {"1": "X"}, "default": ""})

        assert mapping.value_map == {"1": "X"}
        assert mapping.has_default

    def test_dict_mappings_accepted(self):
        engine = FieldMappingEngine([{"source": "A", "target": "B", "convert": "toUpperCase"}])

        assert engine.apply_record({"A": "abc"}) == {"B": "ABC"}


class TestEngine:
    """Test batch processing and validation."""

    def test_apply_batch_preserves_order(self):
        engine = FieldMappingEngine([FieldMapping("N", "n")])
        rows = engine.apply_batch([{"N": i} for i in range(5)])

        assert [r["n"] for r in rows] == [0, 1, 2, 3, 4]
        summary = engine.get_summary()
        assert summary["processed"] == 5
        assert summary["mapped"] == 5
        assert summary["totalMappings"] == 1

    def test_reset_stats(self):
        engine = FieldMappingEngine([FieldMapping("N", "n")])
        engine.apply_batch([{"N": 1}])
        engine.reset_stats()

        assert engine.get_summary()["processed"] == 0
        assert engine.errors == []

    def test_validate_mappings_ok(self):
        engine = FieldMappingEngine([FieldMapping("A", "X"), FieldMapping.constant("Y", "c")])

        assert engine.validate_mappings() == {"valid": True, "errors": []}

    @pytest.mark.parametrize("mapping, message", [
        (FieldMapping("A", ""), "missing target field"),
        (FieldMapping(None, "X"), "no source, sources, or default defined"),
        (FieldMapping("A", "X", convert="toRoman"), "unknown converter"),
    ])
    def test_validate_mappings_errors(self, mapping, message):
        result = FieldMappingEngine([mapping]).validate_mappings()

        assert not result["valid"]
        assert any(message in e for e in result["errors"])

    def test_validate_duplicate_target(self):
        result = FieldMappingEngine([FieldMapping("A", "X"), FieldMapping("B", "X")]).validate_mappings()

        assert result["errors"] == ["Mapping[1]: duplicate target 'X'"]
