"""Tests for the data quality checker."""

import pytest

from erpbridge.migration.quality import (
    DataQualityChecker,
    FuzzyCheck,
    QualityChecks,
    RangeCheck,
    ReferentialCheck,
    FormatCheck,
    levenshtein,
    normalized_similarity,
)


@pytest.fixture
def checker():
    return DataQualityChecker()


class TestSimilarity:
    """Test the string distance helpers."""

    def test_levenshtein(self):
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("", "abc") == 3
        assert levenshtein("same", "same") == 0

    def test_normalized_similarity(self):
        assert normalized_similarity("", "") == 1.0
        assert normalized_similarity("abcd", "abcx") == 0.75
        assert normalized_similarity("abc", "xyz") == 0.0


class TestChecks:
    """Test the individual checks."""

    def test_required(self, checker):
        rows = [{"A": "1", "B": "x"}, {"A": "", "B": None}, {"A": 0, "B": "y"}]
        result = checker.check_required(rows, ["A", "B"])

        assert result.severity == "error"
        assert result.details == [{"row": 1, "field": "A"}, {"row": 1, "field": "B"}]

    def test_required_passes(self, checker):
        assert checker.check_required([{"A": "1"}], ["A"]).severity == "pass"

    def test_required_accepts_only_strings_and_numbers(self, checker):
        rows = [{"A": 0}, {"A": 2.5}, {"A": False}, {"A": []}, {"A": {"x": 1}}, {"A": "ok"}]
        result = checker.check_required(rows, ["A"])

        assert [d["row"] for d in result.details] == [2, 3, 4]

    def test_exact_duplicates(self, checker):
        rows = [{"K": "1", "C": "A"}, {"K": "2", "C": "A"}, {"K": "1", "C": "A"}]
        result = checker.find_exact_duplicates(rows, ["K", "C"])

        assert result.severity == "error"
        assert result.details == [{"row": 2, "duplicateOf": 0, "key": "1|A"}]

    def test_fuzzy_duplicates(self, checker):
        rows = [
            {"NAME": "Acme Corporation"},
            {"NAME": "ACME Corporatio"},
            {"NAME": "Globex Industries"},
        ]
        result = checker.find_fuzzy_duplicates(rows, ["NAME"], 0.85)

        assert result.severity == "warning"
        assert len(result.details) == 1
        assert result.details[0]["rowA"] == 0
        assert result.details[0]["rowB"] == 1

    def test_fuzzy_keeps_zero_key_values(self, checker):
        rows = [{"CODE": 0, "NAME": "Acme"}, {"CODE": None, "NAME": "Acme"}]
        result = checker.find_fuzzy_duplicates(rows, ["CODE", "NAME"], 1.0)

        assert result.details == []
        assert checker.find_fuzzy_duplicates(rows[:1] * 2, ["CODE", "NAME"], 1.0).details[0]["similarity"] == 1.0

    def test_fuzzy_includes_identical_rows(self, checker):
        rows = [{"NAME": "Same"}, {"NAME": "same"}]
        result = checker.find_fuzzy_duplicates(rows, ["NAME"], 0.85)

        assert result.details == [{"rowA": 0, "rowB": 1, "similarity": 1.0}]

    def test_referential_integrity(self, checker):
        rows = [{"BUKRS": "1000"}, {"BUKRS": "9999"}, {"BUKRS": ""}]
        result = checker.check_referential_integrity(rows, "BUKRS", {"1000", "2000"})

        assert result.severity == "error"
        assert result.details == [{"row": 1, "field": "BUKRS", "value": "9999"}]

    def test_format(self, checker):
        rows = [{"EMAIL": "a@b.com"}, {"EMAIL": "not-an-email"}, {"EMAIL": None}]
        result = checker.check_format(rows, "EMAIL", r"^[^@\s]+@[^@\s]+\.[^@\s]+$", "email")

        assert result.severity == "warning"
        assert [d["row"] for d in result.details] == [1]
        assert "email" in result.message

    def test_range_inclusive(self, checker):
        rows = [{"Q": 0}, {"Q": "100"}, {"Q": -1}, {"Q": 101}, {"Q": "n/a"}]
        result = checker.check_range(rows, "Q", 0, 100)

        assert result.severity == "warning"
        assert [d["row"] for d in result.details] == [2, 3]


class TestReport:
    """Test the combined report."""

    def test_passed(self, checker):
        report = checker.run([{"A": "1"}], QualityChecks(required=["A"]))

        assert report.status == "passed"
        assert report.violation_count == 0

    def test_warnings_only(self, checker):
        checks = QualityChecks(ranges=[RangeCheck("Q", 0, 10)])
        report = checker.run([{"Q": 50}], checks)

        assert report.status == "warnings"
        assert report.warning_count == 1
        assert report.error_count == 0

    def test_errors_win(self, checker):
        checks = QualityChecks(
            required=["A"],
            ranges=[RangeCheck("Q", 0, 10)],
        )
        report = checker.run([{"A": "", "Q": 50}], checks)

        assert report.status == "failed"
        data = report.to_dict()
        assert data["qualityStatus"] == "failed"
        assert data["totalRecords"] == 1
        assert data["violationCount"] == 2

    def test_empty_checks(self, checker):
        report = checker.run([{"A": 1}])

        assert report.status == "passed"
        assert report.checks == []

    def test_from_dict(self, checker):
        checks = QualityChecks.from_dict({
            "required": ["A"],
            "exactDuplicate": {"keys": ["A"]},
            "fuzzyDuplicate": {"keys": ["B"], "threshold": 0.9},
            "range": [{"field": "Q", "min": 0}],
            "referential": [{"field": "C", "validSet": ["x"]}],
            "format": [{"field": "D", "pattern": "^\\d+$"}],
        })

        assert checks.fuzzy_duplicate == FuzzyCheck(("B",), 0.9)
        assert checks.referential == [ReferentialCheck("C", frozenset({"x"}))]
        assert checks.formats == [FormatCheck("D", "^\\d+$", None)]
        report = checker.run([{"A": "1", "B": "b", "Q": 1, "C": "x", "D": "12"}], checks)
        assert [c.name for c in report.checks] == [
            "required", "exactDuplicate", "fuzzyDuplicate", "referentialIntegrity", "format", "range",
        ]
        assert report.status == "passed"
