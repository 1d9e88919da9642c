"""Human resources extractors."""

from typing import Any, Dict, List

from ..base import ExpectedTable, ExtractorRun, Subject, TableExtractorSpec
from ...models.results import ExtractorCategory


class EmployeeExtractor(TableExtractorSpec):
    extractor_id = "HR_EMPLOYEES"
    name = "Employee Master"
    module = "HR"
    category = ExtractorCategory.MASTERDATA
    expected_tables = (
        ExpectedTable("PA0001", "Organizational assignment", critical=True),
        ExpectedTable("PA0002", "Personal data", critical=True),
        ExpectedTable("PA0008", "Basic pay", critical=True),
        ExpectedTable("PA0006", "Addresses"),
    )
    subjects = (
        Subject("assignments", "PA0001", ("PERNR", "BUKRS", "WERKS", "PERSG", "ORGEH", "PLANS"), max_rows=50000),
        Subject("personalData", "PA0002", ("PERNR", "NACHN", "VORNA", "GBDAT"), max_rows=50000),
        Subject("basicPay", "PA0008", ("PERNR", "TRFGR", "BET01"), max_rows=50000),
        Subject("addresses", "PA0006", ("PERNR", "ORT01", "LAND1"), max_rows=50000),
    )
    primary_subject = "personalData"

    def fixtures(self, run: ExtractorRun) -> Dict[str, Any]:
        people = [("00001001", "Miller", "Dana"), ("00001002", "Schmidt", "Jonas"), ("00001003", "Okafor", "Ada")]
        return {
            "assignments": [
                {"PERNR": p, "BUKRS": "1000", "WERKS": "1000", "PERSG": "1", "ORGEH": "50000010", "PLANS": f"5000010{i}"}
                for i, (p, _, _) in enumerate(people)
            ],
            "personalData": [
                {"PERNR": p, "NACHN": last, "VORNA": first, "GBDAT": f"19{run.rng.randint(60, 99)}0101"} for p, last, first in people
            ],
            "basicPay": [{"PERNR": p, "TRFGR": "E10", "BET01": round(run.rng.uniform(3500, 9000), 2)} for p, _, _ in people],
            "addresses": [{"PERNR": p, "ORT01": "Chicago", "LAND1": "US"} for p, _, _ in people],
            "count": run.rng.randint(800, 12000),
        }


class OrgStructureExtractor(TableExtractorSpec):
    extractor_id = "HR_ORG_STRUCTURE"
    name = "Organizational Structure"
    module = "HR"
    category = ExtractorCategory.CONFIG
    expected_tables = (
        ExpectedTable("HRP1000", "Objects", critical=True),
        ExpectedTable("HRP1001", "Relationships", critical=True),
        ExpectedTable("T500P", "Personnel areas"),
        ExpectedTable("T001P", "Personnel subareas"),
    )
    subjects = (
        Subject("objects", "HRP1000", ("PLVAR", "OTYPE", "OBJID", "STEXT"), max_rows=50000),
        Subject("relationships", "HRP1001", ("OTYPE", "OBJID", "RSIGN", "RELAT", "SOBID"), max_rows=50000),
        Subject("personnelAreas", "T500P", ("PERSA", "BUKRS", "NAME1")),
        Subject("personnelSubareas", "T001P", ("WERKS", "BTRTL", "BTEXT")),
    )
    primary_subject = "objects"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "objects": [
                {"PLVAR": "01", "OTYPE": "O", "OBJID": "50000001", "STEXT": "Executive Board"},
                {"PLVAR": "01", "OTYPE": "O", "OBJID": "50000010", "STEXT": "Operations"},
                {"PLVAR": "01", "OTYPE": "S", "OBJID": "50000100", "STEXT": "Plant Manager"},
            ],
            "relationships": [
                {"OTYPE": "O", "OBJID": "50000010", "RSIGN": "A", "RELAT": "002", "SOBID": "50000001"},
                {"OTYPE": "S", "OBJID": "50000100", "RSIGN": "A", "RELAT": "003", "SOBID": "50000010"},
            ],
            "personnelAreas": [{"PERSA": "1000", "BUKRS": "1000", "NAME1": "Chicago"}],
            "personnelSubareas": [{"WERKS": "1000", "BTRTL": "0001", "BTEXT": "Salaried"}],
        }
