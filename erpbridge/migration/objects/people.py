"""SAP ECC HR migration objects."""

from typing import List

from ..field_mapping import FieldMapping
from ..quality import QualityChecks, RangeCheck
from .common import ECCObjectSpec

FIRST_NAMES = [
    "James", "Mary", "Robert", "Patricia", "John", "Jennifer", "Michael", "Linda",
    "David", "Elizabeth", "William", "Barbara", "Richard", "Susan", "Joseph", "Jessica",
    "Thomas", "Sarah", "Christopher", "Karen", "Charles", "Lisa", "Daniel", "Nancy",
    "Matthew", "Betty", "Anthony", "Margaret", "Mark", "Sandra", "Donald", "Ashley",
    "Steven", "Dorothy", "Paul", "Kimberly", "Andrew", "Emily", "Joshua", "Donna",
]
LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson", "Thomas",
    "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez", "Thompson", "White",
    "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Robinson", "Walker", "Young",
    "Allen", "King", "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores",
]
# org unit, job title, group, cost center
DEPARTMENTS = [
    ("50001000", "Software Engineer", "IT", "CC1001"),
    ("50002000", "Financial Analyst", "FIN", "CC2001"),
    ("50003000", "Sales Representative", "SALES", "CC3001"),
    ("50004000", "HR Specialist", "HR", "CC4001"),
    ("50005000", "Production Operator", "PROD", "CC5001"),
    ("50006000", "Quality Inspector", "QA", "CC6001"),
    ("50007000", "Logistics Coordinator", "LOG", "CC7001"),
    ("50008000", "Marketing Manager", "MKT", "CC8001"),
]
# city, region, postal code, street
LOCATIONS = [
    ("New York", "NY", "10001", "Main St"),
    ("Chicago", "IL", "60601", "Oak Ave"),
    ("Los Angeles", "CA", "90001", "Elm Dr"),
    ("Houston", "TX", "77001", "Park Blvd"),
    ("Phoenix", "AZ", "85001", "Cedar Ln"),
    ("Philadelphia", "PA", "19101", "Pine Rd"),
    ("San Antonio", "TX", "78201", "Maple Way"),
    ("San Diego", "CA", "92101", "Lake Dr"),
]


class EmployeeMaster(ECCObjectSpec):
    """Personnel master data from infotypes 0000, 0001, 0002, 0006 and 0008."""

    object_id = "EMPLOYEE_MASTER"
    name = "Employee Master"
    source_table = "PA0001"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Organizational assignment (IT0001)
            FieldMapping("PERNR", "PersonnelNumber", convert="padLeft8"),
            FieldMapping("BEGDA", "StartDate", convert="toDate"),
            FieldMapping("ENDDA", "EndDate", convert="toDate"),
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("WERKS", "PersonnelArea"),
            FieldMapping("BTRTL", "PersonnelSubArea"),
            FieldMapping("PERSG", "EmployeeGroup"),
            FieldMapping("PERSK", "EmployeeSubGroup"),
            FieldMapping("PLANS", "Position"),
            FieldMapping("STELL", "JobTitle"),
            FieldMapping("ORGEH", "OrgUnit"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            # Personal data (IT0002)
            FieldMapping("NACHN", "LastName"),
            FieldMapping("VORNA", "FirstName"),
            FieldMapping("MIDNM", "MiddleName"),
            FieldMapping("GESCH", "Gender", value_map={"1": "M", "2": "F"}),
            FieldMapping("GBDAT", "DateOfBirth", convert="toDate"),
            FieldMapping("NATIO", "Nationality"),
            FieldMapping("SPRSL", "Language", convert="toUpperCase"),
            FieldMapping("FAMST", "MaritalStatus"),
            # Communication (IT0105) and address (IT0006)
            FieldMapping("EMAIL", "EmailAddress", convert="toLowerCase"),
            FieldMapping("USRID", "UserID"),
            FieldMapping("TELNR", "PhoneNumber"),
            FieldMapping("STRAS", "Street"),
            FieldMapping("ORT01", "City"),
            FieldMapping("PSTLZ", "PostalCode"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            FieldMapping("STATE", "Region"),
            # Basic pay (IT0008)
            FieldMapping("ABKRS", "PayrollArea"),
            FieldMapping("TRFAR", "PayScaleType"),
            FieldMapping("TRFGB", "PayScaleArea"),
            FieldMapping("TRFGR", "PayScaleGroup"),
            FieldMapping("TRFST", "PayScaleLevel"),
            FieldMapping("WAERS", "PayCurrency"),
            FieldMapping("BET01", "PayAmount", convert="toDecimal"),
            FieldMapping("LGA01", "WageType"),
            # Actions (IT0000)
            FieldMapping("STAT2", "EmploymentStatus"),
            FieldMapping("MASSN", "ActionType"),
            FieldMapping("MASSG", "ActionReason"),
            FieldMapping("EINDT", "HireDate", convert="toDate"),
            FieldMapping("AUSTD", "TerminationDate", convert="toDate"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["PersonnelNumber", "LastName", "FirstName", "CompanyCode"],
            exact_duplicate=["PersonnelNumber"],
            ranges=[RangeCheck("PayAmount", 0, 1000000)],
        )

    def extract_mock(self, rng):
        records = []
        for i in range(1, 41):
            org_unit, title, group, cost_center = DEPARTMENTS[(i - 1) % 8]
            city, region, postal_code, street = LOCATIONS[(i - 1) % 8]
            company = "1000" if i <= 25 else "2000"
            gender = "1" if i % 2 == 1 else "2"
            first, last = FIRST_NAMES[i - 1], LAST_NAMES[i - 1]
            hire_year = 2005 + i % 18
            terminated = i % 20 == 0
            records.append({
                "PERNR": str(10000000 + i),
                "BEGDA": f"{hire_year}0101",
                "ENDDA": f"{hire_year + 5}0630" if terminated else "99991231",
                "BUKRS": company,
                "WERKS": company,
                "BTRTL": f"{company[-2:]}01",
                "PERSG": "1" if i <= 30 else "2",
                "PERSK": "U1" if group == "PROD" else "S1",
                "PLANS": f"POS{org_unit[-4:]}",
                "STELL": title,
                "ORGEH": org_unit,
                "KOSTL": cost_center,
                "NACHN": last,
                "VORNA": first,
                "MIDNM": "A" if i % 5 == 0 else "",
                "GESCH": gender,
                "GBDAT": f"{1960 + i % 35}{i % 12 + 1:02d}15",
                "NATIO": "US",
                "SPRSL": "en",
                "FAMST": str(i % 3),
                "EMAIL": f"{first}.{last}@company.com",
                "USRID": f"{first[0]}{last}".upper()[:12],
                "TELNR": f"555-{1000 + i}",
                "STRAS": f"{100 + i} {street}",
                "ORT01": city,
                "PSTLZ": postal_code,
                "LAND1": "us",
                "STATE": region,
                "ABKRS": "B1" if company == "1000" else "B2",
                "TRFAR": "01",
                "TRFGB": "01" if company == "1000" else "02",
                "TRFGR": f"T{(i - 1) % 6 + 1}",
                "TRFST": f"{(i - 1) % 5 + 1:02d}",
                "WAERS": "USD",
                "BET01": str(40000 + i * 1500 + (i - 1) % 6 * 5000),
                "LGA01": "1000",
                "STAT2": "0" if terminated else "3",
                "MASSN": "Z2" if terminated else "Z1",
                "MASSG": "03" if terminated else "01",
                "EINDT": f"{hire_year}0101",
                "AUSTD": f"{hire_year + 5}0630" if terminated else "",
            })
        return records


PEOPLE_OBJECTS = (EmployeeMaster,)
