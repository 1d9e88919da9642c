"""System metadata, interfaces, jobs and security."""

from typing import Any, Dict, List

from ..base import ExpectedTable, ExtractorRun, Subject, TableExtractorSpec
from ...models.results import ExtractorCategory

MOCK_SYSTEM = {
    "systemId": "ECP",
    "release": "750",
    "client": "100",
    "database": "ORACLE",
    "unicode": True,
}


class SystemInfoExtractor(TableExtractorSpec):
    extractor_id = "SYSTEM_INFO"
    name = "System Information"
    module = "BASIS"
    category = ExtractorCategory.METADATA
    expected_tables = (
        ExpectedTable("T000", "Clients", critical=True),
        ExpectedTable("CVERS", "Software component versions", critical=True),
        ExpectedTable("TCURC", "Currency codes"),
    )
    subjects = (
        Subject("clients", "T000", ("MANDT", "MTEXT", "ORT01", "CCCATEGORY")),
        Subject("components", "CVERS", ("COMPONENT", "RELEASE", "EXTRELEASE")),
        Subject("currencies", "TCURC", ("WAERS", "ISOCD"), max_rows=500),
    )

    async def extract_live(self, run: ExtractorRun) -> Dict[str, Any]:
        result = await super().extract_live(run)
        adapter = run.context.adapter
        if adapter is not None:
            result["system"] = await adapter.system_info()
        return result

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "system": dict(MOCK_SYSTEM),
            "clients": [
                {"MANDT": "000", "MTEXT": "SAP AG Konzern", "ORT01": "Walldorf", "CCCATEGORY": "S"},
                {"MANDT": "100", "MTEXT": "Production", "ORT01": "Chicago", "CCCATEGORY": "P"},
            ],
            "components": [
                {"COMPONENT": "SAP_BASIS", "RELEASE": "750", "EXTRELEASE": "0021"},
                {"COMPONENT": "SAP_APPL", "RELEASE": "618", "EXTRELEASE": "0019"},
                {"COMPONENT": "EA-FIN", "RELEASE": "618", "EXTRELEASE": "0019"},
            ],
            "currencies": [{"WAERS": c, "ISOCD": c} for c in ("USD", "EUR", "GBP", "JPY")],
        }


class DataDictionaryExtractor(TableExtractorSpec):
    extractor_id = "DATA_DICTIONARY"
    name = "Data Dictionary"
    module = "BASIS"
    category = ExtractorCategory.METADATA
    expected_tables = (
        ExpectedTable("DD02L", "SAP tables", critical=True),
        ExpectedTable("DD02T", "Table texts", critical=True),
        ExpectedTable("DD03L", "Table fields", critical=True),
        ExpectedTable("DD04L", "Data elements"),
        ExpectedTable("DD05S", "Foreign keys"),
        ExpectedTable("DD09L", "Technical settings"),
    )
    subjects = (
        Subject("tables", "DD02L", ("TABNAME", "TABCLASS", "CONTFLAG"), filter="AS4LOCAL = 'A'"),
        Subject("tableTexts", "DD02T", ("TABNAME", "DDTEXT"), filter="DDLANGUAGE = 'E'"),
        Subject("fields", "DD03L", ("TABNAME", "FIELDNAME", "POSITION", "KEYFLAG", "ROLLNAME"), max_rows=50000),
        Subject("dataElements", "DD04L", ("ROLLNAME", "DOMNAME"), max_rows=50000),
        Subject("foreignKeys", "DD05S", ("TABNAME", "FIELDNAME", "CHECKTABLE")),
        Subject("technicalSettings", "DD09L", ("TABNAME", "TABART", "TABKAT")),
    )

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        tables = ["T001", "BKPF", "BSEG", "KNA1", "LFA1", "MARA", "EKKO", "VBAK", "ZSALES_EXT"]
        return {
            "tables": [
                {"TABNAME": t, "TABCLASS": "TRANSP", "CONTFLAG": "C" if t == "T001" else "A"} for t in tables
            ],
            "tableTexts": [{"TABNAME": t, "DDTEXT": f"{t} table"} for t in tables],
            "fields": [
                {"TABNAME": "T001", "FIELDNAME": "BUKRS", "POSITION": "0002", "KEYFLAG": "X", "ROLLNAME": "BUKRS"},
                {"TABNAME": "T001", "FIELDNAME": "BUTXT", "POSITION": "0003", "KEYFLAG": "", "ROLLNAME": "BUTXT"},
                {"TABNAME": "KNA1", "FIELDNAME": "KUNNR", "POSITION": "0002", "KEYFLAG": "X", "ROLLNAME": "KUNNR"},
            ],
            "dataElements": [{"ROLLNAME": "BUKRS", "DOMNAME": "BUKRS"}, {"ROLLNAME": "KUNNR", "DOMNAME": "KUNNR"}],
            "foreignKeys": [{"TABNAME": "KNB1", "FIELDNAME": "BUKRS", "CHECKTABLE": "T001"}],
            "technicalSettings": [{"TABNAME": t, "TABART": "APPL1", "TABKAT": "4"} for t in tables[:3]],
            "customTables": [t for t in tables if t.startswith("Z")],
        }


class RfcDestinationExtractor(TableExtractorSpec):
    extractor_id = "BASIS_RFC"
    name = "RFC Destinations"
    module = "BASIS"
    category = ExtractorCategory.INTERFACE
    expected_tables = (
        ExpectedTable("RFCDES", "RFC destinations", critical=True),
        ExpectedTable("RFCSYSACL", "Trusted/trusting systems"),
        ExpectedTable("TBDLS", "Logical systems", critical=True),
    )
    subjects = (
        Subject("destinations", "RFCDES", ("RFCDEST", "RFCTYPE", "RFCOPTIONS")),
        Subject("trustedSystems", "RFCSYSACL", ("RFCSYSID", "RFCTRUSTSY")),
        Subject("logicalSystems", "TBDLS", ("LOGSYS",)),
    )
    primary_subject = "destinations"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "destinations": [
                {"RFCDEST": "BW_PROD", "RFCTYPE": "3", "RFCOPTIONS": "H=bwhost,S=00"},
                {"RFCDEST": "CRM_PROD", "RFCTYPE": "3", "RFCOPTIONS": "H=crmhost,S=10"},
                {"RFCDEST": "EDI_GATEWAY", "RFCTYPE": "T", "RFCOPTIONS": "N=edi_gw"},
            ],
            "trustedSystems": [{"RFCSYSID": "BWP", "RFCTRUSTSY": "ECP"}],
            "logicalSystems": [{"LOGSYS": s} for s in ("ECPCLNT100", "BWPCLNT100", "CRPCLNT100")],
        }


class IdocExtractor(TableExtractorSpec):
    extractor_id = "BASIS_IDOC"
    name = "IDoc Configuration"
    module = "BASIS"
    category = ExtractorCategory.INTERFACE
    expected_tables = (
        ExpectedTable("EDP13", "IDoc outbound partner/message", critical=True),
        ExpectedTable("EDP21", "IDoc inbound partner/message", critical=True),
        ExpectedTable("EDPP1", "Partner profiles"),
        ExpectedTable("EDIDC", "IDoc control records"),
    )
    subjects = (
        Subject("outbound", "EDP13", ("RCVPRN", "MESTYP", "IDOCTYP")),
        Subject("inbound", "EDP21", ("SNDPRN", "MESTYP", "EVCODE")),
        Subject("partners", "EDPP1", ("PARNUM", "PARTYP")),
        Subject("recentIdocs", "EDIDC", ("DOCNUM", "MESTYP", "STATUS"), max_rows=1000),
    )
    primary_subject = "recentIdocs"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        statuses = ["53", "53", "53", "51", "03"]
        return {
            "outbound": [
                {"RCVPRN": "VENDOR_EDI", "MESTYP": "ORDERS", "IDOCTYP": "ORDERS05"},
                {"RCVPRN": "BWPCLNT100", "MESTYP": "MATMAS", "IDOCTYP": "MATMAS05"},
            ],
            "inbound": [{"SNDPRN": "CUSTOMER_EDI", "MESTYP": "ORDERS", "EVCODE": "ORDE"}],
            "partners": [{"PARNUM": "VENDOR_EDI", "PARTYP": "LI"}, {"PARNUM": "CUSTOMER_EDI", "PARTYP": "KU"}],
            "recentIdocs": [
                {"DOCNUM": str(1000000 + i), "MESTYP": "ORDERS", "STATUS": run.rng.choice(statuses)} for i in range(8)
            ],
        }


class BatchJobExtractor(TableExtractorSpec):
    extractor_id = "BASIS_BATCH_JOBS"
    name = "Batch Jobs"
    module = "BASIS"
    category = ExtractorCategory.PROCESS
    expected_tables = (
        ExpectedTable("TBTCO", "Job status overview", critical=True),
        ExpectedTable("TBTCP", "Job step overview"),
    )
    subjects = (
        Subject("jobs", "TBTCO", ("JOBNAME", "JOBCOUNT", "STATUS", "PERIODIC"), max_rows=5000),
        Subject("steps", "TBTCP", ("JOBNAME", "STEPCOUNT", "PROGNAME"), max_rows=5000),
    )
    primary_subject = "jobs"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        jobs = [
            ("SAP_REORG_JOBS", "RSBTCDEL2"),
            ("Z_NIGHTLY_BILLING", "ZSD_BILLING_RUN"),
            ("Z_MRP_RUN", "RMMRP000"),
            ("SAP_COLLECTOR_FOR_PERFMONITOR", "RSCOLL00"),
        ]
        return {
            "jobs": [
                {"JOBNAME": name, "JOBCOUNT": f"{i:08d}", "STATUS": "F", "PERIODIC": "X"} for i, (name, _) in enumerate(jobs)
            ],
            "steps": [{"JOBNAME": name, "STEPCOUNT": "1", "PROGNAME": prog} for name, prog in jobs],
        }


class SecurityExtractor(TableExtractorSpec):
    extractor_id = "SECURITY_USERS"
    name = "Users and Roles"
    module = "BASIS"
    category = ExtractorCategory.METADATA
    expected_tables = (
        ExpectedTable("USR02", "User logon data", critical=True),
        ExpectedTable("AGR_DEFINE", "Role definitions", critical=True),
        ExpectedTable("AGR_USERS", "Role-to-user assignments", critical=True),
        ExpectedTable("AGR_TCODES", "Role transaction codes"),
    )
    subjects = (
        Subject("users", "USR02", ("BNAME", "USTYP", "GLTGB", "TRDAT")),
        Subject("roles", "AGR_DEFINE", ("AGR_NAME", "PARENT_AGR")),
        Subject("assignments", "AGR_USERS", ("AGR_NAME", "UNAME", "TO_DAT")),
        Subject("roleTransactions", "AGR_TCODES", ("AGR_NAME", "TCODE")),
    )
    primary_subject = "users"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        users = [f"USER{i:03d}" for i in range(1, 7)] + ["RFC_BW", "BATCH_ADM"]
        roles = ["Z_FI_ACCOUNTANT", "Z_MM_BUYER", "Z_SD_CLERK", "SAP_ALL_COPY"]
        return {
            "users": [
                {"BNAME": u, "USTYP": "B" if u.startswith(("RFC", "BATCH")) else "A", "GLTGB": "99991231", "TRDAT": "20240115"}
                for u in users
            ],
            "roles": [{"AGR_NAME": r, "PARENT_AGR": ""} for r in roles],
            "assignments": [
                {"AGR_NAME": roles[i % len(roles)], "UNAME": u, "TO_DAT": "99991231"} for i, u in enumerate(users)
            ],
            "roleTransactions": [
                {"AGR_NAME": "Z_FI_ACCOUNTANT", "TCODE": "FB01"},
                {"AGR_NAME": "Z_MM_BUYER", "TCODE": "ME21N"},
                {"AGR_NAME": "Z_SD_CLERK", "TCODE": "VA01"},
            ],
        }
