"""
Technical migration objects: BW extractors, interfaces and background jobs.

These objects carry an assessment rather than business data. Each mock
row is classified with the S/4HANA migration action that applies to it.
"""

import re
from typing import Any, Dict, List

from ..field_mapping import FieldMapping
from ..quality import QualityChecks, RangeCheck
from .common import ECCObjectSpec

# (pattern, action, replacement prefix or None, impact, notes)
BW_EXTRACTOR_RULES = [
    (r"^0FI_(GL|AR|AP|AA)_", "replace-with-cds", ("^0FI_", "I_"), "HIGH",
     "Classic FI extractor; source tables (BSEG/BKPF/FAGLFLEXT) replaced by ACDOCA"),
    (r"^0CO_(OM|PC|PA)_", "replace-with-cds", ("^0CO_", "I_CO_"), "HIGH",
     "CO extractor; COSS/COSP replaced by ACDOCA"),
    (r"^2LIS_", "update", None, "MEDIUM",
     "Logistics extractor; review setup tables and delta handling"),
    (r"^0FIAA_|^0AM_", "replace-with-cds", ("^0(FIAA|AM)_", "I_AA_"), "HIGH",
     "Asset extractor; ANLP/ANLC removed, use ACDOCA-based CDS views"),
    (r"^Z", "update", None, "HIGH",
     "Custom extractor; validate source tables against S/4HANA data model"),
    (r"^0HR_", "update", None, "MEDIUM",
     "HR extractor; validate infotype table changes"),
]
IMPACT_PRIORITY = {"HIGH": "P1", "MEDIUM": "P2", "LOW": "P3"}


def classify_bw_extractor(data_source: str) -> Dict[str, str]:
    """Return the migration action, replacement, impact and notes for a DataSource."""
    for pattern, action, replacement, impact, notes in BW_EXTRACTOR_RULES:
        if re.search(pattern, data_source):
            return {
                "action": action,
                "replacement": re.sub(replacement[0], replacement[1], data_source) if replacement else "",
                "impact": impact,
                "notes": notes,
            }
    return {"action": "keep", "replacement": "", "impact": "LOW", "notes": "Standard extractor; no known S/4HANA impact"}


# data source, description, component, type, extraction, table, delta, records per load, minutes, custom module
BW_DATASOURCES = [
    ("0FI_GL_14", "GL Line Items", "FI-GL", "TRAN", "FULL_DELTA", "FAGLFLEXT", "ABR", 150000, 45, ""),
    ("0FI_AR_4", "AR Line Items", "FI-AR", "TRAN", "DELTA", "BSID", "ABR", 80000, 25, ""),
    ("0FI_AP_4", "AP Line Items", "FI-AP", "TRAN", "DELTA", "BSIK", "ABR", 60000, 20, ""),
    ("0FI_AA_11", "Asset Transactions", "FI-AA", "TRAN", "DELTA", "ANLP", "ABR", 5000, 10, ""),
    ("0CO_OM_CCA_9", "Cost Center Actuals", "CO-OM", "TRAN", "DELTA", "COSS", "ABR", 30000, 15, ""),
    ("0CO_PC_ACT_05", "Product Cost Actuals", "CO-PC", "TRAN", "DELTA", "COSP", "ABR", 20000, 30, ""),
    ("2LIS_02_ITM", "Purchasing Items", "MM", "TRAN", "DELTA", "EKPO", "ABR", 50000, 15, ""),
    ("2LIS_11_VAHDR", "Sales Order Header", "SD", "TRAN", "DELTA", "VBAK", "ABR", 40000, 12, ""),
    ("2LIS_12_VCITM", "Billing Items", "SD", "TRAN", "DELTA", "VBRP", "ABR", 35000, 10, ""),
    ("2LIS_03_BF", "Goods Movements", "MM", "TRAN", "DELTA", "MSEG", "AIMD", 200000, 60, ""),
    ("ZCUSTOM_SALES_RPT", "Custom Sales Report", "SD", "TRAN", "FULL", "VBAK/VBAP", "FULL", 10000, 8, "Z_EXTRACT_SALES_RPT"),
    ("ZCUSTOM_INVENTORY", "Custom Inventory Extract", "MM", "MAST", "FULL", "MARD", "FULL", 25000, 15, "Z_EXTRACT_INVENTORY"),
    ("ZCUSTOM_HR_HEADCOUNT", "Custom HR Headcount", "HR", "MAST", "FULL", "PA0001", "FULL", 3000, 5, "Z_HR_HEADCOUNT"),
    ("0MATERIAL_ATTR", "Material Master Attributes", "MM", "MAST", "FULL", "MARA", "ABR", 50000, 20, ""),
    ("0CUSTOMER_ATTR", "Customer Master Attributes", "SD", "MAST", "FULL", "KNA1", "ABR", 20000, 8, ""),
    ("0HR_PA_0", "HR Master Data", "HR", "MAST", "FULL", "PA0000", "ABR", 5000, 10, ""),
]


class BWExtractor(ECCObjectSpec):
    object_id = "BW_EXTRACTOR"
    name = "BW Extractor"
    source_system = "BW"
    source_table = "ROOSOURCE"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("OLTPSOURCE", "DataSource"),
            FieldMapping("TXTLG", "DataSourceDescription"),
            FieldMapping("APPLNM", "ApplicationComponent"),
            FieldMapping("TYPE", "DataSourceType"),
            FieldMapping("EXTRACT_TYPE", "ExtractionType"),
            FieldMapping("EXTRACTOR", "SourceTable"),
            FieldMapping("DELTA", "DeltaType"),
            FieldMapping("TARGET_OBJ", "TargetObject"),
            FieldMapping("LAST_EXEC", "LastExecution", convert="toDate"),
            FieldMapping("AVG_RECORDS", "AvgRecordsPerLoad", convert="toInteger"),
            FieldMapping("AVG_DURATION", "AvgDurationMin", convert="toDecimal"),
            FieldMapping("MIGRATION_ACTION", "MigrationAction"),
            FieldMapping("REPLACEMENT_DS", "ReplacementDataSource"),
            FieldMapping("IMPACT", "ImpactLevel"),
            FieldMapping("NOTES", "Notes"),
            FieldMapping("IS_CUSTOM", "IsCustomExtractor", convert="toBoolean"),
            FieldMapping("CUSTOM_FM", "CustomFunctionModule"),
            FieldMapping("PRIORITY", "MigrationPriority"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["DataSource", "ApplicationComponent", "MigrationAction"],
            exact_duplicate=["DataSource"],
        )

    def extract_mock(self, rng):
        records = []
        for (source, text, component, ds_type, extraction, table, delta,
             volume, minutes, custom_module) in BW_DATASOURCES:
            classification = classify_bw_extractor(source)
            records.append({
                "OLTPSOURCE": source,
                "TXTLG": text,
                "APPLNM": component,
                "TYPE": ds_type,
                "EXTRACT_TYPE": extraction,
                "EXTRACTOR": table,
                "DELTA": delta,
                "TARGET_OBJ": f"ADSO_{component.replace('-', '_')}",
                "LAST_EXEC": "20240601",
                "AVG_RECORDS": str(volume),
                "AVG_DURATION": str(minutes),
                "MIGRATION_ACTION": classification["action"],
                "REPLACEMENT_DS": classification["replacement"],
                "IMPACT": classification["impact"],
                "NOTES": classification["notes"],
                "IS_CUSTOM": "X" if custom_module else "",
                "CUSTOM_FM": custom_module,
                "PRIORITY": IMPACT_PRIORITY[classification["impact"]],
            })
        return records


def classify_rfc_destination(destination: str, rfc_type: str) -> str:
    """Migration strategy for an RFC destination (SM59)."""
    if re.search(r"APO|CRM|SRM", destination, re.I):
        return "decommission"
    if re.search(r"PI|PO_", destination, re.I):
        return "replace-with-cpi"
    if re.search(r"SOLMAN", destination, re.I):
        return "replace-with-cloud-alm"
    if re.search(r"BW", destination, re.I):
        return "review"
    if re.search(r"SF_|ARIBA|CONCUR|SALESFORCE", destination, re.I):
        return "route-via-cpi"
    return {"T": "replace-with-cpi", "H": "route-via-cpi", "3": "keep-redirect"}.get(rfc_type, "review")


RFC_DESTINATIONS = [
    ("SAPFTP", "T", "FTP transfer", "ftp.acme.com", "active"),
    ("ERP_TO_CRM", "3", "CRM integration", "crm.acme.com", "active"),
    ("ERP_TO_BW", "3", "BW extraction", "bw.acme.com", "active"),
    ("ERP_TO_PI", "3", "PI middleware", "pi.acme.com", "active"),
    ("ERP_TO_SRM", "3", "SRM procurement", "srm.acme.com", "active"),
    ("ERP_TO_PORTAL", "H", "Enterprise Portal", "portal.acme.com", "active"),
    ("BANK_SFTP", "T", "Bank file transfer", "sftp.bank.com", "active"),
    ("EDI_PROVIDER", "H", "EDI VAN provider", "edi.provider.com", "active"),
    ("TAX_ENGINE", "H", "Tax calculation", "tax.vertex.com", "active"),
    ("ERP_TO_GTS", "3", "GTS compliance", "gts.acme.com", "active"),
    ("ERP_TO_EWM", "3", "Extended WM", "ewm.acme.com", "active"),
    ("ARIBA_NETWORK", "H", "Ariba Network", "api.ariba.com", "active"),
    ("SF_EC", "H", "SuccessFactors EC", "api.successfactors.com", "active"),
    ("CONCUR_API", "H", "SAP Concur", "api.concursolutions.com", "active"),
    ("LEGACY_MAINFRAME", "3", "Mainframe legacy", "mainframe.acme.com", "inactive"),
    ("ERP_TO_MES", "3", "MES shopfloor", "mes.acme.com", "active"),
    ("ERP_TO_SOLMAN", "3", "Solution Manager", "solman.acme.com", "active"),
    ("SALESFORCE_API", "H", "Salesforce CRM", "api.salesforce.com", "active"),
    ("ERP_TO_APO", "3", "APO planning", "apo.acme.com", "active"),
    ("PRINT_SERVER", "T", "Print services", "print.acme.com", "active"),
]


class RFCDestination(ECCObjectSpec):
    object_id = "RFC_DESTINATION"
    name = "RFC Destination"
    source_table = "RFCDES"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("RFCDEST", "Destination"),
            FieldMapping("RFCTYPE", "RFCType"),
            FieldMapping("RFCDOC1", "Description"),
            FieldMapping("RFCHOST", "TargetHost"),
            FieldMapping("RFCSYSID", "SystemID"),
            FieldMapping("RFCCLIENT", "Client"),
            FieldMapping("RFCUSER", "LogonUser"),
            FieldMapping("RFCAUTH", "AuthType"),
            FieldMapping("RFCSNC", "SNCEnabled", convert="toBoolean"),
            FieldMapping("RFCSERVICE", "Port"),
            FieldMapping("RFCGWHOST", "GatewayHost"),
            FieldMapping("RFCGWSERV", "GatewayService"),
            FieldMapping("RFCSTATUS", "Status"),
            FieldMapping("MIGRATION_STRATEGY", "MigrationStrategy"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["Destination", "RFCType"],
            exact_duplicate=["Destination"],
        )

    def extract_mock(self, rng):
        records = []
        for destination, rfc_type, text, host, status in RFC_DESTINATIONS:
            abap = rfc_type == "3"
            records.append({
                "RFCDEST": destination,
                "RFCTYPE": rfc_type,
                "RFCDOC1": text,
                "RFCHOST": host,
                "RFCSYSID": "S4H" if abap else "",
                "RFCCLIENT": "100" if abap else "",
                "RFCUSER": "RFC_USER",
                "RFCAUTH": "BASIC" if rfc_type == "H" else "DIALOG",
                "RFCSNC": "X" if abap else "",
                "RFCSERVICE": {"H": "443", "T": "22"}.get(rfc_type, "3300"),
                "RFCGWHOST": host if abap else "",
                "RFCGWSERV": "sapgw00" if abap else "",
                "RFCSTATUS": status,
                "MIGRATION_STRATEGY": classify_rfc_destination(destination, rfc_type),
            })
        return records


def classify_idoc_flow(message_type: str, partner: str) -> Dict[str, str]:
    """Migration strategy, impact and S/4HANA replacement for an IDoc flow."""
    if re.match(r"DEBMAS|CREMAS", message_type):
        return {"strategy": "replace", "impact": "high", "replacement": "BUMAS (Business Partner IDoc)"}
    if re.match(r"WMMBID|WMTOCO", message_type):
        return {"strategy": "replace", "impact": "high", "replacement": "Embedded EWM or decentralized EWM APIs"}
    if message_type.startswith("MATMAS"):
        return {"strategy": "update-segments", "impact": "medium", "replacement": "MATMAS with 40-char MATNR segments"}
    if re.search(r"SF_EC|ARIBA|CONCUR", partner):
        return {"strategy": "route-via-cpi", "impact": "medium", "replacement": "CPI standard content package"}
    if "BW" in partner:
        return {"strategy": "review", "impact": "medium", "replacement": "CDS-based extraction or embedded analytics"}
    if "APO" in partner:
        return {"strategy": "decommission", "impact": "high", "replacement": "Embedded PP/DS"}
    return {"strategy": "keep-review", "impact": "low", "replacement": "Verify segment compatibility"}


# message type, basic type, direction (1 inbound, 2 outbound), partner, description, daily volume, segments
IDOC_FLOWS = [
    ("ORDERS", "ORDERS05", "1", "EDI_PROVIDER", "Purchase order from customer", 1200, 45),
    ("ORDRSP", "ORDERS05", "2", "EDI_PROVIDER", "Order confirmation", 1100, 45),
    ("DESADV", "DESADV01", "2", "EDI_PROVIDER", "Advance shipping notice", 800, 30),
    ("INVOIC", "INVOIC02", "2", "EDI_PROVIDER", "Invoice outbound", 950, 50),
    ("INVOIC", "INVOIC02", "1", "EDI_PROVIDER", "Vendor invoice", 600, 50),
    ("MATMAS", "MATMAS05", "2", "ERP_TO_BW", "Material master dist", 350, 65),
    ("DEBMAS", "DEBMAS07", "2", "ERP_TO_CRM", "Customer master dist", 200, 40),
    ("CREMAS", "CREMAS05", "2", "ERP_TO_SRM", "Vendor master dist", 150, 35),
    ("WMMBID", "WMMBID02", "1", "ERP_TO_EWM", "WM goods movement", 2500, 20),
    ("HRMD_A", "HRMD_A07", "2", "SF_EC", "HR master data", 100, 80),
    ("PORDCR", "PORDCR05", "2", "ARIBA_NETWORK", "PO creation", 400, 35),
    ("SHPMNT", "SHPMNT06", "2", "ERP_TO_TM", "Shipment", 300, 25),
    ("LOIPRO", "LOIPRO01", "1", "ERP_TO_MES", "Production order", 500, 30),
    ("FIDCCP", "FIDCCP01", "2", "BANK_SFTP", "Payment file", 60, 15),
    ("FINSTA", "FINSTA01", "1", "BANK_SFTP", "Bank statement", 30, 20),
    ("ACC_DOCUMENT", "ACC_DOCUMENT04", "2", "ERP_TO_BW", "Accounting doc", 5000, 55),
    ("DELVRY", "DELVRY03", "2", "ERP_TO_EWM", "Delivery", 700, 35),
    ("WMTOCO", "WMTOCO01", "2", "ERP_TO_EWM", "WM transfer order", 1800, 18),
    ("ARTMAS", "ARTMAS09", "2", "ERP_TO_APO", "Article master", 160, 70),
    ("TRVREQ", "TRVREQ01", "2", "CONCUR_API", "Travel request", 40, 25),
    ("DELFOR", "DELFOR01", "1", "EDI_PROVIDER", "Delivery forecast", 220, 28),
    ("REMADV", "REMADV01", "1", "EDI_PROVIDER", "Remittance advice", 80, 22),
    ("GSVERF", "GSVERF02", "2", "ERP_TO_GTS", "GTS compliance", 120, 30),
    ("CIFMAT", "CIFMAT01", "2", "ERP_TO_APO", "CIF material", 140, 40),
    ("GLMAST", "GLMAST02", "2", "ERP_TO_BW", "GL account master", 30, 15),
]


class IDocConfig(ECCObjectSpec):
    object_id = "IDOC_CONFIG"
    name = "IDoc Configuration"
    source_table = "EDP13"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("MESTYP", "MessageType"),
            FieldMapping("IDOCTYP", "IDocType"),
            FieldMapping("CIMTYP", "ExtensionType"),
            FieldMapping("DIRECT", "Direction", value_map={"1": "INBOUND", "2": "OUTBOUND"}),
            FieldMapping("RCVPRN", "PartnerNumber"),
            FieldMapping("RCVPRT", "PartnerType"),
            FieldMapping("SNDPRN", "SenderPartner"),
            FieldMapping("RCVPOR", "Port"),
            FieldMapping("RFCDEST", "RFCDestination"),
            FieldMapping("OUTMOD", "OutputMode"),
            FieldMapping("PCKSIZ", "PacketSize", convert="toInteger"),
            FieldMapping("VOLUME", "DailyVolume", convert="toInteger"),
            FieldMapping("DESCRIPTION", "Description"),
            FieldMapping("LASTRUN", "LastProcessedDate", convert="toDate"),
            FieldMapping("SEGNUM", "SegmentCount", convert="toInteger"),
            FieldMapping("MIGRATION_STRATEGY", "MigrationStrategy"),
            FieldMapping("IMPACT", "ImpactLevel", convert="toUpperCase"),
            FieldMapping("S4_REPLACEMENT", "S4HANAReplacement"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["MessageType", "IDocType", "Direction"],
            exact_duplicate=["MessageType", "IDocType", "Direction", "PartnerNumber"],
            ranges=[RangeCheck("DailyVolume", 0, 1000000)],
        )

    def extract_mock(self, rng):
        records = []
        for message_type, idoc_type, direction, partner, text, volume, segments in IDOC_FLOWS:
            outbound = direction == "2"
            classification = classify_idoc_flow(message_type, partner)
            records.append({
                "MESTYP": message_type,
                "IDOCTYP": idoc_type,
                "CIMTYP": "",
                "DIRECT": direction,
                "RCVPRN": partner if outbound else "SELF",
                "RCVPRT": "LS",
                "SNDPRN": "SELF" if outbound else partner,
                "RCVPOR": f"PORT_{partner}",
                "RFCDEST": partner,
                "OUTMOD": "4" if outbound else "",
                "PCKSIZ": "50",
                "VOLUME": str(volume),
                "DESCRIPTION": text,
                "LASTRUN": "20240115",
                "SEGNUM": str(segments),
                "MIGRATION_STRATEGY": classification["strategy"],
                "IMPACT": classification["impact"],
                "S4_REPLACEMENT": classification["replacement"],
            })
        return records


SERVICE_EFFORT = {
    "keep": "none",
    "keep-enhance": "low",
    "soap-to-odata": "medium",
    "migrate-to-rap": "medium",
    "cpi-route": "high",
}
# name, type, direction, binding class, namespace, monthly calls, migration path, replacement
WEB_SERVICES = [
    ("ZSOAP_CUSTOMER_SYNC", "SOAP", "provider", "ZCL_WS_CUSTOMER", "urn:sap-com:document:sap:rfc:functions", 5000, "soap-to-odata", "API_BUSINESS_PARTNER"),
    ("ZSOAP_VENDOR_SYNC", "SOAP", "provider", "ZCL_WS_VENDOR", "urn:sap-com:document:sap:rfc:functions", 3200, "soap-to-odata", "API_BUSINESS_PARTNER"),
    ("ZSOAP_PO_CREATE", "SOAP", "provider", "ZCL_WS_PO", "urn:sap-com:document:sap:rfc:functions", 2800, "soap-to-odata", "API_PURCHASEORDER_PROCESS_SRV"),
    ("ZSOAP_INVENTORY_INQ", "SOAP", "consumer", "ZCL_WS_INV_PROXY", "http://inv.external.com", 8000, "cpi-route", "Route via CPI"),
    ("ZREST_ORDER_STATUS", "REST", "provider", "ZCL_REST_ORDER", "/sap/zrest/order", 12000, "keep-enhance", "Enhance with RAP"),
    ("ZREST_PAYMENT_POST", "REST", "consumer", "ZCL_REST_PAY", "https://pay.stripe.com/api", 1500, "cpi-route", "Route via CPI"),
    ("ZREST_SHIPMENT_TRACK", "REST", "consumer", "ZCL_REST_SHIP", "https://track.carrier.com/api", 900, "cpi-route", "Route via CPI"),
    ("ZODATA_MATERIAL_SRV", "OData", "provider", "ZCL_ODATA_MAT", "/sap/opu/odata/sap", 15000, "migrate-to-rap", "RAP-based OData v4"),
    ("ZODATA_SALES_SRV", "OData", "provider", "ZCL_ODATA_SALES", "/sap/opu/odata/sap", 9500, "migrate-to-rap", "RAP-based OData v4"),
    ("ZODATA_EMPLOYEE_SRV", "OData", "provider", "ZCL_ODATA_HR", "/sap/opu/odata/sap", 4200, "migrate-to-rap", "RAP-based OData v4"),
    ("API_BUSINESS_PARTNER", "OData", "provider", "CL_BP_ODATA", "/sap/opu/odata/sap", 20000, "keep", "Already S/4HANA native"),
    ("API_MATERIAL_DOCUMENT_SRV", "OData", "provider", "CL_MATDOC_ODATA", "/sap/opu/odata/sap", 7500, "keep", "Already S/4HANA native"),
]


class WebService(ECCObjectSpec):
    object_id = "WEB_SERVICE"
    name = "Web Service"
    source_table = "SRT_CFG_DIR"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("SRVNAME", "ServiceName"),
            FieldMapping("SRVTYPE", "ServiceType"),
            FieldMapping("DIRECTION", "Direction", convert="toUpperCase"),
            FieldMapping("BINDING", "BindingClass"),
            FieldMapping("NAMESPACE", "Namespace"),
            FieldMapping("VERSION", "ServiceVersion"),
            FieldMapping("ENDPOINT", "EndpointURL"),
            FieldMapping("AUTHTYPE", "AuthenticationType"),
            FieldMapping("PACKAGE", "ABAPPackage"),
            FieldMapping("STATUS", "Status"),
            FieldMapping("LASTCALL", "LastCalledDate", convert="toDate"),
            FieldMapping("CALLCOUNT", "MonthlyCallCount", convert="toInteger"),
            FieldMapping("MIGPATH", "MigrationPath"),
            FieldMapping("S4REPLACEMENT", "S4HANAReplacement"),
            FieldMapping("EFFORT", "EstimatedEffort"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ServiceName", "ServiceType"],
            exact_duplicate=["ServiceName", "ServiceVersion"],
        )

    def extract_mock(self, rng):
        records = []
        for name, service_type, direction, binding, namespace, calls, path, replacement in WEB_SERVICES:
            records.append({
                "SRVNAME": name,
                "SRVTYPE": service_type,
                "DIRECTION": direction,
                "BINDING": binding,
                "NAMESPACE": namespace,
                "VERSION": "0001",
                "ENDPOINT": f"/sap/opu/odata/sap/{name}" if service_type == "OData" else f"/sap/bc/srt/wsdl/{name}",
                "AUTHTYPE": "BASIC",
                "PACKAGE": f"Z{service_type.upper()}_PKG",
                "STATUS": "active",
                "LASTCALL": "20240115",
                "CALLCOUNT": str(calls),
                "MIGPATH": path,
                "S4REPLACEMENT": replacement,
                "EFFORT": SERVICE_EFFORT.get(path, "medium"),
            })
        return records


def classify_batch_job(program: str, frequency: str, runtime_minutes: int) -> str:
    """Migration strategy for a background job; SAP standard programs are kept."""
    if not program.startswith("Z"):
        return "keep"
    if runtime_minutes > 120:
        return "review-performance"
    if frequency == "hourly":
        return "convert-to-app-job"
    return "review-compatibility"


# job, frequency, program, average runtime (minutes), job class
BATCH_JOBS = [
    ("Z_FI_MONTHLY_CLOSE", "monthly", "ZREP_FI_MONTHLY", 240, "A"),
    ("Z_MM_PO_RELEASE", "daily", "ZCL_MM_PO_ENHANCE", 15, "B"),
    ("Z_SD_BILLING_RUN", "daily", "ZCL_SD_ORDER_PROC", 45, "B"),
    ("Z_CUSTOMER_SYNC", "hourly", "ZCL_FI_CUSTOMER_AGING", 5, "B"),
    ("Z_VENDOR_EVAL", "weekly", "ZCL_MM_VENDOR_EVAL", 30, "C"),
    ("Z_WM_REPLENISH", "daily", "ZCL_WM_STOCK_CHECK", 20, "B"),
    ("Z_SD_OUTPUT", "hourly", "ZCL_SD_OUTPUT_MGR", 10, "A"),
    ("Z_DELIVERY_PROC", "daily", "ZCL_SD_DELIVERY", 35, "B"),
    ("Z_PAYMENT_RUN", "weekly", "ZREP_FI_MONTHLY", 60, "A"),
    ("Z_MRP_CUSTOM", "daily", "Z_MRP_PROCESSOR", 120, "A"),
    ("Z_ARCHIVE_DATA", "monthly", "Z_ARCHIVE_PROC", 480, "C"),
    ("Z_EDI_MONITOR", "hourly", "Z_EDI_PROC", 3, "B"),
    ("Z_BANK_STMT_IMPORT", "daily", "Z_BANK_IMPORT", 8, "B"),
    ("Z_TAX_REPORT", "monthly", "Z_TAX_PROC", 90, "A"),
    ("Z_INVENTORY_COUNT", "weekly", "Z_INV_COUNT", 25, "C"),
    ("SAP_COLLECTOR_FOR_PERFMONITOR", "hourly", "RSCOLL00", 1, "A"),
    ("SAP_CCMS_MONI_BATCH_DP", "daily", "RSAL_BATCH_TOOL_MANAGER", 2, "A"),
    ("SAP_REORG_SPOOL", "daily", "RSPO0041", 5, "C"),
]


class BatchJob(ECCObjectSpec):
    object_id = "BATCH_JOB"
    name = "Batch Job"
    source_table = "TBTCO"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("JOBNAME", "JobName"),
            FieldMapping("JOBCLASS", "JobClass"),
            FieldMapping("PROGNAME", "ProgramName"),
            FieldMapping("VARIANT", "Variant"),
            FieldMapping("AUTHCKNAM", "AuthorizationUser"),
            FieldMapping("FREQUENCY", "Frequency"),
            FieldMapping("SDLSTRTTM", "StartTime"),
            FieldMapping("PRDMINS", "PeriodMinutes", convert="toInteger"),
            FieldMapping("PRDHOURS", "PeriodHours", convert="toInteger"),
            FieldMapping("PRDDAYS", "PeriodDays", convert="toInteger"),
            FieldMapping("CALENDARID", "FactoryCalendar"),
            FieldMapping("STATUS", "Status", value_map={"F": "finished", "R": "running", "S": "scheduled"}),
            FieldMapping("AVGRUNTIME", "AvgRuntimeMinutes", convert="toInteger"),
            FieldMapping("LASTRUN", "LastRunDate", convert="toDate"),
            FieldMapping("MIGRATION_STRATEGY", "MigrationStrategy"),
            FieldMapping("CUSTOMCODE", "HasCustomCode", convert="toBoolean"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["JobName", "ProgramName", "Frequency"],
            exact_duplicate=["JobName"],
            ranges=[RangeCheck("AvgRuntimeMinutes", 0, 1440)],
        )

    def extract_mock(self, rng):
        records: List[Dict[str, Any]] = []
        for job, frequency, program, runtime, job_class in BATCH_JOBS:
            records.append({
                "JOBNAME": job,
                "JOBCLASS": job_class,
                "PROGNAME": program,
                "VARIANT": f"{job}_VAR" if job.startswith("Z_") else "",
                "AUTHCKNAM": "BATCH_USER",
                "FREQUENCY": frequency,
                "SDLSTRTTM": "060000",
                "PRDMINS": "60" if frequency == "hourly" else "0",
                "PRDHOURS": "24" if frequency == "daily" else "0",
                "PRDDAYS": {"weekly": "7", "monthly": "30"}.get(frequency, "0"),
                "CALENDARID": "US",
                "STATUS": "S",
                "AVGRUNTIME": str(runtime),
                "LASTRUN": "20240115",
                "MIGRATION_STRATEGY": classify_batch_job(program, frequency, runtime),
                "CUSTOMCODE": "X" if program.startswith("Z") else "",
            })
        return records


TECHNICAL_OBJECTS = (BWExtractor, RFCDestination, IDocConfig, WebService, BatchJob)
