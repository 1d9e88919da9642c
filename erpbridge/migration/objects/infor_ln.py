"""Infor LN migration objects."""

from typing import Any, Dict, List

from dateutil import parser as date_parser

from ..base import MigrationObjectSpec
from ..field_mapping import FieldMapping
from ..quality import FuzzyCheck, QualityChecks
from .common import CUSTOMER_ROLE, VENDOR_ROLE

YES_NO = {"Y": "X", "N": "", "1": "X", "0": ""}

GL_ACCOUNTS = [
    # fled, desc, type, acgr, taxc, oitm, recon
    ("100000", "Petty Cash", "BS", "CASH", "", "N", ""),
    ("110000", "Bank Account Main", "BS", "BANK", "", "Y", ""),
    ("113100", "Accounts Receivable", "BS", "RECV", "", "Y", "D"),
    ("140000", "Raw Materials Inventory", "BS", "INVT", "", "N", ""),
    ("141000", "Work in Process", "BS", "INVT", "", "N", ""),
    ("142000", "Finished Goods Inventory", "BS", "INVT", "", "N", ""),
    ("150000", "Fixed Assets", "BS", "FAAA", "", "N", ""),
    ("154000", "Accumulated Depreciation", "BS", "FAAA", "", "N", ""),
    ("200000", "Accounts Payable", "BS", "PAYB", "", "Y", "K"),
    ("210000", "Accrued Liabilities", "BS", "ACCR", "", "N", ""),
    ("220000", "Tax Payable", "BS", "TAXP", "", "N", ""),
    ("290000", "Retained Earnings", "BS", "EQTY", "", "N", ""),
    ("400000", "Sales Revenue Domestic", "PL", "REVN", "V1", "N", ""),
    ("410000", "Sales Revenue Export", "PL", "REVN", "", "N", ""),
    ("430000", "Other Operating Income", "PL", "OTHI", "", "N", ""),
    ("500000", "Cost of Goods Sold", "PL", "COGS", "", "N", ""),
    ("510000", "Raw Material Consumption", "PL", "MATC", "", "N", ""),
    ("600000", "Salaries and Wages", "PL", "PERS", "", "N", ""),
    ("700000", "Depreciation Expense", "PL", "DEPR", "", "N", ""),
    ("890000", "GR/IR Clearing", "BS", "GRIR", "", "Y", ""),
]

LN_COMPANIES = ("100", "200")

JOURNAL_HEADERS = [
    # docn, date, fcmp, curr, dcty, desc, refn
    ("5000001", "20240115", "100", "USD", "NOR", "Material purchase", "PO-LN-1001"),
    ("5000002", "20240120", "100", "USD", "NOR", "Customer invoice", "INV-LN-2001"),
    ("5000003", "20240201", "100", "USD", "NOR", "Payroll posting", "PAY-202401"),
    ("5000004", "20240215", "100", "USD", "ADJ", "Depreciation run Jan", "DEP-202401"),
    ("5000005", "20240228", "100", "USD", "NOR", "Vendor payment", "PMT-LN-3001"),
    ("5000006", "20240301", "200", "USD", "NOR", "Intercompany transfer", "ICO-202403"),
    ("5000007", "20240315", "100", "EUR", "NOR", "Foreign vendor invoice", "INV-EU-4001"),
    ("5000008", "20240401", "100", "USD", "NOR", "Customer payment receipt", "RCV-LN-5001"),
    ("5000009", "20240415", "200", "USD", "ADJ", "Provision for bad debts", "ADJ-202404"),
    ("5000010", "20240501", "100", "USD", "NOR", "Production order settlement", "PRD-LN-6001"),
    ("5000011", "20240515", "100", "USD", "NOR", "Material consumption", "GI-LN-7001"),
    ("5000012", "20240601", "100", "USD", "REV", "Reversal of accrual", "REV-LN-8001"),
    ("5000013", "20240615", "200", "USD", "NOR", "Asset acquisition", "AST-LN-9001"),
    ("5000014", "20240701", "100", "USD", "CLO", "Half-year closing entry", "CLO-2024H1"),
    ("5000015", "20240715", "100", "USD", "MEM", "Tax provision Q2", "TAX-2024Q2"),
]

# One list of (fled, amount, dbcr, ttyp, cctr, text) per journal header
JOURNAL_LINES = [
    [("140000", "5000.00", "D", "GL", "", "Raw materials receipt"),
     ("220000", "450.00", "D", "GL", "", "Input tax"),
     ("200000", "5450.00", "C", "AP", "", "Vendor payable")],
    [("113100", "12000.00", "D", "AR", "", "Customer receivable"),
     ("400000", "10909.09", "C", "GL", "CC01", "Sales revenue"),
     ("220000", "1090.91", "C", "GL", "", "Output tax")],
    [("600000", "45000.00", "D", "GL", "CC03", "Gross salaries"),
     ("210000", "15000.00", "C", "GL", "", "Payroll withholdings"),
     ("110000", "30000.00", "C", "GL", "", "Net salary payment")],
    [("700000", "8500.00", "D", "GL", "CC05", "Depreciation expense"),
     ("154000", "8500.00", "C", "AA", "", "Accumulated depreciation")],
    [("200000", "5450.00", "D", "AP", "", "Clear vendor payable"),
     ("110000", "5450.00", "C", "GL", "", "Bank payment")],
    [("890000", "25000.00", "D", "GL", "", "ICO clearing debit"),
     ("110000", "25000.00", "C", "GL", "", "ICO bank transfer")],
    [("510000", "3200.00", "D", "GL", "CC02", "Material costs EUR"),
     ("220000", "288.00", "D", "GL", "", "Input tax EUR"),
     ("200000", "3488.00", "C", "AP", "", "Vendor payable EUR")],
    [("110000", "12000.00", "D", "GL", "", "Bank receipt"),
     ("113100", "12000.00", "C", "AR", "", "Clear receivable")],
    [("430000", "2500.00", "D", "GL", "CC04", "Bad debt expense"),
     ("113100", "2500.00", "C", "GL", "", "Allowance for doubtful")],
    [("142000", "18000.00", "D", "GL", "", "Finished goods receipt"),
     ("141000", "15000.00", "C", "GL", "CC01", "WIP settlement"),
     ("500000", "3000.00", "C", "GL", "CC01", "Production variance")],
    [("500000", "7500.00", "D", "MM", "CC01", "Material issued to prod"),
     ("140000", "7500.00", "C", "GL", "", "Inventory reduction")],
    [("210000", "4200.00", "D", "GL", "", "Reverse accrual"),
     ("510000", "3818.18", "C", "GL", "CC02", "Reverse material cost"),
     ("220000", "381.82", "C", "GL", "", "Reverse tax")],
    [("150000", "35000.00", "D", "AA", "", "Asset capitalization"),
     ("110000", "35000.00", "C", "GL", "", "Bank payment for asset")],
    [("400000", "85000.00", "D", "GL", "", "Close revenue to P&L"),
     ("500000", "60000.00", "C", "GL", "", "Close COGS to P&L"),
     ("290000", "25000.00", "C", "GL", "", "Transfer to retained")],
    [("430000", "12500.00", "D", "GL", "CC04", "Tax provision Q2"),
     ("220000", "12500.00", "C", "GL", "", "Tax payable provision")],
]


def compact_date(value: Any, row: Dict[str, Any]) -> Any:
    """Turn an ISO timestamp from the LN OData service into ``YYYYMMDD``."""
    if value is None or value == "":
        return value
    text = str(value)
    if len(text) == 8 and text.isdigit():
        return text
    try:
        return date_parser.isoparse(text).strftime("%Y%m%d")
    except ValueError:
        return value


class InforLNGLAccount(MigrationObjectSpec):
    object_id = "INFOR_LN_GL_ACCOUNT"
    name = "LN GL Account to SAP GL Master"
    source_system = "INFOR_LN"
    source_table = "tfgld008"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Chart of accounts level
            FieldMapping("fled", "SKA1-SAKNR", convert="padLeft10"),
            FieldMapping("type", "SKA1-XBILK", value_map={"BS": "X", "PL": "", "B": "X", "P": ""}, default=""),
            FieldMapping("type", "SKA1-GVTYP", value_map={"BS": "", "PL": "P", "B": "", "P": "P"}, default=""),
            FieldMapping("acgr", "SKA1-KTOKS"),
            FieldMapping("coa", "SKA1-KTOPL", default="INLN"),
            # Texts
            FieldMapping("desc", "SKAT-TXT50"),
            FieldMapping("desc_short", "SKAT-TXT20"),
            FieldMapping("lnge", "SKAT-SPRAS", convert="toUpperCase", default="EN"),
            # Company code level
            FieldMapping("fcmp", "SKB1-BUKRS"),
            FieldMapping("curr", "SKB1-WAERS"),
            FieldMapping("taxc", "SKB1-MWSKZ"),
            FieldMapping("oitm", "SKB1-XOPVW", value_map=YES_NO, default=""),
            FieldMapping("lidi", "SKB1-XKRES", value_map=YES_NO, default="X"),
            FieldMapping("recon", "SKB1-MITKZ", value_map={"D": "D", "K": "K", "A": "A", "": ""}, default=""),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["SKA1-SAKNR", "SKAT-TXT50", "SKA1-KTOPL", "SKB1-BUKRS"],
            exact_duplicate=["SKA1-SAKNR", "SKB1-BUKRS"],
        )

    def extract_mock(self, rng):
        return [
            {
                "fled": fled,
                "desc": desc,
                "desc_short": desc[:20],
                "type": kind,
                "acgr": group,
                "coa": "INLN",
                "lnge": "EN",
                "fcmp": company,
                "curr": "USD",
                "taxc": tax,
                "oitm": open_items,
                "lidi": "Y",
                "recon": recon,
            }
            for company in LN_COMPANIES
            for fled, desc, kind, group, tax, open_items, recon in GL_ACCOUNTS
        ]


class InforLNGLJournal(MigrationObjectSpec):
    object_id = "INFOR_LN_GL_JOURNAL"
    name = "LN GL Journal to SAP Accounting Document"
    source_system = "INFOR_LN"
    source_table = "tfgld106"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Header
            FieldMapping("docn", "BKPF-BELNR", convert="padLeft10"),
            FieldMapping("year", "BKPF-GJAHR", convert="toInteger"),
            FieldMapping("docd", "BKPF-BLDAT", transform=compact_date, convert="toDate"),
            FieldMapping("pstd", "BKPF-BUDAT", transform=compact_date, convert="toDate"),
            FieldMapping("fcmp", "BKPF-BUKRS"),
            FieldMapping("curr", "BKPF-WAERS"),
            FieldMapping("dcty", "BKPF-BLART",
                         value_map={"NOR": "SA", "REV": "AB", "ADJ": "SB", "CLO": "CL", "MEM": "SA"}, default="SA"),
            FieldMapping("desc", "BKPF-BKTXT"),
            FieldMapping("refn", "BKPF-XBLNR"),
            # Line items
            FieldMapping("lnum", "ACDOCA-BUZEI"),
            FieldMapping("fled", "ACDOCA-HKONT", convert="padLeft10"),
            FieldMapping("amount", "ACDOCA-HSL", convert="toDecimal"),
            FieldMapping("tcam", "ACDOCA-TSL", convert="toDecimal"),
            FieldMapping("dbcr", "ACDOCA-SHKZG", value_map={"D": "S", "C": "H", "1": "S", "2": "H"}, default="S"),
            FieldMapping("cctr", "ACDOCA-KOSTL", convert="padLeft10"),
            FieldMapping("pctr", "ACDOCA-PRCTR", convert="padLeft10"),
            FieldMapping("ltxt", "ACDOCA-SGTXT"),
            FieldMapping("ttyp", "ACDOCA-KOART",
                         value_map={"GL": "S", "AR": "D", "AP": "K", "AA": "A", "MM": "M"}, default="S"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["BKPF-BELNR", "BKPF-GJAHR", "BKPF-BUKRS", "ACDOCA-HKONT", "ACDOCA-HSL"],
            exact_duplicate=["BKPF-BELNR", "BKPF-GJAHR", "BKPF-BUKRS", "ACDOCA-BUZEI"],
        )

    def extract_mock(self, rng):
        records = []
        for header, lines in zip(JOURNAL_HEADERS, JOURNAL_LINES):
            docn, date, company, currency, doc_type, desc, ref = header
            for index, (fled, amount, dbcr, ttyp, cctr, text) in enumerate(lines, start=1):
                records.append({
                    "docn": docn,
                    "year": date[:4],
                    "docd": date,
                    "pstd": date,
                    "fcmp": company,
                    "curr": currency,
                    "dcty": doc_type,
                    "desc": desc,
                    "refn": ref,
                    "lnum": f"{index * 10:03d}",
                    "fled": fled,
                    "amount": amount,
                    "tcam": amount,
                    "dbcr": dbcr,
                    "cctr": cctr,
                    "pctr": f"P{cctr[1:]}" if cctr else "",
                    "ltxt": text,
                    "ttyp": ttyp,
                })
        return records


BUSINESS_PARTNERS = [
    # bptid, name, name2, type, street, postcode, city, region, country, phone, email, bank, account, iban, swift, sales org, pay terms, role
    ("100001", "Acme Manufacturing Co", "", "C", "100 Industrial Blvd", "60601", "Chicago", "IL", "US", "312-555-0101", "orders@acmemfg.com", "021000021", "1234567890", "", "CHASUS33", "1000", "N30", "C"),
    ("100002", "Global Distribution Inc", "", "C", "250 Logistics Way", "90001", "Los Angeles", "CA", "US", "310-555-0201", "purchasing@globaldist.com", "021000089", "2345678901", "", "CITIUS33", "1000", "N45", "C"),
    ("100003", "Nordic Electronics AB", "Gothenburg Branch", "C", "Kungsgatan 12", "41119", "Gothenburg", "", "SE", "+46-31-555-0301", "info@nordicelec.se", "NDEASESS", "9876543210", "SE3550000000054910000003", "NDEASESS", "2000", "N60", "C"),
    ("100004", "Precision Parts Ltd", "", "C", "45 Engineering Road", "B1 1BB", "Birmingham", "", "GB", "+44-121-555-0401", "orders@precisionparts.co.uk", "BARCGB22", "45678901", "GB82WEST12345698765432", "BARCGB22", "2000", "N30", "C"),
    ("100005", "MexiParts SA de CV", "", "C", "Av Reforma 500", "06600", "Mexico City", "DF", "MX", "+52-55-555-0501", "compras@mexiparts.mx", "", "", "", "", "1000", "N30", "C"),
    ("200001", "Steel Supply Corp", "", "V", "800 Metal Drive", "15201", "Pittsburgh", "PA", "US", "412-555-0601", "sales@steelsupply.com", "021000021", "3456789012", "", "CHASUS33", "", "N45", "V"),
    ("200002", "ElectroParts GmbH", "", "V", "Industriestr. 42", "70174", "Stuttgart", "BW", "DE", "+49-711-555-0701", "vertrieb@electroparts.de", "COBADEFF", "7890123456", "DE89370400440532013000", "COBADEFF", "", "N60", "V"),
    ("200003", "Chemical Solutions Inc", "", "V", "500 Polymer Blvd", "77001", "Houston", "TX", "US", "713-555-0801", "orders@chemsolutions.com", "021000021", "4567890123", "", "CHASUS33", "", "N30", "V"),
    ("200004", "Japan Bearings Co Ltd", "", "V", "2-1 Marunouchi", "100-0005", "Tokyo", "", "JP", "+81-3-555-0901", "export@jpbearings.co.jp", "BOTKJPJT", "5678901234", "", "BOTKJPJT", "", "N90", "V"),
    # Vendor records of entities that are also customers
    ("300001", "Acme Manufacturing Co", "Vendor Division", "V", "100 Industrial Blvd", "60601", "Chicago", "IL", "US", "312-555-0103", "ap@acmemfg.com", "021000021", "6789012345", "", "CHASUS33", "", "N30", "V"),
    ("300002", "Global Distribution Inc", "Returns Dept", "V", "250 Logistics Way", "90001", "Los Angeles", "CA", "US", "310-555-0203", "returns@globaldist.com", "021000089", "7890123456", "", "CITIUS33", "", "N30", "V"),
    ("100006", "TechBuild Solutions", "", "C", "900 Innovation Park", "94025", "Menlo Park", "CA", "US", "650-555-1001", "procurement@techbuild.com", "021000021", "8901234567", "", "CHASUS33", "1000", "N30", "C"),
]


class InforLNBusinessPartner(MigrationObjectSpec):
    """
    LN customers and suppliers to SAP business partners.

    Customer and supplier records of the same entity (same name and
    city) are merged into one partner carrying both roles.
    """

    object_id = "INFOR_LN_BUSINESS_PARTNER"
    name = "LN Business Partner to SAP BP"
    source_system = "INFOR_LN"
    source_table = "tccom100"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("bptid", "BUT000-PARTNER", convert="padLeft10"),
            FieldMapping("nama", "BUT000-NAME_ORG1"),
            FieldMapping("nama2", "BUT000-NAME_ORG2"),
            FieldMapping("bptype", "BUT000-BU_TYPE", value_map={"C": "2", "V": "2", "CV": "2", "P": "1"}, default="2"),
            FieldMapping("bprl", "BUT000-BU_GROUP"),
            FieldMapping("lnge", "BUT000-BU_LANGU", convert="toUpperCase"),
            # Address
            FieldMapping("cadr", "BUT020-ADDR_TYPE", default="1"),
            FieldMapping("nast", "ADRC-STREET"),
            FieldMapping("pstc", "ADRC-POST_CODE1"),
            FieldMapping("dsca_city", "ADRC-CITY1"),
            FieldMapping("cste", "ADRC-REGION"),
            FieldMapping("ccty", "ADRC-COUNTRY", convert="toUpperCase"),
            FieldMapping("phon", "ADRC-TEL_NUMBER"),
            FieldMapping("fax", "ADRC-FAX_NUMBER"),
            FieldMapping("emal", "ADRC-SMTP_ADDR"),
            # Bank
            FieldMapping("ln_bank", "BUT0BK-BANKL"),
            FieldMapping("ln_bkac", "BUT0BK-BANKN"),
            FieldMapping("ln_iban", "BUT0BK-IBAN"),
            FieldMapping("ln_swift", "BUT0BK-SWIFT"),
            # Customer sales area
            FieldMapping("cprj", "KNVV-VKORG"),
            FieldMapping("cdis", "KNVV-VTWEG", default="10"),
            FieldMapping("cpay", "KNVV-ZTERM"),
            FieldMapping("ccur", "KNVV-WAERS"),
            FieldMapping("role", "BP_ROLE"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["BUT000-PARTNER", "BUT000-NAME_ORG1", "ADRC-COUNTRY"],
            exact_duplicate=["BUT000-PARTNER"],
            fuzzy_duplicate=FuzzyCheck(("BUT000-NAME_ORG1", "ADRC-CITY1"), 0.85),
        )

    def post_transform(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        merged: Dict[str, Dict[str, Any]] = {}
        for row in rows:
            key = f"{str(row.get('BUT000-NAME_ORG1') or '').upper()}|{str(row.get('ADRC-CITY1') or '').upper()}"
            role = row.get("BP_ROLE")
            existing = merged.get(key)
            if existing is None:
                row = dict(row)
                row["Roles"] = []
                if role in ("C", "CV"):
                    row["Roles"].append(CUSTOMER_ROLE)
                if role in ("V", "CV"):
                    row["Roles"].append(VENDOR_ROLE)
                merged[key] = row
                continue

            for field_name, value in row.items():
                if existing.get(field_name) in (None, "") and value not in (None, "", "0000000000"):
                    existing[field_name] = value
            if role == "C" and CUSTOMER_ROLE not in existing["Roles"]:
                existing["Roles"].append(CUSTOMER_ROLE)
            if role == "V" and VENDOR_ROLE not in existing["Roles"]:
                existing["Roles"].append(VENDOR_ROLE)
        return list(merged.values())

    def extract_mock(self, rng):
        records = []
        for (bptid, name, name2, kind, street, postcode, city, region, country, phone, email,
             bank, account, iban, swift, sales_org, pay_terms, role) in BUSINESS_PARTNERS:
            records.append({
                "bptid": bptid,
                "nama": name,
                "nama2": name2,
                "bptype": kind,
                "bprl": "CUST" if kind == "C" else "VEND",
                "lnge": "DE" if country == "DE" else "EN",
                "cadr": "1",
                "nast": street,
                "pstc": postcode,
                "dsca_city": city,
                "cste": region,
                "ccty": country,
                "phon": phone,
                "fax": "",
                "emal": email,
                "ln_bank": bank,
                "ln_bkac": account,
                "ln_iban": iban,
                "ln_swift": swift,
                "cprj": sales_org,
                "cdis": "10" if sales_org else "",
                "cpay": pay_terms,
                "ccur": {"US": "USD", "SE": "SEK", "GB": "GBP", "MX": "MXN", "DE": "EUR", "JP": "JPY"}[country],
                "role": role,
            })
        return records


LN_ITEMS = [
    # item, description, kitm, group, unit, std price, warehouse, gross, net, safety, reorder, lead days, ean
    ("RM-10001", "Steel Sheet 2mm", "1", "RAW01", "kg", "4.50", "1000", "1.000", "1.000", "500", "1000", "7", "4012345000011"),
    ("RM-10002", "Aluminum Rod 10mm", "1", "RAW01", "kg", "8.75", "1000", "1.000", "1.000", "200", "500", "10", "4012345000028"),
    ("RM-10003", "Copper Wire 0.5mm", "1", "RAW02", "m", "0.35", "1000", "0.005", "0.005", "10000", "25000", "14", "4012345000035"),
    ("RM-10004", "Plastic Granulate ABS", "1", "RAW03", "kg", "2.10", "2000", "1.000", "1.000", "300", "800", "5", "4012345000042"),
    ("RM-10005", "Rubber Seal Compound", "1", "RAW03", "kg", "6.25", "2000", "1.000", "1.000", "100", "250", "21", ""),
    ("SF-20001", "Motor Housing Assembly", "2", "SFG01", "ea", "85.00", "1000", "3.500", "3.200", "50", "100", "3", ""),
    ("SF-20002", "PCB Control Board v3", "2", "SFG02", "ea", "42.50", "1000", "0.150", "0.120", "100", "200", "5", ""),
    ("SF-20003", "Gearbox Sub-Assembly", "2", "SFG01", "ea", "125.00", "2000", "5.800", "5.500", "30", "60", "4", ""),
    ("FG-30001", "Industrial Motor 5HP", "3", "FIN01", "ea", "450.00", "1000", "25.000", "22.500", "20", "40", "0", "4012345000059"),
    ("FG-30002", "Control Panel Standard", "3", "FIN02", "ea", "320.00", "1000", "8.000", "7.200", "15", "30", "0", "4012345000066"),
    ("FG-30003", "Pump Assembly Heavy Duty", "3", "FIN01", "ea", "680.00", "2000", "35.000", "32.000", "10", "20", "0", "4012345000073"),
    ("FG-30004", "Conveyor Drive Unit", "3", "FIN03", "ea", "1250.00", "1000", "45.000", "42.000", "5", "10", "0", ""),
    ("NS-60001", "Lubricant Oil Industrial", "6", "CON01", "l", "3.80", "1000", "0.900", "0.900", "200", "500", "3", ""),
    ("NS-60002", "Cleaning Solvent", "6", "CON01", "l", "5.20", "2000", "0.800", "0.800", "100", "300", "5", ""),
    ("NS-60003", "Safety Gloves Pack 12", "6", "CON02", "box", "18.50", "1000", "0.600", "0.500", "50", "100", "7", ""),
]

UNITS = {
    "ea": "EA", "kg": "KG", "l": "L", "m": "M", "pcs": "ST",
    "ft": "FT", "lb": "LB", "gal": "GAL", "box": "BOX", "set": "SET",
}


class InforLNItemMaster(MigrationObjectSpec):
    object_id = "INFOR_LN_ITEM_MASTER"
    name = "LN Item Master to SAP Material Master"
    source_system = "INFOR_LN"
    source_table = "tcibd001"

    def field_mappings(self) -> List[FieldMapping]:
        units = {**UNITS, **{v: v for v in UNITS.values()}, "PCS": "ST"}
        return [
            FieldMapping("item", "MARA-MATNR", convert="toUpperCase"),
            FieldMapping("dsca", "MAKT-MAKTX"),
            FieldMapping("cuni", "MARA-MEINS", value_map=units, default="EA"),
            FieldMapping("kitm", "MARA-MTART", value_map={"1": "ROH", "2": "HALB", "3": "HAWA", "6": "NLAG"}, default="ROH"),
            FieldMapping("kitm", "MARC-BESKZ", value_map={"1": "F", "2": "E", "3": "F", "6": "X"}, default="F"),
            FieldMapping("csig", "MARA-MATKL"),
            FieldMapping("stwi", "MBEW-STPRS", convert="toDecimal"),
            FieldMapping("citg", "MARA-MBRSH", default="M"),
            FieldMapping("cwar", "MARC-WERKS"),
            FieldMapping("lwar", "MARD-LGORT", default="0001"),
            FieldMapping("brgw", "MARA-BRGEW", convert="toDecimal"),
            FieldMapping("ntgw", "MARA-NTGEW", convert="toDecimal"),
            FieldMapping("weig", "MARA-GEWEI", convert="toUpperCase", default="KG"),
            FieldMapping("plds", "MARA-NORMT"),
            FieldMapping("cmnf", "MARC-DISPO"),
            FieldMapping("sfty", "MARC-EISBE", convert="toDecimal"),
            FieldMapping("reop", "MARC-MINBE", convert="toDecimal"),
            FieldMapping("pldt", "MARC-PLIFZ", convert="toInteger"),
            FieldMapping("erpn", "MARA-EAN11"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["MARA-MATNR", "MAKT-MAKTX", "MARA-MEINS", "MARA-MTART"],
            exact_duplicate=["MARA-MATNR", "MARC-WERKS"],
        )

    def extract_mock(self, rng):
        return [
            {
                "item": item,
                "dsca": desc,
                "kitm": kitm,
                "csig": group,
                "cuni": unit,
                "stwi": price,
                "citg": "M",
                "cwar": warehouse,
                "lwar": "0001",
                "brgw": gross,
                "ntgw": net,
                "weig": "kg",
                "plds": "",
                "cmnf": f"MRP{warehouse[-2:]}",
                "sfty": safety,
                "reop": reorder,
                "pldt": lead,
                "erpn": ean,
            }
            for item, desc, kitm, group, unit, price, warehouse, gross, net, safety, reorder, lead, ean in LN_ITEMS
        ]


INFOR_LN_OBJECTS = (InforLNGLAccount, InforLNGLJournal, InforLNBusinessPartner, InforLNItemMaster)
