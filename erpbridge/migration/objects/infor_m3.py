"""Infor M3 migration objects."""

from typing import List

from ..base import MigrationObjectSpec
from ..field_mapping import FieldMapping
from ..quality import FuzzyCheck, QualityChecks

PAYMENT_TERMS = {"0": "0001", "1": "0010", "2": "0030", "3": "0045", "4": "0060"}
STATUS_DELETED = {"20": "", "90": "X"}
BLOCKED = {"0": "", "1": "X", "2": "X"}


def _partner_checks(city_field: str) -> QualityChecks:
    return QualityChecks(
        required=["BUT000-PARTNER", "BUT000-NAME_ORG1", "ADDR-COUNTRY"],
        exact_duplicate=["BUT000-PARTNER"],
        fuzzy_duplicate=FuzzyCheck(("BUT000-NAME_ORG1", city_field), 0.85),
    )


class InforM3Customer(MigrationObjectSpec):
    object_id = "INFOR_M3_CUSTOMER"
    name = "Infor M3 Customer"
    source_system = "INFOR_M3"
    source_table = "OCUSMA"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("OKCUNO", "BUT000-PARTNER", convert="padLeft10"),
            FieldMapping("OKCUNM", "BUT000-NAME_ORG1"),
            FieldMapping("OKCUN2", "BUT000-NAME_ORG2"),
            FieldMapping("OKYRNO", "KNA1-STCD1"),
            FieldMapping("OKCUTP", "KNVV-KDGRP", value_map={"0": "01", "1": "02", "2": "03", "3": "04", "4": "05"}),
            FieldMapping("OKLNCD", "BUT000-BU_LANGU", convert="toUpperCase"),
            FieldMapping("OKSTAT", "BUT000-XDELE", value_map=STATUS_DELETED),
            FieldMapping("OKRGDT", "BUT000-CRDAT", convert="toDate"),
            FieldMapping("OKLMDT", "BUT000-CHDAT", convert="toDate"),
            FieldMapping("OKSORT", "KNA1-SORTL", convert="toUpperCase"),
            # Address
            FieldMapping("OKCUA1", "ADDR-STREET"),
            FieldMapping("OKCUA2", "ADDR-STR_SUPPL1"),
            FieldMapping("OKCUA3", "ADDR-STR_SUPPL2"),
            FieldMapping("OKTOWN", "ADDR-CITY1"),
            FieldMapping("OKECAR", "ADDR-REGION"),
            FieldMapping("OKPONO", "ADDR-POST_CODE1"),
            FieldMapping("OKCSCD", "ADDR-COUNTRY", convert="toUpperCase"),
            FieldMapping("OKPHNO", "ADDR-TEL_NUMBER"),
            FieldMapping("OKTFNO", "ADDR-FAX_NUMBER"),
            FieldMapping("OKEMAL", "ADDR-SMTP_ADDR"),
            # Financials
            FieldMapping("OKCUCD", "KNVV-WAERS"),
            FieldMapping("OKTEPY", "KNB1-ZTERM", value_map=PAYMENT_TERMS),
            FieldMapping("OKPYCD", "KNB1-ZWELS"),
            FieldMapping("OKCRL1", "KNB1-CRBLB", convert="toDecimal"),
            FieldMapping("OKBLCD", "KNB1-SPERR", value_map=BLOCKED),
            FieldMapping("OKTXAP", "KNVI-TAXKD"),
            # Sales
            FieldMapping("OKSMCD", "KNVV-VKBUR"),
            FieldMapping("OKSDST", "KNVV-BZIRK"),
            FieldMapping("OKFRE1", "KNVV-INCO1"),
            FieldMapping("OKFRE2", "KNVV-INCO2"),
            FieldMapping("OKPRIR", "KNVV-LPRIO", convert="toInteger"),
            FieldMapping("OKDISY", "KNVV-VTWEG"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return _partner_checks("ADDR-CITY1")

    def extract_mock(self, rng):
        countries = ["US", "US", "CA", "GB", "DE", "US", "FR", "US", "AU", "JP"]
        cities = ["New York", "Chicago", "Toronto", "London", "Munich",
                  "Los Angeles", "Paris", "Houston", "Sydney", "Tokyo"]
        regions = ["NY", "IL", "ON", "LDN", "BY", "CA", "IDF", "TX", "NSW", "TK"]
        currencies = ["USD", "USD", "CAD", "GBP", "EUR", "USD", "EUR", "USD", "AUD", "JPY"]
        incoterms = ["FOB", "CIF", "EXW", "DDP", "DAP"]

        records = []
        for i in range(1, 11):
            c = i - 1
            records.append({
                "OKCUNO": f"M3C{i:05d}",
                "OKCUNM": f"M3 Customer Corp {i}",
                "OKCUN2": f"Division {i}" if i % 3 == 0 else "",
                "OKYRNO": f"TX{countries[c]}{100000 + i}",
                "OKCUTP": str(c % 5),
                "OKLNCD": "EN",
                "OKSTAT": "90" if i == 10 else "20",
                "OKRGDT": "20180601",
                "OKLMDT": "20240115",
                "OKSORT": f"M3CUST{i:03d}",
                "OKCUA1": f"{100 + i * 10} Commerce Blvd",
                "OKCUA2": f"Suite {i * 100}" if i % 4 == 0 else "",
                "OKCUA3": "",
                "OKTOWN": cities[c],
                "OKECAR": regions[c],
                "OKPONO": str(10000 + i * 111),
                "OKCSCD": countries[c],
                "OKPHNO": f"+1-555-{1000 + i:04d}",
                "OKTFNO": f"+1-555-{2000 + i:04d}" if i % 3 == 0 else "",
                "OKEMAL": f"contact@m3customer{i}.com",
                "OKCUCD": currencies[c],
                "OKTEPY": str(c % 5),
                "OKPYCD": "CHK" if i % 2 == 0 else "TRF",
                "OKCRL1": str(rng.randint(10000, 509999)),
                "OKBLCD": "1" if i == 10 else "0",
                "OKTXAP": "1" if i % 3 == 0 else "0",
                "OKSMCD": f"SM{c % 3 + 1:02d}",
                "OKSDST": f"DS{c % 5 + 1:02d}",
                "OKFRE1": incoterms[c % 5],
                "OKFRE2": cities[c],
                "OKPRIR": str(c % 5 + 1),
                "OKDISY": f"{c % 3 + 1:02d}",
            })
        return records


class InforM3Vendor(MigrationObjectSpec):
    object_id = "INFOR_M3_VENDOR"
    name = "Infor M3 Vendor"
    source_system = "INFOR_M3"
    source_table = "CIDMAS"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("IISUNO", "BUT000-PARTNER", convert="padLeft10"),
            FieldMapping("IISUNM", "BUT000-NAME_ORG1"),
            FieldMapping("IISUN2", "BUT000-NAME_ORG2"),
            FieldMapping("IIPYNO", "LFA1-ZTERM", value_map=PAYMENT_TERMS),
            FieldMapping("IISUTY", "LFA1-KTOKK", value_map={"0": "KRED", "1": "LIEF", "2": "DLNR"}),
            FieldMapping("IILNCD", "BUT000-BU_LANGU", convert="toUpperCase"),
            FieldMapping("IISTAT", "BUT000-XDELE", value_map=STATUS_DELETED),
            FieldMapping("IIRGDT", "BUT000-CRDAT", convert="toDate"),
            FieldMapping("IILMDT", "BUT000-CHDAT", convert="toDate"),
            FieldMapping("IIORTP", "LFA1-SORTL", convert="toUpperCase"),
            # Address
            FieldMapping("IISUA1", "ADDR-STREET"),
            FieldMapping("IISUA2", "ADDR-STR_SUPPL1"),
            FieldMapping("IISUA3", "ADDR-STR_SUPPL2"),
            FieldMapping("IITOWN", "ADDR-CITY1"),
            FieldMapping("IIECAR", "ADDR-REGION"),
            FieldMapping("IIPONO", "ADDR-POST_CODE1"),
            FieldMapping("IICSCD", "ADDR-COUNTRY", convert="toUpperCase"),
            FieldMapping("IIPHNO", "ADDR-TEL_NUMBER"),
            FieldMapping("IITFNO", "ADDR-FAX_NUMBER"),
            FieldMapping("IIEMAL", "ADDR-SMTP_ADDR"),
            # Purchasing
            FieldMapping("IIBUYE", "LFM1-EKGRP"),
            FieldMapping("IISUCO", "LFA1-LAND1", convert="toUpperCase"),
            FieldMapping("IICUCD", "LFB1-WAERS"),
            FieldMapping("IIFRE1", "LFM1-INCO1"),
            FieldMapping("IIFRE2", "LFM1-INCO2"),
            FieldMapping("IISUBL", "LFA1-SPERR", value_map=BLOCKED),
            # Banking
            FieldMapping("IIBKNO", "LFBK-BANKN"),
            FieldMapping("IISWCD", "LFBK-SWIFT"),
            FieldMapping("IIIBAN", "LFBK-IBAN"),
            FieldMapping("IIBKAC", "LFBK-KOINH"),
            # Tax and quality
            FieldMapping("IIVRNO", "LFA1-STCD1"),
            FieldMapping("IITXAP", "LFA1-TXKRS"),
            FieldMapping("IIQUCL", "LFA1-QSSYS"),
            FieldMapping("IIABCD", "LFM1-WEBRE", value_map={"Y": "X", "N": ""}),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return _partner_checks("ADDR-CITY1")

    def extract_mock(self, rng):
        countries = ["US", "CN", "DE", "MX", "IN", "JP", "KR", "TW"]
        cities = ["Detroit", "Shenzhen", "Stuttgart", "Monterrey", "Mumbai", "Osaka", "Seoul", "Taipei"]
        regions = ["MI", "GD", "BW", "NL", "MH", "OSK", "SE", "TPE"]
        currencies = ["USD", "CNY", "EUR", "MXN", "INR", "JPY", "KRW", "TWD"]
        incoterms = ["FOB", "CIF", "EXW", "DDP", "FCA"]

        records = []
        for i in range(1, 9):
            c = i - 1
            records.append({
                "IISUNO": f"M3V{i:05d}",
                "IISUNM": f"M3 Supplier Industries {i}",
                "IISUN2": f"Div. {i}" if i % 3 == 0 else "",
                "IIPYNO": str(c % 5),
                "IISUTY": str(c % 3),
                "IILNCD": "EN",
                "IISTAT": "90" if i == 8 else "20",
                "IIRGDT": "20170801",
                "IILMDT": "20240201",
                "IIORTP": f"M3VND{i:03d}",
                "IISUA1": f"{200 + i * 5} Industrial Pkwy",
                "IISUA2": f"Building {i}" if i % 3 == 0 else "",
                "IISUA3": "",
                "IITOWN": cities[c],
                "IIECAR": regions[c],
                "IIPONO": str(20000 + i * 222),
                "IICSCD": countries[c],
                "IIPHNO": f"+1-555-{3000 + i:04d}",
                "IITFNO": f"+1-555-{4000 + i:04d}" if i % 4 == 0 else "",
                "IIEMAL": f"procurement@m3supplier{i}.com",
                "IIBUYE": f"BY{c % 4 + 1:02d}",
                "IISUCO": countries[c],
                "IICUCD": currencies[c],
                "IIFRE1": incoterms[c % 5],
                "IIFRE2": cities[c],
                "IISUBL": "1" if i == 8 else "0",
                "IIBKNO": str(100000000 + i * 111111),
                "IISWCD": "DEUTDEFF" if i % 2 == 0 else "CHASUS33",
                "IIIBAN": f"DE{10000000000 + i}" if countries[c] == "DE" else "",
                "IIBKAC": f"M3 Supplier Industries {i}",
                "IIVRNO": f"TX{countries[c]}{200000 + i}",
                "IITXAP": "1" if i % 3 == 0 else "0",
                "IIQUCL": "ISO9001" if i % 2 == 0 else "",
                "IIABCD": "Y" if i % 2 == 0 else "N",
            })
        return records


M3_GL_ACCOUNTS = [
    # account, text, BS/PL, group, tax code, open items, reconciliation
    ("100000", "Cash and Bank", "BS", "CASH", "", "N", ""),
    ("110000", "Accounts Receivable", "BS", "RECV", "", "Y", "D"),
    ("120000", "Inventory Raw Materials", "BS", "INVT", "", "N", ""),
    ("130000", "Inventory Finished Goods", "BS", "INVT", "", "N", ""),
    ("150000", "Fixed Assets", "BS", "FAAA", "", "N", ""),
    ("155000", "Accumulated Depreciation", "BS", "FAAA", "", "N", ""),
    ("200000", "Accounts Payable", "BS", "PAYB", "", "Y", "K"),
    ("210000", "Accrued Expenses", "BS", "ACCR", "", "N", ""),
    ("290000", "Retained Earnings", "BS", "EQTY", "", "N", ""),
    ("400000", "Sales Revenue", "PL", "REVN", "V1", "N", ""),
    ("410000", "Sales Returns", "PL", "REVN", "", "N", ""),
    ("500000", "Cost of Goods Sold", "PL", "COGS", "", "N", ""),
    ("510000", "Material Costs", "PL", "MATC", "", "N", ""),
    ("600000", "Salaries and Wages", "PL", "PERS", "", "N", ""),
    ("610000", "Employee Benefits", "PL", "PERS", "", "N", ""),
    ("700000", "Depreciation Expense", "PL", "DEPR", "", "N", ""),
    ("800000", "Interest Income", "PL", "FINI", "", "N", ""),
    ("890000", "GR/IR Clearing", "BS", "GRIR", "", "Y", ""),
]

M3_DIVISIONS = ("D1", "D2")


class InforM3GLAccount(MigrationObjectSpec):
    object_id = "INFOR_M3_GL_ACCOUNT"
    name = "Infor M3 GL Account"
    source_system = "INFOR_M3"
    source_table = "FCHACC"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("AIAITM", "SKA1-SAKNR", convert="padLeft10"),
            FieldMapping("AIAPTS", "SKA1-XBILK", value_map={"BS": "X", "PL": "", "1": "X", "2": ""}, default=""),
            FieldMapping("AIACGR", "SKA1-KTOKS"),
            FieldMapping("AICOA", "SKA1-KTOPL", default="INM3"),
            FieldMapping("AIAT01", "SKAT-TXT50"),
            FieldMapping("AIAT02", "SKAT-TXT20"),
            FieldMapping("AILNCD", "SKAT-SPRAS", convert="toUpperCase", default="EN"),
            FieldMapping("AIDIVI", "SKB1-BUKRS"),
            FieldMapping("AICUCD", "SKB1-WAERS"),
            FieldMapping("AITXCD", "SKB1-MWSKZ"),
            FieldMapping("AIOITM", "SKB1-XOPVW", value_map={"Y": "X", "N": "", "1": "X", "0": ""}, default=""),
            FieldMapping("AIRECON", "SKB1-MITKZ", value_map={"D": "D", "K": "K", "A": "A", "": ""}, default=""),
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
                "AIAITM": account,
                "AIAT01": text,
                "AIAT02": text[:20],
                "AIAPTS": kind,
                "AIACGR": group,
                "AICOA": "INM3",
                "AILNCD": "EN",
                "AIDIVI": division,
                "AICUCD": "USD",
                "AITXCD": tax,
                "AIOITM": open_items,
                "AIRECON": recon,
            }
            for division in M3_DIVISIONS
            for account, text, kind, group, tax, open_items, recon in M3_GL_ACCOUNTS
        ]


M3_JOURNAL_HEADERS = [
    # voucher, date, division, currency, series, text
    ("7000001", "20240115", "D1", "USD", "GEN", "Vendor invoice"),
    ("7000002", "20240201", "D1", "USD", "GEN", "Customer payment"),
    ("7000003", "20240215", "D1", "USD", "GEN", "Payroll entry"),
    ("7000004", "20240301", "D1", "USD", "ADJ", "Depreciation"),
    ("7000005", "20240315", "D2", "USD", "GEN", "Intercompany"),
    ("7000006", "20240401", "D1", "EUR", "GEN", "Foreign purchase"),
    ("7000007", "20240415", "D1", "USD", "GEN", "Material receipt"),
    ("7000008", "20240501", "D1", "USD", "REV", "Reversal"),
    ("7000009", "20240515", "D2", "USD", "GEN", "Asset purchase"),
    ("7000010", "20240601", "D1", "USD", "GEN", "Sales invoice"),
    ("7000011", "20240615", "D1", "USD", "MAN", "Manual adjustment"),
    ("7000012", "20240701", "D1", "USD", "GEN", "Inventory revaluation"),
]

M3_JOURNAL_LINES = [
    [("120000", "8000.00", "D", "", "Inventory debit"), ("200000", "8000.00", "C", "", "AP credit")],
    [("100000", "15000.00", "D", "", "Bank receipt"), ("110000", "15000.00", "C", "", "Clear AR")],
    [("600000", "50000.00", "D", "CC01", "Salaries"), ("210000", "18000.00", "C", "", "Withholding"),
     ("100000", "32000.00", "C", "", "Net salary")],
    [("700000", "5000.00", "D", "CC02", "Depreciation"), ("155000", "5000.00", "C", "", "Accum depr")],
    [("890000", "20000.00", "D", "", "ICO debit"), ("100000", "20000.00", "C", "", "ICO credit")],
    [("510000", "6500.00", "D", "CC03", "Material cost EUR"), ("200000", "6500.00", "C", "", "AP EUR")],
    [("120000", "12000.00", "D", "", "Inventory receipt"), ("890000", "12000.00", "C", "", "GR/IR clearing")],
    [("210000", "3000.00", "D", "", "Reverse accrual"), ("510000", "3000.00", "C", "CC03", "Reverse cost")],
    [("150000", "45000.00", "D", "", "Asset purchase"), ("100000", "45000.00", "C", "", "Bank payment")],
    [("110000", "25000.00", "D", "", "Customer AR"), ("400000", "25000.00", "C", "CC04", "Sales revenue")],
    [("610000", "4000.00", "D", "CC01", "Benefits adj"), ("210000", "4000.00", "C", "", "Accrued benefits")],
    [("500000", "7500.00", "D", "CC02", "COGS revalue"), ("130000", "7500.00", "C", "", "FG inv adjust")],
]


class InforM3GLJournal(MigrationObjectSpec):
    object_id = "INFOR_M3_GL_JOURNAL"
    name = "Infor M3 GL Journal"
    source_system = "INFOR_M3"
    source_table = "FGLEDG"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("ESVONO", "BKPF-BELNR", convert="padLeft10"),
            FieldMapping("ESYEA4", "BKPF-GJAHR", convert="toInteger"),
            FieldMapping("ESACDT", "BKPF-BLDAT", convert="toDate"),
            FieldMapping("ESVTDT", "BKPF-BUDAT", convert="toDate"),
            FieldMapping("ESDIVI", "BKPF-BUKRS"),
            FieldMapping("ESCUCD", "BKPF-WAERS"),
            FieldMapping("ESVSER", "BKPF-BLART", value_map={"GEN": "SA", "REV": "AB", "ADJ": "SB", "MAN": "SA"}, default="SA"),
            FieldMapping("ESVTXT", "BKPF-BKTXT"),
            FieldMapping("ESJBNO", "ACDOCA-BUZEI"),
            FieldMapping("ESAIT1", "ACDOCA-HKONT", convert="padLeft10"),
            FieldMapping("ESACAM", "ACDOCA-HSL", convert="toDecimal"),
            FieldMapping("ESCUAM", "ACDOCA-TSL", convert="toDecimal"),
            FieldMapping("ESDBCR", "ACDOCA-SHKZG", value_map={"1": "S", "2": "H", "D": "S", "C": "H"}, default="S"),
            FieldMapping("ESCOCE", "ACDOCA-KOSTL", convert="padLeft10"),
            FieldMapping("ESPROJ", "ACDOCA-PRCTR", convert="padLeft10"),
            FieldMapping("ESVTX2", "ACDOCA-SGTXT"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["BKPF-BELNR", "BKPF-GJAHR", "BKPF-BUKRS", "ACDOCA-HKONT", "ACDOCA-HSL"],
            exact_duplicate=["BKPF-BELNR", "BKPF-GJAHR", "BKPF-BUKRS", "ACDOCA-BUZEI"],
        )

    def extract_mock(self, rng):
        records = []
        for (voucher, date, division, currency, series, text), lines in zip(M3_JOURNAL_HEADERS, M3_JOURNAL_LINES):
            for index, (account, amount, dbcr, cost_center, line_text) in enumerate(lines, start=1):
                records.append({
                    "ESVONO": voucher,
                    "ESYEA4": date[:4],
                    "ESACDT": date,
                    "ESVTDT": date,
                    "ESDIVI": division,
                    "ESCUCD": currency,
                    "ESVSER": series,
                    "ESVTXT": text,
                    "ESJBNO": f"{index * 10:03d}",
                    "ESAIT1": account,
                    "ESACAM": amount,
                    "ESCUAM": amount,
                    "ESDBCR": dbcr,
                    "ESCOCE": cost_center,
                    "ESPROJ": f"P{cost_center[1:]}" if cost_center else "",
                    "ESVTX2": line_text,
                })
        return records


ITEM_TYPE_NAMES = {"1": "Raw Material", "2": "Semi-Finished", "3": "Finished Good", "4": "Trading Good"}


class InforM3ItemMaster(MigrationObjectSpec):
    object_id = "INFOR_M3_ITEM_MASTER"
    name = "Infor M3 Item Master"
    source_system = "INFOR_M3"
    source_table = "MITMAS"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # MITMAS general data
            FieldMapping("MMITNO", "MARA-MATNR", convert="padLeft40"),
            FieldMapping("MMITDS", "MAKT-MAKTX"),
            FieldMapping("MMFUDS", "MAKT-MAKTX_EN"),
            FieldMapping("MMUNMS", "MARA-MEINS"),
            FieldMapping("MMITTY", "MARA-MTART", value_map={"1": "ROH", "2": "HALB", "3": "FERT", "4": "HAWA"}),
            FieldMapping("MMITGR", "MARA-MATKL"),
            FieldMapping("MMITCL", "MARA-MBRSH"),
            FieldMapping("MMGRWE", "MARA-BRGEW", convert="toDecimal"),
            FieldMapping("MMNEWE", "MARA-NTGEW", convert="toDecimal"),
            FieldMapping("MMUNWE", "MARA-GEWEI"),
            FieldMapping("MMVOL3", "MARA-VOLUM", convert="toDecimal"),
            FieldMapping("MMUNVO", "MARA-VOLEH"),
            FieldMapping("MMPROD", "MARA-EXTWG"),
            FieldMapping("MMSPE1", "MARA-BISMT"),
            FieldMapping("MMSTAT", "MARA-VPSTA", value_map={"20": "ACTIVE", "50": "BLOCKED", "90": "DELETED"}),
            FieldMapping("MMHIE1", "MARA-PRDHA"),
            FieldMapping("MMHIE2", "MARA-PRODH_D2"),
            FieldMapping("MMHIE3", "MARA-PRODH_D3"),
            FieldMapping("MMEAN1", "MARA-EAN11"),
            FieldMapping("MMSHFL", "MARA-MHDRZ", convert="toInteger"),
            FieldMapping("MMSAEL", "MARA-MHDLP", convert="toInteger"),
            FieldMapping("MMRGDT", "MARA-ERDAT", convert="toDate"),
            FieldMapping("MMDIVI", "MARA-SPART"),
            # MITFAC facility planning
            FieldMapping("M9FACI", "MARC-WERKS"),
            FieldMapping("M9ORQA", "MARC-DISMM", value_map={"1": "PD", "2": "VB", "3": "ND", "4": "VV"}),
            FieldMapping("M9PLCD", "MARC-DISPO"),
            FieldMapping("M9LOQT", "MARC-DISLS", value_map={"1": "EX", "2": "FX", "3": "WB"}),
            FieldMapping("M9SSQT", "MARC-EISBE", convert="toDecimal"),
            FieldMapping("M9REOP", "MARC-MINBE", convert="toDecimal"),
            FieldMapping("M9LEAT", "MARC-PLIFZ", convert="toInteger"),
            FieldMapping("M9BUYE", "MARC-EKGRP"),
            # MITBAL warehouse balances
            FieldMapping("MBWHLO", "MARD-LGORT"),
            FieldMapping("MBSTQT", "MARD-LABST", convert="toDecimal"),
            FieldMapping("MBQUQT", "MARD-INSME", convert="toDecimal"),
            FieldMapping("MBBLQT", "MARD-SPEME", convert="toDecimal"),
            FieldMapping("MBALQT", "MARD-UMLME", convert="toDecimal"),
            # MITVEN item/supplier
            FieldMapping("IFSUNO", "EINA-LIFNR", convert="padLeft10"),
            FieldMapping("IFSITE", "EINE-WERKS"),
            FieldMapping("IFPUPR", "EINE-NETPR", convert="toDecimal"),
            FieldMapping("IFCUCD", "EINE-WAERS"),
            FieldMapping("IFLEAD", "EINE-APLFZ", convert="toInteger"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["MARA-MATNR", "MARA-MTART", "MARA-MEINS", "MAKT-MAKTX"],
            exact_duplicate=["MARA-MATNR", "MARC-WERKS", "MARD-LGORT"],
        )

    def extract_mock(self, rng):
        item_types = ["1", "2", "3", "4", "3"]
        units = ["KG", "EA", "L", "M", "PC"]
        facilities = ["F01", "F02", "F03"]
        suppliers = ["SUP001", "SUP002", "SUP003"]

        records = []
        for i in range(1, 16):
            c = i - 1
            item_type = item_types[c % 5]
            facility = facilities[c % 3]
            records.append({
                "MMITNO": f"M3ITM{i:04d}",
                "MMITDS": f"M3 Item {i} - {ITEM_TYPE_NAMES[item_type]}",
                "MMFUDS": f"M3 Item {i} English Description",
                "MMUNMS": units[c % 5],
                "MMITTY": item_type,
                "MMITGR": f"MI{c % 5 + 1:03d}",
                "MMITCL": "M",
                "MMGRWE": f"{rng.uniform(0.5, 50.5):.3f}",
                "MMNEWE": f"{rng.uniform(0.3, 40.3):.3f}",
                "MMUNWE": "KG",
                "MMVOL3": f"{rng.uniform(0.1, 20.1):.3f}",
                "MMUNVO": "L",
                "MMPROD": f"PG{c % 8 + 1:02d}",
                "MMSPE1": f"LEGACY-{i}" if i <= 3 else "",
                "MMSTAT": "50" if i == 15 else "20",
                "MMHIE1": f"H1-{c % 4 + 1:02d}",
                "MMHIE2": f"H2-{c % 6 + 1:02d}",
                "MMHIE3": "",
                "MMEAN1": f"789{i:010d}",
                "MMSHFL": 365 if i % 3 == 0 else 0,
                "MMSAEL": 180 if i % 3 == 0 else 0,
                "MMRGDT": "20190315",
                "MMDIVI": f"D{c % 3 + 1}",
                "M9FACI": facility,
                "M9ORQA": str(c % 4 + 1),
                "M9PLCD": f"PL{c % 5 + 1:02d}",
                "M9LOQT": str(c % 3 + 1),
                "M9SSQT": str(rng.randint(10, 109)),
                "M9REOP": str(rng.randint(50, 249)),
                "M9LEAT": str(rng.randint(1, 14)),
                "M9BUYE": f"BY{c % 4 + 1:02d}",
                "MBWHLO": "WH01" if c % 2 == 0 else "WH02",
                "MBSTQT": str(rng.randint(100, 5099)),
                "MBQUQT": str(rng.randint(0, 49)) if i % 5 == 0 else "0",
                "MBBLQT": str(rng.randint(0, 19)) if i % 7 == 0 else "0",
                "MBALQT": str(rng.randint(0, 99)) if i % 4 == 0 else "0",
                "IFSUNO": suppliers[c % 3],
                "IFSITE": facility,
                "IFPUPR": f"{rng.uniform(5, 505):.2f}",
                "IFCUCD": "EUR" if i % 4 == 0 else "USD",
                "IFLEAD": str(rng.randint(3, 23)),
            })
        return records


INFOR_M3_OBJECTS = (InforM3Customer, InforM3Vendor, InforM3GLAccount, InforM3GLJournal, InforM3ItemMaster)
