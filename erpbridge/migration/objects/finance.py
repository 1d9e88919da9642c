"""SAP ECC financial accounting migration objects."""

from typing import List

from ..field_mapping import FieldMapping
from ..quality import QualityChecks, RangeCheck
from .common import ECCObjectSpec, month


GL_ACCOUNTS = [
    # account, text, group, balance sheet, open items, reconciliation
    ("100000", "Petty Cash", "CASH", "X", "X", ""),
    ("110000", "Bank Account - Main", "BANK", "X", "X", ""),
    ("113100", "Accounts Receivable", "RECV", "X", "X", "D"),
    ("140000", "Raw Materials Inventory", "INVT", "X", "", ""),
    ("150000", "Fixed Assets", "FAAA", "X", "", ""),
    ("154000", "Accumulated Depreciation", "FAAA", "X", "", ""),
    ("160000", "Prepaid Expenses", "PREP", "X", "", ""),
    ("200000", "Accounts Payable", "PAYB", "X", "X", "K"),
    ("210000", "Accrued Expenses", "ACCR", "X", "", ""),
    ("220000", "Tax Payable", "TAXP", "X", "", ""),
    ("250000", "Long-term Debt", "DEBT", "X", "X", ""),
    ("290000", "Retained Earnings", "EQTY", "X", "", ""),
    ("400000", "Sales Revenue - Domestic", "REVN", "", "", ""),
    ("410000", "Sales Revenue - Export", "REVN", "", "", ""),
    ("420000", "Sales Returns", "REVN", "", "", ""),
    ("430000", "Other Income", "OTHI", "", "", ""),
    ("500000", "Cost of Goods Sold", "COGS", "", "", ""),
    ("510000", "Material Costs", "MATC", "", "", ""),
    ("600000", "Salaries & Wages", "PERS", "", "", ""),
    ("610000", "Benefits", "PERS", "", "", ""),
    ("620000", "Travel Expenses", "TRVL", "", "", ""),
    ("630000", "Office Supplies", "OFFC", "", "", ""),
    ("640000", "Depreciation Expense", "DEPR", "", "", ""),
    ("650000", "Rent Expense", "RENT", "", "", ""),
    ("700000", "Interest Expense", "FEXP", "", "", ""),
    ("800000", "Tax Expense", "TAXE", "", "", ""),
    ("890000", "Clearing Account", "CLER", "X", "X", ""),
    ("891000", "GR/IR Clearing", "GRIR", "X", "X", ""),
]


class GLAccountMaster(ECCObjectSpec):
    object_id = "GL_ACCOUNT_MASTER"
    name = "GL Account Master"
    source_table = "SKA1"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Chart of accounts level (SKA1/SKAT)
            FieldMapping("KTOPL", "ChartOfAccounts"),
            FieldMapping("SAKNR", "GLAccount", convert="padLeft10"),
            FieldMapping("GVTYP", "PLStatementAccountType"),
            FieldMapping("KTOKS", "GLAccountGroup"),
            FieldMapping("XBILK", "IsBalanceSheetAccount", convert="toBoolean"),
            FieldMapping("TXT20", "GLAccountShortText"),
            FieldMapping("TXT50", "GLAccountLongText"),
            FieldMapping("SPRAS", "Language", convert="toUpperCase"),
            FieldMapping("XLOEV", "IsMarkedForDeletion", convert="toBoolean"),
            FieldMapping("XSPEB", "IsBlockedForCreation", convert="toBoolean"),
            # Company code level (SKB1)
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("WAERS", "AccountCurrency"),
            FieldMapping("MWSKZ", "TaxCategory"),
            FieldMapping("XOPVW", "IsOpenItemManaged", convert="toBoolean"),
            FieldMapping("XKRES", "IsLineItemDisplay", convert="toBoolean"),
            FieldMapping("MITKZ", "ReconciliationAccountType"),
            FieldMapping("HBKID", "HouseBank"),
            FieldMapping("HKTID", "HouseBankAccountID"),
            FieldMapping("XGKON", "IsCashFlowRelevant", convert="toBoolean"),
            FieldMapping("BEGRU", "AuthorizationGroup"),
            FieldMapping("XSALH", "IsSalesRelevant", convert="toBoolean"),
            FieldMapping("ERDAT", "CreationDate", convert="toDate"),
            FieldMapping("USNAM", "CreatedByUser"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["ChartOfAccounts", "GLAccount", "GLAccountGroup", "CompanyCode"],
            exact_duplicate=["ChartOfAccounts", "GLAccount", "CompanyCode"],
        )

    def extract_mock(self, rng):
        return [
            {
                "KTOPL": "CAUS",
                "SAKNR": account,
                "GVTYP": "" if balance_sheet else "P",
                "KTOKS": group,
                "XBILK": balance_sheet,
                "TXT20": text[:20],
                "TXT50": text,
                "SPRAS": "EN",
                "XLOEV": "",
                "XSPEB": "",
                "BUKRS": company,
                "WAERS": "USD",
                "MWSKZ": "V" if account[0] in "45" else "",
                "XOPVW": open_items,
                "XKRES": "X",
                "MITKZ": recon,
                "HBKID": "MAIN" if group == "BANK" else "",
                "HKTID": "001" if group == "BANK" else "",
                "XGKON": "X" if group in ("BANK", "CASH") else "",
                "BEGRU": "",
                "XSALH": "X" if account.startswith("4") else "",
                "ERDAT": "20150101",
                "USNAM": "MIGRATION",
            }
            for company in ("1000", "2000")
            for account, text, group, balance_sheet, open_items, recon in GL_ACCOUNTS
        ]


class GLBalance(ECCObjectSpec):
    """Period balances from the new general ledger totals table."""

    object_id = "GL_BALANCE"
    name = "GL Balance"
    source_table = "FAGLFLEXT"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("RBUKRS", "CompanyCode"),
            FieldMapping("RACCT", "GLAccount", convert="padLeft10"),
            FieldMapping("RYEAR", "FiscalYear", convert="toInteger"),
            FieldMapping("RPMAX", "PostingPeriod", convert="toInteger"),
            FieldMapping("RLDNR", "Ledger", default="0L"),
            FieldMapping("RTCUR", "TransactionCurrency"),
            FieldMapping("HSLVT", "BalanceCarryForward", convert="toDecimal"),
            FieldMapping("HSL", "PeriodBalance", convert="toDecimal"),
            FieldMapping("TSL", "BalanceInTransactionCurrency", convert="toDecimal"),
            FieldMapping("DRCRK", "DebitCreditIndicator", default="S"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("RBUSA", "BusinessArea"),
            FieldMapping("SEGMENT", "Segment"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["CompanyCode", "GLAccount", "FiscalYear", "TransactionCurrency"],
            exact_duplicate=["CompanyCode", "GLAccount", "FiscalYear", "PostingPeriod", "ProfitCenter"],
            ranges=[RangeCheck("PostingPeriod", 1, 16)],
        )

    def extract_mock(self, rng):
        records = []
        for company, currency in (("1000", "USD"), ("2000", "EUR")):
            for i, (account, _, _, balance_sheet, _, _) in enumerate(GL_ACCOUNTS[:15]):
                carry_forward = rng.uniform(1000, 250000) if balance_sheet else 0.0
                period = rng.uniform(-20000, 20000)
                balance = carry_forward + period
                records.append({
                    "RBUKRS": company,
                    "RACCT": account,
                    "RYEAR": "2024",
                    "RPMAX": "12",
                    "RLDNR": "0L",
                    "RTCUR": currency,
                    "HSLVT": f"{carry_forward:.2f}",
                    "HSL": f"{balance:.2f}",
                    "TSL": f"{balance:.2f}",
                    "DRCRK": "S" if balance >= 0 else "H",
                    "PRCTR": f"PC{i % 5 + 1:04d}",
                    "RBUSA": "BU01",
                    "SEGMENT": "SEG1",
                })
        return records


def _open_item_mappings(partner_source: str, partner_target: str) -> List[FieldMapping]:
    return [
        FieldMapping("BUKRS", "CompanyCode"),
        FieldMapping(partner_source, partner_target),
        FieldMapping("UMSKZ", "SpecialGLTransactionType"),
        FieldMapping("ZUONR", "AssignmentReference"),
        FieldMapping("GJAHR", "FiscalYear"),
        FieldMapping("BELNR", "DocumentNumber"),
        FieldMapping("BUZEI", "LineItem"),
        FieldMapping("BUDAT", "PostingDate", convert="toDate"),
        FieldMapping("BLDAT", "DocumentDate", convert="toDate"),
        FieldMapping("WAERS", "TransactionCurrency"),
        FieldMapping("BLART", "DocumentType"),
        FieldMapping("MONAT", "PostingPeriod"),
        FieldMapping("BSCHL", "PostingKey"),
        FieldMapping("HKONT", "GLAccount", convert="padLeft10"),
        FieldMapping("DMBTR", "AmountInCompanyCodeCurrency", convert="toDecimal"),
        FieldMapping("WRBTR", "AmountInTransactionCurrency", convert="toDecimal"),
        FieldMapping("SHKZG", "DebitCreditIndicator"),
        FieldMapping("MWSKZ", "TaxCode"),
        FieldMapping("MWSTS", "TaxAmount", convert="toDecimal"),
        FieldMapping("ZFBDT", "BaselineDateForDueDate", convert="toDate"),
        FieldMapping("ZTERM", "PaymentTerms"),
        FieldMapping("ZBD1T", "CashDiscountDays1", convert="toInteger"),
        FieldMapping("ZBD3T", "NetPaymentDays", convert="toInteger"),
        FieldMapping("ZBD1P", "CashDiscountPercent1", convert="toDecimal"),
        FieldMapping("SGTXT", "ItemText"),
        FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
        FieldMapping("GSBER", "BusinessArea"),
        FieldMapping("SEGMENT", "Segment"),
    ]


def _open_item_checks(partner_target: str) -> QualityChecks:
    return QualityChecks(
        required=["CompanyCode", partner_target, "DocumentNumber", "FiscalYear", "AmountInCompanyCodeCurrency"],
        exact_duplicate=["CompanyCode", "DocumentNumber", "FiscalYear", "LineItem"],
    )


class CustomerOpenItem(ECCObjectSpec):
    object_id = "CUSTOMER_OPEN_ITEM"
    name = "Customer Open Items"
    source_table = "BSID"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            *_open_item_mappings("KUNNR", "Customer"),
            FieldMapping("VBELN", "SalesDocument"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return _open_item_checks("Customer")

    def extract_mock(self, rng):
        doc_types = ["RV", "DZ", "DR", "DG"]
        records = []
        for i in range(40):
            customer = f"CUST{i % 10 + 1:03d}"
            doc_type = doc_types[i % 4]
            document = str(1900000001 + i)
            amount = rng.uniform(100, 50100)
            records.append({
                "BUKRS": "1000" if i < 30 else "2000",
                "KUNNR": customer,
                "UMSKZ": "A" if i % 10 == 0 else "",
                "ZUONR": f"INV-{document[-6:]}",
                "GJAHR": "2024",
                "BELNR": document,
                "BUZEI": "001",
                "BUDAT": f"2024{month(i)}15",
                "BLDAT": f"2024{month(i)}10",
                "WAERS": "USD" if i < 35 else "EUR",
                "BLART": doc_type,
                "MONAT": month(i),
                "BSCHL": "15" if doc_type == "DZ" else "01",
                "HKONT": "113100",
                "DMBTR": f"{amount:.2f}",
                "WRBTR": f"{amount:.2f}",
                "SHKZG": "H" if doc_type in ("DZ", "DG") else "S",
                "MWSKZ": "O1",
                "MWSTS": f"{amount * 0.1:.2f}",
                "ZFBDT": f"2024{month(i)}15",
                "ZTERM": "Z030",
                "ZBD1T": "10",
                "ZBD3T": "30",
                "ZBD1P": "2.00",
                "SGTXT": f"Invoice for {customer}",
                "VBELN": f"80{document[-6:]}",
                "PRCTR": f"PC{i % 5 + 1:04d}",
                "GSBER": "BU01",
                "SEGMENT": "SEG1",
            })
        return records


class VendorOpenItem(ECCObjectSpec):
    object_id = "VENDOR_OPEN_ITEM"
    name = "Vendor Open Items"
    source_table = "BSIK"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            *_open_item_mappings("LIFNR", "Supplier"),
            FieldMapping("EBELN", "PurchaseOrder"),
            FieldMapping("EBELP", "PurchaseOrderItem"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return _open_item_checks("Supplier")

    def extract_mock(self, rng):
        doc_types = ["RE", "KZ", "KR", "KG"]
        records = []
        for i in range(35):
            vendor = f"VEND{i % 8 + 1:03d}"
            doc_type = doc_types[i % 4]
            document = str(5100000001 + i)
            amount = rng.uniform(200, 80200)
            records.append({
                "BUKRS": "1000" if i < 25 else "2000",
                "LIFNR": vendor,
                "UMSKZ": "A" if i % 12 == 0 else "",
                "ZUONR": f"PO-{document[-6:]}",
                "GJAHR": "2024",
                "BELNR": document,
                "BUZEI": "001",
                "BUDAT": f"2024{month(i)}20",
                "BLDAT": f"2024{month(i)}15",
                "WAERS": "USD" if i < 30 else "EUR",
                "BLART": doc_type,
                "MONAT": month(i),
                "BSCHL": "25" if doc_type == "KZ" else "31",
                "HKONT": "200000",
                "DMBTR": f"{amount:.2f}",
                "WRBTR": f"{amount:.2f}",
                "SHKZG": "S" if doc_type in ("KZ", "KG") else "H",
                "MWSKZ": "V1",
                "MWSTS": f"{amount * 0.1:.2f}",
                "ZFBDT": f"2024{month(i)}20",
                "ZTERM": "Z045",
                "ZBD1T": "14",
                "ZBD3T": "45",
                "ZBD1P": "3.00",
                "SGTXT": f"Invoice from {vendor}",
                "EBELN": f"45{document[-8:]}",
                "EBELP": "00010",
                "PRCTR": f"PC{i % 5 + 1:04d}",
                "GSBER": "BU01",
                "KOSTL": f"CC{i % 10 + 1:04d}",
                "SEGMENT": "SEG1",
            })
        return records


ASSET_CLASSES = [
    # class, label, depreciation key, useful life, base value
    ("1000", "Buildings", "LINA", 40, 500000),
    ("2000", "Machinery", "LINA", 10, 80000),
    ("3000", "Vehicles", "DGRS", 5, 35000),
    ("3100", "IT Equipment", "LINA", 3, 5000),
    ("4000", "Furniture", "LINA", 8, 3000),
]

ASSET_DESCRIPTIONS = [
    "Office Building Main", "Production Machine A", "Delivery Truck", "Server Rack", "Office Desk",
    "Warehouse", "CNC Machine", "Forklift", "Laptop Fleet", "Conference Table",
    "Parking Garage", "Assembly Robot", "Company Van", "Network Switch", "Ergonomic Chair",
    "Factory Hall B", "Lathe Machine", "Crane Truck", "Storage Array", "Filing Cabinet",
    "Gate House", "Press Machine", "Electric Vehicle", "UPS System", "Standing Desk",
    "Annex Building", "Welding Station", "Refrigerated Truck", "Firewall Appliance", "Bookshelf",
]


def _asset_values(number: int):
    """Class, useful life, acquisition value and accumulated depreciation of a mock asset."""
    asset_class, label, key, life, base = ASSET_CLASSES[(number - 1) % 5]
    value = base + number * 1500
    years = min(number % life + 1, life)
    accumulated = value / life * years
    return asset_class, label, key, life, value, years, accumulated


class FixedAsset(ECCObjectSpec):
    object_id = "FIXED_ASSET"
    name = "Fixed Asset"
    source_table = "ANLA"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Master data (ANLA)
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("ANLN1", "MasterFixedAsset", convert="padLeft12"),
            FieldMapping("ANLN2", "FixedAsset", convert="padLeft4"),
            FieldMapping("ANLKL", "AssetClass"),
            FieldMapping("TXT50", "AssetDescription"),
            FieldMapping("SERNR", "SerialNumber"),
            FieldMapping("INVNR", "InventoryNumber"),
            FieldMapping("AKTIV", "CapitalizationDate", convert="toDate"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("STORT", "AssetLocation"),
            FieldMapping("LAND1", "Country", convert="toUpperCase"),
            FieldMapping("MENGE", "Quantity", convert="toDecimal"),
            FieldMapping("MEINS", "BaseUnit"),
            # Depreciation area (ANLB)
            FieldMapping("AFABE", "DepreciationArea"),
            FieldMapping("AFABG", "DepreciationStartDate", convert="toDate"),
            FieldMapping("AFASL", "DepreciationKey"),
            FieldMapping("NDJAR", "UsefulLife", convert="toInteger"),
            FieldMapping("SCHRW", "ScrapValue", convert="toDecimal"),
            # Accumulated values (ANLC)
            FieldMapping("KANSW", "AcquisitionValue", convert="toDecimal"),
            FieldMapping("KNAFA", "AccumulatedDepreciation", convert="toDecimal"),
            FieldMapping("NAFAZ", "OrdinaryDepCurrentYear", convert="toDecimal"),
            FieldMapping("NBW", "NetBookValue", convert="toDecimal"),
            FieldMapping("GJAHR", "FiscalYear", convert="toInteger"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["CompanyCode", "MasterFixedAsset", "AssetClass", "CapitalizationDate"],
            exact_duplicate=["CompanyCode", "MasterFixedAsset", "FixedAsset", "DepreciationArea"],
            ranges=[RangeCheck("UsefulLife", 1, 99), RangeCheck("FiscalYear", 1990, 2030)],
        )

    def extract_mock(self, rng):
        records = []
        for number in range(1, 31):
            asset_class, _, _, life, value, years, accumulated = _asset_values(number)
            company = "1000" if number <= 20 else "2000"
            for area in ("01", "15"):
                records.append({
                    "BUKRS": company,
                    "ANLN1": str(number),
                    "ANLN2": "0",
                    "ANLKL": asset_class,
                    "TXT50": ASSET_DESCRIPTIONS[number - 1],
                    "SERNR": f"SN-{number:06d}" if number % 3 == 0 else "",
                    "INVNR": f"INV-{number:06d}",
                    "AKTIV": f"{2024 - years}0101",
                    "KOSTL": f"CC{company[:2]}01",
                    "PRCTR": f"PC{company[:2]}01",
                    "WERKS": company,
                    "STORT": f"LOC{number % 5 + 1:02d}",
                    "LAND1": "US",
                    "MENGE": str(5 + number % 20) if asset_class == "3100" else "1",
                    "MEINS": "EA",
                    "AFABE": area,
                    "AFABG": f"{2024 - years}0101",
                    "AFASL": "LINA" if area == "01" else "LINT",
                    "NDJAR": life,
                    "SCHRW": f"{value * 0.05:.2f}",
                    "KANSW": f"{value:.2f}",
                    "KNAFA": f"{accumulated:.2f}",
                    "NAFAZ": f"{value / life:.2f}",
                    "NBW": f"{value - accumulated:.2f}",
                    "GJAHR": 2024,
                })
        return records


class AssetAcquisition(ECCObjectSpec):
    object_id = "ASSET_ACQUISITION"
    name = "Asset Acquisition"
    source_table = "ANLA"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("ANLN1", "AssetMainNumber"),
            FieldMapping("ANLN2", "AssetSubNumber"),
            FieldMapping("ANLKL", "AssetClass"),
            FieldMapping("AKTIV", "CapitalizationDate", convert="toDate"),
            FieldMapping("AFABG", "OrdDepreciationStartDate", convert="toDate"),
            FieldMapping("TXA50", "AssetDescription"),
            FieldMapping("TXT50", "AdditionalDescription"),
            FieldMapping("ANSWL", "AcquisitionValue", convert="toDecimal"),
            FieldMapping("NAFAB", "AccumDepreciation", convert="toDecimal"),
            FieldMapping("NDJAR", "PlannedUsefulLife", convert="toInteger"),
            FieldMapping("AFASL", "DepreciationKey"),
            FieldMapping("KOSTL", "CostCenter", convert="padLeft10"),
            FieldMapping("PRCTR", "ProfitCenter", convert="padLeft10"),
            FieldMapping("GSBER", "BusinessArea"),
            FieldMapping("SEGMENT", "Segment"),
            FieldMapping("WAERS", "Currency"),
            FieldMapping("INVNR", "InventoryNumber"),
            FieldMapping("WERKS", "Plant"),
            FieldMapping("SERNR", "SerialNumber"),
            FieldMapping("GJAHR", "FiscalYear", convert="toInteger"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["CompanyCode", "AssetMainNumber", "AssetClass", "AcquisitionValue"],
            exact_duplicate=["CompanyCode", "AssetMainNumber", "AssetSubNumber"],
        )

    def extract_mock(self, rng):
        plants = ["1000", "1000", "2000", "1000", "2000"]
        cost_centers = ["CC1001", "CC1002", "CC2001", "CC1003", "CC2002"]
        records = []
        for number in range(1, 31):
            asset_class, label, key, life, value, years, accumulated = _asset_values(number)
            index = (number - 1) % 5
            asset = f"{number:08d}"
            description = ASSET_DESCRIPTIONS[number - 1]
            records.append({
                "BUKRS": "1000" if number <= 20 else "2000",
                "ANLN1": asset,
                "ANLN2": "0000",
                "ANLKL": asset_class,
                "AKTIV": f"{2024 - years}0101",
                "AFABG": f"{2024 - years}0201",
                "TXA50": description,
                "TXT50": f"{description} - {label}",
                "ANSWL": f"{value:.2f}",
                "NAFAB": f"{accumulated:.2f}",
                "NDJAR": life,
                "AFASL": key,
                "KOSTL": cost_centers[index],
                "PRCTR": f"PC{index + 1:04d}",
                "GSBER": "BU01",
                "SEGMENT": f"SEG{(number + 9) // 10}",
                "WAERS": "USD",
                "INVNR": f"INV-{asset}",
                "WERKS": plants[index],
                "SERNR": f"SN-{asset}" if number % 4 == 0 else "",
                "GJAHR": 2024,
            })
        return records


BANKS = {
    "US": [
        ("JPMorgan Chase Bank", "CHASUS33", "021000021", "New York"),
        ("Bank of America", "BOFAUS3N", "026009593", "Charlotte"),
        ("Wells Fargo Bank", "WFBIUS6S", "121000248", "San Francisco"),
        ("Citibank", "CITIUS33", "021000089", "New York"),
        ("US Bank", "USBKUS44", "091000022", "Minneapolis"),
        ("PNC Bank", "PNCCUS33", "043000096", "Pittsburgh"),
        ("Capital One", "HIBKUS33", "051405515", "McLean"),
        ("TD Bank", "TDOMUS33", "031101266", "Cherry Hill"),
    ],
    "DE": [
        ("Deutsche Bank", "DEUTDEFF", "50070010", "Frankfurt"),
        ("Commerzbank", "COBADEFF", "50040000", "Frankfurt"),
        ("DZ Bank", "GENODEFF", "50060400", "Frankfurt"),
        ("KfW Bankengruppe", "KFWIDEFF", "50020400", "Frankfurt"),
        ("Sparkasse Frankfurt", "HELADEF1822", "50050201", "Frankfurt"),
        ("HypoVereinsbank", "HYVEDEMM", "70020270", "Munich"),
    ],
    "GB": [
        ("HSBC UK", "HBUKGB4B", "400515", "London"),
        ("Barclays Bank", "BARCGB22", "203301", "London"),
        ("Lloyds Banking Group", "LOYDGB2L", "309634", "London"),
        ("NatWest", "NWBKGB2L", "600000", "London"),
        ("Standard Chartered", "SCBLGB2L", "609242", "London"),
        ("Santander UK", "ABBYGB2L", "090128", "London"),
    ],
}

BANK_COUNTRY_SETTINGS = {
    # company code, currency, payment method
    "US": ("1000", "USD", "T"),
    "DE": ("2000", "EUR", "U"),
    "GB": ("3000", "GBP", "B"),
}


class BankMaster(ECCObjectSpec):
    object_id = "BANK_MASTER"
    name = "Bank Master"
    source_table = "BNKA"

    def field_mappings(self) -> List[FieldMapping]:
        return [
            # Bank directory (BNKA)
            FieldMapping("BANKS", "BankCountry", convert="toUpperCase"),
            FieldMapping("BANKL", "BankNumber"),
            FieldMapping("BANKA", "BankName"),
            FieldMapping("ORT01", "BankCity"),
            FieldMapping("SWIFT", "SWIFTCode"),
            FieldMapping("LOEVM", "IsMarkedForDeletion", convert="toBoolean"),
            # Account data (TIBAN)
            FieldMapping("BANKN", "BankAccountNumber"),
            FieldMapping("IBAN", "IBANNumber"),
            FieldMapping("KOINH", "AccountHolderName"),
            FieldMapping("KOVON", "BankValidFrom", convert="toDate"),
            FieldMapping("KOBIS", "BankValidTo", convert="toDate"),
            FieldMapping("XEZER", "IsMainBankAccount", convert="toBoolean"),
            # House bank (T012/T012K)
            FieldMapping("BUKRS", "CompanyCode"),
            FieldMapping("HBKID", "HouseBank"),
            FieldMapping("HKTID", "HouseBankAccount"),
            FieldMapping("WAERS", "BankAccountCurrency"),
            FieldMapping("ZLSCH", "PaymentMethod"),
            *self.metadata_mappings(),
        ]

    def quality_checks(self) -> QualityChecks:
        return QualityChecks(
            required=["BankCountry", "BankNumber", "BankName"],
            exact_duplicate=["BankCountry", "BankNumber"],
        )

    def extract_mock(self, rng):
        records = []
        index = 0
        for country, banks in BANKS.items():
            company, currency, method = BANK_COUNTRY_SETTINGS[country]
            for position, (name, swift, sort_code, city) in enumerate(banks):
                index += 1
                account = str(1000000000 + index * 1234567)[:10]
                records.append({
                    "BANKS": country,
                    "BANKL": sort_code,
                    "BANKA": name,
                    "ORT01": city,
                    "SWIFT": swift,
                    "LOEVM": "",
                    "BANKN": account,
                    "IBAN": f"{country}{89 + index}{sort_code}{account}"[:22],
                    "KOINH": name,
                    "KOVON": "20200101",
                    "KOBIS": "99991231",
                    "XEZER": "X" if position == 0 else "",
                    "BUKRS": company,
                    "HBKID": f"HB{index:02d}",
                    "HKTID": f"HA{index:02d}",
                    "WAERS": currency,
                    "ZLSCH": method,
                })
        return records


FINANCE_OBJECTS = (
    GLAccountMaster, GLBalance, CustomerOpenItem, VendorOpenItem,
    FixedAsset, AssetAcquisition, BankMaster,
)
