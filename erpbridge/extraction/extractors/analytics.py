"""Business warehouse extractors."""

from typing import Any, Dict, List

from ..base import ExpectedTable, ExtractorRun, Subject, TableExtractorSpec
from ...models.results import ExtractorCategory


class BwExtractor(TableExtractorSpec):
    extractor_id = "BW_EXTRACTORS"
    name = "BW Data Sources"
    module = "BW"
    category = ExtractorCategory.INTERFACE
    expected_tables = (
        ExpectedTable("RSOLTPSOURCE", "DataSources", critical=True),
        ExpectedTable("RSTRANRULE", "Transformation rules", critical=True),
        ExpectedTable("RSDCUBEMULTI", "InfoCubes in MultiProviders", critical=True),
        ExpectedTable("RSDIOBJ", "InfoObjects", critical=True),
        ExpectedTable("RSPC", "Process chains"),
    )
    subjects = (
        Subject("dataSources", "RSOLTPSOURCE", ("OLTPSOURCE", "OBJVERS", "TYPE", "APPLNM")),
        Subject("transformations", "RSTRANRULE", ("TRANID", "RULEID")),
        Subject("multiProviders", "RSDCUBEMULTI", ("INFOCUBE", "PARTCUBE")),
        Subject("infoObjects", "RSDIOBJ", ("IOBJNM", "IOBJTP")),
        Subject("processChains", "RSPC", ("CHAIN_ID", "TYPE")),
    )
    primary_subject = "dataSources"

    def fixtures(self, run: ExtractorRun) -> Dict[str, List[Dict[str, Any]]]:
        sources = [("0FI_GL_4", "FI-GL"), ("2LIS_11_VAITM", "SD"), ("0MATERIAL_ATTR", "MM")]
        return {
            "dataSources": [{"OLTPSOURCE": s, "OBJVERS": "A", "TYPE": "TRAN", "APPLNM": a} for s, a in sources],
            "transformations": [{"TRANID": f"T{i:031d}", "RULEID": str(i)} for i in range(1, 3)],
            "multiProviders": [{"INFOCUBE": "ZMP_SALES", "PARTCUBE": "ZSD_C01"}],
            "infoObjects": [{"IOBJNM": n, "IOBJTP": "CHA"} for n in ("0MATERIAL", "0CUSTOMER", "0COMP_CODE")],
            "processChains": [{"CHAIN_ID": "ZPC_DAILY_SALES", "TYPE": "TRIGGER"}],
        }
