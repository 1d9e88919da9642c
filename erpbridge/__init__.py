"""
ERP Bridge

A migration-assistance toolkit for moving legacy ERP systems (SAP ECC,
Infor LN, Infor M3, Lawson) toward an SAP S/4HANA target.

Supports:
- Pluggable source adapters (SAP, Infor LN, Infor M3, mock) with telemetry
- Forensic extraction with checkpoints, coverage tracking and bounded concurrency
- Migration objects running extract, transform, validate and load phases
- A progress bus with replay history and server-sent events
- A safety gate that blocks write operations outside explicit live mode
- Migration planning from forensic results
"""

__version__ = "0.1.0"
