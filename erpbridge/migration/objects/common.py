"""Helpers shared by the SAP ECC migration objects."""

from ..base import MigrationObjectSpec


class ECCObjectSpec(MigrationObjectSpec):
    """Migration object read from an SAP ECC system."""
    source_system = "ECC"


def month(i: int) -> str:
    """Two-digit month cycling through the year for mock row ``i``."""
    return f"{i % 12 + 1:02d}"


CUSTOMER_ROLE = "FLCU01"
VENDOR_ROLE = "FLVN01"
