# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package."""
from complaint_broadcast.repositories.complaint_repository import (
    ComplaintStore,
    InMemoryComplaintStore,
    SqlComplaintStore,
)
from complaint_broadcast.repositories.system_config_repository import SystemConfigRepository

__all__ = [
    "ComplaintStore",
    "InMemoryComplaintStore",
    "SqlComplaintStore",
    "SystemConfigRepository",
]
