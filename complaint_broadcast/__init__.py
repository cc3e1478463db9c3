# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Complaint lifecycle and notification broadcast engine."""

__version__ = "1.0.0"
