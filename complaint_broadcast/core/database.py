# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
SQLAlchemy engine, or None when no DATABASE_URL is configured.
"""

from sqlalchemy import create_engine

from complaint_broadcast.core.config import settings

engine = (
    create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )
    if settings.DATABASE_URL
    else None
)
