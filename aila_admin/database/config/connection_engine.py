"""
Connection Engines (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Creates the Engine of the main database (accounts, books, conversations).
- Creates the Engine of the lawyer database (lawyer directory records, KYC
  submissions). When `LAWYER_DATABASE_URL` is not set, the main Engine is reused.
- Defines one MetaData and one Declarative Base per logical database, so that
  tables of one database are never created on, or queried through, the other.

Notes
-----
- SQLite URLs get `check_same_thread=False`: FastAPI runs sync handlers in a
  threadpool and a pooled connection may be used from several threads.
- All ORM models must inherit from `declarativeBase` or `lawyerDeclarativeBase`.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.schema import MetaData
from aila_admin.database.config.config import settings


def build_engine(url: str) -> Engine:
    """Create an Engine for `url`, with the SQLite threading flag when needed."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


connection_engine = build_engine(settings.DATABASE_URL)
"""Engine object of the main database."""

if settings.LAWYER_DATABASE_URL and settings.LAWYER_DATABASE_URL != settings.DATABASE_URL:
    lawyer_connection_engine = build_engine(settings.LAWYER_DATABASE_URL)
else:
    lawyer_connection_engine = connection_engine
"""Engine object of the lawyer database (may be the main Engine)."""

metadata = MetaData()
"""Schema-level information for the main database tables."""

lawyer_metadata = MetaData()
"""Schema-level information for the lawyer database tables."""

declarativeBase = declarative_base(metadata=metadata)
"""Declarative Base of the main database models."""

lawyerDeclarativeBase = declarative_base(metadata=lawyer_metadata)
"""Declarative Base of the lawyer database models."""
