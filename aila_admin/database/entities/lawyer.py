"""
Lawyer ORM Model
================

The ``Lawyer`` model maps the ``lawyers`` table of the lawyer database. These
records are owned by the lawyer-facing application: this backend reads,
updates and deletes them but never creates them, so every column other than
the primary key is optional.

``practice_areas`` and ``languages`` are JSON lists of strings.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime, Integer, TEXT, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from aila_admin.database.config.connection_engine import lawyerDeclarativeBase


class Lawyer(lawyerDeclarativeBase):
    """
    ORM model for the `lawyers` table (lawyer database).

    Attributes
    ----------
    id : UUID
        Primary key.
    email, name, bio, phone, office_address, role : str | None
        Profile fields.
    password : str | None
        Password hash set by the owning application; never returned by this API.
    practice_areas, languages : list[str] | None
        JSON lists.
    experience_years : int | None
        Years of practice.
    created_at : datetime | None
        Creation timestamp in the owning application.
    """

    __tablename__ = "lawyers"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    password: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    name: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    practice_areas: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    experience_years: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    office_address: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    languages: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    role: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __init__(self, **fields):
        """Create a record from keyword fields; used by imports and tests."""
        self.id = fields.pop("id", None) or uuid.uuid4()
        self.created_at = fields.pop("created_at", None) or datetime.now(timezone.utc)
        for key, value in fields.items():
            if not hasattr(type(self), key):
                raise TypeError(f"Unknown lawyer field: {key}")
            setattr(self, key, value)

    def __str__(self) -> str:
        return f"Lawyer: id:{self.id}, name: {self.name}, email: {self.email}"
