"""
Book ORM Model
==============

The ``Book`` ORM model represents a catalog entry with a mandatory PDF and an
optional poster image. Only the on-disk file names are stored; public URLs are
derived from ``PUBLIC_BASE_URL`` when the record is serialized.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, TEXT, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from aila_admin.database.config.connection_engine import declarativeBase


class Book(declarativeBase):
    """
    ORM model for the `book` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    title : str
        Title (required).
    author : str | None
        Author name.
    description : str | None
        Free-text description.
    pdf_filename : str | None
        On-disk name of the PDF inside the upload directory.
    poster_filename : str | None
        On-disk name of the poster image inside the upload directory.
    created_at : datetime
        Creation timestamp (UTC).
    """

    __tablename__ = "book"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str] = mapped_column(TEXT, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    pdf_filename: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    poster_filename: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(
        self,
        title: str,
        pdf_filename: str,
        author: Optional[str] = None,
        description: Optional[str] = None,
        poster_filename: Optional[str] = None,
    ):
        self.id = uuid.uuid4()
        self.title = title
        self.author = author
        self.description = description
        self.pdf_filename = pdf_filename
        self.poster_filename = poster_filename
        self.created_at = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"Book: id:{self.id}, title: {self.title}, pdf: {self.pdf_filename}"
