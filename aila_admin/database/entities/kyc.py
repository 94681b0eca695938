"""
KYC Submission ORM Model
========================

The ``KycSubmission`` model maps the ``lawyer_kycs`` table of the lawyer
database: a lawyer's identity document and practice licence, awaiting review.

Status lifecycle
~~~~~~~~~~~~~~~~
``pending`` → ``accepted`` or ``pending`` → ``rejected``. Terminal statuses are
never reverted; a rejection always carries a non-empty reason.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, TEXT, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from aila_admin.database.config.connection_engine import lawyerDeclarativeBase

KYC_PENDING = "pending"
KYC_ACCEPTED = "accepted"
KYC_REJECTED = "rejected"
KYC_STATUSES = (KYC_PENDING, KYC_ACCEPTED, KYC_REJECTED)


class KycSubmission(lawyerDeclarativeBase):
    """
    ORM model for the `lawyer_kycs` table (lawyer database).

    Attributes
    ----------
    id : UUID
        Primary key.
    lawyer_id : UUID
        The submitting lawyer (`lawyers.id`).
    id_document_url, id_document_name, id_document_uploaded_at
        Identity document reference.
    license_document_url, license_document_name, license_document_uploaded_at
        Licence document reference.
    status : str
        One of `KYC_STATUSES`.
    rejection_reason : str
        Reason given on rejection ("" otherwise).
    submitted_at, created_at, updated_at : datetime
        Lifecycle timestamps (UTC).
    """

    __tablename__ = "lawyer_kycs"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    lawyer_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    id_document_url: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    id_document_name: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    id_document_uploaded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    license_document_url: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    license_document_name: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    license_document_uploaded_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(TEXT, nullable=False, default=KYC_PENDING, index=True)
    rejection_reason: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(
        self,
        lawyer_id: UUID,
        id_document_url: Optional[str] = None,
        id_document_name: Optional[str] = None,
        license_document_url: Optional[str] = None,
        license_document_name: Optional[str] = None,
        submitted_at: Optional[datetime] = None,
    ):
        now = datetime.now(timezone.utc)
        self.id = uuid.uuid4()
        self.lawyer_id = lawyer_id
        self.id_document_url = id_document_url
        self.id_document_name = id_document_name
        self.id_document_uploaded_at = now if id_document_url else None
        self.license_document_url = license_document_url
        self.license_document_name = license_document_name
        self.license_document_uploaded_at = now if license_document_url else None
        self.status = KYC_PENDING
        self.rejection_reason = ""
        self.submitted_at = submitted_at or now
        self.created_at = now
        self.updated_at = now

    def __str__(self) -> str:
        return f"KYC: id:{self.id}, lawyer: {self.lawyer_id}, status: {self.status}"
