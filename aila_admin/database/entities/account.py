"""
Account ORM Model
=================

The ``Account`` ORM model represents a registered user of the platform. It maps
to the ``app_account`` table and contains credentials, profile, and the admin flag.

Key features
~~~~~~~~~~~~
- Portable UUID primary key (``id``)
- Unique lowercase ``username`` and ``email``
- Bcrypt password hash, never the plaintext
- Optional profile photo stored on disk (``photo_filename``)
- Contact details (``phone``, ``address``) defaulting to empty strings

"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import VARCHAR, Boolean, DateTime, TEXT, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from aila_admin.database.config.connection_engine import declarativeBase


class Account(declarativeBase):
    """
    ORM model for the `app_account` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    full_name : str
        Display name of the account holder.
    username : str
        Unique username, stored lowercase and trimmed.
    email : str
        Unique email address, stored lowercase.
    password : str
        Bcrypt hash of the password.
    is_admin : bool
        Whether the account may use the administrative routes.
    photo_filename : str | None
        On-disk name of the profile photo inside the upload directory.
    phone : str
        Contact phone number ("" when unknown).
    address : str
        Postal address ("" when unknown).
    created_at : datetime
        Registration timestamp (UTC).
    """

    __tablename__ = "app_account"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    full_name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    username: Mapped[str] = mapped_column(VARCHAR(255), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(VARCHAR(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(TEXT, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    photo_filename: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    phone: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    address: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(
        self,
        full_name: str,
        username: str,
        email: str,
        password: str,
        phone: str = "",
        address: str = "",
        is_admin: bool = False,
    ):
        """
        Initialize a new Account object.

        Parameters
        ----------
        full_name : str
            Display name.
        username : str
            Username; stored lowercase and trimmed.
        email : str
            Email; stored lowercase and trimmed.
        password : str
            Already hashed password.
        phone : str, optional
            Contact phone number.
        address : str, optional
            Postal address.
        is_admin : bool, optional
            Admin flag, False by default.
        """
        self.id = uuid.uuid4()
        self.full_name = full_name.strip()
        self.username = username.strip().lower()
        self.email = email.strip().lower()
        self.password = password
        self.is_admin = is_admin
        self.photo_filename = None
        self.phone = phone.strip()
        self.address = address.strip()
        self.created_at = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"Account: id:{self.id}, username: {self.username}, email: {self.email}, admin: {self.is_admin}"
