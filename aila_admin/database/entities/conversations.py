"""
Conversation ORM Model
=======================

The ``Conversation`` ORM model represents an account-owned chat thread stored
in the ``conversation`` table. Its turns live in ``conversation_turn``
(see ``turns.py``).

Key features
~~~~~~~~~~~~
- Portable UUID primary key (``id``)
- Foreign key to the owning account (``user_id`` → ``app_account.id``)
- Title, "New chat" unless given or derived from the first message
- Timezone-aware ``created_at`` / ``updated_at`` timestamps (UTC); ``updated_at``
  is refreshed by the service layer on every change to the thread
"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, TEXT, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from aila_admin.database.config.connection_engine import declarativeBase

DEFAULT_CONVERSATION_TITLE = "New chat"


class Conversation(declarativeBase):
    """
    ORM model for the `conversation` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    user_id : UUID
        Owner (`app_account.id`).
    title : str
        Human-readable title.
    created_at : datetime
        Creation timestamp (UTC).
    updated_at : datetime
        Timestamp of the last change to the conversation or its turns (UTC).
    """

    __tablename__ = "conversation"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("app_account.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(TEXT, nullable=False, default=DEFAULT_CONVERSATION_TITLE)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(self, user_id: UUID, title: str | None = None):
        """
        Initialize a new Conversation object.

        Parameters
        ----------
        user_id : UUID
            The ID of the account that owns this conversation.
        title : str | None
            Title; "New chat" when None or blank.
        """
        now = datetime.now(timezone.utc)
        self.id = uuid.uuid4()
        self.user_id = user_id
        self.title = (title or "").strip() or DEFAULT_CONVERSATION_TITLE
        self.created_at = now
        self.updated_at = now

    def touch(self) -> None:
        """Refresh `updated_at` to the current UTC time."""
        self.updated_at = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"User: id:{self.user_id}, conversation: {self.title}, updated: {self.updated_at}"
