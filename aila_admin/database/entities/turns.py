"""
Turn ORM Model
==============

The ``Turn`` ORM model represents a single message within a conversation,
either written by the account holder (``user``) or returned by the generation
service (``bot``).

Key features
~~~~~~~~~~~~
- Portable UUID primary key (``id``)
- Foreign key reference to ``conversation.id`` (``conversation_id``)
- ``position``: strictly increasing index within the conversation; turns are
  always ordered by it, never by timestamp
- Timezone-aware ``created_at`` timestamp (UTC)

"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, TEXT, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from aila_admin.database.config.connection_engine import declarativeBase

TURN_ROLES = ("user", "bot")


class Turn(declarativeBase):
    """
    ORM model for the `conversation_turn` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    conversation_id : UUID
        Parent conversation.
    position : int
        Zero-based append index within the conversation.
    role : str
        "user" or "bot".
    text : str
        Message text.
    created_at : datetime
        Creation timestamp (UTC).
    """

    __tablename__ = "conversation_turn"
    __table_args__ = (UniqueConstraint("conversation_id", "position", name="uq_turn_position"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    conversation_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("conversation.id"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str] = mapped_column(TEXT, nullable=False)
    text: Mapped[str] = mapped_column(TEXT, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(self, conversation_id: UUID, position: int, role: str, text: str):
        """
        Initialize a new Turn object.

        Parameters
        ----------
        conversation_id : UUID
            ID of the conversation this turn belongs to.
        position : int
            Append index inside the conversation.
        role : str
            "user" or "bot".
        text : str
            The content of the turn.
        """
        if role not in TURN_ROLES:
            raise ValueError(f"Unknown turn role: {role}")
        self.id = uuid.uuid4()
        self.conversation_id = conversation_id
        self.position = position
        self.role = role
        self.text = text
        self.created_at = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return (
            f"Conversation: id:{self.conversation_id}, "
            f"position: {self.position}, "
            f"role: {self.role}, "
            f"text: {self.text}"
        )
