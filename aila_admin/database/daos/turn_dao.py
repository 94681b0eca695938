"""
Turn DAO

Purpose
-------
Data-access layer for the `Turn` ORM entity. Provides:
- Appending a turn at the next position of its conversation
- Retrieval of a whole conversation, or of its trailing window, in append order
- Lookup of one turn inside a conversation
- Bulk deletion by conversation

Design
------
- Requires an active SQLAlchemy `Session` provided by the caller.
- Ordering is always by `position`; the trailing window is read newest-first
  through a subquery and re-ordered ascending.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import asc, desc, func
from sqlalchemy.orm import Session, aliased

from aila_admin.database.entities.turns import Turn

logger = logging.getLogger(__name__)


class TurnDao:
    """
    Data Access Object (DAO) for managing conversation turns.
    """

    def appendTurn(self, session: Session, conversation_id: UUID, role: str, text: str) -> Turn:
        """
        Append a turn after the last one of the conversation.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        conversation_id : UUID
            Parent conversation.
        role : str
            "user" or "bot".
        text : str
            Turn content.

        Returns
        -------
        Turn
            The staged turn, with its position assigned.
        """
        try:
            last_position = (
                session.query(func.max(Turn.position))
                .filter(Turn.conversation_id == conversation_id)
                .scalar()
            )
            position = 0 if last_position is None else last_position + 1
            turn = Turn(conversation_id=conversation_id, position=position, role=role, text=text)
            session.add(turn)
            session.flush()
            return turn
        except Exception as e:
            logger.error("Error in TurnDao.appendTurn. Error Message: %s", e)
            raise

    def fetchTurnsByConversationId(self, session: Session, conversation_id: UUID) -> List[Turn]:
        try:
            return (
                session.query(Turn)
                .filter(Turn.conversation_id == conversation_id)
                .order_by(asc(Turn.position))
                .all()
            )
        except Exception as e:
            logger.error("Error in TurnDao.fetchTurnsByConversationId. Error Message: %s", e)
            raise

    def fetchRecentTurns(self, session: Session, conversation_id: UUID, limit: int) -> List[Turn]:
        """
        Fetch the last `limit` turns of a conversation in append order.

        Internally, retrieves the latest turns first via a subquery,
        then re-orders them chronologically.
        """
        try:
            subq = (
                session.query(Turn)
                .filter(Turn.conversation_id == conversation_id)
                .order_by(desc(Turn.position))
                .limit(limit)
            ).subquery()

            recent_turns = aliased(Turn, subq)

            return (
                session.query(recent_turns)
                .order_by(asc(recent_turns.position))
                .all()
            )
        except Exception as e:
            logger.error("Error in TurnDao.fetchRecentTurns. Error Message: %s", e)
            raise

    def fetchTurn(self, session: Session, conversation_id: UUID, turn_id: UUID) -> Optional[Turn]:
        try:
            return (
                session.query(Turn)
                .filter(Turn.id == turn_id, Turn.conversation_id == conversation_id)
                .one_or_none()
            )
        except Exception as e:
            logger.error("Error in TurnDao.fetchTurn. Error Message: %s", e)
            raise

    def deleteTurnsByConversationId(self, session: Session, conversation_id: UUID) -> int:
        try:
            return (
                session.query(Turn)
                .filter(Turn.conversation_id == conversation_id)
                .delete(synchronize_session="fetch")
            )
        except Exception as e:
            logger.error("Error in TurnDao.deleteTurnsByConversationId. Error Message: %s", e)
            raise
