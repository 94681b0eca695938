"""
Conversation DAO

Purpose
-------
Provides a thin data-access layer for the `Conversation` ORM entity:
- Create conversations
- Fetch by id, or all of an account's conversations by last update
- Fetch by id with a row lock, held until the transaction ends
- Delete one conversation, or every conversation of an account (with their turns)

Design
------
- Requires an active SQLAlchemy `Session` supplied by the caller (no session
  creation inside the DAO). This keeps transaction boundaries in the service
  layer where they belong.
- Turns are removed through `TurnDao` before their conversation, so the
  foreign key never points at a deleted row.

Error Handling
--------------
- Methods log the error message and re-raise.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from aila_admin.database.daos.turn_dao import TurnDao
from aila_admin.database.entities.conversations import Conversation

logger = logging.getLogger(__name__)


class ConversationDao:
    """
    Data Access Object (DAO) for managing Conversation entities.
    """

    def __init__(self, turn_dao: Optional[TurnDao] = None):
        self.turn_dao = turn_dao or TurnDao()

    def createConversation(self, session: Session, conversation: Conversation) -> Conversation:
        try:
            session.add(conversation)
            session.flush()
            return conversation
        except Exception as e:
            logger.error("Error in ConversationDao.createConversation. Error: %s", e)
            raise

    def fetchConversationById(self, session: Session, conversation_id: UUID) -> Optional[Conversation]:
        try:
            return session.get(Conversation, conversation_id)
        except Exception as e:
            logger.error("Error in ConversationDao.fetchConversationById. Error: %s", e)
            raise

    def lockConversationById(self, session: Session, conversation_id: UUID) -> Optional[Conversation]:
        """
        Fetch a conversation with `SELECT ... FOR UPDATE`.

        Appending a turn reads the last position and inserts the next one, so
        appends to the same conversation must hold this lock.
        """
        try:
            stmt = select(Conversation).where(Conversation.id == conversation_id).with_for_update()
            return session.execute(stmt).scalar_one_or_none()
        except Exception as e:
            logger.error("Error in ConversationDao.lockConversationById. Error: %s", e)
            raise

    def fetchConversationByUserId(self, session: Session, user_id: UUID) -> List[Conversation]:
        """
        Fetch all conversations belonging to a specific account,
        ordered by most recently updated.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_id : UUID
            Unique identifier of the account.

        Returns
        -------
        list[Conversation]
            List of conversations for the given account.
        """
        try:
            return (
                session.query(Conversation)
                .filter(Conversation.user_id == user_id)
                .order_by(desc(Conversation.updated_at))
                .all()
            )
        except Exception as e:
            logger.error("Error in ConversationDao.fetchConversationByUserId. Error: %s", e)
            raise

    def deleteConversation(self, session: Session, conversation: Conversation) -> None:
        try:
            self.turn_dao.deleteTurnsByConversationId(session, conversation.id)
            session.delete(conversation)
            session.flush()
        except Exception as e:
            logger.error("Error in ConversationDao.deleteConversation. Error: %s", e)
            raise

    def deleteConversationsByUserId(self, session: Session, user_id: UUID) -> int:
        """
        Delete every conversation (and its turns) owned by `user_id`.

        Returns
        -------
        int
            Number of conversations removed.
        """
        try:
            conversations = (
                session.query(Conversation).filter(Conversation.user_id == user_id).all()
            )
            for conversation in conversations:
                self.deleteConversation(session, conversation)
            return len(conversations)
        except Exception as e:
            logger.error("Error in ConversationDao.deleteConversationsByUserId. Error: %s", e)
            raise
