"""
Service-layer operations for account-owned conversations and their turns.

A chat exchange is split into separate transactions so the user's turn is
committed before the generation service is called:

1. `append_user_turn` / `start_conversation` store the user's text and return
   the trailing context window.
2. The caller obtains a reply (see `aila_admin.api.generation`).
3. `append_bot_turn` stores the reply and returns the full conversation.

Every change to a conversation or its turns refreshes its `updated_at`.
"""

import logging
from typing import List, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from aila_admin.database.config.config import settings
from aila_admin.database.daos.conversation_dao import ConversationDao
from aila_admin.database.daos.turn_dao import TurnDao
from aila_admin.database.entities.conversations import DEFAULT_CONVERSATION_TITLE, Conversation
from aila_admin.database.entities.turns import Turn
from aila_admin.database.helpers.queries import parse_id
from aila_admin.database.helpers.transactionManagement import transactional
from aila_admin.errors import NotFound, PermissionDenied, ValidationFailed

logger = logging.getLogger(__name__)

turn_dao = TurnDao()
conversation_dao = ConversationDao(turn_dao=turn_dao)

TITLE_WORDS = 3
TITLE_TRAILING_PUNCTUATION = ",.;:!?"
CONVERSATION_NOT_FOUND = "Chat not found"


def make_title(text: str) -> str:
    """
    First three whitespace-separated words of `text`, without trailing
    punctuation, or the default title when nothing is left.

    >>> make_title("Hello there friend, how are you")
    'Hello there friend'
    """
    words = (text or "").split()[:TITLE_WORDS]
    return " ".join(words).rstrip(TITLE_TRAILING_PUNCTUATION) or DEFAULT_CONVERSATION_TITLE


def turn_record(turn: Turn) -> dict:
    return {"id": turn.id, "role": turn.role, "text": turn.text, "createdAt": turn.created_at}


def conversation_record(conversation: Conversation, turns: List[Turn]) -> dict:
    return {
        "id": conversation.id,
        "userId": conversation.user_id,
        "title": conversation.title,
        "turns": [turn_record(t) for t in turns],
        "createdAt": conversation.created_at,
        "updatedAt": conversation.updated_at,
    }


def _full_record(session: Session, conversation: Conversation) -> dict:
    return conversation_record(
        conversation, turn_dao.fetchTurnsByConversationId(session, conversation.id)
    )


def _owned_conversation(session: Session, conversation_id, owner_id: UUID, lock: bool = False) -> Conversation:
    """
    Fetch a conversation on behalf of `owner_id`, row-locked when `lock` is set.

    Raises
    ------
    NotFound
        Unknown or malformed id.
    PermissionDenied
        The conversation belongs to another account.
    """
    fetch = conversation_dao.lockConversationById if lock else conversation_dao.fetchConversationById
    conversation = fetch(session, parse_id(conversation_id, NotFound, CONVERSATION_NOT_FOUND))
    if conversation is None:
        raise NotFound(CONVERSATION_NOT_FOUND)
    if conversation.user_id != owner_id:
        raise PermissionDenied("Forbidden")
    return conversation


def _required_message(text: str) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationFailed("Message required")
    return text


def _context_window(session: Session, conversation_id: UUID) -> List[dict]:
    turns = turn_dao.fetchRecentTurns(session, conversation_id, settings.GENERATION_CONTEXT_WINDOW)
    return [{"role": t.role, "text": t.text} for t in turns]


@transactional
def create_conversation(session: Session, owner_id: UUID, title: str = None) -> dict:
    conversation = conversation_dao.createConversation(session, Conversation(user_id=owner_id, title=title))
    logger.info("Created conversation %s for account %s", conversation.id, owner_id)
    return conversation_record(conversation, [])


@transactional
def list_conversations(session: Session, owner_id: UUID) -> list:
    """All conversations of `owner_id`, most recently updated first, with their turns."""
    return [_full_record(session, c) for c in conversation_dao.fetchConversationByUserId(session, owner_id)]


@transactional
def get_conversation(session: Session, conversation_id, owner_id: UUID) -> dict:
    return _full_record(session, _owned_conversation(session, conversation_id, owner_id))


@transactional
def append_user_turn(session: Session, conversation_id, owner_id: UUID, text: str) -> List[dict]:
    """
    Store the user's turn in an existing conversation.

    Returns
    -------
    list[dict]
        The trailing context window, as ``{"role", "text"}`` pairs, ending with
        the new turn.

    Raises
    ------
    ValidationFailed
        Blank message.
    NotFound, PermissionDenied
        See `_owned_conversation`.
    """
    text = _required_message(text)
    conversation = _owned_conversation(session, conversation_id, owner_id, lock=True)
    turn_dao.appendTurn(session, conversation.id, "user", text)
    conversation.touch()
    return _context_window(session, conversation.id)


@transactional
def start_conversation(session: Session, owner_id: UUID, text: str) -> Tuple[UUID, List[dict]]:
    """
    Create a conversation titled after the first words of `text` and store
    `text` as its first turn.

    Returns
    -------
    tuple[UUID, list[dict]]
        The new conversation id and its context window.
    """
    text = _required_message(text)
    conversation = conversation_dao.createConversation(
        session, Conversation(user_id=owner_id, title=make_title(text))
    )
    turn_dao.appendTurn(session, conversation.id, "user", text)
    logger.info("Started conversation %s for account %s", conversation.id, owner_id)
    return conversation.id, _context_window(session, conversation.id)


@transactional
def append_bot_turn(session: Session, conversation_id, text: str) -> dict:
    """Store a generated reply and return the full conversation."""
    conversation = conversation_dao.lockConversationById(
        session, parse_id(conversation_id, NotFound, CONVERSATION_NOT_FOUND)
    )
    if conversation is None:
        raise NotFound(CONVERSATION_NOT_FOUND)
    turn_dao.appendTurn(session, conversation.id, "bot", text)
    conversation.touch()
    return _full_record(session, conversation)


@transactional
def edit_turn(session: Session, conversation_id, turn_id, owner_id: UUID, text: str) -> dict:
    """
    Replace the text of one turn.

    Raises
    ------
    NotFound
        Unknown conversation or a turn that is not part of it.
    PermissionDenied
        The conversation belongs to another account.
    """
    if not isinstance(text, str):
        raise ValidationFailed("Text required")
    conversation = _owned_conversation(session, conversation_id, owner_id)
    turn = turn_dao.fetchTurn(session, conversation.id, parse_id(turn_id, NotFound, "Message not found"))
    if turn is None:
        raise NotFound("Message not found")
    turn.text = text
    conversation.touch()
    return {"message": "Updated", "turnId": turn.id, "text": turn.text}


@transactional
def delete_conversation(session: Session, conversation_id, owner_id: UUID) -> None:
    conversation = _owned_conversation(session, conversation_id, owner_id)
    conversation_dao.deleteConversation(session, conversation)
    logger.info("Deleted conversation %s", conversation.id)
