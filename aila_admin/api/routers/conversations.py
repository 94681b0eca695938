"""
FastAPI Router - Conversations • Turns
======================================

Purpose
-------
Per-account chat conversations. Posting a turn:
1) stores the user's message (committed),
2) sends the trailing context window to the generation service,
3) stores the reply (or the fallback reply) as a bot turn.

Key Notes
---------
- Turn routes are `async`: the transactional service functions run through
  `run_in_threadpool` and the generation call is awaited, so the event loop
  is never blocked.
- The generation client is a dependency (`get_generation_client`) and can be
  overridden, e.g. in tests.
- `/conversations/first-turn` is declared before `/conversations/{conversation_id}`.
"""

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from aila_admin.api.generation import GenerationClient, get_generation_client
from aila_admin.api.models import ConversationCreationDetails, NewTurn, TurnEdit
from aila_admin.api.security import current_identity
from aila_admin.database.core.conversations import (
    append_bot_turn,
    append_user_turn,
    create_conversation,
    delete_conversation,
    edit_turn,
    get_conversation,
    list_conversations,
    start_conversation,
)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.post("", status_code=201)
def new_conversation(data: ConversationCreationDetails, identity: dict = Depends(current_identity)):
    """Create an empty conversation ("New chat" unless a title is given)."""
    return {"conversation": create_conversation(owner_id=identity["id"], title=data.title)}


@router.get("")
def read_conversations(identity: dict = Depends(current_identity)):
    """The caller's conversations, most recently updated first."""
    return {"conversations": list_conversations(owner_id=identity["id"])}


@router.post("/first-turn", status_code=201)
async def first_turn(
    data: NewTurn,
    identity: dict = Depends(current_identity),
    generator: GenerationClient = Depends(get_generation_client),
):
    """Start a conversation titled after the first three words of the message.

    Response:
        201: {'reply': str, 'conversation': {...}}
        400: blank message.
    """
    conversation_id, window = await run_in_threadpool(
        start_conversation, owner_id=identity["id"], text=data.message
    )
    reply = await generator.generate(window, data.message)
    conversation = await run_in_threadpool(append_bot_turn, conversation_id=conversation_id, text=reply)
    return {"reply": reply, "conversation": conversation}


@router.get("/{conversation_id}")
def read_conversation(conversation_id: str, identity: dict = Depends(current_identity)):
    return {"conversation": get_conversation(conversation_id=conversation_id, owner_id=identity["id"])}


@router.delete("/{conversation_id}")
def remove_conversation(conversation_id: str, identity: dict = Depends(current_identity)):
    delete_conversation(conversation_id=conversation_id, owner_id=identity["id"])
    return {"message": "Chat deleted"}


@router.post("/{conversation_id}/turns")
async def post_turn(
    conversation_id: str,
    data: NewTurn,
    identity: dict = Depends(current_identity),
    generator: GenerationClient = Depends(get_generation_client),
):
    """Post a message to a conversation and store the generated reply.

    The user's message is saved before the generation service is called, so it
    is kept even when the call fails; the reply then is the fallback text.

    Response:
        200: {'reply': str, 'conversation': {...}}
        400: blank message. 403: not the owner. 404: unknown conversation.
    """
    window = await run_in_threadpool(
        append_user_turn, conversation_id=conversation_id, owner_id=identity["id"], text=data.message
    )
    reply = await generator.generate(window, data.message)
    conversation = await run_in_threadpool(append_bot_turn, conversation_id=conversation_id, text=reply)
    return {"reply": reply, "conversation": conversation}


@router.patch("/{conversation_id}/turns/{turn_id}")
def patch_turn(conversation_id: str, turn_id: str, data: TurnEdit, identity: dict = Depends(current_identity)):
    """Replace the text of one turn; other turns are left untouched."""
    return edit_turn(conversation_id=conversation_id, turn_id=turn_id, owner_id=identity["id"], text=data.text)
