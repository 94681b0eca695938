import httpx
from sqlalchemy.dialects import postgresql

from aila_admin.database.config.config import settings
from aila_admin.database.core import conversations as conversation_service
from aila_admin.database.daos.conversation_dao import ConversationDao

from conftest import auth, signup_and_login


def new_conversation(client, token, title=None):
    body = {} if title is None else {"title": title}
    resp = client.post("/conversations", json=body, headers=auth(token))
    assert resp.status_code == 201, resp.text
    return resp.json()["conversation"]


def post_turn(client, token, conversation_id, message):
    return client.post(f"/conversations/{conversation_id}/turns", json={"message": message}, headers=auth(token))


def test_create_conversation_defaults(client, user_token):
    conversation = new_conversation(client, user_token)

    assert conversation["title"] == "New chat"
    assert conversation["turns"] == []
    assert new_conversation(client, user_token, title="Contract review")["title"] == "Contract review"


def test_conversations_require_token(client):
    assert client.get("/conversations").status_code == 401
    assert client.post("/conversations/first-turn", json={"message": "hi"}).status_code == 401


def test_post_turn_stores_both_turns(client, user_token, generation):
    conversation = new_conversation(client, user_token)

    resp = post_turn(client, user_token, conversation["id"], "What is GDPR?")

    assert resp.status_code == 200
    body = resp.json()
    assert body["reply"] == "Model reply"
    assert [(t["role"], t["text"]) for t in body["conversation"]["turns"]] == [
        ("user", "What is GDPR?"),
        ("bot", "Model reply"),
    ]
    assert generation.requests == [
        {"messages": [{"role": "user", "text": "What is GDPR?"}], "message": "What is GDPR?"}
    ]


def test_user_turn_kept_when_generation_is_down(client, user_token, generation):
    def down(request):
        raise httpx.ConnectError("connection refused", request=request)

    generation.respond = down
    conversation = new_conversation(client, user_token)

    resp = post_turn(client, user_token, conversation["id"], "Hello?")

    assert resp.status_code == 200
    assert resp.json()["reply"] == settings.GENERATION_FALLBACK_REPLY
    stored = client.get(f"/conversations/{conversation['id']}", headers=auth(user_token)).json()["conversation"]
    assert [(t["role"], t["text"]) for t in stored["turns"]] == [
        ("user", "Hello?"),
        ("bot", settings.GENERATION_FALLBACK_REPLY),
    ]


def test_non_success_or_unusable_reply_gives_fallback(client, user_token, generation):
    conversation = new_conversation(client, user_token)

    generation.respond = lambda request: httpx.Response(502, text="bad gateway")
    assert post_turn(client, user_token, conversation["id"], "one").json()["reply"] == "Sorry, no reply"

    generation.respond = lambda request: httpx.Response(200, content=b"<html>")
    assert post_turn(client, user_token, conversation["id"], "two").json()["reply"] == "Sorry, no reply"

    generation.respond = lambda request: httpx.Response(200, json={"answer": "From answer"})
    assert post_turn(client, user_token, conversation["id"], "three").json()["reply"] == "From answer"


def test_context_window_is_bounded(client, user_token, generation, monkeypatch):
    monkeypatch.setattr(settings, "GENERATION_CONTEXT_WINDOW", 3)
    conversation = new_conversation(client, user_token)

    for text in ("first", "second", "third"):
        post_turn(client, user_token, conversation["id"], text)

    last = generation.requests[-1]
    assert last["message"] == "third"
    assert last["messages"] == [
        {"role": "user", "text": "second"},
        {"role": "bot", "text": "Model reply"},
        {"role": "user", "text": "third"},
    ]


def test_blank_message_is_rejected(client, user_token, generation):
    conversation = new_conversation(client, user_token)

    assert post_turn(client, user_token, conversation["id"], "   ").status_code == 400
    assert client.post("/conversations/first-turn", json={"message": ""}, headers=auth(user_token)).status_code == 400
    assert generation.requests == []


def test_first_turn_auto_titles(client, user_token, generation):
    resp = client.post(
        "/conversations/first-turn",
        json={"message": "Hello there friend, how are you"},
        headers=auth(user_token),
    )

    assert resp.status_code == 201
    conversation = resp.json()["conversation"]
    assert conversation["title"] == "Hello there friend"
    assert [t["role"] for t in conversation["turns"]] == ["user", "bot"]
    assert resp.json()["reply"] == "Model reply"


def test_first_turn_short_message_title(client, user_token):
    resp = client.post("/conversations/first-turn", json={"message": "  Hi  "}, headers=auth(user_token))
    assert resp.json()["conversation"]["title"] == "Hi"


def test_edit_turn_changes_only_that_turn(client, user_token):
    conversation = new_conversation(client, user_token)
    post_turn(client, user_token, conversation["id"], "first question")
    turns = post_turn(client, user_token, conversation["id"], "second question").json()["conversation"]["turns"]

    resp = client.patch(
        f"/conversations/{conversation['id']}/turns/{turns[0]['id']}",
        json={"text": "edited question"},
        headers=auth(user_token),
    )

    assert resp.status_code == 200
    assert resp.json() == {"message": "Updated", "turnId": turns[0]["id"], "text": "edited question"}
    stored = client.get(f"/conversations/{conversation['id']}", headers=auth(user_token)).json()["conversation"]
    assert [t["text"] for t in stored["turns"]] == [
        "edited question",
        "Model reply",
        "second question",
        "Model reply",
    ]


def test_edit_unknown_turn(client, user_token):
    conversation = new_conversation(client, user_token)
    other = new_conversation(client, user_token)
    turn_id = post_turn(client, user_token, other["id"], "hi").json()["conversation"]["turns"][0]["id"]

    resp = client.patch(
        f"/conversations/{conversation['id']}/turns/{turn_id}", json={"text": "x"}, headers=auth(user_token)
    )
    assert resp.status_code == 404
    assert client.patch(
        f"/conversations/{conversation['id']}/turns/nope", json={"text": "x"}, headers=auth(user_token)
    ).status_code == 404


def test_conversations_are_owner_scoped(client, user_token):
    conversation = new_conversation(client, user_token)
    turn_id = post_turn(client, user_token, conversation["id"], "private").json()["conversation"]["turns"][0]["id"]
    mallory = signup_and_login(client, "mallory")
    path = f"/conversations/{conversation['id']}"

    assert client.get(path, headers=auth(mallory)).status_code == 403
    assert post_turn(client, mallory, conversation["id"], "hijack").status_code == 403
    assert client.patch(f"{path}/turns/{turn_id}", json={"text": "x"}, headers=auth(mallory)).status_code == 403
    assert client.delete(path, headers=auth(mallory)).status_code == 403
    assert client.get("/conversations", headers=auth(mallory)).json()["conversations"] == []


def test_unknown_conversation(client, user_token):
    assert client.get("/conversations/7f1c3a2e-0000-4000-8000-000000000000", headers=auth(user_token)).status_code == 404
    assert client.get("/conversations/not-an-id", headers=auth(user_token)).status_code == 404


def test_list_most_recently_updated_first(client, user_token):
    older = new_conversation(client, user_token, title="Older")
    new_conversation(client, user_token, title="Newer")

    post_turn(client, user_token, older["id"], "bump")

    titles = [c["title"] for c in client.get("/conversations", headers=auth(user_token)).json()["conversations"]]
    assert titles == ["Older", "Newer"]


def test_delete_conversation(client, user_token):
    conversation = new_conversation(client, user_token)
    post_turn(client, user_token, conversation["id"], "bye")

    resp = client.delete(f"/conversations/{conversation['id']}", headers=auth(user_token))

    assert resp.status_code == 200
    assert client.get(f"/conversations/{conversation['id']}", headers=auth(user_token)).status_code == 404
    assert client.get("/conversations", headers=auth(user_token)).json()["conversations"] == []

def test_turn_appends_lock_the_conversation_row(client, user_token, monkeypatch):
    locked = []
    lock = conversation_service.conversation_dao.lockConversationById

    def recording_lock(session, conversation_id):
        locked.append(str(conversation_id))
        return lock(session, conversation_id)

    monkeypatch.setattr(conversation_service.conversation_dao, "lockConversationById", recording_lock)
    conversation = new_conversation(client, user_token)

    post_turn(client, user_token, conversation["id"], "hello")

    # user turn, then bot turn
    assert locked == [conversation["id"], conversation["id"]]


class RecordingSession:
    def __init__(self):
        self.statements = []

    def execute(self, stmt):
        self.statements.append(stmt)
        return self

    def scalar_one_or_none(self):
        return None


def test_lock_query_is_select_for_update():
    session = RecordingSession()

    assert ConversationDao().lockConversationById(session, "7f1c3a2e-0000-4000-8000-000000000000") is None
    sql = str(session.statements[0].compile(dialect=postgresql.dialect()))
    assert sql.rstrip().endswith("FOR UPDATE")
