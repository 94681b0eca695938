import httpx
import pytest

from aila_admin.api.generation import GenerationClient, extract_reply
from aila_admin.database.core.conversations import make_title

URL = "http://generation.test/chat"
WINDOW = [{"role": "user", "text": "Is a verbal contract binding?"}]


def make_client(handler):
    return GenerationClient(URL, timeout=1.0, fallback="fallback", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_posts_window_and_message():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json={"reply": "Usually, yes."})

    reply = await make_client(handler).generate(WINDOW, "Is a verbal contract binding?")

    assert reply == "Usually, yes."
    assert seen["url"] == URL
    assert b'"message"' in seen["body"] and b'"messages"' in seen["body"]


@pytest.mark.asyncio
async def test_bare_string_and_alternate_keys():
    assert await make_client(lambda r: httpx.Response(200, json="plain")).generate(WINDOW, "q") == "plain"
    assert await make_client(lambda r: httpx.Response(200, json={"answer": "a"})).generate(WINDOW, "q") == "a"
    assert await make_client(lambda r: httpx.Response(200, json={"text": "t"})).generate(WINDOW, "q") == "t"


@pytest.mark.asyncio
async def test_failures_fall_back():
    def timeout(request):
        raise httpx.ReadTimeout("slow", request=request)

    handlers = [
        timeout,
        lambda r: httpx.Response(503, json={"reply": "ignored"}),
        lambda r: httpx.Response(200, content=b"not json"),
        lambda r: httpx.Response(200, json={"reply": ""}),
        lambda r: httpx.Response(200, json=[1, 2]),
    ]
    for handler in handlers:
        assert await make_client(handler).generate(WINDOW, "q") == "fallback"


def test_extract_reply():
    assert extract_reply({"reply": "", "answer": "second"}) == "second"
    assert extract_reply({"reply": 3}) is None
    assert extract_reply("") is None
    assert extract_reply(None) is None


def test_make_title():
    assert make_title("Hello there friend, how are you") == "Hello there friend"
    assert make_title("  Contract   review ") == "Contract review"
    assert make_title("Hi!") == "Hi"
    assert make_title("   ") == "New chat"
