"""Tests for the AI functions HTTP client."""

import json
from uuid import uuid4

import httpx
import pytest

from mentorhub.services.ai_functions import AIFunctionError, AIFunctionsClient


def client_for(handler) -> AIFunctionsClient:
    return AIFunctionsClient(
        "http://functions.test/functions/v1/",
        api_key="secret",
        transport=httpx.MockTransport(handler),
    )


async def test_generate_email_posts_form_and_returns_text():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"email": "Hi Sam,\n\nSee you Friday."})

    email = await client_for(handler).generate_email("reply", recipient="Sam", original_email="Are we on?")

    assert email == "Hi Sam,\n\nSee you Friday."
    assert captured["url"] == "http://functions.test/functions/v1/ai-email"
    assert captured["auth"] == "Bearer secret"
    assert captured["body"] == {
        "action": "reply",
        "occasion": "",
        "recipient": "Sam",
        "topic": "",
        "originalEmail": "Are we on?",
    }


async def test_research_idea_sends_idea_id_and_query():
    idea_id = uuid4()
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"result": "Prior art: two papers."})

    result = await client_for(handler).research_idea(idea_id, "prior art?")

    assert result == "Prior art: two papers."
    assert captured["body"] == {"ideaId": str(idea_id), "query": "prior art?"}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "crashed"}),
        httpx.Response(200, json={"error": "quota exceeded"}),
        httpx.Response(200, json={"email": "   "}),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, text="<html>gateway</html>"),
    ],
)
async def test_unusable_responses_raise(response: httpx.Response):
    with pytest.raises(AIFunctionError) as exc_info:
        await client_for(lambda request: response).generate_email("compose")

    assert exc_info.value.function == "ai-email"


async def test_transport_failure_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AIFunctionError):
        await client_for(handler).research_idea(uuid4(), "anything")


async def test_unconfigured_client_raises_without_a_request():
    with pytest.raises(AIFunctionError, match="not configured"):
        await AIFunctionsClient(None).generate_email("compose")
