"""Tests for the OpenAI Responses adapter, using httpx.MockTransport."""

import json

import httpx
import pytest

from leadplan.llm.openai import OpenAIResponsesAdapter
from leadplan.plan_schema import plan_response_format
from leadplan.schemas import LLMMessage, TextBlock


MESSAGES = [
    LLMMessage(role="system", content="Respond with JSON."),
    LLMMessage(role="user", content="Business: Acme"),
]


def responses_body(text: str) -> dict:
    return {
        "id": "resp_123",
        "object": "response",
        "model": "gpt-test-2025",
        "status": "completed",
        "output": [
            {
                "id": "msg_1",
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            }
        ],
        "usage": {"input_tokens": 10, "output_tokens": 20, "total_tokens": 30},
    }


def test_requires_api_key(settings_without_key):
    with pytest.raises(ValueError):
        OpenAIResponsesAdapter(settings_without_key)


@pytest.mark.asyncio
async def test_sends_responses_request(settings_with_key):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=responses_body('{"ok": true}'))

    adapter = OpenAIResponsesAdapter(settings_with_key, transport=httpx.MockTransport(handler))
    response = await adapter.create_response(MESSAGES, response_format=plan_response_format())
    await adapter.close()

    assert seen["url"] == "https://llm.test/v1/responses"
    assert seen["auth"] == "Bearer sk-test"
    body = seen["body"]
    assert body["model"] == "gpt-test"
    assert [item["role"] for item in body["input"]] == ["system", "user"]
    assert body["input"][1]["content"] == [{"type": "input_text", "text": "Business: Acme"}]
    assert body["text"]["format"]["name"] == "lead_generation_plan"
    assert body["text"]["format"]["strict"] is True
    assert body["max_output_tokens"] == settings_with_key.openai_max_output_tokens

    assert response.model == "gpt-test-2025"
    assert response.finish_reason == "completed"
    assert response.usage["total_tokens"] == 30
    block = response.output[0].content[0]
    assert isinstance(block, TextBlock)
    assert block.text == '{"ok": true}'


@pytest.mark.asyncio
async def test_omits_text_format_without_response_format(settings_with_key):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=responses_body("hi"))

    adapter = OpenAIResponsesAdapter(settings_with_key, transport=httpx.MockTransport(handler))
    await adapter.create_response(MESSAGES, model="other-model", temperature=0.1)

    assert "text" not in seen["body"]
    assert seen["body"]["model"] == "other-model"
    assert seen["body"]["temperature"] == 0.1


@pytest.mark.asyncio
async def test_http_error_status(settings_with_key):
    transport = httpx.MockTransport(lambda request: httpx.Response(429, json={"error": "rate limited"}))
    adapter = OpenAIResponsesAdapter(settings_with_key, transport=transport)

    response = await adapter.create_response(MESSAGES)

    assert response.finish_reason == "error"
    assert response.raw_response["status_code"] == 429


@pytest.mark.asyncio
async def test_network_error(settings_with_key):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    adapter = OpenAIResponsesAdapter(settings_with_key, transport=httpx.MockTransport(handler))
    response = await adapter.create_response(MESSAGES)

    assert response.finish_reason == "error"
    assert "ConnectTimeout" in response.raw_response["error"]


@pytest.mark.asyncio
async def test_non_json_body(settings_with_key):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    adapter = OpenAIResponsesAdapter(settings_with_key, transport=transport)

    response = await adapter.create_response(MESSAGES)

    assert response.finish_reason == "error"


@pytest.mark.asyncio
async def test_unrecognized_shape(settings_with_key):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"output": [{"content": "not-a-list"}]})
    )
    adapter = OpenAIResponsesAdapter(settings_with_key, transport=transport)

    response = await adapter.create_response(MESSAGES)

    assert response.finish_reason == "error"
    assert "Unrecognized response shape" in response.raw_response["error"]


@pytest.mark.asyncio
async def test_health_check(settings_with_key):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/models/gpt-test"
        return httpx.Response(200, json={"id": "gpt-test"})

    adapter = OpenAIResponsesAdapter(settings_with_key, transport=httpx.MockTransport(handler))
    assert await adapter.health_check() is True


@pytest.mark.asyncio
async def test_health_check_network_failure(settings_with_key):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    adapter = OpenAIResponsesAdapter(settings_with_key, transport=httpx.MockTransport(handler))
    assert await adapter.health_check() is False
