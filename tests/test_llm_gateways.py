"""Unit tests for the LLM gateway adapters.

Tests cover:
- LlmCallAdapter request body, overrides, error translation
- OpenAIAdapter success and error translation (client mocked)
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from starter_importer.domain.exceptions import LlmError, TransportError
from starter_importer.infrastructure.llm_call_adapter import LlmCallAdapter
from starter_importer.infrastructure.openai_adapter import OpenAIAdapter

URL = "http://llm.test/api/llmcall"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# LlmCallAdapter
# ---------------------------------------------------------------------------


class TestLlmCallAdapter:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_posts_contract_body(self):
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"text": "<templateName>blank</templateName>"})

        async with _client(handler) as client:
            adapter = LlmCallAdapter(client, URL, model="m0", provider={"name": "OpenAI"})
            text = await adapter.complete("SYSTEM", "USER")

        assert text == "<templateName>blank</templateName>"
        assert seen == [
            {"message": "USER", "model": "m0", "provider": {"name": "OpenAI"}, "system": "SYSTEM"}
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_per_call_overrides(self):
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"text": "ok"})

        async with _client(handler) as client:
            adapter = LlmCallAdapter(client, URL, model="m0")
            await adapter.complete("S", "U", model="m1", provider={"name": "Anthropic"})

        assert seen[0]["model"] == "m1"
        assert seen[0]["provider"] == {"name": "Anthropic"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async with _client(lambda r: httpx.Response(500, text="boom")) as client:
            with pytest.raises(TransportError) as exc_info:
                await LlmCallAdapter(client, URL, model="m").complete("S", "U")
        assert exc_info.value.status_code == 500

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_connect_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused")

        async with _client(handler) as client:
            with pytest.raises(TransportError, match="Network error"):
                await LlmCallAdapter(client, URL, model="m").complete("S", "U")

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="not json"),
            httpx.Response(200, json={"answer": "x"}),
            httpx.Response(200, json=["x"]),
        ],
    )
    async def test_unusable_body(self, response):
        async with _client(lambda r: response) as client:
            with pytest.raises(LlmError):
                await LlmCallAdapter(client, URL, model="m").complete("S", "U")


# ---------------------------------------------------------------------------
# OpenAIAdapter
# ---------------------------------------------------------------------------


def _completion(content: str | None) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


class TestOpenAIAdapter:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_content(self):
        adapter = OpenAIAdapter(api_key="sk-test", model="gpt-test")
        create = AsyncMock(return_value=_completion("<templateName>blank</templateName>"))
        adapter._client = MagicMock()
        adapter._client.chat.completions.create = create

        text = await adapter.complete("SYSTEM", "USER")

        assert text == "<templateName>blank</templateName>"
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["messages"][0] == {"role": "system", "content": "SYSTEM"}
        assert kwargs["messages"][1] == {"role": "user", "content": "USER"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_content_raises(self):
        adapter = OpenAIAdapter(api_key="sk-test")
        adapter._client = MagicMock()
        adapter._client.chat.completions.create = AsyncMock(return_value=_completion(None))

        with pytest.raises(LlmError):
            await adapter.complete("S", "U")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_connection_error_becomes_transport_error(self):
        from openai import APIConnectionError

        adapter = OpenAIAdapter(api_key="sk-test")
        adapter._client = MagicMock()
        adapter._client.chat.completions.create = AsyncMock(
            side_effect=APIConnectionError(request=httpx.Request("POST", "https://api.openai.com"))
        )

        with pytest.raises(TransportError):
            await adapter.complete("S", "U")
