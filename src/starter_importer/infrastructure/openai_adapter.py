"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from starter_importer.domain.exceptions import LlmError, TransportError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API.

    ``provider`` is accepted for port compatibility and ignored: this
    gateway only ever talks to OpenAI.
    """

    def __init__(self, api_key: str, model: str = "gpt-4o-mini") -> None:
        self._client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self._model = model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str | None = None,
        provider: Mapping[str, Any] | None = None,
    ) -> str:
        """Send a system + user prompt and return the completion text."""
        try:
            response = await self._client.chat.completions.create(
                model=model or self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=0.2,
            )
        except APIStatusError as exc:
            logger.error("OpenAI returned HTTP %s: %s", exc.status_code, exc)
            raise TransportError(
                f"OpenAI returned HTTP {exc.status_code}", status_code=exc.status_code
            ) from exc
        except APIConnectionError as exc:
            raise TransportError(f"Could not reach OpenAI: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LlmError("LLM returned an empty response.")
        return content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
