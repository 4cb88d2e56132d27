"""``/api/llmcall`` adapter — implements the LlmGateway port over plain HTTP."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from starter_importer.domain.exceptions import LlmError, TransportError

logger = logging.getLogger(__name__)


class LlmCallAdapter:
    """Concrete ``LlmGateway`` for a text-completion endpoint.

    The endpoint takes ``{message, model, provider, system}`` and answers
    ``{text}``.  No retries: one failed call is terminal.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        model: str,
        provider: Mapping[str, Any] | None = None,
    ) -> None:
        self._client = client
        self._url = url
        self._model = model
        self._provider = dict(provider) if provider else None

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str | None = None,
        provider: Mapping[str, Any] | None = None,
    ) -> str:
        """POST the prompt pair and return the ``text`` field of the reply."""
        body = {
            "message": user_prompt,
            "model": model or self._model,
            "provider": dict(provider) if provider else self._provider,
            "system": system_prompt,
        }
        try:
            resp = await self._client.post(self._url, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"Network error calling {self._url}: {exc}") from exc

        if not resp.is_success:
            raise TransportError(
                f"Completion service returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise LlmError(f"Completion service returned invalid JSON: {exc}") from exc

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise LlmError("Completion service response has no 'text' field.")

        logger.debug("Completion service replied with %d chars", len(text))
        return text
