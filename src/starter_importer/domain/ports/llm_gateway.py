"""Port: LLM gateway — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class LlmGateway(Protocol):
    """Abstract contract for a text-in / text-out completion service."""

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str | None = None,
        provider: Mapping[str, Any] | None = None,
    ) -> str:
        """Send a system + user prompt pair and return the raw completion text."""
        ...
