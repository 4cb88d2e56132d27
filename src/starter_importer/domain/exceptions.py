"""Domain exception hierarchy.

Inner layers raise these; the use case recovers the ones it can and the
outermost error-handler translates whatever escapes into HTTP responses.
"""

from __future__ import annotations


class StarterImporterError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepoIdError(StarterImporterError):
    """The catalog points at something that is not an ``owner/repo`` id."""


# ── Remote service errors ───────────────────────────────────────────────────


class TransportError(StarterImporterError):
    """A remote service answered with a non-success status or not at all."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LlmError(StarterImporterError):
    """The text-completion service answered, but not with usable text."""


# ── Locally recovered errors ────────────────────────────────────────────────


class ParseError(StarterImporterError):
    """The completion text lacks the tags needed to read a selection."""


class NotFoundError(StarterImporterError):
    """The requested template id is absent from the catalog."""
