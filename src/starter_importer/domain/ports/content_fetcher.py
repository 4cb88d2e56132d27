"""Port: content fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from starter_importer.domain.entities import RepoFile


class ContentFetcher(Protocol):
    """Abstract contract for reading a repository's files."""

    async def fetch(self, repo_id: str, path: str = "") -> list[RepoFile]:
        """Return every file under *path* (recursively), in no particular order."""
        ...
