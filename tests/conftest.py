"""Shared pytest fixtures for the starter-importer test suite.

Provides reusable fixtures for:
- An in-memory fake of the GitHub contents API (``httpx.MockTransport``)
- A small template catalog
- A scripted LLM gateway
"""

from __future__ import annotations

import base64
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from starter_importer.domain.catalog import TemplateCatalog
from starter_importer.domain.entities import RepoFile, Template

API = "https://api.github.com"
REPO = "acme/starter-a"


# ---------------------------------------------------------------------------
# Fake GitHub contents API
# ---------------------------------------------------------------------------


class FakeGitHub:
    """Serves ``/repos/{repo}/contents/{path}`` from a ``{path: content}`` map."""

    def __init__(self, files: dict[str, str], repo: str = REPO) -> None:
        self.files = dict(files)
        self.repo = repo
        self.requests: list[str] = []
        self.fail_with: int | None = None

    @property
    def prefix(self) -> str:
        return f"/repos/{self.repo}/contents"

    def _file_json(self, path: str) -> dict[str, Any]:
        encoded = base64.encodebytes(self.files[path].encode("utf-8")).decode("ascii")
        return {
            "type": "file",
            "name": path.rsplit("/", 1)[-1],
            "path": path,
            "encoding": "base64",
            "content": encoded,
            "url": f"{API}{self.prefix}/{path}",
        }

    def _children(self, rel: str) -> list[dict[str, Any]] | None:
        found: dict[str, dict[str, Any]] = {}
        for path in self.files:
            if rel:
                if not path.startswith(rel + "/"):
                    continue
                rest = path[len(rel) + 1:]
            else:
                rest = path
            head = rest.split("/", 1)[0]
            child = f"{rel}/{head}" if rel else head
            kind = "dir" if "/" in rest else "file"
            found.setdefault(
                child,
                {
                    "type": kind,
                    "name": head,
                    "path": child,
                    "url": f"{API}{self.prefix}/{child}",
                },
            )
        if not found and rel:
            return None
        return list(found.values())

    def handler(self, request: httpx.Request) -> httpx.Response:
        rel = request.url.path[len(self.prefix):].strip("/")
        self.requests.append(rel)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "boom"})
        if rel in self.files:
            return httpx.Response(200, json=self._file_json(rel))
        children = self._children(rel)
        if children is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=children)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_github() -> Callable[..., FakeGitHub]:
    def _make(files: dict[str, str], repo: str = REPO) -> FakeGitHub:
        return FakeGitHub(files, repo)

    return _make


# ---------------------------------------------------------------------------
# Catalog & files
# ---------------------------------------------------------------------------


@pytest.fixture
def catalog() -> TemplateCatalog:
    return TemplateCatalog(
        [
            Template(name="blank", description="Empty starter", github_repo="acme/blank"),
            Template(
                name="starter-a",
                description="basic",
                github_repo=REPO,
                tags=("angular",),
                is_default=True,
            ),
        ]
    )


def repo_file(path: str, content: str = "") -> RepoFile:
    return RepoFile(name=path.rsplit("/", 1)[-1], path=path, content=content)


# ---------------------------------------------------------------------------
# LLM gateway
# ---------------------------------------------------------------------------


@pytest.fixture
def llm_reply() -> Callable[[str], AsyncMock]:
    """Return a gateway mock whose ``complete`` answers with *text*."""

    def _make(text: str) -> AsyncMock:
        gateway = AsyncMock()
        gateway.complete = AsyncMock(return_value=text)
        return gateway

    return _make
