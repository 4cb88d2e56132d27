"""GitHub contents API adapter — implements the ContentFetcher port."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Any

import httpx

from starter_importer.domain.entities import RepoFile
from starter_importer.domain.exceptions import TransportError
from starter_importer.domain.value_objects import RepoId

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubContentsAdapter:
    """Concrete ContentFetcher backed by ``/repos/{owner}/{repo}/contents``.

    Directory listings fan out one task per child.  Every outbound request
    goes through a shared semaphore, so at most ``max_concurrency`` requests
    are in flight however wide or deep the tree is.  Only the request is
    gated (never the recursion itself), so a parent waiting on its children
    never holds a slot.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        *,
        api_url: str = _GITHUB_API,
        max_concurrency: int = 10,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "starter-importer/1.0",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    async def fetch(self, repo_id: str, path: str = "") -> list[RepoFile]:
        """GET /repos/{owner}/{repo}/contents/{path} → [RepoFile], recursively."""
        repo = RepoId.from_string(repo_id)
        url = f"{self._api_url}/repos/{repo.full_name}/contents/{path.lstrip('/')}"
        data = await self._get_json(url)

        if isinstance(data, dict):
            if data.get("type") == "file":
                return [await self._to_repo_file(data)]
            logger.debug("Skipping %s entry at %s:%s", data.get("type"), repo, path)
            return []
        if not isinstance(data, list):
            raise TransportError(f"Unexpected contents payload for {url}")

        tasks = [
            asyncio.ensure_future(self._fetch_child(repo.full_name, item)) for item in data
        ]
        try:
            children = await asyncio.gather(*tasks)
        except BaseException:
            # one failed child fails the listing; stop its siblings
            for task in tasks:
                task.cancel()
            raise
        return [f for group in children for f in group]

    async def _fetch_child(self, repo_id: str, item: Any) -> list[RepoFile]:
        if not isinstance(item, dict):
            raise TransportError(f"Malformed listing entry in {repo_id}: {item!r}")
        item_type = item.get("type")
        if item_type == "dir":
            return await self.fetch(repo_id, _field(item, "path"))
        if item_type == "file":
            file_data = await self._get_json(_field(item, "url"))
            if not isinstance(file_data, dict):
                raise TransportError(f"Unexpected file payload for {item.get('path')}")
            return [await self._to_repo_file(file_data, item)]
        # symlinks and submodules carry no content of their own
        return []

    async def _to_repo_file(
        self, data: dict[str, Any], listing: dict[str, Any] | None = None
    ) -> RepoFile:
        listing = listing or data
        name = listing.get("name") or _field(data, "name")
        path = listing.get("path") or _field(data, "path")

        if data.get("encoding") == "none" or data.get("content") is None:
            # Files over 1 MB come without inline content.
            download_url = data.get("download_url")
            if not download_url:
                raise TransportError(f"No content available for {path}")
            content = (await self._get(download_url)).text
        else:
            content = _decode_content(data["content"], path)

        return RepoFile(name=name, path=path, content=content)

    async def _get_json(self, url: str) -> Any:
        resp = await self._get(url)
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(f"GitHub API returned invalid JSON for {url}: {exc}") from exc

    async def _get(self, url: str) -> httpx.Response:
        """Perform a GitHub GET request with error translation."""
        async with self._semaphore:
            try:
                resp = await self._client.get(url, headers=self._headers)
            except httpx.HTTPError as exc:
                raise TransportError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code != 200:
            raise TransportError(
                f"GitHub API returned HTTP {resp.status_code} for {url}",
                status_code=resp.status_code,
            )
        return resp


def _decode_content(encoded: str, path: str) -> str:
    """Decode the base64 body GitHub returns (line-wrapped at 60 chars)."""
    if not isinstance(encoded, str):
        raise TransportError(f"Malformed content field for {path}")
    try:
        raw = base64.b64decode(encoded.replace("\n", ""), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise TransportError(f"Malformed base64 content for {path}: {exc}") from exc
    return raw.decode("utf-8", errors="replace")


def _field(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise TransportError(f"GitHub payload is missing '{key}'") from None
