"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from starter_importer.domain.exceptions import InvalidRepoIdError

_REPO_ID_RE = re.compile(
    r"^(?P<owner>[A-Za-z0-9\-_.]+)/(?P<repo>[A-Za-z0-9\-_.]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True, slots=True)
class RepoId:
    """Validated ``owner/repo`` identifier of a GitHub repository."""

    owner: str
    repo: str

    @classmethod
    def from_string(cls, value: str) -> RepoId:
        """Parse ``owner/repo``; a leading ``https://github.com/`` is tolerated."""
        value = value.strip()
        for prefix in ("https://github.com/", "http://github.com/"):
            if value.startswith(prefix):
                value = value[len(prefix):]
                break
        match = _REPO_ID_RE.match(value)
        if not match:
            raise InvalidRepoIdError(
                f"Invalid repository id: '{value}'. Expected format: <owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=match["repo"])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return self.full_name
