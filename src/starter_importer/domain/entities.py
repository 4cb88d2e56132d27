"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RepoFile:
    """A fetched file with its decoded content."""

    name: str
    path: str  # slash-separated, relative to the repo root
    content: str


@dataclass(frozen=True, slots=True)
class Template:
    """A starter template from the catalog."""

    name: str
    description: str
    github_repo: str
    tags: tuple[str, ...] = ()
    is_default: bool = False


@dataclass(frozen=True, slots=True)
class TemplateSelection:
    """The template picked for a request, plus a project title."""

    template_id: str
    title: str


@dataclass(frozen=True, slots=True)
class FilteredFileSet:
    """Files to import, and the subset of them that must stay read-only.

    ``ignored`` is not removed from ``files``: ignored files are still
    imported, they are only annotated in the instructions message.
    """

    files: list[RepoFile] = field(default_factory=list)
    ignored: list[RepoFile] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ImportResult:
    """The two artifacts produced by a template import."""

    bundled_payload: str
    instructions: str


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    """Selection and import artifacts for a full request."""

    selection: TemplateSelection
    result: ImportResult | None
