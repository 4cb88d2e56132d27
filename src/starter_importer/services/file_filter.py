"""File filtering — decide which template files to import and which to protect."""

from __future__ import annotations

import logging

import pathspec

from starter_importer.domain.entities import FilteredFileSet, RepoFile

logger = logging.getLogger(__name__)

DEFAULT_METADATA_DIR = ".bolt"
IGNORE_FILE_NAME = "ignore"
PROMPT_FILE_NAME = "prompt"

VCS_PREFIX = ".git"

LOCK_FILENAMES: frozenset[str] = frozenset(
    {
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
    }
)


def find_metadata_file(
    files: list[RepoFile],
    name: str,
    metadata_dir: str = DEFAULT_METADATA_DIR,
) -> RepoFile | None:
    """Return the first file called *name* under the template metadata dir."""
    for f in files:
        if f.path.startswith(metadata_dir) and f.name == name:
            return f
    return None


def should_skip(f: RepoFile, metadata_dir: str = DEFAULT_METADATA_DIR) -> bool:
    """Return *True* for files that are never imported (case-sensitive)."""
    if f.path.startswith(VCS_PREFIX):
        return True
    if f.name in LOCK_FILENAMES:
        return True
    if f.path.startswith(metadata_dir):
        return True
    return False


def parse_ignore_rules(content: str) -> pathspec.GitIgnoreSpec:
    """Build gitignore-style rules from an ignore file, one pattern per line."""
    lines = [line.strip() for line in content.split("\n")]
    return pathspec.GitIgnoreSpec.from_lines(lines)


def filter_files(
    files: list[RepoFile],
    metadata_dir: str = DEFAULT_METADATA_DIR,
) -> FilteredFileSet:
    """Drop never-imported files, then mark the ones the ignore file protects.

    Files matched by the ignore rules are listed in ``ignored`` *and* kept in
    ``files``: they are imported read-only, not left out.
    """
    kept = [f for f in files if not should_skip(f, metadata_dir)]

    ignore_file = find_metadata_file(files, IGNORE_FILE_NAME, metadata_dir)
    if ignore_file is None:
        return FilteredFileSet(files=kept, ignored=[])

    rules = parse_ignore_rules(ignore_file.content)
    ignored = [f for f in kept if rules.match_file(f.path)]
    if ignored:
        logger.info("%d template file(s) marked read-only by %s", len(ignored), ignore_file.path)
    return FilteredFileSet(files=kept, ignored=ignored)
