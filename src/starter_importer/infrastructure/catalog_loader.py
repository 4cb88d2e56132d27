"""Load the template catalog from JSON (bundled default or a user file)."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter

from starter_importer.domain.catalog import TemplateCatalog
from starter_importer.domain.entities import Template

logger = logging.getLogger(__name__)

_BUNDLED_CATALOG = "starter_templates.json"


class CatalogEntry(BaseModel):
    """On-disk shape of one catalog entry."""

    name: str
    description: str
    github_repo: str = Field(alias="githubRepo")
    tags: list[str] = Field(default_factory=list)
    is_default: bool = Field(default=False, alias="isDefault")

    model_config = {"populate_by_name": True}

    def to_template(self) -> Template:
        return Template(
            name=self.name,
            description=self.description,
            github_repo=self.github_repo,
            tags=tuple(self.tags),
            is_default=self.is_default,
        )


_ENTRIES = TypeAdapter(list[CatalogEntry])


def parse_catalog(raw: str | bytes) -> TemplateCatalog:
    """Validate a JSON array of entries and build a :class:`TemplateCatalog`."""
    entries = _ENTRIES.validate_json(raw)
    return TemplateCatalog(entry.to_template() for entry in entries)


def load_catalog(path: Path | None = None) -> TemplateCatalog:
    """Read *path*, or the catalog bundled with the package when *path* is None."""
    if path is None:
        raw = Path(__file__).with_name(_BUNDLED_CATALOG).read_text(encoding="utf-8")
    else:
        raw = path.read_text(encoding="utf-8")
    catalog = parse_catalog(raw)
    logger.info("Loaded %d starter templates from %s", len(catalog), path or _BUNDLED_CATALOG)
    return catalog
