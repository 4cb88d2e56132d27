"""Import-template use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the two ports (:class:`ContentFetcher` and :class:`LlmGateway`, via the
resolver) and the pure service modules.  The interface layer injects concrete
adapters at runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from starter_importer.domain.catalog import BLANK_TEMPLATE, TemplateCatalog
from starter_importer.domain.entities import ImportOutcome, ImportResult, TemplateSelection
from starter_importer.domain.exceptions import (
    LlmError,
    NotFoundError,
    StarterImporterError,
    TransportError,
)
from starter_importer.domain.ports.content_fetcher import ContentFetcher
from starter_importer.services import import_message
from starter_importer.services.design_brief import DesignPayload, design_notes, enhance_request
from starter_importer.services.file_filter import (
    DEFAULT_METADATA_DIR,
    PROMPT_FILE_NAME,
    filter_files,
    find_metadata_file,
)
from starter_importer.services.template_resolver import TemplateResolver

logger = logging.getLogger(__name__)

BLANK_PROJECT_TITLE = "Blank Project"


class ImportTemplateUseCase:
    """Orchestrates request → template selection → template import.

    Parameters
    ----------
    resolver:
        Picks a catalog template for a natural-language request.
    fetcher:
        Reads a template repository (normally the expiring cache).
    catalog:
        The templates that may be imported.
    metadata_dir:
        Directory inside a template repo holding its ``ignore`` / ``prompt`` files.
    """

    def __init__(
        self,
        resolver: TemplateResolver,
        fetcher: ContentFetcher,
        catalog: TemplateCatalog,
        metadata_dir: str = DEFAULT_METADATA_DIR,
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self._catalog = catalog
        self._metadata_dir = metadata_dir

    # ── Public entry points ─────────────────────────────────────────────

    async def execute(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: Mapping[str, Any] | None = None,
        design: DesignPayload | None = None,
    ) -> ImportOutcome:
        """Select a template for *message* and import it."""
        selection = await self.select_template(
            message, model=model, provider=provider, design=design
        )
        result = await self.get_templates(selection.template_id, selection.title)

        if design is not None and result is not None:
            result = ImportResult(
                bundled_payload=result.bundled_payload,
                instructions=f"{result.instructions}\n{design_notes(design)}",
            )
        return ImportOutcome(selection=selection, result=result)

    async def select_template(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: Mapping[str, Any] | None = None,
        design: DesignPayload | None = None,
    ) -> TemplateSelection:
        """Ask the resolver; degrade to the blank template on any failure."""
        request = enhance_request(message, design) if design is not None else message
        try:
            selection = await self._resolver.resolve(request, model=model, provider=provider)
        except (TransportError, LlmError) as exc:
            logger.warning("Template selection failed: %s", exc)
            selection = None

        if selection is None:
            logger.info("No template selected, using blank template")
            return TemplateSelection(template_id=BLANK_TEMPLATE, title="")
        return selection

    async def get_templates(
        self, template_name: str, title: str | None = None
    ) -> ImportResult | None:
        """Fetch, filter and package a template's files.

        Unknown names fall back to the blank template once; ``None`` means
        not even that exists.  Fetch errors come back as an error artifact.
        """
        try:
            template = self._catalog.require(template_name)
        except NotFoundError as exc:
            if template_name == BLANK_TEMPLATE or BLANK_TEMPLATE not in self._catalog:
                logger.warning("%s and no blank template to fall back to", exc)
                return None
            logger.warning("%s, falling back to blank template", exc)
            return await self.get_templates(BLANK_TEMPLATE, title or BLANK_PROJECT_TITLE)

        try:
            files = await self._fetcher.fetch(template.github_repo)
            filtered = filter_files(files, self._metadata_dir)
            prompt_file = find_metadata_file(files, PROMPT_FILE_NAME, self._metadata_dir)
        except StarterImporterError as exc:
            logger.error("Error fetching template content for %s: %s", template_name, exc)
            return import_message.build_error(template_name, exc)

        logger.info(
            "Imported %s: %d files (%d read-only)",
            template_name,
            len(filtered.files),
            len(filtered.ignored),
        )
        return import_message.build(
            filtered,
            title=title,
            prompt_content=prompt_file.content if prompt_file else None,
        )
