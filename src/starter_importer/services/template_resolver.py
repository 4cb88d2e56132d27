"""Template resolver — ask the LLM to pick a starter template for a request.

The reply format is two XML-ish tags inside a ``<selection>`` block.  Parsing
is deliberately permissive (any whitespace, multi-line values); validation
then coerces unknown template names to the catalog's fallback entry.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from starter_importer.domain.catalog import BLANK_TEMPLATE, TemplateCatalog
from starter_importer.domain.entities import Template, TemplateSelection
from starter_importer.domain.exceptions import NotFoundError, ParseError
from starter_importer.domain.ports.llm_gateway import LlmGateway

logger = logging.getLogger(__name__)

UNTITLED_PROJECT = "Untitled Project"

_TEMPLATE_NAME_RE = re.compile(r"<templateName>(.*?)</templateName>", re.DOTALL)
_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.DOTALL)

# ── Prompt template ─────────────────────────────────────────────────────────

_PROMPT_HEADER = """\
You are an experienced front-end developer who helps convert Figma designs \
into applications by selecting the most appropriate starter template.

Available templates:
<template>
  <name>blank</name>
  <description>Empty starter for simple scripts and trivial tasks that don't \
require a full template setup</description>
  <tags>basic, script</tags>
</template>
"""

_PROMPT_FOOTER = """
Response Format:
<selection>
  <templateName>{selected template name}</templateName>
  <title>{a proper title for the project based on the design purpose}</title>
</selection>

Examples:

<example>
User: I need to convert a Figma design for an e-commerce dashboard
Response:
<selection>
  <templateName>angular-dashboard-starter</templateName>
  <title>E-commerce Admin Dashboard</title>
</selection>
</example>

<example>
User: Convert my Figma design for a simple landing page
Response:
<selection>
  <templateName>angular-landing-page</templateName>
  <title>Responsive Landing Page</title>
</selection>
</example>

<example>
User: Write a script to generate numbers from 1 to 100
Response:
<selection>
  <templateName>blank</templateName>
  <title>Script to generate numbers from 1 to 100</title>
</selection>
</example>

<example>
User: I have a Figma design for a simple contact form
Response:
<selection>
  <templateName>angular-basic-starter</templateName>
  <title>Contact Form Implementation</title>
</selection>
</example>

Instructions:
1. For trivial tasks and simple scripts, recommend the blank template
2. For Figma designs, recommend templates that match the UI requirements
3. Consider responsive design needs based on the user's description
4. Prioritize templates with component libraries that match the Figma style guides if mentioned
5. Follow the exact XML format
6. Consider both technical requirements and tags
7. If no perfect match exists, recommend the closest option

Important: Provide only the selection tags in your response, no additional text.
"""


def _render_template(template: Template) -> str:
    lines = [
        "<template>",
        f"  <name>{template.name}</name>",
        f"  <description>{template.description}</description>",
    ]
    if template.tags:
        lines.append(f"  <tags>{', '.join(template.tags)}</tags>")
    lines.append("</template>")
    return "\n".join(lines)


def build_selection_prompt(catalog: TemplateCatalog) -> str:
    """Enumerate the catalog (after the fixed blank entry) inside the system prompt."""
    entries = [_render_template(t) for t in catalog if t.name != BLANK_TEMPLATE]
    return _PROMPT_HEADER + "\n".join(entries) + "\n" + _PROMPT_FOOTER


# ── Parsing ─────────────────────────────────────────────────────────────────


def _extract_fields(text: str) -> tuple[str, str]:
    name_match = _TEMPLATE_NAME_RE.search(text)
    if not name_match:
        raise ParseError("Reply has no <templateName> tag")
    title_match = _TITLE_RE.search(text)
    title = (title_match.group(1).strip() if title_match else "") or UNTITLED_PROJECT
    return name_match.group(1).strip(), title


def parse_selection(text: str, catalog: TemplateCatalog) -> TemplateSelection | None:
    """Read ``templateName`` / ``title`` from *text*.

    Returns ``None`` when no ``templateName`` tag is present.  A name that is
    neither in the catalog nor ``blank`` becomes ``catalog.fallback()``; the
    parsed title is kept either way.
    """
    try:
        template_id, title = _extract_fields(text)
    except ParseError as exc:
        logger.warning("%s. LLM output: %r", exc, text)
        return None

    if template_id != BLANK_TEMPLATE:
        try:
            catalog.require(template_id)
        except NotFoundError as exc:
            fallback = catalog.fallback()
            logger.warning("Selected template is unusable (%s); using %s", exc, fallback)
            template_id = fallback

    return TemplateSelection(template_id=template_id, title=title)


# ── Resolver ────────────────────────────────────────────────────────────────


class TemplateResolver:
    """Pick a catalog template for a natural-language request."""

    def __init__(self, llm_gateway: LlmGateway, catalog: TemplateCatalog) -> None:
        self._llm = llm_gateway
        self._catalog = catalog
        self._prompt = build_selection_prompt(catalog)

    @property
    def prompt(self) -> str:
        return self._prompt

    async def resolve(
        self,
        request: str,
        *,
        model: str | None = None,
        provider: Mapping[str, Any] | None = None,
    ) -> TemplateSelection | None:
        """Return the parsed selection, or ``None`` when the reply is unparseable.

        Gateway errors propagate; the caller decides how to degrade.
        """
        text = await self._llm.complete(
            self._prompt, request, model=model, provider=provider
        )
        return parse_selection(text, self._catalog)
