"""Unit tests for the template resolver (prompt, parsing, validation)."""

from __future__ import annotations

import logging

import pytest

from starter_importer.domain.catalog import TemplateCatalog
from starter_importer.domain.entities import Template, TemplateSelection
from starter_importer.domain.exceptions import TransportError
from starter_importer.services.template_resolver import (
    UNTITLED_PROJECT,
    TemplateResolver,
    build_selection_prompt,
    parse_selection,
)


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------


class TestPrompt:
    @pytest.mark.unit
    def test_lists_blank_then_catalog(self, catalog):
        prompt = build_selection_prompt(catalog)

        assert prompt.index("<name>blank</name>") < prompt.index("<name>starter-a</name>")
        assert "<description>basic</description>" in prompt
        assert "<tags>angular</tags>" in prompt
        assert "<templateName>{selected template name}</templateName>" in prompt

    @pytest.mark.unit
    def test_blank_catalog_entry_not_listed_twice(self, catalog):
        assert build_selection_prompt(catalog).count("<name>blank</name>") == 1

    @pytest.mark.unit
    def test_tags_omitted_when_empty(self):
        catalog = TemplateCatalog([Template("plain", "no tags", "acme/plain")])
        block = build_selection_prompt(catalog).split("<name>plain</name>")[1]
        assert block.split("</template>")[0].count("<tags>") == 0

    @pytest.mark.unit
    def test_worked_example_for_blank(self, catalog):
        prompt = build_selection_prompt(catalog)
        assert "<templateName>blank</templateName>" in prompt


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseSelection:
    @pytest.mark.unit
    def test_known_template(self, catalog):
        text = "<templateName>starter-a</templateName><title>Bar</title>"
        assert parse_selection(text, catalog) == TemplateSelection("starter-a", "Bar")

    @pytest.mark.unit
    def test_multiline_with_whitespace(self, catalog):
        text = (
            "Sure!\n<selection>\n  <templateName>\n    starter-a\n  </templateName>\n"
            "  <title>\n    My Shop\n  </title>\n</selection>"
        )
        assert parse_selection(text, catalog) == TemplateSelection("starter-a", "My Shop")

    @pytest.mark.unit
    def test_missing_template_name_returns_none(self, catalog):
        assert parse_selection("<title>Bar</title>", catalog) is None
        assert parse_selection("I cannot decide", catalog) is None

    @pytest.mark.unit
    def test_missing_title_defaults(self, catalog):
        result = parse_selection("<templateName>starter-a</templateName>", catalog)
        assert result == TemplateSelection("starter-a", UNTITLED_PROJECT)

    @pytest.mark.unit
    def test_empty_title_defaults(self, catalog):
        text = "<templateName>starter-a</templateName><title>  </title>"
        assert parse_selection(text, catalog).title == UNTITLED_PROJECT

    @pytest.mark.unit
    def test_blank_is_always_valid(self):
        catalog = TemplateCatalog([Template("starter-a", "basic", "acme/a")])
        text = "<templateName>blank</templateName><title>Script</title>"
        assert parse_selection(text, catalog) == TemplateSelection("blank", "Script")

    @pytest.mark.unit
    def test_unknown_name_uses_declared_default(self, catalog):
        text = "<templateName>angular-data-viz</templateName><title>Charts</title>"
        assert parse_selection(text, catalog) == TemplateSelection("starter-a", "Charts")

    @pytest.mark.unit
    def test_unknown_name_without_default_uses_first_entry(self):
        catalog = TemplateCatalog(
            [Template("first", "1", "acme/1"), Template("second", "2", "acme/2")]
        )
        text = "<templateName>nope</templateName><title>T</title>"
        assert parse_selection(text, catalog) == TemplateSelection("first", "T")

    @pytest.mark.unit
    def test_unknown_name_with_empty_catalog_uses_blank(self):
        text = "<templateName>nope</templateName><title>T</title>"
        assert parse_selection(text, TemplateCatalog([])) == TemplateSelection("blank", "T")

    @pytest.mark.unit
    def test_recovered_failures_are_logged(self, catalog, caplog):
        with caplog.at_level(logging.WARNING, logger="starter_importer.services.template_resolver"):
            parse_selection("no tags here", catalog)
            parse_selection("<templateName>nope</templateName>", catalog)

        messages = [r.getMessage() for r in caplog.records]
        assert any("no <templateName> tag" in m for m in messages)
        assert any('Template "nope" not found' in m for m in messages)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class TestResolver:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sends_prompt_and_request(self, catalog, llm_reply):
        gateway = llm_reply("<templateName>starter-a</templateName><title>Bar</title>")
        resolver = TemplateResolver(gateway, catalog)

        result = await resolver.resolve("build me a form", model="m1", provider={"name": "p"})

        assert result == TemplateSelection("starter-a", "Bar")
        gateway.complete.assert_awaited_once_with(
            resolver.prompt, "build me a form", model="m1", provider={"name": "p"}
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unparseable_reply_returns_none(self, catalog, llm_reply):
        resolver = TemplateResolver(llm_reply("no tags here"), catalog)
        assert await resolver.resolve("anything") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_gateway_errors_propagate(self, catalog, llm_reply):
        gateway = llm_reply("")
        gateway.complete.side_effect = TransportError("down", status_code=500)
        resolver = TemplateResolver(gateway, catalog)

        with pytest.raises(TransportError):
            await resolver.resolve("anything")
