"""Template catalog — the fixed list of starter templates a request may pick."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from starter_importer.domain.entities import Template
from starter_importer.domain.exceptions import NotFoundError

BLANK_TEMPLATE = "blank"


class TemplateCatalog:
    """Ordered, name-addressable collection of :class:`Template` entries.

    Order is authoritative: when several entries qualify as a fallback the
    first one wins.
    """

    def __init__(self, templates: Iterable[Template]) -> None:
        self._templates: list[Template] = list(templates)
        self._by_name: dict[str, Template] = {}
        for template in self._templates:
            self._by_name.setdefault(template.name, template)

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Template | None:
        return self._by_name.get(name)

    def require(self, name: str) -> Template:
        """Like :meth:`get`, but raise :class:`NotFoundError` for unknown names."""
        template = self._by_name.get(name)
        if template is None:
            raise NotFoundError(f'Template "{name}" not found')
        return template

    def names(self) -> list[str]:
        return [t.name for t in self._templates]

    def fallback(self) -> str:
        """Name to use when a selection names an unknown template.

        The first entry declared ``is_default`` wins, then the first entry,
        then the blank template.
        """
        for template in self._templates:
            if template.is_default:
                return template.name
        if self._templates:
            return self._templates[0].name
        return BLANK_TEMPLATE
