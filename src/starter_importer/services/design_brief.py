"""Design brief — fold a Figma payload into the request and the instructions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

NOT_SPECIFIED = "Not specified"


class DesignComponent(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""
    type: str | None = None


class StyleGuide(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    primary_colors: Any = Field(default=None, alias="primaryColors")
    typography: Any = None


class DesignPayload(BaseModel):
    """The subset of a design-tool export this service looks at."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    components: list[DesignComponent] = Field(default_factory=list)
    style_guide: StyleGuide = Field(default_factory=StyleGuide, alias="styleGuide")


def _mentions(components: list[DesignComponent], needle: str) -> bool:
    return any(
        needle in (c.type or "").lower() or needle in c.name.lower() for c in components
    )


def _describe(value: Any) -> str:
    if not value:
        return NOT_SPECIFIED
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def enhance_request(message: str, payload: DesignPayload) -> str:
    """Prefix *message* with a short summary of the design."""
    components = payload.components
    style = payload.style_guide
    lines = [
        "I need to convert a Figma design to a working application.",
        "Design details:",
        f"- {len(components)} components",
        "- Includes complex forms" if _mentions(components, "form") else "- No complex forms",
        "- Includes dashboard elements"
        if _mentions(components, "dashboard")
        else "- No dashboard elements",
        f"- Primary colors: {_describe(style.primary_colors)}",
        f"- Typography: {_describe(style.typography)}",
        "",
        f"Original request: {message}",
    ]
    return "\n".join(lines)


def design_notes(payload: DesignPayload) -> str:
    """Instructions appendix telling the assistant how to use the design."""
    if payload.components:
        return (
            "FIGMA COMPONENT INFORMATION:\n"
            f"{len(payload.components)} components have been analyzed from your Figma design.\n"
            "Please create components matching these designs and adjust them "
            "to match your exact design requirements.\n"
        )
    return (
        "FIGMA STYLING INFORMATION:\n"
        "The imported template has been selected based on your Figma design.\n"
        "You should update the styles to match the Figma design specifications.\n"
        "- Review the color schemes in the design files\n"
        "- Match typography according to the Figma specs\n"
        "- Implement the component structure as shown in the design\n"
    )
