"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from starter_importer.services.design_brief import DesignPayload


class StarterRequest(BaseModel):
    """Request body for ``POST /templates/select`` and ``POST /starter``."""

    message: str
    model: str | None = None
    provider: dict[str, Any] | None = None
    design: DesignPayload | None = None

    @field_validator("message")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "message must not be empty."
            raise ValueError(msg)
        return v


class ImportRequest(BaseModel):
    """Request body for ``POST /templates/import``."""

    template_name: str
    title: str | None = None


class TemplateInfo(BaseModel):
    name: str
    description: str
    github_repo: str
    tags: list[str]
    is_default: bool


class SelectionResponse(BaseModel):
    template_name: str
    title: str


class ImportResponse(BaseModel):
    """Import artifacts; ``imported`` is false when no template could be used."""

    imported: bool
    bundled_payload: str | None = None
    instructions: str | None = None


class StarterResponse(BaseModel):
    selection: SelectionResponse
    artifacts: ImportResponse


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
