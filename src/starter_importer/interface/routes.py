"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from starter_importer.domain.catalog import TemplateCatalog
from starter_importer.domain.entities import ImportResult, TemplateSelection
from starter_importer.interface.dependencies import get_catalog, get_use_case
from starter_importer.interface.schemas import (
    ImportRequest,
    ErrorResponse,
    ImportResponse,
    SelectionResponse,
    StarterRequest,
    StarterResponse,
    TemplateInfo,
)
from starter_importer.services.import_template import ImportTemplateUseCase

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    422: {"model": ErrorResponse, "description": "Invalid request body"},
    502: {"model": ErrorResponse, "description": "Upstream service error"},
}


def _selection(selection: TemplateSelection) -> SelectionResponse:
    return SelectionResponse(template_name=selection.template_id, title=selection.title)


def _artifacts(result: ImportResult | None) -> ImportResponse:
    if result is None:
        return ImportResponse(imported=False)
    return ImportResponse(
        imported=True,
        bundled_payload=result.bundled_payload,
        instructions=result.instructions,
    )


@router.get("/templates", response_model=list[TemplateInfo])
async def list_templates(
    catalog: TemplateCatalog = Depends(get_catalog),
) -> list[TemplateInfo]:
    """List the starter template catalog."""
    return [
        TemplateInfo(
            name=t.name,
            description=t.description,
            github_repo=t.github_repo,
            tags=list(t.tags),
            is_default=t.is_default,
        )
        for t in catalog
    ]


@router.post(
    "/templates/select",
    response_model=SelectionResponse,
    responses=_ERROR_RESPONSES,
)
async def select_template(
    body: StarterRequest,
    use_case: ImportTemplateUseCase = Depends(get_use_case),
) -> SelectionResponse:
    """Pick a starter template for a request (falls back to ``blank``)."""
    selection = await use_case.select_template(
        body.message, model=body.model, provider=body.provider, design=body.design
    )
    return _selection(selection)


@router.post(
    "/templates/import",
    response_model=ImportResponse,
    responses=_ERROR_RESPONSES,
)
async def import_template(
    body: ImportRequest,
    use_case: ImportTemplateUseCase = Depends(get_use_case),
) -> ImportResponse:
    """Fetch a template and return its bundle and instructions."""
    result = await use_case.get_templates(body.template_name, body.title)
    return _artifacts(result)


@router.post(
    "/starter",
    response_model=StarterResponse,
    responses=_ERROR_RESPONSES,
)
async def starter(
    body: StarterRequest,
    use_case: ImportTemplateUseCase = Depends(get_use_case),
) -> StarterResponse:
    """Select and import in one call."""
    outcome = await use_case.execute(
        body.message, model=body.model, provider=body.provider, design=body.design
    )
    return StarterResponse(
        selection=_selection(outcome.selection),
        artifacts=_artifacts(outcome.result),
    )
