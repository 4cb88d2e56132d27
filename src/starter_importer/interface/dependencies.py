"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from starter_importer.domain.catalog import TemplateCatalog
from starter_importer.domain.ports.llm_gateway import LlmGateway
from starter_importer.infrastructure.catalog_loader import load_catalog
from starter_importer.infrastructure.config import Settings, get_settings
from starter_importer.infrastructure.github_contents_adapter import GitHubContentsAdapter
from starter_importer.infrastructure.llm_call_adapter import LlmCallAdapter
from starter_importer.infrastructure.openai_adapter import OpenAIAdapter
from starter_importer.infrastructure.repo_content_cache import RepoContentCache
from starter_importer.services.import_template import ImportTemplateUseCase
from starter_importer.services.template_resolver import TemplateResolver

_http_client: httpx.AsyncClient | None = None
_llm_gateway: LlmGateway | None = None
_content_cache: RepoContentCache | None = None
_catalog: TemplateCatalog | None = None


def _build_gateway(settings: Settings, client: httpx.AsyncClient) -> LlmGateway:
    if settings.llm_backend == "openai":
        if settings.openai_api_key is None:
            msg = "OPENAI_API_KEY must be set when LLM_BACKEND=openai"
            raise RuntimeError(msg)
        return OpenAIAdapter(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.llm_model,
        )
    return LlmCallAdapter(
        client=client,
        url=settings.llm_call_url,
        model=settings.llm_model,
        provider={"name": settings.llm_provider},
    )


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _llm_gateway, _content_cache, _catalog  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))
    _llm_gateway = _build_gateway(settings, _http_client)

    token = settings.github_token.get_secret_value() if settings.github_token else None
    fetcher = GitHubContentsAdapter(
        client=_http_client,
        token=token,
        api_url=settings.github_api_url,
        max_concurrency=settings.max_concurrent_fetches,
    )
    _content_cache = RepoContentCache(fetcher, ttl=settings.cache_ttl_seconds)
    _catalog = load_catalog(settings.catalog_file)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _llm_gateway, _content_cache  # noqa: PLW0603

    if isinstance(_llm_gateway, OpenAIAdapter):
        await _llm_gateway.close()
    _llm_gateway = None
    _content_cache = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None


def get_catalog() -> TemplateCatalog:
    assert _catalog is not None, "startup() was not called"
    return _catalog


def get_use_case() -> ImportTemplateUseCase:
    """Build the use-case with injected adapters."""
    settings = get_settings()

    assert _llm_gateway is not None, "startup() was not called"
    assert _content_cache is not None, "startup() was not called"
    catalog = get_catalog()

    return ImportTemplateUseCase(
        resolver=TemplateResolver(_llm_gateway, catalog),
        fetcher=_content_cache,
        catalog=catalog,
        metadata_dir=settings.template_metadata_dir,
    )
