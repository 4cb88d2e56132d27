"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from starter_importer.interface.dependencies import shutdown, startup
from starter_importer.interface.error_handlers import register_error_handlers
from starter_importer.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Starter Template Importer",
        version="1.0.0",
        description=(
            "Picks a starter project template for a request, imports its "
            "files from GitHub and returns them as a bundled artifact plus "
            "setup instructions."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
