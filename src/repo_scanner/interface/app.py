"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_scanner.interface.dependencies import shutdown, startup
from repo_scanner.interface.error_handlers import register_error_handlers
from repo_scanner.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Repo Scanner",
        version="1.0.0",
        description=(
            "Scans a folder of source files or a public GitHub repository into "
            "a bounded summary (languages, frameworks, pattern-based issues) "
            "and asks an LLM for an issue analysis, patches and documentation."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
