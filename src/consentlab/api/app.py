"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from consentlab.api.middleware.error_handler import register_error_handlers
from consentlab.api.routes import analyze, ask, health, languages, reports, translate
from consentlab.core.config import APIConfig, AppSettings
from consentlab.core.startup_checks import validate_settings
from consentlab.hooks import setup_logging
from consentlab.services.pipeline import ConsentPipeline


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("consentlab")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(
    settings: AppSettings | None = None,
    pipeline: ConsentPipeline | None = None,
) -> FastAPI:
    """Build the API. Pass ``pipeline`` to run against a preconfigured backend."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        app_settings = settings or AppSettings()
        app_pipeline = pipeline
        if app_pipeline is None:
            validate_settings(app_settings)
            setup_logging(app_settings.observability)
            app_pipeline = ConsentPipeline.from_settings(app_settings)

        app.state.settings = app_settings
        app.state.pipeline = app_pipeline
        yield

    api_config = settings.api if settings is not None else APIConfig()
    app = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(languages.router, prefix="/api")
    app.include_router(analyze.router, prefix="/api")
    app.include_router(translate.router, prefix="/api")
    app.include_router(ask.router, prefix="/api")
    app.include_router(reports.router, prefix="/api")
    return app


app = create_app()
