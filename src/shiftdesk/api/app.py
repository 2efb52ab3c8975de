"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shiftdesk.api.routes import health, imports, templates
from shiftdesk.bulk.reporter import ResultReporter
from shiftdesk.core.config import AppSettings
from shiftdesk.core.exceptions import (
    SourceEmptyError,
    StoreError,
    TemplateNotFoundError,
    UploadNotFoundError,
)
from shiftdesk.core.logging import configure_logging, get_logger
from shiftdesk.importer.main import ImportService
from shiftdesk.persistence import Persistence, create_persistence
from shiftdesk.templates.template_service import TemplateService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings: AppSettings = app.state.settings
    configure_logging(settings.log_level, settings.environment)
    logger.info("app_started", environment=settings.environment,
                backend=settings.persistence.backend)
    yield


async def _template_not_found(request: Request, exc: TemplateNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _upload_not_found(request: Request, exc: UploadNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _source_empty(request: Request, exc: SourceEmptyError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("store_error", error=str(exc))
    return JSONResponse(status_code=502, content={"detail": str(exc)})


def create_app(settings: AppSettings | None = None,
               persistence: Persistence | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or AppSettings()
    persistence = persistence or create_persistence(settings)

    app = FastAPI(
        title="ShiftDesk Bulk Job Import",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.persistence = persistence
    app.state.import_service = ImportService(settings=settings, file_store=persistence.file_store)
    app.state.template_service = TemplateService(settings=settings, store=persistence.template_store)
    app.state.reporter = ResultReporter(
        max_errors=settings.imports.max_displayed_errors,
        preview_rows=settings.imports.preview_rows,
    )

    app.add_exception_handler(TemplateNotFoundError, _template_not_found)
    app.add_exception_handler(SourceEmptyError, _source_empty)
    app.add_exception_handler(UploadNotFoundError, _upload_not_found)
    app.add_exception_handler(StoreError, _store_error)
    app.include_router(health.router)
    app.include_router(imports.router, prefix="/imports")
    app.include_router(templates.router, prefix="/templates")
    return app
