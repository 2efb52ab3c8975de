"""Bulk job import endpoints: parse, run, poll progress, CSV template."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from shiftdesk.bulk.orchestrator import BulkCreationOrchestrator
from shiftdesk.bulk.progress import CacheProgressPublisher, read_progress
from shiftdesk.importer.csv_template import build_csv_template
from shiftdesk.models.batch import ParseResult

router = APIRouter(tags=["imports"])


class FileImportRequest(BaseModel):
    path: str


async def _csv_body(request: Request) -> str:
    return (await request.body()).decode("utf-8-sig")


def _schema_rejected(parsed: ParseResult) -> bool:
    return not parsed.drafts and any(e.row == 0 for e in parsed.errors)


async def _run(request: Request, parsed: ParseResult) -> dict:
    state = request.app.state
    if _schema_rejected(parsed):
        raise HTTPException(status_code=422, detail=parsed.messages)

    settings = state.settings
    orchestrator = BulkCreationOrchestrator(
        state.persistence.job_store, item_timeout=settings.bulk.item_timeout_seconds,
    )
    publisher = CacheProgressPublisher(
        state.persistence.cache, orchestrator.result.batch_id, ttl=settings.bulk.progress_ttl_seconds,
    )
    await asyncio.to_thread(publisher.publish, 0, len(parsed.drafts))
    result = await orchestrator.start(parsed.drafts, publisher)
    if not parsed.drafts:
        await asyncio.to_thread(publisher.publish, 0, 0, "COMPLETED")

    return {
        "batch_id": result.batch_id,
        "parse_errors": parsed.messages,
        "summary": state.reporter.summarize(result).model_dump(),
    }


@router.get("/template.csv", response_class=PlainTextResponse)
async def csv_template() -> PlainTextResponse:
    return PlainTextResponse(
        build_csv_template(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="job_import_template.csv"'},
    )


@router.post("/parse")
async def parse_csv(request: Request) -> dict:
    """Validate and parse a CSV body without creating any jobs."""
    state = request.app.state
    parsed = state.import_service.validate_and_parse(await _csv_body(request))
    return {
        "drafts": [d.model_dump(mode="json") for d in parsed.drafts],
        "errors": parsed.messages,
        "preview": state.reporter.preview(parsed.drafts),
    }


@router.post("")
async def import_csv(request: Request) -> dict:
    """Parse a CSV body and create every valid job."""
    parsed = request.app.state.import_service.validate_and_parse(await _csv_body(request))
    return await _run(request, parsed)


@router.post("/files")
async def import_file(request: Request, body: FileImportRequest) -> dict:
    """Import a CSV previously uploaded to the file store."""
    parsed = await asyncio.to_thread(request.app.state.import_service.import_from_file_store, body.path)
    return await _run(request, parsed)


@router.get("/{batch_id}/progress")
def batch_progress(request: Request, batch_id: str) -> dict:
    progress = read_progress(request.app.state.persistence.cache, batch_id)
    if progress is None:
        raise HTTPException(status_code=404, detail=f"Unknown batch {batch_id!r}")
    return progress
