"""Job template CRUD endpoints.

Handlers are plain functions so FastAPI runs the blocking store calls in its
threadpool.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, Field

from shiftdesk.models.job_draft import JobType
from shiftdesk.models.template import TemplateCreate, TemplateUpdate

router = APIRouter(tags=["templates"])


class DraftRequest(BaseModel):
    """Fields the caller already knows; the template fills the rest."""

    title: str = ""
    description: str = ""
    location: str = ""
    postal_code: str = ""
    hourly_rate: Decimal = Field(default=Decimal("0"), ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
    required_skills: list[str] = Field(default_factory=list)
    minimum_experience: int = Field(default=0, ge=0)
    job_type: JobType | None = None


def _service(request: Request):
    return request.app.state.template_service


@router.get("")
def list_templates(request: Request) -> list[dict]:
    return [t.model_dump(mode="json") for t in _service(request).list()]


@router.post("", status_code=201)
def create_template(request: Request, body: TemplateCreate) -> dict:
    return _service(request).create(body).model_dump(mode="json")


@router.get("/{template_id}")
def get_template(request: Request, template_id: str) -> dict:
    return _service(request).get(template_id).model_dump(mode="json")


@router.patch("/{template_id}")
def update_template(request: Request, template_id: str, body: TemplateUpdate) -> dict:
    return _service(request).update(template_id, body).model_dump(mode="json")


@router.delete("/{template_id}", status_code=204)
def delete_template(request: Request, template_id: str) -> Response:
    _service(request).delete(template_id)
    return Response(status_code=204)


@router.post("/{template_id}/duplicate", status_code=201)
def duplicate_template(request: Request, template_id: str) -> dict:
    return _service(request).duplicate(template_id).model_dump(mode="json")


@router.post("/{template_id}/draft")
def draft_from_template(request: Request, template_id: str,
                              body: DraftRequest | None = None) -> dict:
    fields = body.model_dump(exclude_unset=True, exclude_none=True) if body else {}
    return _service(request).new_draft(template_id, **fields).model_dump(mode="json")
