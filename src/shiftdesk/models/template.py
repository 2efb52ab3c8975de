"""Job template models — reusable job draft presets owned by one company."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


def new_template_id() -> str:
    return f"template_{uuid.uuid4().hex[:12]}"


class JobTemplate(BaseModel):
    """A named set of default job draft values."""

    template_id: str = Field(default_factory=new_template_id)
    company_id: str
    name: str
    category: str = ""
    description: str = ""
    default_skills: list[str] = Field(default_factory=list)
    default_certificates: list[str] = Field(default_factory=list)
    default_experience: int = Field(default=0, ge=0)
    suggested_rate: Decimal = Field(default=Decimal("0"), ge=0)
    default_settings: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)
    usage_count: int = Field(default=0, ge=0)


class TemplateCreate(BaseModel):
    """Fields a caller supplies when creating a template."""

    name: str
    category: str = ""
    description: str = ""
    default_skills: list[str] = Field(default_factory=list)
    default_certificates: list[str] = Field(default_factory=list)
    default_experience: int = Field(default=0, ge=0)
    suggested_rate: Decimal = Field(default=Decimal("0"), ge=0)
    default_settings: dict[str, Any] = Field(default_factory=dict)


class TemplateUpdate(BaseModel):
    """Partial template edit; unset fields are left untouched."""

    name: str | None = None
    category: str | None = None
    description: str | None = None
    default_skills: list[str] | None = None
    default_certificates: list[str] | None = None
    default_experience: int | None = Field(default=None, ge=0)
    suggested_rate: Decimal | None = Field(default=None, ge=0)
    default_settings: dict[str, Any] | None = None
