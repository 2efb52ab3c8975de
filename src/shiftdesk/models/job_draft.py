"""Job draft — a not-yet-persisted job posting produced by import or templating."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class JobType(StrEnum):
    OBJECTBEVEILIGING = "objectbeveiliging"
    EVENEMENTBEVEILIGING = "evenementbeveiliging"
    PERSOONBEVEILIGING = "persoonbeveiliging"
    SURVEILLANCE = "surveillance"
    RECEPTIE = "receptie"
    TRANSPORT = "transport"

    @property
    def display_name(self) -> str:
        return _JOB_TYPE_LABELS[self]


_JOB_TYPE_LABELS = {
    JobType.OBJECTBEVEILIGING: "Objectbeveiliging",
    JobType.EVENEMENTBEVEILIGING: "Evenementbeveiliging",
    JobType.PERSOONBEVEILIGING: "Persoonbeveiliging",
    JobType.SURVEILLANCE: "Mobiele Surveillance",
    JobType.RECEPTIE: "Receptiebeveiliging",
    JobType.TRANSPORT: "Transportbeveiliging",
}

DEFAULT_JOB_TYPE = JobType.OBJECTBEVEILIGING


class JobStatus(StrEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    FILLED = "filled"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    EXPIRED = "expired"


def _now() -> datetime:
    return datetime.now()


def _tomorrow() -> datetime:
    return datetime.now() + timedelta(days=1)


class JobDraft(BaseModel):
    """Job posting as parsed from a CSV row or prefilled from a template.

    ``end_date >= start_date`` is deliberately not validated here; bad
    imports are logged by the record mapper instead.
    """

    model_config = {"frozen": True}

    # --- Description ---
    title: str = ""
    description: str = ""
    location: str = ""
    postal_code: str = ""  # Dutch postcode, e.g. "1012 AB"

    # --- Terms ---
    hourly_rate: Decimal = Field(default=Decimal("0"), ge=0)  # EUR
    start_date: datetime = Field(default_factory=_now)
    end_date: datetime = Field(default_factory=_tomorrow)

    # --- Requirements ---
    required_skills: list[str] = Field(default_factory=list)
    required_certificates: list[str] = Field(default_factory=list)
    minimum_experience: int = Field(default=0, ge=0)  # years
    job_type: JobType = DEFAULT_JOB_TYPE

    # --- Metadata ---
    status: JobStatus = JobStatus.ACTIVE
    company_id: str = ""
    created_at: datetime = Field(default_factory=_now)


class RowError(BaseModel):
    """Error tied to one input row (1-based from the first data row; 0 = header)."""

    model_config = {"frozen": True}

    row: int
    message: str

    def __str__(self) -> str:
        if self.row == 0:
            return self.message
        return f"Row {self.row}: {self.message}"
