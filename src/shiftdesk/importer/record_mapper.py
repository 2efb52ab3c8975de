"""RecordMapperService — converts one CSV row into a typed JobDraft.

Each draft field has exactly one coercion function. A coercion returns the
parsed value or that field's default; it never raises under the "default"
cell policy, so a malformed cell degrades instead of aborting the row.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Literal

from shiftdesk.core.exceptions import RowMappingError
from shiftdesk.core.logging import get_logger
from shiftdesk.core.types import Row
from shiftdesk.models.job_draft import DEFAULT_JOB_TYPE, JobDraft, JobStatus, JobType

logger = get_logger(__name__)

CellPolicy = Literal["default", "reject"]


@dataclass(frozen=True)
class CoercionContext:
    """Per-row inputs shared by every coercion function."""

    processing_time: datetime
    row_number: int
    cell_policy: CellPolicy = "default"


Coercer = Callable[[str, CoercionContext], Any]


# ---------------------------------------------------------------------------
# Parsers (None on failure)
# ---------------------------------------------------------------------------

# ASCII digits only; no digit-group underscores
_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_decimal(raw: str) -> Decimal | None:
    raw = raw.strip()
    if not _DECIMAL_RE.fullmatch(raw):
        return None
    try:
        value = Decimal(raw)
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def parse_int(raw: str) -> int | None:
    raw = raw.strip()
    if not _INT_RE.fullmatch(raw):
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def parse_datetime(raw: str) -> datetime | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def parse_job_type(raw: str) -> JobType | None:
    try:
        return JobType(raw.strip().lower())
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Coercions (value or default)
# ---------------------------------------------------------------------------

def coerce_text(raw: str, ctx: CoercionContext) -> str:
    return raw.strip()


def coerce_rate(raw: str, ctx: CoercionContext) -> Decimal:
    value = parse_decimal(raw)
    if value is None or value < 0:
        return Decimal("0")
    return value


def coerce_experience(raw: str, ctx: CoercionContext) -> int:
    value = parse_int(raw)
    if value is None or value < 0:
        return 0
    return value


def coerce_skills(raw: str, ctx: CoercionContext) -> list[str]:
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


def _coerce_date(raw: str, ctx: CoercionContext, column: str, fallback: datetime) -> datetime:
    value = parse_datetime(raw)
    if value is not None:
        return value
    if ctx.cell_policy == "reject":
        raise RowMappingError(ctx.row_number, f"Invalid {column}: {raw!r}")
    logger.debug("cell_defaulted", row=ctx.row_number, column=column, raw=raw)
    return fallback


def coerce_start_date(raw: str, ctx: CoercionContext) -> datetime:
    return _coerce_date(raw, ctx, "startDate", ctx.processing_time)


def coerce_end_date(raw: str, ctx: CoercionContext) -> datetime:
    return _coerce_date(raw, ctx, "endDate", ctx.processing_time + timedelta(days=1))


def coerce_job_type(raw: str, ctx: CoercionContext) -> JobType:
    value = parse_job_type(raw)
    if value is not None:
        return value
    if ctx.cell_policy == "reject":
        raise RowMappingError(ctx.row_number, f"Unknown jobType: {raw!r}")
    if raw.strip():
        logger.debug("cell_defaulted", row=ctx.row_number, column="jobType", raw=raw)
    return DEFAULT_JOB_TYPE


# draft field -> (lower-cased column, coercion)
DEFAULT_COERCIONS: dict[str, tuple[str, Coercer]] = {
    "title": ("title", coerce_text),
    "description": ("description", coerce_text),
    "location": ("location", coerce_text),
    "postal_code": ("postalcode", coerce_text),
    "hourly_rate": ("hourlyrate", coerce_rate),
    "start_date": ("startdate", coerce_start_date),
    "end_date": ("enddate", coerce_end_date),
    "job_type": ("jobtype", coerce_job_type),
    "required_skills": ("requiredskills", coerce_skills),
    "minimum_experience": ("minimumexperience", coerce_experience),
}


class RecordMapperService:
    """Builds JobDrafts from rows using a field -> coercion table."""

    def __init__(
        self,
        *,
        company_id: str = "",
        cell_policy: CellPolicy = "default",
        coercions: Mapping[str, tuple[str, Coercer]] | None = None,
    ) -> None:
        self._company_id = company_id
        self._cell_policy = cell_policy
        self._coercions = dict(coercions if coercions is not None else DEFAULT_COERCIONS)

    def map_row(
        self,
        row: Row,
        index: Mapping[str, int],
        row_number: int,
        processing_time: datetime,
    ) -> JobDraft:
        """Map one data row; raises RowMappingError if the draft cannot be built."""
        ctx = CoercionContext(
            processing_time=processing_time,
            row_number=row_number,
            cell_policy=self._cell_policy,
        )
        try:
            values = {
                field: coerce(self._cell(row, index, column), ctx)
                for field, (column, coerce) in self._coercions.items()
            }
            draft = JobDraft(
                **values,
                status=JobStatus.ACTIVE,
                company_id=self._company_id,
                created_at=processing_time,
            )
        except RowMappingError:
            raise
        except Exception as exc:
            raise RowMappingError(row_number, str(exc)) from exc

        if _ends_before_start(draft):
            logger.warning(
                "end_date_before_start_date",
                row=row_number,
                start_date=draft.start_date.isoformat(),
                end_date=draft.end_date.isoformat(),
            )
        return draft

    @staticmethod
    def _cell(row: Row, index: Mapping[str, int], column: str) -> str:
        pos = index.get(column)
        if pos is None or pos >= len(row):
            return ""
        return row[pos]


def _ends_before_start(draft: JobDraft) -> bool:
    try:
        return draft.end_date < draft.start_date
    except TypeError:  # naive vs aware timestamps
        return False
