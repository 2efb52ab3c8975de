"""Import batch, parse, and summary models."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import StrEnum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from shiftdesk.models.job_draft import JobDraft, RowError


class BatchStatus(StrEnum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"


class ParseResult(NamedTuple):
    """Outcome of validate-and-parse: drafts plus collected errors."""

    drafts: list[JobDraft]
    errors: list[RowError]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]


class ImportBatchResult(BaseModel):
    """Running accumulator of one bulk creation batch.

    ``processed == succeeded + failed`` holds after every mutation.
    """

    batch_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    status: BatchStatus = BatchStatus.IDLE
    total: int = 0
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    succeeded_drafts: list[JobDraft] = Field(default_factory=list)
    errors: list[RowError] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def record_success(self, draft: JobDraft) -> None:
        self.succeeded += 1
        self.succeeded_drafts.append(draft)
        self.processed += 1

    def record_failure(self, row: int, message: str) -> None:
        self.failed += 1
        self.errors.append(RowError(row=row, message=message))
        self.processed += 1

    @property
    def is_complete(self) -> bool:
        return self.status == BatchStatus.COMPLETED


class ImportSummary(BaseModel):
    """Caller-facing summary of a finished batch."""

    batch_id: str
    total: int
    succeeded: int
    failed: int
    headline: str
    errors: list[str] = Field(default_factory=list)
    hidden_errors: int = 0

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0 and self.succeeded == self.total
