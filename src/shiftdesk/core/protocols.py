"""Protocol interfaces for all ShiftDesk abstractions.

Services depend on these Protocols only; backends satisfy them
structurally and tests check them with isinstance().
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shiftdesk.models.job_draft import JobDraft
    from shiftdesk.models.template import JobTemplate


# ---------------------------------------------------------------------------
# Persistence: Job Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IJobStore(Protocol):
    """Durable store that creates job postings, one draft at a time.

    Returns True on success, False for an unexplained refusal; may raise
    with a message on failure.
    """

    async def create(self, draft: JobDraft) -> bool: ...


# ---------------------------------------------------------------------------
# Persistence: Template Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ITemplateStore(Protocol):
    """Per-company storage of job templates."""

    def get(self, company_id: str, template_id: str) -> JobTemplate | None: ...

    def put(self, template: JobTemplate) -> None: ...

    def delete(self, company_id: str, template_id: str) -> bool: ...

    def list_for_company(self, company_id: str) -> list[JobTemplate]: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible file storage interface."""

    def read(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str: ...

    def list_files(self, prefix: str) -> list[str]: ...


# ---------------------------------------------------------------------------
# Bulk progress
# ---------------------------------------------------------------------------

@runtime_checkable
class IProgressObserver(Protocol):
    """Receives (processed, total) after every bulk creation attempt; may be async."""

    def __call__(self, processed: int, total: int) -> Awaitable[None] | None: ...
