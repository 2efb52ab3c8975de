"""In-memory backends — the default local backend and the unit-test fakes."""

from __future__ import annotations

from shiftdesk.core.exceptions import StoreError, UploadNotFoundError
from shiftdesk.models.job_draft import JobDraft
from shiftdesk.models.template import JobTemplate


class MemoryJobStore:
    """List-backed IJobStore.

    ``fail_on`` / ``refuse_on`` hold 1-based call numbers that raise a
    StoreError or return False, for exercising partial batch failure.
    """

    def __init__(
        self,
        fail_on: set[int] | None = None,
        refuse_on: set[int] | None = None,
        fail_message: str = "Job store unavailable",
    ) -> None:
        self.jobs: list[JobDraft] = []
        self.calls = 0
        self._fail_on = fail_on or set()
        self._refuse_on = refuse_on or set()
        self._fail_message = fail_message

    async def create(self, draft: JobDraft) -> bool:
        self.calls += 1
        if self.calls in self._fail_on:
            raise StoreError(self._fail_message)
        if self.calls in self._refuse_on:
            return False
        self.jobs.append(draft)
        return True


class MemoryTemplateStore:
    """Dict-backed ITemplateStore keyed by (company_id, template_id)."""

    def __init__(self) -> None:
        self._templates: dict[tuple[str, str], JobTemplate] = {}

    def get(self, company_id: str, template_id: str) -> JobTemplate | None:
        return self._templates.get((company_id, template_id))

    def put(self, template: JobTemplate) -> None:
        self._templates[(template.company_id, template.template_id)] = template

    def delete(self, company_id: str, template_id: str) -> bool:
        return self._templates.pop((company_id, template_id), None) is not None

    def list_for_company(self, company_id: str) -> list[JobTemplate]:
        return [t for (cid, _), t in self._templates.items() if cid == company_id]


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def read(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError as exc:
            raise UploadNotFoundError(path) from exc

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self._files[path] = data
        return path

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]
