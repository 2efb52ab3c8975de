"""BulkCreationOrchestrator — sequential job creation with a running result.

Drafts are sent to the job store one at a time, in input order. A failed
draft is recorded and the loop moves on: no retries, no rollback of jobs
already created, no early exit. There is no way to cancel a running batch.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Sequence
from datetime import datetime

from shiftdesk.core.exceptions import BatchStateError, CreationError
from shiftdesk.core.logging import batch_context, get_logger
from shiftdesk.core.protocols import IJobStore
from shiftdesk.core.types import ProgressCallback
from shiftdesk.models.batch import BatchStatus, ImportBatchResult
from shiftdesk.models.job_draft import JobDraft

logger = get_logger(__name__)

UNKNOWN_CREATE_ERROR = "Unknown error while creating job"


class BulkCreationOrchestrator:
    """One batch: IDLE -> RUNNING -> COMPLETED."""

    def __init__(
        self,
        job_store: IJobStore,
        *,
        item_timeout: float | None = None,
        batch_id: str | None = None,
    ) -> None:
        self._store = job_store
        self._item_timeout = item_timeout
        self._result = ImportBatchResult(batch_id=batch_id) if batch_id else ImportBatchResult()
        self._observers: list[ProgressCallback] = []

    @property
    def status(self) -> BatchStatus:
        return self._result.status

    @property
    def result(self) -> ImportBatchResult:
        return self._result

    def add_observer(self, observer: ProgressCallback) -> None:
        self._observers.append(observer)

    async def start(
        self,
        drafts: Sequence[JobDraft],
        on_progress: ProgressCallback | None = None,
    ) -> ImportBatchResult:
        """Create every draft and return the completed batch result."""
        if self._result.status != BatchStatus.IDLE:
            raise BatchStateError(
                f"Batch {self._result.batch_id} already {self._result.status}"
            )
        if on_progress is not None:
            self.add_observer(on_progress)

        result = self._result
        result.total = len(drafts)
        result.status = BatchStatus.RUNNING
        result.start_time = datetime.now()

        with batch_context(result.batch_id):
            logger.info("batch_started", total=result.total)
            try:
                for position, draft in enumerate(drafts, start=1):
                    try:
                        await self._create_one(position, draft)
                    except CreationError as exc:
                        logger.warning("job_create_failed", job=exc.row, error=exc.message)
                        result.record_failure(exc.row, exc.message)
                    else:
                        result.record_success(draft)
                    await self._emit(result.processed, result.total)
            finally:
                result.status = BatchStatus.COMPLETED
                result.end_time = datetime.now()
                logger.info(
                    "batch_completed",
                    total=result.total,
                    processed=result.processed,
                    succeeded=result.succeeded,
                    failed=result.failed,
                )
        return result

    async def _create_one(self, position: int, draft: JobDraft) -> None:
        """Run one store call; any failure surfaces as CreationError."""
        try:
            if self._item_timeout is None:
                created = await self._store.create(draft)
            else:
                created = await asyncio.wait_for(self._store.create(draft), self._item_timeout)
        except asyncio.TimeoutError as exc:
            raise CreationError(
                position,
                f"Timed out after {self._item_timeout:g}s; the job may still have been created",
            ) from exc
        except Exception as exc:
            raise CreationError(position, str(exc) or exc.__class__.__name__) from exc
        if not created:
            raise CreationError(position, UNKNOWN_CREATE_ERROR)

    async def _emit(self, processed: int, total: int) -> None:
        """Notify observers; a failing observer never stops the batch."""
        for observer in self._observers:
            try:
                outcome = observer(processed, total)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as exc:
                logger.warning(
                    "progress_observer_failed",
                    observer=type(observer).__name__,
                    processed=processed,
                    total=total,
                    error=str(exc),
                )


async def run_bulk_create(
    job_store: IJobStore,
    drafts: Sequence[JobDraft],
    on_progress: ProgressCallback | None = None,
    *,
    item_timeout: float | None = None,
    batch_id: str | None = None,
) -> ImportBatchResult:
    """Create ``drafts`` through ``job_store`` and return the batch result."""
    orchestrator = BulkCreationOrchestrator(job_store, item_timeout=item_timeout, batch_id=batch_id)
    return await orchestrator.start(drafts, on_progress)
