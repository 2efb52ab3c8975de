"""ResultReporter — turns batch results into caller-facing summaries."""

from __future__ import annotations

from collections.abc import Sequence

from shiftdesk.models.batch import ImportBatchResult, ImportSummary
from shiftdesk.models.job_draft import JobDraft


class ResultReporter:
    """Pure formatting; never touches the result it reports on."""

    def __init__(self, max_errors: int = 5, preview_rows: int = 3) -> None:
        self._max_errors = max_errors
        self._preview_rows = preview_rows

    def summarize(self, result: ImportBatchResult) -> ImportSummary:
        shown = [str(e) for e in result.errors[: self._max_errors]]
        return ImportSummary(
            batch_id=result.batch_id,
            total=result.total,
            succeeded=result.succeeded,
            failed=result.failed,
            headline=f"{result.succeeded} of {result.total} jobs created successfully",
            errors=shown,
            hidden_errors=max(len(result.errors) - len(shown), 0),
        )

    def format(self, result: ImportBatchResult) -> str:
        summary = self.summarize(result)
        lines = [summary.headline]
        if summary.failed:
            lines.append(f"{summary.failed} failed:")
            lines.extend(f"  - {message}" for message in summary.errors)
            if summary.hidden_errors:
                lines.append(f"  ... and {summary.hidden_errors} more errors")
        return "\n".join(lines)

    def preview(self, drafts: Sequence[JobDraft], limit: int | None = None) -> list[str]:
        """One line per draft for the first ``limit`` drafts, plus a remainder line."""
        limit = self._preview_rows if limit is None else limit
        lines = [
            f"{d.title} - {d.location} - €{d.hourly_rate:.2f}/hr - {d.job_type.display_name}"
            for d in drafts[:limit]
        ]
        if len(drafts) > limit:
            lines.append(f"... and {len(drafts) - limit} more jobs")
        return lines
