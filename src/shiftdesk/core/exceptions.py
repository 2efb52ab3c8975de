"""ShiftDesk exception hierarchy."""

from __future__ import annotations


class ShiftDeskError(Exception):
    """Base exception for all ShiftDesk errors."""


class ImportPipelineError(ShiftDeskError):
    """Error raised by the bulk job-import pipeline."""


class SourceEmptyError(ImportPipelineError):
    """The CSV source contains no rows, not even a header."""

    def __init__(self, message: str = "CSV source is empty") -> None:
        super().__init__(message)


class SchemaValidationError(ImportPipelineError):
    """One or more required columns are missing from the header row."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing columns: {', '.join(self.missing)}")

    @property
    def messages(self) -> list[str]:
        return [f"Missing column: {name}" for name in self.missing]


class RowMappingError(ImportPipelineError):
    """A data row could not be turned into a job draft."""

    def __init__(self, row: int, message: str) -> None:
        self.row = row
        self.message = message
        super().__init__(f"Row {row}: {message}")


class CreationError(ImportPipelineError):
    """The job store refused to create one draft."""

    def __init__(self, row: int, message: str) -> None:
        self.row = row
        self.message = message
        super().__init__(f"Job {row}: {message}")


class BatchStateError(ImportPipelineError):
    """Operation not allowed in the batch's current state."""


class TemplateNotFoundError(ShiftDeskError):
    """No job template with the given id."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Job template not found: {template_id!r}")


class StoreError(ShiftDeskError):
    """Job or template store operation failed."""


class UploadNotFoundError(StoreError):
    """No uploaded file at the given file store path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No such file: {path!r}")


class CacheError(ShiftDeskError):
    """Redis cache operation failed."""
