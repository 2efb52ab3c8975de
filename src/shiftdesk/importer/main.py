"""ImportService — CSV text to job drafts: read, validate header, map rows."""

from __future__ import annotations

from datetime import datetime

from shiftdesk.core.base import BaseService
from shiftdesk.core.config import AppSettings
from shiftdesk.core.exceptions import RowMappingError, SchemaValidationError
from shiftdesk.core.protocols import IFileStore
from shiftdesk.importer.file_parser import FileParserService
from shiftdesk.importer.record_mapper import RecordMapperService
from shiftdesk.importer.schema_validator import SchemaValidatorService
from shiftdesk.models.batch import ParseResult
from shiftdesk.models.job_draft import JobDraft, RowError


class ImportService(BaseService):
    """Validate-and-parse entry point of the bulk job import.

    Column problems reject the whole file; problems in a single row are
    collected as RowErrors and the remaining rows still produce drafts.
    """

    def __init__(
        self,
        *,
        settings: AppSettings,
        file_store: IFileStore | None = None,
        parser: FileParserService | None = None,
        validator: SchemaValidatorService | None = None,
        mapper: RecordMapperService | None = None,
    ) -> None:
        super().__init__(settings=settings)
        self._file_store = file_store
        self._parser = parser or FileParserService()
        self._validator = validator or SchemaValidatorService()
        self._mapper = mapper or RecordMapperService(
            company_id=settings.imports.company_id,
            cell_policy=settings.imports.cell_policy,
        )

    def validate_and_parse(self, raw_text: str, now: datetime | None = None) -> ParseResult:
        """Parse CSV text into job drafts.

        Args:
            raw_text: Whole CSV document, header first.
            now: Processing timestamp used for defaulted dates and created_at.

        Returns:
            ParseResult(drafts, errors). ``drafts`` is empty whenever a
            required column is missing.

        Raises:
            SourceEmptyError: The text holds no rows at all.
        """
        processing_time = now or datetime.now()
        rows = self._parser.read_rows(raw_text)
        header, data_rows = rows[0], rows[1:]

        try:
            self._validator.validate(header)
        except SchemaValidationError as exc:
            self._log.warning("schema_rejected", missing=exc.missing)
            return ParseResult([], [RowError(row=0, message=m) for m in exc.messages])

        index = self._validator.column_index(header)
        drafts: list[JobDraft] = []
        errors: list[RowError] = []
        for row_number, row in enumerate(data_rows, start=1):
            try:
                drafts.append(self._mapper.map_row(row, index, row_number, processing_time))
            except RowMappingError as exc:
                self._log.warning("row_mapping_failed", row=exc.row, error=exc.message)
                errors.append(RowError(row=exc.row, message=exc.message))

        self._log.info("parse_finished", rows=len(data_rows), drafts=len(drafts), errors=len(errors))
        return ParseResult(drafts, errors)

    def import_from_file_store(self, path: str, now: datetime | None = None) -> ParseResult:
        """Read an uploaded CSV from the file store and parse it."""
        if self._file_store is None:
            raise RuntimeError("ImportService was created without a file store")
        data = self._file_store.read(path)
        self._log.info("import_file_loaded", path=path, size=len(data))
        return self.validate_and_parse(data.decode("utf-8-sig"), now=now)
