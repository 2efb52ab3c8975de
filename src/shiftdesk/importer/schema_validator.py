"""SchemaValidatorService — all-or-nothing header check for job import files."""

from __future__ import annotations

from shiftdesk.core.exceptions import SchemaValidationError
from shiftdesk.core.types import Row

REQUIRED_COLUMNS: tuple[str, ...] = (
    "title",
    "description",
    "location",
    "postalCode",
    "hourlyRate",
    "startDate",
    "endDate",
    "jobType",
    "requiredSkills",
    "minimumExperience",
)


def normalize_header(name: str) -> str:
    return name.strip().lower()


class SchemaValidatorService:
    """Checks that every required column is present in the header row.

    Matching is case-insensitive; column order and extra columns are ignored.
    """

    def __init__(self, required: tuple[str, ...] = REQUIRED_COLUMNS) -> None:
        self._required = required

    @property
    def required(self) -> tuple[str, ...]:
        return self._required

    def missing_columns(self, header: Row) -> list[str]:
        present = {normalize_header(h) for h in header}
        return [name for name in self._required if name.lower() not in present]

    def validate(self, header: Row) -> None:
        missing = self.missing_columns(header)
        if missing:
            raise SchemaValidationError(missing)

    @staticmethod
    def column_index(header: Row) -> dict[str, int]:
        """Map lower-cased header name to column position; later duplicates win."""
        return {normalize_header(name): pos for pos, name in enumerate(header)}
