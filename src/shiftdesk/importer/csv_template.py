"""Downloadable CSV template showing the columns a job import needs."""

from __future__ import annotations

import csv
import io

from shiftdesk.importer.schema_validator import REQUIRED_COLUMNS

EXAMPLE_ROW: dict[str, str] = {
    "title": "Objectbeveiliger kantoorpand",
    "description": "Toegangscontrole en rondes in kantoorpand",
    "location": "Amsterdam",
    "postalCode": "1012 AB",
    "hourlyRate": "18.50",
    "startDate": "2025-01-06T08:00:00",
    "endDate": "2025-01-06T17:00:00",
    "jobType": "objectbeveiliging",
    "requiredSkills": "Access Control, CCTV Monitoring",
    "minimumExperience": "1",
}


def build_csv_template(include_example: bool = True) -> str:
    """Return header row (plus one example row) as CSV text."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(REQUIRED_COLUMNS)
    if include_example:
        writer.writerow([EXAMPLE_ROW[name] for name in REQUIRED_COLUMNS])
    return buf.getvalue()
