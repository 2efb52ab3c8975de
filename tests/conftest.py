"""Shared fixtures: settings, a fixed clock, and a CSV builder."""

from __future__ import annotations

import csv
import io
from datetime import datetime

import pytest

from shiftdesk.core.config import AppSettings
from shiftdesk.importer.schema_validator import REQUIRED_COLUMNS

FIXED_NOW = datetime(2025, 3, 1, 12, 0, 0)


def job_row(n: int) -> dict[str, str]:
    """A well-formed CSV record keyed by column name."""
    return {
        "title": f"Beveiliger {n}",
        "description": f"Opdracht nummer {n}",
        "location": "Rotterdam",
        "postalCode": "3011 AA",
        "hourlyRate": "19.75",
        "startDate": "2025-04-01T08:00:00",
        "endDate": "2025-04-01T16:00:00",
        "jobType": "surveillance",
        "requiredSkills": "CCTV Monitoring, EHBO",
        "minimumExperience": "2",
    }


def build_csv(records: list[dict[str, str]], columns: tuple[str, ...] | list[str] = REQUIRED_COLUMNS) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(columns)
    for record in records:
        writer.writerow([record.get(c, "") for c in columns])
    return buf.getvalue()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_csv():
    """Build CSV text with ``count`` valid rows; ``overrides`` maps 1-based row -> cells."""

    def _make(count: int, overrides: dict[int, dict[str, str]] | None = None,
              columns: tuple[str, ...] | list[str] = REQUIRED_COLUMNS) -> str:
        overrides = overrides or {}
        records = []
        for n in range(1, count + 1):
            record = job_row(n)
            record.update(overrides.get(n, {}))
            records.append(record)
        return build_csv(records, columns)

    return _make
