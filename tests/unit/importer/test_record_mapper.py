"""Tests for per-field coercion in RecordMapperService."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from shiftdesk.core.exceptions import RowMappingError
from shiftdesk.importer.record_mapper import (
    DEFAULT_COERCIONS,
    RecordMapperService,
    coerce_skills,
    parse_decimal,
    parse_int,
)
from shiftdesk.importer.schema_validator import REQUIRED_COLUMNS, SchemaValidatorService
from shiftdesk.models.job_draft import JobStatus, JobType

NOW = datetime(2025, 3, 1, 12, 0, 0)
INDEX = SchemaValidatorService.column_index(list(REQUIRED_COLUMNS))


def _row(**cells: str) -> list[str]:
    base = {
        "title": "Receptie",
        "description": "Balie",
        "location": "Utrecht",
        "postalCode": "3511 AB",
        "hourlyRate": "21.5",
        "startDate": "2025-05-01",
        "endDate": "2025-05-02",
        "jobType": "receptie",
        "requiredSkills": "Gastvrijheid",
        "minimumExperience": "1",
    }
    base.update(cells)
    return [base[c] for c in REQUIRED_COLUMNS]


@pytest.fixture
def mapper():
    return RecordMapperService(company_id="COMP042")


class TestWellFormedRow:
    def test_maps_all_fields(self, mapper):
        draft = mapper.map_row(_row(), INDEX, 1, NOW)
        assert draft.title == "Receptie"
        assert draft.postal_code == "3511 AB"
        assert draft.hourly_rate == Decimal("21.5")
        assert draft.start_date == datetime(2025, 5, 1)
        assert draft.job_type == JobType.RECEPTIE
        assert draft.required_skills == ["Gastvrijheid"]
        assert draft.minimum_experience == 1
        assert draft.status == JobStatus.ACTIVE
        assert draft.company_id == "COMP042"
        assert draft.created_at == NOW


class TestNumericDefaults:
    @pytest.mark.parametrize("raw", ["", "abc", "21,50", "NaN", "-4", "1_000", "\u0663\u0665"])
    def test_bad_rate_becomes_zero(self, mapper, raw):
        assert mapper.map_row(_row(hourlyRate=raw), INDEX, 1, NOW).hourly_rate == Decimal("0")

    @pytest.mark.parametrize("raw", ["", "two", "1.5", "-3", "1_0", "\u0663"])
    def test_bad_experience_becomes_zero(self, mapper, raw):
        assert mapper.map_row(_row(minimumExperience=raw), INDEX, 1, NOW).minimum_experience == 0


class TestDateDefaults:
    def test_bad_start_date_uses_processing_time(self, mapper):
        draft = mapper.map_row(_row(startDate="not-a-date"), INDEX, 1, NOW)
        assert draft.start_date == NOW

    def test_bad_end_date_uses_next_day(self, mapper):
        draft = mapper.map_row(_row(endDate=""), INDEX, 1, NOW)
        assert draft.end_date == NOW + timedelta(days=1)

    def test_datetime_with_time_part(self, mapper):
        draft = mapper.map_row(_row(startDate="2025-05-01 07:30"), INDEX, 1, NOW)
        assert draft.start_date == datetime(2025, 5, 1, 7, 30)

    def test_end_before_start_is_kept(self, mapper):
        draft = mapper.map_row(_row(startDate="2025-05-02", endDate="2025-05-01"), INDEX, 1, NOW)
        assert draft.end_date < draft.start_date


class TestJobType:
    def test_case_insensitive(self, mapper):
        draft = mapper.map_row(_row(jobType="  EvenementBeveiliging "), INDEX, 1, NOW)
        assert draft.job_type == JobType.EVENEMENTBEVEILIGING

    @pytest.mark.parametrize("raw", ["", "bodyguard"])
    def test_unknown_falls_back_to_site_security(self, mapper, raw):
        assert mapper.map_row(_row(jobType=raw), INDEX, 1, NOW).job_type == JobType.OBJECTBEVEILIGING


class TestSkills:
    def test_split_and_trim(self):
        assert coerce_skills(" Crowd Control ,EHBO , BHV", None) == ["Crowd Control", "EHBO", "BHV"]

    def test_empty_cell_gives_empty_list(self):
        assert coerce_skills("", None) == []

    def test_blank_elements_dropped(self):
        assert coerce_skills("a, ,b,", None) == ["a", "b"]


def test_short_row_treated_as_empty_cells(mapper):
    draft = mapper.map_row(["Alleen titel"], INDEX, 1, NOW)
    assert draft.title == "Alleen titel"
    assert draft.location == ""
    assert draft.hourly_rate == Decimal("0")
    assert draft.start_date == NOW
    assert draft.required_skills == []


def test_parse_decimal_rejects_infinity():
    assert parse_decimal("Infinity") is None


class TestRejectPolicy:
    @pytest.fixture
    def strict(self):
        return RecordMapperService(cell_policy="reject")

    def test_bad_date_raises(self, strict):
        with pytest.raises(RowMappingError) as exc_info:
            strict.map_row(_row(startDate="not-a-date"), INDEX, 4, NOW)
        assert exc_info.value.row == 4
        assert "startDate" in exc_info.value.message

    def test_unknown_job_type_raises(self, strict):
        with pytest.raises(RowMappingError):
            strict.map_row(_row(jobType="bodyguard"), INDEX, 1, NOW)

    def test_bad_number_still_defaults(self, strict):
        assert strict.map_row(_row(hourlyRate="x"), INDEX, 1, NOW).hourly_rate == Decimal("0")


def test_unexpected_coercion_failure_wrapped_as_row_error():
    def explode(raw, ctx):
        raise KeyError("location index corrupt")

    coercions = {**DEFAULT_COERCIONS, "location": ("location", explode)}
    mapper = RecordMapperService(coercions=coercions)
    with pytest.raises(RowMappingError) as exc_info:
        mapper.map_row(_row(), INDEX, 7, NOW)
    assert exc_info.value.row == 7
    assert "location index corrupt" in exc_info.value.message


class TestAsciiNumbers:
    @pytest.mark.parametrize("raw,expected", [("18.50", Decimal("18.50")), (" 22 ", Decimal("22")), (".5", Decimal("0.5")), ("1e2", Decimal("100"))])
    def test_decimal_accepted(self, raw, expected):
        assert parse_decimal(raw) == expected

    @pytest.mark.parametrize("raw", ["1_000", "\u0663", "18.5.0", "+", "1e"])
    def test_decimal_rejected(self, raw):
        assert parse_decimal(raw) is None

    def test_int_accepts_signed_ascii(self):
        assert parse_int(" +7 ") == 7

    @pytest.mark.parametrize("raw", ["1_000", "\u0663", "\uff17", "7.0"])
    def test_int_rejected(self, raw):
        assert parse_int(raw) is None
