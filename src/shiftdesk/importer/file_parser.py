"""FileParserService — turns raw CSV text into rows of string fields."""

from __future__ import annotations

import csv
import io

from shiftdesk.core.exceptions import SourceEmptyError
from shiftdesk.core.types import Row

_BOM = "\ufeff"


class FileParserService:
    """Tabular reader with standard CSV quoting rules.

    Quoted fields may contain the delimiter, doubled quotes and newlines.
    Completely blank lines are not rows.
    """

    def __init__(self, delimiter: str = ",") -> None:
        self._delimiter = delimiter

    def read_rows(self, text: str) -> list[Row]:
        if text.startswith(_BOM):
            text = text[len(_BOM):]
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self._delimiter)
        rows = [row for row in reader if row]
        if not rows:
            raise SourceEmptyError()
        return rows

    def read_bytes(self, data: bytes) -> list[Row]:
        return self.read_rows(data.decode("utf-8-sig"))
