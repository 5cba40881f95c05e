"""
CSV codec for the persisted record blobs.

A blob is a header line followed by one line per record. Scalars are
written as text, list fields are joined with a separator (``;`` by
default) and any value containing a comma, double quote or line break is
quoted with inner quotes doubled. Decoding maps cells to the header by
position and rejects rows whose field count differs from the header.
"""

import csv
import io
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence

from hiltim.core.constants import CSV_LIST_SEPARATOR
from hiltim.core.exceptions import CsvFormatError

__all__ = ["CsvRow", "CsvCodec"]


class CsvRow(NamedTuple):
    """One decoded data row: either ``values`` or ``error`` is set."""

    row_number: int
    values: Optional[Dict[str, Any]]
    error: Optional[str]

    @property
    def ok(self) -> bool:
        return self.error is None


class CsvCodec:
    """
    Encode/decode flat records to and from CSV text.

    Args:
        headers: Ordered column names written on encode
        int_fields: Columns decoded as integers (empty cell -> 0)
        decimal_fields: Columns decoded as Decimal (empty cell -> 0)
        list_fields: Columns holding separator-joined string lists
        list_separator: Separator for list columns
    """

    def __init__(
        self,
        headers: Sequence[str],
        int_fields: Iterable[str] = (),
        decimal_fields: Iterable[str] = (),
        list_fields: Iterable[str] = (),
        list_separator: str = CSV_LIST_SEPARATOR,
    ):
        self.headers: List[str] = list(headers)
        self.int_fields = frozenset(int_fields)
        self.decimal_fields = frozenset(decimal_fields)
        self.list_fields = frozenset(list_fields)
        self.list_separator = list_separator

    # ==================== Encoding ====================

    def encode(self, rows: Iterable[Mapping[str, Any]]) -> str:
        """Serialize rows to CSV text; no rows yields the header line only."""
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
        writer.writerow(self.headers)
        for row in rows:
            writer.writerow([self._format_value(row.get(header)) for header in self.headers])

        csv_data = output.getvalue()
        output.close()
        return csv_data

    def _format_value(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return self.list_separator.join(self._format_value(item) for item in value)
        if isinstance(value, Enum):
            return str(value.value)
        if isinstance(value, date):
            return value.isoformat()
        return str(value)

    # ==================== Decoding ====================

    def iter_rows(self, text: Optional[str]) -> Iterator[CsvRow]:
        """
        Decode CSV text row by row.

        Blank lines are skipped and the first non-blank line is the header.
        Malformed rows are yielded with ``error`` set instead of raising so
        callers can report them and carry on.
        """
        if not text or not text.strip():
            return

        reader = csv.reader(io.StringIO(text))
        header: Optional[List[str]] = None

        while True:
            try:
                cells = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                yield CsvRow(reader.line_num, None, f"unreadable CSV: {e}")
                break

            if not any(cell.strip() for cell in cells):
                continue

            if header is None:
                header = [cell.strip().lstrip("\ufeff") for cell in cells]
                continue

            if len(cells) != len(header):
                yield CsvRow(
                    reader.line_num,
                    None,
                    f"expected {len(header)} fields, found {len(cells)}",
                )
                continue

            try:
                values = {name: self._parse_value(name, cell) for name, cell in zip(header, cells)}
            except ValueError as e:
                yield CsvRow(reader.line_num, None, str(e))
                continue

            yield CsvRow(reader.line_num, values, None)

    def decode(self, text: Optional[str]) -> List[Dict[str, Any]]:
        """
        Decode CSV text into a list of dicts.

        Raises:
            CsvFormatError: On the first malformed row
        """
        records = []
        for row in self.iter_rows(text):
            if not row.ok:
                raise CsvFormatError(f"Row {row.row_number}: {row.error}", row.row_number)
            records.append(row.values)
        return records

    def _parse_value(self, name: str, cell: str) -> Any:
        if name in self.list_fields:
            return [item for item in cell.split(self.list_separator) if item.strip()]

        if name in self.int_fields or name in self.decimal_fields:
            raw = cell.strip()
            if not raw:
                return 0 if name in self.int_fields else Decimal("0")
            try:
                number = Decimal(raw)
            except InvalidOperation:
                raise ValueError(f"{name}: '{cell}' is not a number")
            if not number.is_finite():
                raise ValueError(f"{name}: '{cell}' is not a number")
            if name in self.int_fields:
                if number != number.to_integral_value():
                    raise ValueError(f"{name}: '{cell}' is not a whole number")
                return int(number)
            return number

        return cell
