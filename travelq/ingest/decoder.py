"""
CSV Row Decoder

Turns the disclosure export into a lazy stream of DecodeResults.

The header row is the mapping table: csv.DictReader keys each cell by
its column name and TripRecord validates the dict by field name, so
column order in the file does not matter.

IMPORTANT: The decoder never decides what a bad row means for the run.
It reports every row, good or bad, as a DecodeResult and leaves the
abort/skip/collect decision to the pipeline.
"""

import csv
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from pydantic import ValidationError

from travelq.errors import FileAccessError, RowDecodeError
from travelq.models.trip import CSV_COLUMNS, TripRecord


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding one data row: a record or the error."""
    position: int
    line_number: Optional[int]
    record: Optional[TripRecord] = None
    error: Optional[RowDecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> TripRecord:
        """Return the record, or raise the row's decode error."""
        if self.error is not None:
            raise self.error
        return self.record


@contextmanager
def open_trip_file(path: Union[str, Path]) -> Iterator[TextIO]:
    """
    Open the export for reading.

    The handle is closed when the with-block exits, however it exits.
    A leading UTF-8 byte order mark is dropped so it does not end up
    glued to the first header name. Bytes that are not UTF-8 are kept as
    lone surrogates so only the row holding them fails (see decode_row).

    Raises:
        FileAccessError: If the file is missing or unreadable
    """
    path = Path(path)
    try:
        handle = open(
            path, newline="", encoding="utf-8-sig", errors="surrogateescape",
        )
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e
    with handle:
        yield handle


def missing_columns(fieldnames: Optional[list[str]]) -> list[str]:
    """Trip columns absent from a header row."""
    present = {name.strip() for name in fieldnames or [] if name}
    return [column for column in CSV_COLUMNS if column not in present]


def _undecodable_cells(row: dict) -> list[str]:
    """Columns whose cell held bytes that are not valid UTF-8."""
    bad = []
    for key, value in row.items():
        cells = value if isinstance(value, list) else [value]
        if any(
            isinstance(cell, str) and any("\udc80" <= ch <= "\udcff" for ch in cell)
            for cell in cells
        ):
            bad.append(key if key is not None else "(overflow)")
    return bad


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "row"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def decode_row(
    row: dict,
    position: int,
    line_number: Optional[int] = None,
    expected_width: Optional[int] = None,
) -> DecodeResult:
    """
    Decode one DictReader row.

    A row with more cells than the header has its overflow under the
    None key; a row with fewer has None values. Both are rejected, as
    is any cell that fails TripRecord validation or is not valid UTF-8.
    """
    undecodable = _undecodable_cells(row)
    if undecodable:
        error = RowDecodeError(
            position, line_number,
            f"invalid UTF-8 in columns: {', '.join(undecodable)}",
        )
        return DecodeResult(position, line_number, error=error)

    if None in row:
        extra = len(row[None])
        width = expected_width if expected_width is not None else len(row) - 1
        error = RowDecodeError(
            position, line_number,
            f"found {width + extra} fields but the header has {width}",
        )
        return DecodeResult(position, line_number, error=error)

    short = [key for key, value in row.items() if value is None]
    if short:
        width = expected_width if expected_width is not None else len(row)
        error = RowDecodeError(
            position, line_number,
            f"found {width - len(short)} fields but the header has {width}",
        )
        return DecodeResult(position, line_number, error=error)

    try:
        record = TripRecord.model_validate(
            {key.strip(): value for key, value in row.items()}
        )
    except ValidationError as e:
        error = RowDecodeError(position, line_number, _describe_validation_error(e))
        error.__cause__ = e
        return DecodeResult(position, line_number, error=error)

    return DecodeResult(position, line_number, record=record)


def decode_rows(handle: TextIO) -> Iterator[DecodeResult]:
    """
    Lazily decode every data row of an open export.

    Positions count data rows from 1; the header is not a position.
    Rows are read only as the caller iterates, so a caller that stops
    after N results never reads row N+1.

    A stream the csv module cannot read at all (broken quoting, a NUL
    byte) yields one failed result and ends the stream.
    """
    reader = csv.DictReader(handle)
    position = 0
    try:
        fieldnames = reader.fieldnames
        width = len(fieldnames) if fieldnames else 0
        absent = missing_columns(fieldnames)
        for row in reader:
            position += 1
            if absent:
                error = RowDecodeError(
                    position, reader.line_num,
                    f"header is missing columns: {', '.join(absent)}",
                )
                yield DecodeResult(position, reader.line_num, error=error)
                continue
            yield decode_row(row, position, reader.line_num, expected_width=width)
    except csv.Error as e:
        line_number = reader.line_num or None
        error = RowDecodeError(position + 1, line_number, str(e))
        error.__cause__ = e
        yield DecodeResult(position + 1, line_number, error=error)
