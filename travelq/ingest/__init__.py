"""CSV ingestion package."""

from travelq.ingest.decoder import (
    DecodeResult,
    decode_row,
    decode_rows,
    missing_columns,
    open_trip_file,
)

__all__ = [
    "DecodeResult",
    "decode_row",
    "decode_rows",
    "missing_columns",
    "open_trip_file",
]
