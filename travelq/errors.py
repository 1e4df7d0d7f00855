"""
Pipeline Exceptions

Every failure the batch can hit is one of these. Each carries the
`stage` it happened in so the entry point can name it in the
diagnostic without inspecting the type.
"""

from pathlib import Path
from typing import Optional


class PipelineError(Exception):
    """Base exception for the batch pipeline."""

    stage = "pipeline"


class FileAccessError(PipelineError):
    """The input file could not be opened."""

    stage = "file_access"

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Problem accessing the file {path}: {reason}")


class RowDecodeError(PipelineError):
    """A CSV row does not match the Trip Record schema."""

    stage = "decode"

    def __init__(self, position: int, line_number: Optional[int], reason: str):
        self.position = position
        self.line_number = line_number
        self.reason = reason
        where = f"row {position}"
        if line_number is not None:
            where += f" (line {line_number})"
        super().__init__(f"Could not decode {where}: {reason}")


class DateFormatError(PipelineError):
    """A trip date is not a calendar date in YYYY-MM-DD form."""

    stage = "date_format"

    def __init__(self, field: str, value: str, ref_number: Optional[str] = None):
        self.field = field
        self.value = value
        self.ref_number = ref_number
        owner = f" of trip {ref_number}" if ref_number else ""
        super().__init__(f"{field}{owner} is not a YYYY-MM-DD date: {value!r}")
