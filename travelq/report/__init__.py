"""Report rendering package."""

from travelq.report.formatter import (
    banner,
    display_total,
    format_trip_line,
)

__all__ = ["banner", "display_total", "format_trip_line"]
