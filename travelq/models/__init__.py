"""
Data Models Package

This package contains the Pydantic models used by the TravelQ report.
Every decoded CSV row must conform to TripRecord.
"""

from travelq.models.trip import (
    AMOUNT_FIELDS,
    CSV_COLUMNS,
    DATE_FORMAT,
    TripRecord,
)
from travelq.models.audit import (
    EventSeverity,
    PipelineEvent,
    PipelineEventBuilder,
    PipelineEventType,
)

__all__ = [
    # Trip models
    "AMOUNT_FIELDS",
    "CSV_COLUMNS",
    "DATE_FORMAT",
    "TripRecord",
    # Pipeline event models
    "EventSeverity",
    "PipelineEvent",
    "PipelineEventBuilder",
    "PipelineEventType",
]
