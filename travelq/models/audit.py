"""
Pipeline Event Models

Every significant step of a batch run is recorded as a PipelineEvent.
This provides:
1. A trail of which rows were read, skipped or rejected
2. Debugging information when a run aborts
3. One correlation ID tying together all events of a run

DESIGN DECISION: Events are append-only. Nothing edits or drops them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class PipelineEventType(str, Enum):
    """
    Types of events we record.

    Each stage of the batch pipeline has its own event types.
    """
    # Run lifecycle
    BATCH_STARTED = "batch_started"
    BATCH_COMPLETED = "batch_completed"
    BATCH_ABORTED = "batch_aborted"

    # Input
    FILE_OPENED = "file_opened"
    FILE_ACCESS_FAILED = "file_access_failed"

    # Decoding
    ROW_DECODED = "row_decoded"
    ROW_DECODE_FAILED = "row_decode_failed"
    ROW_SKIPPED = "row_skipped"

    # Rendering
    RECORD_RENDERED = "record_rendered"
    DATE_FORMAT_FAILED = "date_format_failed"


class EventSeverity(str, Enum):
    """Severity level for pipeline events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PipelineEvent(BaseModel):
    """
    A single pipeline event.

    The core unit of the run trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Classification
    event_type: PipelineEventType
    severity: EventSeverity = Field(default=EventSeverity.INFO)

    # Correlation - all events of one run share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID of the batch run this event belongs to"
    )

    # What happened
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    # Error information (if applicable)
    stage: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "stage": self.stage,
            "error_message": self.error_message,
        }


class PipelineEventBuilder:
    """
    Helper class to build pipeline events with common patterns.

    Usage:
        event = PipelineEventBuilder.file_opened(path, correlation_id)
        event = PipelineEventBuilder.row_decode_failed(error, correlation_id)
    """

    @staticmethod
    def batch_started(
        input_path: str,
        record_limit: int,
        error_policy: str,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.BATCH_STARTED,
            correlation_id=correlation_id,
            description=f"Batch started on {input_path}",
            details={
                "input_path": input_path,
                "record_limit": record_limit,
                "error_policy": error_policy,
            },
        )

    @staticmethod
    def file_opened(input_path: str, correlation_id: UUID) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.FILE_OPENED,
            correlation_id=correlation_id,
            description=f"Opened {input_path}",
            details={"input_path": input_path},
        )

    @staticmethod
    def file_access_failed(
        input_path: str,
        error_message: str,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.FILE_ACCESS_FAILED,
            severity=EventSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Could not open {input_path}",
            details={"input_path": input_path},
            stage="file_access",
            error_message=error_message,
        )

    @staticmethod
    def row_decoded(
        position: int,
        ref_number: str,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.ROW_DECODED,
            severity=EventSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Decoded row {position}",
            details={"position": position, "ref_number": ref_number},
        )

    @staticmethod
    def row_decode_failed(
        position: int,
        line_number: Optional[int],
        error_message: str,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.ROW_DECODE_FAILED,
            severity=EventSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Row {position} does not match the trip schema",
            details={"position": position, "line_number": line_number},
            stage="decode",
            error_message=error_message,
        )

    @staticmethod
    def row_skipped(
        stage: str,
        error_message: str,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.ROW_SKIPPED,
            severity=EventSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Skipped after {stage} failure",
            stage=stage,
            error_message=error_message,
        )

    @staticmethod
    def record_rendered(ref_number: str, correlation_id: UUID) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.RECORD_RENDERED,
            severity=EventSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Rendered trip {ref_number}",
            details={"ref_number": ref_number},
        )

    @staticmethod
    def date_format_failed(
        ref_number: str,
        field: str,
        value: str,
        error_message: str,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.DATE_FORMAT_FAILED,
            severity=EventSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Trip {ref_number} has a malformed {field}",
            details={"ref_number": ref_number, "field": field, "value": value},
            stage="date_format",
            error_message=error_message,
        )

    @staticmethod
    def batch_completed(
        rows_read: int,
        records_loaded: int,
        lines_rendered: int,
        failure_count: int,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.BATCH_COMPLETED,
            severity=EventSeverity.WARNING if failure_count else EventSeverity.INFO,
            correlation_id=correlation_id,
            description=f"Batch completed: {lines_rendered} trips rendered",
            details={
                "rows_read": rows_read,
                "records_loaded": records_loaded,
                "lines_rendered": lines_rendered,
                "failure_count": failure_count,
            },
        )

    @staticmethod
    def batch_aborted(
        stage: str,
        error_message: str,
        correlation_id: UUID,
    ) -> PipelineEvent:
        return PipelineEvent(
            event_type=PipelineEventType.BATCH_ABORTED,
            severity=EventSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Batch aborted during {stage}",
            stage=stage,
            error_message=error_message,
        )
