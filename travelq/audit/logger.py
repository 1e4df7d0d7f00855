"""
Pipeline Audit Logger

DESIGN DECISION: Every significant step of a batch run is logged.
This provides:
1. Traceability of which rows were read, skipped or rejected
2. Debugging capability when a run aborts
3. An in-memory trail the caller can inspect after the run

Standard output carries the report itself, so log events are routed
through the stdlib logging module to stderr only.
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from travelq.errors import DateFormatError, RowDecodeError
from travelq.models.audit import (
    EventSeverity,
    PipelineEvent,
    PipelineEventBuilder,
)


_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _configure_structlog(json_logs: bool) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[*_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog for local logging
_configure_structlog(json_logs=True)


def configure_logging(level: str = "WARNING", json_logs: bool = True) -> None:
    """
    Route log events to stderr at the given level.

    Call once at startup, before the first event is logged.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)
    _configure_structlog(json_logs)


class PipelineAuditLogger:
    """
    Central event log for one batch run.

    Logs each event:
    1. Through structlog (stderr)
    2. Into an in-memory list, in order
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize the audit logger.

        Args:
            correlation_id: ID shared by every event of this run.
                           A new one is created if None.
        """
        self.correlation_id = correlation_id or create_correlation_id()
        self._events: list[PipelineEvent] = []
        self._logger = structlog.get_logger("travelq")

    @property
    def events(self) -> list[PipelineEvent]:
        """Events logged so far, oldest first."""
        return list(self._events)

    def log(self, event: PipelineEvent) -> None:
        """Record an event and emit it at its severity's level."""
        self._events.append(event)
        log_dict = event.to_log_dict()

        if event.severity == EventSeverity.ERROR:
            self._logger.error("pipeline_event", **log_dict)
        elif event.severity == EventSeverity.WARNING:
            self._logger.warning("pipeline_event", **log_dict)
        elif event.severity == EventSeverity.DEBUG:
            self._logger.debug("pipeline_event", **log_dict)
        else:
            self._logger.info("pipeline_event", **log_dict)

    def log_batch_started(
        self,
        input_path: str,
        record_limit: int,
        error_policy: str,
    ) -> None:
        """Log the start of a run."""
        self.log(PipelineEventBuilder.batch_started(
            input_path=input_path,
            record_limit=record_limit,
            error_policy=error_policy,
            correlation_id=self.correlation_id,
        ))

    def log_file_opened(self, input_path: str) -> None:
        """Log a successful open of the input file."""
        self.log(PipelineEventBuilder.file_opened(
            input_path=input_path,
            correlation_id=self.correlation_id,
        ))

    def log_file_access_failed(self, input_path: str, error_message: str) -> None:
        """Log a failed open of the input file."""
        self.log(PipelineEventBuilder.file_access_failed(
            input_path=input_path,
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))

    def log_row_decoded(self, position: int, ref_number: str) -> None:
        """Log a row that decoded into a trip."""
        self.log(PipelineEventBuilder.row_decoded(
            position=position,
            ref_number=ref_number,
            correlation_id=self.correlation_id,
        ))

    def log_row_decode_failed(self, error: RowDecodeError) -> None:
        """Log a row that does not match the trip schema."""
        self.log(PipelineEventBuilder.row_decode_failed(
            position=error.position,
            line_number=error.line_number,
            error_message=str(error),
            correlation_id=self.correlation_id,
        ))

    def log_row_skipped(self, stage: str, error_message: str) -> None:
        """Log a failure passed over by the skip or collect policy."""
        self.log(PipelineEventBuilder.row_skipped(
            stage=stage,
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))

    def log_record_rendered(self, ref_number: str) -> None:
        """Log a trip line written to the report."""
        self.log(PipelineEventBuilder.record_rendered(
            ref_number=ref_number,
            correlation_id=self.correlation_id,
        ))

    def log_date_format_failed(self, error: DateFormatError) -> None:
        """Log a trip whose dates cannot be parsed."""
        self.log(PipelineEventBuilder.date_format_failed(
            ref_number=error.ref_number or "",
            field=error.field,
            value=error.value,
            error_message=str(error),
            correlation_id=self.correlation_id,
        ))

    def log_batch_completed(
        self,
        rows_read: int,
        records_loaded: int,
        lines_rendered: int,
        failure_count: int,
    ) -> None:
        """Log the end of a run that reached the closing banner."""
        self.log(PipelineEventBuilder.batch_completed(
            rows_read=rows_read,
            records_loaded=records_loaded,
            lines_rendered=lines_rendered,
            failure_count=failure_count,
            correlation_id=self.correlation_id,
        ))

    def log_batch_aborted(self, stage: str, error_message: str) -> None:
        """Log a run ended by a fatal error."""
        self.log(PipelineEventBuilder.batch_aborted(
            stage=stage,
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a batch run.
    Pass it through all subsequent events.
    """
    return uuid4()
