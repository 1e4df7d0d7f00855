"""
Batch Orchestrator for the TravelQ report

This module ties together decoding, rendering and event logging and
defines the single end-to-end flow:

    open -> decode -> limit -> materialize -> render

DESIGN DECISION: The decoder and the record model only ever return or
raise typed errors. Whether a failure ends the run is decided here,
by the ErrorPolicy, and nowhere else.
"""

import sys
from dataclasses import dataclass, field
from itertools import islice
from typing import Optional, TextIO

from travelq.audit import PipelineAuditLogger, configure_logging
from travelq.config import BatchSettings, ErrorPolicy, get_settings
from travelq.errors import (
    DateFormatError,
    FileAccessError,
    PipelineError,
)
from travelq.ingest import decode_rows, open_trip_file
from travelq.models.trip import TripRecord
from travelq.report import banner, format_trip_line


@dataclass
class BatchOutcome:
    """Counts and failures of a run that reached the closing banner."""
    rows_read: int = 0
    records_loaded: int = 0
    lines_rendered: int = 0
    failures: list[PipelineError] = field(default_factory=list)


class TripBatchPipeline:
    """
    Orchestrates the batch report.

    Flow:
    1. Banner   -> write the opening author line
    2. Open     -> scoped handle on the export
    3. Decode   -> lazy DecodeResults, header-keyed
    4. Limit    -> first `record_limit` row positions only
    5. Collect  -> successful records, in file order
    6. Render   -> one summary line per trip
    7. Banner   -> blank line, closing author line

    Under ErrorPolicy.ABORT any failure raises out of run() and the
    closing banner is not written.
    """

    def __init__(
        self,
        settings: Optional[BatchSettings] = None,
        audit_logger: Optional[PipelineAuditLogger] = None,
        out: Optional[TextIO] = None,
    ):
        self._settings = settings or get_settings()
        self._audit_logger = audit_logger or PipelineAuditLogger()
        self._out = out
        self._failures: list[PipelineError] = []

    @property
    def audit_logger(self) -> PipelineAuditLogger:
        return self._audit_logger

    def _write(self, line: str) -> None:
        print(line, file=self._out)

    def _handle_failure(self, error: PipelineError) -> None:
        """Apply the error policy to one failed row or trip."""
        if self._settings.error_policy == ErrorPolicy.ABORT:
            raise error
        self._audit_logger.log_row_skipped(error.stage, str(error))
        if self._settings.error_policy == ErrorPolicy.COLLECT:
            self._failures.append(error)

    def load_trips(self) -> tuple[list[TripRecord], int]:
        """
        Read up to `record_limit` rows and return (records, rows_read).

        The file is closed before this returns, on success or failure.

        Raises:
            FileAccessError: If the export cannot be opened
            RowDecodeError: If a row in the window fails to decode (ABORT)
        """
        path = self._settings.input_path
        trips: list[TripRecord] = []
        rows_read = 0

        try:
            with open_trip_file(path) as handle:
                self._audit_logger.log_file_opened(str(path))
                window = islice(decode_rows(handle), self._settings.record_limit)
                for result in window:
                    rows_read += 1
                    if result.ok:
                        trips.append(result.record)
                        self._audit_logger.log_row_decoded(
                            result.position, result.record.ref_number,
                        )
                        continue
                    self._audit_logger.log_row_decode_failed(result.error)
                    self._handle_failure(result.error)
        except FileAccessError as e:
            self._audit_logger.log_file_access_failed(str(path), e.reason)
            raise

        return trips, rows_read

    def render(self, trips: list[TripRecord]) -> int:
        """
        Write one line per trip and return how many were written.

        Lines for earlier trips stay written if a later one fails.

        Raises:
            DateFormatError: If a trip's dates are malformed (ABORT)
        """
        rendered = 0
        for trip in trips:
            try:
                line = format_trip_line(trip)
            except DateFormatError as e:
                self._audit_logger.log_date_format_failed(e)
                self._handle_failure(e)
                continue
            self._write(line)
            rendered += 1
            self._audit_logger.log_record_rendered(trip.ref_number)
        return rendered

    def run(self) -> BatchOutcome:
        """
        Run the whole report.

        Returns:
            BatchOutcome with counts and, under COLLECT, the failures

        Raises:
            PipelineError: On the first failure under ABORT
        """
        self._failures = []
        self._audit_logger.log_batch_started(
            input_path=str(self._settings.input_path),
            record_limit=self._settings.record_limit,
            error_policy=self._settings.error_policy.value,
        )
        self._write(banner(self._settings.author))

        try:
            trips, rows_read = self.load_trips()
            rendered = self.render(trips)
        except PipelineError as e:
            self._audit_logger.log_batch_aborted(e.stage, str(e))
            raise

        self._write("\n" + banner(self._settings.author))

        outcome = BatchOutcome(
            rows_read=rows_read,
            records_loaded=len(trips),
            lines_rendered=rendered,
            failures=list(self._failures),
        )
        self._audit_logger.log_batch_completed(
            rows_read=outcome.rows_read,
            records_loaded=outcome.records_loaded,
            lines_rendered=outcome.lines_rendered,
            failure_count=len(outcome.failures),
        )
        return outcome


def _report_error(error: PipelineError) -> None:
    print(f"Error: {error.stage} failed: {error}", file=sys.stderr)


def main() -> int:
    """
    Entry point: run the report with the configured settings.

    Returns the process exit status: 0 on success, 1 on a fatal error
    or when failures were collected.
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    pipeline = TripBatchPipeline(settings=settings)

    try:
        outcome = pipeline.run()
    except PipelineError as e:
        sys.stdout.flush()
        _report_error(e)
        return 1

    if outcome.failures:
        sys.stdout.flush()
        for failure in outcome.failures:
            _report_error(failure)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
