"""Tests for batch settings and the pipeline audit logger."""

from pathlib import Path
from uuid import uuid4

import pytest
from pydantic import ValidationError

from travelq.audit import PipelineAuditLogger, create_correlation_id
from travelq.config import BatchSettings, ErrorPolicy, get_settings
from travelq.errors import DateFormatError, RowDecodeError
from travelq.models import EventSeverity, PipelineEventType


class TestBatchSettings:
    """Tests for BatchSettings defaults and overrides."""

    def test_defaults_reproduce_fixed_report(self, monkeypatch):
        """Test the defaults: data/travelq.csv, ten rows, abort."""
        for var in ("INPUT_PATH", "RECORD_LIMIT", "ERROR_POLICY", "AUTHOR"):
            monkeypatch.delenv(f"TRAVELQ_{var}", raising=False)
        settings = BatchSettings()
        assert settings.input_path == Path("data/travelq.csv")
        assert settings.record_limit == 10
        assert settings.error_policy == ErrorPolicy.ABORT
        assert settings.author == "Morgan Bakelmun"

    def test_env_override(self, monkeypatch):
        """Test TRAVELQ_ environment variables are read."""
        monkeypatch.setenv("TRAVELQ_RECORD_LIMIT", "3")
        monkeypatch.setenv("TRAVELQ_ERROR_POLICY", "skip")
        monkeypatch.setenv("TRAVELQ_LOG_LEVEL", "debug")
        settings = BatchSettings()
        assert settings.record_limit == 3
        assert settings.error_policy == ErrorPolicy.SKIP
        assert settings.log_level == "DEBUG"

    def test_record_limit_must_be_positive(self):
        """Test that a zero-row window is rejected."""
        with pytest.raises(ValidationError):
            BatchSettings(record_limit=0)

    def test_rejects_unknown_log_level(self):
        """Test that only standard level names are accepted."""
        with pytest.raises(ValidationError, match="Unsupported log level"):
            BatchSettings(log_level="LOUD")

    def test_get_settings_cached(self):
        """Test get_settings returns the same object until cleared."""
        first = get_settings()
        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings() is not first


class TestPipelineAuditLogger:
    """Tests for the in-memory event trail."""

    def test_uses_given_correlation_id(self):
        """Test that a supplied correlation ID is kept."""
        correlation_id = uuid4()
        audit_logger = PipelineAuditLogger(correlation_id)
        audit_logger.log_file_opened("data/travelq.csv")
        assert audit_logger.events[0].correlation_id == correlation_id

    def test_creates_correlation_id(self):
        """Test that each logger gets its own run ID by default."""
        assert PipelineAuditLogger().correlation_id != PipelineAuditLogger().correlation_id
        assert create_correlation_id() != create_correlation_id()

    def test_row_decode_failed_event(self):
        """Test a decode error is logged with its position and stage."""
        audit_logger = PipelineAuditLogger()
        audit_logger.log_row_decode_failed(RowDecodeError(3, 4, "bad total"))
        event = audit_logger.events[0]
        assert event.event_type == PipelineEventType.ROW_DECODE_FAILED
        assert event.severity == EventSeverity.ERROR
        assert event.details == {"position": 3, "line_number": 4}
        assert "bad total" in event.error_message

    def test_date_format_failed_event(self):
        """Test a date error is logged with the offending value."""
        audit_logger = PipelineAuditLogger()
        audit_logger.log_date_format_failed(
            DateFormatError("end_date", "2024-13-40", "REF001")
        )
        event = audit_logger.events[0]
        assert event.stage == "date_format"
        assert event.details["ref_number"] == "REF001"
        assert event.details["value"] == "2024-13-40"

    def test_log_helpers_documented(self):
        """Test that every log_* helper carries a docstring."""
        helpers = [
            name for name in dir(PipelineAuditLogger) if name.startswith("log_")
        ]
        assert "log_row_skipped" in helpers
        for name in helpers:
            assert getattr(PipelineAuditLogger, name).__doc__, name

    def test_events_returns_copy(self):
        """Test that callers cannot rewrite the trail."""
        audit_logger = PipelineAuditLogger()
        audit_logger.log_file_opened("x.csv")
        audit_logger.events.clear()
        assert len(audit_logger.events) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
