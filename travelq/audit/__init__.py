"""Pipeline event logging package."""

from travelq.audit.logger import (
    PipelineAuditLogger,
    configure_logging,
    create_correlation_id,
)

__all__ = ["PipelineAuditLogger", "configure_logging", "create_correlation_id"]
