"""Configuration package."""

from travelq.config.settings import (
    BatchSettings,
    ErrorPolicy,
    get_settings,
)

__all__ = [
    "BatchSettings",
    "ErrorPolicy",
    "get_settings",
]
