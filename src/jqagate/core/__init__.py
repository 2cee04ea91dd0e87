"""Core module exports."""

from jqagate.core.errors import (
    ConfigError,
    ErrorCode,
    FindingError,
    InternalError,
    JqaGateError,
    ReportError,
    SinkError,
)
from jqagate.core.logging import configure_logging, get_run_id, run_context

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FindingError",
    "InternalError",
    "JqaGateError",
    "ReportError",
    "SinkError",
    # Logging
    "configure_logging",
    "get_run_id",
    "run_context",
]
