"""Config module exports."""

from jqagate.config.loader import load_config
from jqagate.config.models import (
    IssuesConfig,
    JqaGateConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
    ResolversConfig,
)

__all__ = [
    "load_config",
    "IssuesConfig",
    "JqaGateConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportConfig",
    "ResolversConfig",
]
