"""Report module - analysis report model and reader."""

from jqagate.report.models import (
    Column,
    Finding,
    Group,
    Report,
    ResultSet,
    Row,
    RuleKind,
    RuleResult,
    RuleStatus,
    Severity,
    SourceRef,
)
from jqagate.report.reader import parse_report, read_report, select_findings

__all__ = [
    "Column",
    "Finding",
    "Group",
    "Report",
    "ResultSet",
    "Row",
    "RuleKind",
    "RuleResult",
    "RuleStatus",
    "Severity",
    "SourceRef",
    "parse_report",
    "read_report",
    "select_findings",
]
