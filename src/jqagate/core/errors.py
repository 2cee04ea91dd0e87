"""jqagate error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report
- 4xxx: Finding
- 5xxx: Sink
- 9xxx: Internal

Unresolvable locations are not errors: they are an expected outcome of
resolution and never surface here.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_DUPLICATE_RESOLVER = 2003

    # Report (3xxx)
    REPORT_NOT_FOUND = 3001
    REPORT_MALFORMED = 3002
    REPORT_INVALID_VALUE = 3003

    # Finding (4xxx)
    FINDING_UNKNOWN_KIND = 4001

    # Sink (5xxx)
    SINK_WRITE_FAILED = 5001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True)
class JqaGateError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(JqaGateError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def duplicate_resolver(cls, language: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_DUPLICATE_RESOLVER,
            message=f"A resolver is already registered for language '{language}'",
            details={"language": language},
        )


class ReportError(JqaGateError):
    """Errors reading the analysis report."""

    @classmethod
    def not_found(cls, path: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_NOT_FOUND,
            message=f"Report file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def malformed(cls, path: str, reason: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_MALFORMED,
            message=f"Malformed report at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, element: str, value: Any, reason: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_INVALID_VALUE,
            message=f"Invalid value in <{element}>: {reason}",
            details={"element": element, "value": str(value), "reason": reason},
        )


class FindingError(JqaGateError):
    """Contract violations in the finding model handed over by the report layer."""

    @classmethod
    def unknown_kind(cls, finding_id: str, kind: Any) -> "FindingError":
        return cls(
            code=ErrorCode.FINDING_UNKNOWN_KIND,
            message=f"Finding '{finding_id}' has unknown kind: {kind!r}",
            details={"finding_id": finding_id, "kind": str(kind)},
        )


class SinkError(JqaGateError):
    """The issue sink could not record an issue. Aborts the run."""

    @classmethod
    def write_failed(cls, reason: str, *, emitted: int, finding_id: str | None = None) -> "SinkError":
        return cls(
            code=ErrorCode.SINK_WRITE_FAILED,
            message=f"Failed to record issue: {reason}",
            details={"reason": reason, "emitted": emitted, "finding_id": finding_id},
        )

    @property
    def emitted(self) -> int:
        """Issues successfully recorded before the failure."""
        return int(self.details.get("emitted", 0))


class InternalError(JqaGateError):
    """A run failed for a reason outside the error taxonomy above."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
