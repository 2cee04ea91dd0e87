"""Issue models - scope, locations and emitted issues."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jqagate.report.models import RuleKind


@dataclass(frozen=True)
class Scope:
    """The part of the project an analysis run reports on (project root or a module)."""

    root_path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "root_path", Path(self.root_path))

    def is_root_of(self, project_root: Path) -> bool:
        """True if this scope is the project root itself rather than a module below it."""
        return _normalize(self.root_path) == _normalize(Path(project_root))


def _normalize(path: Path) -> str:
    return os.path.normcase(os.path.abspath(path))


@dataclass(frozen=True)
class TextRange:
    """Range inside a resource. Lines are 1-based, columns 0-based."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def __post_init__(self) -> None:
        if self.start_line < 1:
            raise ValueError(f"start_line must be >= 1, got {self.start_line}")
        if (self.end_line, self.end_column) < (self.start_line, self.start_column):
            raise ValueError("Range end must not precede its start")

    @classmethod
    def line(cls, line: int) -> TextRange:
        """Zero-width range at the start of ``line``."""
        return cls(line, 0, line, 0)


@dataclass(frozen=True)
class ResolvedLocation:
    """A concrete position inside the current scope.

    ``resource`` is whatever the resolver uses as a handle (a file path for the
    built-in resolvers). ``text_range`` is None for file-level locations.
    """

    resource: Any
    text_range: TextRange | None = None


@dataclass(frozen=True)
class RuleKey:
    """Identifier of the issue rule in the host tool."""

    repository: str
    rule: str

    def __str__(self) -> str:
        return f"{self.repository}:{self.rule}"


INVALID_CONCEPT_RULE = "invalid-concept"
CONSTRAINT_VIOLATION_RULE = "constraint-violation"


@dataclass(frozen=True)
class RuleKeys:
    """Rule keys bound 1:1 to the rule kinds."""

    concept: RuleKey
    constraint: RuleKey

    @classmethod
    def for_repository(cls, repository: str) -> RuleKeys:
        return cls(
            concept=RuleKey(repository, INVALID_CONCEPT_RULE),
            constraint=RuleKey(repository, CONSTRAINT_VIOLATION_RULE),
        )

    def for_kind(self, kind: RuleKind) -> RuleKey:
        return self.concept if kind == RuleKind.CONCEPT else self.constraint


@dataclass(frozen=True)
class Issue:
    """An issue handed to the sink. ``location`` None means the project root."""

    rule_key: RuleKey
    message: str
    location: ResolvedLocation | None = None
    finding_id: str = ""

    @property
    def is_project_level(self) -> bool:
        return self.location is None


@dataclass
class EmitSummary:
    """Counters for one run over a set of findings."""

    findings: int = 0
    rows: int = 0
    emitted: int = 0
    resolved: int = 0
    dropped: int = 0
    issues: list[Issue] = field(default_factory=list)
