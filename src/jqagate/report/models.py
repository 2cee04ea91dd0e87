"""Report models - rules, result tables and the findings derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RuleKind(Enum):
    """Kind of analysis rule."""

    CONCEPT = "concept"
    CONSTRAINT = "constraint"


class RuleStatus(Enum):
    """Outcome of a rule evaluation as recorded in the report."""

    SUCCESS = "success"
    FAILURE = "failure"
    WARNING = "warning"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SourceRef:
    """Language-agnostic reference to a source element.

    ``line`` is 1-based; 0 means the report carried no line information.
    """

    language: str
    symbolic_path: str
    element: str = ""
    line: int = 0

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError(f"line must be >= 0, got {self.line}")


@dataclass(frozen=True)
class Column:
    """A single cell of a result row."""

    name: str
    value: str
    source_ref: SourceRef | None = None


@dataclass(frozen=True)
class Row:
    """Result row. Column order is declaration order."""

    columns: tuple[Column, ...] = ()

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None


@dataclass(frozen=True)
class ResultSet:
    """Tabular rule result. ``primary_column`` names the anchor column of every row."""

    primary_column: str | None = None
    rows: tuple[Row, ...] = ()

    def anchor(self, row: Row) -> Column | None:
        """Anchor column of ``row``, if the result set declares one and the row has it."""
        if self.primary_column is None:
            return None
        return row.column(self.primary_column)


@dataclass(frozen=True)
class Finding:
    """A rule outcome to be turned into issues.

    A concept finding without a result means the concept could not be applied.
    """

    kind: RuleKind
    id: str
    description: str
    result: ResultSet | None = None


@dataclass(frozen=True)
class Severity:
    """Rule severity as written by the analyzer."""

    name: str
    level: int | None = None


@dataclass(frozen=True)
class RuleResult:
    """A concept or constraint as recorded in the report."""

    kind: RuleKind
    id: str
    description: str
    status: RuleStatus
    severity: Severity | None = None
    result: ResultSet | None = None

    @property
    def row_count(self) -> int:
        return len(self.result.rows) if self.result is not None else 0


@dataclass(frozen=True)
class Group:
    """Rule group executed by the analyzer."""

    id: str
    rules: tuple[RuleResult, ...] = ()


@dataclass
class Report:
    """Deserialized analysis report."""

    groups: list[Group] = field(default_factory=list)

    @property
    def rules(self) -> list[RuleResult]:
        return [rule for group in self.groups for rule in group.rules]

    @property
    def concepts(self) -> list[RuleResult]:
        return [r for r in self.rules if r.kind == RuleKind.CONCEPT]

    @property
    def constraints(self) -> list[RuleResult]:
        return [r for r in self.rules if r.kind == RuleKind.CONSTRAINT]
