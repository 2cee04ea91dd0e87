"""Tests for the issue emitter.

Verifies where issues are reported for project and module scopes:
- concepts that could not be applied only on project level
- constraint rows without a location only on project level
- constraint rows with a resolvable location always, at that location
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from jqagate.core.errors import FindingError, SinkError
from jqagate.issues.emitter import IssueEmitter
from jqagate.issues.messages import MessageStyle
from jqagate.issues.models import ResolvedLocation, RuleKeys, Scope, TextRange
from jqagate.issues.resolvers import ResolverRegistry
from jqagate.issues.sinks import CollectingSink
from jqagate.report.models import Column, Finding, ResultSet, Row, RuleKind, SourceRef

RULE_KEYS = RuleKeys.for_repository("jqassistant")


def _constraint(include_source_location: bool, *, primary: str | None = "Value") -> Finding:
    source_ref = (
        SourceRef(
            language="Java",
            symbolic_path="com/acme/Bar.class",
            element="WriteField",
            line=16,
        )
        if include_source_location
        else None
    )
    row = Row(columns=(Column(name="Value", value="Test", source_ref=source_ref),))
    return Finding(
        kind=RuleKind.CONSTRAINT,
        id="test:Constraint",
        description="TestConstraint",
        result=ResultSet(primary_column=primary, rows=(row,)),
    )


def _concept() -> Finding:
    return Finding(kind=RuleKind.CONCEPT, id="test:Concept", description="TestConcept")


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    (tmp_path / "module").mkdir()
    return tmp_path


@pytest.fixture
def resource(project_root: Path) -> Path:
    return project_root / "module" / "src" / "main" / "java" / "com" / "acme" / "Bar.java"


@pytest.fixture
def resolver(resource: Path) -> MagicMock:
    """Java resolver double that finds nothing unless told otherwise."""
    mock = MagicMock()
    mock.language = "Java"
    mock.resolve.return_value = None
    mock.to_range.side_effect = lambda _res, line: TextRange.line(line)
    return mock


@pytest.fixture
def registry(resolver: MagicMock) -> ResolverRegistry:
    return ResolverRegistry([resolver])


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


def _emitter(
    project_root: Path,
    scope_root: Path,
    registry: ResolverRegistry,
    sink: object,
    style: MessageStyle = MessageStyle.LINES,
) -> IssueEmitter:
    return IssueEmitter(
        project_root,
        Scope(scope_root),
        registry,
        sink,  # type: ignore[arg-type]
        rule_keys=RULE_KEYS,
        style=style,
    )


class TestInvalidConcept:
    """Concepts that could not be applied."""

    def test_reported_on_project_level(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        """Exactly one project-level issue with the fixed message."""
        emitter = _emitter(project_root, project_root, registry, sink)

        count = emitter.emit(_concept())

        assert count == 1
        assert len(sink.issues) == 1
        issue = sink.issues[0]
        assert issue.rule_key == RULE_KEYS.concept
        assert issue.message == "[test:Concept] The concept could not be applied: TestConcept"
        assert issue.location is None
        assert issue.is_project_level

    def test_not_reported_on_module_level(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        """Module scopes drop it."""
        emitter = _emitter(project_root, project_root / "module", registry, sink)

        count = emitter.emit(_concept())

        assert count == 0
        assert sink.issues == []
        assert emitter.summary.dropped == 1


class TestConstraintViolation:
    """Violated constraints."""

    def test_without_source_location_on_project_level(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        """Reported on the project root with all columns in the message."""
        emitter = _emitter(project_root, project_root, registry, sink)

        emitter.emit(_constraint(include_source_location=False))

        assert len(sink.issues) == 1
        issue = sink.issues[0]
        assert issue.rule_key == RULE_KEYS.constraint
        assert issue.message == "[test:Constraint] TestConstraint\nValue=Test"
        assert issue.location is None

    def test_without_source_location_on_module_level(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        """Dropped for module scopes."""
        emitter = _emitter(project_root, project_root / "module", registry, sink)

        emitter.emit(_constraint(include_source_location=False))

        assert sink.issues == []

    def test_without_primary_column_on_project_level(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        """Rows of a result without anchor column are never located."""
        emitter = _emitter(project_root, project_root, registry, sink)

        emitter.emit(_constraint(include_source_location=True, primary=None))

        assert len(sink.issues) == 1
        assert sink.issues[0].location is None
        assert sink.issues[0].message == "[test:Constraint] TestConstraint\nValue=Test"

    @pytest.mark.parametrize("scope_name", ["", "module"])
    def test_with_matching_source_location(
        self,
        project_root: Path,
        registry: ResolverRegistry,
        resolver: MagicMock,
        resource: Path,
        sink: CollectingSink,
        scope_name: str,
    ) -> None:
        """Resolved rows are reported at the element, whatever the scope."""
        resolver.resolve.return_value = resource
        emitter = _emitter(project_root, project_root / scope_name, registry, sink)

        emitter.emit(_constraint(include_source_location=True))

        assert len(sink.issues) == 1
        issue = sink.issues[0]
        assert issue.message == "[test:Constraint] TestConstraint"
        assert issue.location == ResolvedLocation(resource=resource, text_range=TextRange(16, 0, 16, 0))
        resolver.resolve.assert_called_once_with(
            Scope(project_root / scope_name), "com/acme/Bar.class", "WriteField"
        )

    def test_without_matching_source_location_on_module_level(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        """Element in another module: nothing reported."""
        emitter = _emitter(project_root, project_root / "module", registry, sink)

        emitter.emit(_constraint(include_source_location=True))

        assert sink.issues == []

    def test_without_matching_source_location_on_project_level(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        """Unresolved anchor falls back to the project root, anchor kept in message."""
        emitter = _emitter(project_root, project_root, registry, sink)

        emitter.emit(_constraint(include_source_location=True))

        assert len(sink.issues) == 1
        assert sink.issues[0].location is None
        assert sink.issues[0].message == "[test:Constraint] TestConstraint\nValue=Test"

    def test_without_result_emits_nothing(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        finding = Finding(kind=RuleKind.CONSTRAINT, id="test:Constraint", description="d")
        emitter = _emitter(project_root, project_root, registry, sink)

        assert emitter.emit(finding) == 0
        assert sink.issues == []

    def test_one_issue_per_row_in_order(
        self,
        project_root: Path,
        registry: ResolverRegistry,
        resolver: MagicMock,
        resource: Path,
        sink: CollectingSink,
    ) -> None:
        """Each row yields at most one issue, rows processed in order."""
        resolver.resolve.side_effect = lambda _scope, path, _el: resource if path == "A.class" else None
        rows = tuple(
            Row(
                columns=(
                    Column("Type", name, SourceRef("Java", f"{name}.class", "Type", 3)),
                    Column("Count", str(i)),
                )
            )
            for i, name in enumerate(["A", "B", "C"])
        )
        finding = Finding(
            kind=RuleKind.CONSTRAINT,
            id="test:Rows",
            description="Rows",
            result=ResultSet(primary_column="Type", rows=rows),
        )
        emitter = _emitter(project_root, project_root, registry, sink, MessageStyle.INLINE)

        summary = emitter.emit_all([finding])

        assert [i.message for i in sink.issues] == [
            "[test:Rows] Rows [Count=0]",
            "[test:Rows] Rows [Type=B, Count=1]",
            "[test:Rows] Rows [Type=C, Count=2]",
        ]
        assert summary.rows == 3
        assert summary.resolved == 1
        assert summary.emitted == 3


class TestResolverFaults:
    """Resolver errors never abort the run."""

    def test_fault_treated_as_unresolved(
        self, project_root: Path, registry: ResolverRegistry, resolver: MagicMock, sink: CollectingSink
    ) -> None:
        resolver.resolve.side_effect = RuntimeError("index unavailable")
        emitter = _emitter(project_root, project_root, registry, sink)

        emitter.emit_all([_constraint(include_source_location=True), _concept()])

        assert len(sink.issues) == 2
        assert all(issue.location is None for issue in sink.issues)

    def test_fault_on_module_level_drops_row_and_continues(
        self,
        project_root: Path,
        registry: ResolverRegistry,
        resolver: MagicMock,
        resource: Path,
        sink: CollectingSink,
    ) -> None:
        resolver.resolve.side_effect = [RuntimeError("boom"), resource]
        emitter = _emitter(project_root, project_root / "module", registry, sink)

        emitter.emit_all([_constraint(True), _constraint(True)])

        assert len(sink.issues) == 1
        assert sink.issues[0].location is not None


class TestSinkFailures:
    """Sink failures abort the run."""

    def test_sink_failure_raises_with_partial_count(
        self, project_root: Path, registry: ResolverRegistry
    ) -> None:
        sink = MagicMock()
        sink.save.side_effect = [None, OSError("disk full")]
        emitter = _emitter(project_root, project_root, registry, sink)

        with pytest.raises(SinkError) as exc_info:
            emitter.emit_all([_concept(), _constraint(False), _concept()])

        assert exc_info.value.emitted == 1
        assert sink.save.call_count == 2

    def test_unknown_kind_is_fatal(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        finding = Finding(kind="group", id="test:Group", description="d")  # type: ignore[arg-type]
        emitter = _emitter(project_root, project_root, registry, sink)

        with pytest.raises(FindingError):
            emitter.emit(finding)


class TestConceptWithResult:
    """Concept findings that carry rows go through the row path."""

    def test_rows_emitted_with_concept_rule(
        self, project_root: Path, registry: ResolverRegistry, sink: CollectingSink
    ) -> None:
        finding = Finding(
            kind=RuleKind.CONCEPT,
            id="test:Concept",
            description="TestConcept",
            result=ResultSet(rows=(Row((Column("A", "1"), Column("B", "2"))),)),
        )
        emitter = _emitter(project_root, project_root, registry, sink)

        emitter.emit(finding)

        assert sink.issues[0].rule_key == RULE_KEYS.concept
        assert sink.issues[0].message == "[test:Concept] TestConcept\nA=1\nB=2"
