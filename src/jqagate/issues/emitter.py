"""Issue emitter - turns findings into located issues for one scope.

Per finding:

    classify -> for each row: resolve anchor -> scope check -> emit | drop

A row whose anchor resolves is emitted at the resolved location regardless of
scope, since resolvers only find resources inside the scope. A row without a
resolvable anchor is emitted at the project root, and only when the scope is
the project root; module scopes drop it so it is reported once per project.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from jqagate.config.models import DEFAULT_REPOSITORY_KEY
from jqagate.core.errors import JqaGateError, SinkError
from jqagate.issues.dispatch import RulePath, dispatch
from jqagate.issues.messages import MessageStyle, build_message
from jqagate.issues.models import EmitSummary, Issue, ResolvedLocation, RuleKeys, Scope
from jqagate.issues.resolvers import ResolverRegistry
from jqagate.issues.sinks import IssueSink
from jqagate.report.models import Finding, ResultSet, Row

logger = structlog.get_logger()


class IssueEmitter:
    """Emits issues for findings of one analysis run.

    The scope is fixed for the lifetime of the emitter; create one emitter per
    scope (project root or module).
    """

    def __init__(
        self,
        project_root: Path,
        scope: Scope,
        registry: ResolverRegistry,
        sink: IssueSink,
        *,
        rule_keys: RuleKeys | None = None,
        style: MessageStyle = MessageStyle.LINES,
    ) -> None:
        self._project_root = Path(project_root)
        self._scope = scope
        self._registry = registry
        self._sink = sink
        self._rule_keys = rule_keys or RuleKeys.for_repository(DEFAULT_REPOSITORY_KEY)
        self._style = style
        self._is_project_level = scope.is_root_of(self._project_root)
        self._summary = EmitSummary()

    @property
    def scope(self) -> Scope:
        return self._scope

    @property
    def is_project_level(self) -> bool:
        return self._is_project_level

    @property
    def summary(self) -> EmitSummary:
        return self._summary

    def emit_all(self, findings: Iterable[Finding]) -> EmitSummary:
        """Emit issues for all findings in order.

        Raises:
            FindingError: On a finding of unknown kind.
            SinkError: If the sink fails; issues saved before remain saved.
        """
        for finding in findings:
            self.emit(finding)
        return self._summary

    def emit(self, finding: Finding) -> int:
        """Emit the issues of one finding. Returns the number emitted."""
        path = dispatch(finding)
        self._summary.findings += 1
        before = self._summary.emitted

        if path == RulePath.CONCEPT and finding.result is None:
            self._emit_not_applied(finding)
        elif finding.result is not None:
            for row in finding.result.rows:
                self._emit_row(finding, finding.result, row)

        return self._summary.emitted - before

    def _emit_not_applied(self, finding: Finding) -> None:
        if not self._is_project_level:
            logger.debug("concept_dropped", finding_id=finding.id, scope=str(self._scope.root_path))
            self._summary.dropped += 1
            return
        message = build_message(finding.id, finding.description, None, None, style=self._style)
        self._save(finding, message, None)

    def _emit_row(self, finding: Finding, result: ResultSet, row: Row) -> None:
        self._summary.rows += 1
        location = self._resolve_anchor(result, row)
        if location is None and not self._is_project_level:
            logger.debug("row_dropped", finding_id=finding.id, scope=str(self._scope.root_path))
            self._summary.dropped += 1
            return
        if location is not None:
            self._summary.resolved += 1

        message = build_message(
            finding.id,
            finding.description,
            result.primary_column,
            row,
            anchored=location is not None,
            style=self._style,
        )
        self._save(finding, message, location)

    def _resolve_anchor(self, result: ResultSet, row: Row) -> ResolvedLocation | None:
        anchor = result.anchor(row)
        if anchor is None or anchor.source_ref is None:
            return None
        return self._registry.resolve(self._scope, anchor.source_ref)

    def _save(self, finding: Finding, message: str, location: ResolvedLocation | None) -> None:
        issue = Issue(
            rule_key=self._rule_keys.for_kind(finding.kind),
            message=message,
            location=location,
            finding_id=finding.id,
        )
        try:
            self._sink.save(issue)
        except JqaGateError:
            raise
        except Exception as e:
            raise SinkError.write_failed(
                str(e), emitted=self._summary.emitted, finding_id=finding.id
            ) from e
        self._summary.emitted += 1
        self._summary.issues.append(issue)
        logger.debug(
            "issue_emitted",
            finding_id=finding.id,
            rule=str(issue.rule_key),
            project_level=issue.is_project_level,
        )
