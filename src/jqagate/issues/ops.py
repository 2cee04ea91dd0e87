"""Issue operations - one analysis run over one scope."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from jqagate.config.models import JqaGateConfig
from jqagate.core.errors import InternalError, JqaGateError, SinkError
from jqagate.core.logging import run_context
from jqagate.issues.emitter import IssueEmitter
from jqagate.issues.languages import create_registry
from jqagate.issues.messages import MessageStyle
from jqagate.issues.models import EmitSummary, RuleKeys, Scope
from jqagate.issues.resolvers import ResolverRegistry
from jqagate.issues.sinks import CollectingSink, GenericIssueSink, IssueSink
from jqagate.report.reader import read_report, select_findings

logger = structlog.get_logger()


def _close(sink: IssueSink, emitted: int) -> None:
    try:
        sink.close()
    except JqaGateError:
        raise
    except Exception as e:
        raise SinkError.write_failed(str(e), emitted=emitted) from e


@dataclass
class RunResult:
    """Outcome of one run."""

    project_root: Path
    scope: Scope
    report_path: Path
    summary: EmitSummary = field(default_factory=EmitSummary)
    output_path: Path | None = None
    duration_seconds: float = 0.0

    @property
    def is_project_level(self) -> bool:
        return self.scope.is_root_of(self.project_root)


class IssueOps:
    """Runs the report-to-issues translation for a project.

    The resolver registry is built once and shared by every run; each run
    gets its own scope, emitter and sink.
    """

    def __init__(
        self,
        project_root: Path,
        config: JqaGateConfig | None = None,
        registry: ResolverRegistry | None = None,
    ) -> None:
        self._project_root = project_root.resolve()
        self._config = config or JqaGateConfig()
        self._registry = registry or create_registry(self._config.resolvers)

    @property
    def registry(self) -> ResolverRegistry:
        return self._registry

    def report_path(self, override: Path | None = None) -> Path:
        """Report location; relative paths are taken from the project root."""
        path = override or Path(self._config.report.path)
        return path if path.is_absolute() else self._project_root / path

    def project_file(self, report_path: Path) -> str:
        """File that carries project-level issues in the generic issue export."""
        if self._config.issues.project_file:
            return self._config.issues.project_file
        try:
            return report_path.relative_to(self._project_root).as_posix()
        except ValueError:
            return report_path.name

    def run(
        self,
        *,
        scope_root: Path | None = None,
        report: Path | None = None,
        sink: IssueSink | None = None,
        output: Path | None = None,
    ) -> RunResult:
        """Translate the report into issues for one scope.

        Args:
            scope_root: Scope of this run (default: the project root)
            report: Report file (default: from config)
            sink: Destination of issues (default: in-memory, or JSON when output is set)
            output: Write a generic issue report here

        Returns:
            RunResult with the emit summary

        Raises:
            ReportError: If the report cannot be read.
            FindingError: On an unknown finding kind.
            SinkError: If the sink fails.
            InternalError: On any other failure inside the run.
        """
        start_time = time.time()
        scope = Scope((scope_root or self._project_root).resolve())
        report_path = self.report_path(report)

        if sink is None:
            if output is not None:
                sink = GenericIssueSink(output, self._project_root, self.project_file(report_path))
            else:
                sink = CollectingSink()

        with run_context(str(scope.root_path)):
            findings = select_findings(read_report(report_path))
            emitter = IssueEmitter(
                self._project_root,
                scope,
                self._registry,
                sink,
                rule_keys=RuleKeys.for_repository(self._config.issues.repository_key),
                style=MessageStyle(self._config.issues.message_style),
            )
            try:
                summary = emitter.emit_all(findings)
                _close(sink, summary.emitted)
            except SinkError as e:
                logger.error("sink_failed", emitted=e.emitted, error=e.message)
                raise
            except JqaGateError:
                raise
            except Exception as e:
                logger.exception("run_failed")
                raise InternalError.unexpected(str(e), scope=str(scope.root_path)) from e

            logger.info(
                "run_complete",
                project_level=emitter.is_project_level,
                findings=summary.findings,
                emitted=summary.emitted,
                dropped=summary.dropped,
            )
            return RunResult(
                project_root=self._project_root,
                scope=scope,
                report_path=report_path,
                summary=summary,
                output_path=output,
                duration_seconds=time.time() - start_time,
            )
