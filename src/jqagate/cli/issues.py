"""jqagate issues command - translate a report into issues for one scope."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from jqagate.config.loader import load_config
from jqagate.core.errors import JqaGateError
from jqagate.core.logging import configure_logging
from jqagate.issues.models import Issue
from jqagate.issues.ops import IssueOps, RunResult


def _location_text(issue: Issue, project_root: Path) -> str:
    if issue.location is None:
        return "<project>"
    resource = Path(issue.location.resource)
    try:
        text = resource.relative_to(project_root).as_posix()
    except ValueError:
        text = str(resource)
    if issue.location.text_range is not None:
        text += f":{issue.location.text_range.start_line}"
    return text


def _make_issue_table(result: RunResult) -> Table:
    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Location", style="dim")
    table.add_column("Message")
    for issue in result.summary.issues:
        table.add_row(str(issue.rule_key), _location_text(issue, result.project_root), issue.message)
    return table


def _result_dict(result: RunResult) -> dict[str, object]:
    summary = result.summary
    return {
        "project_root": str(result.project_root),
        "scope": str(result.scope.root_path),
        "project_level": result.is_project_level,
        "report": str(result.report_path),
        "output": str(result.output_path) if result.output_path else None,
        "findings": summary.findings,
        "rows": summary.rows,
        "emitted": summary.emitted,
        "resolved": summary.resolved,
        "dropped": summary.dropped,
        "issues": [
            {
                "rule": str(issue.rule_key),
                "finding": issue.finding_id,
                "message": issue.message,
                "location": _location_text(issue, result.project_root),
            }
            for issue in summary.issues
        ],
    }


@click.command()
@click.option(
    "--project-root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Top-level project directory (default: current directory)",
)
@click.option(
    "--scope",
    "scope_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Module directory to report on (default: the project root)",
)
@click.option(
    "--report",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Report file (default: from config)",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write issues as a generic issue report (JSON)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def issues_command(
    ctx: click.Context,
    project_root: Path,
    scope_root: Path | None,
    report: Path | None,
    output: Path | None,
    as_json: bool,
) -> None:
    """Translate an analysis report into located issues."""
    root = project_root.resolve()
    verbose = bool((ctx.obj or {}).get("verbose", False))
    try:
        config = load_config(root)
        configure_logging(config.logging, verbose=verbose)
        result = IssueOps(root, config).run(scope_root=scope_root, report=report, output=output)
    except JqaGateError as e:
        if as_json:
            click.echo(json.dumps({"error": e.to_dict()}))
            ctx.exit(1)
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(_result_dict(result)))
        return

    summary = result.summary
    scope_label = "project" if result.is_project_level else f"module {result.scope.root_path}"
    click.echo(
        f"{summary.emitted} issue(s) for {scope_label} "
        f"({summary.resolved} located, {summary.dropped} outside scope)"
    )
    if summary.issues:
        Console().print(_make_issue_table(result))
    if result.output_path is not None:
        click.echo(f"Wrote {result.output_path}")
