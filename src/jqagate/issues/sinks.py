"""Issue sinks - where emitted issues go.

The generic issue sink writes the SonarQube external issue format:

{
  "issues": [
    {
      "engineId": "jqassistant",
      "ruleId": "constraint-violation",
      "severity": "MAJOR",
      "type": "CODE_SMELL",
      "primaryLocation": {
        "message": "...",
        "filePath": "src/main/java/com/acme/Bar.java",
        "textRange": {"startLine": 16, "startColumn": 0, "endLine": 16, "endColumn": 0}
      }
    }
  ]
}
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal, Protocol

import structlog

from jqagate.issues.models import Issue

logger = structlog.get_logger()

IssueSeverity = Literal["BLOCKER", "CRITICAL", "MAJOR", "MINOR", "INFO"]
IssueType = Literal["BUG", "VULNERABILITY", "CODE_SMELL"]


class IssueSink(Protocol):
    """Receives one ``save`` call per emitted issue.

    Failures propagate to the caller; the emitter turns them into SinkError.
    """

    def save(self, issue: Issue) -> None: ...

    def close(self) -> None: ...


class CollectingSink:
    """Keeps issues in memory."""

    def __init__(self) -> None:
        self.issues: list[Issue] = []
        self.closed = False

    def save(self, issue: Issue) -> None:
        self.issues.append(issue)

    def close(self) -> None:
        self.closed = True

    def __len__(self) -> int:
        return len(self.issues)


def _relative(path: Path, base: Path) -> str:
    try:
        rel = Path(os.path.abspath(path)).relative_to(os.path.abspath(base))
    except ValueError:
        rel = path
    return rel.as_posix()


class GenericIssueSink:
    """Buffers issues and writes them as a generic issue report on close()."""

    def __init__(
        self,
        output: Path,
        project_root: Path,
        project_file: str,
        *,
        severity: IssueSeverity = "MAJOR",
        issue_type: IssueType = "CODE_SMELL",
    ) -> None:
        self._output = output
        self._project_root = project_root
        self._project_file = project_file
        self._severity = severity
        self._issue_type = issue_type
        self._entries: list[dict[str, Any]] = []

    def to_entry(self, issue: Issue) -> dict[str, Any]:
        """Convert one issue into a generic issue entry."""
        primary: dict[str, Any] = {"message": issue.message}
        if issue.location is None:
            primary["filePath"] = self._project_file
        else:
            primary["filePath"] = _relative(Path(issue.location.resource), self._project_root)
            rng = issue.location.text_range
            if rng is not None:
                primary["textRange"] = {
                    "startLine": rng.start_line,
                    "startColumn": rng.start_column,
                    "endLine": rng.end_line,
                    "endColumn": rng.end_column,
                }
        return {
            "engineId": issue.rule_key.repository,
            "ruleId": issue.rule_key.rule,
            "severity": self._severity,
            "type": self._issue_type,
            "primaryLocation": primary,
        }

    def save(self, issue: Issue) -> None:
        self._entries.append(self.to_entry(issue))

    def close(self) -> None:
        self._output.parent.mkdir(parents=True, exist_ok=True)
        self._output.write_text(json.dumps({"issues": self._entries}, indent=2) + "\n")
        logger.info("issues_written", path=str(self._output), count=len(self._entries))
