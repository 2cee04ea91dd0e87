"""Issue message rendering."""

from __future__ import annotations

from enum import Enum

from jqagate.report.models import Row


class MessageStyle(Enum):
    """How the name=value pairs of a row are laid out after the header."""

    LINES = "lines"  # "[id] description\nA=1\nB=2"
    INLINE = "inline"  # "[id] description [A=1, B=2]"


def header(finding_id: str, description: str) -> str:
    return f"[{finding_id}] {description}"


def concept_not_applied(finding_id: str, description: str) -> str:
    return f"[{finding_id}] The concept could not be applied: {description}"


def row_pairs(row: Row, exclude: str | None = None) -> list[str]:
    """``name=value`` for each column in row order, skipping ``exclude``."""
    return [f"{col.name}={col.value}" for col in row.columns if exclude is None or col.name != exclude]


def build_message(
    finding_id: str,
    description: str,
    primary_column: str | None,
    row: Row | None,
    *,
    anchored: bool = False,
    style: MessageStyle = MessageStyle.LINES,
) -> str:
    """Render the issue message for a finding row.

    Without a row the finding is a concept that could not be applied. When
    ``anchored`` is set the issue sits on the element named by the primary
    column, so that column is left out of the message.
    """
    if row is None:
        return concept_not_applied(finding_id, description)

    pairs = row_pairs(row, exclude=primary_column if anchored else None)
    message = header(finding_id, description)
    if not pairs:
        return message
    if style == MessageStyle.INLINE:
        return f"{message} [{', '.join(pairs)}]"
    return message + "".join(f"\n{pair}" for pair in pairs)
