"""Route findings to the concept or constraint handling path."""

from __future__ import annotations

from enum import Enum

from jqagate.core.errors import FindingError
from jqagate.report.models import Finding, RuleKind


class RulePath(Enum):
    """Handling path of a finding."""

    CONCEPT = "concept"
    CONSTRAINT = "constraint"


_PATHS: dict[RuleKind, RulePath] = {
    RuleKind.CONCEPT: RulePath.CONCEPT,
    RuleKind.CONSTRAINT: RulePath.CONSTRAINT,
}


def dispatch(finding: Finding) -> RulePath:
    """Classify a finding by its kind.

    Raises:
        FindingError: If the kind is not a known RuleKind.
    """
    path = _PATHS.get(finding.kind) if isinstance(finding.kind, RuleKind) else None
    if path is None:
        raise FindingError.unknown_kind(finding.id, finding.kind)
    return path
