"""Issues module - location resolution, scoping and emission of issues."""

from jqagate.issues.dispatch import RulePath, dispatch
from jqagate.issues.emitter import IssueEmitter
from jqagate.issues.languages import (
    FileResourceResolver,
    JavaResourceResolver,
    create_registry,
)
from jqagate.issues.messages import MessageStyle, build_message
from jqagate.issues.models import (
    EmitSummary,
    Issue,
    ResolvedLocation,
    RuleKey,
    RuleKeys,
    Scope,
    TextRange,
)
from jqagate.issues.ops import IssueOps, RunResult
from jqagate.issues.resolvers import ResolverRegistry, ResourceResolver
from jqagate.issues.sinks import CollectingSink, GenericIssueSink, IssueSink

__all__ = [
    "CollectingSink",
    "EmitSummary",
    "FileResourceResolver",
    "GenericIssueSink",
    "Issue",
    "IssueEmitter",
    "IssueOps",
    "IssueSink",
    "JavaResourceResolver",
    "MessageStyle",
    "ResolvedLocation",
    "ResolverRegistry",
    "ResourceResolver",
    "RuleKey",
    "RuleKeys",
    "RulePath",
    "RunResult",
    "Scope",
    "TextRange",
    "build_message",
    "create_registry",
    "dispatch",
]
