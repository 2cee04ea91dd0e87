"""Resolver registry - maps language tags to source location resolvers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

import structlog

from jqagate.core.errors import ConfigError
from jqagate.issues.models import ResolvedLocation, Scope, TextRange
from jqagate.report.models import SourceRef

logger = structlog.get_logger()


class ResourceResolver(Protocol):
    """Protocol for per-language location resolvers.

    Resolvers are pure lookups: they must not mutate the scope and must return
    the same answer for the same input.
    """

    @property
    def language(self) -> str:
        """Language tag this resolver handles (matched case-insensitively)."""
        ...

    def resolve(self, scope: Scope, symbolic_path: str, element: str) -> Any | None:
        """Map a symbolic path to a resource inside ``scope``, or None if it is not there."""
        ...

    def to_range(self, resource: Any, line: int) -> TextRange | None:
        """Range for a 1-based ``line`` inside ``resource``."""
        ...


def default_range(line: int) -> TextRange | None:
    """Zero-width range at ``line``; None when the line is unknown."""
    if line < 1:
        return None
    return TextRange.line(line)


class ResolverRegistry:
    """Registry of resolvers keyed by lower-cased language tag.

    Populated once at run start and read-only afterwards, so one registry can
    serve several runs over different scopes.
    """

    def __init__(self, resolvers: Iterable[ResourceResolver] = ()) -> None:
        self._resolvers: dict[str, ResourceResolver] = {}
        for resolver in resolvers:
            self.register(resolver)

    def register(self, resolver: ResourceResolver) -> None:
        """Register a resolver.

        Raises:
            ConfigError: If the language already has a resolver.
        """
        key = resolver.language.lower()
        if key in self._resolvers:
            raise ConfigError.duplicate_resolver(key)
        self._resolvers[key] = resolver

    def get(self, language: str) -> ResourceResolver | None:
        """Get resolver by language tag."""
        return self._resolvers.get(language.lower())

    def languages(self) -> list[str]:
        return sorted(self._resolvers)

    def __contains__(self, language: object) -> bool:
        return isinstance(language, str) and language.lower() in self._resolvers

    def __len__(self) -> int:
        return len(self._resolvers)

    def resolve(self, scope: Scope, source_ref: SourceRef) -> ResolvedLocation | None:
        """Resolve ``source_ref`` inside ``scope``.

        Returns None when no resolver handles the language, when the element is
        not part of the scope, or when the resolver fails.
        """
        resolver = self.get(source_ref.language)
        if resolver is None:
            logger.debug("resolver_missing", language=source_ref.language)
            return None

        try:
            resource = resolver.resolve(scope, source_ref.symbolic_path, source_ref.element)
            if resource is None:
                return None
            text_range = resolver.to_range(resource, source_ref.line)
        except Exception as e:  # noqa: BLE001
            logger.warning(
                "resolver_fault",
                language=source_ref.language,
                symbolic_path=source_ref.symbolic_path,
                element=source_ref.element,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        return ResolvedLocation(resource=resource, text_range=text_range)
