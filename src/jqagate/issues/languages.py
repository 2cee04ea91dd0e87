"""Built-in resolvers for the languages the analyzer reports on."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from jqagate.config.models import ResolversConfig
from jqagate.issues.models import Scope, TextRange
from jqagate.issues.resolvers import ResolverRegistry, ResourceResolver, default_range

# Java elements that have no single source file to point at
_JAVA_UNLOCATABLE = frozenset({"artifact", "package", "directory"})


def java_source_path(symbolic_path: str) -> str | None:
    """Source file path for a Java class reference, relative to a source root.

    Examples:
        com/acme/Bar.class        -> com/acme/Bar.java
        com/acme/Bar$Inner.class  -> com/acme/Bar.java
        com/acme/Bar.java         -> com/acme/Bar.java
        com.acme.Bar              -> com/acme/Bar.java
    """
    path = symbolic_path.strip().replace("\\", "/").lstrip("/")
    if not path:
        return None
    if path.endswith(".class"):
        path = path[: -len(".class")]
    elif path.endswith(".java"):
        return path
    elif "/" not in path:
        path = path.replace(".", "/")
    elif "." in path.rsplit("/", 1)[-1]:
        # Some other resource, e.g. META-INF/beans.xml
        return None
    path = path.split("$", 1)[0]
    if not path or path.endswith("/"):
        return None
    return f"{path}.java"


def _inside(root: Path, relative: str) -> Path | None:
    """``root / relative`` if it stays below ``root``, else None."""
    rel = PurePosixPath(relative)
    if rel.is_absolute() or ".." in rel.parts:
        return None
    return root.joinpath(*rel.parts)


@dataclass(frozen=True)
class JavaResourceResolver:
    """Locates Java types in the source roots of the scope."""

    source_dirs: tuple[str, ...] = ("src/main/java", "src/test/java")

    @property
    def language(self) -> str:
        return "Java"

    def resolve(self, scope: Scope, symbolic_path: str, element: str) -> Path | None:
        if element.strip().lower() in _JAVA_UNLOCATABLE:
            return None
        relative = java_source_path(symbolic_path)
        if relative is None:
            return None
        for source_dir in self.source_dirs:
            base = _inside(scope.root_path, source_dir)
            if base is None:
                continue
            candidate = _inside(base, relative)
            if candidate is not None and candidate.is_file():
                return candidate
        return None

    def to_range(self, resource: Path, line: int) -> TextRange | None:  # noqa: ARG002
        return default_range(line)


@dataclass(frozen=True)
class FileResourceResolver:
    """Resolves symbolic paths that are plain file paths relative to the scope root."""

    file_language: str

    @property
    def language(self) -> str:
        return self.file_language

    def resolve(self, scope: Scope, symbolic_path: str, element: str) -> Path | None:  # noqa: ARG002
        # Reports write file paths from the artifact root, e.g. /META-INF/beans.xml
        relative = symbolic_path.strip().replace("\\", "/").lstrip("/")
        if not relative:
            return None
        candidate = _inside(scope.root_path, relative)
        if candidate is None or not candidate.is_file():
            return None
        return candidate

    def to_range(self, resource: Path, line: int) -> TextRange | None:  # noqa: ARG002
        return default_range(line)


def builtin_resolvers(config: ResolversConfig | None = None) -> list[ResourceResolver]:
    """Resolvers for Java plus one plain-file resolver per configured language."""
    config = config or ResolversConfig()
    resolvers: list[ResourceResolver] = [JavaResourceResolver(tuple(config.java_source_dirs))]
    seen = {"java"}
    for language in config.file_languages:
        if language.lower() in seen:
            continue
        seen.add(language.lower())
        resolvers.append(FileResourceResolver(language))
    return resolvers


def create_registry(
    config: ResolversConfig | None = None,
    extra: Iterable[ResourceResolver] = (),
) -> ResolverRegistry:
    """Registry with the built-in resolvers and any ``extra`` ones."""
    registry = ResolverRegistry(builtin_resolvers(config))
    for resolver in extra:
        registry.register(resolver)
    return registry
