"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (JQAGATE__SECTION__KEY)
3. Repo YAML (.jqagate/config.yaml)
4. Global YAML (~/.config/jqagate/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    JQAGATE__<SECTION>__<KEY>=<VALUE>

Examples:
    JQAGATE__LOGGING__LEVEL=DEBUG
    JQAGATE__REPORT__PATH=build/jqassistant/jqassistant-report.xml
    JQAGATE__ISSUES__MESSAGE_STYLE=inline
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MessageStyleName = Literal["lines", "inline"]

DEFAULT_REPORT_PATH = "target/jqassistant/jqassistant-report.xml"
DEFAULT_REPOSITORY_KEY = "jqassistant"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        JQAGATE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO adds one event per run, DEBUG logs every "
        "dropped row and resolver miss.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReportConfig(BaseModel):
    """Analysis report location.

    Env vars:
        JQAGATE__REPORT__PATH: Report file, relative to the project root or absolute
    """

    path: str = Field(
        default=DEFAULT_REPORT_PATH,
        description="XML report written by the analysis run.",
    )


class IssuesConfig(BaseModel):
    """Issue rendering configuration.

    Env vars:
        JQAGATE__ISSUES__MESSAGE_STYLE: lines | inline
        JQAGATE__ISSUES__REPOSITORY_KEY: Rule repository key of emitted issues
        JQAGATE__ISSUES__PROJECT_FILE: File that carries project-level issues on export
    """

    message_style: MessageStyleName = Field(
        default="lines",
        description="'lines' puts each name=value pair on its own line, "
        "'inline' appends them as a bracketed, comma-separated list.",
    )
    repository_key: str = Field(
        default=DEFAULT_REPOSITORY_KEY,
        description="Rule repository key used for both rule keys and as the engine id "
        "of the generic issue export. Set 'jQAssistant' to report against the rule "
        "repository of the SonarQube jQAssistant plugin.",
    )
    project_file: str | None = Field(
        default=None,
        description="Relative path used for project-level issues in the generic "
        "issue export. Defaults to the report path.",
    )

    @field_validator("repository_key")
    @classmethod
    def validate_repository_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Repository key must not be empty")
        return v.strip()


class ResolversConfig(BaseModel):
    """Source location resolvers.

    Env vars:
        JQAGATE__RESOLVERS__JAVA_SOURCE_DIRS: JSON list of source roots
        JQAGATE__RESOLVERS__FILE_LANGUAGES: JSON list of plain-file language tags
    """

    java_source_dirs: list[str] = Field(
        default_factory=lambda: ["src/main/java", "src/test/java"],
        description="Java source roots, relative to the scope root.",
    )
    file_languages: list[str] = Field(
        default_factory=lambda: ["xml", "yaml", "json", "properties"],
        description="Language tags whose symbolic path is a file path relative to the scope root.",
    )

    @field_validator("java_source_dirs")
    @classmethod
    def validate_source_dirs(cls, v: list[str]) -> list[str]:
        for entry in v:
            if Path(entry).is_absolute():
                raise ValueError(f"Source directory must be relative to the scope root: {entry}")
        return v


class JqaGateConfig(BaseModel):
    """Root configuration for jqagate.

    All settings can be configured via:
    1. Environment variables: JQAGATE__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    issues: IssuesConfig = Field(default_factory=IssuesConfig)
    resolvers: ResolversConfig = Field(default_factory=ResolversConfig)
