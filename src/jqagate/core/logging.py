"""Structured logging for analysis runs.

Every event emitted inside ``run_context`` carries the run ID and the scope
of the run, so the output of several module runs over one report can be told
apart. Outputs (console or JSON, stderr/stdout/file) come from LoggingConfig.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from jqagate.config.models import LoggingConfig, LogOutputConfig

_CONSOLE_DESTINATIONS = ("stderr", "stdout")


def get_run_id() -> str | None:
    """Run ID bound by the enclosing ``run_context``, if any."""
    value = structlog.contextvars.get_contextvars().get("run_id")
    return str(value) if value is not None else None


@contextmanager
def run_context(scope: str, run_id: str | None = None) -> Iterator[str]:
    """Bind a run ID and scope to every log event inside the block."""
    rid = run_id or uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(run_id=rid, scope=scope):
        yield rid


def _level_of(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _output_level(output: LogOutputConfig, config: LoggingConfig, verbose: bool) -> int:
    # -v opens the console to everything; files keep their configured level
    if verbose and output.destination in _CONSOLE_DESTINATIONS:
        return logging.DEBUG
    return _level_of(output.level or config.level)


def _create_handler(destination: str) -> logging.Handler:
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _create_formatter(
    output: LogOutputConfig, shared_processors: list[structlog.types.Processor]
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        stream = sys.stdout if output.destination == "stdout" else sys.stderr
        renderer = structlog.dev.ConsoleRenderer(
            colors=output.destination in _CONSOLE_DESTINATIONS and stream.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors)


def configure_logging(config: LoggingConfig | None = None, *, verbose: bool = False) -> None:
    """Route structlog through stdlib handlers built from the config.

    Safe to call more than once: previous handlers are closed and replaced.

    Args:
        config: Logging configuration (default: console on stderr)
        verbose: Log everything to console outputs
    """
    from jqagate.config.models import LoggingConfig

    config = config or LoggingConfig()
    levels = [_output_level(output, config, verbose) for output in config.outputs]
    root_level = min([_level_of(config.level), *levels])

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]
    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigured per command, so loggers must not be cached
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(root_level)

    for output, level in zip(config.outputs, levels, strict=True):
        handler = _create_handler(output.destination)
        handler.setLevel(level)
        handler.setFormatter(_create_formatter(output, shared_processors))
        root_logger.addHandler(handler)
