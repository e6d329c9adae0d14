"""Structured logging for snip.

Every event goes through structlog and is rendered by stdlib handlers, one
per configured output. Each CLI invocation binds a short run id that is
attached to every event it emits, so a shared log file can be split back
into invocations.

Console handlers go quiet while a spinner owns the terminal (see
snip.core.progress); file handlers keep everything.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from snip.config.models import LoggingConfig, LogOutputConfig

_RUN_ID_KEY = "run_id"

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]


def set_run_id(run_id: str | None = None) -> str:
    """Bind the run id for this invocation, generating one when omitted."""
    rid = run_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(**{_RUN_ID_KEY: rid})
    return rid


def get_run_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(_RUN_ID_KEY)


def clear_run_id() -> None:
    structlog.contextvars.unbind_contextvars(_RUN_ID_KEY)


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


class _SpinnerAwareFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from snip.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _handler_for(output: LogOutputConfig, default_level: int) -> logging.Handler:
    handler: logging.Handler
    if output.destination in ("stderr", "stdout"):
        stream = sys.stderr if output.destination == "stderr" else sys.stdout
        handler = logging.StreamHandler(stream)
        handler.addFilter(_SpinnerAwareFilter())
        colors = stream.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        colors = False

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)
    )
    handler.setLevel(_level(output.level) if output.level else default_level)
    return handler


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Install structlog and one stdlib handler per output.

    Without config a single stderr output is built from json_format and
    level. Safe to call repeatedly; previous root handlers are replaced.
    """
    from snip.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level.upper(),  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    root_level = _level(config.level)

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    for output in config.outputs:
        root.addHandler(_handler_for(output, root_level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    return logger.bind(logger=name) if name else logger  # type: ignore[no-any-return]
