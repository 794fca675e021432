"""Logging configuration for ddg-web-search with structlog.

structlog events are handed to the standard library, so package records and
library records (httpx, uvicorn, mcp) share the same handlers: a console
renderer on stderr and, when a log file is configured, JSON lines in that file.
Nothing is written to stdout, which the stdio MCP transport owns.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Any

import structlog

# Chatty third-party loggers, kept at WARNING unless debugging
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "mcp", "asyncio")


def setup_logging(
    level: str | None = "INFO",
    log_file: Path | None = None,
    show_timestamps: bool = True,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Log level name, or None for INFO
        log_file: Also write JSON lines to this file
        show_timestamps: Prefix records with a wall-clock time
    """
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]
    if show_timestamps:
        shared.append(structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False))

    # force=True closes the handlers of any previous configuration
    logging.basicConfig(
        level=log_level,
        handlers=_handlers(log_level, log_file, shared),
        force=True,
    )
    library_level = log_level if log_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    structlog.configure(
        processors=[
            *shared,
            structlog.dev.set_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _handlers(log_level: int, log_file: Path | None, shared: list[Any]) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(log_level)
    console.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            ],
        )
    )
    if not log_file:
        return [console]

    log_file.parent.mkdir(parents=True, exist_ok=True)
    json_file = logging.FileHandler(log_file, encoding="utf-8")
    json_file.setLevel(log_level)
    json_file.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    return [console, json_file]


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger for a module.

    Args:
        name: Module name (e.g., "ddg_web_search.searcher")

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class AsyncTimer:
    """Log how long an awaited operation took.

    Usage:
        async with AsyncTimer("search", logger, query=query) as timer:
            results = await run_search()
        timer.elapsed  # seconds

    The completion record carries ``outcome="error"`` when the block raised;
    the exception itself is left to propagate.
    """

    def __init__(self, operation: str, logger: Any | None = None, **fields: Any):
        self.operation = operation
        self.logger = logger or get_logger("ddg_web_search.timer")
        self.fields = fields
        self.start_time: float = 0
        self.elapsed: float = 0

    async def __aenter__(self) -> "AsyncTimer":
        self.start_time = time.perf_counter()
        self.logger.debug("Operation started", operation=self.operation, **self.fields)
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        self.logger.debug(
            "Operation finished",
            operation=self.operation,
            outcome="ok" if exc_type is None else "error",
            elapsed_ms=round(self.elapsed * 1000),
            **self.fields,
        )
