"""Logging for the storefront.

The environment comes from ``PROTEAN_ENV``, the same variable that selects the
Protean config overlay, so a production process gets the production overlay,
INFO logs and JSON lines together. ``LOG_LEVEL`` and ``LOG_DIR`` override the
derived level and the log directory.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

DEFAULT_ENVIRONMENT = "development"

# Environments whose output is shipped to a log pipeline rather than read by a person
MACHINE_READABLE = frozenset({"production", "staging"})

LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5

# Third-party loggers that are too chatty below WARNING
_QUIET = ("urllib3", "asyncio", "protean", "httpx")


def current_environment() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or DEFAULT_ENVIRONMENT).lower()


def level_for(env: str) -> str:
    return os.getenv("LOG_LEVEL") or LEVELS.get(env, "INFO")


def renderer_for(env: str):
    if env in MACHINE_READABLE:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def processors_for(env: str) -> list:
    """The structlog chain: context and call-site enrichment, then the environment's renderer."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        renderer_for(env),
    ]


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(env: str) -> None:
    """Route the root logger to stdout, ``b3store.log`` and ``b3store_error.log``."""
    level = level_for(env)
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating(log_dir / "b3store.log", level),
        _rotating(log_dir / "b3store_error.log", logging.ERROR),
    ]

    for name in _QUIET:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_structlog(env: str) -> None:
    structlog.configure(
        processors=processors_for(env),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(env: str | None = None) -> str:
    """Configure stdlib and structlog for ``env`` (default: the current environment).

    Returns:
        The environment that was applied.
    """
    env = (env or current_environment()).lower()
    setup_stdlib_logging(env)
    setup_structlog(env)
    return env


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values to every log line emitted from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
