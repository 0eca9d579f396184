"""Logging for the storefront.

Stdlib handlers (console plus rotating files) carry every record; structlog
formats them. Development gets a coloured console with rich tracebacks,
production and staging get one JSON object per line.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE_NAME = "storefront.log"
ERROR_LOG_FILE_NAME = "storefront_error.log"

LOG_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVIRONMENTS = ("production", "staging")
_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def get_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, otherwise the default for the current environment."""
    return os.getenv("LOG_LEVEL", LOG_LEVELS.get(get_environment(), "INFO"))


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: Path | str = "logs") -> None:
    log_level = get_log_level()
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers = [
        console,
        _rotating_handler(log_dir / LOG_FILE_NAME, log_level),
        _rotating_handler(log_dir / ERROR_LOG_FILE_NAME, logging.ERROR),
    ]

    # The Stripe SDK logs every HTTP round trip
    for noisy in ("urllib3", "stripe"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def build_processors(env: str) -> list:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.contextvars.merge_contextvars,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if env in _JSON_ENVIRONMENTS:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
            )
        )
    return processors


def configure_logging(log_dir: Path | str = "logs") -> None:
    """Set up stdlib handlers and structlog for the current environment."""
    setup_stdlib_logging(log_dir)
    structlog.configure(
        processors=build_processors(get_environment()),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_checkout_context(**kwargs: Any) -> None:
    """Attach request-scoped keys (``checkout_id``, ``user_email``...) to every log line."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_checkout_context() -> None:
    structlog.contextvars.clear_contextvars()
