"""Logging configuration for the storefront.

Standard library handlers carry the output and structlog renders it. Every
record passes through ``redact_checkout_secrets``, so e-Money credentials and
mail transport secrets never reach a log file.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

JSON_ENVIRONMENTS = ("production", "staging")

QUIET_LOGGERS = ("protean", "httpx", "httpcore", "asyncio", "uvicorn.access")

REDACTED_KEYS = frozenset(
    {"e_money_number", "e_money_pin", "password", "smtp_password", "api_key", "authorization"}
)

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def get_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, otherwise the default level of the environment."""
    return os.getenv("LOG_LEVEL", LEVELS_BY_ENVIRONMENT.get(get_environment(), "INFO"))


def redact_checkout_secrets(logger, method_name: str, event_dict: dict) -> dict:
    """structlog processor masking payment credentials and transport secrets."""
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: Path | None = None) -> None:
    """Route the root logger to stdout, ``storefront.log`` and ``storefront_error.log``."""
    level = get_log_level()

    log_dir = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [
        console,
        _rotating_handler(log_dir / "storefront.log", level),
        _rotating_handler(log_dir / "storefront_error.log", logging.ERROR),
    ]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderers(env: str) -> list:
    if env in JSON_ENVIRONMENTS:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    # Locals are left out of tracebacks: checkout frames hold payment details.
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
        )
    ]


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        redact_checkout_secrets,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        *_renderers(get_environment()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: Path | None = None) -> None:
    setup_stdlib_logging(log_dir)
    setup_structlog()


def bind_checkout_context(**kwargs: Any) -> None:
    """Attach key/values to every log line emitted in the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_checkout_context() -> None:
    structlog.contextvars.clear_contextvars()
