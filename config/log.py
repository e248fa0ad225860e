import logging
import logging.config

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import StackInfoRenderer, TimeStamper, format_exc_info
from structlog.stdlib import add_log_level

from config.settings import get_settings

# Shared processors
shared_processors = [
    merge_contextvars,
    add_log_level,
    TimeStamper(fmt="iso", utc=True),
    StackInfoRenderer(),
    format_exc_info,
]

CONSOLE_RENDERER = structlog.dev.ConsoleRenderer(colors=True, pad_event=0, pad_level=False)


def build_logging_config(level: str = "INFO", *, json: bool = False) -> dict:
    """dictConfig payload routing stdlib records through structlog formatters."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "()": "structlog.stdlib.ProcessorFormatter",
                "processor": CONSOLE_RENDERER,
                "foreign_pre_chain": shared_processors,
            },
            "json": {
                "()": "structlog.stdlib.ProcessorFormatter",
                "processor": structlog.processors.JSONRenderer(),
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json else "plain",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            "apps": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            "httpx": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }


def configure_logging(level: str | None = None, *, json: bool | None = None) -> None:
    """
    Install structlog + stdlib logging configuration.

    Falls back to the provider settings for anything not passed explicitly.
    """
    if level is None or json is None:
        settings = get_settings()
        level = level or settings.log_level
        json = settings.log_json if json is None else json

    level = level.upper()
    logging.config.dictConfig(build_logging_config(level, json=json))

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
