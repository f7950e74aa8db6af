"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from flixor_core.config.settings import Settings

CACHE_EVENT_PREFIX = "cache_"

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CacheEventFilter:
    """structlog processor dropping ``cache_*`` events below a threshold.

    Hit/miss/set events are emitted at debug for every lookup; this lets
    HTTP and service debugging run without them.
    """

    def __init__(self, min_level: int) -> None:
        self.min_level = min_level

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event = event_dict.get("event")
        if isinstance(event, str) and event.startswith(CACHE_EVENT_PREFIX):
            # logger.exception() logs at error
            name = "ERROR" if method_name == "exception" else method_name
            if _resolve_level(name) < self.min_level:
                raise structlog.DropEvent
        return event_dict


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib logging through one console or JSON renderer.

    ``settings.cache_log_level`` gates cache events separately from
    ``log_level``; loggers named in ``settings.log_quiet_loggers`` are held
    at WARNING or above.
    """
    level = _resolve_level(settings.log_level)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[
            CacheEventFilter(_resolve_level(settings.cache_log_level)),
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(settings.log_format),
        ],
        foreign_pre_chain=pre_chain,
    )
    _install_root_handler(formatter, level)
    _quiet(settings.log_quiet_loggers, level)


def bind_cache_context(cache_dir: str) -> None:
    """Bind the cache directory to all subsequent log entries."""
    bind_contextvars(cache_dir=cache_dir)


def clear_cache_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _install_root_handler(formatter: logging.Formatter, level: int) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(level)


def _quiet(names: Iterable[str], level: int) -> None:
    for name in names:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def _resolve_level(level_name: str) -> int:
    """Convert a level name string to a logging level int."""
    return _LEVELS.get(level_name.upper(), logging.INFO)
