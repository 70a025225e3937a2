"""
Structured logging utilities for typed_emitter.
"""

import json
import logging
import sys
from typing import Any, Dict, Hashable, Optional

LOGGER_NAMESPACE = "typed_emitter"

# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "asctime", "taskName",
})


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Event keys and callbacks are arbitrary objects, so values that JSON
    cannot encode are rendered with ``str``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if context:
            log_data["context"] = context

        return json.dumps(log_data, default=str)


class EmitterLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that stamps the emitter name onto every record.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def get_emitter_logger(name: str) -> EmitterLoggerAdapter:
    """
    Get a logger with emitter context automatically included.

    Args:
        name: Emitter name, used as the logger suffix and context value

    Returns:
        Logger adapter with emitter context
    """
    logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name.lower()}")
    return EmitterLoggerAdapter(logger, {"emitter": name})


_HANDLER_MARK = "_typed_emitter_handler"
_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.DEBUG,
    structured: bool = False,
    stream: Optional[Any] = None,
) -> logging.Handler:
    """
    Route registry records from the typed_emitter loggers to a stream.

    The library never calls this itself. Registries only log at DEBUG, so
    the default level shows them. A repeated call replaces the handler
    installed by the previous call and leaves application handlers alone.

    Args:
        level: Level for the typed_emitter logger (default: DEBUG)
        structured: Use JSON structured logging (default: False)
        stream: Output stream (default: sys.stdout)

    Returns:
        The installed handler
    """
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)
    for previous in [h for h in logger.handlers if getattr(h, _HANDLER_MARK, False)]:
        logger.removeHandler(previous)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredFormatter() if structured else logging.Formatter(_TEXT_FORMAT))
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)
    return handler


def log_registry_event(
    logger: logging.LoggerAdapter,
    level: int,
    message: str,
    event_key: Hashable,
    **kwargs: Any,
) -> None:
    """
    Log a registry operation with structured context.

    Args:
        logger: Emitter logger (see get_emitter_logger)
        level: Log level
        message: Log message
        event_key: Event key the operation applied to; None is a valid key
        **kwargs: Additional context fields
    """
    if not logger.isEnabledFor(level):
        return

    extra: Dict[str, Any] = {"event_key": event_key}
    extra.update(kwargs)

    logger.log(level, message, extra=extra)
