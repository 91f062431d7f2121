# ============================================================================
# src/contract_extraction/utils/logging.py
# ============================================================================
"""
Logging for the contract extraction pipeline.

Pipeline code logs through module loggers and tags records with the
document being processed via `extra`:

    logger.warning("Skipping field", extra={"field": "rated_capacity_kw"})

Recognized tags: document, document_type, field. Both output formats show
whichever tags a record carries.
"""

import logging
import sys
from typing import Optional
from datetime import datetime, timezone
from functools import wraps
import inspect
import json
import time

from ..config.logging_config import LoggingSettings, logging_settings


CONTEXT_KEYS = ("document", "document_type", "field")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s%(context)s: %(message)s"


def _record_context(record: logging.LogRecord) -> dict:
    return {key: getattr(record, key) for key in CONTEXT_KEYS if getattr(record, key, None)}


class ContextFilter(logging.Filter):
    """Renders a record's document tags as ` [key=value ...]` for the text format."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _record_context(record)
        record.context = (
            " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
            if context else ""
        )
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line; document tags are grouped under "context"."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = _record_context(record)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure root logging from LoggingSettings (LOG_LEVEL, LOG_JSON, LOG_FILE).

    Args:
        settings: Defaults to the module-level logging_settings
    """
    settings = settings or logging_settings
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.LOG_JSON:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(ContextFilter())

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator to log operation duration at DEBUG level.

    Works for plain functions and coroutine functions. Durations only go to
    the log, never into returned results.

    Args:
        logger: Logger instance
        operation: Operation name
    """
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    duration = time.perf_counter() - start
                    logger.error(f"{operation} failed after {duration:.3f}s: {e}")
                    raise
                logger.debug(f"{operation} completed in {time.perf_counter() - start:.3f}s")
                return result
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                logger.error(f"{operation} failed after {duration:.3f}s: {e}")
                raise
            logger.debug(f"{operation} completed in {time.perf_counter() - start:.3f}s")
            return result

        return wrapper
    return decorator
