import json
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

from quartz_monitor.core.config import settings

_correlation: ContextVar[Dict[str, Any]] = ContextVar("correlation", default={})

# Attributes every LogRecord carries; anything else on a record came from `extra`
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
}


@contextmanager
def correlation(**ids: Any) -> Iterator[Dict[str, Any]]:
    """
    Attach ids to every record logged inside the block

    Scopes nest; the outer ids are restored on exit. Tasks started inside
    the block inherit the ids, since asyncio copies the context.
    """
    token = _correlation.set({**_correlation.get(), **ids})
    try:
        yield _correlation.get()
    finally:
        _correlation.reset(token)


def current_correlation() -> Dict[str, Any]:
    return dict(_correlation.get())


class LogContext:
    """
    Named logger whose records carry the active correlation ids
    """

    def __init__(self, logger_name: str | None = None):
        self.logger = logging.getLogger(logger_name)

    def log(
        self,
        level: int,
        message: str,
        extra: Dict[str, Any] | None = None,
        exc_info: bool = False,
    ) -> None:
        self.logger.log(
            level, message, extra={**_correlation.get(), **(extra or {})}, exc_info=exc_info
        )

    def debug(self, message: str, extra: Dict[str, Any] | None = None) -> None:
        self.log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Dict[str, Any] | None = None) -> None:
        self.log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Dict[str, Any] | None = None) -> None:
        self.log(logging.WARNING, message, extra)

    def error(
        self, message: str, extra: Dict[str, Any] | None = None, exc_info: bool = False
    ) -> None:
        self.log(logging.ERROR, message, extra, exc_info)

    def exception(self, message: str, extra: Dict[str, Any] | None = None) -> None:
        """Error record with the active exception attached"""
        self.log(logging.ERROR, message, extra, exc_info=True)


class CustomFormatter(logging.Formatter):
    """
    One JSON object per record

    Fixed keys come first (timestamp, level, logger, message, path, service),
    followed by whatever the caller passed as ``extra``. A record logged with
    ``exc_info`` gains an ``error`` object with the exception type and text.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "path": f"{record.pathname}:{record.lineno}",
            "service": settings.PROJECT_NAME,
        }
        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )

        if isinstance(record.exc_info, tuple) and record.exc_info[1] is not None:
            exc_type, exc_value = record.exc_info[:2]
            entry["error"] = {"type": exc_type.__name__, "message": str(exc_value)}

        return json.dumps(entry, default=str)


class PerformanceLogger:
    """
    Context manager that logs how long its block took

    Success is logged at debug level, failure at error level with the
    exception attached. The exception is never suppressed.
    """

    def __init__(self, logger: LogContext, operation_name: str):
        self.logger = logger
        self.operation_name = operation_name
        self._started = 0.0

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._started) * 1000

    def __enter__(self) -> "PerformanceLogger":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        duration_ms = self.elapsed_ms
        if exc_type is None:
            self.logger.debug(
                f"Operation {self.operation_name} completed in {duration_ms:.2f}ms",
                extra={"duration_ms": duration_ms},
            )
        else:
            self.logger.error(
                f"Operation {self.operation_name} failed after {duration_ms:.2f}ms",
                extra={"duration_ms": duration_ms},
                exc_info=True,
            )


def setup_logging() -> None:
    """
    Route every record to ``LOG_FILE`` as JSON; warnings also go to stderr
    when ``LOG_TO_CONSOLE`` is set
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL)
    root_logger.handlers = []

    formatter = CustomFormatter()

    file_handler = logging.FileHandler(settings.LOG_FILE)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    if settings.LOG_TO_CONSOLE:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.WARNING)
        root_logger.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
