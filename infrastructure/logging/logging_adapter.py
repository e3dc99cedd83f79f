"""
Logging adapter that implements LoggingPort protocol.

Services bind plan/customer context once and log snake_case events through it;
structlog renders them as JSON lines.
"""
from typing import Any
from domain.interfaces import LoggingPort, BoundLogger
from infrastructure.logging.structlog_logs import logger as structlog_logger


class StructlogBoundLogger:
    """Wrapper for a structlog bound logger that implements BoundLogger."""

    def __init__(self, bound_logger):
        self._logger = bound_logger

    def info(self, event: str, **kwargs: Any) -> None:
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._logger.warning(event, **kwargs)

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._logger.error(event, exc_info=exc_info, **kwargs)


class LoggingAdapter(LoggingPort):
    """
    Adapter that implements LoggingPort for structured logging.

    Every call to bind() starts from the module logger, so context never
    leaks between plans handled in the same process.
    """

    def __init__(self, **base_context: Any):
        self._base = structlog_logger.bind(**base_context) if base_context else structlog_logger

    def bind(self, **kwargs: Any) -> BoundLogger:
        return StructlogBoundLogger(self._base.bind(**kwargs))
