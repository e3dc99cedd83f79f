from typing_extensions import Protocol
from typing import Any


class BoundLogger(Protocol):
    """Protocol for a logger carrying bound context (plan_id, customer_id, step)."""

    def info(self, event: str, **kwargs: Any) -> None:
        """
        Log an info message.

        Args:
            event: snake_case event name, e.g. "installment_paid"
            **kwargs: Additional context fields
        """
        ...

    def warning(self, event: str, **kwargs: Any) -> None:
        """Log a warning message."""
        ...

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        """
        Log an error message.

        Args:
            event: snake_case event name
            exc_info: Whether to include exception info
            **kwargs: Additional context fields
        """
        ...


class LoggingPort(Protocol):
    """Protocol for logging operations."""

    def bind(self, **kwargs: Any) -> BoundLogger:
        """
        Create a bound logger with context.

        Args:
            **kwargs: Context fields to bind to all log messages

        Returns:
            A bound logger with the specified context
        """
        ...


class NoOpLogger:
    """Used by services built without a logging port (tests, the simulator)."""

    def info(self, event: str, **kwargs: Any) -> None:
        pass

    def warning(self, event: str, **kwargs: Any) -> None:
        pass

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        pass


def bind_logger(logging_port, **kwargs: Any) -> BoundLogger:
    if logging_port is None:
        return NoOpLogger()
    return logging_port.bind(**kwargs)
