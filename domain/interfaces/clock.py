from typing_extensions import Protocol
from datetime import datetime


class Clock(Protocol):
    """Source of "now" for due dates, payments and overdue checks."""

    def now(self) -> datetime:
        ...
