from datetime import datetime, timedelta

from domain.interfaces import Clock


class SystemClock(Clock):
    """Wall clock. Naive local time, matching the timestamps stored in the database."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock that only moves when told to. Used by the simulator and tests."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta) -> datetime:
        self.current = self.current + timedelta(**delta)
        return self.current
