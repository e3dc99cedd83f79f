from .system_clock import SystemClock, FixedClock

__all__ = ["SystemClock", "FixedClock"]
