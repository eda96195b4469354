"""Time sources for commit timestamps."""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything that can produce the current time."""
    
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock, in local time with tzinfo attached."""
    
    def now(self) -> datetime:
        return datetime.now().astimezone()
    
    def __repr__(self) -> str:
        return "SystemClock()"


class LogicalClock:
    """
    Deterministic clock that moves forward a fixed step on every reading.
    
    Two readings never compare equal, which makes merge order fully
    predictable in tests and replay scripts. A naive start is taken as UTC
    so readings can be compared with the system clock's.
    
    Attributes:
        start: Time of the first reading.
        step: Distance between consecutive readings.
    """
    
    def __init__(
        self,
        start: datetime | None = None,
        step: timedelta = timedelta(seconds=1),
    ):
        if step <= timedelta(0):
            raise ValueError("step must be positive")
        start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        self.start = start
        self.step = step
        self._ticks = 0
    
    def now(self) -> datetime:
        value = self.start + self.step * self._ticks
        self._ticks += 1
        return value
    
    def __repr__(self) -> str:
        return f"LogicalClock(start={self.start.isoformat()}, step={self.step})"
