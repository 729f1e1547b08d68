from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in the host's local timezone, so month checks follow the local calendar."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """Clock pinned to a single instant. Naive datetimes are treated as UTC."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta


def window_start(clock: Clock, hours: int) -> datetime:
    return clock.now() - timedelta(hours=hours)
