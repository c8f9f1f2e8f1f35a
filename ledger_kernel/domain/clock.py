"""
Time sources for ledger event and referral timestamps.

Services take a Clock rather than calling ``datetime.now`` so tests can
pin timestamps and assert on ordering.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta

LEDGER_EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Current time, always timezone-aware UTC."""


class SystemClock(Clock):

    def now(self) -> datetime:
        return datetime.now(UTC)


class DeterministicClock(Clock):
    """Frozen at ``start`` (LEDGER_EPOCH by default) until moved by hand."""

    def __init__(self, start: datetime | None = None):
        self._current = start or LEDGER_EPOCH

    def now(self) -> datetime:
        return self._current

    def set_time(self, moment: datetime) -> None:
        self._current = moment

    def advance(self, seconds: int = 1) -> None:
        self._current += timedelta(seconds=seconds)
