"""Fake Time implementation for testing."""

from datetime import UTC, datetime

from ghi.core.time.abc import Time

DEFAULT_FAKE_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


class FakeTime(Time):
    """Fixed clock.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, now: datetime = DEFAULT_FAKE_NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now
