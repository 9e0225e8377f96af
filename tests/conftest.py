from datetime import UTC, datetime, timedelta

import pytest

from fxconvert.domain.models import RateTable

START_TIME = datetime(2026, 10, 17, 9, 0, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime = START_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_table():
    """Factory for rate tables with sensible defaults"""
    def _make_table(base="USD", rates=None, source="TestProvider", fetched_at=START_TIME):
        return RateTable(
            base_currency=base,
            rates=rates if rates is not None else {"EUR": 0.92, "GBP": 0.79, "JPY": 149.5},
            fetched_at=fetched_at,
            source=source,
        )
    return _make_table
