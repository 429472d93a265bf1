"""
Shared fixtures for the business day calculator tests.
"""

from datetime import date
from typing import Dict, Iterable, Optional, Set

import pytest

from business_day_calculator.core.calculator import BusinessDayCalculator
from business_day_calculator.core.exceptions import HolidayFetchError
from business_day_calculator.core.holiday_provider import HolidayCache, HolidayProvider
from business_day_calculator.core.holiday_sources import HolidaySource


class StubHolidaySource(HolidaySource):
    """In-memory holiday source that counts fetches per year."""

    name = "stub"

    def __init__(
        self,
        holidays: Optional[Dict[int, Iterable[date]]] = None,
        failing_years: Iterable[int] = (),
    ):
        self.holidays = {year: set(dates) for year, dates in (holidays or {}).items()}
        self.failing_years = set(failing_years)
        self.calls: Dict[int, int] = {}
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def fetch_year(self, year: int) -> Set[date]:
        self.calls[year] = self.calls.get(year, 0) + 1
        if year in self.failing_years:
            raise HolidayFetchError(year, "network unreachable")
        return set(self.holidays.get(year, set()))

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


@pytest.fixture
def stub_source():
    """Stub source with Christmas 2025 and New Year 2026."""
    return StubHolidaySource(
        {
            2025: [date(2025, 11, 20), date(2025, 12, 25)],
            2026: [date(2026, 1, 1)],
        }
    )


@pytest.fixture
def provider(stub_source):
    """HolidayProvider backed by the stub source."""
    return HolidayProvider(stub_source, cache=HolidayCache())


@pytest.fixture
def calculator(provider):
    """BusinessDayCalculator backed by the stub source."""
    return BusinessDayCalculator(provider)


@pytest.fixture
def empty_calculator():
    """BusinessDayCalculator that sees no holidays at all."""
    return BusinessDayCalculator(HolidayProvider(StubHolidaySource()))
