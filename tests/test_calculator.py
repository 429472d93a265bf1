"""
Tests for the business day calculator.
"""

import logging
from datetime import date, timedelta

import pytest

from business_day_calculator.core.calculator import BusinessDayCalculator, create_calculator
from business_day_calculator.core.exceptions import InternalError, ValidationError
from business_day_calculator.core.holiday_provider import HolidayProvider
from business_day_calculator.core.holiday_sources import LibraryHolidaySource
from business_day_calculator.data.schemas import BusinessDayRequest, Config, YearSelection

from conftest import StubHolidaySource


def count_weekdays(start: date, end: date) -> int:
    """Count Monday-Friday dates between start and end inclusive."""
    total = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            total += 1
        current += timedelta(days=1)
    return total


class TestValidation:
    """Input validation happens before any holiday lookup."""

    @pytest.mark.parametrize("days", [0, -3])
    def test_non_positive_business_days(self, calculator, stub_source, days):
        with pytest.raises(ValidationError, match="positive integer"):
            calculator.calculate_end_date("2025-11-17", days)
        assert stub_source.total_calls == 0

    @pytest.mark.parametrize("days", [2.0, 1.5, "3", True, None])
    def test_non_integer_business_days(self, calculator, stub_source, days):
        with pytest.raises(ValidationError):
            calculator.calculate_end_date("2025-11-17", days)
        assert stub_source.total_calls == 0

    @pytest.mark.parametrize(
        "start", ["17-11-2025", "2025-1-05", "2025/11/17", " 2025-11-17", "2025-02-30", "", None]
    )
    def test_invalid_start_date(self, calculator, stub_source, start):
        with pytest.raises(ValidationError):
            calculator.calculate_end_date(start, 5)
        assert stub_source.total_calls == 0

    def test_validation_error_is_value_error(self, calculator):
        """Callers that catch ValueError also see validation failures."""
        with pytest.raises(ValueError):
            calculator.calculate_end_date("17-11-2025", 1)

    def test_weekend_covering_whole_week_rejected(self, provider):
        with pytest.raises(ValueError, match="whole week"):
            BusinessDayCalculator(provider, weekend_days=range(7))


class TestBusinessDayWalk:
    """Tests for the forward walk."""

    def test_one_day_from_business_day_returns_start(self, calculator):
        assert calculator.calculate_end_date("2025-11-17", 1) == date(2025, 11, 17)

    def test_friday_counts_itself(self, calculator):
        assert calculator.calculate_end_date("2025-11-21", 1) == date(2025, 11, 21)

    def test_friday_skips_weekend(self, calculator):
        assert calculator.calculate_end_date("2025-11-21", 2) == date(2025, 11, 24)

    def test_saturday_start_is_not_counted(self, calculator):
        assert calculator.calculate_end_date("2025-11-22", 1) == date(2025, 11, 24)

    def test_skips_christmas(self, calculator):
        """Dec 24 counts, Dec 25 is a holiday, Dec 26 is the second business day."""
        request = BusinessDayRequest(start_date=date(2025, 12, 24), business_days=2)
        result = calculator.calculate(request)

        assert result.end_date == date(2025, 12, 26)
        assert result.holidays_skipped == [date(2025, 12, 25)]
        assert result.warnings == []

    def test_holiday_start_is_not_counted(self, calculator):
        assert calculator.calculate_end_date("2025-12-25", 1) == date(2025, 12, 26)

    def test_midweek_holiday(self, calculator):
        # Nov 19 (Wed) counts, Nov 20 (Thu) is a holiday
        assert calculator.calculate_end_date("2025-11-19", 2) == date(2025, 11, 21)

    def test_crosses_year_boundary_with_next_year_holidays(self, calculator):
        # Dec 31 counts, Jan 1 is a holiday, Jan 2 (Fri) is the second day
        assert calculator.calculate_end_date("2025-12-31", 2) == date(2026, 1, 2)

    def test_sunday_only_weekend(self, provider):
        calculator = BusinessDayCalculator(provider, weekend_days={6})
        assert calculator.calculate_end_date("2025-11-21", 2) == date(2025, 11, 22)

    def test_result_metadata(self, calculator):
        request = BusinessDayRequest(start_date=date(2025, 11, 17), business_days=10)
        result = calculator.calculate(request)

        assert result.start_date == date(2025, 11, 17)
        assert result.business_days == 10
        assert result.years_considered == [2025]
        assert result.to_payload() == {
            "startDate": "2025-11-17",
            "businessDays": 10,
            "endDate": result.end_date.isoformat(),
        }

    def test_overflow_raises_internal_error(self, calculator):
        with pytest.raises(InternalError):
            calculator.calculate_end_date("9999-12-30", 5)

    @pytest.mark.parametrize("days", [10_000_000, 10**400])
    def test_unreachable_count_fails_before_fetching(self, calculator, stub_source, days):
        """A count that must pass date.max is rejected without any holiday fetch."""
        with pytest.raises(InternalError, match="last representable date"):
            calculator.calculate_end_date("2025-11-17", days)
        assert stub_source.total_calls == 0

    def test_unreachable_request_fails_before_fetching(self, calculator, stub_source):
        request = BusinessDayRequest(start_date=date(2025, 11, 17), business_days=10_000_000)
        with pytest.raises(InternalError):
            calculator.calculate(request)
        assert stub_source.total_calls == 0

    def test_reachable_count_near_max_date(self, empty_calculator):
        assert empty_calculator.calculate_end_date("9999-12-27", 5) == date(9999, 12, 31)

    def test_request_is_immutable(self):
        request = BusinessDayRequest(start_date=date(2025, 11, 17), business_days=1)
        with pytest.raises(Exception):
            request.business_days = 2


class TestBusinessDayProperties:
    """Properties that hold across many inputs."""

    @pytest.mark.parametrize("offset", range(14))
    def test_no_holidays_counts_weekdays(self, empty_calculator, offset):
        start = date(2025, 11, 10) + timedelta(days=offset)
        for days in range(1, 13):
            end = empty_calculator.calculate_end_date(start.isoformat(), days)
            assert end.weekday() < 5
            assert count_weekdays(start, end) == days

    @pytest.mark.parametrize("offset", range(20))
    def test_result_is_never_weekend_or_holiday(self, calculator, stub_source, offset):
        start = date(2025, 12, 15) + timedelta(days=offset)
        holidays = set().union(*stub_source.holidays.values())
        for days in (1, 2, 3, 7):
            end = calculator.calculate_end_date(start.isoformat(), days)
            assert end.weekday() < 5
            assert end not in holidays
            assert end >= start


class TestYearSelection:
    """Tests for choosing which years' holidays to fetch."""

    def test_span_single_year(self, calculator):
        assert calculator.select_years(date(2025, 11, 17), 1) == {2025}

    def test_span_includes_next_year_near_boundary(self, calculator):
        assert calculator.select_years(date(2025, 12, 31), 2) == {2025, 2026}

    def test_span_covers_long_horizons(self, calculator):
        years = calculator.select_years(date(2025, 12, 31), 300)
        assert {2025, 2026, 2027} <= years

    def test_threshold_selection(self, provider):
        calculator = BusinessDayCalculator(provider, year_selection=YearSelection.THRESHOLD)
        assert calculator.select_years(date(2025, 12, 31), 200) == {2025}
        assert calculator.select_years(date(2025, 12, 31), 201) == {2025, 2026}

    def test_threshold_misses_next_year_holiday(self, provider):
        """With the threshold strategy a short count over New Year ignores Jan 1."""
        calculator = BusinessDayCalculator(provider, year_selection=YearSelection.THRESHOLD)
        request = BusinessDayRequest(start_date=date(2025, 12, 31), business_days=2)
        result = calculator.calculate(request)

        assert result.end_date == date(2026, 1, 1)
        assert result.years_considered == [2025]
        assert any("2026" in warning for warning in result.warnings)

    def test_threshold_under_fetches_second_following_year(self):
        """A long count reaching a second following year lands on its holidays."""
        start = date(2025, 12, 31)
        unaware = BusinessDayCalculator(
            HolidayProvider(StubHolidaySource()),
            year_selection=YearSelection.THRESHOLD,
        )
        landing = unaware.calculate(BusinessDayRequest(start_date=start, business_days=300)).end_date
        assert landing.year == 2027

        source = StubHolidaySource({2027: [landing]})
        threshold = BusinessDayCalculator(
            HolidayProvider(source), year_selection=YearSelection.THRESHOLD
        )
        span = BusinessDayCalculator(HolidayProvider(source), year_selection=YearSelection.SPAN)

        threshold_result = threshold.calculate(BusinessDayRequest(start_date=start, business_days=300))
        span_result = span.calculate(BusinessDayRequest(start_date=start, business_days=300))

        assert threshold_result.end_date == landing
        assert 2027 not in threshold_result.years_considered
        assert span_result.end_date != landing
        assert landing in span_result.holidays_skipped
        assert 2027 in span_result.years_considered


class TestHolidayFailures:
    """Holiday fetch failures degrade instead of failing the calculation."""

    def test_failed_year_treated_as_holiday_free(self, caplog):
        source = StubHolidaySource({2025: [date(2025, 12, 25)]}, failing_years=[2025])
        calculator = BusinessDayCalculator(HolidayProvider(source))

        with caplog.at_level(logging.WARNING):
            request = BusinessDayRequest(start_date=date(2025, 12, 24), business_days=2)
            result = calculator.calculate(request)

        assert result.end_date == date(2025, 12, 25)
        assert result.degraded_years == [2025]
        assert any("2025" in warning for warning in result.warnings)
        assert any("2025" in record.getMessage() for record in caplog.records)

    def test_failure_in_one_year_keeps_other_years(self):
        source = StubHolidaySource({2026: [date(2026, 1, 1)]}, failing_years=[2025])
        calculator = BusinessDayCalculator(HolidayProvider(source))

        assert calculator.calculate_end_date("2025-12-31", 2) == date(2026, 1, 2)


class TestCreateCalculator:
    """Tests for wiring a calculator from configuration."""

    def test_library_source_from_config(self):
        config = Config(holiday_source="library", weekend_days=[6], year_selection="threshold")
        calculator = create_calculator(config)

        assert isinstance(calculator.holiday_provider.source, LibraryHolidaySource)
        assert calculator.weekend_days == frozenset({6})
        assert calculator.year_selection == YearSelection.THRESHOLD

    def test_shared_cache(self):
        config = Config(holiday_source="library")
        first = create_calculator(config)
        second = create_calculator(config, cache=first.holiday_provider.cache)

        assert first.holiday_provider.cache is second.holiday_provider.cache


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
