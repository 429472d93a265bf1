"""
Main business day calculator logic.
"""

import logging
from datetime import date
from typing import AbstractSet, Iterable, List, Optional, Set, Tuple

from business_day_calculator.core.dates import (
    DEFAULT_WEEKEND_DAYS,
    NEXT_YEAR_THRESHOLD,
    add_one_day,
    earliest_end_date,
    is_business_day,
    is_weekend,
    parse_iso_date,
    years_by_span,
    years_by_threshold,
)
from business_day_calculator.core.exceptions import InternalError, ValidationError
from business_day_calculator.core.holiday_provider import HolidayCache, HolidayProvider
from business_day_calculator.core.holiday_sources import create_holiday_source
from business_day_calculator.data.schemas import (
    BusinessDayRequest,
    BusinessDayResult,
    Config,
    YearSelection,
)

logger = logging.getLogger(__name__)


class BusinessDayCalculator:
    """Advances a start date by a number of business days."""

    def __init__(
        self,
        holiday_provider: HolidayProvider,
        weekend_days: Iterable[int] = DEFAULT_WEEKEND_DAYS,
        year_selection: YearSelection = YearSelection.SPAN,
        next_year_threshold: int = NEXT_YEAR_THRESHOLD,
    ):
        """
        Initialize the business day calculator.

        Args:
            holiday_provider: Provider for holiday dates.
            weekend_days: Weekdays (0=Monday .. 6=Sunday) that are never business days.
            year_selection: Strategy for choosing which years to fetch.
            next_year_threshold: Count above which the threshold strategy adds the next year.
        """
        self.holiday_provider = holiday_provider
        self.weekend_days = frozenset(weekend_days)
        if len(self.weekend_days) >= 7:
            raise ValueError("weekend_days cannot cover the whole week")
        self.year_selection = YearSelection(year_selection)
        self.next_year_threshold = next_year_threshold

    def calculate_end_date(self, start_date_text: str, business_days_to_add: int) -> date:
        """
        Calculate the date reached after adding business days.

        Args:
            start_date_text: Start date in YYYY-MM-DD format.
            business_days_to_add: Positive number of business days.

        Returns:
            The resulting date.

        Raises:
            ValidationError: If either input is invalid. No holidays are fetched.
            InternalError: If the walk cannot complete.
        """
        request = self.build_request(start_date_text, business_days_to_add)
        return self.calculate(request).end_date

    def build_request(self, start_date_text: str, business_days_to_add: int) -> BusinessDayRequest:
        """
        Validate raw inputs and build a request.

        Raises:
            ValidationError: If either input is invalid.
            InternalError: If the count cannot end before ``date.max``.
        """
        self._validate_business_days(business_days_to_add)
        start_date = parse_iso_date(start_date_text)
        self._check_reachable(start_date, business_days_to_add)
        return BusinessDayRequest(start_date=start_date, business_days=business_days_to_add)

    def calculate(self, request: BusinessDayRequest) -> BusinessDayResult:
        """
        Calculate the end date for a validated request.

        Args:
            request: BusinessDayRequest with start date and count.

        Returns:
            BusinessDayResult with the end date and metadata.

        Raises:
            InternalError: If the count cannot end before ``date.max``.
        """
        self._check_reachable(request.start_date, request.business_days)
        years = self.select_years(request.start_date, request.business_days)
        lookup = self.holiday_provider.lookup_years(years)

        warnings = []
        for year, reason in sorted(lookup.failed_years.items()):
            warnings.append(
                f"Holidays for {year} could not be fetched and were ignored ({reason})."
            )

        end_date, skipped, unfetched = self._walk(
            request.start_date, request.business_days, lookup.dates, years
        )

        for year in sorted(unfetched):
            logger.warning(
                f"Business day walk from {request.start_date} reached {year}, "
                f"whose holidays were not fetched"
            )
            warnings.append(
                f"The count crossed into {year}, whose holidays were not fetched; "
                f"holidays in that year were not skipped."
            )

        logger.debug(
            f"{request.start_date} + {request.business_days} business days = {end_date}"
        )

        return BusinessDayResult(
            start_date=request.start_date,
            business_days=request.business_days,
            end_date=end_date,
            years_considered=sorted(years),
            holidays_skipped=skipped,
            degraded_years=sorted(lookup.failed_years),
            warnings=warnings,
        )

    def select_years(self, start_date: date, business_days: int) -> Set[int]:
        """
        Choose the years whose holidays the walk needs.

        Args:
            start_date: Start date.
            business_days: Number of business days to add.

        Returns:
            Set of calendar years.
        """
        if self.year_selection == YearSelection.THRESHOLD:
            return years_by_threshold(start_date, business_days, self.next_year_threshold)
        return years_by_span(start_date, business_days, self.weekend_days)

    def is_business_day(self, check_date: date, holidays: AbstractSet[date]) -> bool:
        """Check whether a date is a business day under this calculator's weekend."""
        return is_business_day(check_date, holidays, self.weekend_days)

    def _validate_business_days(self, business_days: int) -> None:
        """Ensure the count is a positive whole number."""
        if isinstance(business_days, bool) or not isinstance(business_days, int):
            raise ValidationError("Business days must be a positive integer")
        if business_days <= 0:
            raise ValidationError("Business days must be a positive integer")

    def _check_reachable(self, start_date: date, business_days: int) -> None:
        """Fail before any holiday lookup when the walk is bound to pass ``date.max``."""
        try:
            earliest_end_date(start_date, business_days, self.weekend_days)
        except OverflowError:
            raise InternalError(
                f"Adding {business_days} business days to {start_date} passes the last representable date"
            )

    def _walk(
        self,
        start_date: date,
        target: int,
        holidays: AbstractSet[date],
        fetched_years: AbstractSet[int],
    ) -> Tuple[date, List[date], Set[int]]:
        """
        Walk forward one calendar day at a time until ``target`` business days are counted.

        The start date counts as the first business day when it is one.

        Returns:
            Tuple of (end date, weekday holidays skipped, years entered without holiday data).
        """
        skipped: List[date] = []
        unfetched: Set[int] = set()
        current = start_date
        count = 0

        if self.is_business_day(current, holidays):
            count = 1
            if count == target:
                return current, skipped, unfetched
        elif not is_weekend(current, self.weekend_days):
            skipped.append(current)

        while count < target:
            try:
                current = add_one_day(current)
            except OverflowError:
                raise InternalError(
                    f"Adding {target} business days to {start_date} passes the last representable date"
                )

            if current.year not in fetched_years:
                unfetched.add(current.year)

            if self.is_business_day(current, holidays):
                count += 1
            elif not is_weekend(current, self.weekend_days):
                skipped.append(current)

        return current, skipped, unfetched


def create_calculator(config: Config, cache: Optional[HolidayCache] = None) -> BusinessDayCalculator:
    """
    Wire a calculator, provider and holiday source from configuration.

    Args:
        config: Loaded configuration.
        cache: Shared year cache. A fresh one is created if not given.

    Returns:
        Ready-to-use BusinessDayCalculator.
    """
    source = create_holiday_source(
        source=config.holiday_source.value,
        base_url=config.holiday_api_base_url,
        timeout=config.holiday_api_timeout,
        country=config.holiday_country,
    )
    provider = HolidayProvider(source, cache=cache, max_workers=config.max_fetch_workers)
    return BusinessDayCalculator(
        provider,
        weekend_days=config.weekend_days,
        year_selection=config.year_selection,
        next_year_threshold=config.next_year_threshold,
    )
