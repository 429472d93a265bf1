"""
Core business logic for business day calculation.
"""

from business_day_calculator.core.calculator import BusinessDayCalculator, create_calculator
from business_day_calculator.core.exceptions import (
    BusinessDayError,
    HolidayFetchError,
    InternalError,
    ValidationError,
)
from business_day_calculator.core.holiday_provider import (
    HolidayCache,
    HolidayLookup,
    HolidayProvider,
)
from business_day_calculator.core.holiday_sources import (
    BrasilApiHolidaySource,
    HolidaySource,
    LibraryHolidaySource,
    create_holiday_source,
)

__all__ = [
    "BrasilApiHolidaySource",
    "BusinessDayCalculator",
    "BusinessDayError",
    "HolidayCache",
    "HolidayFetchError",
    "HolidayLookup",
    "HolidayProvider",
    "HolidaySource",
    "InternalError",
    "LibraryHolidaySource",
    "ValidationError",
    "create_calculator",
    "create_holiday_source",
]
