"""
Data models and schemas for the business day calculator.
"""

from business_day_calculator.data.schemas import (
    BusinessDayRequest,
    BusinessDayResult,
    Config,
    HolidaySourceName,
    YearSelection,
)

__all__ = [
    "BusinessDayRequest",
    "BusinessDayResult",
    "Config",
    "HolidaySourceName",
    "YearSelection",
]
