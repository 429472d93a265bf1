"""
Exception hierarchy for the business day calculator.
"""


class BusinessDayError(Exception):
    """Base class for all calculator errors."""


class ValidationError(BusinessDayError, ValueError):
    """Raised when a start date or business day count is invalid."""


class InternalError(BusinessDayError):
    """Raised when a calculation fails for reasons unrelated to the input."""


class HolidayFetchError(BusinessDayError):
    """Raised by a holiday source when a year cannot be fetched."""

    def __init__(self, year: int, reason: str):
        self.year = year
        self.reason = reason
        super().__init__(f"Could not fetch holidays for {year}: {reason}")
