"""
Holiday sources: one fetch per calendar year.

A source returns the holiday dates of a single year or raises
``HolidayFetchError``. Caching and failure handling live in the
``HolidayProvider``.
"""

import logging
from datetime import date
from typing import Any, Optional, Set

import holidays
import httpx

from business_day_calculator.core.dates import ISO_DATE_PATTERN
from business_day_calculator.core.exceptions import HolidayFetchError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://brasilapi.com.br/api/feriados/v1"
DEFAULT_TIMEOUT = 5.0


class HolidaySource:
    """Interface for per-year holiday lookups."""

    name = "base"

    def fetch_year(self, year: int) -> Set[date]:
        """
        Fetch holiday dates for a year.

        Args:
            year: Calendar year.

        Returns:
            Set of holiday dates.

        Raises:
            HolidayFetchError: If the year cannot be fetched.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release any resources held by the source."""


class BrasilApiHolidaySource(HolidaySource):
    """Fetches national holidays from BrasilAPI (``GET <base-url>/<year>``)."""

    name = "brasilapi"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the BrasilAPI source.

        Args:
            base_url: Endpoint prefix; the year is appended as a path segment.
            timeout: Request timeout in seconds.
            client: Optional preconfigured httpx client (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def fetch_year(self, year: int) -> Set[date]:
        url = f"{self.base_url}/{year}"
        logger.debug(f"Fetching holidays for {year} from {url}")

        try:
            response = self._client.get(url, timeout=self.timeout)
        except httpx.TimeoutException:
            raise HolidayFetchError(year, f"request timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            raise HolidayFetchError(year, f"request failed: {e}")

        if not response.is_success:
            raise HolidayFetchError(year, f"unexpected status {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            raise HolidayFetchError(year, "response is not valid JSON")

        return parse_holiday_payload(year, payload)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class LibraryHolidaySource(HolidaySource):
    """Offline source backed by the ``holidays`` package."""

    name = "library"

    def __init__(self, country: str = "BR"):
        """
        Initialize the offline source.

        Args:
            country: ISO 3166-1 alpha-2 country code.
        """
        self.country = country

    def fetch_year(self, year: int) -> Set[date]:
        try:
            country_holidays = holidays.country_holidays(self.country, years=year)
        except NotImplementedError:
            raise HolidayFetchError(year, f"country {self.country!r} is not supported")
        return set(country_holidays.keys())


def parse_holiday_payload(year: int, payload: Any) -> Set[date]:
    """
    Extract holiday dates from a BrasilAPI response body.

    The body must be a JSON array of objects, each with a ``date`` field in
    YYYY-MM-DD form. Any other shape rejects the whole year.

    Args:
        year: Year the payload was fetched for.
        payload: Decoded JSON body.

    Returns:
        Set of holiday dates.

    Raises:
        HolidayFetchError: If the payload is malformed.
    """
    if not isinstance(payload, list):
        raise HolidayFetchError(year, f"expected a JSON array, got {type(payload).__name__}")

    result = set()
    for entry in payload:
        if not isinstance(entry, dict):
            raise HolidayFetchError(year, "holiday entry is not an object")
        raw_date = entry.get("date")
        if not isinstance(raw_date, str) or not ISO_DATE_PATTERN.fullmatch(raw_date):
            raise HolidayFetchError(year, f"invalid holiday date: {raw_date!r}")
        try:
            result.add(date.fromisoformat(raw_date))
        except ValueError:
            raise HolidayFetchError(year, f"invalid holiday date: {raw_date!r}")
    return result


def create_holiday_source(
    source: str = "brasilapi",
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    country: str = "BR",
) -> HolidaySource:
    """
    Build a holiday source by name.

    Args:
        source: ``brasilapi`` or ``library``.
        base_url: BrasilAPI endpoint prefix.
        timeout: Request timeout in seconds.
        country: Country code for the offline source.

    Returns:
        A HolidaySource instance.

    Raises:
        ValueError: If the source name is unknown.
    """
    if source == BrasilApiHolidaySource.name:
        return BrasilApiHolidaySource(base_url=base_url, timeout=timeout)
    if source == LibraryHolidaySource.name:
        return LibraryHolidaySource(country=country)
    raise ValueError(f"Unknown holiday source: {source}. Use 'brasilapi' or 'library'")
