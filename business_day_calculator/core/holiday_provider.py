"""
Holiday provider with a per-year cache and failure isolation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple

from business_day_calculator.core.holiday_sources import HolidaySource

logger = logging.getLogger(__name__)


class HolidayCache:
    """
    Process-wide mapping of year to holiday dates.

    Entries are added once and never invalidated. Concurrent writers for the
    same year store identical data, so the last write wins without locking.
    """

    def __init__(self):
        self._years: Dict[int, FrozenSet[date]] = {}

    def get(self, year: int) -> Optional[FrozenSet[date]]:
        return self._years.get(year)

    def set(self, year: int, holidays: Iterable[date]) -> FrozenSet[date]:
        frozen = frozenset(holidays)
        self._years[year] = frozen
        return frozen

    def __contains__(self, year: int) -> bool:
        return year in self._years

    def __len__(self) -> int:
        return len(self._years)

    def years(self) -> Set[int]:
        return set(self._years)

    def clear(self) -> None:
        self._years.clear()


@dataclass
class HolidayLookup:
    """Merged holidays for several years plus the years that degraded."""

    dates: Set[date] = field(default_factory=set)
    failed_years: Dict[int, str] = field(default_factory=dict)

    @property
    def is_degraded(self) -> bool:
        return bool(self.failed_years)


class HolidayProvider:
    """Provides holiday dates per year from a HolidaySource."""

    def __init__(
        self,
        source: HolidaySource,
        cache: Optional[HolidayCache] = None,
        max_workers: int = 4,
    ):
        """
        Initialize the holiday provider.

        Args:
            source: Source that fetches one year at a time.
            cache: Shared year cache. A fresh one is created if not given.
            max_workers: Upper bound on concurrent per-year fetches.
        """
        self.source = source
        self.cache = cache if cache is not None else HolidayCache()
        self.max_workers = max(1, max_workers)

    def get_holidays_for_year(self, year: int) -> Set[date]:
        """
        Get holiday dates for a year.

        Never raises: a failed fetch yields an empty set and is logged.

        Args:
            year: Calendar year.

        Returns:
            Set of holiday dates for the year.
        """
        holidays, _ = self._resolve_year(year)
        return holidays

    def get_holidays_for_years(self, years: Iterable[int]) -> Set[date]:
        """
        Get the union of holiday dates for several years.

        Args:
            years: Calendar years.

        Returns:
            Set of holiday dates across all years.
        """
        return self.lookup_years(years).dates

    def lookup_years(self, years: Iterable[int]) -> HolidayLookup:
        """
        Fetch several years concurrently and merge the results.

        A failure in one year does not affect the others.

        Args:
            years: Calendar years.

        Returns:
            HolidayLookup with merged dates and any failed years.
        """
        unique_years = sorted(set(years))
        lookup = HolidayLookup()
        if not unique_years:
            return lookup

        workers = min(self.max_workers, len(unique_years))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = executor.map(self._resolve_year, unique_years)
            for year, (holidays, error) in zip(unique_years, results):
                lookup.dates.update(holidays)
                if error is not None:
                    lookup.failed_years[year] = error

        return lookup

    def _resolve_year(self, year: int) -> Tuple[Set[date], Optional[str]]:
        """
        Look up one year, consulting the cache first.

        Returns:
            Tuple of (holiday dates, error message or None).
        """
        cached = self.cache.get(year)
        if cached is not None:
            logger.debug(f"Holiday cache hit for {year}")
            return set(cached), None

        try:
            fetched = self.source.fetch_year(year)
        except Exception as e:
            logger.warning(
                f"Holidays for {year} unavailable from {self.source.name}, "
                f"treating the year as holiday-free: {e}"
            )
            return set(), str(e)

        stored = self.cache.set(year, fetched)
        logger.debug(f"Cached {len(stored)} holidays for {year}")
        return set(stored), None

    def clear_cache(self) -> None:
        """Clear the holiday cache."""
        self.cache.clear()

    def close(self) -> None:
        """Close the underlying source."""
        self.source.close()
