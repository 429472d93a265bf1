"""
Data models for the business day calculator using Pydantic.
"""

from datetime import date, datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HolidaySourceName(str, Enum):
    """Available holiday sources."""

    BRASILAPI = "brasilapi"
    LIBRARY = "library"


class YearSelection(str, Enum):
    """Strategies for choosing which years' holidays to fetch."""

    SPAN = "span"  # every year the walk can reach
    THRESHOLD = "threshold"  # start year, plus next year above a fixed count


class BusinessDayRequest(BaseModel):
    """Request model for a business day calculation."""

    model_config = ConfigDict(frozen=True, strict=True)

    start_date: date = Field(..., description="Date the count starts from")
    business_days: int = Field(..., ge=1, description="Number of business days to add")


class BusinessDayResult(BaseModel):
    """Complete result of a business day calculation."""

    start_date: date = Field(..., description="Date the count started from")
    business_days: int = Field(..., ge=1, description="Number of business days added")
    end_date: date = Field(..., description="Date reached after counting")
    years_considered: List[int] = Field(
        default_factory=list, description="Years whose holidays were requested"
    )
    holidays_skipped: List[date] = Field(
        default_factory=list, description="Holidays on weekdays that were skipped"
    )
    degraded_years: List[int] = Field(
        default_factory=list, description="Years whose holidays could not be fetched"
    )
    calculation_timestamp: datetime = Field(
        default_factory=datetime.now, description="When the calculation was performed"
    )
    warnings: List[str] = Field(default_factory=list, description="Any warnings generated")

    def to_payload(self) -> dict:
        """Render the inbound-contract response shape."""
        return {
            "startDate": self.start_date.isoformat(),
            "businessDays": self.business_days,
            "endDate": self.end_date.isoformat(),
        }


class Config(BaseModel):
    """Configuration for the business day calculator."""

    holiday_source: HolidaySourceName = Field(
        default=HolidaySourceName.BRASILAPI, description="Where holidays come from"
    )
    holiday_api_base_url: str = Field(
        default="https://brasilapi.com.br/api/feriados/v1",
        description="Holiday API prefix; the year is appended",
    )
    holiday_api_timeout: float = Field(
        default=5.0, gt=0, le=60, description="Holiday API timeout in seconds"
    )
    holiday_country: str = Field(default="BR", description="Country for the offline source")
    max_fetch_workers: int = Field(
        default=4, ge=1, le=32, description="Concurrent per-year holiday fetches"
    )
    weekend_days: List[int] = Field(
        default_factory=lambda: [5, 6], description="Weekend weekdays (0=Monday .. 6=Sunday)"
    )
    year_selection: YearSelection = Field(
        default=YearSelection.SPAN, description="Year selection strategy: span or threshold"
    )
    next_year_threshold: int = Field(
        default=200, ge=1, description="Business day count above which the next year is fetched"
    )
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=3001, ge=1, le=65535, description="API server port")

    @field_validator("weekend_days")
    @classmethod
    def validate_weekend_days(cls, v: List[int]) -> List[int]:
        """Ensure weekend days are valid weekdays and leave room for business days."""
        if any(day < 0 or day > 6 for day in v):
            raise ValueError("weekend_days must contain weekday numbers between 0 and 6")
        unique = sorted(set(v))
        if len(unique) == 7:
            raise ValueError("weekend_days cannot cover the whole week")
        return unique
