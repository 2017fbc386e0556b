"""
Booking configuration for scheduling and reporting.
"""

from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking engine.

    Attributes:
        series_confirm_threshold: Series larger than this need explicit confirmation
        recurrence_cap_months: Hard cap of a series, counted from its start date
        min_advance_days: Public requests must be at least this many days ahead
        category_rollup_threshold: More categories than this → top N + "Other"
        category_top_n: Categories kept individually when rolling up
        location_top_n: Locations kept in the report (the rest is dropped)
        upcoming_days: Dashboard "upcoming" horizon
        dashboard_schedule_limit: Items shown in the dashboard schedule
    """
    series_confirm_threshold: int = 20
    recurrence_cap_months: int = 12
    min_advance_days: int = 1
    category_rollup_threshold: int = 6
    category_top_n: int = 5
    location_top_n: int = 10
    upcoming_days: int = 30
    dashboard_schedule_limit: int = 5

    def __post_init__(self):
        """Validate configuration."""
        if self.category_top_n > self.category_rollup_threshold:
            raise ValueError(
                f"category_top_n must be <= category_rollup_threshold, "
                f"got {self.category_top_n} > {self.category_rollup_threshold}"
            )
        if self.recurrence_cap_months < 1:
            raise ValueError(f"recurrence_cap_months must be positive, got {self.recurrence_cap_months}")
        if self.series_confirm_threshold < 0:
            raise ValueError(f"series_confirm_threshold must be >= 0, got {self.series_confirm_threshold}")


@lru_cache
def get_booking_config() -> BookingConfig:
    """
    Get booking configuration (singleton).
    """
    return BookingConfig()
