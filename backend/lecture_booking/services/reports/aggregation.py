"""
Report aggregation.

Folds a snapshot of reservations into:
  - monthly revenue (12 buckets by calendar month)
  - category distribution (top N + "Other" rollup)
  - location distribution (top N, the rest dropped)
  - totals and average revenue

The snapshot is always passed in; no store access and no clock here, so the
same input gives the same report.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Optional

from ...errors import ValidationError
from ..scheduling.calendar import year_bounds
from ..scheduling.config import BookingConfig, get_booking_config
from ..scheduling.types import Reservation

OTHER_LABEL = "Other"
UNCATEGORIZED_LABEL = "Uncategorized"
UNKNOWN_LOCATION_LABEL = "Unspecified"


@dataclass(frozen=True)
class ReportWindow:
    """Inclusive date range of a report."""
    start: date
    end: date
    year: Optional[int] = None

    @classmethod
    def for_year(cls, year: int) -> "ReportWindow":
        start, end = year_bounds(year)
        return cls(start=start, end=end, year=year)

    @classmethod
    def between(cls, start: date, end: date) -> "ReportWindow":
        if end < start:
            raise ValidationError("end", "end date must not be before start date")
        return cls(start=start, end=end)

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


@dataclass(frozen=True)
class Bucket:
    label: str
    count: int


@dataclass
class Report:
    window: ReportWindow
    monthly_revenue: list[float] = field(default_factory=lambda: [0.0] * 12)
    categories: list[Bucket] = field(default_factory=list)
    locations: list[Bucket] = field(default_factory=list)
    total_revenue: float = 0.0
    total_count: int = 0
    average_revenue: int = 0


def default_category_key(r: Reservation) -> str:
    return r.course_name or UNCATEGORIZED_LABEL


def default_location_key(r: Reservation) -> str:
    return r.city or UNKNOWN_LOCATION_LABEL


def filter_window(reservations: Iterable[Reservation], window: ReportWindow) -> list[Reservation]:
    """Non-cancelled reservations dated inside the window, input order kept."""
    return [
        r for r in reservations
        if r.status.is_active and window.contains(r.date)
    ]


def aggregate(
    reservations: Iterable[Reservation],
    window: ReportWindow,
    category_key: Callable[[Reservation], str] = default_category_key,
    location_key: Callable[[Reservation], str] = default_location_key,
    config: BookingConfig | None = None,
) -> Report:
    config = config or get_booking_config()
    selected = filter_window(reservations, window)

    monthly = [0.0] * 12
    total_revenue = 0.0
    for r in selected:
        fee = r.computed_fee
        # Absolute month number, whatever the window span
        monthly[r.date.month - 1] += fee
        total_revenue += fee

    total_count = len(selected)

    categories = rank(selected, category_key)
    if len(categories) > config.category_rollup_threshold:
        categories = rollup(categories, config.category_top_n)

    locations = rank(selected, location_key)[:config.location_top_n]

    return Report(
        window=window,
        monthly_revenue=monthly,
        categories=categories,
        locations=locations,
        total_revenue=total_revenue,
        total_count=total_count,
        average_revenue=average(total_revenue, total_count),
    )


def rank(reservations: Iterable[Reservation], key: Callable[[Reservation], str]) -> list[Bucket]:
    """
    Count reservations per key, sorted by count descending.

    Ties keep the order in which keys were first encountered.
    """
    counts: dict[str, int] = {}
    for r in reservations:
        label = key(r)
        counts[label] = counts.get(label, 0) + 1

    ordered = sorted(counts.items(), key=lambda item: -item[1])
    return [Bucket(label=label, count=count) for label, count in ordered]


def rollup(buckets: list[Bucket], top_n: int) -> list[Bucket]:
    """Keep top_n buckets and fold the rest into one "Other" bucket."""
    head = buckets[:top_n]
    rest = sum(b.count for b in buckets[top_n:])
    return head + [Bucket(label=OTHER_LABEL, count=rest)]


def average(total: float, count: int) -> int:
    """Half-up rounded mean, 0 for an empty set."""
    if count == 0:
        return 0
    return int(math.floor(total / count + 0.5))
