"""
Pydantic schemas for reports API.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from ..services.reports import Report
from ..services.reports.dashboard import DashboardDetail, DashboardSummary, DetailKind
from .reservations import ReservationRead


class BucketRead(BaseModel):
    label: str
    count: int


class ReportRead(BaseModel):
    """Aggregated report for a year or a custom date range."""
    start_date: date
    end_date: date
    year: Optional[int] = None

    monthly_revenue: list[float] = Field(description="12 entries, January first")
    categories: list[BucketRead]
    locations: list[BucketRead]

    total_revenue: float
    total_count: int
    average_revenue: int

    @classmethod
    def from_report(cls, report: Report) -> "ReportRead":
        return cls(
            start_date=report.window.start,
            end_date=report.window.end,
            year=report.window.year,
            monthly_revenue=report.monthly_revenue,
            categories=[BucketRead(label=b.label, count=b.count) for b in report.categories],
            locations=[BucketRead(label=b.label, count=b.count) for b in report.locations],
            total_revenue=report.total_revenue,
            total_count=report.total_count,
            average_revenue=report.average_revenue,
        )


class DashboardSummaryRead(BaseModel):
    today: date
    month_income: float
    pending_count: int
    upcoming_count: int
    unpaid_amount: float
    pending: list[ReservationRead]
    schedule: list[ReservationRead]

    @classmethod
    def from_summary(cls, summary: DashboardSummary, today: date) -> "DashboardSummaryRead":
        return cls(
            today=today,
            month_income=summary.month_income,
            pending_count=summary.pending_count,
            upcoming_count=summary.upcoming_count,
            unpaid_amount=summary.unpaid_amount,
            pending=[ReservationRead.from_domain(r) for r in summary.pending],
            schedule=[ReservationRead.from_domain(r) for r in summary.schedule],
        )


class DashboardDetailRead(BaseModel):
    kind: DetailKind
    items: list[ReservationRead]
    total_fee: Optional[float] = None

    @classmethod
    def from_detail(cls, detail: DashboardDetail) -> "DashboardDetailRead":
        return cls(
            kind=detail.kind,
            items=[ReservationRead.from_domain(r) for r in detail.items],
            total_fee=detail.total_fee,
        )
