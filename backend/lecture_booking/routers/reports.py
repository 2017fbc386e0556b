# backend/lecture_booking/routers/reports.py
"""
Reports API.

GET /reports            - aggregated report (year or custom range)
GET /reports/export     - CSV download of the same window
GET /reports/dashboard  - operator dashboard figures
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..dependencies import get_store, get_today
from ..errors import ValidationError
from ..schemas.reports import DashboardDetailRead, DashboardSummaryRead, ReportRead
from ..services.reports import (
    DetailKind,
    ReportWindow,
    SortOrder,
    aggregate,
    dashboard_detail,
    dashboard_summary,
    export_csv,
    export_filename,
)
from ..services.reports.export import export_rows
from ..services.store import ReservationStore

router = APIRouter(prefix="/reports", tags=["reports"])


def _resolve_window(
    year: Optional[int],
    start: Optional[date],
    end: Optional[date],
) -> ReportWindow:
    if year is not None:
        return ReportWindow.for_year(year)
    if start is not None and end is not None:
        return ReportWindow.between(start, end)
    raise ValidationError("window", "either year or both start and end are required")


@router.get("/", response_model=ReportRead)
def get_report(
    year: Optional[int] = Query(None, ge=1, le=9999),
    start: Optional[date] = None,
    end: Optional[date] = None,
    store: ReservationStore = Depends(get_store),
):
    window = _resolve_window(year, start, end)
    return ReportRead.from_report(aggregate(store.snapshot(), window))


@router.get("/export")
def export_report(
    year: Optional[int] = Query(None, ge=1, le=9999),
    start: Optional[date] = None,
    end: Optional[date] = None,
    sort: SortOrder = SortOrder.DATE_DESC,
    store: ReservationStore = Depends(get_store),
):
    """CSV of the window's reservations, rows in the on-screen order."""
    window = _resolve_window(year, start, end)
    snapshot = store.snapshot()

    if not export_rows(snapshot, window, sort):
        raise HTTPException(status_code=404, detail="No reservations in the selected window")

    content = export_csv(snapshot, window, sort)
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(window)}"',
        },
    )


@router.get("/dashboard", response_model=DashboardSummaryRead)
def get_dashboard(
    store: ReservationStore = Depends(get_store),
    today: date = Depends(get_today),
):
    summary = dashboard_summary(store.snapshot(), today)
    return DashboardSummaryRead.from_summary(summary, today)


@router.get("/dashboard/{kind}", response_model=DashboardDetailRead)
def get_dashboard_detail(
    kind: DetailKind,
    store: ReservationStore = Depends(get_store),
    today: date = Depends(get_today),
):
    return DashboardDetailRead.from_detail(dashboard_detail(store.snapshot(), kind, today))
