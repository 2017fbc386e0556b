"""
Reporting module.

Aggregation, CSV export, operator listing and dashboard figures. Every
function works on an explicit snapshot of reservations.
"""

from .aggregation import Bucket, Report, ReportWindow, aggregate
from .dashboard import DetailKind, dashboard_detail, dashboard_summary
from .export import export_csv, export_filename
from .listing import SortOrder, filter_options, filter_reservations, sort_reservations

__all__ = [
    "Bucket",
    "Report",
    "ReportWindow",
    "aggregate",
    "DetailKind",
    "dashboard_detail",
    "dashboard_summary",
    "export_csv",
    "export_filename",
    "SortOrder",
    "filter_options",
    "filter_reservations",
    "sort_reservations",
]
