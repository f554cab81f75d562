"""Analytics — период, вариации, бакеты и агрегаты для дашборда перепродаж.

Все функции чистые: без I/O и без чтения системных часов (now передаётся явно).
"""

from .aggregation import (
    aggregate,
    aggregate_by_brand,
    aggregate_by_category,
    count_created_in,
    filter_in_window,
)
from .bucketing import bucketize
from .config import AnalyticsConfig
from .dashboard import DashboardService, DashboardStats, build_dashboard_stats
from .export import export_report_csv
from .formatting import fold_other, format_currency, format_number, format_variation
from .periods import resolve_period
from .store import FinancialRecordStore, InMemoryRecordStore
from .user_stats import UserStats, compute_user_stats

__all__ = [
    "AnalyticsConfig",
    # Period Resolver
    "resolve_period",
    # Interval Bucketizer
    "bucketize",
    # Aggregation Pipeline
    "aggregate",
    "aggregate_by_category",
    "aggregate_by_brand",
    "filter_in_window",
    "count_created_in",
    # Dashboard
    "DashboardStats",
    "DashboardService",
    "build_dashboard_stats",
    # User stats
    "UserStats",
    "compute_user_stats",
    # Store
    "FinancialRecordStore",
    "InMemoryRecordStore",
    # Presentation
    "format_variation",
    "format_currency",
    "format_number",
    "fold_other",
    "export_report_csv",
]
