"""
Domain models and value objects.

Contains fundamental domain entities like FinancialRecord, PeriodToken, DateWindow, Variation.
"""

from src.core.domain.metrics import AggregateMetrics, Bucket, GroupStats, Variation
from src.core.domain.period import (
    TICK,
    AnalyticsError,
    DateWindow,
    InvalidWindowError,
    PeriodDates,
    PeriodToken,
    UnsupportedPeriodError,
)
from src.core.domain.product import Category, FinancialRecord, ProductStatus

__all__ = [
    # Period module
    "TICK",
    "PeriodToken",
    "DateWindow",
    "PeriodDates",
    "AnalyticsError",
    "UnsupportedPeriodError",
    "InvalidWindowError",
    # Product model
    "FinancialRecord",
    "Category",
    "ProductStatus",
    # Metrics
    "Variation",
    "AggregateMetrics",
    "GroupStats",
    "Bucket",
]
