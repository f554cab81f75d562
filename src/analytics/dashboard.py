"""Dashboard Stats — сборка статистики дашборда за период.

Поток данных:
    token + now → resolve_period → (current, previous)
    records → aggregate по каждому окну → calculate_variation
    records → aggregate_by_category / aggregate_by_brand (текущее окно)
    records → bucketize (текущее окно) → period_revenue

DashboardService (фасад для HTTP-обработчика) разбирает сырой токен,
получает записи через FinancialRecordStore и возвращает JSON-совместимый
payload, проверенный по contracts/schema/dashboard_stats.json.
Авторизация и сериализация ответа остаются за обработчиком.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from src.analytics.aggregation import (
    aggregate,
    aggregate_by_brand,
    aggregate_by_category,
    count_created_in,
)
from src.analytics.bucketing import bucketize
from src.analytics.config import DEFAULT_CONFIG, AnalyticsConfig
from src.analytics.periods import resolve_period
from src.analytics.store import FinancialRecordStore
from src.analytics.user_stats import compute_user_stats
from src.core.contracts import validate_dashboard_stats, validate_user_stats
from src.core.domain.metrics import AggregateMetrics, Bucket, GroupStats, Variation
from src.core.domain.period import DateWindow, PeriodDates, PeriodToken
from src.core.domain.product import FinancialRecord
from src.core.math.variation import calculate_variation

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class PeriodStats:
    """Метрики одного окна."""

    metrics: AggregateMetrics
    new_products: int

    # Весь инвентарь; только для текущего окна
    total_products: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.total_products is not None:
            payload["totalProducts"] = self.total_products
        payload.update(
            {
                "totalSales": self.metrics.count,
                "totalRevenue": float(self.metrics.revenue),
                "totalCost": float(self.metrics.cost),
                "totalProfit": float(self.metrics.profit),
                "averageMargin": float(self.metrics.average_margin),
                "newProducts": self.new_products,
            }
        )
        return payload


@dataclass(frozen=True)
class DashboardVariations:
    """Вариации текущего окна относительно предыдущего."""

    sales: Variation
    revenue: Variation
    profit: Variation
    new_products: Variation


@dataclass(frozen=True)
class DashboardStats:
    """Полная статистика дашборда за период."""

    period: PeriodToken
    dates: PeriodDates
    current: PeriodStats
    previous: PeriodStats
    variations: DashboardVariations
    top_categories: List[GroupStats]
    top_brands: List[GroupStats]
    period_revenue: List[Bucket]

    def to_payload(self) -> Dict[str, Any]:
        """JSON-совместимый dict: Decimal → float, datetime → ISO 8601, ключи camelCase."""
        return {
            "period": self.period.value,
            "dates": {
                "start": self.dates.start.isoformat(),
                "end": self.dates.end.isoformat(),
                "previousStart": self.dates.previous_start.isoformat(),
                "previousEnd": self.dates.previous_end.isoformat(),
            },
            "current": self.current.to_payload(),
            "previous": self.previous.to_payload(),
            "variations": {
                "sales": _variation_payload(self.variations.sales),
                "revenue": _variation_payload(self.variations.revenue),
                "profit": _variation_payload(self.variations.profit),
                "newProducts": _variation_payload(self.variations.new_products),
            },
            "topCategories": [_group_payload("category", g) for g in self.top_categories],
            "topBrands": [_group_payload("brand", g) for g in self.top_brands],
            "periodRevenue": [
                {
                    "period": b.label,
                    "start": b.start.isoformat(),
                    "end": b.end.isoformat(),
                    "revenue": float(b.revenue),
                    "profit": float(b.profit),
                    "count": b.count,
                }
                for b in self.period_revenue
            ],
        }


def _variation_payload(variation: Variation) -> Dict[str, Any]:
    return {
        "value": float(variation.absolute_delta),
        "percentage": float(variation.percentage_delta),
        "isPositive": variation.is_increase,
    }


def _group_payload(key_name: str, group: GroupStats) -> Dict[str, Any]:
    return {
        key_name: group.key,
        "count": group.count,
        "revenue": float(group.revenue),
        "profit": float(group.profit),
    }


# =============================================================================
# BUILD
# =============================================================================


def _period_stats(
    records: List[FinancialRecord], window: DateWindow, total_products: Optional[int] = None
) -> PeriodStats:
    return PeriodStats(
        metrics=aggregate(records, window),
        new_products=count_created_in(records, window),
        total_products=total_products,
    )


def build_dashboard_stats(
    records: Iterable[FinancialRecord],
    token: Union[PeriodToken, str],
    now: datetime,
    config: Optional[AnalyticsConfig] = None,
) -> DashboardStats:
    """Статистика дашборда за период.

    Args:
        records: все записи пользователя (текущее состояние, без кэша)
        token: период
        now: текущий момент (инжектируется)
        config: конфигурация (top_n, max_day_buckets)

    Returns:
        DashboardStats

    Raises:
        UnsupportedPeriodError: токен вне перечисления
    """
    config = config or DEFAULT_CONFIG
    period = PeriodToken.parse(token)
    records = list(records)
    dates = resolve_period(period, now)

    current = _period_stats(records, dates.current, total_products=len(records))
    previous = _period_stats(records, dates.previous)

    variations = DashboardVariations(
        sales=calculate_variation(current.metrics.count, previous.metrics.count),
        revenue=calculate_variation(current.metrics.revenue, previous.metrics.revenue),
        profit=calculate_variation(current.metrics.profit, previous.metrics.profit),
        new_products=calculate_variation(current.new_products, previous.new_products),
    )

    return DashboardStats(
        period=period,
        dates=dates,
        current=current,
        previous=previous,
        variations=variations,
        top_categories=aggregate_by_category(records, dates.current, limit=config.top_n),
        top_brands=aggregate_by_brand(records, dates.current, limit=config.top_n),
        period_revenue=bucketize(dates.current, records, period, config=config),
    )


# =============================================================================
# SERVICE
# =============================================================================


class DashboardService:
    """Фасад аналитики для HTTP-обработчика.

    Обработчик отвечает за авторизацию и перевод исключений в HTTP-ответы:
    UnsupportedPeriodError → 400, остальные → 500.
    """

    def __init__(self, store: FinancialRecordStore, config: Optional[AnalyticsConfig] = None):
        self.store = store
        self.config = config or DEFAULT_CONFIG

    def get_dashboard_stats(
        self, user_id: str, period: Union[PeriodToken, str], now: datetime
    ) -> Dict[str, Any]:
        """Payload статистики дашборда для пользователя.

        Raises:
            UnsupportedPeriodError: токен вне перечисления (до обращения к хранилищу)
            jsonschema.ValidationError: payload нарушает контракт
        """
        token = PeriodToken.parse(period)
        records = self.store.fetch_for_user(user_id)
        stats = build_dashboard_stats(records, token, now, config=self.config)
        payload = stats.to_payload()
        if self.config.validate_payloads:
            validate_dashboard_stats(payload)

        logger.info(
            "Dashboard stats for user %s, period %s: %d sales, revenue %s",
            user_id,
            token.value,
            stats.current.metrics.count,
            stats.current.metrics.revenue,
        )
        return payload

    def get_user_stats(self, user_id: str) -> Dict[str, Any]:
        """Payload сводной статистики пользователя.

        Raises:
            jsonschema.ValidationError: payload нарушает контракт
        """
        stats = compute_user_stats(self.store.fetch_for_user(user_id))
        payload = stats.to_payload()
        if self.config.validate_payloads:
            validate_user_stats(payload)

        logger.info("User stats for user %s: %d products", user_id, stats.total_products)
        return payload
