"""Aggregation Pipeline — фильтрация записей по окну и свёртка в метрики.

Запись «в окне», если она реализована (occurred_at задан) и
window.start <= occurred_at <= window.end.

Метрики:
    revenue = Σ realized_amount
    cost    = Σ listed_cost
    profit  = revenue - cost

Группировки (категория / бренд) возвращают top-N групп по убыванию выручки.
При равной выручке сохраняется порядок первого появления группы (stable sort).
Свёртка хвоста в «Autres» выполняется в formatting.fold_other.
"""

import logging
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from src.core.domain.metrics import AggregateMetrics, GroupStats
from src.core.domain.period import DateWindow
from src.core.domain.product import FinancialRecord
from src.core.math.money import decimal_sum, percentage_of

logger = logging.getLogger(__name__)

# Количество групп в топах по умолчанию
DEFAULT_TOP_N = 5


def filter_in_window(records: Iterable[FinancialRecord], window: DateWindow) -> List[FinancialRecord]:
    """Реализованные записи, проданные внутри окна."""
    return [r for r in records if r.is_realized and window.contains(r.occurred_at)]


def count_created_in(records: Iterable[FinancialRecord], window: DateWindow) -> int:
    """Количество записей, добавленных в инвентарь внутри окна (новые товары)."""
    return sum(1 for r in records if window.contains(r.created_at))


def summarize(records: Iterable[FinancialRecord]) -> AggregateMetrics:
    """Свёртка уже отфильтрованных записей в AggregateMetrics."""
    records = list(records)
    revenue = decimal_sum(r.realized_amount for r in records)
    cost = decimal_sum(r.listed_cost for r in records)
    return AggregateMetrics(count=len(records), revenue=revenue, cost=cost, profit=revenue - cost)


def aggregate(records: Iterable[FinancialRecord], window: DateWindow) -> AggregateMetrics:
    """Метрики продаж по окну.

    Args:
        records: все записи пользователя
        window: окно [start, end] включительно

    Returns:
        AggregateMetrics(count, revenue, cost, profit)
    """
    return summarize(filter_in_window(records, window))


def _group_by(
    records: Iterable[FinancialRecord],
    window: DateWindow,
    key: Callable[[FinancialRecord], str],
    limit: Optional[int],
) -> List[GroupStats]:
    # dict сохраняет порядок вставки: первое появление группы определяет tie-break
    groups: Dict[str, List[FinancialRecord]] = {}
    for record in filter_in_window(records, window):
        groups.setdefault(key(record), []).append(record)

    stats = []
    for group_key, members in groups.items():
        metrics = summarize(members)
        stats.append(
            GroupStats(
                key=group_key,
                count=metrics.count,
                revenue=metrics.revenue,
                cost=metrics.cost,
                profit=metrics.profit,
            )
        )

    # sorted стабилен и при reverse=True
    ranked = sorted(stats, key=lambda g: g.revenue, reverse=True)
    logger.debug("Grouped %d groups, keeping top %s", len(ranked), limit)
    return ranked[:limit]


def aggregate_by_category(
    records: Iterable[FinancialRecord], window: DateWindow, limit: Optional[int] = DEFAULT_TOP_N
) -> List[GroupStats]:
    """Top-N категорий по выручке внутри окна."""
    return _group_by(records, window, lambda r: r.category.value, limit)


def aggregate_by_brand(
    records: Iterable[FinancialRecord], window: DateWindow, limit: Optional[int] = DEFAULT_TOP_N
) -> List[GroupStats]:
    """Top-N брендов по выручке внутри окна."""
    return _group_by(records, window, lambda r: r.brand, limit)


def margin_percentage(metrics: AggregateMetrics) -> Decimal:
    """Маржа в процентах от выручки (0 если выручки нет)."""
    return percentage_of(metrics.profit, metrics.revenue)
