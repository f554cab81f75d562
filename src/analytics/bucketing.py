"""Interval Bucketizer — разбиение окна на под-интервалы для графика выручки.

Политика количества бакетов:
- 30d: min(day_span, max_day_buckets) бакетов по линейной интерполяции
  миллисекундного размаха окна; последний бакет заканчивается ровно в window.end
- 3m / 6m / 1y: по одному бакету на календарный месяц, не более 3 / 6 / 12;
  последний бакет заканчивается ровно в window.end. Если rollover сдвинул
  начало окна (30 апреля - 2 месяца = 2 марта), окно охватывает меньше
  календарных месяцев и бакетов получается меньше (для 3m: март, апрель)

Инвариант: бакеты покрывают [window.start, window.end] без зазоров и перекрытий,
соседние бакеты разделены ровно одним TICK.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Final, Iterable, List, Optional, Union

from src.analytics.config import DEFAULT_CONFIG, AnalyticsConfig
from src.core.domain.metrics import Bucket
from src.core.domain.period import TICK, DateWindow, PeriodToken
from src.core.domain.product import FinancialRecord
from src.core.math.calendar_math import (
    end_of_month,
    first_of_next_month,
    ticks_between,
    whole_days_between,
)
from src.core.math.money import ZERO, decimal_sum

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Количество месячных бакетов по токену
MONTH_BUCKETS: Final[Dict[PeriodToken, int]] = {
    PeriodToken.LAST_3_MONTHS: 3,
    PeriodToken.LAST_6_MONTHS: 6,
    PeriodToken.LAST_YEAR: 12,
}

# Короткие названия месяцев fr-FR (как Intl.DateTimeFormat month: 'short')
FR_MONTHS_SHORT: Final[tuple] = (
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
)


@dataclass(frozen=True)
class _Span:
    start: datetime
    end: datetime
    label: str


# =============================================================================
# LABELS
# =============================================================================


def day_label(ts: datetime) -> str:
    """'9 sept.': день и короткий месяц."""
    return f"{ts.day} {FR_MONTHS_SHORT[ts.month - 1]}"


def month_label(ts: datetime, with_year: bool = False) -> str:
    """'juil.' или 'juil. 2025'."""
    label = FR_MONTHS_SHORT[ts.month - 1]
    if with_year:
        return f"{label} {ts.year}"
    return label


def _dedupe_labels(spans: List[_Span]) -> List[_Span]:
    seen = set()
    result = []
    for index, span in enumerate(spans):
        label = span.label
        if label in seen:
            label = f"{label} #{index + 1}"
        seen.add(label)
        result.append(_Span(span.start, span.end, label))
    return result


# =============================================================================
# SPANS
# =============================================================================


def day_bucket_count(window: DateWindow, max_buckets: int) -> int:
    """Количество дневных бакетов: min(полных дней, max_buckets), минимум 1."""
    return max(1, min(whole_days_between(window.start, window.end), max_buckets))


def day_spans(window: DateWindow, count: int) -> List[_Span]:
    """Линейная интерполяция окна на count равных частей (с точностью до TICK)."""
    total_ticks = ticks_between(window.start, window.end)
    boundaries = [window.start + TICK * (total_ticks * i // count) for i in range(count)]

    spans = []
    for i, start in enumerate(boundaries):
        end = window.end if i == count - 1 else boundaries[i + 1] - TICK
        spans.append(_Span(start, end, day_label(end)))
    return spans


def month_spans(window: DateWindow, count: int, with_year: bool = False) -> List[_Span]:
    """По одному span на календарный месяц начиная с месяца window.start.

    Первый span начинается в window.start, следующие с первого числа месяца.
    Последний span (count-й, либо месяц, содержащий window.end) заканчивается
    в window.end, поэтому окно покрывается полностью и ничего не выходит за его конец.
    """
    spans = []
    cursor = window.start
    for i in range(count):
        month_end = end_of_month(cursor)
        is_last = i == count - 1 or month_end >= window.end
        end = window.end if is_last else month_end
        spans.append(_Span(cursor, end, month_label(cursor, with_year)))
        if is_last:
            break
        cursor = first_of_next_month(cursor)
    return spans


# =============================================================================
# BUCKETIZE
# =============================================================================


def bucketize(
    window: DateWindow,
    records: Iterable[FinancialRecord],
    token: Union[PeriodToken, str],
    config: Optional[AnalyticsConfig] = None,
) -> List[Bucket]:
    """Бакетизация проданных записей окна.

    Args:
        window: окно (обычно PeriodDates.current)
        records: записи; участвуют только реализованные (occurred_at задан)
        token: период, определяющий политику бакетов
        config: конфигурация (max_day_buckets)

    Returns:
        Список Bucket в хронологическом порядке

    Raises:
        UnsupportedPeriodError: токен вне перечисления
    """
    period = PeriodToken.parse(token)
    config = config or DEFAULT_CONFIG

    if period.is_month_based:
        spans = month_spans(
            window, MONTH_BUCKETS[period], with_year=period is PeriodToken.LAST_YEAR
        )
    else:
        spans = day_spans(window, day_bucket_count(window, config.max_day_buckets))
    spans = _dedupe_labels(spans)

    realized = [r for r in records if r.is_realized and window.contains(r.occurred_at)]

    buckets = []
    for span in spans:
        revenue = ZERO
        profit = ZERO
        count = 0
        for record in realized:
            if span.start <= record.occurred_at <= span.end:
                revenue += record.realized_amount
                profit += record.realized_amount - record.listed_cost
                count += 1
        buckets.append(
            Bucket(
                label=span.label,
                start=span.start,
                end=span.end,
                revenue=revenue,
                profit=profit,
                count=count,
            )
        )

    logger.debug(
        "Bucketized %d realized records into %d buckets for period %s",
        len(realized),
        len(buckets),
        period.value,
    )
    return buckets


def total_revenue(buckets: Iterable[Bucket]) -> Decimal:
    """Сумма выручки по бакетам."""
    return decimal_sum(b.revenue for b in buckets)
