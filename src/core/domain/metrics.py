"""
Metrics — Результаты аналитических расчётов

Value objects, которые возвращают калькуляторы аналитики:
- Variation: сравнение текущего и предыдущего агрегата
- AggregateMetrics: количество/выручка/себестоимость/прибыль по окну
- GroupStats: те же метрики в разрезе категории или бренда
- Bucket: под-интервал окна для графика выручки

Все суммы в Decimal, без округления. Округляет только презентация.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from src.core.domain.period import InvalidWindowError


@dataclass(frozen=True)
class Variation:
    """Вариация между двумя агрегатами."""

    absolute_delta: Decimal  # current - previous (или current при previous == 0)
    percentage_delta: Decimal  # |delta / previous| * 100, всегда >= 0
    is_increase: bool


@dataclass(frozen=True)
class AggregateMetrics:
    """Метрики продаж по окну."""

    count: int
    revenue: Decimal
    cost: Decimal
    profit: Decimal

    @property
    def average_margin(self) -> Decimal:
        """Средняя прибыль на продажу (0 если продаж нет)."""
        if self.count == 0:
            return Decimal(0)
        return self.profit / self.count


@dataclass(frozen=True)
class GroupStats:
    """Метрики продаж по группе (категория или бренд)."""

    key: str
    count: int
    revenue: Decimal
    cost: Decimal
    profit: Decimal


@dataclass(frozen=True)
class Bucket:
    """Под-интервал окна [start, end] с агрегированной выручкой."""

    label: str
    start: datetime
    end: datetime
    revenue: Decimal
    profit: Decimal
    count: int = 0

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidWindowError(
                f"Bucket {self.label!r} start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    def contains(self, ts: Optional[datetime]) -> bool:
        return ts is not None and self.start <= ts <= self.end
