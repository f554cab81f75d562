"""
Period — Токены периодов и временные окна

Value objects для аналитики дашборда:
- PeriodToken: закрытое перечисление отчётных периодов (30d/3m/6m/1y)
- DateWindow: конкретный диапазон [start, end], обе границы включительно
- PeriodDates: пара окон (текущее + предыдущее) для сравнения периодов

Все объекты immutable и создаются заново при каждом вызове.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. DateWindow.start <= DateWindow.end (иначе InvalidWindowError)
2. PeriodDates.previous.end + TICK == PeriodDates.current.start (без зазора и перекрытия)
3. Неизвестный токен → UnsupportedPeriodError (никакого периода по умолчанию)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Final, Optional, Union


# =============================================================================
# CONSTANTS
# =============================================================================

# Минимальный шаг времени между соседними окнами (23:59:59.999 → 00:00:00.000)
TICK: Final[timedelta] = timedelta(milliseconds=1)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class AnalyticsError(Exception):
    """Базовое исключение аналитического ядра."""
    pass


class UnsupportedPeriodError(AnalyticsError, ValueError):
    """
    Токен периода вне закрытого перечисления.

    Всегда пробрасывается вызывающему коду, период по умолчанию не подставляется.
    """

    def __init__(self, token: object):
        self.token = token
        supported = ", ".join(t.value for t in PeriodToken)
        super().__init__(f"Unsupported period: {token!r} (supported: {supported})")


class InvalidWindowError(AnalyticsError, ValueError):
    """
    Окно с start > end или разрыв между предыдущим и текущим окном.

    Означает ошибку в календарной арифметике; значения никогда не clamp-ятся.
    """
    pass


# =============================================================================
# ENUMS
# =============================================================================


class PeriodToken(str, Enum):
    """Отчётный период дашборда"""

    LAST_30_DAYS = "30d"
    LAST_3_MONTHS = "3m"
    LAST_6_MONTHS = "6m"
    LAST_YEAR = "1y"

    @classmethod
    def parse(cls, value: Union["PeriodToken", str]) -> "PeriodToken":
        """
        Строгий разбор токена периода.

        Args:
            value: PeriodToken или его строковое значение ('30d', '3m', ...)

        Returns:
            PeriodToken

        Raises:
            UnsupportedPeriodError: Если значение не входит в перечисление
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedPeriodError(value) from None

    @property
    def is_month_based(self) -> bool:
        """True для периодов, которые бакетизируются по календарным месяцам."""
        return self is not PeriodToken.LAST_30_DAYS


# =============================================================================
# WINDOWS
# =============================================================================


@dataclass(frozen=True)
class DateWindow:
    """Диапазон [start, end], обе границы включительно."""

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidWindowError(
                f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    def contains(self, ts: Optional[datetime]) -> bool:
        """
        Проверка попадания метки времени в окно.

        Args:
            ts: Метка времени (None для непроданных записей)

        Returns:
            True если ts не None и start <= ts <= end

        Raises:
            InvalidWindowError: ts и окно смешивают naive и aware datetime
        """
        if ts is None:
            return False
        if (ts.tzinfo is None) != (self.start.tzinfo is None):
            raise InvalidWindowError(
                f"Cannot compare {ts.isoformat()} with window starting {self.start.isoformat()}: "
                "naive and timezone-aware datetimes are mixed"
            )
        return self.start <= ts <= self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class PeriodDates:
    """Текущее и предыдущее окно периода."""

    current: DateWindow
    previous: DateWindow

    def __post_init__(self):
        if self.previous.end + TICK != self.current.start:
            raise InvalidWindowError(
                f"Previous window end {self.previous.end.isoformat()} must be exactly one tick "
                f"before current start {self.current.start.isoformat()}"
            )

    @property
    def start(self) -> datetime:
        return self.current.start

    @property
    def end(self) -> datetime:
        return self.current.end

    @property
    def previous_start(self) -> datetime:
        return self.previous.start

    @property
    def previous_end(self) -> datetime:
        return self.previous.end
