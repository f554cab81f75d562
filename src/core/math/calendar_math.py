"""
Calendar Math — Календарная арифметика для окон периодов

Модуль обеспечивает детерминированные операции над датами:
- Начало/конец календарного дня (00:00:00.000 / 23:59:59.999)
- Начало/конец календарного месяца
- Сдвиг на N календарных месяцев с сохранением дня месяца
- Целое число дней и миллисекунд между двумя метками

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Системные часы никогда не читаются: все функции работают только со своими аргументами
2. tzinfo входа сохраняется (naive остаётся naive, aware остаётся aware)
3. Сдвиг месяцев использует ROLLOVER при переполнении дня месяца:
   день, которого нет в целевом месяце, переносится в следующий месяц.

ПРИМЕРЫ ROLLOVER:
    shift_months(2025-04-30, -2) → "2025-02-30" → 2025-03-02
    shift_months(2024-04-30, -2) → "2024-02-30" → 2024-03-01  (високосный год)
    shift_months(2025-03-31, -1) → "2025-02-31" → 2025-03-03
    shift_months(2025-01-31, +1) → "2025-02-31" → 2025-03-03
"""

import calendar
from datetime import datetime, timedelta
from typing import Final

from src.core.domain.period import TICK

# =============================================================================
# CONSTANTS
# =============================================================================

ONE_DAY: Final[timedelta] = timedelta(days=1)

# Последняя миллисекунда дня
END_OF_DAY_MICROSECOND: Final[int] = 999_000


# =============================================================================
# ДНИ
# =============================================================================


def start_of_day(ts: datetime) -> datetime:
    """
    Начало календарного дня метки ts.

    Args:
        ts: Метка времени

    Returns:
        ts с временем 00:00:00.000
    """
    return ts.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(ts: datetime) -> datetime:
    """
    Конец календарного дня метки ts.

    Args:
        ts: Метка времени

    Returns:
        ts с временем 23:59:59.999
    """
    return ts.replace(hour=23, minute=59, second=59, microsecond=END_OF_DAY_MICROSECOND)


def whole_days_between(start: datetime, end: datetime) -> int:
    """
    Количество полных суток между start и end (floor).

    Examples:
        >>> whole_days_between(datetime(2025, 8, 11), datetime(2025, 9, 9, 23, 59, 59, 999000))
        29
    """
    return (end - start) // ONE_DAY


def ticks_between(start: datetime, end: datetime) -> int:
    """Количество миллисекунд (TICK) между start и end (floor)."""
    return (end - start) // TICK


# =============================================================================
# МЕСЯЦЫ
# =============================================================================


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def start_of_month(ts: datetime) -> datetime:
    """
    Первый день месяца метки ts, 00:00:00.000.
    """
    return start_of_day(ts).replace(day=1)


def end_of_month(ts: datetime) -> datetime:
    """
    Последний день месяца метки ts, 23:59:59.999.
    """
    last_day = days_in_month(ts.year, ts.month)
    return end_of_day(ts.replace(day=last_day))


def shift_months(ts: datetime, months: int) -> datetime:
    """
    Сдвиг на N календарных месяцев с сохранением дня месяца и времени.

    Если в целевом месяце нет такого дня, лишние дни переносятся
    в следующий месяц (rollover), а не обрезаются до конца месяца.

    Args:
        ts: Исходная метка
        months: Число месяцев (отрицательное: назад)

    Returns:
        Сдвинутая метка

    Examples:
        >>> shift_months(datetime(2025, 9, 9), -2)
        datetime.datetime(2025, 7, 9, 0, 0)
        >>> shift_months(datetime(2025, 4, 30), -2)
        datetime.datetime(2025, 3, 2, 0, 0)
    """
    month_index = ts.year * 12 + (ts.month - 1) + months
    year, month_zero_based = divmod(month_index, 12)
    anchor = ts.replace(year=year, month=month_zero_based + 1, day=1)
    # day - 1 дней от первого числа: переполнение уходит в следующий месяц
    return anchor + timedelta(days=ts.day - 1)


def first_of_next_month(ts: datetime) -> datetime:
    """Начало следующего календарного месяца (00:00:00.000 первого числа)."""
    return shift_months(start_of_month(ts), 1)
