"""Period Resolver — токен периода → текущее и предыдущее окно.

Правила (end = конец календарного дня now, 23:59:59.999):
- 30d: start = начало дня (end - 29 дней), окно 30 дней включая сегодня;
       previous_end = start - TICK, previous_start = начало дня (previous_end - 29 дней)
- 3m:  start = тот же день месяца 2 месяца назад, начало дня;
       previous_start = тот же день месяца, что у previous_end, 2 месяца назад
- 6m:  как 3m, но 5 месяцев
- 1y:  start = ПЕРВОЕ число месяца 11 месяцев назад (а не тот же день месяца!);
       previous_start = первое число месяца 11 месяцев до previous_end

Асимметрия 1y (начало месяца) против 3m/6m (тот же день месяца) сохраняется
как есть. Сдвиг месяцев использует rollover (см. calendar_math.shift_months).

now всегда передаётся явно и с tzinfo: функция детерминирована,
границы дня берутся в часовом поясе now.
"""

import logging
from datetime import datetime, timedelta
from typing import Final, Union

from src.core.domain.period import TICK, DateWindow, InvalidWindowError, PeriodDates, PeriodToken
from src.core.math.calendar_math import (
    end_of_day,
    shift_months,
    start_of_day,
    start_of_month,
)

logger = logging.getLogger(__name__)

# Окно 30d: сегодня + 29 предыдущих дней
DAYS_BACK_30D: Final[int] = 29

# Сколько месяцев назад до начала окна (текущий месяц входит в окно)
MONTHS_BACK: Final[dict] = {
    PeriodToken.LAST_3_MONTHS: 2,
    PeriodToken.LAST_6_MONTHS: 5,
    PeriodToken.LAST_YEAR: 11,
}


def _day_window_start(end: datetime) -> datetime:
    return start_of_day(end - timedelta(days=DAYS_BACK_30D))


def _same_day_window_start(end: datetime, months_back: int) -> datetime:
    return start_of_day(shift_months(start_of_day(end), -months_back))


def _month_window_start(end: datetime, months_back: int) -> datetime:
    return shift_months(start_of_month(end), -months_back)


def resolve_period(token: Union[PeriodToken, str], now: datetime) -> PeriodDates:
    """Разрешение токена периода в конкретные окна.

    Args:
        token: PeriodToken или его строковое значение
        now: текущий момент (инжектируется вызывающим кодом)

    Returns:
        PeriodDates(current, previous)

    Raises:
        UnsupportedPeriodError: токен вне перечисления
        InvalidWindowError: now без tzinfo или ошибка календарной арифметики (start > end)
    """
    period = PeriodToken.parse(token)
    if now.tzinfo is None:
        raise InvalidWindowError(f"now must be timezone-aware, got naive {now.isoformat()}")
    end = end_of_day(now)

    if period is PeriodToken.LAST_30_DAYS:
        start = _day_window_start(end)
        previous_end = start - TICK
        previous_start = _day_window_start(previous_end)
    elif period in (PeriodToken.LAST_3_MONTHS, PeriodToken.LAST_6_MONTHS):
        months_back = MONTHS_BACK[period]
        start = _same_day_window_start(end, months_back)
        previous_end = start - TICK
        previous_start = _same_day_window_start(previous_end, months_back)
    else:
        months_back = MONTHS_BACK[period]
        start = _month_window_start(end, months_back)
        previous_end = start - TICK
        previous_start = _month_window_start(previous_end, months_back)

    dates = PeriodDates(
        current=DateWindow(start=start, end=end),
        previous=DateWindow(start=previous_start, end=previous_end),
    )
    logger.debug(
        "Resolved period %s at %s: current=[%s, %s] previous=[%s, %s]",
        period.value,
        now.isoformat(),
        start.isoformat(),
        end.isoformat(),
        previous_start.isoformat(),
        previous_end.isoformat(),
    )
    return dates
