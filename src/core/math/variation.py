"""
Variation — Сравнение текущего и предыдущего агрегата

Вычисляет знаковую дельту и процентное изменение между двумя значениями
(выручка, прибыль, количество продаж, новые товары).

ФОРМУЛЫ:
    previous == 0:
        absolute_delta   = current
        percentage_delta = 100 если current > 0, иначе 0
        is_increase      = current > 0

    previous != 0:
        absolute_delta   = current - previous
        percentage_delta = |absolute_delta / previous| * 100
        is_increase      = current >= previous  (равенство = рост на 0%)

Округление не выполняется. Функция тотальна: исключений нет
(кроме ValueError на NaN/Inf при приведении входов).
"""

from src.core.domain.metrics import Variation
from src.core.math.money import HUNDRED, ZERO, Number, to_decimal


def calculate_variation(current: Number, previous: Number) -> Variation:
    """
    Вариация между текущим и предыдущим агрегатом.

    Args:
        current: Значение за текущий период
        previous: Значение за предыдущий период

    Returns:
        Variation(absolute_delta, percentage_delta, is_increase)

    Examples:
        >>> calculate_variation(100, 0)
        Variation(absolute_delta=Decimal('100'), percentage_delta=Decimal('100'), is_increase=True)
        >>> calculate_variation(50, 100).percentage_delta
        Decimal('50.0')
    """
    current_d = to_decimal(current)
    previous_d = to_decimal(previous)

    if previous_d == ZERO:
        grew = current_d > ZERO
        return Variation(
            absolute_delta=current_d,
            percentage_delta=HUNDRED if grew else ZERO,
            is_increase=grew,
        )

    delta = current_d - previous_d
    return Variation(
        absolute_delta=delta,
        percentage_delta=abs(delta / previous_d) * HUNDRED,
        is_increase=current_d >= previous_d,
    )
