"""
Money — Decimal примитивы для денежных сумм

Модуль обеспечивает точные вычисления над денежными суммами:
- Приведение входов (int/str/float/Decimal) к Decimal без бинарных артефактов float
- Безопасное деление с fallback при нулевом знаменателе
- Процентная доля
- Квантование до центов (только для презентации)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Внутри расчётов округление не выполняется
2. Деление на ноль никогда не происходит (возвращается fallback)
3. NaN/Inf отвергаются при приведении
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Final, Iterable, Union

Number = Union[Decimal, int, float, str]

# =============================================================================
# CONSTANTS
# =============================================================================

ZERO: Final[Decimal] = Decimal(0)
HUNDRED: Final[Decimal] = Decimal(100)

# Квант для денежных сумм в презентации (центы)
CENT: Final[Decimal] = Decimal("0.01")


# =============================================================================
# ПРИВЕДЕНИЕ
# =============================================================================


def to_decimal(value: Number) -> Decimal:
    """
    Приведение числа к Decimal.

    float приводится через str, чтобы 0.1 стал Decimal('0.1'),
    а не Decimal('0.1000000000000000055511151231257827...').

    Args:
        value: Decimal, int, float или строка

    Returns:
        Decimal

    Raises:
        ValueError: Если значение NaN/Inf
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        result = Decimal(value)

    if not result.is_finite():
        raise ValueError(f"Amount contains NaN/Inf: {value}")
    return result


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    """Сумма Decimal со стартом Decimal(0) (пустой итератор → 0)."""
    return sum(values, ZERO)


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(numerator: Number, denominator: Number, fallback: Decimal = ZERO) -> Decimal:
    """
    Деление Decimal с fallback при нулевом знаменателе.

    Examples:
        >>> safe_divide(10, 4)
        Decimal('2.5')
        >>> safe_divide(10, 0)
        Decimal('0')
    """
    denom = to_decimal(denominator)
    if denom == ZERO:
        return fallback
    return to_decimal(numerator) / denom


def percentage_of(part: Number, total: Number) -> Decimal:
    """
    Доля part в total в процентах (0 если total == 0).

    Examples:
        >>> percentage_of(25, 200)
        Decimal('12.500')
    """
    return safe_divide(part, total) * HUNDRED


# =============================================================================
# КВАНТОВАНИЕ
# =============================================================================


def quantize(value: Number, quantum: Decimal = CENT) -> Decimal:
    """
    Округление half-up до кванта (для отображения, не для расчётов).

    Examples:
        >>> quantize(Decimal('2.345'))
        Decimal('2.35')
        >>> quantize(Decimal('12.25'), Decimal('0.1'))
        Decimal('12.3')
    """
    return to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
