"""Презентация: форматирование вариаций, сумм и свёртка групп.

Форматы повторяют fr-FR (Intl.NumberFormat) фронтенда:
- группировка тысяч узким неразрывным пробелом (U+202F)
- десятичная запятая
- неразрывный пробел (U+00A0) перед знаком €
"""

from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from src.core.domain.metrics import GroupStats, Variation
from src.core.math.money import CENT, Number, decimal_sum, percentage_of, quantize, to_decimal

# Разделители fr-FR
GROUP_SEPARATOR = "\u202f"
CURRENCY_SPACE = "\u00a0"

# Максимум знаков после запятой в format_number (как Intl по умолчанию)
MAX_FRACTION = Decimal("0.001")

DEFAULT_OTHER_LABEL = "Autres"


def _localize(text: str) -> str:
    # "1,234.50" → "1 234,50"
    return text.replace(",", "\x00").replace(".", ",").replace("\x00", GROUP_SEPARATOR)


def format_variation(variation: Variation) -> str:
    """'+12.3%' / '-4.0%': знак по is_increase, один знак после точки."""
    sign = "+" if variation.is_increase else "-"
    return f"{sign}{quantize(variation.percentage_delta, Decimal('0.1'))}%"


def format_currency(amount: Number) -> str:
    """'1 234,50 €'"""
    value = quantize(amount, CENT)
    return f"{_localize(f'{value:,.2f}')}{CURRENCY_SPACE}€"


def format_number(value: Number) -> str:
    """'1 234' / '1 234,5': до трёх знаков после запятой, без хвостовых нулей."""
    number = quantize(value, MAX_FRACTION)
    if number == number.to_integral_value():
        return _localize(f"{number:,.0f}")
    text = f"{number:,.3f}".rstrip("0")
    return _localize(text)


def fold_other(
    groups: Sequence[GroupStats],
    limit: int = 5,
    label: str = DEFAULT_OTHER_LABEL,
) -> List[GroupStats]:
    """Top `limit` групп по выручке + группа «прочие» с суммой хвоста.

    Группа «прочие» добавляется только при положительной выручке хвоста.
    """
    ranked = sorted(groups, key=lambda g: g.revenue, reverse=True)
    head, tail = list(ranked[:limit]), ranked[limit:]

    other_revenue = decimal_sum(g.revenue for g in tail)
    if other_revenue > 0:
        head.append(
            GroupStats(
                key=label,
                count=sum(g.count for g in tail),
                revenue=other_revenue,
                cost=decimal_sum(g.cost for g in tail),
                profit=decimal_sum(g.profit for g in tail),
            )
        )
    return head


def share_percentages(
    groups: Sequence[GroupStats], total: Optional[Number] = None
) -> List[Tuple[GroupStats, Decimal]]:
    """Доля выручки каждой группы в процентах.

    Args:
        groups: группы
        total: общая выручка; по умолчанию сумма выручки групп
    """
    base = to_decimal(total) if total is not None else decimal_sum(g.revenue for g in groups)
    return [(g, percentage_of(g.revenue, base)) for g in groups]
