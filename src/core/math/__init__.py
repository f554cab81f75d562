"""
Core math modules для аналитики

Календарная арифметика, Decimal примитивы и расчёт вариаций.
"""

# Calendar Math
from src.core.math.calendar_math import (
    ONE_DAY,
    end_of_day,
    end_of_month,
    first_of_next_month,
    shift_months,
    start_of_day,
    start_of_month,
    ticks_between,
    whole_days_between,
)

# Money
from src.core.math.money import (
    CENT,
    HUNDRED,
    ZERO,
    decimal_sum,
    percentage_of,
    quantize,
    safe_divide,
    to_decimal,
)

# Variation
from src.core.math.variation import calculate_variation

__all__ = [
    # Calendar Math: Constants
    "ONE_DAY",
    # Calendar Math: Functions
    "start_of_day",
    "end_of_day",
    "start_of_month",
    "end_of_month",
    "first_of_next_month",
    "shift_months",
    "ticks_between",
    "whole_days_between",
    # Money: Constants
    "CENT",
    "HUNDRED",
    "ZERO",
    # Money: Functions
    "decimal_sum",
    "percentage_of",
    "quantize",
    "safe_divide",
    "to_decimal",
    # Variation
    "calculate_variation",
]
