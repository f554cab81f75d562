"""
Unit tests для calculate_variation и денежных примитивов

Проверяет:
1. Нулевой предыдущий период (нет деления на ноль)
2. Рост, падение и равенство
3. percentage_delta всегда неотрицателен
4. Приведение float/str без бинарных артефактов
"""

import random
from decimal import Decimal

import pytest

from src.core.math.money import percentage_of, quantize, safe_divide, to_decimal
from src.core.math.variation import calculate_variation


# =============================================================================
# VARIATION
# =============================================================================


class TestCalculateVariation:
    """Тесты для calculate_variation"""

    def test_growth_from_zero(self):
        """previous = 0, current > 0 → +100%"""
        variation = calculate_variation(100, 0)
        assert variation.absolute_delta == Decimal(100)
        assert variation.percentage_delta == Decimal(100)
        assert variation.is_increase is True

    def test_zero_to_zero(self):
        """previous = 0, current = 0 → 0%, не рост"""
        variation = calculate_variation(0, 0)
        assert variation.absolute_delta == Decimal(0)
        assert variation.percentage_delta == Decimal(0)
        assert variation.is_increase is False

    def test_negative_current_from_zero(self):
        """Отрицательная прибыль против нулевой → 0%, падение"""
        variation = calculate_variation(-30, 0)
        assert variation.absolute_delta == Decimal(-30)
        assert variation.percentage_delta == Decimal(0)
        assert variation.is_increase is False

    def test_decrease(self):
        variation = calculate_variation(50, 100)
        assert variation.absolute_delta == Decimal(-50)
        assert variation.percentage_delta == Decimal(50)
        assert variation.is_increase is False

    def test_equal_is_increase(self):
        """current == previous считается ростом на 0%"""
        variation = calculate_variation(75, 75)
        assert variation.absolute_delta == Decimal(0)
        assert variation.percentage_delta == Decimal(0)
        assert variation.is_increase is True

    def test_growth(self):
        variation = calculate_variation(270, 100)
        assert variation.absolute_delta == Decimal(170)
        assert variation.percentage_delta == Decimal(170)
        assert variation.is_increase is True

    def test_negative_previous_uses_absolute_value(self):
        """Прибыль из -20 в 10: рост на 150%"""
        variation = calculate_variation(10, -20)
        assert variation.absolute_delta == Decimal(30)
        assert variation.percentage_delta == Decimal(150)
        assert variation.is_increase is True

    def test_no_rounding(self):
        """Процент не округляется внутри расчёта"""
        variation = calculate_variation(1, 3)
        assert variation.percentage_delta == abs(Decimal(-2) / Decimal(3)) * 100

    def test_float_inputs(self):
        """float приводится через str"""
        variation = calculate_variation(0.3, 0.1)
        assert variation.absolute_delta == Decimal("0.2")
        assert variation.percentage_delta == Decimal(200)

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN/Inf"):
            calculate_variation(float("nan"), 1)

    def test_properties_on_random_inputs(self):
        """percentage_delta >= 0 и is_increase согласован со знаком дельты"""
        rng = random.Random(20250909)
        for _ in range(500):
            current = Decimal(rng.randint(-10_000, 10_000)) / 100
            previous = Decimal(rng.randint(-10_000, 10_000)) / 100
            variation = calculate_variation(current, previous)

            assert variation.percentage_delta >= 0
            if previous != 0:
                assert variation.absolute_delta == current - previous
                assert variation.is_increase == (current >= previous)
            else:
                assert variation.absolute_delta == current
                assert variation.is_increase == (current > 0)


# =============================================================================
# MONEY
# =============================================================================


class TestMoney:
    """Тесты для денежных примитивов"""

    def test_to_decimal_from_float(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_to_decimal_rejects_infinity(self):
        with pytest.raises(ValueError):
            to_decimal(float("inf"))

    def test_safe_divide_zero_denominator(self):
        assert safe_divide(10, 0) == Decimal(0)
        assert safe_divide(10, 0, fallback=Decimal(-1)) == Decimal(-1)

    def test_percentage_of(self):
        assert percentage_of(25, 200) == Decimal("12.5")
        assert percentage_of(25, 0) == Decimal(0)

    def test_quantize_half_up(self):
        assert quantize(Decimal("2.345")) == Decimal("2.35")
        assert quantize(Decimal("-2.345")) == Decimal("-2.35")
