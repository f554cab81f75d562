"""
Тесты для базовых доменных моделей: FinancialRecord, PeriodToken, DateWindow, PeriodDates

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Признаки проданности (is_sold / is_realized)
3. Immutability (frozen=True)
4. Строгий разбор токена периода
5. Инварианты окон (start <= end, стык окон ровно в один TICK)
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.domain import (
    TICK,
    AnalyticsError,
    Bucket,
    Category,
    DateWindow,
    FinancialRecord,
    InvalidWindowError,
    PeriodDates,
    PeriodToken,
    ProductStatus,
    UnsupportedPeriodError,
)

UTC = timezone.utc


# =============================================================================
# FINANCIAL RECORD TESTS
# =============================================================================


class TestFinancialRecord:
    """Тесты для модели FinancialRecord"""

    @pytest.fixture
    def sold_record(self) -> FinancialRecord:
        """Проданная пара кроссовок"""
        return FinancialRecord(
            id="p-1",
            name="Air Jordan 1 Chicago",
            category=Category.SNEAKERS,
            brand="Jordan",
            status=ProductStatus.SOLD,
            listed_cost=Decimal("180.00"),
            realized_amount=Decimal("320.00"),
            created_at=datetime(2025, 8, 1, 10, 0, tzinfo=UTC),
            occurred_at=datetime(2025, 9, 2, 15, 30, tzinfo=UTC),
        )

    def test_create_valid_record(self, sold_record):
        """Создание валидной записи"""
        assert sold_record.category == Category.SNEAKERS
        assert sold_record.listed_cost == Decimal("180.00")
        assert sold_record.profit() == Decimal("140.00")

    def test_amounts_coerced_to_decimal(self):
        """int/str суммы приводятся к Decimal"""
        record = FinancialRecord(id="p-2", brand="Nike", listed_cost=50, realized_amount="75.5")
        assert isinstance(record.listed_cost, Decimal)
        assert record.realized_amount == Decimal("75.5")

    def test_negative_cost_rejected(self):
        """Отрицательная цена закупки отвергается"""
        with pytest.raises(ValidationError):
            FinancialRecord(id="p-3", brand="Nike", listed_cost=-1, realized_amount=10)

    def test_blank_brand_rejected(self):
        """Пустой бренд отвергается"""
        with pytest.raises(ValidationError):
            FinancialRecord(id="p-4", brand="   ", listed_cost=1, realized_amount=1)

    def test_brand_is_stripped(self):
        """Пробелы по краям бренда убираются"""
        record = FinancialRecord(id="p-5", brand="  Adidas ", listed_cost=1, realized_amount=1)
        assert record.brand == "Adidas"

    def test_unknown_category_rejected(self):
        """Категория вне перечисления отвергается"""
        with pytest.raises(ValidationError):
            FinancialRecord(id="p-6", brand="Nike", category="SHOES", listed_cost=1, realized_amount=1)

    def test_immutability(self, sold_record):
        """Запись неизменяема"""
        with pytest.raises(ValidationError):
            sold_record.realized_amount = Decimal("1")

    def test_sold_with_date_is_realized(self, sold_record):
        """SOLD + occurred_at → участвует в метриках"""
        assert sold_record.is_sold
        assert sold_record.is_realized

    def test_sold_without_date_is_not_realized(self):
        """SOLD без даты продажи не попадает в окна"""
        record = FinancialRecord(
            id="p-7", brand="Nike", status=ProductStatus.SOLD, listed_cost=1, realized_amount=2
        )
        assert record.is_sold
        assert not record.is_realized

    def test_in_stock_with_date_is_not_realized(self):
        """Статус IN_STOCK перекрывает дату продажи (продажа отменена)"""
        record = FinancialRecord(
            id="p-8",
            brand="Nike",
            status=ProductStatus.IN_STOCK,
            listed_cost=1,
            realized_amount=2,
            occurred_at=datetime(2025, 9, 1, tzinfo=UTC),
        )
        assert not record.is_sold
        assert not record.is_realized

    def test_untracked_status_uses_occurred_at(self):
        """Без статуса проданность определяется наличием occurred_at"""
        sold = FinancialRecord(
            id="p-9",
            brand="Nike",
            listed_cost=1,
            realized_amount=2,
            occurred_at=datetime(2025, 9, 1, tzinfo=UTC),
        )
        unsold = FinancialRecord(id="p-10", brand="Nike", listed_cost=1, realized_amount=2)
        assert sold.is_realized
        assert not unsold.is_sold

    def test_json_roundtrip(self, sold_record):
        """Сериализация в JSON и обратно сохраняет запись"""
        restored = FinancialRecord.model_validate_json(sold_record.model_dump_json())
        assert restored == sold_record

    def test_naive_sold_date_rejected(self):
        """Дата продажи без часового пояса отвергается при разборе"""
        payload = {
            "id": "p-11",
            "brand": "Nike",
            "status": "SOLD",
            "listed_cost": "100",
            "realized_amount": "150",
            "occurred_at": "2025-09-02T10:00:00",
        }
        with pytest.raises(ValidationError):
            FinancialRecord.model_validate(payload)

    def test_naive_created_at_rejected(self):
        with pytest.raises(ValidationError):
            FinancialRecord(
                id="p-12",
                brand="Nike",
                listed_cost=1,
                realized_amount=2,
                created_at=datetime(2025, 9, 1, 12, 0),
            )

    def test_offset_timestamp_accepted(self):
        record = FinancialRecord.model_validate(
            {
                "id": "p-13",
                "brand": "Nike",
                "listed_cost": "1",
                "realized_amount": "2",
                "occurred_at": "2025-09-02T10:00:00+02:00",
            }
        )
        assert record.occurred_at.utcoffset() == timedelta(hours=2)


# =============================================================================
# PERIOD TOKEN TESTS
# =============================================================================


class TestPeriodToken:
    """Тесты для PeriodToken"""

    @pytest.mark.parametrize("raw", ["30d", "3m", "6m", "1y"])
    def test_parse_supported(self, raw):
        """Все поддерживаемые токены разбираются"""
        assert PeriodToken.parse(raw).value == raw

    def test_parse_passes_enum_through(self):
        assert PeriodToken.parse(PeriodToken.LAST_YEAR) is PeriodToken.LAST_YEAR

    @pytest.mark.parametrize("raw", ["7d", "custom", "30D", "", None, 30])
    def test_parse_unsupported(self, raw):
        """Неизвестный токен → UnsupportedPeriodError, без периода по умолчанию"""
        with pytest.raises(UnsupportedPeriodError) as exc_info:
            PeriodToken.parse(raw)
        assert exc_info.value.token == raw

    def test_unsupported_error_hierarchy(self):
        """UnsupportedPeriodError является AnalyticsError и ValueError"""
        with pytest.raises(AnalyticsError):
            PeriodToken.parse("2y")
        with pytest.raises(ValueError, match="Unsupported period"):
            PeriodToken.parse("2y")

    def test_month_based_flag(self):
        assert not PeriodToken.LAST_30_DAYS.is_month_based
        assert PeriodToken.LAST_3_MONTHS.is_month_based
        assert PeriodToken.LAST_6_MONTHS.is_month_based
        assert PeriodToken.LAST_YEAR.is_month_based


# =============================================================================
# WINDOW TESTS
# =============================================================================


class TestDateWindow:
    """Тесты для DateWindow и PeriodDates"""

    def test_contains_is_inclusive(self):
        """Обе границы окна включительно"""
        start = datetime(2025, 8, 11, tzinfo=UTC)
        end = datetime(2025, 9, 9, 23, 59, 59, 999000, tzinfo=UTC)
        window = DateWindow(start, end)

        assert window.contains(start)
        assert window.contains(end)
        assert not window.contains(start - TICK)
        assert not window.contains(end + TICK)

    def test_contains_none(self):
        """None (непроданная запись) не попадает в окно"""
        window = DateWindow(datetime(2025, 1, 1), datetime(2025, 1, 2))
        assert not window.contains(None)

    def test_contains_mixed_tz_rejected(self):
        """Сравнение naive и aware меток → InvalidWindowError, а не TypeError"""
        aware = DateWindow(datetime(2025, 9, 1, tzinfo=UTC), datetime(2025, 9, 9, tzinfo=UTC))
        naive = DateWindow(datetime(2025, 9, 1), datetime(2025, 9, 9))

        with pytest.raises(InvalidWindowError):
            aware.contains(datetime(2025, 9, 2, 10, 0))
        with pytest.raises(InvalidWindowError):
            naive.contains(datetime(2025, 9, 2, 10, 0, tzinfo=UTC))

    def test_single_instant_window(self):
        """start == end допустимо"""
        ts = datetime(2025, 1, 1, 12, 0)
        assert DateWindow(ts, ts).duration == timedelta(0)

    def test_inverted_window_rejected(self):
        """start > end → InvalidWindowError, без clamp"""
        with pytest.raises(InvalidWindowError):
            DateWindow(datetime(2025, 1, 2), datetime(2025, 1, 1))

    def test_period_dates_requires_adjacent_windows(self):
        """Зазор между окнами → InvalidWindowError"""
        previous = DateWindow(datetime(2025, 1, 1), datetime(2025, 1, 30, 23, 59, 59, 999000))
        current = DateWindow(datetime(2025, 2, 1), datetime(2025, 2, 28))
        with pytest.raises(InvalidWindowError):
            PeriodDates(current=current, previous=previous)

    def test_period_dates_accessors(self):
        previous = DateWindow(datetime(2025, 1, 1), datetime(2025, 1, 31, 23, 59, 59, 999000))
        current = DateWindow(datetime(2025, 2, 1), datetime(2025, 2, 28, 23, 59, 59, 999000))
        dates = PeriodDates(current=current, previous=previous)

        assert dates.start == current.start
        assert dates.end == current.end
        assert dates.previous_start == previous.start
        assert dates.previous_end == previous.end

    def test_bucket_rejects_inverted_range(self):
        """Бакет с start > end → InvalidWindowError"""
        with pytest.raises(InvalidWindowError):
            Bucket(
                label="x",
                start=datetime(2025, 1, 2),
                end=datetime(2025, 1, 1),
                revenue=Decimal(0),
                profit=Decimal(0),
            )
