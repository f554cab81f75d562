"""
FinancialRecord — Модель товара (покупка + продажа)

Immutable Pydantic модель товара из инвентаря. Аналитическое ядро только
читает записи: их создаёт и хранит внешний слой persistence.

Запись «реализована» (продана), когда у неё есть occurred_at (дата продажи).
Внешний слой может вернуть occurred_at в None при отмене продажи, поэтому
ядро никогда не кэширует записи и каждый раз читает текущее состояние.

Метки времени только timezone-aware: сравнение с окнами периода
не смешивает naive и aware datetime.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import AwareDatetime, BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class Category(str, Enum):
    """Категория товара"""

    SNEAKERS = "SNEAKERS"
    CLOTHING = "CLOTHING"
    ACCESSORIES = "ACCESSORIES"
    ELECTRONICS = "ELECTRONICS"
    COLLECTIBLES = "COLLECTIBLES"
    OTHER = "OTHER"


class ProductStatus(str, Enum):
    """Статус товара в инвентаре"""

    IN_STOCK = "IN_STOCK"  # На складе
    RESERVED = "RESERVED"  # Зарезервирован покупателем
    SOLD = "SOLD"  # Продан


# =============================================================================
# FINANCIAL RECORD MODEL
# =============================================================================


class FinancialRecord(BaseModel):
    """
    Модель товара с ценой закупки и ценой продажи.

    Используется для расчёта выручки, себестоимости, прибыли и разбивок
    по категориям и брендам.

    Immutable модель (frozen=True).
    """

    # Идентификация
    id: str = Field(..., min_length=1, description="Идентификатор товара")
    name: Optional[str] = Field(None, max_length=100, description="Название товара")
    category: Category = Field(Category.OTHER, description="Категория товара")
    brand: str = Field(..., min_length=1, max_length=50, description="Бренд (например, 'Nike')")
    status: Optional[ProductStatus] = Field(
        None, description="Статус товара; None если статус не отслеживается"
    )

    # Деньги
    listed_cost: Decimal = Field(..., ge=0, description="Цена закупки")
    realized_amount: Decimal = Field(..., ge=0, description="Цена продажи")

    # Время
    created_at: Optional[AwareDatetime] = Field(None, description="Время добавления в инвентарь")
    occurred_at: Optional[AwareDatetime] = Field(
        None, description="Время продажи; None пока продажа не завершена"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("brand")
    @classmethod
    def validate_brand_not_blank(cls, v: str) -> str:
        """Бренд без пробелов по краям и не пустой"""
        stripped = v.strip()
        if not stripped:
            raise ValueError("brand must not be blank")
        return stripped

    @property
    def is_sold(self) -> bool:
        """
        Проверка, продан ли товар.

        Returns:
            True если status == SOLD, либо статус не отслеживается и occurred_at задан
        """
        if self.status is None:
            return self.occurred_at is not None
        return self.status == ProductStatus.SOLD

    @property
    def is_realized(self) -> bool:
        """
        Участвует ли запись в оконных метриках.

        Returns:
            True если товар продан и дата продажи известна
        """
        return self.is_sold and self.occurred_at is not None

    def profit(self) -> Decimal:
        """
        Прибыль по товару.

        Returns:
            realized_amount - listed_cost (может быть отрицательной)
        """
        return self.realized_amount - self.listed_cost
