"""
User Stats — Сводная статистика пользователя за всё время

Без временного окна: считает по всему инвентарю.

Метрики:
- total_products, total_sales (status SOLD)
- total_revenue, total_profit по проданным
- average_margin_pct = Σ margin / Σ revenue * 100 (0 без продаж или без выручки)
- stock_value = Σ listed_cost товаров IN_STOCK (вложено в склад)
- potential_stock_value = Σ realized_amount товаров IN_STOCK (цена продажи склада)
- in_stock_count, reserved_count
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable

from src.core.domain.product import FinancialRecord, ProductStatus
from src.core.math.money import decimal_sum, percentage_of


@dataclass(frozen=True)
class UserStats:
    """Сводная статистика инвентаря пользователя."""

    total_products: int
    total_sales: int
    total_revenue: Decimal
    total_profit: Decimal
    average_margin_pct: Decimal
    stock_value: Decimal
    potential_stock_value: Decimal
    in_stock_count: int
    reserved_count: int

    def to_payload(self) -> Dict[str, Any]:
        """JSON-совместимый dict (camelCase, как ожидает фронтенд)."""
        return {
            "totalProducts": self.total_products,
            "totalSales": self.total_sales,
            "totalRevenue": float(self.total_revenue),
            "totalProfit": float(self.total_profit),
            "averageMargin": float(self.average_margin_pct),
            "stockValue": float(self.stock_value),
            "potentialStockValue": float(self.potential_stock_value),
            "inStockCount": self.in_stock_count,
            "reservedCount": self.reserved_count,
        }


def compute_user_stats(records: Iterable[FinancialRecord]) -> UserStats:
    """
    Статистика пользователя по всем записям.

    Args:
        records: все записи пользователя

    Returns:
        UserStats
    """
    records = list(records)
    sold = [r for r in records if r.is_sold]
    in_stock = [r for r in records if r.status == ProductStatus.IN_STOCK]

    total_revenue = decimal_sum(r.realized_amount for r in sold)
    total_profit = decimal_sum(r.profit() for r in sold)

    return UserStats(
        total_products=len(records),
        total_sales=len(sold),
        total_revenue=total_revenue,
        total_profit=total_profit,
        average_margin_pct=percentage_of(total_profit, total_revenue),
        stock_value=decimal_sum(r.listed_cost for r in in_stock),
        potential_stock_value=decimal_sum(r.realized_amount for r in in_stock),
        in_stock_count=len(in_stock),
        reserved_count=sum(1 for r in records if r.status == ProductStatus.RESERVED),
    )
