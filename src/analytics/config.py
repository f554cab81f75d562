"""Конфигурация аналитики дашборда."""

from dataclasses import dataclass
from typing import Final

# Верхняя граница топов: maxItems для topCategories/topBrands в dashboard_stats.json
MAX_TOP_N: Final[int] = 50


@dataclass(frozen=True)
class AnalyticsConfig:
    """Параметры аналитики.

    - top_n: сколько групп (категорий/брендов) возвращать в топах, 1..MAX_TOP_N
    - max_day_buckets: максимум бакетов для дневной бакетизации (30d)
    - validate_payloads: проверять payload по JSON Schema перед отдачей
    - other_label: подпись свёрнутой группы «прочие» в презентации
    """
    top_n: int = 5
    max_day_buckets: int = 7
    validate_payloads: bool = True
    other_label: str = "Autres"

    def __post_init__(self):
        if not 1 <= self.top_n <= MAX_TOP_N:
            raise ValueError(f"top_n must be in [1, {MAX_TOP_N}], got {self.top_n}")
        if self.max_day_buckets < 1:
            raise ValueError(f"max_day_buckets must be >= 1, got {self.max_day_buckets}")


DEFAULT_CONFIG = AnalyticsConfig()
