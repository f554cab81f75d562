"""
Contract Validation Module

Модуль для валидации JSON контрактов аналитики (payload-ы дашборда и статистики пользователя).
"""

from .validators import (
    ContractValidator,
    DashboardStatsValidator,
    SchemaLoader,
    UserStatsValidator,
    validate_dashboard_stats,
    validate_user_stats,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DashboardStatsValidator",
    "UserStatsValidator",
    # Functions
    "validate_dashboard_stats",
    "validate_user_stats",
]
