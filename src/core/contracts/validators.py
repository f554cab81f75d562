"""
Проверка payload-ов аналитики по JSON Schema контрактам (jsonschema, Draft 2020-12).

Контракты лежат в contracts/schema/ в корне проекта:
- dashboard_stats.json: статистика дашборда за период
- user_stats.json: сводная статистика пользователя

DashboardService прогоняет каждый ответ через validate_dashboard_stats /
validate_user_stats, если это не отключено в AnalyticsConfig.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator

DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


class SchemaLoader:
    """Читает схемы из каталога и кэширует их по имени."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._root = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._root.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._root}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Возвращает схему `<schema_name>.json`, прошедшую meta-validation.

        Raises:
            FileNotFoundError: файла схемы нет в каталоге
            ValueError: файл не является корректной JSON Schema
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._root / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_LOADER = SchemaLoader()


# =============================================================================
# CONTRACTS
# =============================================================================


class ContractValidator:
    """Проверка payload-а по одной именованной схеме."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        schema = (loader or _LOADER).load_schema(self.schema_name)
        self.validator = Draft202012Validator(schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """Raises jsonschema.ValidationError на первом нарушении контракта."""
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)


class DashboardStatsValidator(ContractValidator):
    schema_name = "dashboard_stats"


class UserStatsValidator(ContractValidator):
    schema_name = "user_stats"


def validate_dashboard_stats(data: Dict[str, Any]) -> None:
    DashboardStatsValidator().validate(data)


def validate_user_stats(data: Dict[str, Any]) -> None:
    UserStatsValidator().validate(data)
