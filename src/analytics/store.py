"""FinancialRecordStore — узкий интерфейс к слою persistence.

Аналитическое ядро никогда не обращается к хранилищу само: записи
приносит этот интерфейс. В репозитории есть только in-memory реализация
(тесты, демо); реальная реализация поверх БД живёт во внешнем слое.
"""

from typing import Dict, Iterable, List, Optional, Protocol

from src.core.domain.product import FinancialRecord


class FinancialRecordStore(Protocol):
    """Источник записей пользователя."""

    def fetch_for_user(self, user_id: str) -> List[FinancialRecord]:
        ...


class InMemoryRecordStore:
    """Хранилище записей в памяти, по пользователям.

    fetch_for_user возвращает копию списка: вызывающий код не может
    изменить состояние хранилища через результат.
    """

    def __init__(self, records_by_user: Optional[Dict[str, Iterable[FinancialRecord]]] = None):
        self._records: Dict[str, List[FinancialRecord]] = {
            user_id: list(records) for user_id, records in (records_by_user or {}).items()
        }

    def add(self, user_id: str, record: FinancialRecord) -> None:
        self._records.setdefault(user_id, []).append(record)

    def replace(self, user_id: str, record: FinancialRecord) -> None:
        """Заменить запись с тем же id (например, отмена продажи → occurred_at=None)."""
        records = self._records.get(user_id, [])
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                return
        raise KeyError(f"Record {record.id!r} not found for user {user_id!r}")

    def fetch_for_user(self, user_id: str) -> List[FinancialRecord]:
        return list(self._records.get(user_id, []))
