# wallfeed/data_manager/duckdb_repository.py
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from wallfeed.data_manager.models import NewsRecord

COLUMNS = ("external_id", "source", "title", "content", "excerpt", "image", "link", "date", "is_manual")
CONTENT_FIELDS = ("title", "content", "excerpt", "image", "link", "date")
EDITABLE_FIELDS = set(CONTENT_FIELDS) | {"is_manual"}


class UpsertStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED_MANUAL = "skipped_manual"


class NewsRepository:
    """
    Хранилище новостей. Ключ — (external_id, source).

    Ручная правка (is_manual = TRUE) — предусловие upsert(): такую запись
    пайплайн не перезаписывает ни при каких отличиях полей.
    """

    def __init__(self, conn, table="news"):
        self.conn = conn
        self.table = table

    def _row_to_model(self, row, cols) -> NewsRecord:
        return NewsRecord(**dict(zip(cols, row)))

    def find_by_external_id(self, external_id, source) -> Optional[NewsRecord]:
        rel = self.conn.execute(
            f"SELECT {', '.join(COLUMNS)} FROM {self.table} WHERE external_id=? AND source=?",
            [str(external_id), source],
        )
        row = rel.fetchone()
        return None if row is None else self._row_to_model(row, COLUMNS)

    def fetch_all(self) -> List[NewsRecord]:
        rel = self.conn.execute(
            f"SELECT {', '.join(COLUMNS)} FROM {self.table} ORDER BY date DESC, external_id"
        )
        return [self._row_to_model(r, COLUMNS) for r in rel.fetchall()]

    def upsert(self, record: NewsRecord) -> UpsertStatus:
        data = record.model_dump()
        data["date"] = record.date
        key = [data["external_id"], data["source"]]

        self.conn.begin()
        try:
            existing = self.find_by_external_id(*key)
            if existing is not None and existing.is_manual:
                self.conn.rollback()
                return UpsertStatus.SKIPPED_MANUAL

            if existing is None:
                cols = list(COLUMNS)
                values = [data[c] for c in cols]
                values[cols.index("is_manual")] = False
                self.conn.execute(
                    f"INSERT INTO {self.table} ({', '.join(cols)}) "
                    f"VALUES ({', '.join('?' for _ in cols)})",
                    values,
                )
                status = UpsertStatus.CREATED
            else:
                sets = ", ".join(f"{k}=?" for k in CONTENT_FIELDS)
                self.conn.execute(
                    f"UPDATE {self.table} SET {sets}, updated_at=current_timestamp "
                    f"WHERE external_id=? AND source=?",
                    [data[k] for k in CONTENT_FIELDS] + key,
                )
                status = UpsertStatus.UPDATED

            self.conn.commit()
            return status
        except Exception:
            self.conn.rollback()
            raise

    def update_fields(self, external_id, source, /, **fields):
        """Правка редактором. Любое изменение содержимого помечает запись ручной."""
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
        fields.setdefault("is_manual", True)
        sets = ", ".join(f"{k}=?" for k in fields)
        self.conn.execute(
            f"UPDATE {self.table} SET {sets}, updated_at=current_timestamp "
            f"WHERE external_id=? AND source=?",
            list(fields.values()) + [str(external_id), source],
        )
