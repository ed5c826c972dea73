# wallfeed/data_manager/duckdb_client.py
from pathlib import Path
import duckdb
from wallfeed.utils.paths import DB

DDL_NEWS = """
CREATE TABLE IF NOT EXISTS news (
    external_id TEXT NOT NULL,
    source      TEXT NOT NULL,
    title       TEXT,
    content     TEXT,
    excerpt     TEXT,
    image       TEXT,
    link        TEXT,
    date        TIMESTAMP,
    is_manual   BOOLEAN DEFAULT FALSE,
    created_at  TIMESTAMP DEFAULT current_timestamp,
    updated_at  TIMESTAMP DEFAULT current_timestamp,
    PRIMARY KEY (external_id, source)
);
"""

IN_MEMORY = ":memory:"


class DuckDBClient:
    """Подключение к DuckDB + создание схемы."""

    def __init__(self, db_path=DB, reset=False):
        if str(db_path) == IN_MEMORY:
            self.path = None
            self.conn = duckdb.connect(IN_MEMORY)
        else:
            self.path = Path(db_path)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if reset and self.path.exists():
                self.path.unlink()
            self.conn = duckdb.connect(str(self.path))
        self._ensure_schema()

    def _ensure_schema(self):
        self.conn.execute(DDL_NEWS)

    def close(self):
        self.conn.close()
