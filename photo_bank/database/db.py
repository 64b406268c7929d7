"""
Opening the photo catalog.

The import loop is the only writer; catalog_query.py may read at the same
time, which is what WAL journaling is for.
"""
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from .schema import init_schema


class CatalogDB:
    """Owns the catalog connection for one run. Use as a context manager."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> sqlite3.Connection:
        if self._conn is not None:
            return self._conn

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        logging.info(f"Opening catalog {self.db_path}")
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA foreign_keys=ON;")
        init_schema(conn)

        self._conn = conn
        return conn

    def close(self):
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> sqlite3.Connection:
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
