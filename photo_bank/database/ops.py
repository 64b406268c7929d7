import json
import sqlite3
from datetime import datetime, UTC
from typing import List, Optional

from ..exceptions import CatalogWriteFailedError
from ..models import CatalogRecord


class PhotoCatalog:
    """
    The photo index. Records are keyed by path, so writing the same record
    twice leaves the catalog as it was after the first write.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def upsert(self, rec: CatalogRecord):
        now_iso = datetime.now(UTC).isoformat()
        try:
            with self.conn:
                self.conn.execute("""
                    INSERT INTO photos (path, filename, name, category, keywords, first_seen_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(path) DO UPDATE SET
                        filename = excluded.filename,
                        name = excluded.name,
                        category = excluded.category,
                        keywords = excluded.keywords,
                        updated_at = excluded.updated_at
                """, (
                    rec.path, rec.filename, rec.name, rec.category,
                    json.dumps(rec.keywords), now_iso, now_iso
                ))
                self.conn.execute("DELETE FROM photo_keywords WHERE path = ?", (rec.path,))
                self.conn.executemany(
                    "INSERT OR IGNORE INTO photo_keywords (path, keyword) VALUES (?, ?)",
                    [(rec.path, kw) for kw in rec.keywords],
                )
        except sqlite3.Error as e:
            raise CatalogWriteFailedError(f"Cannot write {rec.path} to catalog: {e}") from e

    def fetch(self, path: str) -> Optional[CatalogRecord]:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT path, filename, name, category, keywords FROM photos WHERE path = ?",
            (path,),
        )
        row = cur.fetchone()
        return self._to_record(row) if row else None

    def in_category(self, category: str) -> List[CatalogRecord]:
        """Photos in this category and below it."""
        cur = self.conn.cursor()
        cur.execute("""
            SELECT path, filename, name, category, keywords FROM photos
            WHERE category = ? OR category LIKE ?
            ORDER BY category, filename
        """, (category, f"{category}/%"))
        return [self._to_record(r) for r in cur.fetchall()]

    def with_keyword(self, keyword: str) -> List[CatalogRecord]:
        cur = self.conn.cursor()
        cur.execute("""
            SELECT p.path, p.filename, p.name, p.category, p.keywords
            FROM photos p
            JOIN photo_keywords k ON p.path = k.path
            WHERE k.keyword = ?
            ORDER BY p.category, p.filename
        """, (keyword.lower(),))
        return [self._to_record(r) for r in cur.fetchall()]

    def count(self) -> int:
        cur = self.conn.cursor()
        cur.execute("SELECT COUNT(*) FROM photos")
        return cur.fetchone()[0]

    def _to_record(self, row) -> CatalogRecord:
        path, filename, name, category, keywords = row
        return CatalogRecord(
            path=path, filename=filename, name=name,
            category=category, keywords=json.loads(keywords),
        )
