"""
Database schema definitions.
"""
import sqlite3
import logging

CURRENT_SCHEMA_VERSION = 1

def init_schema(conn: sqlite3.Connection):
    """
    Applies the catalog schema to the database.
    Idempotent: safe to run on every startup.
    """
    with conn:
        # 1. Version Tracking (For future migrations)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            );
        """)

        cur = conn.cursor()
        cur.execute("SELECT version FROM schema_version")
        if not cur.fetchone():
            conn.execute("INSERT INTO schema_version (version) VALUES (?)", (CURRENT_SCHEMA_VERSION,))

        # 2. Photos, keyed by their canonical path in the media tree
        conn.execute("""
        CREATE TABLE IF NOT EXISTS photos (
            path            TEXT PRIMARY KEY,
            filename        TEXT NOT NULL,
            name            TEXT NOT NULL,
            category        TEXT NOT NULL,
            keywords        TEXT NOT NULL,        -- JSON list, in file name order
            first_seen_at   TEXT NOT NULL,
            updated_at      TEXT NOT NULL
        );
        """)

        # 3. One row per (photo, keyword) for keyword lookups
        conn.execute("""
        CREATE TABLE IF NOT EXISTS photo_keywords (
            path            TEXT NOT NULL,
            keyword         TEXT NOT NULL,
            PRIMARY KEY (path, keyword),
            FOREIGN KEY(path) REFERENCES photos(path) ON DELETE CASCADE
        );
        """)

        # 4. Indices
        conn.execute("CREATE INDEX IF NOT EXISTS idx_photos_category ON photos(category);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_photo_keywords_keyword ON photo_keywords(keyword);")

    logging.debug("Database schema initialized.")
