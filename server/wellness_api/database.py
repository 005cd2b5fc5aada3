"""SQLite document store for wellness records."""
import sqlite3
from contextlib import contextmanager
from typing import Generator
import logging

from .config import get_settings

log = logging.getLogger(__name__)

# List-valued fields are stored as JSON text columns.
SCHEMA = """
CREATE TABLE IF NOT EXISTS moods (
    id TEXT PRIMARY KEY,
    date TEXT NOT NULL,
    mood_type TEXT NOT NULL,
    intensity INTEGER NOT NULL,
    energy INTEGER,
    stress INTEGER,
    sleep INTEGER,
    note TEXT NOT NULL DEFAULT '',
    tags TEXT NOT NULL DEFAULT '[]',
    triggers TEXT NOT NULL DEFAULT '[]',
    activities TEXT NOT NULL DEFAULT '[]',
    location TEXT,
    weather TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_moods_date ON moods (date);

CREATE TABLE IF NOT EXISTS journals (
    id TEXT PRIMARY KEY,
    date TEXT NOT NULL,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    tags TEXT NOT NULL DEFAULT '[]',
    mood TEXT,
    category TEXT NOT NULL,
    is_private INTEGER NOT NULL DEFAULT 0,
    word_count INTEGER NOT NULL DEFAULT 0,
    reading_time INTEGER NOT NULL DEFAULT 0,
    attachments TEXT NOT NULL DEFAULT '[]',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_journals_date ON journals (date);

CREATE TABLE IF NOT EXISTS goals (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    category TEXT NOT NULL,
    priority TEXT NOT NULL,
    status TEXT NOT NULL,
    target_date TEXT NOT NULL,
    progress INTEGER NOT NULL DEFAULT 0,
    milestones TEXT NOT NULL DEFAULT '[]',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS habits (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    category TEXT NOT NULL,
    frequency TEXT NOT NULL,
    target_count INTEGER NOT NULL DEFAULT 1,
    current_streak INTEGER NOT NULL DEFAULT 0,
    longest_streak INTEGER NOT NULL DEFAULT 0,
    completions TEXT NOT NULL DEFAULT '[]',
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS tips (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    category TEXT NOT NULL,
    difficulty TEXT NOT NULL,
    duration TEXT NOT NULL,
    featured INTEGER NOT NULL DEFAULT 0,
    rating REAL NOT NULL DEFAULT 4.0,
    completions INTEGER NOT NULL DEFAULT 0,
    benefits TEXT NOT NULL DEFAULT '[]',
    instructions TEXT NOT NULL DEFAULT '[]',
    resources TEXT NOT NULL DEFAULT '[]',
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class DatabaseManager:
    """
    SQLite database manager for wellness records.
    Every collection lives in one database file; each request
    opens its own short-lived connection.
    """

    def __init__(self, settings=None):
        self.settings = settings or get_settings()

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Open a connection that commits on success and rolls back on error.
        """
        conn = sqlite3.connect(self.settings.database_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row  # Enable dict-like row access
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create the collection tables if they do not exist yet."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)
        log.info(f"[DATABASE] Schema ready at {self.settings.database_path}")


# Singleton instance
db_manager = DatabaseManager()
