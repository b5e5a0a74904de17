"""Database initialization and connection management."""
import os
import sqlite3
from pathlib import Path

from loguru import logger

DEFAULT_DB_PATH = str(Path.home() / ".dottrack" / "dottrack.db")

SCHEMA = """
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    created_at INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS units (
    project_id TEXT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    unit_id TEXT NOT NULL,
    name TEXT NOT NULL,
    count INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (project_id, unit_id)
);

CREATE TABLE IF NOT EXISTS attempts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id TEXT NOT NULL,
    unit_id TEXT NOT NULL,
    question_index INTEGER NOT NULL,
    status TEXT NOT NULL,
    timestamp INTEGER NOT NULL,
    date_str TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS review_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id TEXT NOT NULL,
    unit_id TEXT NOT NULL,
    question_index INTEGER NOT NULL,
    due_date TEXT NOT NULL,
    interval INTEGER NOT NULL CHECK (interval >= 1),
    last_review_date TEXT NOT NULL,
    UNIQUE(project_id, unit_id, question_index)
);

CREATE INDEX IF NOT EXISTS idx_review_items_due ON review_items(due_date);
"""


def resolve_db_path() -> str:
    """Database path from DOTTRACK_DB_PATH, falling back to the default."""
    return os.environ.get("DOTTRACK_DB_PATH") or DEFAULT_DB_PATH


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
    logger.debug(f"Database ready at {db_path}")
