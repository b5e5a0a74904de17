"""Tests for database initialization and connection management."""
from dottrack.db import DEFAULT_DB_PATH, init_db, get_connection, resolve_db_path


def test_init_db_creates_tables(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
    )
    tables = {row[0] for row in cursor.fetchall()}
    assert {"projects", "units", "attempts", "review_items"}.issubset(tables)
    conn.close()


def test_init_db_is_idempotent(tmp_db):
    init_db(tmp_db)
    init_db(tmp_db)  # should not raise
    conn = get_connection(tmp_db)
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    assert len(cursor.fetchall()) > 0
    conn.close()


def test_init_db_creates_parent_dir(tmp_path):
    db_path = str(tmp_path / "nested" / "dir" / "t.db")
    init_db(db_path)
    assert (tmp_path / "nested" / "dir" / "t.db").exists()


def test_get_connection_returns_row_factory(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    conn.execute("INSERT INTO projects (id, name, created_at) VALUES ('p1', 'P', 0)")
    row = conn.execute("SELECT id, name FROM projects WHERE id='p1'").fetchone()
    assert row["name"] == "P"
    conn.close()


def test_resolve_db_path_env_override(monkeypatch, tmp_db):
    monkeypatch.setenv("DOTTRACK_DB_PATH", tmp_db)
    assert resolve_db_path() == tmp_db
    monkeypatch.delenv("DOTTRACK_DB_PATH")
    assert resolve_db_path() == DEFAULT_DB_PATH
