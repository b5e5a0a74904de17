"""SQLite-backed persistence for the project, attempt log and review queue.

Loads never raise: a missing or unreadable database reads as empty, and
rows that fail validation are skipped with a warning.
"""
import sqlite3
from typing import Iterable, Optional

from loguru import logger

from dottrack.db import get_connection, init_db
from dottrack.keys import today_str
from dottrack.models import Attempt, Project, ReviewItem, Unit


class Storage:
    """Read/write contract used by the tracker and the console app."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def initialize(self) -> None:
        init_db(self.db_path)

    def today(self) -> str:
        return today_str()

    # --- Project ---

    def load_project(self) -> Optional[Project]:
        try:
            conn = get_connection(self.db_path)
            try:
                row = conn.execute(
                    "SELECT * FROM projects ORDER BY created_at LIMIT 1"
                ).fetchone()
                if row is None:
                    return None
                units = conn.execute(
                    "SELECT * FROM units WHERE project_id = ? ORDER BY position",
                    (row["id"],),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Could not load project from {self.db_path}: {e}")
            return None
        return Project(
            id=row["id"],
            name=row["name"],
            created_at=row["created_at"],
            units=[Unit(id=u["unit_id"], name=u["name"], count=u["count"]) for u in units],
        )

    def save_project(self, project: Project) -> None:
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.execute(
                    """INSERT INTO projects (id, name, created_at) VALUES (?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET name=excluded.name""",
                    (project.id, project.name, project.created_at),
                )
                conn.execute("DELETE FROM units WHERE project_id = ?", (project.id,))
                conn.executemany(
                    "INSERT INTO units (project_id, position, unit_id, name, count) VALUES (?, ?, ?, ?, ?)",
                    [(project.id, pos, u.id, u.name, u.count) for pos, u in enumerate(project.units)],
                )
        finally:
            conn.close()
        logger.info(f"Saved project {project.name!r} with {len(project.units)} units")

    def delete_project(self) -> None:
        """Remove the project along with its attempts and review items."""
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.execute("DELETE FROM review_items")
                conn.execute("DELETE FROM attempts")
                conn.execute("DELETE FROM units")
                conn.execute("DELETE FROM projects")
        finally:
            conn.close()
        logger.info("Deleted project and all practice history")

    # --- Attempt log ---

    def load_attempts(self) -> list[Attempt]:
        rows = self._fetch_all("SELECT * FROM attempts ORDER BY id")
        attempts = []
        for row in rows:
            try:
                attempts.append(Attempt.from_dict({
                    "projectId": row["project_id"],
                    "unitId": row["unit_id"],
                    "questionIndex": row["question_index"],
                    "status": row["status"],
                    "timestamp": row["timestamp"],
                    "dateStr": row["date_str"],
                }))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed attempt row {row['id']}: {e}")
        return attempts

    def save_attempts(self, attempts: Iterable[Attempt]) -> None:
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.execute("DELETE FROM attempts")
                conn.executemany(
                    """INSERT INTO attempts
                    (project_id, unit_id, question_index, status, timestamp, date_str)
                    VALUES (?, ?, ?, ?, ?, ?)""",
                    [
                        (a.project_id, a.unit_id, a.question_index, a.status, a.timestamp, a.date_str)
                        for a in attempts
                    ],
                )
        finally:
            conn.close()

    # --- Review queue ---

    def load_review_queue(self) -> list[ReviewItem]:
        rows = self._fetch_all("SELECT * FROM review_items ORDER BY id")
        items = []
        for row in rows:
            try:
                items.append(ReviewItem.from_dict({
                    "projectId": row["project_id"],
                    "unitId": row["unit_id"],
                    "questionIndex": row["question_index"],
                    "dueDate": row["due_date"],
                    "interval": row["interval"],
                    "lastReviewDate": row["last_review_date"],
                }))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed review row {row['id']}: {e}")
        return items

    def save_review_queue(self, items: Iterable[ReviewItem]) -> None:
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.execute("DELETE FROM review_items")
                conn.executemany(
                    """INSERT INTO review_items
                    (project_id, unit_id, question_index, due_date, interval, last_review_date)
                    VALUES (?, ?, ?, ?, ?, ?)""",
                    [
                        (r.project_id, r.unit_id, r.question_index, r.due_date, r.interval, r.last_review_date)
                        for r in items
                    ],
                )
        finally:
            conn.close()

    def _fetch_all(self, sql: str) -> list[sqlite3.Row]:
        try:
            conn = get_connection(self.db_path)
            try:
                return conn.execute(sql).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Load failed for {self.db_path}, treating as empty: {e}")
            return []
