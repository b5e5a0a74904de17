"""Attempt log and review queue transitions.

The module-level functions are pure: they take a TrackerState and return a
new one. ``Tracker`` wraps them for the console app, holding the current
state and saving it after every change.
"""
import sqlite3
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from loguru import logger

from dottrack.keys import format_key, make_key, today_str
from dottrack.models import Attempt, Project, ReviewItem, CORRECT, INCORRECT, UNATTEMPTED
from dottrack.review_queue import ReviewQueue, apply_transition, due_today, queue_from_items, queue_items
from dottrack.srs import schedule
from dottrack.status import next_status, resolve, status_of
from dottrack.storage import Storage


@dataclass(frozen=True)
class TrackerState:
    attempts: tuple[Attempt, ...] = ()
    queue: ReviewQueue = field(default_factory=dict)


def _timestamp(state: TrackerState, now: datetime) -> int:
    # Never go back in time relative to the log, so log order and timestamp order agree
    millis = int(now.timestamp() * 1000)
    if state.attempts:
        millis = max(millis, state.attempts[-1].timestamp)
    return millis


def record(
    state: TrackerState,
    project_id: str,
    unit_id: str,
    question_index: int,
    status: str,
    now: Optional[datetime] = None,
) -> TrackerState:
    """Append an attempt with ``status`` and update the question's review entry."""
    now = now or datetime.now()
    key = make_key(unit_id, question_index)
    attempt = Attempt(
        project_id=project_id,
        unit_id=unit_id,
        question_index=question_index,
        status=status,
        timestamp=_timestamp(state, now),
        date_str=today_str(now),
    )

    scheduled = None
    # Resetting a question drops its review history entirely
    if status != UNATTEMPTED:
        scheduled = schedule(status, state.queue.get(key), attempt.date_str)
        if scheduled is not None:
            scheduled = replace(
                scheduled, project_id=project_id, unit_id=unit_id, question_index=question_index,
            )

    return TrackerState(
        attempts=state.attempts + (attempt,),
        queue=apply_transition(state.queue, key, scheduled),
    )


def advance(state, project_id, unit_id, question_index, now=None) -> TrackerState:
    """Move a question one step along unattempted -> correct -> incorrect."""
    current = status_of(resolve(state.attempts), unit_id, question_index)
    return record(state, project_id, unit_id, question_index, next_status(current), now)


def mark_still_wrong(state, project_id, unit_id, question_index, now=None) -> TrackerState:
    return record(state, project_id, unit_id, question_index, INCORRECT, now)


def mark_resolved(state, project_id, unit_id, question_index, now=None) -> TrackerState:
    return record(state, project_id, unit_id, question_index, CORRECT, now)


class Tracker:
    """Holds the live state for one project and persists each change."""

    def __init__(self, storage: Storage, project: Project, state: Optional[TrackerState] = None):
        self.storage = storage
        self.project = project
        self.state = state or TrackerState()

    @classmethod
    def load(cls, storage: Storage, project: Project) -> "Tracker":
        attempts = storage.load_attempts()
        queue, duplicates = queue_from_items(storage.load_review_queue())
        for key in duplicates:
            logger.warning(f"Duplicate review entry for {format_key(key)}, keeping the last one")
        logger.debug(f"Loaded {len(attempts)} attempts and {len(queue)} review items")
        return cls(storage, project, TrackerState(attempts=tuple(attempts), queue=queue))

    def status_map(self) -> dict:
        return resolve(self.state.attempts)

    def status(self, unit_id: str, question_index: int) -> str:
        return status_of(self.status_map(), unit_id, question_index)

    def due_reviews(self, today: Optional[str] = None) -> list[ReviewItem]:
        return due_today(self.state.queue, today or self.storage.today())

    def advance(self, unit_id: str, question_index: int, now: Optional[datetime] = None) -> str:
        self._commit(advance(self.state, self.project.id, unit_id, question_index, now))
        return self.state.attempts[-1].status

    def mark_still_wrong(self, unit_id: str, question_index: int, now: Optional[datetime] = None) -> None:
        self._commit(mark_still_wrong(self.state, self.project.id, unit_id, question_index, now))

    def mark_resolved(self, unit_id: str, question_index: int, now: Optional[datetime] = None) -> None:
        self._commit(mark_resolved(self.state, self.project.id, unit_id, question_index, now))

    def _commit(self, new_state: TrackerState) -> None:
        self.state = new_state
        last = new_state.attempts[-1]
        logger.debug(f"{format_key(make_key(last.unit_id, last.question_index))} -> {last.status}")
        try:
            self.storage.save_attempts(self.state.attempts)
            self.storage.save_review_queue(queue_items(self.state.queue))
        except (sqlite3.Error, OSError) as e:
            # In-memory state stays ahead; the next successful save catches up
            logger.error(f"Failed to save progress: {e}")
