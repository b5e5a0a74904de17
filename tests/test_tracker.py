# tests/test_tracker.py
import sqlite3
from datetime import datetime
from unittest.mock import MagicMock

from dottrack.keys import add_days
from dottrack.models import Project, Unit
from dottrack.status import resolve, status_of
from dottrack.tracker import (
    Tracker, TrackerState, advance, mark_resolved, mark_still_wrong, record,
)

DAY1 = datetime(2024, 1, 1, 9, 0)
DAY3 = datetime(2024, 1, 3, 9, 0)
DAY4 = datetime(2024, 1, 4, 9, 0)


def test_record_appends_one_attempt():
    state = record(TrackerState(), "p1", "u1", 3, "incorrect", now=DAY1)
    assert len(state.attempts) == 1
    attempt = state.attempts[0]
    assert attempt.project_id == "p1"
    assert attempt.date_str == "2024-01-01"
    assert attempt.timestamp == int(DAY1.timestamp() * 1000)


def test_record_stamps_review_identifiers():
    state = record(TrackerState(), "p1", "u1", 3, "incorrect", now=DAY1)
    item = state.queue[("u1", 3)]
    assert (item.project_id, item.unit_id, item.question_index) == ("p1", "u1", 3)


def test_record_does_not_mutate_previous_state():
    first = record(TrackerState(), "p1", "u1", 3, "incorrect", now=DAY1)
    record(first, "p1", "u1", 3, "correct", now=DAY3)
    assert len(first.attempts) == 1
    assert ("u1", 3) in first.queue


def test_timestamps_never_go_backwards():
    state = record(TrackerState(), "p1", "u1", 1, "correct", now=DAY3)
    state = record(state, "p1", "u1", 1, "incorrect", now=DAY1)
    assert state.attempts[1].timestamp >= state.attempts[0].timestamp
    assert status_of(resolve(state.attempts), "u1", 1) == "incorrect"


def test_scenario_miss_miss_correct():
    state = advance(TrackerState(), "p1", "u1", 3, now=DAY1)  # -> correct
    state = advance(state, "p1", "u1", 3, now=DAY1)  # -> incorrect
    item = state.queue[("u1", 3)]
    assert (item.due_date, item.interval) == ("2024-01-03", 2)

    state = mark_still_wrong(state, "p1", "u1", 3, now=DAY3)
    item = state.queue[("u1", 3)]
    assert (item.due_date, item.interval) == ("2024-01-04", 1)

    state = mark_resolved(state, "p1", "u1", 3, now=DAY4)
    assert ("u1", 3) not in state.queue
    assert status_of(resolve(state.attempts), "u1", 3) == "correct"


def test_mark_incorrect_from_unattempted_gives_interval_two():
    state = mark_still_wrong(TrackerState(), "p1", "u1", 3, now=DAY1)
    assert state.queue[("u1", 3)].interval == 2
    assert state.queue[("u1", 3)].due_date == "2024-01-03"


def test_full_cycle_leaves_three_attempts_no_reviews():
    state = TrackerState()
    for _ in range(3):
        state = advance(state, "p1", "u1", 1, now=DAY1)
    assert [a.status for a in state.attempts] == ["correct", "incorrect", "unattempted"]
    assert state.queue == {}


def test_reset_discards_review_history():
    """After a reset, the next miss schedules like a first miss."""
    state = mark_still_wrong(TrackerState(), "p1", "u1", 1, now=DAY1)
    state = mark_still_wrong(state, "p1", "u1", 1, now=DAY3)
    assert state.queue[("u1", 1)].interval == 1
    state = advance(state, "p1", "u1", 1, now=DAY3)  # incorrect -> unattempted
    assert state.queue == {}
    state = mark_still_wrong(state, "p1", "u1", 1, now=DAY4)
    assert state.queue[("u1", 1)].interval == 2


def test_mark_resolved_idempotent():
    state = mark_still_wrong(TrackerState(), "p1", "u1", 1, now=DAY1)
    once = mark_resolved(state, "p1", "u1", 1, now=DAY3)
    twice = mark_resolved(once, "p1", "u1", 1, now=DAY3)
    assert once.queue == twice.queue == {}


def test_other_questions_untouched():
    state = mark_still_wrong(TrackerState(), "p1", "u1", 1, now=DAY1)
    state = mark_still_wrong(state, "p1", "u2", 1, now=DAY1)
    state = mark_resolved(state, "p1", "u1", 1, now=DAY3)
    assert list(state.queue) == [("u2", 1)]


def test_every_produced_item_satisfies_due_date_rule():
    state = TrackerState()
    for now in (DAY1, DAY3, DAY4):
        for q in range(1, 4):
            state = advance(state, "p1", "u1", q, now=now)
            state = mark_still_wrong(state, "p1", "u1", q, now=now)
            for item in state.queue.values():
                assert item.interval >= 1
                assert item.due_date == add_days(item.last_review_date, item.interval)


def _project():
    return Project(id="p1", name="Calc", created_at=0, units=[Unit(id="u1", name="1", count=5)])


def test_tracker_persists_after_each_change():
    storage = MagicMock()
    tracker = Tracker(storage, _project())
    assert tracker.advance("u1", 1, now=DAY1) == "correct"
    storage.save_attempts.assert_called_once()
    storage.save_review_queue.assert_called_once()
    assert len(storage.save_attempts.call_args[0][0]) == 1


def test_tracker_keeps_state_when_save_fails():
    storage = MagicMock()
    storage.save_attempts.side_effect = sqlite3.OperationalError("disk I/O error")
    tracker = Tracker(storage, _project())
    tracker.mark_still_wrong("u1", 2, now=DAY1)
    assert len(tracker.state.attempts) == 1
    assert tracker.status("u1", 2) == "incorrect"


def test_tracker_due_reviews_uses_storage_today():
    storage = MagicMock()
    storage.today.return_value = "2024-01-03"
    tracker = Tracker(storage, _project())
    tracker.mark_still_wrong("u1", 2, now=DAY1)
    assert [r.question_index for r in tracker.due_reviews()] == [2]
    assert tracker.due_reviews("2024-01-02") == []
