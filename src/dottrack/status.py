"""Current question status derived from the attempt log."""
from typing import Iterable

from dottrack.keys import QuestionKey, make_key
from dottrack.models import Attempt, Unit, UNATTEMPTED, CORRECT, INCORRECT

PRACTICE_FILTERS = ("all", "incorrect", "unattempted")

_CYCLE = {
    UNATTEMPTED: CORRECT,
    CORRECT: INCORRECT,
    INCORRECT: UNATTEMPTED,
}


def resolve(attempts: Iterable[Attempt]) -> dict[QuestionKey, str]:
    """Map each attempted question to the status of its latest attempt.

    Attempts are ordered by timestamp; ``sorted`` is stable, so attempts
    sharing a timestamp apply in log order. Questions with no attempts are
    absent from the result and count as unattempted.
    """
    status_map = {}
    for attempt in sorted(attempts, key=lambda a: a.timestamp):
        status_map[make_key(attempt.unit_id, attempt.question_index)] = attempt.status
    return status_map


def status_of(status_map: dict[QuestionKey, str], unit_id: str, question_index: int) -> str:
    return status_map.get(make_key(unit_id, question_index), UNATTEMPTED)


def next_status(current: str) -> str:
    """Next status in the unattempted -> correct -> incorrect cycle."""
    return _CYCLE[current]


def filter_questions(unit: Unit, status_map: dict[QuestionKey, str], practice_filter: str = "all") -> list[int]:
    """Question indexes of a unit that pass the practice filter."""
    if practice_filter not in PRACTICE_FILTERS:
        raise ValueError(f"Unknown practice filter: {practice_filter!r}")
    indexes = []
    for i in range(1, unit.count + 1):
        status = status_of(status_map, unit.id, i)
        if practice_filter != "all" and status != practice_filter:
            continue
        indexes.append(i)
    return indexes
