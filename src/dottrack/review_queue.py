"""Pending review entries, one per question."""
from typing import Iterable, Optional

from dottrack.keys import QuestionKey, make_key
from dottrack.models import ReviewItem

ReviewQueue = dict[QuestionKey, ReviewItem]


def item_key(item: ReviewItem) -> QuestionKey:
    return make_key(item.unit_id, item.question_index)


def apply_transition(queue: ReviewQueue, key: QuestionKey, scheduled: Optional[ReviewItem]) -> ReviewQueue:
    """Return a new queue with the key's entry replaced by ``scheduled``.

    The input queue is left untouched. A None ``scheduled`` just drops the key.
    """
    updated = {k: v for k, v in queue.items() if k != key}
    if scheduled is not None:
        updated[key] = scheduled
    return updated


def due_today(queue: ReviewQueue, today: str) -> list[ReviewItem]:
    """Entries due on or before ``today``, most overdue first."""
    due = [item for item in queue.values() if item.due_date <= today]
    return sorted(due, key=lambda item: item.due_date)


def is_overdue(item: ReviewItem, today: str) -> bool:
    return item.due_date < today


def queue_from_items(items: Iterable[ReviewItem]) -> tuple[ReviewQueue, list[QuestionKey]]:
    """Build a queue from a flat list. Later items win on duplicate keys.

    Returns the queue and the keys that appeared more than once.
    """
    queue = {}
    duplicates = []
    for item in items:
        key = item_key(item)
        if key in queue:
            duplicates.append(key)
        queue[key] = item
    return queue, duplicates


def queue_items(queue: ReviewQueue) -> list[ReviewItem]:
    return list(queue.values())
