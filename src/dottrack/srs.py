"""Review scheduling for missed questions.

A simplified forgetting-curve rule rather than a full SM-2: a first miss
comes back in two days, a miss while already under review comes back the
next day, and a correct answer takes the question out of review.
"""
from typing import Optional

from dottrack.keys import add_days
from dottrack.models import ReviewItem, INCORRECT

FIRST_MISS_INTERVAL = 2
REPEAT_MISS_INTERVAL = 1


def schedule(
    new_status: str,
    previous: Optional[ReviewItem],
    today: str,
) -> Optional[ReviewItem]:
    """Calculate the next review entry for a question.

    Args:
        new_status: Status the question was just given.
        previous: The question's pending review entry, if any.
        today: Current date as YYYY-MM-DD.

    Returns:
        A ReviewItem with blank identifiers for the caller to fill in, or
        None when no review should be pending.
    """
    if new_status != INCORRECT:
        return None

    # Repeated misses keep the question surfacing daily instead of backing off
    interval = REPEAT_MISS_INTERVAL if previous is not None else FIRST_MISS_INTERVAL
    return ReviewItem(
        project_id="",
        unit_id="",
        question_index=0,
        due_date=add_days(today, interval),
        interval=interval,
        last_review_date=today,
    )
