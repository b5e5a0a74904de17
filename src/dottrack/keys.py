"""Question identifiers and calendar date helpers."""
from datetime import date, datetime, timedelta
from typing import Optional

QuestionKey = tuple[str, int]


def make_key(unit_id: str, question_index: int) -> QuestionKey:
    return (unit_id, question_index)


def format_key(key: QuestionKey) -> str:
    """Display form, e.g. ``u1-3``. Not used for lookups."""
    unit_id, question_index = key
    return f"{unit_id}-{question_index}"


def today_str(now: Optional[datetime] = None) -> str:
    """Today's date in local time as YYYY-MM-DD."""
    if now is None:
        return date.today().isoformat()
    return now.date().isoformat()


def add_days(date_str: str, days: int) -> str:
    return (date.fromisoformat(date_str) + timedelta(days=days)).isoformat()
