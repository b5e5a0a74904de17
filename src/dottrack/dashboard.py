"""Practice statistics for the dashboard."""
import calendar
from datetime import date
from typing import Iterable

from dottrack.models import Attempt, DayStats, Project, CORRECT, INCORRECT
from dottrack.review_queue import ReviewQueue, due_today
from dottrack.status import status_of


def day_stats(attempts: Iterable[Attempt], date_str: str) -> DayStats:
    """Counts of attempts recorded on one calendar day."""
    stats = DayStats(date=date_str)
    for a in attempts:
        if a.date_str != date_str:
            continue
        stats.total += 1
        if a.status == CORRECT:
            stats.correct += 1
        elif a.status == INCORRECT:
            stats.incorrect += 1
    return stats


def month_stats(attempts: Iterable[Attempt], year: int, month: int) -> list[DayStats]:
    """DayStats for every day of a month, in date order."""
    by_date = {}
    for a in attempts:
        by_date.setdefault(a.date_str, []).append(a)
    _, days_in_month = calendar.monthrange(year, month)
    results = []
    for day in range(1, days_in_month + 1):
        date_str = date(year, month, day).isoformat()
        results.append(day_stats(by_date.get(date_str, []), date_str))
    return results


def _percent(part: int, whole: int) -> int:
    # Halves round up, so 1 of 8 reads 13%
    return int(part * 100 / whole + 0.5)


def success_band(stats: DayStats) -> str:
    if not stats.total:
        return "none"
    rate = stats.correct / stats.total
    if rate > 0.8:
        return "high"
    elif rate < 0.5:
        return "low"
    return "medium"


def get_unit_progress(project: Project, status_map: dict) -> list[dict]:
    results = []
    for unit in project.units:
        statuses = [status_of(status_map, unit.id, i) for i in range(1, unit.count + 1)]
        correct = statuses.count(CORRECT)
        incorrect = statuses.count(INCORRECT)
        results.append({
            "unit_id": unit.id,
            "name": unit.name,
            "total": unit.count,
            "correct": correct,
            "incorrect": incorrect,
            "unattempted": unit.count - correct - incorrect,
        })
    return results


def get_summary(project: Project, status_map: dict, queue: ReviewQueue, today: str) -> dict:
    units = get_unit_progress(project, status_map)
    correct = sum(u["correct"] for u in units)
    incorrect = sum(u["incorrect"] for u in units)
    done = correct + incorrect
    return {
        "questions_total": sum(u["total"] for u in units),
        "questions_done": done,
        "correct": correct,
        "incorrect": incorrect,
        "accuracy": _percent(correct, done) if done else None,
        "reviews_due": len(due_today(queue, today)),
    }
