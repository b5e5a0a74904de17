"""Project and unit setup."""
import time
import uuid
from dataclasses import replace
from typing import Optional

from dottrack.models import Project, Unit


def build_units(unit_count: int, default_count: int) -> list[Unit]:
    """Generate units u1..uN, each with ``default_count`` questions."""
    if unit_count < 0 or default_count < 0:
        raise ValueError("Unit and question counts must not be negative")
    return [Unit(id=f"u{i}", name=str(i), count=default_count) for i in range(1, unit_count + 1)]


def set_unit_count(units: list[Unit], index: int, value) -> list[Unit]:
    """Copy of ``units`` with one unit's question count replaced.

    Text that is not a whole number counts as 0.
    """
    try:
        count = int(value)
    except (TypeError, ValueError):
        count = 0
    count = max(count, 0)
    updated = list(units)
    updated[index] = replace(units[index], count=count)
    return updated


def create_project(name: str, units: list[Unit], now: Optional[float] = None) -> Project:
    created = now if now is not None else time.time()
    return Project(
        id=str(uuid.uuid4()),
        name=name.strip() or "My Practice Project",
        created_at=int(created * 1000),
        units=list(units),
    )


def find_unit(project: Project, unit_id: str) -> Optional[Unit]:
    for unit in project.units:
        if unit.id == unit_id:
            return unit
    return None


def is_valid_question(project: Project, unit_id: str, question_index: int) -> bool:
    unit = find_unit(project, unit_id)
    return unit is not None and 1 <= question_index <= unit.count
