"""Data classes for the tracker domain model."""
from dataclasses import dataclass, field

UNATTEMPTED = "unattempted"
CORRECT = "correct"
INCORRECT = "incorrect"
STATUSES = (UNATTEMPTED, CORRECT, INCORRECT)


@dataclass
class Unit:
    id: str
    name: str
    count: int = 0

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict) -> "Unit":
        return cls(id=str(data["id"]), name=str(data["name"]), count=int(data["count"]))


@dataclass
class Project:
    id: str
    name: str
    created_at: int
    units: list[Unit] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "units": [u.to_dict() for u in self.units],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            created_at=int(data["createdAt"]),
            units=[Unit.from_dict(u) for u in data.get("units", [])],
        )


@dataclass(frozen=True)
class Attempt:
    """One status assignment to one question. Never mutated."""
    project_id: str
    unit_id: str
    question_index: int  # 1-based
    status: str
    timestamp: int  # wall-clock millis
    date_str: str  # YYYY-MM-DD, local

    def to_dict(self) -> dict:
        return {
            "projectId": self.project_id,
            "unitId": self.unit_id,
            "questionIndex": self.question_index,
            "status": self.status,
            "timestamp": self.timestamp,
            "dateStr": self.date_str,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Attempt":
        status = data["status"]
        if status not in STATUSES:
            raise ValueError(f"Unknown status: {status!r}")
        return cls(
            project_id=str(data["projectId"]),
            unit_id=str(data["unitId"]),
            question_index=int(data["questionIndex"]),
            status=status,
            timestamp=int(data["timestamp"]),
            date_str=str(data["dateStr"]),
        )


@dataclass(frozen=True)
class ReviewItem:
    """A scheduled re-presentation of a missed question."""
    project_id: str
    unit_id: str
    question_index: int
    due_date: str
    interval: int  # days
    last_review_date: str

    def to_dict(self) -> dict:
        return {
            "projectId": self.project_id,
            "unitId": self.unit_id,
            "questionIndex": self.question_index,
            "dueDate": self.due_date,
            "interval": self.interval,
            "lastReviewDate": self.last_review_date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReviewItem":
        return cls(
            project_id=str(data["projectId"]),
            unit_id=str(data["unitId"]),
            question_index=int(data["questionIndex"]),
            due_date=str(data["dueDate"]),
            interval=int(data["interval"]),
            last_review_date=str(data["lastReviewDate"]),
        )


@dataclass
class DayStats:
    date: str
    total: int = 0
    correct: int = 0
    incorrect: int = 0
