# task_api/models.py

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_serializer


# -----------------------------
# API Enums (must match DB)
# -----------------------------
class TaskStatus(str, Enum):
    TODO = "Todo"
    DOING = "Doing"
    DONE = "Done"

    def to_db(self) -> str:
        return _STATUS_TO_DB[self]

    @classmethod
    def from_db(cls, value: str) -> "TaskStatus":
        try:
            return _DB_TO_STATUS[value]
        except KeyError:
            raise ValueError(f"Unknown stored task status: {value!r}") from None


_STATUS_TO_DB = {
    TaskStatus.TODO: "todo",
    TaskStatus.DOING: "doing",
    TaskStatus.DONE: "done",
}
_DB_TO_STATUS = {stored: status for status, stored in _STATUS_TO_DB.items()}

STORED_STATUS_VALUES = tuple(_STATUS_TO_DB.values())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# -----------------------------
# Task Models
# -----------------------------
class TaskCreate(BaseModel):
    title: str
    description: str


class TaskUpdate(BaseModel):
    title: str
    description: str


class Task(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, title: str, description: str) -> "Task":
        now = utcnow()
        return cls(
            id=uuid.uuid4(),
            title=title,
            description=description,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_record(cls, record) -> "Task":
        task_id = record["id"]
        return cls(
            id=task_id if isinstance(task_id, uuid.UUID) else uuid.UUID(str(task_id)),
            title=record["title"],
            description=record["description"],
            status=TaskStatus.from_db(record["status"]),
            created_at=as_utc(record["created_at"]),
            updated_at=as_utc(record["updated_at"]),
        )

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return as_utc(value).isoformat()


class HealthSnapshot(BaseModel):
    status: str
    service: str
    database: str
    timestamp: str = Field(default_factory=lambda: utcnow().isoformat())
