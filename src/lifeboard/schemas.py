import uuid
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ItemType(str, Enum):
    TASK = "task"
    EVENT = "event"
    NOTE = "note"
    IDEA = "idea"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecurrenceRule(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"


class RecordKind(str, Enum):
    """Which persistence table a parsed item ends up in."""

    TASK = "task"
    EVENT = "event"
    NOTE = "note"
    SUPPLEMENT = "supplement"
    PROJECT = "project"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class ShoppingCategory(str, Enum):
    FOOD = "food"
    CLOTHING = "clothing"
    SUPPLEMENTS = "supplements"
    OTHER = "other"


def generate_id() -> str:
    return str(uuid.uuid4())


class Category(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    icon: str | None = None
    color: str | None = None


class TaskRecord(BaseModel):
    kind: RecordKind = RecordKind.TASK
    title: str
    category_id: str | None = None
    description: str | None = None
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM
    recur_rule: RecurrenceRule | None = None
    status: TaskStatus = TaskStatus.PENDING


class EventRecord(BaseModel):
    kind: RecordKind = RecordKind.EVENT
    title: str
    category_id: str
    start_at: datetime
    end_at: datetime
    description: str | None = None
    location: str | None = None
    recur_rule: RecurrenceRule | None = None


class NoteRecord(BaseModel):
    kind: RecordKind = RecordKind.NOTE
    category_id: str
    content_md: str


class SupplementRecord(BaseModel):
    kind: RecordKind = RecordKind.SUPPLEMENT
    name: str
    category_id: str | None = None
    quantity_servings: int = 30
    servings_per_day: int = 1


class ProjectRecord(BaseModel):
    kind: RecordKind = RecordKind.PROJECT
    name: str
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE


Record = TaskRecord | EventRecord | NoteRecord | SupplementRecord | ProjectRecord
