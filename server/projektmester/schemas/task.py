"""Task schemas."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from projektmester.schemas.common import validate_iso_date, none_to_empty


class TaskStatus(str, Enum):
    """Task workflow states."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class MoveDirection(str, Enum):
    """Direction of an adjacent-swap reorder."""
    UP = "up"
    DOWN = "down"


class TaskBase(BaseModel):
    """Base task schema."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    status: TaskStatus = TaskStatus.OPEN
    start_date: str = ""
    due_date: str = ""

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v

    @field_validator("start_date", "due_date")
    @classmethod
    def check_dates(cls, v: str) -> str:
        return validate_iso_date(v)


class TaskCreate(TaskBase):
    """Task creation schema. Order is assigned by the server."""

    pass


class TaskUpdate(TaskBase):
    """Task update schema. Order changes only through a move."""

    pass


class TaskMove(BaseModel):
    """Task move request."""

    direction: MoveDirection


class Task(BaseModel):
    """Task as persisted and returned."""

    model_config = ConfigDict(extra="ignore")

    id: str
    project_id: str = ""
    title: str = ""
    description: str = ""
    status: str = TaskStatus.OPEN.value
    start_date: str = ""
    due_date: str = ""
    order: int = 0
    created_by: str = ""

    @field_validator("project_id", "title", "description", "status", "start_date", "due_date", "created_by", mode="before")
    @classmethod
    def text_none_to_empty(cls, v):
        return none_to_empty(v)

    @field_validator("order", mode="before")
    @classmethod
    def missing_order(cls, v):
        return 0 if v is None else v
