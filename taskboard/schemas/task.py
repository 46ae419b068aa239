from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from taskboard.models.task import TaskStatus
from taskboard.utils.sanitization import sanitize_string


# ── Common base for readable/writeable fields ──
class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    status: TaskStatus = TaskStatus.TODO
    assignee: str | None = None
    due_date: date | None = Field(None, validation_alias=AliasChoices("due_date", "dueDate"))

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("assignee", "due_date", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        # Forms send "" for "no assignee" / "no due date"
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    """Partial update; only keys present in the request body are written."""
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1)
    status: TaskStatus | None = None
    assignee: str | None = None
    due_date: date | None = Field(None, validation_alias=AliasChoices("due_date", "dueDate"))

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("assignee", "due_date", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Task(TaskBase):
    id: str
    project_id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
