from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from taskboard.utils.sanitization import sanitize_string


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class Project(BaseModel):
    id: str
    name: str
    description: str
    created_by: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class Message(BaseModel):
    message: str
