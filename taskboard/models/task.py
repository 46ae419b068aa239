import enum

from sqlalchemy import Column, String, Text, Date, DateTime, Enum
from taskboard.database import Base
from taskboard.models.user import new_id, utcnow


class TaskStatus(str, enum.Enum):
    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, default=new_id)
    # projects.id and users.id references are advisory, no foreign keys
    project_id = Column(String(32), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        Enum(TaskStatus, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        default=TaskStatus.TODO,
        nullable=False,
    )
    assignee = Column(String(32), nullable=True)
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
