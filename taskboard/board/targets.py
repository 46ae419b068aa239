from dataclasses import dataclass

from taskboard.models.task import TaskStatus


@dataclass(frozen=True)
class ColumnTarget:
    """Dropped on a column itself (its empty area or header)."""
    status: TaskStatus


@dataclass(frozen=True)
class TaskTarget:
    """Dropped on another task card."""
    task_id: str


DropTarget = ColumnTarget | TaskTarget
