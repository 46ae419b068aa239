from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskboard.errors import NotFoundError
from taskboard.models.task import Task
from taskboard.schemas.task import TaskCreate, TaskUpdate

# Columns that must never be written as NULL by a partial update
_REQUIRED_FIELDS = {"title", "description", "status"}


async def create_task(db: AsyncSession, project_id: str, task_data: TaskCreate) -> Task:
    new_task = Task(
        project_id=project_id,
        title=task_data.title,
        description=task_data.description,
        status=task_data.status,
        assignee=task_data.assignee,
        due_date=task_data.due_date,
    )
    db.add(new_task)
    await db.commit()
    return new_task


async def list_tasks_for_project(db: AsyncSession, project_id: str) -> list[Task]:
    result = await db.execute(
        select(Task)
        .filter(Task.project_id == project_id)
        .order_by(Task.created_at, Task.id)
    )
    return list(result.scalars().all())


async def get_task_by_id(db: AsyncSession, task_id: str) -> Task:
    result = await db.execute(select(Task).filter(Task.id == task_id))
    task = result.scalars().first()
    if not task:
        raise NotFoundError("Task not found")
    return task


async def update_task(db: AsyncSession, task_id: str, update_data: TaskUpdate) -> Task:
    task = await get_task_by_id(db, task_id)

    changes = update_data.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(task, key, value)

    await db.commit()
    return task


async def delete_task(db: AsyncSession, task_id: str) -> None:
    task = await get_task_by_id(db, task_id)
    await db.delete(task)
    await db.commit()
