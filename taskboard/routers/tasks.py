from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.dependencies import get_db, get_current_user
from taskboard.schemas.project import Message
from taskboard.schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate
from taskboard.services import tasks as task_service

router = APIRouter(tags=["tasks"], dependencies=[Depends(get_current_user)])

@router.post("/projects/{project_id}/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
async def create_task(project_id: str, task_data: TaskCreate, db: AsyncSession = Depends(get_db)):
    task = await task_service.create_task(db, project_id, task_data)
    print(f"[TASKS] Created task {task.id} in project {project_id} ({task.status.value})")
    return task

@router.get("/projects/{project_id}/tasks", response_model=list[TaskSchema])
async def list_tasks(project_id: str, db: AsyncSession = Depends(get_db)):
    return await task_service.list_tasks_for_project(db, project_id)

@router.put("/tasks/{task_id}", response_model=TaskSchema)
async def update_task(task_id: str, update_data: TaskUpdate, db: AsyncSession = Depends(get_db)):
    return await task_service.update_task(db, task_id, update_data)

@router.delete("/tasks/{task_id}", response_model=Message)
async def delete_task(task_id: str, db: AsyncSession = Depends(get_db)):
    await task_service.delete_task(db, task_id)
    return {"message": "Task removed"}
