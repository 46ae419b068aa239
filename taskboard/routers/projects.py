from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.dependencies import get_db, get_current_user
from taskboard.models.user import User as UserModel
from taskboard.schemas.project import Message, Project as ProjectSchema, ProjectCreate
from taskboard.services import projects as project_service

router = APIRouter(prefix="/projects", tags=["projects"])

@router.post("", response_model=ProjectSchema, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    return await project_service.create_project(db, project_data, current_user.id)

@router.get("", response_model=list[ProjectSchema])
async def list_projects(
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    return await project_service.list_projects(db, current_user.id)

@router.get("/{project_id}", response_model=ProjectSchema)
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    return await project_service.get_project_by_id(db, project_id, current_user.id)

@router.delete("/{project_id}", response_model=Message)
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    await project_service.delete_project(db, project_id, current_user.id)
    return {"message": "Project removed"}
