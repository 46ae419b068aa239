from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskboard.config import settings
from taskboard.errors import NotFoundError
from taskboard.models.project import Project
from taskboard.schemas.project import ProjectCreate


async def create_project(db: AsyncSession, project_data: ProjectCreate, owner_id: str) -> Project:
    project = Project(
        name=project_data.name,
        description=project_data.description,
        created_by=owner_id,
    )
    db.add(project)
    await db.commit()
    print(f"[PROJECTS] Created project {project.id} for user {owner_id}")
    return project


async def list_projects(db: AsyncSession, owner_id: str) -> list[Project]:
    result = await db.execute(
        select(Project)
        .filter(Project.created_by == owner_id)
        .order_by(Project.created_at)
    )
    return list(result.scalars().all())


async def get_project_by_id(db: AsyncSession, project_id: str, caller_id: str) -> Project:
    """
    Fetch a project by id.

    Unless ENFORCE_PROJECT_OWNERSHIP is set, any authenticated caller may read
    any project by id; listing is always scoped to the owner.
    """
    query = select(Project).filter(Project.id == project_id)
    if settings.ENFORCE_PROJECT_OWNERSHIP:
        query = query.filter(Project.created_by == caller_id)

    result = await db.execute(query)
    project = result.scalars().first()
    if not project:
        raise NotFoundError("Project not found")
    return project


async def delete_project(db: AsyncSession, project_id: str, caller_id: str) -> None:
    # Tasks of the project are left in place; references are advisory
    project = await get_project_by_id(db, project_id, caller_id)
    await db.delete(project)
    await db.commit()
    print(f"[PROJECTS] Deleted project {project_id}")
