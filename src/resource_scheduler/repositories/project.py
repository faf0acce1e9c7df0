from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_scheduler.db.models.project import Project
from resource_scheduler.schemas.project import ProjectCreate, ProjectUpdate


async def list_projects(session: AsyncSession) -> list[Project]:
    result = await session.execute(select(Project).order_by(Project.id))
    return list(result.scalars().all())


async def list_projects_by_ids(session: AsyncSession, project_ids: set[int]) -> list[Project]:
    if not project_ids:
        return []
    result = await session.execute(select(Project).where(Project.id.in_(project_ids)))
    return list(result.scalars().all())


async def get_project(session: AsyncSession, project_id: int) -> Project | None:
    return await session.get(Project, project_id)


async def create_project(session: AsyncSession, payload: ProjectCreate) -> Project:
    project = Project(**payload.model_dump())
    session.add(project)
    await session.flush()
    await session.refresh(project)
    return project


async def update_project(session: AsyncSession, project: Project, payload: ProjectUpdate) -> Project:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(project, field, value)
    await session.flush()
    await session.refresh(project)
    return project


async def delete_project(session: AsyncSession, project: Project) -> None:
    await session.delete(project)
