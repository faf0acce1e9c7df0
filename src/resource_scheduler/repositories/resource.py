from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_scheduler.db.models.resource import Resource
from resource_scheduler.schemas.resource import ResourceCreate, ResourceUpdate


async def list_resources(session: AsyncSession, *, active_only: bool = False) -> list[Resource]:
    statement = select(Resource).order_by(Resource.id)
    if active_only:
        statement = statement.where(Resource.active.is_(True))
    result = await session.execute(statement)
    return list(result.scalars().all())


async def get_resource(session: AsyncSession, resource_id: int) -> Resource | None:
    return await session.get(Resource, resource_id)


async def create_resource(session: AsyncSession, payload: ResourceCreate) -> Resource:
    resource = Resource(**payload.model_dump())
    session.add(resource)
    await session.flush()
    await session.refresh(resource)
    return resource


async def update_resource(
    session: AsyncSession, resource: Resource, payload: ResourceUpdate
) -> Resource:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(resource, field, value)
    await session.flush()
    await session.refresh(resource)
    return resource


async def delete_resource(session: AsyncSession, resource: Resource) -> None:
    await session.delete(resource)
