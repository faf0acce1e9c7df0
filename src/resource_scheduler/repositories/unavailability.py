from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_scheduler.db.models.calendar import TechnicianUnavailability
from resource_scheduler.schemas.calendar import UnavailabilityCreate, UnavailabilityUpdate


async def list_unavailabilities_by_resource(
    session: AsyncSession, resource_id: int
) -> list[TechnicianUnavailability]:
    result = await session.execute(
        select(TechnicianUnavailability)
        .where(TechnicianUnavailability.resource_id == resource_id)
        .order_by(TechnicianUnavailability.start_date)
    )
    return list(result.scalars().all())


async def list_pending_unavailabilities(session: AsyncSession) -> list[TechnicianUnavailability]:
    result = await session.execute(
        select(TechnicianUnavailability).where(TechnicianUnavailability.approved.is_(False))
    )
    return list(result.scalars().all())


async def get_unavailability(
    session: AsyncSession, unavailability_id: int
) -> TechnicianUnavailability | None:
    return await session.get(TechnicianUnavailability, unavailability_id)


async def create_unavailability(
    session: AsyncSession, payload: UnavailabilityCreate
) -> TechnicianUnavailability:
    record = TechnicianUnavailability(**payload.model_dump())
    session.add(record)
    await session.flush()
    await session.refresh(record)
    return record


async def update_unavailability(
    session: AsyncSession, record: TechnicianUnavailability, payload: UnavailabilityUpdate
) -> TechnicianUnavailability:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(record, field, value)
    await session.flush()
    await session.refresh(record)
    return record


async def approve_unavailability(
    session: AsyncSession, record: TechnicianUnavailability, approved_by: str
) -> TechnicianUnavailability:
    record.approved = True
    record.approved_by = approved_by
    record.approved_at = datetime.now()
    await session.flush()
    await session.refresh(record)
    return record


async def delete_unavailability(session: AsyncSession, record: TechnicianUnavailability) -> None:
    await session.delete(record)
