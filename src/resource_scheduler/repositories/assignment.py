from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_scheduler.db.models.assignment import Assignment
from resource_scheduler.schemas.assignment import AssignmentCreate, AssignmentUpdate


async def list_assignments_by_resource(session: AsyncSession, resource_id: int) -> list[Assignment]:
    result = await session.execute(
        select(Assignment).where(Assignment.resource_id == resource_id).order_by(Assignment.start_date)
    )
    return list(result.scalars().all())


async def list_assignments_by_project(session: AsyncSession, project_id: int) -> list[Assignment]:
    result = await session.execute(
        select(Assignment).where(Assignment.project_id == project_id).order_by(Assignment.start_date)
    )
    return list(result.scalars().all())


async def list_assignments_in_range(session: AsyncSession, start: date, end: date) -> list[Assignment]:
    """Assignments whose work dates touch ``[start, end]``; travel buffers are not considered."""
    result = await session.execute(
        select(Assignment)
        .where(Assignment.start_date <= end)
        .where(Assignment.end_date >= start)
        .order_by(Assignment.resource_id, Assignment.start_date)
    )
    return list(result.scalars().all())


async def get_assignment(session: AsyncSession, assignment_id: int) -> Assignment | None:
    return await session.get(Assignment, assignment_id)


async def create_assignment(session: AsyncSession, payload: AssignmentCreate) -> Assignment:
    assignment = Assignment(**payload.model_dump())
    session.add(assignment)
    await session.flush()
    await session.refresh(assignment)
    return assignment


async def update_assignment(
    session: AsyncSession, assignment: Assignment, payload: AssignmentUpdate
) -> Assignment:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(assignment, field, value)
    await session.flush()
    await session.refresh(assignment)
    return assignment


async def delete_assignment(session: AsyncSession, assignment: Assignment) -> None:
    await session.delete(assignment)


async def delete_assignments(session: AsyncSession, assignment_ids: list[int]) -> int:
    if not assignment_ids:
        return 0
    result = await session.execute(delete(Assignment).where(Assignment.id.in_(assignment_ids)))
    return result.rowcount or 0
