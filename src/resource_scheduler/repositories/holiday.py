from datetime import date
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_scheduler.db.models.calendar import CompanyHoliday
from resource_scheduler.schemas.calendar import HolidayCreate


async def list_active_holidays(session: AsyncSession, start: date, end: date) -> list[CompanyHoliday]:
    result = await session.execute(
        select(CompanyHoliday)
        .where(CompanyHoliday.active.is_(True))
        .where(CompanyHoliday.date >= start)
        .where(CompanyHoliday.date <= end)
        .order_by(CompanyHoliday.date)
    )
    return list(result.scalars().all())


async def create_holiday(session: AsyncSession, payload: HolidayCreate) -> CompanyHoliday:
    holiday = CompanyHoliday(**payload.model_dump())
    session.add(holiday)
    await session.flush()
    await session.refresh(holiday)
    return holiday


async def create_holidays(session: AsyncSession, payloads: Iterable[HolidayCreate]) -> list[CompanyHoliday]:
    holidays = [CompanyHoliday(**payload.model_dump()) for payload in payloads]
    session.add_all(holidays)
    await session.flush()
    return holidays


async def delete_holiday(session: AsyncSession, holiday: CompanyHoliday) -> None:
    await session.delete(holiday)
