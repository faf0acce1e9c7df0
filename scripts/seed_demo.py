"""Seed a handful of baseline records for local development.

Creates the schema if needed, then:

    python scripts/seed_demo.py
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from resource_scheduler.core.config import get_settings
from resource_scheduler.core.logging import configure_logging
from resource_scheduler.db.base import Base
from resource_scheduler.db.models import CompanyHoliday, Project, Resource
from resource_scheduler.repositories import holiday as holiday_repo
from resource_scheduler.repositories import project as project_repo
from resource_scheduler.repositories import resource as resource_repo
from resource_scheduler.schemas.project import ProjectCreate
from resource_scheduler.schemas.resource import ResourceCreate
from resource_scheduler.services import scheduling
from resource_scheduler.services.holidays import iter_federal_holidays
from resource_scheduler.services.validator import AssignmentCandidate

logger = logging.getLogger("seed_demo")

DEMO_RESOURCES = [
    ("Alex Rivera", "Field"),
    ("Sam Patel", "Field"),
    ("Jordan Lee", "Shop"),
]
DEMO_PROJECTS = [
    ("P-1001", "Factory Install"),
    ("P-2002", "Plant Retrofit"),
    ("SHOP", "Shop time"),
    ("TRAINING", "Safety training"),
]


async def seed() -> None:
    settings = get_settings()
    engine = create_async_engine(settings.database_url, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    today = date.today()
    async with session_factory() as session:
        if not await session.scalar(select(func.count(CompanyHoliday.id))):
            await holiday_repo.create_holidays(session, iter_federal_holidays(today.year, today.year + 1))

        if not await session.scalar(select(func.count(Resource.id))):
            for name, department in DEMO_RESOURCES:
                await resource_repo.create_resource(session, ResourceCreate(name=name, department=department))

        if not await session.scalar(select(func.count(Project.id))):
            for code, description in DEMO_PROJECTS:
                await project_repo.create_project(session, ProjectCreate(project_code=code, description=description))
        await session.commit()

        resources = await resource_repo.list_resources(session, active_only=True)
        projects = {project.project_code: project for project in await project_repo.list_projects(session)}

        month_start = today.replace(day=1)
        month_end = (month_start + timedelta(days=32)).replace(day=1) - timedelta(days=1)
        billable = projects["P-1001"]
        for offset, resource in enumerate(resources[:2]):
            start = month_start + timedelta(days=offset * 7)
            result, _ = await scheduling.save_assignment(
                session,
                AssignmentCandidate(
                    resource_id=resource.id,
                    project_id=billable.id,
                    start_date=start,
                    end_date=start + timedelta(days=9),
                    travel_out_days=1,
                    travel_back_days=1,
                    location="Customer site",
                ),
            )
            logger.info("%s on %s: %s", resource.name, billable.project_code, result.state.value)

        await scheduling.auto_assign_shop_time(
            session, projects["SHOP"].id, [resource.id for resource in resources], month_start, month_end
        )

        for resource in resources:
            utilization = await scheduling.resource_utilization(session, resource.id, month_start, month_end)
            logger.info(
                "%s: %.1f%% utilized, %.1f%% billable (%s)",
                resource.name,
                utilization.utilization_pct,
                utilization.billable_pct,
                utilization.status_tier.value,
            )

    await engine.dispose()
    logger.info("Seed data inserted (skipped existing rows).")


def main() -> None:
    configure_logging()
    asyncio.run(seed())


if __name__ == "__main__":
    main()
