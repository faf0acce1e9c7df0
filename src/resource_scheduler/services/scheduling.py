"""Session-bound façade: load a resource's commitments, then run the engine.

Every call fetches the records it needs up front (one query per record type
per resource) and hands plain snapshots to the pure calculators.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from resource_scheduler.db.models import Assignment
from resource_scheduler.core.errors import (
    AssignmentNotFoundError,
    InvalidRangeError,
    ProjectNotFoundError,
    ResourceNotFoundError,
)
from resource_scheduler.repositories import assignment as assignment_repo
from resource_scheduler.repositories import holiday as holiday_repo
from resource_scheduler.repositories import project as project_repo
from resource_scheduler.repositories import resource as resource_repo
from resource_scheduler.repositories import unavailability as unavailability_repo
from resource_scheduler.schemas.assignment import AssignmentRead, AssignmentUpdate
from resource_scheduler.schemas.calendar import HolidayRead, UnavailabilityRead
from resource_scheduler.schemas.project import ProjectRead
from resource_scheduler.schemas.resource import ResourceRead
from resource_scheduler.schemas.utilization import UtilizationResult, UtilizationSettings
from resource_scheduler.services.conflicts import shop_assignments_displaced_by
from resource_scheduler.services.effective_dates import compute_effective_span
from resource_scheduler.services.presets import default_utilization_settings
from resource_scheduler.services.shop import plan_shop_assignments
from resource_scheduler.services.utilization import calculate_utilization
from resource_scheduler.services.validator import (
    AssignmentCandidate,
    BatchValidationSummary,
    ValidationResult,
    validate_assignment,
)

logger = logging.getLogger(__name__)


async def _load_resource(session: AsyncSession, resource_id: int) -> ResourceRead:
    resource = await resource_repo.get_resource(session, resource_id)
    if resource is None:
        raise ResourceNotFoundError(resource_id)
    return ResourceRead.model_validate(resource)


async def _load_project(session: AsyncSession, project_id: int) -> ProjectRead:
    project = await project_repo.get_project(session, project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)
    return ProjectRead.model_validate(project)


async def _load_commitments(
    session: AsyncSession, resource_id: int
) -> tuple[list[AssignmentRead], list[UnavailabilityRead]]:
    assignments = await assignment_repo.list_assignments_by_resource(session, resource_id)
    unavailabilities = await unavailability_repo.list_unavailabilities_by_resource(session, resource_id)
    return (
        [AssignmentRead.model_validate(item) for item in assignments],
        [UnavailabilityRead.model_validate(item) for item in unavailabilities],
    )


async def _load_projects_for(
    session: AsyncSession, assignments: Sequence[AssignmentRead], *extra: ProjectRead
) -> dict[int, ProjectRead]:
    lookup = {project.id: project for project in extra}
    missing = {assignment.project_id for assignment in assignments} - lookup.keys()
    for project in await project_repo.list_projects_by_ids(session, missing):
        lookup[project.id] = ProjectRead.model_validate(project)
    return lookup


@dataclass
class _CheckContext:
    result: ValidationResult
    projects: dict[int, ProjectRead] = field(default_factory=dict)
    displaced_shop_ids: list[int] = field(default_factory=list)
    stored: Assignment | None = None


async def _check(session: AsyncSession, candidate: AssignmentCandidate) -> _CheckContext:
    if candidate.resource_id is None or candidate.project_id is None:
        return _CheckContext(result=validate_assignment(candidate, ()))
    stored: Assignment | None = None
    if candidate.assignment_id is not None:
        stored = await assignment_repo.get_assignment(session, candidate.assignment_id)
        if stored is None:
            raise AssignmentNotFoundError(candidate.assignment_id)
    await _load_resource(session, candidate.resource_id)
    project = await _load_project(session, candidate.project_id)
    # An edit may move the record to another resource; the candidate's resource is the one checked.
    assignments, unavailabilities = await _load_commitments(session, candidate.resource_id)
    projects = await _load_projects_for(session, assignments, project)

    displaced: list[int] = []
    if not project.is_shop:
        try:
            span = compute_effective_span(
                candidate.start_date, candidate.end_date, candidate.travel_out_days, candidate.travel_back_days
            )
        except InvalidRangeError:
            span = None
        if span is not None:
            # SHOP fill time yields to other work instead of conflicting with it.
            displaced = shop_assignments_displaced_by(
                span, candidate.resource_id, assignments, projects, exclude_assignment_id=candidate.assignment_id
            )
            assignments = [assignment for assignment in assignments if assignment.id not in displaced]

    result = validate_assignment(candidate, assignments, unavailabilities, projects)
    return _CheckContext(result=result, projects=projects, displaced_shop_ids=displaced, stored=stored)


async def check_assignment(session: AsyncSession, candidate: AssignmentCandidate) -> ValidationResult:
    """Validate *candidate* against the resource's stored commitments without writing."""

    return (await _check(session, candidate)).result


async def save_assignment(
    session: AsyncSession, candidate: AssignmentCandidate
) -> tuple[ValidationResult, AssignmentRead | None]:
    """Validate and, when allowed, create or update the assignment.

    An edit writes every field of the candidate, including a new project or
    resource. Any non-SHOP assignment removes SHOP fill time it overlaps.
    """

    context = await _check(session, candidate)
    result = context.result
    if not result.can_persist:
        logger.info("Assignment for resource %s not saved: %s", candidate.resource_id, result.state.value)
        return result, None

    removed = await assignment_repo.delete_assignments(session, context.displaced_shop_ids)
    if removed:
        logger.info("Removed %d overlapping SHOP assignment(s) for resource %s", removed, candidate.resource_id)

    payload = result.to_create()
    if context.stored is not None:
        record = await assignment_repo.update_assignment(
            session, context.stored, AssignmentUpdate(**payload.model_dump())
        )
    else:
        record = await assignment_repo.create_assignment(session, payload)
    await session.commit()
    await session.refresh(record)

    logger.info(
        "Saved assignment %s: project=%s resource=%s dates=%s to %s (%s)",
        record.id,
        record.project_id,
        record.resource_id,
        record.start_date,
        record.end_date,
        result.state.value,
    )
    return result, AssignmentRead.model_validate(record)


async def resource_utilization(
    session: AsyncSession,
    resource_id: int,
    start: date,
    end: date,
    settings: UtilizationSettings | None = None,
) -> UtilizationResult:
    resource = await _load_resource(session, resource_id)
    assignments, unavailabilities = await _load_commitments(session, resource_id)
    holidays = [HolidayRead.model_validate(item) for item in await holiday_repo.list_active_holidays(session, start, end)]
    projects = await _load_projects_for(session, assignments)
    return calculate_utilization(
        resource_id,
        start,
        end,
        settings or default_utilization_settings(),
        assignments,
        unavailabilities,
        holidays,
        projects,
        department=resource.department,
    )


async def auto_assign_shop_time(
    session: AsyncSession,
    shop_project_id: int,
    resource_ids: Sequence[int],
    start: date,
    end: date,
    *,
    skip_holidays: bool = True,
    exclude_weekends: bool = True,
) -> BatchValidationSummary:
    """Plan SHOP blocks for the given resources and persist the accepted ones."""

    shop_project = await _load_project(session, shop_project_id)
    resources = [await _load_resource(session, resource_id) for resource_id in resource_ids]
    assignments_by_resource: dict[int, list[AssignmentRead]] = {}
    unavailabilities_by_resource: dict[int, list[UnavailabilityRead]] = {}
    for resource in resources:
        assignments, unavailabilities = await _load_commitments(session, resource.id)
        assignments_by_resource[resource.id] = assignments
        unavailabilities_by_resource[resource.id] = unavailabilities
    holidays = [HolidayRead.model_validate(item) for item in await holiday_repo.list_active_holidays(session, start, end)]

    summary = plan_shop_assignments(
        shop_project,
        resources,
        start,
        end,
        assignments_by_resource,
        unavailabilities_by_resource,
        holidays,
        skip_holidays=skip_holidays,
        exclude_weekends=exclude_weekends,
    )
    for result in summary.accepted:
        await assignment_repo.create_assignment(session, result.to_create())
    await session.commit()

    logger.info(
        "SHOP auto-assignment created %d assignment(s), %d proposal(s) skipped",
        summary.accepted_count,
        summary.failed_count,
    )
    return summary


async def delete_shop_assignments(
    session: AsyncSession, shop_project_id: int, resource_ids: Sequence[int] | None = None
) -> int:
    shop_project = await _load_project(session, shop_project_id)
    assignments = await assignment_repo.list_assignments_by_project(session, shop_project.id)
    if resource_ids:
        selected = set(resource_ids)
        assignments = [assignment for assignment in assignments if assignment.resource_id in selected]
    removed = await assignment_repo.delete_assignments(session, [assignment.id for assignment in assignments])
    await session.commit()
    logger.info("Deleted %d SHOP assignment(s)", removed)
    return removed
