"""Fill idle weekdays with SHOP assignments in contiguous blocks."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Mapping, Sequence

from resource_scheduler.core.errors import InvalidProjectError
from resource_scheduler.schemas.assignment import AssignmentRead
from resource_scheduler.schemas.calendar import HolidayBase, UnavailabilityRead
from resource_scheduler.schemas.project import ProjectKind, ProjectRead
from resource_scheduler.schemas.resource import ResourceRead
from resource_scheduler.services.calendar_policy import SATURDAY, blocking_holiday
from resource_scheduler.services.effective_dates import DateSpan, effective_span_of, validate_range
from resource_scheduler.services.validator import AssignmentCandidate, BatchValidationSummary, validate_batch

logger = logging.getLogger(__name__)

SHOP_NOTES = "Auto-assigned to SHOP"
SHOP_LOCATION = "Shop Floor"


def assignable_days(
    start: date,
    end: date,
    holidays: Sequence[HolidayBase] = (),
    *,
    department: str | None = None,
    skip_holidays: bool = True,
    exclude_weekends: bool = True,
) -> list[date]:
    days: list[date] = []
    for day in validate_range(start, end).days():
        if exclude_weekends and day.weekday() >= SATURDAY:
            continue
        if skip_holidays and blocking_holiday(day, holidays, department) is not None:
            continue
        days.append(day)
    return days


def _group_blocks(days: Sequence[date]) -> list[DateSpan]:
    """Split sorted days into runs of consecutive calendar dates."""
    blocks: list[DateSpan] = []
    block_start: date | None = None
    previous: date | None = None
    for day in days:
        if previous is not None and (day - previous) > timedelta(days=1):
            blocks.append(DateSpan(block_start, previous))
            block_start = None
        if block_start is None:
            block_start = day
        previous = day
    if block_start is not None and previous is not None:
        blocks.append(DateSpan(block_start, previous))
    return blocks


def _is_occupied(
    day: date, assignments: Sequence[AssignmentRead], unavailabilities: Sequence[UnavailabilityRead]
) -> bool:
    if any(effective_span_of(assignment).contains(day) for assignment in assignments):
        return True
    # Pending requests do not block SHOP fill time.
    return any(record.approved and record.is_active_on(day) for record in unavailabilities)


def plan_shop_assignments(
    shop_project: ProjectRead,
    resources: Sequence[ResourceRead],
    start: date,
    end: date,
    assignments_by_resource: Mapping[int, Sequence[AssignmentRead]],
    unavailabilities_by_resource: Mapping[int, Sequence[UnavailabilityRead]] | None = None,
    holidays: Sequence[HolidayBase] = (),
    *,
    skip_holidays: bool = True,
    exclude_weekends: bool = True,
    projects: Mapping[int, ProjectRead] | None = None,
) -> BatchValidationSummary:
    """Propose SHOP blocks for every idle stretch of each active resource.

    Blocks end at weekends, holidays and existing commitments. Every proposal
    goes through batch validation; only accepted results should be persisted.
    """

    if shop_project.kind is not ProjectKind.INTERNAL_SHOP:
        raise InvalidProjectError(f"Project {shop_project.project_code!r} is not a SHOP project")

    unavailabilities_by_resource = unavailabilities_by_resource or {}
    candidates: list[AssignmentCandidate] = []
    for resource in resources:
        if not resource.active:
            logger.debug("Skipping inactive resource %s", resource.name)
            continue
        existing = assignments_by_resource.get(resource.id, ())
        unavailable = unavailabilities_by_resource.get(resource.id, ())
        days = [
            day
            for day in assignable_days(
                start,
                end,
                holidays,
                department=resource.department,
                skip_holidays=skip_holidays,
                exclude_weekends=exclude_weekends,
            )
            if not _is_occupied(day, existing, unavailable)
        ]
        blocks = _group_blocks(days)
        candidates.extend(
            AssignmentCandidate(
                resource_id=resource.id,
                project_id=shop_project.id,
                start_date=block.start,
                end_date=block.end,
                notes=SHOP_NOTES,
                location=SHOP_LOCATION,
            )
            for block in blocks
        )
        logger.debug("Planned %d SHOP block(s) for %s", len(blocks), resource.name)

    approved = {
        resource_id: [record for record in records if record.approved]
        for resource_id, records in unavailabilities_by_resource.items()
    }
    lookup = dict(projects or {})
    lookup.setdefault(shop_project.id, shop_project)
    return validate_batch(candidates, assignments_by_resource, approved, lookup)


__all__ = ["SHOP_LOCATION", "SHOP_NOTES", "assignable_days", "plan_shop_assignments"]
