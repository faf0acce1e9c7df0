"""Utilization and billable metrics for a resource over a date range."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Sequence

from resource_scheduler.core.errors import ProjectNotFoundError
from resource_scheduler.schemas.assignment import AssignmentRead
from resource_scheduler.schemas.calendar import (
    PTO_UNAVAILABILITY_TYPES,
    HolidayBase,
    UnavailabilityRead,
    UnavailabilityType,
)
from resource_scheduler.schemas.project import ProjectKind, ProjectRead
from resource_scheduler.schemas.utilization import (
    BillableTier,
    StatusTier,
    TeamUtilizationSummary,
    UtilizationResult,
    UtilizationSettings,
)
from resource_scheduler.services.calendar_policy import available_days
from resource_scheduler.services.effective_dates import DateSpan, work_span_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Activity:
    span: DateSpan
    billable: bool
    counts_as_utilized: bool


def classify_status(
    utilization_pct: float, billable_pct: float, settings: UtilizationSettings
) -> StatusTier:
    """Map percentages onto a status tier; the first matching rule wins."""
    if utilization_pct > settings.overallocation_alert:
        return StatusTier.OVERALLOCATED
    if utilization_pct >= settings.target_utilization:
        if billable_pct >= settings.target_billable:
            return StatusTier.ON_TARGET
        return StatusTier.LOW_BILLABLE
    if utilization_pct >= settings.minimum_utilization:
        return StatusTier.BELOW_TARGET
    return StatusTier.UNDERUTILIZED


def classify_billable(billable_pct: float, settings: UtilizationSettings) -> BillableTier:
    if billable_pct >= settings.target_billable:
        return BillableTier.ON_TARGET
    if billable_pct >= settings.minimum_billable:
        return BillableTier.BELOW_TARGET
    return BillableTier.BELOW_MINIMUM


def _assignment_activities(
    resource_id: int,
    assignments: Iterable[AssignmentRead],
    projects: Mapping[int, ProjectRead],
    settings: UtilizationSettings,
) -> list[_Activity]:
    activities: list[_Activity] = []
    for assignment in assignments:
        if assignment.resource_id != resource_id:
            continue
        project = projects.get(assignment.project_id)
        if project is None:
            raise ProjectNotFoundError(assignment.project_id)
        if project.kind is ProjectKind.INTERNAL_SHOP:
            counted = settings.count_shop_as_utilized
        elif project.kind is ProjectKind.INTERNAL_TRAINING:
            counted = settings.count_training_as_utilized
        else:
            counted = True
        # Travel days are occupied but never utilized.
        activities.append(
            _Activity(
                span=work_span_of(assignment),
                billable=project.is_billable,
                counts_as_utilized=counted,
            )
        )
    return activities


def _unavailability_activities(
    resource_id: int, unavailabilities: Iterable[UnavailabilityRead], settings: UtilizationSettings
) -> list[_Activity]:
    activities: list[_Activity] = []
    for record in unavailabilities:
        if record.resource_id != resource_id:
            continue
        if record.type in PTO_UNAVAILABILITY_TYPES:
            counted = settings.count_pto_as_utilized
        elif record.type is UnavailabilityType.TRAINING:
            counted = settings.count_training_as_utilized
        else:
            counted = False
        if counted:
            activities.append(
                _Activity(span=DateSpan(record.start_date, record.end_date), billable=False, counts_as_utilized=True)
            )
    return activities


def _percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return part * 100.0 / whole


def calculate_utilization(
    resource_id: int,
    range_start: date,
    range_end: date,
    settings: UtilizationSettings,
    assignments: Sequence[AssignmentRead],
    unavailabilities: Sequence[UnavailabilityRead] = (),
    holidays: Sequence[HolidayBase] = (),
    projects: Mapping[int, ProjectRead] | None = None,
    department: str | None = None,
) -> UtilizationResult:
    """Compute utilization and billable percentages for *resource_id*.

    Only days the calendar policy marks as available are considered. A day is
    utilized when it falls in the work dates of a counted assignment or in a
    counted unavailability, and billable only when a billable project covers
    it. Each day counts at most once.
    """

    days = available_days(range_start, range_end, settings, holidays, department)
    activities = _assignment_activities(resource_id, assignments, projects or {}, settings)
    activities += _unavailability_activities(resource_id, unavailabilities, settings)

    utilized_days = 0
    billable_days = 0
    for day in days:
        covering = [activity for activity in activities if activity.span.contains(day)]
        if any(activity.billable for activity in covering):
            utilized_days += 1
            billable_days += 1
        elif any(activity.counts_as_utilized for activity in covering):
            utilized_days += 1

    utilization_pct = _percentage(utilized_days, len(days))
    billable_pct = billable_days * 100.0 / max(utilized_days, 1)
    tier = classify_status(utilization_pct, billable_pct, settings)

    logger.debug(
        "Resource %s utilization %.1f%% billable %.1f%% (%s)",
        resource_id,
        utilization_pct,
        billable_pct,
        tier.value,
    )
    return UtilizationResult(
        resource_id=resource_id,
        range_start=range_start,
        range_end=range_end,
        available_days=len(days),
        utilized_days=utilized_days,
        billable_days=billable_days,
        utilization_pct=round(utilization_pct, 2),
        billable_pct=round(billable_pct, 2),
        status_tier=tier,
        billable_tier=classify_billable(billable_pct, settings),
        available_hours=len(days) * settings.hours_per_day,
        utilized_hours=utilized_days * settings.hours_per_day,
    )


def summarize_team(results: Sequence[UtilizationResult]) -> TeamUtilizationSummary:
    if not results:
        return TeamUtilizationSummary(resource_count=0, average_utilization_pct=0.0, average_billable_pct=0.0)
    count = len(results)
    return TeamUtilizationSummary(
        resource_count=count,
        average_utilization_pct=round(sum(result.utilization_pct for result in results) / count, 2),
        average_billable_pct=round(sum(result.billable_pct for result in results) / count, 2),
        tier_counts=dict(Counter(result.status_tier for result in results)),
    )


__all__ = ["calculate_utilization", "classify_billable", "classify_status", "summarize_team"]
