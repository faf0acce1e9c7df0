"""Detect commitments that collide with a candidate span for a resource."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Literal, Mapping, Sequence

from resource_scheduler.schemas.assignment import AssignmentRead
from resource_scheduler.schemas.calendar import UnavailabilityRead, UnavailabilityType
from resource_scheduler.schemas.project import ProjectKind, ProjectRead
from resource_scheduler.services.effective_dates import DateSpan, effective_span_of, validate_range

logger = logging.getLogger(__name__)

ConflictKind = Literal["assignment", "unavailability"]

_KIND_ORDER: dict[str, int] = {"assignment": 0, "unavailability": 1}


@dataclass(frozen=True)
class ConflictDetail:
    kind: ConflictKind
    record_id: int
    start_date: date
    end_date: date
    overlap_start: date
    overlap_end: date
    project_id: int | None = None
    project_code: str | None = None
    project_description: str | None = None
    unavailability_type: UnavailabilityType | None = None
    reason: str | None = None
    is_override: bool = False

    def describe(self) -> str:
        if self.kind == "assignment":
            label = self.project_code or f"Project #{self.project_id}"
            if self.project_description:
                label = f"{label} ({self.project_description})"
        else:
            label = self.unavailability_type.value.replace("_", " ") if self.unavailability_type else "unavailable"
            if self.reason:
                label = f"{label}: {self.reason}"
        return f"{label} from {self.start_date.isoformat()} to {self.end_date.isoformat()}"


def _assignment_conflict(
    assignment: AssignmentRead, span: DateSpan, overlap: DateSpan, project: ProjectRead | None
) -> ConflictDetail:
    return ConflictDetail(
        kind="assignment",
        record_id=assignment.id,
        start_date=span.start,
        end_date=span.end,
        overlap_start=overlap.start,
        overlap_end=overlap.end,
        project_id=assignment.project_id,
        project_code=project.project_code if project else None,
        project_description=project.description if project else None,
        is_override=assignment.is_override,
    )


def _unavailability_conflict(record: UnavailabilityRead, overlap: DateSpan) -> ConflictDetail:
    return ConflictDetail(
        kind="unavailability",
        record_id=record.id,
        start_date=record.start_date,
        end_date=record.end_date,
        overlap_start=overlap.start,
        overlap_end=overlap.end,
        unavailability_type=record.type,
        reason=record.reason,
    )


def find_conflicts(
    resource_id: int,
    candidate_start: date,
    candidate_end: date,
    assignments: Iterable[AssignmentRead],
    unavailabilities: Iterable[UnavailabilityRead] = (),
    projects: Mapping[int, ProjectRead] | None = None,
    exclude_assignment_id: int | None = None,
) -> list[ConflictDetail]:
    """Return every assignment or unavailability of *resource_id* touching the candidate.

    Existing assignments are compared using their travel-inclusive span. The
    assignment identified by *exclude_assignment_id* is skipped so an edit is
    never reported as conflicting with its own stored state.
    """

    candidate = validate_range(candidate_start, candidate_end)
    projects = projects or {}
    conflicts: list[ConflictDetail] = []

    for assignment in assignments:
        if assignment.resource_id != resource_id:
            continue
        if exclude_assignment_id is not None and assignment.id == exclude_assignment_id:
            continue
        span = effective_span_of(assignment)
        overlap = candidate.intersection(span)
        if overlap is None:
            continue
        conflicts.append(_assignment_conflict(assignment, span, overlap, projects.get(assignment.project_id)))

    for record in unavailabilities:
        if record.resource_id != resource_id:
            continue
        overlap = candidate.intersection(DateSpan(record.start_date, record.end_date))
        if overlap is None:
            continue
        conflicts.append(_unavailability_conflict(record, overlap))

    conflicts.sort(key=lambda item: (item.start_date, _KIND_ORDER[item.kind], item.record_id))
    if conflicts:
        logger.debug(
            "Resource %s has %d conflict(s) between %s and %s",
            resource_id,
            len(conflicts),
            candidate.start,
            candidate.end,
        )
    return conflicts


def find_overlapping_assignments(assignments: Sequence[AssignmentRead]) -> set[int]:
    """Return ids of assignments whose effective span overlaps another of the same resource."""

    by_resource: dict[int, list[AssignmentRead]] = defaultdict(list)
    for assignment in assignments:
        by_resource[assignment.resource_id].append(assignment)

    conflicted: set[int] = set()
    for resource_assignments in by_resource.values():
        spans = [(assignment, effective_span_of(assignment)) for assignment in resource_assignments]
        for index, (first, first_span) in enumerate(spans):
            for second, second_span in spans[index + 1 :]:
                if first_span.overlaps(second_span):
                    conflicted.update((first.id, second.id))
    return conflicted


def shop_assignments_displaced_by(
    span: DateSpan,
    resource_id: int,
    assignments: Iterable[AssignmentRead],
    projects: Mapping[int, ProjectRead],
    exclude_assignment_id: int | None = None,
) -> list[int]:
    """Ids of SHOP assignments whose work dates fall inside *span* for the resource.

    Any non-SHOP assignment takes precedence over SHOP fill time; callers
    delete the returned records when persisting the new assignment.
    """

    displaced: list[int] = []
    for assignment in assignments:
        if assignment.resource_id != resource_id or assignment.id == exclude_assignment_id:
            continue
        project = projects.get(assignment.project_id)
        if project is None or project.kind is not ProjectKind.INTERNAL_SHOP:
            continue
        if span.overlaps(DateSpan(assignment.start_date, assignment.end_date)):
            displaced.append(assignment.id)
    return sorted(displaced)


__all__ = [
    "ConflictDetail",
    "find_conflicts",
    "find_overlapping_assignments",
    "shop_assignments_displaced_by",
]
