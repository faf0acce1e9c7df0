"""Accept, block or override proposed assignments based on detected conflicts."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Mapping, Sequence

from resource_scheduler.core.errors import (
    IncompleteAssignmentError,
    InvalidRangeError,
    MissingOverrideReasonError,
    SchedulerError,
)
from resource_scheduler.schemas.assignment import AssignmentCreate, AssignmentRead
from resource_scheduler.schemas.calendar import UnavailabilityRead
from resource_scheduler.schemas.project import ProjectRead
from resource_scheduler.services.conflicts import ConflictDetail, find_conflicts
from resource_scheduler.services.effective_dates import DateSpan, compute_effective_span

logger = logging.getLogger(__name__)


class ValidationState(str, Enum):
    PENDING = "pending"
    CLEAN = "clean"
    CONFLICTED = "conflicted"
    OVERRIDDEN = "overridden"
    REJECTED = "rejected"


@dataclass
class AssignmentCandidate:
    resource_id: int | None
    project_id: int | None
    start_date: date | None
    end_date: date | None
    travel_out_days: int = 0
    travel_back_days: int = 0
    is_override: bool = False
    override_reason: str | None = None
    # Set when editing an existing assignment.
    assignment_id: int | None = None
    notes: str | None = None
    location: str | None = None

    def to_create(self, overridden: bool = False) -> AssignmentCreate:
        """Payload for persistence; the override flag is only kept when *overridden*."""
        return AssignmentCreate(
            project_id=self.project_id,
            resource_id=self.resource_id,
            start_date=self.start_date,
            end_date=self.end_date,
            travel_out_days=self.travel_out_days,
            travel_back_days=self.travel_back_days,
            is_override=overridden,
            override_reason=self.override_reason if overridden else None,
            notes=self.notes,
            location=self.location,
        )


@dataclass
class ValidationResult:
    candidate: AssignmentCandidate
    state: ValidationState = ValidationState.PENDING
    effective_span: DateSpan | None = None
    conflicts: list[ConflictDetail] = field(default_factory=list)
    error: SchedulerError | None = None
    message: str | None = None

    @property
    def can_persist(self) -> bool:
        return self.state in (ValidationState.CLEAN, ValidationState.OVERRIDDEN)

    @property
    def requires_override(self) -> bool:
        return self.state is ValidationState.CONFLICTED

    def to_create(self) -> AssignmentCreate:
        return self.candidate.to_create(overridden=self.state is ValidationState.OVERRIDDEN)


def _reject(result: ValidationResult, error: SchedulerError) -> ValidationResult:
    result.state = ValidationState.REJECTED
    result.error = error
    result.message = str(error)
    return result


def validate_assignment(
    candidate: AssignmentCandidate,
    existing_assignments: Iterable[AssignmentRead],
    existing_unavailabilities: Iterable[UnavailabilityRead] = (),
    projects: Mapping[int, ProjectRead] | None = None,
) -> ValidationResult:
    """Decide whether *candidate* may be persisted.

    Structural problems come back as a ``REJECTED`` result rather than an
    exception so batch callers can keep going.
    """

    result = ValidationResult(candidate=candidate)
    if candidate.resource_id is None or candidate.project_id is None:
        return _reject(result, IncompleteAssignmentError("project and resource are required"))

    try:
        span = compute_effective_span(
            candidate.start_date,
            candidate.end_date,
            candidate.travel_out_days,
            candidate.travel_back_days,
        )
    except InvalidRangeError as exc:
        return _reject(result, exc)
    result.effective_span = span

    result.conflicts = find_conflicts(
        candidate.resource_id,
        span.start,
        span.end,
        existing_assignments,
        existing_unavailabilities,
        projects=projects,
        exclude_assignment_id=candidate.assignment_id,
    )

    if not result.conflicts:
        result.state = ValidationState.CLEAN
        return result

    summary = "; ".join(conflict.describe() for conflict in result.conflicts)
    if not candidate.is_override:
        result.state = ValidationState.CONFLICTED
        result.message = f"Resource {candidate.resource_id} is already committed: {summary}"
        return result

    if not (candidate.override_reason or "").strip():
        return _reject(
            result,
            MissingOverrideReasonError("an override reason is required when the assignment conflicts"),
        )

    result.state = ValidationState.OVERRIDDEN
    result.message = f"Override accepted despite: {summary}"
    logger.warning(
        "Override for resource %s on project %s: %s",
        candidate.resource_id,
        candidate.project_id,
        candidate.override_reason,
    )
    return result


@dataclass
class BatchValidationSummary:
    results: list[ValidationResult] = field(default_factory=list)

    @property
    def accepted(self) -> list[ValidationResult]:
        return [result for result in self.results if result.can_persist]

    @property
    def conflicted(self) -> list[ValidationResult]:
        return [result for result in self.results if result.state is ValidationState.CONFLICTED]

    @property
    def rejected(self) -> list[ValidationResult]:
        return [result for result in self.results if result.state is ValidationState.REJECTED]

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.accepted_count


def _as_proposed(result: ValidationResult, proposal_id: int) -> AssignmentRead:
    return AssignmentRead(id=proposal_id, **result.to_create().model_dump())


def validate_batch(
    candidates: Sequence[AssignmentCandidate],
    assignments_by_resource: Mapping[int, Sequence[AssignmentRead]],
    unavailabilities_by_resource: Mapping[int, Sequence[UnavailabilityRead]] | None = None,
    projects: Mapping[int, ProjectRead] | None = None,
) -> BatchValidationSummary:
    """Validate several candidates, checking each against earlier accepted ones.

    Accepted proposals for a resource join its existing assignments (with
    negative ids) so one batch never proposes overlapping work for the same
    resource. An accepted edit replaces both the stored record and any
    earlier accepted edit of that record.
    """

    unavailabilities_by_resource = unavailabilities_by_resource or {}
    proposed: dict[int, list[AssignmentRead]] = defaultdict(list)
    # Stored records an accepted edit has already moved.
    moved: set[int] = set()
    # Latest accepted proposal per edited assignment id.
    edits: dict[int, AssignmentRead] = {}
    summary = BatchValidationSummary()

    for candidate in candidates:
        resource_id = candidate.resource_id
        earlier = edits.get(candidate.assignment_id) if candidate.assignment_id is not None else None
        existing: list[AssignmentRead] = []
        if resource_id is not None:
            stored = [
                assignment
                for assignment in assignments_by_resource.get(resource_id, ())
                if assignment.id not in moved
            ]
            pending = [proposal for proposal in proposed[resource_id] if proposal is not earlier]
            existing = [*stored, *pending]
        result = validate_assignment(
            candidate,
            existing,
            unavailabilities_by_resource.get(resource_id, ()) if resource_id is not None else (),
            projects=projects,
        )
        summary.results.append(result)
        if not result.can_persist or resource_id is None:
            continue

        proposal = _as_proposed(result, -(len(summary.results)))
        proposed[resource_id].append(proposal)
        if candidate.assignment_id is not None:
            moved.add(candidate.assignment_id)
            if earlier is not None:
                proposed[earlier.resource_id].remove(earlier)
            edits[candidate.assignment_id] = proposal

    logger.info(
        "Validated %d candidate(s): %d accepted, %d conflicted, %d rejected",
        len(summary.results),
        summary.accepted_count,
        len(summary.conflicted),
        len(summary.rejected),
    )
    return summary


__all__ = [
    "AssignmentCandidate",
    "BatchValidationSummary",
    "ValidationResult",
    "ValidationState",
    "validate_assignment",
    "validate_batch",
]
