"""Assignment conflict detection and resource utilization engine."""

from resource_scheduler.services.conflicts import ConflictDetail, find_conflicts
from resource_scheduler.services.utilization import calculate_utilization
from resource_scheduler.services.validator import (
    AssignmentCandidate,
    ValidationResult,
    ValidationState,
    validate_assignment,
)

__all__ = [
    "AssignmentCandidate",
    "ConflictDetail",
    "ValidationResult",
    "ValidationState",
    "calculate_utilization",
    "find_conflicts",
    "validate_assignment",
]
