"""Exception types raised by the scheduling engine and its collaborators."""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for all resource scheduler errors."""


class InvalidRangeError(SchedulerError, ValueError):
    """A date range is inverted or incomplete, or a travel buffer is negative."""


class MissingOverrideReasonError(SchedulerError, ValueError):
    """An override was requested for a conflicting assignment without a reason."""


class ResourceNotFoundError(SchedulerError, LookupError):
    def __init__(self, resource_id: int) -> None:
        super().__init__(f"Resource not found: {resource_id}")
        self.resource_id = resource_id


class ProjectNotFoundError(SchedulerError, LookupError):
    def __init__(self, project_id: int) -> None:
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class AssignmentNotFoundError(SchedulerError, LookupError):
    def __init__(self, assignment_id: int) -> None:
        super().__init__(f"Assignment not found: {assignment_id}")
        self.assignment_id = assignment_id


class IncompleteAssignmentError(SchedulerError, ValueError):
    """A proposed assignment is missing its project or resource."""


class InvalidProjectError(SchedulerError, ValueError):
    """The project cannot be used for the requested operation."""


class RecurrenceParseError(SchedulerError, ValueError):
    """A recurrence pattern string could not be understood."""


__all__ = [
    "AssignmentNotFoundError",
    "IncompleteAssignmentError",
    "InvalidProjectError",
    "InvalidRangeError",
    "MissingOverrideReasonError",
    "ProjectNotFoundError",
    "RecurrenceParseError",
    "ResourceNotFoundError",
    "SchedulerError",
]
