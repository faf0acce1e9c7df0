"""Travel-inclusive date spans used for all conflict arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Protocol

from resource_scheduler.core.errors import InvalidRangeError


class AssignmentLike(Protocol):
    start_date: date
    end_date: date
    travel_out_days: int
    travel_back_days: int


@dataclass(frozen=True)
class DateSpan:
    """Inclusive calendar date range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidRangeError(f"start {self.start} is after end {self.end}")

    @property
    def duration_days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, other: DateSpan) -> bool:
        return ranges_overlap(self.start, self.end, other.start, other.end)

    def intersection(self, other: DateSpan) -> DateSpan | None:
        if not self.overlaps(other):
            return None
        return DateSpan(max(self.start, other.start), min(self.end, other.end))

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Two inclusive ranges overlap unless one ends strictly before the other starts."""
    return not (a_end < b_start) and not (b_end < a_start)


def validate_range(start: date | None, end: date | None) -> DateSpan:
    if start is None or end is None:
        raise InvalidRangeError("start and end dates are required")
    return DateSpan(start, end)


def compute_effective_span(
    start: date | None,
    end: date | None,
    travel_out_days: int = 0,
    travel_back_days: int = 0,
) -> DateSpan:
    """Expand work dates by travel buffers into the span the resource is occupied."""

    work = validate_range(start, end)
    if travel_out_days < 0 or travel_back_days < 0:
        raise InvalidRangeError("travel days cannot be negative")
    return DateSpan(
        work.start - timedelta(days=travel_out_days),
        work.end + timedelta(days=travel_back_days),
    )


def effective_span_of(assignment: AssignmentLike) -> DateSpan:
    return compute_effective_span(
        assignment.start_date,
        assignment.end_date,
        assignment.travel_out_days,
        assignment.travel_back_days,
    )


def work_span_of(assignment: AssignmentLike) -> DateSpan:
    return validate_range(assignment.start_date, assignment.end_date)


__all__ = [
    "AssignmentLike",
    "DateSpan",
    "compute_effective_span",
    "effective_span_of",
    "ranges_overlap",
    "validate_range",
    "work_span_of",
]
