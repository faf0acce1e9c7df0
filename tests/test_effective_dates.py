from datetime import date

import pytest

from resource_scheduler.core.errors import InvalidRangeError
from resource_scheduler.services.effective_dates import (
    DateSpan,
    compute_effective_span,
    effective_span_of,
    ranges_overlap,
    validate_range,
    work_span_of,
)
from .factories import build_assignment


def test_effective_span_adds_travel_buffers() -> None:
    span = compute_effective_span(date(2025, 1, 10), date(2025, 1, 14), 2, 1)

    assert span == DateSpan(date(2025, 1, 8), date(2025, 1, 15))
    assert span.duration_days == 8


def test_effective_span_without_travel_matches_work_dates() -> None:
    assignment = build_assignment()

    assert effective_span_of(assignment) == work_span_of(assignment)


def test_effective_span_of_assignment_uses_travel_fields() -> None:
    assignment = build_assignment(travel_out_days=1, travel_back_days=2)

    span = effective_span_of(assignment)

    assert span.start == assignment.effective_start_date == date(2025, 2, 28)
    assert span.end == assignment.effective_end_date == date(2025, 3, 7)
    assert assignment.total_duration_days == span.duration_days


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (None, date(2025, 1, 1)),
        (date(2025, 1, 1), None),
        (date(2025, 1, 2), date(2025, 1, 1)),
    ],
)
def test_validate_range_rejects_incomplete_or_inverted(start, end) -> None:
    with pytest.raises(InvalidRangeError):
        validate_range(start, end)


def test_negative_travel_is_rejected() -> None:
    with pytest.raises(InvalidRangeError):
        compute_effective_span(date(2025, 1, 10), date(2025, 1, 12), -1, 0)


def test_single_day_range_is_valid() -> None:
    span = validate_range(date(2025, 5, 1), date(2025, 5, 1))

    assert span.duration_days == 1
    assert list(span.days()) == [date(2025, 5, 1)]


def test_overlap_is_inclusive_and_symmetric() -> None:
    a = (date(2025, 3, 1), date(2025, 3, 5))
    touching = (date(2025, 3, 5), date(2025, 3, 10))
    adjacent = (date(2025, 3, 6), date(2025, 3, 10))

    assert ranges_overlap(*a, *touching)
    assert ranges_overlap(*touching, *a)
    assert not ranges_overlap(*a, *adjacent)
    assert not ranges_overlap(*adjacent, *a)


def test_intersection_returns_shared_days() -> None:
    first = DateSpan(date(2025, 3, 1), date(2025, 3, 5))
    second = DateSpan(date(2025, 3, 4), date(2025, 3, 10))

    assert first.intersection(second) == DateSpan(date(2025, 3, 4), date(2025, 3, 5))
    assert first.intersection(DateSpan(date(2025, 4, 1), date(2025, 4, 2))) is None
