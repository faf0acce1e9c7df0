from datetime import date

import pytest

from resource_scheduler.core.errors import RecurrenceParseError
from resource_scheduler.services.recurrence import (
    FixedDate,
    Monthly,
    Weekly,
    expand,
    expand_unavailability,
    parse_recurrence,
)
from .factories import build_unavailability


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("WEEKLY:FRIDAY", Weekly(4)),
        ("weekly:monday", Weekly(0)),
        ("MONTHLY:LAST_FRIDAY", Monthly(-1, 4)),
        ("MONTHLY:2_MONDAY", Monthly(2, 0)),
        ("ANNUAL:12-24", FixedDate(12, 24)),
        ("ANNUAL:THIRD_MONDAY_JANUARY", Monthly(3, 0, 1)),
    ],
)
def test_parse_recurrence(pattern, expected) -> None:
    assert parse_recurrence(pattern) == expected


@pytest.mark.parametrize(
    "pattern",
    ["WEEKLY:FUNDAY", "WEEKLY", "MONTHLY:FRIDAY", "MONTHLY:9_FRIDAY", "ANNUAL:13-01", "YEARLY:01-01"],
)
def test_invalid_patterns_raise(pattern) -> None:
    with pytest.raises(RecurrenceParseError):
        parse_recurrence(pattern)


def test_expand_rules_over_august() -> None:
    start, end = date(2025, 8, 1), date(2025, 8, 31)

    assert expand(parse_recurrence("WEEKLY:FRIDAY"), start, end) == [
        date(2025, 8, 1),
        date(2025, 8, 8),
        date(2025, 8, 15),
        date(2025, 8, 22),
        date(2025, 8, 29),
    ]
    assert expand(parse_recurrence("MONTHLY:LAST_FRIDAY"), start, end) == [date(2025, 8, 29)]
    assert expand(parse_recurrence("MONTHLY:2_MONDAY"), start, end) == [date(2025, 8, 11)]


def test_expand_annual_rules() -> None:
    assert expand(parse_recurrence("ANNUAL:THIRD_MONDAY_JANUARY"), date(2025, 1, 1), date(2025, 12, 31)) == [
        date(2025, 1, 20)
    ]
    assert expand(parse_recurrence("ANNUAL:12-24"), date(2024, 1, 1), date(2025, 12, 31)) == [
        date(2024, 12, 24),
        date(2025, 12, 24),
    ]


def test_expand_recurring_unavailability_within_window() -> None:
    record = build_unavailability(
        type="recurring",
        start_date=date(2025, 8, 1),
        end_date=date(2025, 12, 31),
        is_recurring=True,
        recurrence_pattern="WEEKLY:FRIDAY",
    )

    assert expand_unavailability(record, date(2025, 8, 4), date(2025, 8, 17)) == [date(2025, 8, 8), date(2025, 8, 15)]
    assert expand_unavailability(record, date(2025, 6, 1), date(2025, 6, 30)) == []


def test_plain_unavailability_blocks_every_day() -> None:
    record = build_unavailability()

    assert expand_unavailability(record, date(2025, 3, 11), date(2025, 3, 31)) == [date(2025, 3, 11), date(2025, 3, 12)]
