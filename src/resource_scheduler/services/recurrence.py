"""Parse and expand recurrence patterns such as ``WEEKLY:FRIDAY``.

The conflict and utilization calculators treat recurrence patterns as opaque.
Callers that need concrete blocked dates expand them here first.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Union

from resource_scheduler.core.errors import RecurrenceParseError
from resource_scheduler.schemas.calendar import UnavailabilityBase
from resource_scheduler.services.effective_dates import validate_range

WEEKDAYS: dict[str, int] = {name.upper(): index for index, name in enumerate(calendar.day_name)}
MONTHS: dict[str, int] = {name.upper(): index for index, name in enumerate(calendar.month_name) if name}
ORDINALS: dict[str, int] = {"FIRST": 1, "SECOND": 2, "THIRD": 3, "FOURTH": 4, "LAST": -1}


@dataclass(frozen=True)
class Weekly:
    weekday: int


@dataclass(frozen=True)
class Monthly:
    """The *nth* given weekday of a month (``-1`` for the last); every month unless *month* is set."""

    nth: int
    weekday: int
    month: int | None = None


@dataclass(frozen=True)
class FixedDate:
    month: int
    day: int


RecurrenceRule = Union[Weekly, Monthly, FixedDate]


def _weekday(token: str, pattern: str) -> int:
    try:
        return WEEKDAYS[token]
    except KeyError:
        raise RecurrenceParseError(f"Unknown weekday {token!r} in {pattern!r}") from None


def _ordinal(token: str, pattern: str) -> int:
    if token.isdigit() and 1 <= int(token) <= 4:
        return int(token)
    if token in ORDINALS:
        return ORDINALS[token]
    raise RecurrenceParseError(f"Unknown ordinal {token!r} in {pattern!r}")


def parse_recurrence(pattern: str) -> RecurrenceRule:
    """Parse ``WEEKLY:<DAY>``, ``MONTHLY:<NTH>_<DAY>``, ``ANNUAL:<MM-DD>`` or ``ANNUAL:<NTH>_<DAY>_<MONTH>``."""

    frequency, _, body = pattern.strip().upper().partition(":")
    if not body:
        raise RecurrenceParseError(f"Missing recurrence detail in {pattern!r}")

    if frequency == "WEEKLY":
        return Weekly(_weekday(body, pattern))

    parts = body.split("_")
    if frequency == "MONTHLY":
        if len(parts) != 2:
            raise RecurrenceParseError(f"Expected <NTH>_<WEEKDAY> in {pattern!r}")
        return Monthly(_ordinal(parts[0], pattern), _weekday(parts[1], pattern))

    if frequency == "ANNUAL":
        if len(parts) == 3:
            if parts[2] not in MONTHS:
                raise RecurrenceParseError(f"Unknown month {parts[2]!r} in {pattern!r}")
            return Monthly(_ordinal(parts[0], pattern), _weekday(parts[1], pattern), MONTHS[parts[2]])
        month_text, _, day_text = body.partition("-")
        try:
            month, day = int(month_text), int(day_text)
            date(2000, month, day)  # leap year, so 02-29 is accepted
        except ValueError:
            raise RecurrenceParseError(f"Invalid annual date in {pattern!r}") from None
        return FixedDate(month, day)

    raise RecurrenceParseError(f"Unsupported recurrence frequency {frequency!r}")


def _nth_weekday(year: int, month: int, nth: int, weekday: int) -> date | None:
    matches = [
        week[weekday]
        for week in calendar.Calendar().monthdatescalendar(year, month)
        if week[weekday].month == month
    ]
    if nth == -1:
        return matches[-1]
    if nth <= len(matches):
        return matches[nth - 1]
    return None


def _occurs_on(rule: RecurrenceRule, day: date) -> bool:
    if isinstance(rule, Weekly):
        return day.weekday() == rule.weekday
    if isinstance(rule, FixedDate):
        return (day.month, day.day) == (rule.month, rule.day)
    if rule.month is not None and day.month != rule.month:
        return False
    if day.weekday() != rule.weekday:
        return False
    return _nth_weekday(day.year, day.month, rule.nth, rule.weekday) == day


def expand(rule: RecurrenceRule, start: date, end: date) -> list[date]:
    """Every date in ``[start, end]`` on which *rule* occurs."""
    return [day for day in validate_range(start, end).days() if _occurs_on(rule, day)]


def expand_unavailability(record: UnavailabilityBase, start: date, end: date) -> list[date]:
    """Concrete blocked dates of *record* within ``[start, end]``.

    Non-recurring records block every day of their own range.
    """

    window = validate_range(start, end).intersection(validate_range(record.start_date, record.end_date))
    if window is None:
        return []
    if not record.is_recurring or not record.recurrence_pattern:
        return list(window.days())
    return expand(parse_recurrence(record.recurrence_pattern), window.start, window.end)


__all__ = [
    "FixedDate",
    "Monthly",
    "RecurrenceRule",
    "Weekly",
    "expand",
    "expand_unavailability",
    "parse_recurrence",
]
