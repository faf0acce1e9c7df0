"""Classify calendar days as available or excluded under a utilization policy."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from resource_scheduler.schemas.calendar import HolidayBase
from resource_scheduler.schemas.utilization import CalculationMethod, UtilizationSettings
from resource_scheduler.services.effective_dates import validate_range

SATURDAY = 5
SUNDAY = 6


def holiday_in_effect(holiday: HolidayBase, department: str | None = None) -> bool:
    return holiday.active and holiday.applies_to(department)


def blocking_holiday(
    day: date, holidays: Iterable[HolidayBase], department: str | None = None
) -> HolidayBase | None:
    """Return the in-effect holiday that removes *day* from scheduling, if any.

    Holidays flagged ``working_holiday_allowed`` never block.
    """
    for holiday in holidays:
        if holiday.date != day or not holiday_in_effect(holiday, department):
            continue
        if not holiday.working_holiday_allowed:
            return holiday
    return None


def is_weekend_available(day: date, settings: UtilizationSettings) -> bool:
    weekday = day.weekday()
    if weekday == SATURDAY:
        return settings.include_saturdays or settings.include_weekends
    if weekday == SUNDAY:
        return settings.include_weekends
    return True


def is_workday(
    day: date,
    settings: UtilizationSettings,
    holidays: Iterable[HolidayBase] = (),
    department: str | None = None,
) -> bool:
    if not is_weekend_available(day, settings):
        return False
    if settings.include_holidays:
        return True
    return blocking_holiday(day, holidays, department) is None


def available_days(
    start: date,
    end: date,
    settings: UtilizationSettings,
    holidays: Sequence[HolidayBase] = (),
    department: str | None = None,
) -> list[date]:
    """Every day in ``[start, end]`` that counts as available capacity.

    The calendar-days method counts every day in the range.
    """
    span = validate_range(start, end)
    if settings.calculation_method is CalculationMethod.CALENDAR_DAYS:
        return list(span.days())
    relevant = [holiday for holiday in holidays if span.contains(holiday.date)]
    return [day for day in span.days() if is_workday(day, settings, relevant, department)]


def count_available_days(
    start: date,
    end: date,
    settings: UtilizationSettings,
    holidays: Sequence[HolidayBase] = (),
    department: str | None = None,
) -> int:
    return len(available_days(start, end, settings, holidays, department))


def available_hours(
    start: date,
    end: date,
    settings: UtilizationSettings,
    holidays: Sequence[HolidayBase] = (),
    department: str | None = None,
) -> float:
    return count_available_days(start, end, settings, holidays, department) * settings.hours_per_day


__all__ = [
    "available_days",
    "available_hours",
    "blocking_holiday",
    "count_available_days",
    "holiday_in_effect",
    "is_workday",
]
