"""Utility helpers for the standard company holiday calendar."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from resource_scheduler.schemas.calendar import HolidayCreate, HolidayType

MONDAY = 0
THURSDAY = 3

CLOSED = "Federal holiday - Company closed"


def _nth_weekday_of_month(year: int, month: int, weekday: int, nth: int) -> date:
    """Return the *nth* (1-based) *weekday* of *month* in *year*."""

    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset, weeks=nth - 1)


def _last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    next_month = date(year + month // 12, month % 12 + 1, 1)
    last = next_month - timedelta(days=1)
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def get_federal_holidays(year: int) -> list[HolidayCreate]:
    """Return federal and customary company holidays observed in *year*.

    Columbus Day, Christmas Eve and New Year's Eve allow working.
    """

    thanksgiving = _nth_weekday_of_month(year, 11, THURSDAY, 4)

    def federal(name: str, day: date, working: bool = False, description: str = CLOSED) -> HolidayCreate:
        return HolidayCreate(
            name=name,
            date=day,
            type=HolidayType.FEDERAL,
            description=description,
            working_holiday_allowed=working,
        )

    def company(name: str, day: date, working: bool, description: str) -> HolidayCreate:
        return HolidayCreate(
            name=name,
            date=day,
            type=HolidayType.COMPANY,
            description=description,
            working_holiday_allowed=working,
        )

    return [
        federal("New Year's Day", date(year, 1, 1)),
        federal("Martin Luther King Jr. Day", _nth_weekday_of_month(year, 1, MONDAY, 3)),
        federal("Presidents' Day", _nth_weekday_of_month(year, 2, MONDAY, 3)),
        federal("Memorial Day", _last_weekday_of_month(year, 5, MONDAY)),
        federal("Juneteenth", date(year, 6, 19)),
        federal("Independence Day", date(year, 7, 4)),
        federal("Labor Day", _nth_weekday_of_month(year, 9, MONDAY, 1)),
        federal(
            "Columbus Day",
            _nth_weekday_of_month(year, 10, MONDAY, 2),
            working=True,
            description="Federal holiday - Some offices open",
        ),
        federal("Veterans Day", date(year, 11, 11)),
        federal("Thanksgiving Day", thanksgiving),
        company("Day After Thanksgiving", thanksgiving + timedelta(days=1), False, "Company holiday - Office closed"),
        company("Christmas Eve", date(year, 12, 24), True, "Company holiday - Early closing"),
        federal("Christmas Day", date(year, 12, 25)),
        company("New Year's Eve", date(year, 12, 31), True, "Company holiday - Early closing"),
    ]


def iter_federal_holidays(start_year: int, end_year: int) -> Iterable[HolidayCreate]:
    """Yield holidays between *start_year* and *end_year* (inclusive)."""

    for year in range(start_year, end_year + 1):
        yield from get_federal_holidays(year)


__all__ = ["get_federal_holidays", "iter_federal_holidays"]
