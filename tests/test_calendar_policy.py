from datetime import date

from resource_scheduler.schemas.utilization import CalculationMethod, UtilizationSettings
from resource_scheduler.services.calendar_policy import (
    available_days,
    available_hours,
    blocking_holiday,
    count_available_days,
    is_workday,
)
from .factories import build_holiday

AUGUST_START = date(2025, 8, 1)
AUGUST_END = date(2025, 8, 31)


def test_default_policy_counts_weekdays() -> None:
    settings = UtilizationSettings()

    days = available_days(AUGUST_START, AUGUST_END, settings)

    assert len(days) == 21
    assert all(day.weekday() < 5 for day in days)
    assert available_hours(AUGUST_START, AUGUST_END, settings) == 168.0


def test_saturdays_and_full_weekends() -> None:
    saturdays = UtilizationSettings(include_saturdays=True)
    weekends = UtilizationSettings(include_weekends=True)

    assert count_available_days(AUGUST_START, AUGUST_END, saturdays) == 26
    assert count_available_days(AUGUST_START, AUGUST_END, weekends) == 31


def test_blocking_holiday_removes_day() -> None:
    holiday = build_holiday(date=date(2025, 8, 4))

    assert count_available_days(AUGUST_START, AUGUST_END, UtilizationSettings(), [holiday]) == 20
    assert not is_workday(date(2025, 8, 4), UtilizationSettings(), [holiday])


def test_working_holiday_does_not_block() -> None:
    holiday = build_holiday(date=date(2025, 8, 4), working_holiday_allowed=True)

    assert blocking_holiday(date(2025, 8, 4), [holiday]) is None
    assert count_available_days(AUGUST_START, AUGUST_END, UtilizationSettings(), [holiday]) == 21


def test_include_holidays_keeps_holiday_available() -> None:
    holiday = build_holiday(date=date(2025, 8, 4))
    settings = UtilizationSettings(include_holidays=True)

    assert count_available_days(AUGUST_START, AUGUST_END, settings, [holiday]) == 21


def test_department_and_inactive_holidays() -> None:
    scoped = build_holiday(date=date(2025, 8, 4), department="Shop")
    inactive = build_holiday(id=901, date=date(2025, 8, 5), active=False)
    holidays = [scoped, inactive]

    assert count_available_days(AUGUST_START, AUGUST_END, UtilizationSettings(), holidays, "Field") == 21
    assert count_available_days(AUGUST_START, AUGUST_END, UtilizationSettings(), holidays, "Shop") == 20


def test_calendar_days_method_counts_every_day() -> None:
    settings = UtilizationSettings(calculation_method=CalculationMethod.CALENDAR_DAYS)
    holiday = build_holiday(date=date(2025, 8, 4))

    assert count_available_days(AUGUST_START, AUGUST_END, settings, [holiday]) == 31


def test_weekend_only_range_has_no_capacity() -> None:
    assert available_days(date(2025, 8, 2), date(2025, 8, 3), UtilizationSettings()) == []
