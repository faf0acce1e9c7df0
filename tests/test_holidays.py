from datetime import date

from resource_scheduler.schemas.calendar import HolidayType
from resource_scheduler.services.holidays import get_federal_holidays, iter_federal_holidays


def test_federal_holidays_2025() -> None:
    holidays = {holiday.name: holiday for holiday in get_federal_holidays(2025)}

    assert len(holidays) == 14
    assert holidays["Martin Luther King Jr. Day"].date == date(2025, 1, 20)
    assert holidays["Presidents' Day"].date == date(2025, 2, 17)
    assert holidays["Memorial Day"].date == date(2025, 5, 26)
    assert holidays["Labor Day"].date == date(2025, 9, 1)
    assert holidays["Columbus Day"].date == date(2025, 10, 13)
    assert holidays["Thanksgiving Day"].date == date(2025, 11, 27)
    assert holidays["Day After Thanksgiving"].date == date(2025, 11, 28)


def test_working_and_company_flags() -> None:
    holidays = {holiday.name: holiday for holiday in get_federal_holidays(2025)}

    working = {name for name, holiday in holidays.items() if holiday.working_holiday_allowed}
    assert working == {"Columbus Day", "Christmas Eve", "New Year's Eve"}
    assert holidays["Day After Thanksgiving"].type is HolidayType.COMPANY
    assert holidays["Independence Day"].type is HolidayType.FEDERAL


def test_iter_federal_holidays_spans_years() -> None:
    holidays = list(iter_federal_holidays(2025, 2026))

    assert len(holidays) == 28
    assert {holiday.date.year for holiday in holidays} == {2025, 2026}
