from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class UnavailabilityType(str, Enum):
    VACATION = "vacation"
    SICK_LEAVE = "sick_leave"
    PERSONAL_TIME = "personal_time"
    TRAINING = "training"
    OTHER_ASSIGNMENT = "other_assignment"
    RECURRING = "recurring"
    EMERGENCY = "emergency"


class HolidayType(str, Enum):
    FEDERAL = "federal"
    COMPANY = "company"
    FLOATING = "floating"
    DEPARTMENT = "department"
    EMERGENCY_CLOSURE = "emergency_closure"
    HALF_DAY = "half_day"


PTO_UNAVAILABILITY_TYPES: frozenset[UnavailabilityType] = frozenset(
    {UnavailabilityType.VACATION, UnavailabilityType.PERSONAL_TIME}
)


class UnavailabilityBase(BaseModel):
    resource_id: int
    type: UnavailabilityType
    start_date: date
    end_date: date
    reason: str | None = None
    description: str | None = None
    approved: bool = False
    approved_by: str | None = None
    is_recurring: bool = False
    # Stored verbatim, e.g. "WEEKLY:FRIDAY"; see services.recurrence for expansion.
    recurrence_pattern: str | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "UnavailabilityBase":
        if self.start_date > self.end_date:
            raise ValueError("start_date cannot be after end_date")
        return self

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def is_active_on(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        return not (self.end_date < start) and not (end < self.start_date)


class UnavailabilityCreate(UnavailabilityBase):
    pass


class UnavailabilityRead(UnavailabilityBase):
    id: int
    approved_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UnavailabilityUpdate(BaseModel):
    type: UnavailabilityType | None = None
    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = None
    description: str | None = None
    recurrence_pattern: str | None = None


class HolidayBase(BaseModel):
    name: str
    date: date
    type: HolidayType = HolidayType.COMPANY
    description: str | None = None
    working_holiday_allowed: bool = False
    department: str | None = None
    active: bool = True

    def applies_to(self, department: str | None) -> bool:
        """Company-wide holidays apply to everyone, scoped ones only to their department."""
        return self.department is None or self.department == department


class HolidayCreate(HolidayBase):
    pass


class HolidayRead(HolidayBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
