from datetime import date, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AssignmentBase(BaseModel):
    project_id: int
    resource_id: int
    start_date: date
    end_date: date
    travel_out_days: int = Field(default=0, ge=0)
    travel_back_days: int = Field(default=0, ge=0)
    is_override: bool = False
    override_reason: str | None = None
    notes: str | None = None
    location: str | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "AssignmentBase":
        if self.start_date > self.end_date:
            raise ValueError("start_date cannot be after end_date")
        return self

    @property
    def effective_start_date(self) -> date:
        return self.start_date - timedelta(days=self.travel_out_days)

    @property
    def effective_end_date(self) -> date:
        return self.end_date + timedelta(days=self.travel_back_days)

    @property
    def work_duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    @property
    def total_duration_days(self) -> int:
        return self.work_duration_days + self.travel_out_days + self.travel_back_days


class AssignmentCreate(AssignmentBase):
    pass


class AssignmentRead(AssignmentBase):
    id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AssignmentUpdate(BaseModel):
    project_id: int | None = None
    resource_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    travel_out_days: int | None = Field(default=None, ge=0)
    travel_back_days: int | None = Field(default=None, ge=0)
    is_override: bool | None = None
    override_reason: str | None = None
    notes: str | None = None
    location: str | None = None
