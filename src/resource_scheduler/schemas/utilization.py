from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CalculationMethod(str, Enum):
    CALENDAR_DAYS = "calendar_days"
    WORKING_DAYS = "working_days"
    AVAILABLE_HOURS = "available_hours"
    CUSTOM_FORMULA = "custom_formula"


class IndustryPreset(str, Enum):
    FIELD_SERVICE = "field_service"
    PROFESSIONAL_SERVICES = "professional_services"
    MANUFACTURING = "manufacturing"
    EMERGENCY_SERVICES = "emergency_services"
    GOVERNMENT_CONTRACTOR = "government_contractor"
    MAINTENANCE_REPAIR = "maintenance_repair"
    CUSTOM = "custom"


class StatusTier(str, Enum):
    OVERALLOCATED = "overallocated"
    ON_TARGET = "on_target"
    LOW_BILLABLE = "low_billable"
    BELOW_TARGET = "below_target"
    UNDERUTILIZED = "underutilized"


class BillableTier(str, Enum):
    ON_TARGET = "on_target"
    BELOW_TARGET = "below_target"
    BELOW_MINIMUM = "below_minimum"


class UtilizationSettings(BaseModel):
    """Shared utilization policy. Immutable; derive variants with ``model_copy``."""

    model_config = ConfigDict(frozen=True)

    include_weekends: bool = False
    include_saturdays: bool = False
    include_holidays: bool = False
    count_pto_as_utilized: bool = False
    count_shop_as_utilized: bool = True
    count_training_as_utilized: bool = True

    standard_work_week: float = Field(default=40.0, gt=0)
    hours_per_day: float = Field(default=8.0, gt=0)
    overtime_threshold: float = Field(default=100.0, ge=0)

    target_utilization: float = Field(default=80.0, ge=0)
    minimum_utilization: float = Field(default=65.0, ge=0)
    overallocation_alert: float = Field(default=110.0, ge=0)

    target_billable: float = Field(default=75.0, ge=0)
    minimum_billable: float = Field(default=60.0, ge=0)

    calculation_method: CalculationMethod = CalculationMethod.WORKING_DAYS

    @model_validator(mode="after")
    def validate_thresholds(self) -> "UtilizationSettings":
        if self.minimum_utilization > self.target_utilization:
            raise ValueError("minimum_utilization cannot exceed target_utilization")
        if self.minimum_billable > self.target_billable:
            raise ValueError("minimum_billable cannot exceed target_billable")
        return self


class UtilizationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource_id: int
    range_start: date
    range_end: date
    available_days: int
    utilized_days: int
    billable_days: int
    utilization_pct: float
    billable_pct: float
    status_tier: StatusTier
    billable_tier: BillableTier
    available_hours: float
    utilized_hours: float


class TeamUtilizationSummary(BaseModel):
    resource_count: int
    average_utilization_pct: float
    average_billable_pct: float
    tier_counts: dict[StatusTier, int] = Field(default_factory=dict)
