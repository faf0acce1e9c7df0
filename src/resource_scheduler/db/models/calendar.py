from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_scheduler.db.base import Base
from resource_scheduler.schemas.calendar import HolidayType, UnavailabilityType

if TYPE_CHECKING:
    from resource_scheduler.db.models.resource import Resource


def _enum_values(enum: type[HolidayType] | type[UnavailabilityType]) -> list[str]:
    return [member.value for member in enum]


class TechnicianUnavailability(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    resource_id: Mapped[int] = mapped_column(ForeignKey("resource.id", ondelete="CASCADE"), index=True)
    type: Mapped[UnavailabilityType] = mapped_column(
        SqlEnum(UnavailabilityType, name="unavailabilitytype", values_callable=_enum_values),
        nullable=False,
    )
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text)
    approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    approved_by: Mapped[Optional[str]] = mapped_column(String(120))
    approved_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime)
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    recurrence_pattern: Mapped[Optional[str]] = mapped_column(String(64))
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=sa.func.now(), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False
    )

    resource: Mapped["Resource"] = relationship(back_populates="unavailabilities")


class CompanyHoliday(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    type: Mapped[HolidayType] = mapped_column(
        SqlEnum(HolidayType, name="holidaytype", values_callable=_enum_values),
        nullable=False,
        default=HolidayType.COMPANY,
    )
    description: Mapped[Optional[str]] = mapped_column(Text)
    working_holiday_allowed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    department: Mapped[Optional[str]] = mapped_column(String(120))
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=sa.func.now(), nullable=False)
