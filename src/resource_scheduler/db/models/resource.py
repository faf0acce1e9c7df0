from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_scheduler.db.base import Base

if TYPE_CHECKING:
    from resource_scheduler.db.models.assignment import Assignment
    from resource_scheduler.db.models.calendar import TechnicianUnavailability


class Resource(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    department: Mapped[Optional[str]] = mapped_column(String(120))
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    assignments: Mapped[list["Assignment"]] = relationship(
        back_populates="resource", cascade="all, delete-orphan"
    )
    unavailabilities: Mapped[list["TechnicianUnavailability"]] = relationship(
        back_populates="resource", cascade="all, delete-orphan"
    )
