from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_scheduler.db.base import Base

if TYPE_CHECKING:
    from resource_scheduler.db.models.project import Project
    from resource_scheduler.db.models.resource import Resource


class Assignment(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    resource_id: Mapped[int] = mapped_column(ForeignKey("resource.id", ondelete="CASCADE"), index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    travel_out_days: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    travel_back_days: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_override: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    override_reason: Mapped[Optional[str]] = mapped_column(Text)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    location: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=sa.func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False
    )

    project: Mapped["Project"] = relationship(back_populates="assignments")
    resource: Mapped["Resource"] = relationship(back_populates="assignments")
