from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_scheduler.db.base import Base
from resource_scheduler.schemas.project import ProjectKind

if TYPE_CHECKING:
    from resource_scheduler.db.models.assignment import Assignment


class Project(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    project_code: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)
    kind: Mapped[ProjectKind] = mapped_column(
        SqlEnum(
            ProjectKind,
            name="projectkind",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=ProjectKind.BILLABLE,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=sa.func.now(), nullable=False)

    assignments: Mapped[list["Assignment"]] = relationship(
        back_populates="project", cascade="all, delete-orphan"
    )
