from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

SHOP_PROJECT_CODE = "SHOP"
TRAINING_PROJECT_CODE = "TRAINING"


class ProjectKind(str, Enum):
    BILLABLE = "billable"
    INTERNAL_SHOP = "internal_shop"
    INTERNAL_TRAINING = "internal_training"


def classify_project(project_code: str, description: str | None = None) -> ProjectKind:
    """Resolve the billing kind of a project from its code or description.

    Run once when project records are loaded; calculations read ``kind``.
    """
    labels = {project_code.strip().upper()}
    if description:
        labels.add(description.strip().upper())
    if SHOP_PROJECT_CODE in labels:
        return ProjectKind.INTERNAL_SHOP
    if TRAINING_PROJECT_CODE in labels:
        return ProjectKind.INTERNAL_TRAINING
    return ProjectKind.BILLABLE


class ProjectBase(BaseModel):
    project_code: str
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    kind: ProjectKind | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def resolve_kind(self) -> "ProjectBase":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("project start_date cannot be after end_date")
        if self.kind is None:
            self.kind = classify_project(self.project_code, self.description)
        return self


class ProjectCreate(ProjectBase):
    pass


class ProjectRead(ProjectBase):
    id: int

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_billable(self) -> bool:
        return self.kind == ProjectKind.BILLABLE

    @property
    def is_shop(self) -> bool:
        return self.kind == ProjectKind.INTERNAL_SHOP


class ProjectUpdate(BaseModel):
    project_code: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    kind: ProjectKind | None = None
    notes: str | None = None
