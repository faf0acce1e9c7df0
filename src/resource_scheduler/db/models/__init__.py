from .assignment import Assignment
from .calendar import CompanyHoliday, HolidayType, TechnicianUnavailability, UnavailabilityType
from .project import Project, ProjectKind
from .resource import Resource

__all__ = [
    "Assignment",
    "CompanyHoliday",
    "HolidayType",
    "Project",
    "ProjectKind",
    "Resource",
    "TechnicianUnavailability",
    "UnavailabilityType",
]
