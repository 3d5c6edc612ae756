"""
Shifts module.

Recurring shift templates with per-range staffing requirements, and the
hour-range arithmetic the assignment and request modules share.

Public API:
- IShiftTemplateService: Interface for template operations
- ShiftTemplate, HourRange, StaffingRequirement: Core models
- StaffingReport, StaffingStatus: Per-hour staffing of a template on a date
"""

from .interfaces import IShiftTemplateRepository, IShiftTemplateService
from .models import (
    HourRange,
    ShiftTemplate,
    ShiftType,
    StaffingReport,
    StaffingRequirement,
    StaffingStatus,
    Weekday,
)
from .exceptions import (
    InactiveShiftTemplateError,
    InvalidDateError,
    InvalidHoursError,
    InvalidRequirementsError,
    ShiftTemplateNotFoundError,
)

__all__ = [
    "IShiftTemplateRepository",
    "IShiftTemplateService",
    "HourRange",
    "ShiftTemplate",
    "ShiftType",
    "StaffingReport",
    "StaffingRequirement",
    "StaffingStatus",
    "Weekday",
    "InactiveShiftTemplateError",
    "InvalidDateError",
    "InvalidHoursError",
    "InvalidRequirementsError",
    "ShiftTemplateNotFoundError",
]
