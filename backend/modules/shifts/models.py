"""
Shift templates data models.

Times are same-day ``HH:MM`` strings; dates are ``YYYY-MM-DD`` strings.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

TIME_PATTERN = r"^(([01]\d|2[0-3]):[0-5]\d|24:00)$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class ShiftType(str, Enum):
    OPERATIONAL = "operational"
    MAINTENANCE = "maintenance"
    EDUCATIONAL = "educational"
    SPECIAL = "special"


class HourRange(BaseModel):
    """A same-day time range, start inclusive, end exclusive."""

    start_time: str = Field(..., pattern=TIME_PATTERN, description="Start, HH:MM")
    end_time: str = Field(..., pattern=TIME_PATTERN, description="End, HH:MM")


class StaffingRequirement(HourRange):
    """How many workers a range of a shift needs."""

    min_workers: int = Field(..., description="Fewer than this is understaffed")
    optimal_workers: int = Field(..., description="Target head count")
    notes: Optional[str] = None


class ShiftTemplate(BaseModel):
    """A recurring staffing pattern."""

    id: str
    name: str
    description: Optional[str] = None
    type: ShiftType = ShiftType.OPERATIONAL
    open_time: str = Field(..., pattern=TIME_PATTERN)
    close_time: str = Field(..., pattern=TIME_PATTERN)
    recurring_days: list[Weekday] = Field(default_factory=list)
    hourly_requirements: list[StaffingRequirement] = Field(default_factory=list)
    is_active: bool = True
    created_by: str
    color: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def window(self) -> HourRange:
        return HourRange(start_time=self.open_time, end_time=self.close_time)


class StaffingStatus(str, Enum):
    """Head count of one hour measured against its requirement."""

    UNDERSTAFFED = "understaffed"
    STAFFED = "staffed"
    OPTIMAL = "optimal"
    OVERSTAFFED = "overstaffed"
    UNCOVERED = "uncovered"


class HourStaffing(BaseModel):
    hour: str
    assigned_workers: int
    min_workers: Optional[int] = None
    optimal_workers: Optional[int] = None
    status: StaffingStatus


class StaffingReport(BaseModel):
    """Per-hour staffing of one template on one date."""

    shift_template_id: str
    date: str
    hours: list[HourStaffing] = Field(default_factory=list)


# Request models


class CreateShiftTemplateRequest(BaseModel):
    """Request to create a shift template."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: ShiftType = ShiftType.OPERATIONAL
    open_time: str = Field(..., pattern=TIME_PATTERN)
    close_time: str = Field(..., pattern=TIME_PATTERN)
    recurring_days: list[Weekday] = Field(default_factory=list)
    hourly_requirements: list[StaffingRequirement]
    color: Optional[str] = None


class UpdateShiftTemplateRequest(BaseModel):
    """Partial update of a shift template. Omitted fields are unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[ShiftType] = None
    open_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    close_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    recurring_days: Optional[list[Weekday]] = None
    hourly_requirements: Optional[list[StaffingRequirement]] = None
    color: Optional[str] = None
    is_active: Optional[bool] = None


class DeleteTemplateResponse(BaseModel):
    deleted: bool
    deactivated: bool
