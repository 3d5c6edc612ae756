"""
Shifts module exceptions.

The hour-range errors are shared with the assignments and worker request
modules, which validate requested hours the same way.
"""

from shared.exceptions import NotFoundError, ValidationError


class ShiftTemplateNotFoundError(NotFoundError):
    """Raised when a shift template doesn't exist."""

    def __init__(self, template_id: str):
        super().__init__(
            f"Shift template not found: {template_id}",
            code="SHIFT_TEMPLATE_NOT_FOUND",
            details={"shift_template_id": template_id},
        )


class InactiveShiftTemplateError(ValidationError):
    """Raised when work is scheduled on a deactivated template."""

    def __init__(self, template_id: str):
        super().__init__(
            f"Shift template is inactive: {template_id}",
            code="SHIFT_TEMPLATE_INACTIVE",
            details={"shift_template_id": template_id},
        )


class InvalidRequirementsError(ValidationError):
    """Raised when a template's staffing requirements are inconsistent."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_REQUIREMENTS")


class InvalidHoursError(ValidationError):
    """Raised when an hour range is empty or outside the shift window."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_HOURS")


class InvalidDateError(ValidationError):
    """Raised when a date is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, date: str):
        super().__init__(
            f"Invalid date: {date}",
            code="INVALID_DATE",
            details={"date": date},
        )
