"""
Shift template API endpoints.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_shift_service
from shared.models import AuthenticatedUser

from .interfaces import IShiftTemplateService
from .models import (
    CreateShiftTemplateRequest,
    DeleteTemplateResponse,
    ShiftTemplate,
    StaffingReport,
    UpdateShiftTemplateRequest,
)

router = APIRouter()


@router.get("", response_model=list[ShiftTemplate])
async def list_templates(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IShiftTemplateService = Depends(get_shift_service),
) -> list[ShiftTemplate]:
    """List all active shift templates."""
    return await service.list_templates(identity)


@router.post("", response_model=ShiftTemplate, status_code=201)
async def create_template(
    request: CreateShiftTemplateRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IShiftTemplateService = Depends(get_shift_service),
) -> ShiftTemplate:
    """
    Create a shift template.

    Requires the manage_shifts permission.
    """
    return await service.create_template(identity, request)


@router.get("/for-date/{date}", response_model=list[ShiftTemplate])
async def templates_for_date(
    date: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IShiftTemplateService = Depends(get_shift_service),
) -> list[ShiftTemplate]:
    """Active templates that run on the weekday of a YYYY-MM-DD date."""
    return await service.templates_for_date(identity, date)


@router.get("/{template_id}", response_model=ShiftTemplate)
async def get_template(
    template_id: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IShiftTemplateService = Depends(get_shift_service),
) -> ShiftTemplate:
    return await service.get_template(identity, template_id)


@router.patch("/{template_id}", response_model=ShiftTemplate)
async def update_template(
    template_id: str,
    request: UpdateShiftTemplateRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IShiftTemplateService = Depends(get_shift_service),
) -> ShiftTemplate:
    """
    Update a shift template.

    Changing the open or close time clips existing assignments to the new
    window.
    """
    return await service.update_template(identity, template_id, request)


@router.delete("/{template_id}", response_model=DeleteTemplateResponse)
async def delete_template(
    template_id: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IShiftTemplateService = Depends(get_shift_service),
) -> DeleteTemplateResponse:
    """Delete a template. Templates with assignments are only deactivated."""
    return await service.delete_template(identity, template_id)


@router.get("/{template_id}/staffing/{date}", response_model=StaffingReport)
async def staffing_status(
    template_id: str,
    date: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IShiftTemplateService = Depends(get_shift_service),
) -> StaffingReport:
    """Per-hour staffing of a template on a date."""
    return await service.staffing_status(identity, template_id, date)
