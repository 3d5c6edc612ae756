"""
User API endpoints.

Identity upsert, the caller's effective role and permissions, tester
emulation, and role management.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_user_service
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import (
    CurrentUserResponse,
    PermissionCheckResponse,
    SuccessResponse,
    SwitchEmulationRequest,
    UpdateCapabilitiesRequest,
    UpdateRoleRequest,
    User,
)

router = APIRouter()


@router.post("/ensure", response_model=User)
async def ensure_user(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> User:
    """
    Create the caller's user record on first contact.

    Name and email are refreshed from the token on every call.
    """
    return await service.ensure_user(identity)


@router.get("/me", response_model=Optional[CurrentUserResponse])
async def get_me(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> Optional[CurrentUserResponse]:
    """
    Get the caller with effective role and permission list.

    Returns null when the identity has no user record yet.
    """
    return await service.get_current_user(identity)


@router.get("", response_model=list[User])
async def list_users(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> list[User]:
    """List all users. Callers without role management rights get an empty list."""
    return await service.list_users(identity)


@router.post("/me/emulation", response_model=SuccessResponse)
async def switch_emulation(
    request: SwitchEmulationRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> SuccessResponse:
    """Set or clear the emulated role. Testers only."""
    await service.switch_emulating_role(identity, request.emulating_role)
    return SuccessResponse()


@router.put("/{user_id}/role", response_model=SuccessResponse)
async def update_role(
    user_id: str,
    request: UpdateRoleRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> SuccessResponse:
    await service.update_user_role(identity, user_id, request.new_role)
    return SuccessResponse()


@router.put("/{user_id}/capabilities", response_model=SuccessResponse)
async def update_capabilities(
    user_id: str,
    request: UpdateCapabilitiesRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> SuccessResponse:
    await service.update_user_capabilities(identity, user_id, set(request.capabilities))
    return SuccessResponse()


@router.get("/me/permissions/{action}", response_model=PermissionCheckResponse)
async def check_permission(
    action: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> PermissionCheckResponse:
    """Check whether the caller may perform an action. Unknown actions are denied."""
    allowed = await service.check_permission(identity, action)
    return PermissionCheckResponse(action=action, allowed=allowed)
