"""
Users module data models.

A user carries one legacy base ``role`` and an explicit set of capability
tags. The only legal way to obtain the role used for permission checks is
``roles.resolve_effective_role``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import UserSummary


class Role(str, Enum):
    """Base role of a user."""

    GUEST = "guest"
    CUSTOMER = "customer"
    WORKER = "worker"
    MANAGER = "manager"
    TESTER = "tester"  # May emulate any other role
    DEV = "dev"        # Reviewer designation for feedback suggestions


class Capability(str, Enum):
    """Capability tags granted independently of the base role."""

    WORKER = "worker"
    MANAGER = "manager"
    INSTRUCTOR = "instructor"
    RENTAL_APPROVED = "rental_approved"
    STAFF = "staff"
    DEV = "dev"
    PRO = "pro"


# Storage column for each capability tag
CAPABILITY_COLUMNS: dict[Capability, str] = {
    Capability.WORKER: "worker_tag",
    Capability.MANAGER: "manager_tag",
    Capability.INSTRUCTOR: "instructor_tag",
    Capability.RENTAL_APPROVED: "rental_approved_tag",
    Capability.STAFF: "is_staff",
    Capability.DEV: "is_dev",
    Capability.PRO: "pro_tag",
}


class User(BaseModel):
    """Stored user record."""

    id: str = Field(..., description="User ID")
    external_id: str = Field(..., description="Identity provider subject")
    name: str = Field(default="Anonymous", description="Display name")
    email: Optional[str] = Field(None, description="Email address")
    role: Role = Field(default=Role.GUEST, description="Legacy base role")
    emulating_role: Optional[Role] = Field(
        None,
        description="Role being emulated (only honoured for testers)",
    )
    capabilities: set[Capability] = Field(
        default_factory=set,
        description="Capability tags",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the user first authenticated",
    )


class CurrentUserResponse(BaseModel):
    """The caller's user record plus everything derived from it."""

    user: User
    effective_role: Role
    permissions: list[str] = Field(default_factory=list)
    is_superuser: bool = False
    has_reviewer_access: bool = False


class SwitchEmulationRequest(BaseModel):
    """Request to set or clear the caller's emulated role."""

    emulating_role: Optional[Role] = Field(
        None,
        description="Role to emulate, or null to stop emulating",
    )


class UpdateRoleRequest(BaseModel):
    """Request to overwrite a user's base role."""

    new_role: Role


class UpdateCapabilitiesRequest(BaseModel):
    """Request to replace a user's capability tags."""

    capabilities: list[Capability] = Field(default_factory=list)


class SuccessResponse(BaseModel):
    """Generic acknowledgement."""

    success: bool = True


class PermissionCheckResponse(BaseModel):
    """Result of a single permission check."""

    action: str
    allowed: bool


def summarize_user(user: Optional[User]) -> Optional[UserSummary]:
    """Reduce a referenced user to a summary; None stays None."""
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, email=user.email, role=user.role.value)
