"""
Permission table.

The table is data: adding a role or an action is an edit to the mappings
below, never a change to control flow.
"""

from enum import Enum
from typing import Optional, Union

from .exceptions import PermissionDeniedError
from .models import Capability, Role, User
from .roles import resolve_effective_role


class Action(str, Enum):
    """Every action identifier a caller may check."""

    VIEW_PUBLIC_SERVICES = "view_public_services"
    CREATE_GUEST_REQUEST = "create_guest_request"
    CREATE_CUSTOMER_REQUEST = "create_customer_request"
    TRACK_OWN_REQUESTS = "track_own_requests"
    ACCESS_CUSTOMER_PORTAL = "access_customer_portal"
    HANDLE_REQUESTS = "handle_requests"
    APPROVE_REQUESTS = "approve_requests"
    ASSIGN_WORKERS = "assign_workers"
    CREATE_EVENT_DRAFT = "create_event_draft"
    APPROVE_EVENTS = "approve_events"
    MANAGE_EVENTS = "manage_events"
    CREATE_TICKET = "create_ticket"
    COMMENT_ON_TICKETS = "comment_on_tickets"
    CLOSE_TICKETS = "close_tickets"
    MANAGE_USER_ROLES = "manage_user_roles"
    ACCESS_WORKER_PORTAL = "access_worker_portal"
    ACCESS_MANAGER_PORTAL = "access_manager_portal"
    VIEW_SHIFTS = "view_shifts"
    SELF_ASSIGN_SHIFTS = "self_assign_shifts"
    REQUEST_SHIFT_SWAPS = "request_shift_swaps"
    MANAGE_SHIFTS = "manage_shifts"
    APPROVE_SHIFT_SWAPS = "approve_shift_swaps"
    EMULATE_ROLES = "emulate_roles"
    CREATE_PRO_PROFILE = "create_pro_profile"
    EDIT_PRO_PROFILE = "edit_pro_profile"
    CREATE_COURSES = "create_courses"


_GUEST = frozenset({
    Action.VIEW_PUBLIC_SERVICES,
    Action.CREATE_GUEST_REQUEST,
    Action.TRACK_OWN_REQUESTS,
})

_CUSTOMER = _GUEST | {
    Action.CREATE_CUSTOMER_REQUEST,
    Action.ACCESS_CUSTOMER_PORTAL,
}

_WORKER = _CUSTOMER | {
    Action.HANDLE_REQUESTS,
    Action.CREATE_EVENT_DRAFT,
    Action.CREATE_TICKET,
    Action.COMMENT_ON_TICKETS,
    Action.ACCESS_WORKER_PORTAL,
    Action.VIEW_SHIFTS,
    Action.SELF_ASSIGN_SHIFTS,
    Action.REQUEST_SHIFT_SWAPS,
}

_MANAGER = _WORKER | {
    Action.APPROVE_REQUESTS,
    Action.ASSIGN_WORKERS,
    Action.APPROVE_EVENTS,
    Action.MANAGE_EVENTS,
    Action.CLOSE_TICKETS,
    Action.MANAGE_USER_ROLES,
    Action.ACCESS_MANAGER_PORTAL,
    Action.MANAGE_SHIFTS,
    Action.APPROVE_SHIFT_SWAPS,
}

ROLE_PERMISSIONS: dict[Role, frozenset[Action]] = {
    Role.GUEST: _GUEST,
    Role.CUSTOMER: _CUSTOMER,
    Role.WORKER: _WORKER,
    Role.MANAGER: _MANAGER,
    Role.TESTER: _GUEST | _CUSTOMER | _WORKER | _MANAGER | {Action.EMULATE_ROLES},
}

# Capability tags grant extra actions on top of the effective role
CAPABILITY_PERMISSIONS: dict[Capability, frozenset[Action]] = {
    Capability.PRO: frozenset({Action.CREATE_PRO_PROFILE, Action.EDIT_PRO_PROFILE}),
    Capability.INSTRUCTOR: frozenset({Action.CREATE_COURSES}),
}


def parse_action(action: Union[Action, str]) -> Optional[Action]:
    """Return the Action for an identifier, or None if it is not one."""
    try:
        return Action(action)
    except ValueError:
        return None


def _parse_role(role: Union[Role, str, None]) -> Optional[Role]:
    try:
        return Role(role)
    except ValueError:
        return None


def has_permission(role: Union[Role, str, None], action: Union[Action, str]) -> bool:
    """
    Look up one action in the permission table.

    Unknown roles (and ``dev``, which has no table entry) have no
    permissions. Unknown action identifiers are never permitted.
    """
    parsed_role = _parse_role(role)
    parsed_action = parse_action(action)
    if parsed_role is None or parsed_action is None:
        return False
    return parsed_action in ROLE_PERMISSIONS.get(parsed_role, frozenset())


def user_permissions(user: User) -> frozenset[Action]:
    """All actions the user may perform: effective role plus capability grants."""
    granted = set(ROLE_PERMISSIONS.get(resolve_effective_role(user), frozenset()))
    for capability in user.capabilities:
        granted |= CAPABILITY_PERMISSIONS.get(capability, frozenset())
    return frozenset(granted)


def user_has_permission(user: User, action: Union[Action, str]) -> bool:
    parsed = parse_action(action)
    return parsed is not None and parsed in user_permissions(user)


def require_permission(user: User, action: Action) -> None:
    """
    Raise PermissionDeniedError unless the user may perform the action.

    Raises:
        PermissionDeniedError: If the action is not granted
    """
    if not user_has_permission(user, action):
        raise PermissionDeniedError(action.value, resolve_effective_role(user).value)
