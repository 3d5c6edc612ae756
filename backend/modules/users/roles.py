"""
Role resolution.

Every permission decision starts from ``resolve_effective_role``. Handlers
must not read ``user.role`` or ``user.emulating_role`` directly; the two
helpers below name the only other questions asked of the base role.
"""

from .models import Capability, Role, User


def resolve_effective_role(user: User) -> Role:
    """
    Return the role used for permission checks.

    Testers with an emulated role act as that role. Everyone else acts as
    their base role, and a missing base role counts as guest.
    """
    role = user.role or Role.GUEST
    if role == Role.TESTER and user.emulating_role is not None:
        return user.emulating_role
    return role


def is_superuser(user: User) -> bool:
    """
    Whether the user holds the tester escape hatch.

    Superusers skip the permission table for role management and see every
    suggestion. The check uses the base role so emulating a guest does not
    lock a tester out of switching back.
    """
    return user.role == Role.TESTER


def has_reviewer_access(user: User) -> bool:
    """Whether the user may read and review every feedback suggestion."""
    return (
        is_superuser(user)
        or user.role == Role.DEV
        or Capability.DEV in user.capabilities
    )
