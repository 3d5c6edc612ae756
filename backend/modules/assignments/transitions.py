"""
Assignment state machine.

The table below is the only place assignment status changes are defined.
``confirmed`` and ``rejected`` are terminal.
"""

from enum import Enum

from .exceptions import InvalidAssignmentTransitionError
from .models import AssignmentStatus


class AssignmentEvent(str, Enum):
    WORKER_APPROVE = "worker_approve"
    MANAGER_APPROVE = "manager_approve"
    REJECT = "reject"


TRANSITIONS: dict[tuple[AssignmentStatus, AssignmentEvent], AssignmentStatus] = {
    (AssignmentStatus.PENDING_WORKER_APPROVAL, AssignmentEvent.WORKER_APPROVE): AssignmentStatus.CONFIRMED,
    (AssignmentStatus.PENDING_WORKER_APPROVAL, AssignmentEvent.REJECT): AssignmentStatus.REJECTED,
    (AssignmentStatus.PENDING_MANAGER_APPROVAL, AssignmentEvent.MANAGER_APPROVE): AssignmentStatus.CONFIRMED,
    (AssignmentStatus.PENDING_MANAGER_APPROVAL, AssignmentEvent.REJECT): AssignmentStatus.REJECTED,
}

TERMINAL_STATES = frozenset({AssignmentStatus.CONFIRMED, AssignmentStatus.REJECTED})


def next_status(current: AssignmentStatus, event: AssignmentEvent) -> AssignmentStatus:
    """
    Resolve the status an event moves an assignment to.

    Raises:
        InvalidAssignmentTransitionError: If the event is not allowed in ``current``
    """
    try:
        return TRANSITIONS[(current, event)]
    except KeyError:
        raise InvalidAssignmentTransitionError(current.value, event.value)


def is_terminal(status: AssignmentStatus) -> bool:
    return status in TERMINAL_STATES
