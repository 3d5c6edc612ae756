import pytest

from modules.assignments.exceptions import InvalidAssignmentTransitionError
from modules.assignments.models import AssignmentStatus
from modules.assignments.transitions import (
    AssignmentEvent,
    TRANSITIONS,
    is_terminal,
    next_status,
)
from shared.exceptions import InvalidTransitionError


class TestNextStatus:
    @pytest.mark.parametrize("current,event,expected", [
        (AssignmentStatus.PENDING_WORKER_APPROVAL, AssignmentEvent.WORKER_APPROVE, AssignmentStatus.CONFIRMED),
        (AssignmentStatus.PENDING_WORKER_APPROVAL, AssignmentEvent.REJECT, AssignmentStatus.REJECTED),
        (AssignmentStatus.PENDING_MANAGER_APPROVAL, AssignmentEvent.MANAGER_APPROVE, AssignmentStatus.CONFIRMED),
        (AssignmentStatus.PENDING_MANAGER_APPROVAL, AssignmentEvent.REJECT, AssignmentStatus.REJECTED),
    ])
    def test_allowed_transitions(self, current, event, expected):
        assert next_status(current, event) == expected

    @pytest.mark.parametrize("current,event", [
        (AssignmentStatus.PENDING_WORKER_APPROVAL, AssignmentEvent.MANAGER_APPROVE),
        (AssignmentStatus.PENDING_MANAGER_APPROVAL, AssignmentEvent.WORKER_APPROVE),
    ])
    def test_wrong_side_cannot_approve(self, current, event):
        with pytest.raises(InvalidAssignmentTransitionError):
            next_status(current, event)

    @pytest.mark.parametrize("current", [AssignmentStatus.CONFIRMED, AssignmentStatus.REJECTED])
    @pytest.mark.parametrize("event", list(AssignmentEvent))
    def test_terminal_states_accept_nothing(self, current, event):
        with pytest.raises(InvalidTransitionError) as exc_info:
            next_status(current, event)
        assert exc_info.value.current_state == current.value
        assert exc_info.value.details["event"] == event.value


def test_terminal_states():
    assert is_terminal(AssignmentStatus.CONFIRMED)
    assert is_terminal(AssignmentStatus.REJECTED)
    assert not is_terminal(AssignmentStatus.PENDING_WORKER_APPROVAL)
    assert all(not is_terminal(current) for current, _ in TRANSITIONS)
