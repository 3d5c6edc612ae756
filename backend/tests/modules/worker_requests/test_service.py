import pytest
from unittest.mock import patch

from modules.assignments.exceptions import DuplicateAssignmentError
from modules.assignments.models import AssignmentStatus
from modules.shifts.exceptions import InactiveShiftTemplateError, InvalidHoursError
from modules.shifts.models import HourRange
from modules.users.exceptions import PermissionDeniedError, UserNotFoundError
from modules.users.models import Role
from modules.worker_requests.exceptions import (
    DuplicateRequestError,
    InvalidSwitchTargetError,
    NotRequestOwnerError,
    NotSwitchRequestError,
    NotSwitchTargetError,
    RequestNotFoundError,
    RequestNotPendingError,
    SwitchAlreadyAnsweredError,
)
from modules.worker_requests.models import (
    RequestPriority,
    RequestStatus,
    RequestType,
    TargetResponse,
)

DATE = "2025-09-22"


def _hours(start="12:00", end="19:00"):
    return HourRange(start_time=start, end_time=end)


@pytest.fixture
def colleague(make_user):
    return make_user("colleague", Role.WORKER)


class TestJoinShift:
    @pytest.mark.asyncio
    async def test_join_request_is_pending(self, request_service, worker, template):
        worker_user, identity = worker

        request = await request_service.request_join_shift(
            identity, template.id, DATE, _hours(), reason="Extra hours", priority=RequestPriority.URGENT
        )

        assert request.status == RequestStatus.PENDING
        assert request.request_type == RequestType.JOIN_SHIFT
        assert request.worker_id == worker_user.id
        assert request.requested_hours == _hours()
        assert request.priority == RequestPriority.URGENT

    @pytest.mark.asyncio
    async def test_approval_creates_confirmed_assignment(
        self, request_service, assignment_repo, manager, worker, template
    ):
        """Approving a join request books the worker for exactly the requested hours."""
        manager_user, manager_identity = manager
        worker_user, worker_identity = worker
        request = await request_service.request_join_shift(
            worker_identity, template.id, DATE, _hours()
        )

        approved = await request_service.approve_request(manager_identity, request.id, notes="OK")

        assert approved.status == RequestStatus.APPROVED
        assert approved.reviewed_by == manager_user.id
        assert approved.reviewed_at is not None
        assert approved.review_notes == "OK"

        assignment = assignment_repo.get_by_id(approved.created_assignment_id)
        assert assignment.status == AssignmentStatus.CONFIRMED
        assert assignment.worker_id == worker_user.id
        assert assignment.assigned_hours == [_hours()]
        assert assignment.manager_approved_at is not None
        assert assignment.worker_approved_at is not None
        assert assignment.notes == "Approved join request: No reason provided"
        assert len(assignment_repo.list_for_template(template.id)) == 1

    @pytest.mark.asyncio
    async def test_rejection_creates_nothing(
        self, request_service, assignment_repo, manager, worker, template
    ):
        _, manager_identity = manager
        _, worker_identity = worker
        request = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())

        rejected = await request_service.reject_request(manager_identity, request.id, notes="Full")

        assert rejected.status == RequestStatus.REJECTED
        assert rejected.created_assignment_id is None
        assert assignment_repo.list_for_template(template.id, include_rejected=True) == []

    @pytest.mark.asyncio
    async def test_second_pending_request_is_refused(self, request_service, worker, template):
        _, identity = worker
        await request_service.request_join_shift(identity, template.id, DATE, _hours())
        with pytest.raises(DuplicateRequestError):
            await request_service.request_join_shift(identity, template.id, DATE, _hours("08:00", "10:00"))

    @pytest.mark.asyncio
    async def test_already_assigned_worker_is_refused(
        self, request_service, assignment_service, manager, worker, template
    ):
        _, manager_identity = manager
        worker_user, worker_identity = worker
        await assignment_service.create_assignment(
            manager_identity, worker_user.id, template.id, DATE, [_hours()]
        )
        with pytest.raises(DuplicateAssignmentError):
            await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())

    @pytest.mark.asyncio
    async def test_approval_conflicts_with_assignment_made_meanwhile(
        self, request_service, assignment_service, assignment_repo, request_repo, manager, worker, template
    ):
        _, manager_identity = manager
        worker_user, worker_identity = worker
        request = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())
        await assignment_service.create_assignment(
            manager_identity, worker_user.id, template.id, DATE, [_hours("08:00", "12:00")]
        )

        with pytest.raises(DuplicateAssignmentError):
            await request_service.approve_request(manager_identity, request.id)

        assert request_repo.get_by_id(request.id).status == RequestStatus.PENDING
        assert len(assignment_repo.list_for_template(template.id)) == 1

    @pytest.mark.asyncio
    async def test_failed_review_write_leaves_no_assignment(
        self, request_service, assignment_repo, request_repo, manager, worker, template
    ):
        """A failed request update undoes the assignment so the approval can be retried."""
        _, manager_identity = manager
        _, worker_identity = worker
        request = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())

        with patch.object(request_repo, "update", side_effect=RuntimeError("write failed")):
            with pytest.raises(RuntimeError, match="write failed"):
                await request_service.approve_request(manager_identity, request.id)

        assert request_repo.get_by_id(request.id).status == RequestStatus.PENDING
        assert assignment_repo.list_for_template(template.id, include_rejected=True) == []

        approved = await request_service.approve_request(manager_identity, request.id)
        assert approved.status == RequestStatus.APPROVED
        assert assignment_repo.get_by_id(approved.created_assignment_id) is not None

    @pytest.mark.asyncio
    async def test_invalid_hours(self, request_service, worker, template):
        _, identity = worker
        with pytest.raises(InvalidHoursError):
            await request_service.request_join_shift(identity, template.id, DATE, _hours("19:00", "12:00"))

    @pytest.mark.asyncio
    async def test_inactive_template(self, request_service, template_repo, worker, template):
        _, identity = worker
        template_repo.update(template.id, {"is_active": False})
        with pytest.raises(InactiveShiftTemplateError):
            await request_service.request_join_shift(identity, template.id, DATE, _hours())

    @pytest.mark.asyncio
    async def test_customer_cannot_join(self, request_service, customer, template):
        _, identity = customer
        with pytest.raises(PermissionDeniedError):
            await request_service.request_join_shift(identity, template.id, DATE, _hours())


class TestReview:
    @pytest.mark.asyncio
    async def test_reviewed_request_cannot_be_reviewed_again(
        self, request_service, manager, worker, template
    ):
        _, manager_identity = manager
        _, worker_identity = worker
        request = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())
        await request_service.reject_request(manager_identity, request.id)

        with pytest.raises(RequestNotPendingError) as exc_info:
            await request_service.approve_request(manager_identity, request.id)
        assert exc_info.value.current_state == "rejected"

    @pytest.mark.asyncio
    async def test_worker_cannot_review(self, request_service, worker, template):
        _, identity = worker
        request = await request_service.request_join_shift(identity, template.id, DATE, _hours())
        with pytest.raises(PermissionDeniedError):
            await request_service.approve_request(identity, request.id)

    @pytest.mark.asyncio
    async def test_missing_request(self, request_service, manager):
        _, identity = manager
        with pytest.raises(RequestNotFoundError):
            await request_service.reject_request(identity, "missing")

    @pytest.mark.asyncio
    async def test_review_queue(self, request_service, manager, worker, template):
        _, manager_identity = manager
        worker_user, worker_identity = worker
        pending = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())
        cancelled = await request_service.request_join_shift(
            worker_identity, template.id, "2025-09-23", _hours()
        )
        await request_service.cancel_request(worker_identity, cancelled.id)

        queue = await request_service.get_requests_for_review(manager_identity)

        assert [r.id for r in queue] == [pending.id]
        assert queue[0].worker.id == worker_user.id
        assert queue[0].shift.name == "Workshop Day"


class TestCancel:
    @pytest.mark.asyncio
    async def test_owner_cancels(self, request_service, worker, template):
        _, identity = worker
        request = await request_service.request_join_shift(identity, template.id, DATE, _hours())

        cancelled = await request_service.cancel_request(identity, request.id)

        assert cancelled.status == RequestStatus.CANCELLED
        with pytest.raises(RequestNotPendingError):
            await request_service.cancel_request(identity, request.id)

    @pytest.mark.asyncio
    async def test_cancel_frees_the_slot(self, request_service, worker, template):
        _, identity = worker
        request = await request_service.request_join_shift(identity, template.id, DATE, _hours())
        await request_service.cancel_request(identity, request.id)

        again = await request_service.request_join_shift(identity, template.id, DATE, _hours())

        assert again.status == RequestStatus.PENDING

    @pytest.mark.asyncio
    async def test_only_owner_cancels(self, request_service, manager, worker, template):
        _, manager_identity = manager
        _, worker_identity = worker
        request = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())
        with pytest.raises(NotRequestOwnerError):
            await request_service.cancel_request(manager_identity, request.id)


class TestSwitch:
    @pytest.mark.asyncio
    async def test_switch_flow(self, request_service, assignment_repo, manager, worker, colleague, template):
        _, manager_identity = manager
        _, worker_identity = worker
        colleague_user, colleague_identity = colleague

        request = await request_service.request_switch(
            worker_identity, template.id, DATE, colleague_user.id, target_assignment_id="a-1"
        )
        assert request.request_type == RequestType.SWITCH_REQUEST
        assert request.switch_details.target_worker_id == colleague_user.id

        incoming = await request_service.get_switch_requests_for_me(colleague_identity)
        assert [r.id for r in incoming] == [request.id]
        assert incoming[0].target_worker.id == colleague_user.id

        answered = await request_service.respond_to_switch(colleague_identity, request.id, approve=True)
        assert answered.switch_details.target_worker_response == TargetResponse.APPROVED
        assert answered.status == RequestStatus.PENDING

        approved = await request_service.approve_request(manager_identity, request.id)
        assert approved.status == RequestStatus.APPROVED
        assert approved.created_assignment_id is None
        assert assignment_repo.list_for_template(template.id) == []

    @pytest.mark.asyncio
    async def test_denial_rejects_request(self, request_service, worker, colleague, template):
        _, worker_identity = worker
        colleague_user, colleague_identity = colleague
        request = await request_service.request_switch(
            worker_identity, template.id, DATE, colleague_user.id
        )

        denied = await request_service.respond_to_switch(colleague_identity, request.id, approve=False)

        assert denied.status == RequestStatus.REJECTED
        assert denied.switch_details.target_worker_response == TargetResponse.DENIED
        assert await request_service.get_switch_requests_for_me(colleague_identity) == []

    @pytest.mark.asyncio
    async def test_answer_only_once(self, request_service, worker, colleague, template):
        _, worker_identity = worker
        colleague_user, colleague_identity = colleague
        request = await request_service.request_switch(
            worker_identity, template.id, DATE, colleague_user.id
        )
        await request_service.respond_to_switch(colleague_identity, request.id, approve=True)

        with pytest.raises(SwitchAlreadyAnsweredError):
            await request_service.respond_to_switch(colleague_identity, request.id, approve=False)

    @pytest.mark.asyncio
    async def test_only_target_answers(self, request_service, worker, colleague, template):
        _, worker_identity = worker
        colleague_user, _ = colleague
        request = await request_service.request_switch(
            worker_identity, template.id, DATE, colleague_user.id
        )
        with pytest.raises(NotSwitchTargetError):
            await request_service.respond_to_switch(worker_identity, request.id, approve=True)

    @pytest.mark.asyncio
    async def test_join_request_cannot_be_answered(self, request_service, worker, colleague, template):
        _, worker_identity = worker
        _, colleague_identity = colleague
        request = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())
        with pytest.raises(NotSwitchRequestError):
            await request_service.respond_to_switch(colleague_identity, request.id, approve=True)

    @pytest.mark.asyncio
    async def test_invalid_targets(self, request_service, worker, template):
        worker_user, identity = worker
        with pytest.raises(InvalidSwitchTargetError):
            await request_service.request_switch(identity, template.id, DATE, worker_user.id)
        with pytest.raises(UserNotFoundError):
            await request_service.request_switch(identity, template.id, DATE, "missing")


class TestMyRequests:
    @pytest.mark.asyncio
    async def test_newest_first_and_own_only(self, request_service, worker, colleague, template):
        _, worker_identity = worker
        colleague_user, colleague_identity = colleague
        first = await request_service.request_join_shift(worker_identity, template.id, DATE, _hours())
        second = await request_service.request_switch(
            worker_identity, template.id, "2025-09-23", colleague_user.id
        )
        await request_service.request_join_shift(colleague_identity, template.id, DATE, _hours())

        mine = await request_service.get_my_requests(worker_identity)

        assert [r.id for r in mine] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_customer_has_no_requests_view(self, request_service, customer):
        _, identity = customer
        with pytest.raises(PermissionDeniedError):
            await request_service.get_my_requests(identity)
