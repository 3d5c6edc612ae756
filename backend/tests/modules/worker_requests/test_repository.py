import pytest
from unittest.mock import MagicMock

from modules.shifts.models import HourRange
from modules.worker_requests.models import (
    RequestStatus,
    RequestType,
    SwitchDetails,
    TargetResponse,
)
from modules.worker_requests.repository import WorkerRequestRepository


def _row(**overrides):
    row = {
        "id": "r-1",
        "worker_id": "u-1",
        "shift_template_id": "t-1",
        "date": "2025-09-22",
        "request_type": "switch_request",
        "requested_hours": None,
        "reason": None,
        "priority": None,
        "switch_details": {"target_worker_id": "u-2", "target_assignment_id": None},
        "status": "pending",
        "created_at": "2025-09-20T10:00:00+00:00",
    }
    row.update(overrides)
    return row


class TestWorkerRequestRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return WorkerRequestRepository(mock_db)

    def test_create_join_request(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [_row(
            request_type="join_shift",
            requested_hours={"start_time": "12:00", "end_time": "19:00"},
            switch_details=None,
        )]

        request = repo.create(
            worker_id="u-1",
            shift_template_id="t-1",
            date="2025-09-22",
            request_type=RequestType.JOIN_SHIFT,
            requested_hours=HourRange(start_time="12:00", end_time="19:00"),
        )

        mock_db.table.assert_called_with("worker_hour_requests")
        inserted = mock_db.table.return_value.insert.call_args[0][0]
        assert inserted["requested_hours"] == {"start_time": "12:00", "end_time": "19:00"}
        assert inserted["switch_details"] is None
        assert inserted["priority"] == "normal"
        assert request.requested_hours.end_time == "19:00"

    def test_update_serializes_switch_details(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = [_row()]
        details = SwitchDetails(target_worker_id="u-2", target_worker_response=TargetResponse.APPROVED)

        repo.update("r-1", {"switch_details": details, "status": RequestStatus.PENDING})

        data = mock_db.table.return_value.update.call_args[0][0]
        assert data["switch_details"]["target_worker_response"] == "approved"
        assert data["status"] == "pending"

    def test_pending_switches_filter_on_json_target(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value
        query.eq.return_value = query
        query.order.return_value = query
        query.execute.return_value.data = [_row()]

        listed = repo.list_pending_switches_for_target("u-2")

        query.eq.assert_any_call("switch_details->>target_worker_id", "u-2")
        assert listed[0].switch_details.target_worker_id == "u-2"
