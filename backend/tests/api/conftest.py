"""
Fixtures for API tests.

Each test gets a fresh app wired to a fresh in-memory container; users are
seeded straight into the container's user repository.
"""

import pytest
from typing import Callable, Iterable, Optional
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import get_container
from modules.users.models import Capability, Role, User


@pytest.fixture
def client(test_settings) -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def seed_user(token_factory) -> Callable[..., dict[str, str]]:
    """
    Store a user and return Authorization headers for it.

    Usage:
        headers = seed_user("manager", Role.MANAGER)
    """
    def _seed(
        name: str,
        role: Role = Role.GUEST,
        capabilities: Iterable[Capability] = (),
        emulating_role: Optional[Role] = None,
    ) -> dict[str, str]:
        get_container().user_repository.add(User(
            id=f"user-{name}",
            external_id=f"ext-{name}",
            name=name.title(),
            email=f"{name}@example.com",
            role=role,
            emulating_role=emulating_role,
            capabilities=set(capabilities),
        ))
        token = token_factory(user_id=f"ext-{name}", email=f"{name}@example.com", name=name.title())
        return {"Authorization": f"Bearer {token}"}

    return _seed


@pytest.fixture
def manager_headers(seed_user) -> dict[str, str]:
    return seed_user("manager", Role.MANAGER)


@pytest.fixture
def worker_headers(seed_user) -> dict[str, str]:
    return seed_user("worker", Role.WORKER)


@pytest.fixture
def template_id(client, manager_headers) -> str:
    """An 08:00-20:00 template running every day, created through the API."""
    response = client.post("/api/shifts", headers=manager_headers, json={
        "name": "Workshop Day",
        "open_time": "08:00",
        "close_time": "20:00",
        "recurring_days": [
            "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
        ],
        "hourly_requirements": [
            {"start_time": "08:00", "end_time": "14:00", "min_workers": 1, "optimal_workers": 2},
            {"start_time": "14:00", "end_time": "20:00", "min_workers": 2, "optimal_workers": 3},
        ],
    })
    assert response.status_code == 201
    return response.json()["id"]
