"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
settings pinned for tests, JWT minting, and a fully wired in-memory world
(repositories, services and seeded users).
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Callable, Iterable, Optional
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.service import reset_auth_service
from modules.users.models import Capability, Role, User
from modules.users.repository import InMemoryUserRepository
from modules.users.service import UserService
from modules.suggestions.repository import InMemorySuggestionRepository
from modules.suggestions.service import SuggestionService
from modules.shifts.models import (
    CreateShiftTemplateRequest,
    ShiftTemplate,
    StaffingRequirement,
    Weekday,
)
from modules.shifts.repository import InMemoryShiftTemplateRepository
from modules.shifts.service import ShiftTemplateService
from modules.assignments.repository import InMemoryAssignmentRepository
from modules.assignments.service import AssignmentService
from modules.worker_requests.repository import InMemoryWorkerRequestRepository
from modules.worker_requests.service import WorkerRequestService
from shared.config import get_settings
from shared.models import AuthenticatedUser


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    name: Optional[str] = "Test User",
    expired: bool = False,
    email_verified: bool = True,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: Subject to include in the token
        email: Email to include in the token
        name: Display name claim
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "name": name,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Pin settings to the in-memory backend and the test JWT secret."""
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    get_settings.cache_clear()
    reset_auth_service()
    reset_container()
    yield get_settings()
    get_settings.cache_clear()
    reset_auth_service()
    reset_container()


@pytest.fixture
def token_factory() -> Callable[..., str]:
    """Mint test tokens: token_factory(user_id=..., expired=...)."""
    return create_test_token


# -----------------------------------------------------------------------------
# In-memory world
# -----------------------------------------------------------------------------


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def template_repo() -> InMemoryShiftTemplateRepository:
    return InMemoryShiftTemplateRepository()


@pytest.fixture
def assignment_repo() -> InMemoryAssignmentRepository:
    return InMemoryAssignmentRepository()


@pytest.fixture
def request_repo() -> InMemoryWorkerRequestRepository:
    return InMemoryWorkerRequestRepository()


@pytest.fixture
def suggestion_repo() -> InMemorySuggestionRepository:
    return InMemorySuggestionRepository()


@pytest.fixture
def user_service(user_repo) -> UserService:
    return UserService(user_repo)


@pytest.fixture
def suggestion_service(suggestion_repo, user_service) -> SuggestionService:
    return SuggestionService(suggestion_repo, user_service)


@pytest.fixture
def shift_service(template_repo, assignment_repo, user_service) -> ShiftTemplateService:
    return ShiftTemplateService(template_repo, assignment_repo, user_service)


@pytest.fixture
def assignment_service(assignment_repo, template_repo, user_service) -> AssignmentService:
    return AssignmentService(assignment_repo, template_repo, user_service)


@pytest.fixture
def request_service(
    request_repo, assignment_service, template_repo, user_service
) -> WorkerRequestService:
    return WorkerRequestService(request_repo, assignment_service, template_repo, user_service)


@pytest.fixture
def make_user(user_repo) -> Callable[..., tuple[User, AuthenticatedUser]]:
    """
    Seed a user and return it with the identity that resolves to it.

    Usage:
        manager, manager_identity = make_user("manager", Role.MANAGER)
    """
    def _make(
        name: str,
        role: Role = Role.GUEST,
        capabilities: Iterable[Capability] = (),
        emulating_role: Optional[Role] = None,
    ) -> tuple[User, AuthenticatedUser]:
        user = User(
            id=f"user-{name}",
            external_id=f"ext-{name}",
            name=name.title(),
            email=f"{name}@example.com",
            role=role,
            emulating_role=emulating_role,
            capabilities=set(capabilities),
        )
        user_repo.add(user)
        identity = AuthenticatedUser(id=user.external_id, name=user.name, email=user.email)
        return user, identity

    return _make


@pytest.fixture
def manager(make_user):
    return make_user("manager", Role.MANAGER)


@pytest.fixture
def worker(make_user):
    return make_user("worker", Role.WORKER)


@pytest.fixture
def customer(make_user):
    return make_user("customer", Role.CUSTOMER)


@pytest.fixture
def template(template_repo, manager) -> ShiftTemplate:
    """An active 08:00-20:00 template running every day of the week."""
    manager_user, _ = manager
    return template_repo.create(manager_user.id, CreateShiftTemplateRequest(
        name="Workshop Day",
        open_time="08:00",
        close_time="20:00",
        recurring_days=list(Weekday),
        hourly_requirements=[
            StaffingRequirement(start_time="08:00", end_time="14:00", min_workers=1, optimal_workers=2),
            StaffingRequirement(start_time="14:00", end_time="20:00", min_workers=2, optimal_workers=3),
        ],
    ))
