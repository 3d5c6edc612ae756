"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The storage backend (in-memory or Supabase) is chosen here from
``settings.storage_backend``; services never know which one they got.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.users.interfaces import IUserRepository, IUserService
    from modules.suggestions.interfaces import ISuggestionRepository, ISuggestionService
    from modules.shifts.interfaces import IShiftTemplateRepository, IShiftTemplateService
    from modules.assignments.interfaces import IAssignmentRepository, IAssignmentService
    from modules.worker_requests.interfaces import (
        IWorkerRequestRepository,
        IWorkerRequestService,
    )


class ServiceContainer:
    """
    Container for all repository and service instances.

    Instances are created lazily on first access and cached as
    singletons within the container. Use reset() to clear them.
    """

    def __init__(self) -> None:
        self._storage_backend = get_settings().storage_backend

        self._auth_service: "IAuthService | None" = None

        self._user_repository: "IUserRepository | None" = None
        self._suggestion_repository: "ISuggestionRepository | None" = None
        self._template_repository: "IShiftTemplateRepository | None" = None
        self._assignment_repository: "IAssignmentRepository | None" = None
        self._request_repository: "IWorkerRequestRepository | None" = None

        self._user_service: "IUserService | None" = None
        self._suggestion_service: "ISuggestionService | None" = None
        self._template_service: "IShiftTemplateService | None" = None
        self._assignment_service: "IAssignmentService | None" = None
        self._request_service: "IWorkerRequestService | None" = None

    @property
    def uses_supabase(self) -> bool:
        return self._storage_backend == "supabase"

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "IUserRepository":
        if self._user_repository is None:
            from modules.users.repository import UserRepository, InMemoryUserRepository
            if self.uses_supabase:
                from shared.database import get_supabase_client
                self._user_repository = UserRepository(get_supabase_client())
            else:
                self._user_repository = InMemoryUserRepository()
        return self._user_repository

    @property
    def suggestion_repository(self) -> "ISuggestionRepository":
        if self._suggestion_repository is None:
            from modules.suggestions.repository import (
                SuggestionRepository,
                InMemorySuggestionRepository,
            )
            if self.uses_supabase:
                from shared.database import get_supabase_client
                self._suggestion_repository = SuggestionRepository(get_supabase_client())
            else:
                self._suggestion_repository = InMemorySuggestionRepository()
        return self._suggestion_repository

    @property
    def template_repository(self) -> "IShiftTemplateRepository":
        if self._template_repository is None:
            from modules.shifts.repository import (
                ShiftTemplateRepository,
                InMemoryShiftTemplateRepository,
            )
            if self.uses_supabase:
                from shared.database import get_supabase_client
                self._template_repository = ShiftTemplateRepository(get_supabase_client())
            else:
                self._template_repository = InMemoryShiftTemplateRepository()
        return self._template_repository

    @property
    def assignment_repository(self) -> "IAssignmentRepository":
        if self._assignment_repository is None:
            from modules.assignments.repository import (
                AssignmentRepository,
                InMemoryAssignmentRepository,
            )
            if self.uses_supabase:
                from shared.database import get_supabase_client
                self._assignment_repository = AssignmentRepository(get_supabase_client())
            else:
                self._assignment_repository = InMemoryAssignmentRepository()
        return self._assignment_repository

    @property
    def request_repository(self) -> "IWorkerRequestRepository":
        if self._request_repository is None:
            from modules.worker_requests.repository import (
                WorkerRequestRepository,
                InMemoryWorkerRequestRepository,
            )
            if self.uses_supabase:
                from shared.database import get_supabase_client
                self._request_repository = WorkerRequestRepository(get_supabase_client())
            else:
                self._request_repository = InMemoryWorkerRequestRepository()
        return self._request_repository

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import get_auth_service
            self._auth_service = get_auth_service()
        return self._auth_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(self.user_repository)
        return self._user_service

    @property
    def suggestions(self) -> "ISuggestionService":
        """Get the suggestion service instance."""
        if self._suggestion_service is None:
            from modules.suggestions.service import SuggestionService
            self._suggestion_service = SuggestionService(
                repository=self.suggestion_repository,
                users=self.users,
                default_limit=get_settings().suggestion_default_limit,
            )
        return self._suggestion_service

    @property
    def shifts(self) -> "IShiftTemplateService":
        """Get the shift template service instance."""
        if self._template_service is None:
            from modules.shifts.service import ShiftTemplateService
            self._template_service = ShiftTemplateService(
                repository=self.template_repository,
                assignments=self.assignment_repository,
                users=self.users,
            )
        return self._template_service

    @property
    def assignments(self) -> "IAssignmentService":
        """Get the shift assignment service instance."""
        if self._assignment_service is None:
            from modules.assignments.service import AssignmentService
            self._assignment_service = AssignmentService(
                repository=self.assignment_repository,
                templates=self.template_repository,
                users=self.users,
            )
        return self._assignment_service

    @property
    def worker_requests(self) -> "IWorkerRequestService":
        """Get the worker-hour request service instance."""
        if self._request_service is None:
            from modules.worker_requests.service import WorkerRequestService
            self._request_service = WorkerRequestService(
                repository=self.request_repository,
                assignments=self.assignments,
                templates=self.template_repository,
                users=self.users,
            )
        return self._request_service


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    repositories and services. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container().users


def get_suggestion_service() -> "ISuggestionService":
    """FastAPI dependency for suggestion service."""
    return get_container().suggestions


def get_shift_service() -> "IShiftTemplateService":
    """FastAPI dependency for shift template service."""
    return get_container().shifts


def get_assignment_service() -> "IAssignmentService":
    """FastAPI dependency for assignment service."""
    return get_container().assignments


def get_worker_request_service() -> "IWorkerRequestService":
    """FastAPI dependency for worker-hour request service."""
    return get_container().worker_requests
