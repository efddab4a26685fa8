"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations around a single database client. Each module exposes its
service through an interface, and this file creates the concrete
implementations.
"""

import logging
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import UserRepository
    from modules.solicitudes.interfaces import IClaimCoordinator, ISolicitudService
    from modules.solicitudes.repository import SolicitudRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    The database client is the container's one external resource. It is
    created by open() (called at application start-up) or lazily on first
    use, and released by close() (called at shutdown). Repositories and
    services are cached as singletons within the container.
    """

    def __init__(
        self,
        database: "Optional[Client]" = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings
        self._database: "Client | None" = database
        self._user_repository: "UserRepository | None" = None
        self._solicitud_repository: "SolicitudRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._solicitud_service: "ISolicitudService | None" = None
        self._claim_coordinator: "IClaimCoordinator | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def database(self) -> "Client":
        """Get the database client, creating it if needed."""
        if self._database is None:
            from shared.database import get_supabase_client
            self._database = get_supabase_client()
        return self._database

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.database)
        return self._user_repository

    @property
    def solicitud_repository(self) -> "SolicitudRepository":
        """Get the solicitud repository instance."""
        if self._solicitud_repository is None:
            from modules.solicitudes.repository import SolicitudRepository
            self._solicitud_repository = SolicitudRepository(self.database)
        return self._solicitud_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.user_repository, settings=self.settings)
        return self._auth_service

    @property
    def solicitudes(self) -> "ISolicitudService":
        """Get the request ledger service instance."""
        if self._solicitud_service is None:
            from modules.solicitudes.service import SolicitudService
            self._solicitud_service = SolicitudService(self.solicitud_repository)
        return self._solicitud_service

    @property
    def claims(self) -> "IClaimCoordinator":
        """Get the claim coordinator instance."""
        if self._claim_coordinator is None:
            from modules.solicitudes.claims import ClaimCoordinator
            self._claim_coordinator = ClaimCoordinator(self.solicitud_repository)
        return self._claim_coordinator

    def open(self) -> None:
        """Acquire the database client up front instead of on first request."""
        _ = self.database

    def close(self) -> None:
        """Drop every cached service and release the database client."""
        from shared.database import reset_client_cache
        self.reset()
        self._database = None
        reset_client_cache()

    def reset(self) -> None:
        """
        Reset all cached services.

        Keeps the database client. Primarily for testing.
        """
        self._user_repository = None
        self._solicitud_repository = None
        self._auth_service = None
        self._solicitud_service = None
        self._claim_coordinator = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (tests, alternative stores)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_solicitud_service() -> "ISolicitudService":
    """FastAPI dependency for the request ledger."""
    return get_container().solicitudes


def get_claim_coordinator() -> "IClaimCoordinator":
    """FastAPI dependency for the claim coordinator."""
    return get_container().claims
