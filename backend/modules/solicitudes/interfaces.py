"""
Solicitudes module interfaces.

The API layer depends on ISolicitudService for ledger reads and writes and
on IClaimCoordinator for claiming.
"""

from datetime import date
from typing import Protocol, Optional, runtime_checkable

from shared.models import Identity

from .models import Solicitud


@runtime_checkable
class ISolicitudService(Protocol):
    """
    Interface for the request ledger.
    """

    async def create_solicitud(
        self,
        title: Optional[str],
        description: Optional[str],
        requester_name: Optional[str],
        scheduled_date: Optional[date],
    ) -> Solicitud:
        """
        Create a new solicitud in PENDING status.

        Raises:
            ValidationError: If title or requester name is empty
        """
        ...

    async def list_pending(self) -> list[Solicitud]:
        """
        List PENDING solicitudes ordered by scheduled date, ascending.
        """
        ...

    async def list_claimed_by(self, user_id: str) -> list[Solicitud]:
        """
        List solicitudes claimed by a user, most recent claim first.
        """
        ...


@runtime_checkable
class IClaimCoordinator(Protocol):
    """
    Interface for the PENDING -> CLAIMED transition.
    """

    async def claim(self, solicitud_id: str, claimant: Identity) -> Solicitud:
        """
        Claim a solicitud for a verified identity.

        At most one of any number of concurrent callers succeeds.

        Returns:
            The claimed solicitud with status, claimed_by and claimed_at set

        Raises:
            SolicitudUnavailableError: If the solicitud does not exist or is
                already claimed. Never retried.
        """
        ...
