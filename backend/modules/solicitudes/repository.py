"""
Solicitud repository for database access.

Encapsulates all Supabase queries and data mapping for the solicitudes
table, including the conditional update that implements claiming.
"""

from datetime import datetime
from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Solicitud, SolicitudStatus

SOLICITUDES_TABLE = "solicitudes"


class SolicitudRepository(BaseRepository[Solicitud]):
    """
    Repository for solicitud data access.

    All methods return Pydantic models mapped from database rows.

    Note: This repository does NOT validate input. The service layer is
    responsible for rejecting empty fields before reaching the store.
    """

    def create_solicitud(self, data: dict[str, Any]) -> Solicitud:
        """
        Insert a new solicitud in PENDING status.

        Args:
            data: Column values (title, description, requester_name, scheduled_date).

        Returns:
            Created Solicitud with generated ID and timestamps.
        """
        row = {
            **data,
            "status": SolicitudStatus.PENDING.value,
            "claimed_by": None,
            "claimed_at": None,
        }
        result = self._execute(self._db.table(SOLICITUDES_TABLE).insert(row), "create_solicitud")
        return self._map_to_solicitud(result.data[0])

    def list_pending(self) -> list[Solicitud]:
        """All PENDING solicitudes, earliest scheduled date first."""
        query = (
            self._db.table(SOLICITUDES_TABLE)
            .select("*")
            .eq("status", SolicitudStatus.PENDING.value)
            .order("scheduled_date")
        )
        result = self._execute(query, "list_pending")
        return [self._map_to_solicitud(row) for row in result.data]

    def list_claimed_by(self, user_id: str) -> list[Solicitud]:
        """All solicitudes claimed by a user, most recently claimed first."""
        query = (
            self._db.table(SOLICITUDES_TABLE)
            .select("*")
            .eq("status", SolicitudStatus.CLAIMED.value)
            .eq("claimed_by", user_id)
            .order("claimed_at", desc=True)
        )
        result = self._execute(query, "list_claimed_by")
        return [self._map_to_solicitud(row) for row in result.data]

    def claim_if_pending(
        self,
        solicitud_id: str,
        user_id: str,
        claimed_at: datetime,
    ) -> Optional[Solicitud]:
        """
        Mark a solicitud as claimed, only if it is still PENDING.

        This is a single UPDATE ... WHERE id = ? AND status = 'PENDING'
        RETURNING *. The status test and the write happen in one statement,
        so among concurrent callers the database lets exactly one through.

        Returns:
            The updated solicitud, or None if no row matched.
        """
        data = {
            "status": SolicitudStatus.CLAIMED.value,
            "claimed_by": user_id,
            "claimed_at": claimed_at.isoformat(),
        }
        query = (
            self._db.table(SOLICITUDES_TABLE)
            .update(data)
            .eq("id", solicitud_id)
            .eq("status", SolicitudStatus.PENDING.value)
        )
        result = self._execute(query, "claim_if_pending")
        if not result.data:
            return None
        return self._map_to_solicitud(result.data[0])

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_solicitud(self, data: dict[str, Any]) -> Solicitud:
        """Map database row to Solicitud model."""
        claimed_by = data.get("claimed_by")
        return Solicitud(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description"),
            requester_name=data["requester_name"],
            scheduled_date=data.get("scheduled_date"),
            status=SolicitudStatus(data["status"]),
            claimed_by=str(claimed_by) if claimed_by is not None else None,
            claimed_at=data.get("claimed_at"),
            created_at=data.get("created_at"),
        )
