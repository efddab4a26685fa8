"""
Request ledger service.

Creates solicitudes and serves the two ordered views of the ledger.
"""

import asyncio
import logging
from datetime import date
from typing import Optional

from .exceptions import MissingSolicitudFieldsError
from .interfaces import ISolicitudService
from .models import Solicitud
from .repository import SolicitudRepository

logger = logging.getLogger(__name__)


class SolicitudService(ISolicitudService):
    """Ledger operations backed by SolicitudRepository."""

    def __init__(self, repository: SolicitudRepository):
        self._repo = repository

    async def create_solicitud(
        self,
        title: Optional[str],
        description: Optional[str],
        requester_name: Optional[str],
        scheduled_date: Optional[date],
    ) -> Solicitud:
        title = (title or "").strip()
        requester_name = (requester_name or "").strip()

        missing = [
            name
            for name, value in (("title", title), ("requesterName", requester_name))
            if not value
        ]
        if missing:
            raise MissingSolicitudFieldsError(missing)

        solicitud = await asyncio.to_thread(self._repo.create_solicitud, {
            "title": title,
            "description": description,
            "requester_name": requester_name,
            "scheduled_date": scheduled_date.isoformat() if scheduled_date else None,
        })
        logger.info("Created solicitud %s", solicitud.id)
        return solicitud

    async def list_pending(self) -> list[Solicitud]:
        return await asyncio.to_thread(self._repo.list_pending)

    async def list_claimed_by(self, user_id: str) -> list[Solicitud]:
        return await asyncio.to_thread(self._repo.list_claimed_by, user_id)
