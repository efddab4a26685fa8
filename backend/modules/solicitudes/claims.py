"""
Claim coordinator.

Turns a PENDING solicitud into a CLAIMED one on behalf of a verified
identity. There is no in-process locking here: the conditional update in
SolicitudRepository.claim_if_pending is the only concurrency primitive,
which keeps claims correct across any number of service instances.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.models import Identity

from .exceptions import SolicitudUnavailableError
from .interfaces import IClaimCoordinator
from .models import Solicitud
from .repository import SolicitudRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _canonical_id(solicitud_id: str) -> Optional[str]:
    """
    The canonical hyphenated form of a solicitud ID, or None.

    uuid.UUID also accepts braces, "urn:uuid:" prefixes and hyphens in any
    position, which the uuid column rejects; only the 8-4-4-4-12 form,
    in either case, is let through.
    """
    try:
        canonical = str(uuid.UUID(solicitud_id))
    except (ValueError, TypeError, AttributeError):
        return None
    if canonical != solicitud_id.lower():
        return None
    return canonical


class ClaimCoordinator(IClaimCoordinator):
    """
    Executes claims against the ledger.

    A losing caller gets SolicitudUnavailableError straight away; retrying
    is left to the caller.
    """

    def __init__(
        self,
        repository: SolicitudRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._repo = repository
        self._clock = clock

    async def claim(self, solicitud_id: str, claimant: Identity) -> Solicitud:
        canonical_id = _canonical_id(solicitud_id)
        if canonical_id is None:
            logger.info("Claim of %r by %s rejected: malformed id", solicitud_id, claimant.id)
            raise SolicitudUnavailableError(solicitud_id)

        claimed = await asyncio.to_thread(
            self._repo.claim_if_pending, canonical_id, claimant.id, self._clock()
        )
        if claimed is None:
            logger.info("Claim of %s by %s rejected: not pending", solicitud_id, claimant.id)
            raise SolicitudUnavailableError(solicitud_id)

        logger.info("Solicitud %s claimed by %s", solicitud_id, claimant.id)
        return claimed
