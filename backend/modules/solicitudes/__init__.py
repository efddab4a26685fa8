"""
Solicitudes module.

Handles the request ledger and the atomic claim of a solicitud.

Public API:
- ISolicitudService: Interface for ledger operations
- IClaimCoordinator: Interface for claiming
- Solicitud: A task record
- SolicitudStatus: PENDING or CLAIMED
"""

from .interfaces import ISolicitudService, IClaimCoordinator
from .models import (
    Solicitud,
    SolicitudStatus,
    CreateSolicitudRequest,
    SolicitudResponse,
    SolicitudListResponse,
)
from .exceptions import MissingSolicitudFieldsError, SolicitudUnavailableError

__all__ = [
    # Interfaces
    "ISolicitudService",
    "IClaimCoordinator",
    # Models
    "Solicitud",
    "SolicitudStatus",
    "CreateSolicitudRequest",
    "SolicitudResponse",
    "SolicitudListResponse",
    # Exceptions
    "MissingSolicitudFieldsError",
    "SolicitudUnavailableError",
]
