"""
Solicitud API endpoints.

Every endpoint requires a bearer token. Errors raised by the services are
turned into responses by the application's error handlers.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_claim_coordinator, get_solicitud_service
from shared.models import Identity

from .interfaces import IClaimCoordinator, ISolicitudService
from .models import (
    CreateSolicitudRequest,
    SolicitudListResponse,
    SolicitudResponse,
)

router = APIRouter()


@router.post("", response_model=SolicitudResponse, status_code=201)
async def create_solicitud(
    request: CreateSolicitudRequest,
    user: Identity = Depends(get_current_user),
    service: ISolicitudService = Depends(get_solicitud_service),
) -> SolicitudResponse:
    """
    Post a new solicitud. It starts in PENDING status.
    """
    solicitud = await service.create_solicitud(
        title=request.title,
        description=request.description,
        requester_name=request.requester_name,
        scheduled_date=request.scheduled_date,
    )
    return SolicitudResponse(message="Solicitud created", request=solicitud)


@router.get("/pendientes", response_model=SolicitudListResponse)
async def list_pending(
    user: Identity = Depends(get_current_user),
    service: ISolicitudService = Depends(get_solicitud_service),
) -> SolicitudListResponse:
    """
    List open solicitudes, earliest scheduled date first.
    """
    return SolicitudListResponse(requests=await service.list_pending())


@router.get("/aceptadas", response_model=SolicitudListResponse)
async def list_claimed(
    user: Identity = Depends(get_current_user),
    service: ISolicitudService = Depends(get_solicitud_service),
) -> SolicitudListResponse:
    """
    List the solicitudes claimed by the caller, most recent first.
    """
    return SolicitudListResponse(requests=await service.list_claimed_by(user.id))


@router.post("/{solicitud_id}/aceptar", response_model=SolicitudResponse)
async def claim_solicitud(
    solicitud_id: str,
    user: Identity = Depends(get_current_user),
    coordinator: IClaimCoordinator = Depends(get_claim_coordinator),
) -> SolicitudResponse:
    """
    Claim a solicitud for the caller.

    Fails with 400 if it is already claimed or does not exist.
    """
    solicitud = await coordinator.claim(solicitud_id, user)
    return SolicitudResponse(message="Solicitud claimed", request=solicitud)
