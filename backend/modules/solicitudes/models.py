"""
Solicitudes module data models.

A solicitud is a task posted on behalf of a requester and claimed by
exactly one helper. JSON uses camelCase field names.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SolicitudStatus(str, Enum):
    """Lifecycle status. The only transition is PENDING -> CLAIMED."""

    PENDING = "PENDING"  # Open, waiting for a helper
    CLAIMED = "CLAIMED"  # Taken by a helper, final


class CamelModel(BaseModel):
    """Base for models serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Solicitud(CamelModel):
    """
    A task record.

    claimed_by and claimed_at are set together, at the moment the status
    becomes CLAIMED, and never change afterwards.
    """

    id: str = Field(..., description="Solicitud ID (UUID)")
    title: str
    description: Optional[str] = None
    requester_name: str = Field(..., description="Person who needs help")
    scheduled_date: Optional[date] = None
    status: SolicitudStatus = SolicitudStatus.PENDING
    claimed_by: Optional[str] = Field(None, description="ID of the claiming user")
    claimed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_claimed(self) -> bool:
        return self.status == SolicitudStatus.CLAIMED


class CreateSolicitudRequest(CamelModel):
    """
    Body of POST /api/solicitudes.

    Emptiness of title and requesterName is checked by the service so it
    is reported like every other validation failure.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    requester_name: Optional[str] = None
    scheduled_date: Optional[date] = Field(None, alias="date")


class SolicitudResponse(CamelModel):
    """A single solicitud with a human-readable message."""

    message: str
    request: Solicitud


class SolicitudListResponse(CamelModel):
    """An ordered list of solicitudes."""

    requests: list[Solicitud]
