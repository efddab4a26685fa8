"""
Solicitudes module exceptions.
"""

from shared.exceptions import ConflictError, ValidationError


class MissingSolicitudFieldsError(ValidationError):
    """Raised when title or requester name is missing."""

    def __init__(self, fields: list[str]):
        super().__init__(
            f"Missing required fields: {', '.join(fields)}",
            code="MISSING_FIELDS",
            details={"fields": fields},
        )


class SolicitudUnavailableError(ConflictError):
    """
    Raised when a claim does not take effect.

    Covers both an unknown ID and a solicitud that is already claimed
    (possibly by the same caller); the two are not told apart.
    """

    def __init__(self, solicitud_id: str):
        super().__init__(
            "Solicitud already claimed or does not exist",
            code="SOLICITUD_UNAVAILABLE",
            details={"solicitud_id": solicitud_id},
        )
