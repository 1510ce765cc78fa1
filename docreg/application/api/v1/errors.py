"""Centralized error transformation for API routes.

Maps docreg errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from docreg.domain.shared.error import (
    ConflictError,
    DocregError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    StorageError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ConflictError: 409,
}


def map_docreg_error(error: DocregError) -> HTTPException:
    """Map a docreg error to an HTTPException.

    Args:
        error: The docreg error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, StorageError):
        # Filesystem failure on the store or an index → 500 Internal Server Error
        return HTTPException(status_code=500, detail=detail)

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown DocregError subclasses
    return HTTPException(status_code=500, detail=detail)
