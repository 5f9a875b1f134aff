"""Translation of domain errors into HTTP responses."""

from typing import Any, Dict

from fastapi import HTTPException, status

from assessment_forms.domain.errors import (
    DomainError,
    FormNotFoundError,
    FormValidationError,
    MalformedInputError,
)


def domain_error_status(exc: DomainError) -> int:
    """HTTP status for a domain error; storage and unknown errors are 500."""
    if isinstance(exc, FormNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (FormValidationError, MalformedInputError)):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_error_body(exc: DomainError) -> Dict[str, Any]:
    return {
        "error": exc.error_code or "DOMAIN_ERROR",
        "message": exc.message,
        "details": exc.details,
    }


def domain_http_error(exc: DomainError) -> HTTPException:
    """Map a domain error onto an HTTPException."""
    return HTTPException(
        status_code=domain_error_status(exc), detail=domain_error_body(exc)
    )
