"""
Domain errors for the assessment form service.

Every failure of a repository operation is raised as one of these types; the
API layer translates them into HTTP responses.
"""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class FormNotFoundError(DomainError):
    """Raised when a form does not exist or has been soft-deleted."""

    def __init__(self, form_id: str):
        super().__init__(
            f"Assessment form not found: {form_id}",
            error_code="FORM_NOT_FOUND",
            details={"form_id": form_id},
        )
        self.form_id = form_id


class FormValidationError(DomainError):
    """Raised when a form violates one or more validation rules.

    Carries the complete list of issues, never just the first one.
    """

    def __init__(self, issues: List[Any]):
        super().__init__(
            f"Assessment form failed validation with {len(issues)} error(s)",
            error_code="VALIDATION_FAILED",
            details={"errors": [issue.to_dict() for issue in issues]},
        )
        self.issues = list(issues)


class MalformedInputError(DomainError):
    """Raised when input cannot be read as a form tree at all."""

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(
            message,
            error_code="MALFORMED_INPUT",
            details={"location": location} if location else {},
        )
        self.location = location


class StorageUnavailableError(DomainError):
    """Raised when the document store cannot be reached or times out.

    Never means "record absent"; callers must not treat it as not found.
    """

    def __init__(self, operation: str, reason: str = ""):
        super().__init__(
            f"Storage unavailable during {operation}",
            error_code="STORAGE_UNAVAILABLE",
            details={"operation": operation, "reason": reason},
        )
        self.operation = operation
