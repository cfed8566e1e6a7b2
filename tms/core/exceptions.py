"""
Custom exceptions for TMS.

Every error carries a machine-readable ``code``; the GraphQL layer copies
``extensions`` onto the serialized error entry and reports ``message`` verbatim.
"""
from typing import Any, Dict, Optional


class TMSError(Exception):
    """Base exception for business logic errors."""

    default_message = "Internal error"
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def extensions(self) -> Dict[str, Any]:
        """GraphQL error extensions (picked up by graphql-core)."""
        extensions: Dict[str, Any] = {"code": self.code}
        if self.details:
            extensions["details"] = self.details
        return extensions


class AuthenticationError(TMSError):
    """Raised when the caller has no valid credential."""

    default_message = "Not authenticated"
    code = "UNAUTHENTICATED"


class AuthorizationError(TMSError):
    """Raised when an authenticated caller lacks the required role."""

    default_message = "Not authorized"
    code = "FORBIDDEN"


class NotFoundError(TMSError):
    """Raised when operating on an unknown identifier."""

    default_message = "Not found"
    code = "NOT_FOUND"

    def __init__(self, entity_type: str = "Shipment", entity_id: Optional[str] = None):
        details = {"id": entity_id} if entity_id is not None else None
        super().__init__(f"{entity_type} not found", details)


class ValidationError(TMSError):
    """Raised when input data validation fails."""

    default_message = "Invalid input"
    code = "BAD_USER_INPUT"

    def __init__(self, message: Optional[str] = None, field_errors: Optional[Dict[str, Any]] = None):
        super().__init__(message, field_errors)
