"""Authorization gate for shipment operations.

Authentication is always checked before role, so an anonymous call to an
admin-only operation fails with AuthenticationError.
"""
from typing import Optional

from tms.core.exceptions import AuthenticationError, AuthorizationError
from tms.schemas.auth import UserResponse


def is_authenticated(caller: Optional[UserResponse]) -> bool:
    return caller is not None


def is_admin(caller: Optional[UserResponse]) -> bool:
    return caller is not None and caller.is_admin


def require_authenticated(caller: Optional[UserResponse]) -> UserResponse:
    """Return the caller, or raise AuthenticationError for anonymous requests."""
    if not is_authenticated(caller):
        raise AuthenticationError()
    return caller


def require_admin(caller: Optional[UserResponse], message: Optional[str] = None) -> UserResponse:
    """Return the caller if it is an authenticated ADMIN.

    Raises:
        AuthenticationError: caller is anonymous
        AuthorizationError: caller is not an admin
    """
    require_authenticated(caller)
    if not is_admin(caller):
        raise AuthorizationError(message)
    return caller
