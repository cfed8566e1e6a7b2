"""FastAPI dependencies for services and the current caller."""
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tms.schemas.auth import UserResponse
from tms.services.auth import AuthService
from tms.services.shipments import ShipmentService

# HTTP Bearer token extractor (reads Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    """Auth service built by the application factory."""
    return request.app.state.auth_service


def get_shipment_service(request: Request) -> ShipmentService:
    """Shipment service built by the application factory."""
    return request.app.state.shipment_service


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> Optional[UserResponse]:
    """Dependency to resolve the caller from the bearer token.

    Unlike a REST guard this never raises: a missing, malformed or expired
    token, or one for a user that no longer exists, yields None and each
    GraphQL resolver decides whether anonymous access is allowed.
    """
    if credentials is None:
        return None
    return auth_service.resolve_caller(credentials.credentials)
