"""Authentication request/response schemas."""
from datetime import datetime

from pydantic import Field

from tms.models.enums import UserRole
from tms.schemas.base import BaseSchema


class UserResponse(BaseSchema):
    """User as seen outside the auth layer (no password hash)."""

    id: str
    email: str
    name: str
    role: UserRole
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin


class AuthPayload(BaseSchema):
    """Login response."""

    token: str = Field(..., description="JWT access token")
    user: UserResponse
