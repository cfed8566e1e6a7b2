"""User record for authentication."""
from dataclasses import dataclass, field
from datetime import datetime

from tms.models.base import RecordMixin, utcnow
from tms.models.enums import UserRole


@dataclass(repr=False)
class User(RecordMixin):
    """User account for system authentication.

    Password is stored as bcrypt hash and never leaves the auth layer;
    API responses are built from ``UserResponse``, which has no password field.
    """

    _repr_fields = ("id", "email", "role")

    id: str
    email: str
    name: str
    role: UserRole
    hashed_password: str
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin
