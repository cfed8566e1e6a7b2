"""Login and per-request caller resolution."""
import logging
from typing import Optional

from tms.core.exceptions import AuthenticationError
from tms.core.security import create_access_token, decode_access_token, verify_password
from tms.db.store import UserStore
from tms.schemas.auth import AuthPayload, UserResponse

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Issues credentials and turns them back into callers."""

    def __init__(self, users: UserStore):
        self.users = users

    def login(self, email: str, password: str) -> AuthPayload:
        """Validate credentials and return a signed token plus the user.

        Raises:
            AuthenticationError: unknown email or wrong password
        """
        user = self.users.get_by_email(email)

        if user is None:
            logger.warning(f"Login attempt failed: User '{email}' not found")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Login attempt failed: Invalid password for user '{email}'")
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = create_access_token(user)
        logger.info(f"User '{user.email}' logged in successfully")
        return AuthPayload(token=token, user=UserResponse.model_validate(user))

    def resolve_caller(self, token: Optional[str]) -> Optional[UserResponse]:
        """Map a bearer token to its user, or None.

        Invalid or expired tokens and tokens for users that no longer exist
        all resolve to an anonymous caller; nothing is raised.
        """
        if not token:
            return None

        payload = decode_access_token(token)
        if payload is None:
            return None

        user = self.users.get_by_id(payload.user_id)
        if user is None:
            return None

        return UserResponse.model_validate(user)
