import logging

from ..errors import AuthenticationError, DuplicateEmailError
from ..models import UserRole
from ..schemas.user import AuthResponse, User as UserSchema
from ..stores import UserStore
from .passwords import get_password_hash, verify_password
from .session import SessionGuard
from .tokens import create_access_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    def __init__(self, users: UserStore) -> None:
        self.users = users

    def register(self, email: str, password: str, name: str) -> AuthResponse:
        """Create a standard identity and sign it in."""
        if self.users.get_by_email(email) is not None:
            raise DuplicateEmailError()

        user = self.users.create(
            email=email,
            hashed_password=get_password_hash(password),
            name=name,
            role=UserRole.STANDARD,
        )
        logger.info("Registered user %s", user.id)
        return self._signed_in(user)

    def login(self, email: str, password: str) -> AuthResponse:
        """Check credentials and issue a token.

        Unknown email and wrong password fail with the same error.
        """
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return self._signed_in(user)

    def get_current_identity(self, token: str) -> UserSchema:
        user = SessionGuard(self.users).resolve_token(token)
        return UserSchema.model_validate(user)

    @staticmethod
    def _signed_in(user) -> AuthResponse:
        return AuthResponse(
            access_token=create_access_token(user.id),
            token_type="bearer",
            user=UserSchema.model_validate(user),
        )
