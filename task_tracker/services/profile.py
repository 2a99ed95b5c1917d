import logging

from ..errors import AuthenticationError
from ..models import User
from ..schemas.user import ProfileUpdate, User as UserSchema
from ..stores import UserStore
from .passwords import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class ProfileService:
    """Changes to the authenticated identity's own profile and password."""

    def __init__(self, users: UserStore) -> None:
        self.users = users

    def update_profile(self, user: User, changes: ProfileUpdate) -> UserSchema:
        # Only fields sent by the client are touched.
        update_data = changes.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(user, field, value)

        self.users.save(user)
        logger.info("Updated profile fields %s for user %s", sorted(update_data), user.id)
        return UserSchema.model_validate(user)

    def update_password(self, user: User, current_password: str, new_password: str) -> None:
        """Replace the stored hash. Tokens already issued stay valid until they expire."""
        if not verify_password(current_password, user.hashed_password):
            raise AuthenticationError("Current password is incorrect")

        user.hashed_password = get_password_hash(new_password)
        self.users.save(user)
        logger.info("Password changed for user %s", user.id)
