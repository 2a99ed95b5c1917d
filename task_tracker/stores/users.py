import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import DuplicateEmailError, StoreError
from ..models import User, UserRole
from ..time_utils import utc_now

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    """Credential store: identity lookup, creation and updates."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as exc:
            logger.error("User lookup by id failed: %s", exc)
            raise StoreError() from exc

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == normalize_email(email)).first()
        except SQLAlchemyError as exc:
            logger.error("User lookup by email failed: %s", exc)
            raise StoreError() from exc

    def create(
        self,
        email: str,
        hashed_password: str,
        name: str,
        role: UserRole = UserRole.STANDARD,
    ) -> User:
        user = User(
            email=normalize_email(email),
            hashed_password=hashed_password,
            name=name,
            role=role,
        )
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email.
            self.db.rollback()
            raise DuplicateEmailError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("User creation failed: %s", exc)
            raise StoreError() from exc
        self.db.refresh(user)
        return user

    def save(self, user: User) -> User:
        user.updated_at = utc_now()
        try:
            self.db.add(user)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("User %s update failed: %s", user.id, exc)
            raise StoreError() from exc
        self.db.refresh(user)
        return user
