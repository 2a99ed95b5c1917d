import logging
from typing import Optional

from ..errors import AuthenticationError
from ..models import User
from ..stores import UserStore
from .tokens import decode_access_token

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise AuthenticationError()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise AuthenticationError()
    return token


class SessionGuard:
    """Resolves a bearer credential to a live identity, or rejects it.

    Every rejection raises the same AuthenticationError so callers cannot
    tell a malformed token from an expired one or a deleted account.
    """

    def __init__(self, users: UserStore) -> None:
        self.users = users

    def resolve(self, authorization: Optional[str]) -> User:
        return self.resolve_token(extract_bearer_token(authorization))

    def resolve_token(self, token: str) -> User:
        identity_id = decode_access_token(token)
        user = self.users.get_by_id(identity_id)
        if user is None:
            logger.info("Rejected token for missing identity %s", identity_id)
            raise AuthenticationError()
        return user
