from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from .. import config
from ..errors import AuthenticationError


def create_access_token(identity_id: str, now: Optional[datetime] = None) -> str:
    """Create a signed JWT bound to ``identity_id``.

    The lifetime is always ``ACCESS_TOKEN_EXPIRE_MINUTES``.
    """
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": str(identity_id), "iat": issued_at, "exp": expire}
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the identity id carried by ``token``.

    Raises AuthenticationError for a bad signature, a malformed token, a
    missing subject or an expired token.
    """
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError as exc:
        raise AuthenticationError() from exc

    identity_id = payload.get("sub")
    if not identity_id or not isinstance(identity_id, str):
        raise AuthenticationError()
    return identity_id
