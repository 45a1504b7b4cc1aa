"""JWT token utilities."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from ..config import get_settings
from ..core.exceptions import Unauthorized


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token carrying the given claims."""
    settings = get_settings()
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire, "type": "access", "jti": str(uuid.uuid4())})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate an access token.

    Raises Unauthorized for a bad signature, a malformed token, a token of
    the wrong type or an expired one.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        raise Unauthorized("token expired") from None
    except JWTError:
        raise Unauthorized("token invalid") from None

    if payload.get("type") != "access":
        raise Unauthorized("token invalid")

    return payload


def get_user_id_from_token(token: str) -> UUID:
    """Extract the user id (sub claim) from a token."""
    payload = decode_access_token(token)

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("token invalid")

    try:
        return UUID(str(user_id))
    except ValueError:
        raise Unauthorized("token invalid") from None
