"""Signed, time-limited bearer tokens (HS256 JWT) binding a user id."""
from datetime import datetime, timedelta, timezone

import jwt

from services.errors import InvalidToken

ALGORITHM = "HS256"


def issue_token(user_id: int, secret: str, ttl: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def read_user_id(token: str, secret: str) -> int:
    """
    Verifies signature and expiry and returns the user id the token is bound to.

    Raises InvalidToken when the token cannot be decoded, is expired, or
    carries something other than a positive integer user id.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM], options={"require": ["exp", "iat"]})
    except jwt.PyJWTError as e:
        raise InvalidToken(f"unable to parse token: {e}") from e

    user_id = payload.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id <= 0:
        raise InvalidToken(f"invalid user id in token: {user_id!r}")
    return user_id
