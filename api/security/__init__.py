from fastapi import Depends, Header, HTTPException, status

from api.models import User
from services.auth import get_auth_service
from services.auth.service import AuthService
from services.errors import InvalidToken, Unauthorized

BEARER_PREFIX = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    authorization: str | None = Header(None),
    service: AuthService = Depends(get_auth_service),
) -> User:
    if not authorization:
        raise _unauthorized("missing Authorization header")
    if not authorization.startswith(BEARER_PREFIX):
        raise _unauthorized("invalid token format")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise _unauthorized("invalid token format")

    try:
        return await service.resolve(token)
    except (InvalidToken, Unauthorized) as e:
        raise _unauthorized(str(e))
