from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, status

from services.auth import get_auth_service
from services.auth.service import AuthService
from services.errors import Unauthorized, UserNotFound
from .schemas import AuthRequest, TokenResponse


router = APIRouter()


@router.post("/auth", response_model=TokenResponse, summary="Аутентификация и получение JWT-токена")
async def auth(
    dto: AuthRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Аутентификация и получение JWT-токена.
    При первой аутентификации пользователь создается автоматически.

    Cтатус запроса:
    - 200 OK - успешная аутентификация
    - 400 Bad Request - не переданы username или password
    - 401 Unauthorized - неверный пароль
    - 500 Internal Server Error - внутренняя ошибка сервера

    Входные данные:
    - `username: str` - имя пользователя
    - `password: str` - пароль

    Выходные данные:
    - `token: str` - JWT-токен для заголовка `Authorization: Bearer <token>`
    """
    try:
        token = await service.authenticate(dto.username, dto.password)
    except Unauthorized as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TokenResponse(token=token)
