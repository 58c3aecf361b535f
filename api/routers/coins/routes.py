from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.crud.user import UserService
from api.database import get_async_session
from api.models import User
from api.security import get_current_user
from services.errors import BusinessRuleError, UserNotFound, ValidationError
from services.ledger import get_ledger_service
from services.ledger.service import LedgerService
from .schemas import SendCoinRequest


router = APIRouter()

def get_user_service() -> UserService:
    return UserService()


@router.post("/sendCoin", summary="Отправить монеты другому пользователю")
async def send_coin(
    dto: SendCoinRequest,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
    users: UserService = Depends(get_user_service),
    session: AsyncSession = Depends(get_async_session),
):
    """
    Перевод монет другому пользователю.

    Cтатус запроса:
    - 200 OK - перевод выполнен
    - 400 Bad Request - получатель не найден, перевод самому себе,
      недостаточно монет или сумма не положительная
    - 401 Unauthorized - нет или неверный токен

    > [!important]
    > Заголовки запроса:
    > - `Authorization: Bearer <token>` - токен из /api/auth (обязательный)

    Входные данные:
    - `toUser: str` - имя получателя
    - `amount: int` - количество монет (> 0)
    """
    try:
        recipient = await users.get_user_by_username(dto.to_user, session)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"recipient {dto.to_user!r} not found")

    try:
        await ledger.transfer(user, recipient, dto.amount)
    except (BusinessRuleError, ValidationError, UserNotFound) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_200_OK)
