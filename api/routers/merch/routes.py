from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.models import User
from api.security import get_current_user
from services.errors import BusinessRuleError, MerchNotFound, ValidationError
from services.ledger import get_ledger_service
from services.ledger.service import LedgerService
from services.shop import get_shop_service
from services.shop.service import ShopService
from .schemas import History, InfoResponse, ReceivedTransfer, SentTransfer


router = APIRouter()


@router.get("/info", response_model=InfoResponse, summary="Информация о монетах, инвентаре и истории транзакций")
async def info(
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
    shop: ShopService = Depends(get_shop_service),
):
    """
    Баланс, купленный мерч и история переводов текущего пользователя.

    Cтатус запроса:
    - 200 OK - успешный ответ
    - 401 Unauthorized - нет или неверный токен

    > [!important]
    > Заголовки запроса:
    > - `Authorization: Bearer <token>` - токен из /api/auth (обязательный)

    Выходные данные:
    - `coins: int` - текущий баланс
    - `inventory: list` - купленные товары `{type, quantity}`
    - `coinHistory.received: list` - входящие переводы `{fromUser, amount}`, новые сверху
    - `coinHistory.sent: list` - исходящие переводы `{toUser, amount}`, новые сверху
    """
    incoming, outgoing = await ledger.list_transfers(user)
    purchases = await shop.list_purchases(user)

    return InfoResponse(
        coins=user.coin_balance,
        inventory=shop.inventory(purchases),
        coin_history=History(
            received=[ReceivedTransfer(from_user=t.from_username, amount=t.amount) for t in incoming],
            sent=[SentTransfer(to_user=t.to_username, amount=t.amount) for t in outgoing],
        ),
    )


@router.get("/buy/", include_in_schema=False)
async def buy_without_item(user: User = Depends(get_current_user)):
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="item parameter is required")


@router.get("/buy/{item}", summary="Купить предмет за монеты")
async def buy_item(
    item: str,
    user: User = Depends(get_current_user),
    shop: ShopService = Depends(get_shop_service),
):
    """
    Покупка одной единицы мерча.

    Cтатус запроса:
    - 200 OK - покупка выполнена
    - 400 Bad Request - товар не указан, не найден или недостаточно монет
    - 401 Unauthorized - нет или неверный токен

    > [!important]
    > Заголовки запроса:
    > - `Authorization: Bearer <token>` - токен из /api/auth (обязательный)

    Входные данные:
    - `item: str` - название товара (t-shirt, cup, book, ...)
    """
    if not item.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="item parameter is required")
    try:
        await shop.purchase(user, item)
    except (MerchNotFound, BusinessRuleError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_200_OK)
