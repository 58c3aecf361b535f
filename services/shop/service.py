import logging
from collections import Counter
from typing import Iterable

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.crud.merch import MerchCRUD
from api.crud.merch.schema import PurchaseRead
from api.models import Purchase, User
from services.ledger.service import LedgerService

# одна единица товара за вызов, повторная покупка - повторный вызов
PURCHASE_QUANTITY = 1


class InventoryItem(BaseModel):
    type: str
    quantity: int


class ShopService:
    def __init__(self, session: AsyncSession, ledger: LedgerService | None = None, merch: MerchCRUD | None = None):
        self.session = session
        self.ledger = ledger or LedgerService(session)
        self.merch = merch or MerchCRUD()

    async def purchase(self, user: User, merch_name: str) -> Purchase:
        merch = await self.merch.get_by_name(merch_name, self.session)
        total_cost = merch.price * PURCHASE_QUANTITY

        purchase = Purchase(user_id=user.id, merch=merch, quantity=PURCHASE_QUANTITY)
        await self.ledger.debit_for_purchase(user, total_cost, attach=[purchase])

        logging.info(f"User {user.id} bought {merch.name!r} for {total_cost} coins")
        return purchase

    async def list_purchases(self, user: User) -> list[PurchaseRead]:
        return await self.merch.list_purchases_by_user(user.id, self.session)

    @staticmethod
    def inventory(purchases: Iterable[PurchaseRead]) -> list[InventoryItem]:
        counts: Counter[str] = Counter()
        for purchase in purchases:
            counts[purchase.merch_name] += purchase.quantity
        return [InventoryItem(type=name, quantity=qty) for name, qty in sorted(counts.items())]
