from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .interface import MerchInterface
from .schema import PurchaseRead
from api.models import Merch, Purchase
from services.errors import MerchNotFound


class MerchCRUD(MerchInterface):
    async def get_by_name(self, name: str, session: AsyncSession) -> Merch:
        res = await session.execute(select(Merch).where(Merch.name == name))
        merch = res.scalar_one_or_none()
        if not merch:
            raise MerchNotFound(f"Merch {name!r} not found")
        return merch

    async def list_purchases_by_user(self, user_id: int, session: AsyncSession) -> list[PurchaseRead]:
        query = (
            select(Purchase)
            .where(Purchase.user_id == user_id)
            .order_by(Purchase.purchased_at.desc(), Purchase.id.desc())
        )
        res = await session.execute(query)
        return [PurchaseRead.model_validate(p) for p in res.scalars().all()]
