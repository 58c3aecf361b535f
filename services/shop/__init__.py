from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.database import get_async_session
from .service import ShopService

def get_shop_service(session: AsyncSession = Depends(get_async_session)) -> ShopService:
    return ShopService(session)
