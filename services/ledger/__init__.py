from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.database import get_async_session
from .service import LedgerService

def get_ledger_service(session: AsyncSession = Depends(get_async_session)) -> LedgerService:
    return LedgerService(session)
