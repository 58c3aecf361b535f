from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from .interface import TransactionInterface
from .schema import TransferRead
from api.models import Transaction, TransactionType, User


class TransactionCRUD(TransactionInterface):
    """Read side of the ledger. Writes go through services.ledger only."""

    async def list_incoming_transfers(self, user_id: int, session: AsyncSession) -> list[TransferRead]:
        return await self._list_transfers(Transaction.to_user_id == user_id, session)

    async def list_outgoing_transfers(self, user_id: int, session: AsyncSession) -> list[TransferRead]:
        return await self._list_transfers(Transaction.from_user_id == user_id, session)

    async def _list_transfers(self, condition, session: AsyncSession) -> list[TransferRead]:
        sender = aliased(User)
        recipient = aliased(User)
        query = (
            select(
                Transaction.id,
                sender.username.label("from_username"),
                recipient.username.label("to_username"),
                Transaction.amount,
                Transaction.created_at,
            )
            .join(sender, Transaction.from_user_id == sender.id)
            .join(recipient, Transaction.to_user_id == recipient.id)
            .where(condition, Transaction.kind == TransactionType.TRANSFER)
            # новые сверху
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        )
        res = await session.execute(query)
        return [TransferRead(**row._mapping) for row in res]
