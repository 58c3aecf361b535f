import logging
from contextlib import asynccontextmanager
from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from api.crud.transaction import TransactionCRUD
from api.crud.transaction.schema import TransferRead
from api.models import Base, Transaction, TransactionType, User
from services.errors import InsufficientFunds, InvalidAmount, InvalidRecipient, UserNotFound


class LedgerService:
    """
    The only place where coin balances change.

    Every mutation is one database transaction: the participant rows are
    locked with SELECT ... FOR UPDATE, the balance is re-checked against the
    locked value, balances are adjusted and a Transaction row is appended.
    Any failure rolls the whole unit back.

    Transfers lock both the sender and the recipient, always in ascending
    user id order, so two opposite transfers (A -> B and B -> A) running at
    the same time wait for each other instead of deadlocking.
    """

    def __init__(self, session: AsyncSession, transactions: TransactionCRUD | None = None):
        self.session = session
        self.transactions = transactions or TransactionCRUD()

    async def transfer(self, sender: User, recipient: User, amount: int) -> Transaction:
        if sender.id == recipient.id:
            raise InvalidRecipient("users can't send coins to themselves")
        self._check_amount(amount)
        # быстрый отказ по снимку баланса, окончательная проверка под блокировкой
        if sender.coin_balance < amount:
            logging.info(f"Transfer rejected: user {sender.id} has {sender.coin_balance} coins, needs {amount}")
            raise InsufficientFunds("not enough coins for transfer")

        async with self._atomic():
            balances = await self._lock_balances(sender.id, recipient.id)
            if sender.id not in balances or recipient.id not in balances:
                raise UserNotFound("User not found")
            if balances[sender.id] < amount:
                logging.info(f"Transfer rejected under lock: user {sender.id} has {balances[sender.id]} coins, needs {amount}")
                raise InsufficientFunds("not enough coins for transfer")

            sender_balance = await self._add_coins(sender.id, -amount)
            recipient_balance = await self._add_coins(recipient.id, amount)

            tx = Transaction(
                from_user_id=sender.id,
                to_user_id=recipient.id,
                amount=amount,
                kind=TransactionType.TRANSFER,
            )
            self.session.add(tx)

        set_committed_value(sender, "coin_balance", sender_balance)
        set_committed_value(recipient, "coin_balance", recipient_balance)
        logging.info(f"Transfer {tx.id}: user {sender.id} -> user {recipient.id}, {amount} coins")
        return tx

    async def debit_for_purchase(self, user: User, amount: int, attach: Iterable[Base] = ()) -> Transaction:
        """
        Debits `amount` coins from `user` and records a purchase Transaction.

        Rows passed in `attach` are inserted in the same database transaction
        as the debit, so a purchase record can never exist without its
        payment or the other way round.
        """
        self._check_amount(amount)
        if user.coin_balance < amount:
            logging.info(f"Purchase rejected: user {user.id} has {user.coin_balance} coins, needs {amount}")
            raise InsufficientFunds("not enough coins for purchase")

        async with self._atomic():
            balances = await self._lock_balances(user.id)
            if user.id not in balances:
                raise UserNotFound("User not found")
            if balances[user.id] < amount:
                logging.info(f"Purchase rejected under lock: user {user.id} has {balances[user.id]} coins, needs {amount}")
                raise InsufficientFunds("not enough coins for purchase")

            balance = await self._add_coins(user.id, -amount)

            tx = Transaction(
                from_user_id=user.id,
                to_user_id=None,
                amount=amount,
                kind=TransactionType.PURCHASE,
            )
            self.session.add(tx)
            self.session.add_all(list(attach))

        set_committed_value(user, "coin_balance", balance)
        logging.info(f"Purchase debit {tx.id}: user {user.id}, {amount} coins")
        return tx

    async def list_transfers(self, user: User) -> tuple[list[TransferRead], list[TransferRead]]:
        """Returns (incoming, outgoing) transfers of the user, newest first."""
        incoming = await self.transactions.list_incoming_transfers(user.id, self.session)
        outgoing = await self.transactions.list_outgoing_transfers(user.id, self.session)
        return incoming, outgoing

    @staticmethod
    def _check_amount(amount: int) -> None:
        if amount <= 0:
            raise InvalidAmount(f"amount must be > 0, got {amount}")

    @asynccontextmanager
    async def _atomic(self):
        try:
            yield
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def _lock_balances(self, *user_ids: int) -> dict[int, int]:
        query = (
            select(User.id, User.coin_balance)
            .where(User.id.in_(user_ids))
            .order_by(User.id)
            .with_for_update()
        )
        res = await self.session.execute(query)
        return {row.id: row.coin_balance for row in res}

    async def _add_coins(self, user_id: int, delta: int) -> int:
        query = (
            update(User)
            .where(User.id == user_id)
            .values(coin_balance=User.coin_balance + delta)
            .returning(User.coin_balance)
            .execution_options(synchronize_session=False)
        )
        res = await self.session.execute(query)
        return res.scalar_one()
