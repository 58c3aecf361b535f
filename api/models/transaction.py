import enum
from datetime import datetime
from typing import Optional
from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class TransactionType(enum.Enum):
    TRANSFER = "transfer"
    PURCHASE = "purchase"


class Transaction(Base):
    """Append-only ledger entry. Rows are never updated or deleted."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint(
            "(type = 'transfer' AND fk_to_user IS NOT NULL AND fk_to_user <> fk_from_user)"
            " OR (type = 'purchase' AND fk_to_user IS NULL)",
            name="ck_transactions_recipient_matches_type",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    from_user_id: Mapped[int] = mapped_column("fk_from_user", ForeignKey("users.id"), nullable=False, index=True)
    # NULL - монеты потрачены на покупку
    to_user_id: Mapped[Optional[int]] = mapped_column("fk_to_user", ForeignKey("users.id"), nullable=True, index=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    kind: Mapped[TransactionType] = mapped_column(
        "type",
        Enum(TransactionType, name="transactiontype", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
