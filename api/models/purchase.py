from datetime import datetime
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .merch import Merch


class Purchase(Base):
    __tablename__ = "purchases"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_purchases_quantity_positive"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column("fk_user", ForeignKey("users.id"), nullable=False, index=True)
    merch_id: Mapped[int] = mapped_column("fk_merch", ForeignKey("merch.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    purchased_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    merch: Mapped["Merch"] = relationship(lazy="joined")

    @property
    def merch_name(self) -> str:
        return self.merch.name
