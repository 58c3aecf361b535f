from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Merch(Base):
    __tablename__ = "merch"
    __table_args__ = (CheckConstraint("price > 0", name="ck_merch_price_positive"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
