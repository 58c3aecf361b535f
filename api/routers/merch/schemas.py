from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from services.shop.service import InventoryItem


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReceivedTransfer(CamelModel):
    from_user: str
    amount: int


class SentTransfer(CamelModel):
    to_user: str
    amount: int


class History(CamelModel):
    received: list[ReceivedTransfer]
    sent: list[SentTransfer]


class InfoResponse(CamelModel):
    coins: int
    inventory: list[InventoryItem]
    coin_history: History
