from datetime import datetime
from pydantic import BaseModel, ConfigDict


class PurchaseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    merch_id: int
    merch_name: str
    quantity: int
    purchased_at: datetime
