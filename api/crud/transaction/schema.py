from datetime import datetime
from pydantic import BaseModel


class TransferRead(BaseModel):
    id: int
    from_username: str
    to_username: str
    amount: int
    created_at: datetime
