from __future__ import annotations
from abc import ABC, abstractmethod

class MerchInterface(ABC):
    @abstractmethod
    async def get_by_name():
        pass

    @abstractmethod
    async def list_purchases_by_user():
        pass
