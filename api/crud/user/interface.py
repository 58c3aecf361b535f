from __future__ import annotations
from abc import ABC, abstractmethod

class UserInterface(ABC):
    @abstractmethod
    async def create_user():
        pass

    @abstractmethod
    async def get_user_by_username():
        pass

    @abstractmethod
    async def get_user_by_id():
        pass
