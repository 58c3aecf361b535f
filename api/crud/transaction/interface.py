from __future__ import annotations
from abc import ABC, abstractmethod

class TransactionInterface(ABC):
    @abstractmethod
    async def list_incoming_transfers():
        pass

    @abstractmethod
    async def list_outgoing_transfers():
        pass
