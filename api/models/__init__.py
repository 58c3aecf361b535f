from .base import Base
from .user import User
from .transaction import Transaction, TransactionType
from .merch import Merch
from .purchase import Purchase
