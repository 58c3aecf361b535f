import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.crud.user import UserService
from api.crud.user.schema import UserCreate
from api.models import User
from config import Settings
from services.errors import Unauthorized, UserNotFound
from .passwords import hash_password, verify_password
from .tokens import issue_token, read_user_id


class AuthService:
    def __init__(self, session: AsyncSession, users: UserService | None = None, settings: Settings | None = None):
        self.session = session
        self.users = users or UserService()
        self.settings = settings or Settings()

    async def authenticate(self, username: str, password: str) -> str:
        """
        Возвращает токен для пары username/password.
        При первой аутентификации пользователь создается автоматически
        со стартовым балансом INITIAL_COINS.
        """
        try:
            user = await self.users.get_user_by_username(username, self.session)
        except UserNotFound:
            user = await self._register(username, password)
        else:
            if not verify_password(password, user.password_hash):
                logging.info(f"Wrong password for user {user.id}")
                raise Unauthorized("wrong username or password")

        return issue_token(user.id, self.settings.env.JWT_SECRET, self.settings.token_ttl())

    async def resolve(self, token: str) -> User:
        user_id = read_user_id(token, self.settings.env.JWT_SECRET)
        try:
            return await self.users.get_user_by_id(user_id, self.session)
        except UserNotFound as e:
            raise Unauthorized("user no longer exists") from e

    async def _register(self, username: str, password: str) -> User:
        hashed = hash_password(password, rounds=self.settings.env.BCRYPT_ROUNDS)
        dto = UserCreate(username=username, password_hash=hashed, coin_balance=self.settings.env.INITIAL_COINS)
        try:
            user = await self.users.create_user(dto, self.session)
        except IntegrityError:
            # параллельная регистрация с тем же username: второй insert
            # отклонен уникальным индексом, работаем с победившей записью
            await self.session.rollback()
            logging.info(f"Concurrent signup for {username!r}, using the existing user")
            user = await self.users.get_user_by_username(username, self.session)
            if not verify_password(password, user.password_hash):
                raise Unauthorized("wrong username or password")
            return user

        logging.info(f"Created user {user.id} ({username!r}) with {user.coin_balance} coins")
        return user
