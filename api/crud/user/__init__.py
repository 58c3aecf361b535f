from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .interface import UserInterface
from .schema import UserCreate
from api.models.user import User
from services.errors import UserNotFound


class UserService(UserInterface):
    async def create_user(self, dto: UserCreate, session: AsyncSession) -> User:
        """
        Inserts a new user and commits.

        The username column is unique, so a concurrent signup with the same
        username fails here with IntegrityError; the caller decides how to
        recover.
        """
        user = User(**dto.model_dump())
        session.add(user)
        await session.commit()
        return user

    async def get_user_by_username(self, username: str, session: AsyncSession) -> User:
        res = await session.execute(select(User).where(User.username == username))
        user = res.scalar_one_or_none()
        if not user:
            raise UserNotFound("User not found")
        return user

    async def get_user_by_id(self, user_id: int, session: AsyncSession) -> User:
        res = await session.execute(select(User).where(User.id == user_id))
        user = res.scalar_one_or_none()
        if not user:
            raise UserNotFound("User not found")
        return user
