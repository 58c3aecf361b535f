from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from config import Settings

settings = Settings()

engine = create_async_engine(
    settings.generate_postgres_url(),
    echo=settings.env.DEBUG,
    **settings.engine_options(),
)
# объекты остаются доступными после commit: пользователь из авторизации
# используется в том же запросе после записи в ledger
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session
