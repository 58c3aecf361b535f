import os
from typing import AsyncGenerator

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["JWT_SECRET"] = "test-secret-key-min-32-characters-long"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["INITIAL_COINS"] = "1000"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from api.crud.user import UserService
from api.crud.user.schema import UserCreate
from api.models import Base, Merch, User
from services.auth.passwords import hash_password

CATALOG = [
    {"name": "cup", "price": 150},
    {"name": "t-shirt", "price": 80},
    {"name": "pen", "price": 10},
    {"name": "pink-hoody", "price": 500},
]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # BEGIN выдает SQLAlchemy (см. ниже), а не драйвер
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        # писатели встают в очередь, как под SELECT ... FOR UPDATE в PostgreSQL
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(insert(Merch.__table__), CATALOG)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def create_user(session_factory):
    """Creates a committed user in its own session and returns it detached."""
    async def _create(username: str, coins: int = 1000, password: str = "secret") -> User:
        dto = UserCreate(username=username, password_hash=hash_password(password, rounds=4), coin_balance=coins)
        async with session_factory() as s:
            return await UserService().create_user(dto, s)
    return _create


@pytest_asyncio.fixture
async def balance_of(session_factory):
    async def _balance(user_id: int) -> int:
        async with session_factory() as s:
            return await s.scalar(select(User.coin_balance).where(User.id == user_id))
    return _balance


@pytest_asyncio.fixture
async def app(session_factory):
    from api.app import FastAPIManager
    from api.database import get_async_session

    app = FastAPIManager().get_app()

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def login(client):
    async def _login(username: str, password: str = "secret") -> dict[str, str]:
        r = await client.post("/api/auth", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}
    return _login
