from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class ENV(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_NAME: str = "shop"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASS: str = "password"
    # полный DSN, перекрывает POSTGRES_* (тесты, локальный запуск)
    DATABASE_URL: str | None = None

    DB_POOL_SIZE: int = 10
    DB_STATEMENT_TIMEOUT_MS: int = 5000
    DB_LOCK_TIMEOUT_MS: int = 3000

    JWT_SECRET: str = "superSecret-please-change-in-production"
    TOKEN_EXPIRE_HOURS: int = 24
    INITIAL_COINS: int = 1000
    BCRYPT_ROUNDS: int = 12

    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 8080
    HTTP_ORIGINS: str = "*"
    HTTP_HEADERS: str = "*"

    RUN_MIGRATIONS: bool = True


class Settings():
    def __init__(self):
        self.env = ENV()

    def generate_postgres_url(self) -> str:
        if self.env.DATABASE_URL:
            return self.env.DATABASE_URL
        return URL.create(
            "postgresql+asyncpg",
            username=self.env.POSTGRES_USER,
            password=self.env.POSTGRES_PASS,
            host=self.env.POSTGRES_HOST,
            port=int(self.env.POSTGRES_PORT),
            database=self.env.POSTGRES_NAME,
        ).render_as_string(hide_password=False)

    def engine_options(self) -> dict:
        """
        Extra keyword arguments for create_async_engine.

        PostgreSQL connections get a bounded statement and lock timeout so that
        a stalled ledger transaction aborts instead of hanging the request.
        """
        if not self.generate_postgres_url().startswith("postgresql"):
            return {}
        return {
            "pool_size": self.env.DB_POOL_SIZE,
            "pool_pre_ping": True,
            "connect_args": {
                "server_settings": {
                    "statement_timeout": str(self.env.DB_STATEMENT_TIMEOUT_MS),
                    "lock_timeout": str(self.env.DB_LOCK_TIMEOUT_MS),
                }
            },
        }

    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.env.TOKEN_EXPIRE_HOURS)

    def get_allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.env.HTTP_ORIGINS.split(",") if origin.strip()]

    def get_allowed_headers(self) -> list[str]:
        return [header.strip() for header in self.env.HTTP_HEADERS.split(",") if header.strip()]
