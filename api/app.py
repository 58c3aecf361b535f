import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api.database.migrations import MigrationRunner
from api.routers.auth import routes as AuthRoutes
from api.routers.coins import routes as CoinRoutes
from api.routers.merch import routes as MerchRoutes
from api.routers.system import routes as SystemRoutes
from config import Settings

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.migrations.start()
    yield


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": f"invalid request: {problems}"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # подробности только в лог, клиенту - общее сообщение
    logging.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"errors": "internal server error"},
    )


class FastAPIManager:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.api = FastAPI(
            version="1.0.0",
            title="Merch Store API",
            description=(
                "Внутренний магазин мерча: сотрудники получают монеты, переводят их друг другу "
                "и покупают за них мерч. Защищенные маршруты требуют заголовок "
                "`Authorization: Bearer <token>`, токен выдается на /api/auth."
            ),
            lifespan=lifespan,
        )
        self.api.state.migrations = MigrationRunner(enabled=self.settings.env.RUN_MIGRATIONS)
        self.add_middlewares()
        self.add_exception_handlers()
        self.add_routers()

    def add_middlewares(self):
        self.api.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.get_allowed_origins(),
            allow_headers=self.settings.get_allowed_headers(),
            allow_methods=["*"],
        )

        @self.api.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            logging.info(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f} ms)")
            return response

    def add_exception_handlers(self):
        self.api.add_exception_handler(StarletteHTTPException, http_exception_handler)
        self.api.add_exception_handler(RequestValidationError, validation_exception_handler)
        self.api.add_exception_handler(Exception, generic_exception_handler)

    def add_routers(self):
        self.api.include_router(
            SystemRoutes.router,
            tags=["Служебные"]
        )
        self.api.include_router(
            AuthRoutes.router,
            prefix=API_PREFIX,
            tags=["Авторизация"]
        )
        self.api.include_router(
            CoinRoutes.router,
            prefix=API_PREFIX,
            tags=["Монеты"]
        )
        self.api.include_router(
            MerchRoutes.router,
            prefix=API_PREFIX,
            tags=["Мерч"]
        )

    def start_server(self):
        uvicorn.run(self.api, host=self.settings.env.HTTP_HOST, port=self.settings.env.HTTP_PORT)

    def get_app(self) -> FastAPI:
        return self.api
