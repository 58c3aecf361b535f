from __future__ import annotations
from fastapi import APIRouter, Request, Response, status
from scalar_fastapi import get_scalar_api_reference

from .schemas import ProbeStatus

router = APIRouter()


@router.get("/live", response_model=ProbeStatus, summary="Liveness probe")
def live():
    return ProbeStatus(ok=True)


@router.get("/ready", response_model=ProbeStatus, summary="Readiness probe")
def ready(request: Request, response: Response):
    """
    200 - миграции схемы применены, сервис готов принимать запросы.
    503 - миграции еще выполняются или завершились ошибкой.
    """
    is_ready = request.app.state.migrations.is_ready()
    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ProbeStatus(ok=is_ready)


@router.get("/scalar", include_in_schema=False)
def get_scalar(request: Request):
    return get_scalar_api_reference(
        title=request.app.title,
        openapi_url=request.app.openapi_url,
    )
