"""Health check endpoints for liveness and readiness checks."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from linkvault.core.config import get_settings
from linkvault.domain.exceptions import LinkVaultException
from linkvault.infrastructure.persistence.database import check_database
from linkvault.schemas.health import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Record store unreachable", "model": ReadinessResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """200 when the record store answers; 503 otherwise.

    The cache is reported but never fails readiness: reads fall back to the
    record store while it is down.
    """
    try:
        await check_database()
        database = "ok"
    except (SQLAlchemyError, OSError, LinkVaultException) as e:
        logger.warning("Readiness: database check failed: %s", e)
        database = "unavailable"

    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        cache_status = "disabled"
    else:
        cache_status = "ok" if await cache.ping() else "unavailable"

    result = ReadinessResponse(
        status="ok" if database == "ok" else "not_ready",
        database=database,
        cache=cache_status,
    )
    if database != "ok":
        return JSONResponse(status_code=503, content=result.model_dump())
    return result
