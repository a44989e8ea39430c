"""
Health check endpoints for container probes and monitoring.

Provides:
- /health: Full health check with dependency status
- /health/live: Liveness probe (is the service running?)
- /health/ready: Readiness probe (can the service handle traffic?)
"""

import time
from datetime import datetime

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from petcare.core.config import settings

router = APIRouter(tags=["healthcheck"])


class DependencyStatus(BaseModel):
    """Status of a single dependency."""

    name: str
    status: str  # "healthy", "unhealthy"
    latency_ms: float | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    """Full health check response."""

    status: str  # "healthy", "unhealthy"
    version: str = "1.0.0"
    service: str = "petcare-adoption-service"
    environment: str
    timestamp: str
    dependencies: list[DependencyStatus] = []


class LivenessResponse(BaseModel):
    status: str = "alive"
    timestamp: str


class ReadinessResponse(BaseModel):
    status: str  # "ready", "not_ready"
    timestamp: str
    checks: dict[str, str] = {}


def _timestamp() -> str:
    return datetime.utcnow().isoformat() + "Z"


async def _check_mongodb(request: Request) -> DependencyStatus:
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None:
        return DependencyStatus(name="mongodb", status="unhealthy", message="Not initialized")

    started = time.perf_counter()
    healthy = await db_manager.ping()
    latency_ms = round((time.perf_counter() - started) * 1000, 2)

    return DependencyStatus(
        name="mongodb",
        status="healthy" if healthy else "unhealthy",
        latency_ms=latency_ms,
        message=None if healthy else "Ping failed",
    )


@router.get(
    "/health",
    summary="Full health check",
    description="Returns detailed health status including all dependencies.",
    response_model=HealthResponse,
    responses={
        200: {"description": "Service is healthy"},
        503: {"description": "Service is unhealthy"},
    },
)
async def health_check(request: Request):
    mongodb = await _check_mongodb(request)

    response = HealthResponse(
        status=mongodb.status,
        environment=settings.environment,
        timestamp=_timestamp(),
        dependencies=[mongodb],
    )

    if mongodb.status != "healthy":
        raise HTTPException(status_code=503, detail=response.model_dump())

    return response


@router.get(
    "/health/live",
    summary="Liveness probe",
    description="Checks if the service process is running.",
    response_model=LivenessResponse,
)
async def liveness_probe():
    """
    Returns 200 if the service is running.
    This endpoint should always succeed if the process is alive.
    """
    return LivenessResponse(status="alive", timestamp=_timestamp())


@router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Checks if the service can handle traffic.",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready to handle traffic"},
        503: {"description": "Service is not ready"},
    },
)
async def readiness_probe(request: Request):
    mongodb = await _check_mongodb(request)
    is_ready = mongodb.status == "healthy"

    response = ReadinessResponse(
        status="ready" if is_ready else "not_ready",
        timestamp=_timestamp(),
        checks={"mongodb": "ready" if is_ready else "not_ready"},
    )

    if not is_ready:
        raise HTTPException(status_code=503, detail=response.model_dump())

    return response
