from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from petcare.core.config import settings
from petcare.core.correlation import CorrelationIdMiddleware
from petcare.core.database import DatabaseManager
from petcare.core.exceptions import ErrorCode, ErrorDetail, ErrorResponse, PetCareException
from petcare.log.logging import logger
from petcare.routers.adoption_router import router as adoption_router
from petcare.routers.healthcheck_router import router as healthcheck_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting Pet Adoption Service...")

    db_manager = DatabaseManager()
    app.state.db_manager = db_manager

    try:
        await db_manager.initialize()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database: {error}", error=str(e))
        # Continue startup; /health reports the database as unhealthy

    yield

    logger.info("Shutting down Pet Adoption Service...")
    await db_manager.close()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Pet Adoption Service",
    description="Adoptable pet listing and adoption application workflow",
    version="1.0.0",
    lifespan=lifespan,
)

# Last added = first executed
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(PetCareException)
async def handle_petcare_exception(request: Request, exc: PetCareException):
    content = {**exc.detail, "path": request.url.path}
    if exc.status_code >= 500:
        logger.error(
            "{error}: {detail}",
            error=exc.error,
            detail=exc.message,
            path=request.url.path,
            event_type="request_error",
        )
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    details = [
        ErrorDetail(
            code=ErrorCode.VALIDATION_ERROR,
            message=error["msg"],
            field=".".join(str(part) for part in error["loc"]),
        )
        for error in exc.errors()
    ]
    response = ErrorResponse.create(
        error="Invalid request data",
        code=ErrorCode.VALIDATION_ERROR,
        message="The request could not be validated",
        details=details,
        path=request.url.path,
    )
    return JSONResponse(status_code=400, content=response.model_dump())


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"error": "Route not found", "path": request.url.path, "method": request.method},
        )
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail, "message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception: {error}",
        error=str(exc),
        path=request.url.path,
        event_type="unhandled_error",
    )
    response = ErrorResponse.create(
        error="Something went wrong!",
        code=ErrorCode.INTERNAL_ERROR,
        message=str(exc),
        path=request.url.path,
    )
    return JSONResponse(status_code=500, content=response.model_dump())


# =============================================================================
# Routes
# =============================================================================

@app.get("/")
async def root(request: Request):
    db_manager = getattr(request.app.state, "db_manager", None)
    connected = db_manager is not None and await db_manager.ping()
    return {
        "message": "Pet Adoption Service is running!",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "mongodb": "connected" if connected else "disconnected",
    }


app.include_router(adoption_router, prefix=settings.api_prefix)
app.include_router(healthcheck_router)
