from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import structlog
from prometheus_fastapi_instrumentator import Instrumentator

from tuca.api import admin, auth, bookings, favorites, testimonials, users
from tuca.api.catalog import catalog_routers
from tuca.core.logging_config import configure_logging
from tuca.core.rate_limit import limiter
from tuca.core.settings import settings
from tuca.middleware.logging import RequestLoggingMiddleware
from tuca.storage.provider import close_storage, get_storage, init_storage

configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...", environment=settings.ENVIRONMENT, storage=settings.STORAGE_BACKEND)
    try:
        await init_storage()
    except Exception:
        logger.exception("Failed to initialize storage")
        raise

    yield

    logger.info("Shutting down application...")
    try:
        await close_storage()
    except Exception as e:
        logger.error(f"Error during storage cleanup: {e}")


app = FastAPI(
    title=settings.APP_NAME,
    description="Booking and catalog administration API for Tuca Noronha",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Instrumentator().instrument(app).expose(app, endpoint="/metrics")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("request_validation_failed", error_count=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        exc_info=True
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


@app.get("/")
def root():
    return {"status": "API active", "version": settings.APP_VERSION}


@app.get("/health")
async def health_check_detailed():
    """Detailed health check endpoint"""
    storage_health = await get_storage().health_check()
    return {
        "status": "healthy" if storage_health.get("status") == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "components": {
            "storage": storage_health,
            "api": "healthy"
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


prefix = settings.API_PREFIX

app.include_router(auth.router, prefix=prefix)
app.include_router(users.router, prefix=prefix)
for router in catalog_routers:
    app.include_router(router, prefix=prefix)
app.include_router(testimonials.router, prefix=prefix)
app.include_router(favorites.router, prefix=prefix)
app.include_router(bookings.router, prefix=prefix)
app.include_router(admin.router, prefix=prefix)
