import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from src.config.logging_config import configure_logging
from src.config.settings import settings
from src.database import client as db_client
from src.features.auth.exceptions import AuthException
from src.features.auth.router import router as auth_router
from src.features.user.router import router as user_router

logger = logging.getLogger(__name__)

# Rate limiter; counters live in the storage backend named by the URI
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.rate_limit_enabled,
)


def rate_limit_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle rate limit exceeded errors.

    Synchronous: SlowAPIMiddleware only calls synchronous handlers itself.
    """
    return JSONResponse(
        status_code=429,
        content={"error": "rate_limited", "message": "Too many requests. Try again later."},
    )


async def auth_exception_handler(request: Request, exc: AuthException) -> JSONResponse:
    """Render typed auth errors as {error, message, details?}."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors server-side and hide them from the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "An internal error occurred. Please try again later."},
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    configure_logging()
    await db_client.init_db()
    yield
    # Shutdown
    await db_client.close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    debug=settings.debug,
)

# Add rate limiting middleware
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_exception_handler(AuthException, auth_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Router Registration
routers: list[APIRouter] = [
    auth_router,
    user_router,
]

for router in routers:
    app.include_router(router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": settings.app_name, "status": "running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
