"""
Pixlink API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import get_settings
from .database import engine, Base
from .exceptions import PixlinkError
from .limiter import limiter
from .logging_config import api_logger
from .middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from .responses import ApiException, api_exception_handler
from .routes import health_router, users_router, images_router, share_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup (use migrations for anything beyond SQLite)."""
    Base.metadata.create_all(bind=engine)
    api_logger.info("Pixlink API started", environment=settings.environment)
    yield
    api_logger.info("Pixlink API stopped")


app = FastAPI(
    title="Pixlink API",
    description="Image sharing with short links",
    version="1.0.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(ApiException, api_exception_handler)
app.add_exception_handler(PixlinkError, api_exception_handler)

app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    max_age=3600,
)

# Routes
app.include_router(health_router)
app.include_router(users_router)
app.include_router(images_router)
app.include_router(share_router)


@app.get("/")
def root():
    return {
        "message": "Pixlink API",
        "docs": "/api/docs" if settings.debug else "Disabled in production",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
