"""Main FastAPI application with all middleware"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from giftreservoir.core.config import settings
from giftreservoir.core.events import lifespan
from giftreservoir.core.exceptions import register_exception_handlers
from giftreservoir.core.middleware import setup_middleware
from giftreservoir.core.monitoring import setup_monitoring_middleware
from giftreservoir.middleware.rate_limit import limiter, custom_rate_limit_handler
from giftreservoir.api.health import router as health_router
from giftreservoir.api.v1 import api_router

def create_app() -> FastAPI:
    """Build the application"""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Shared wishlists with gift claiming",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, custom_rate_limit_handler)
    app.add_middleware(SlowAPIMiddleware)

    register_exception_handlers(app)
    setup_middleware(app)

    if settings.PROMETHEUS_ENABLED:
        setup_monitoring_middleware(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "docs": "/api/docs",
            "health": "/health"
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "giftreservoir.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else settings.WORKERS
    )
