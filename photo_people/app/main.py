from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from photo_people.app.config import settings
from photo_people.app.exceptions import register_exception_handlers
from photo_people.app.logging_config import setup_logging
from photo_people.api.v1.router import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")
    yield
    # Shutdown
    logger.info("Shutting down...")


def create_application() -> FastAPI:
    setup_logging()

    application = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version="0.1.0",
        lifespan=lifespan,
    )

    # Middleware
    application.add_middleware(GZipMiddleware, minimum_size=1000)

    # Routers
    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    register_exception_handlers(application)

    @application.get("/health")
    async def health_check():
        return {"status": "healthy", "environment": settings.ENVIRONMENT}

    return application


app = create_application()
