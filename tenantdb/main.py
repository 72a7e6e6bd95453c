"""
Main application module.

This module initializes and configures the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenantdb import __version__
from tenantdb.adapters.database.factory import DatabaseAdapterFactory
from tenantdb.middleware.error_handler import add_error_handlers
from tenantdb.routes.companies import router as companies_router
from tenantdb.utils.config import get_settings
from tenantdb.utils.logger import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Acquire the database adapter on startup and release it on shutdown."""
    load_dotenv()
    setup_logging(get_settings())
    try:
        logger.info("Starting up application...")
        app.state.db = await DatabaseAdapterFactory.get_adapter()
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Error during startup: {str(e)}")
        raise

    yield

    logger.info("Shutting down application...")
    await DatabaseAdapterFactory.close_adapter()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="tenantdb API",
        description="Data-access API for the multi-tenant workspace",
        version=__version__,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_error_handlers(app)
    app.include_router(companies_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.ENVIRONMENT}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("tenantdb.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
