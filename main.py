import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitecms.config import settings
from sitecms.database import AsyncSessionLocal, Base, engine
from sitecms.exception_handlers import register_exception_handlers
from sitecms.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from sitecms.plugins.loader import build_plugin_registry
from sitecms.repositories.unit_of_work import UnitOfWork
from sitecms.routes import content, plugins
from sitecms.services.plugin_catalog_service import sync_plugins

setup_structured_logging(log_level=settings.log_level, json_format=settings.environment == "production")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up %s v%s (%s)", settings.app_name, settings.app_version, settings.environment)

    if settings.debug:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")

    if settings.plugin_sync_on_startup:
        async with AsyncSessionLocal() as db:
            await sync_plugins(app.state.plugin_registry, UnitOfWork(db))

    yield

    await engine.dispose()
    logger.info("Shutting down the application...")


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Multi-site CMS backend publishing plugin-driven site content",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Built once; routes reach it through sitecms.plugins.loader.get_plugin_registry
    app.state.plugin_registry = build_plugin_registry()

    # Add middleware
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(content.router, prefix="/api/content")
    app.include_router(plugins.router, prefix="/api/plugins")

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "healthy", "version": settings.app_version}

    if settings.debug:
        logger.info("Running in %s mode", settings.environment)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)  # Logs SQL statements
        logging.getLogger("sqlalchemy.pool").setLevel(logging.INFO)  # Logs connection pool checkouts

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
