"""Bookshelf API: FastAPI entry point.

Registers middleware, routers, exception handlers and lifecycle hooks.
``create_app`` builds an application around explicit settings; the module
level ``app`` is the one uvicorn serves (``uvicorn api.main:app``).
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from api.exception_handlers import register_exception_handlers
from api.greeting import router as greeting_router
from api.middleware import RequestContextMiddleware
from core.config import Settings
from core.database import Database
from core.logging_setup import configure_logging
from verticals.bookstore.router import router as bookstore_router


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    if settings.create_tables:
        await database.create_tables()

    logger.info("Bookshelf API started (store={})", database.engine.url.render_as_string())
    yield
    await database.dispose()
    logger.info("Bookshelf API shutting down")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Bookshelf",
        description="REST resource management for books backed by a relational store",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request id + access log
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    app.include_router(greeting_router, tags=["Greeting"])
    app.include_router(bookstore_router, prefix=settings.api_prefix, tags=["Books"])

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": settings.version}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve ``app`` with uvicorn."""
    settings: Settings = app.state.settings
    uvicorn.run("api.main:app", host=settings.host, port=settings.port)
