"""FastAPI application for pokerledger."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy import Engine

from pokerledger.api.v1.router import api_router
from pokerledger.core.config import get_database_url
from pokerledger.core.db import create_db_and_tables, create_db_engine
from pokerledger.core.error_handlers import register_exception_handlers
from pokerledger.core.logging_config import configure_logging


def create_app(engine: Engine | None = None) -> FastAPI:
    """Build the application.

    With no engine, one is created from DATABASE_URL at startup and disposed
    at shutdown. A supplied engine stays owned by the caller.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging()
        logger.info("Starting pokerledger application...")
        owned = engine is None
        app.state.engine = create_db_engine(get_database_url()) if owned else engine
        logger.info("Initializing database...")
        create_db_and_tables(app.state.engine)
        logger.success("Database initialized successfully")
        await asyncio.sleep(0)  # Satisfy RUF029 (async function must await)
        logger.success("Application startup complete")
        yield
        logger.info("Shutting down pokerledger application...")
        if owned:
            app.state.engine.dispose()

    app = FastAPI(title="pokerledger", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/")
    def read_root() -> dict[str, str]:  # pyright: ignore[reportUnusedFunction]
        """Return welcome message for the root endpoint."""
        logger.debug("Root endpoint accessed")
        return {"message": "Welcome to pokerledger API"}

    return app


app = create_app()
