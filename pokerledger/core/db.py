from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

# Table classes must be registered on SQLModel.metadata before create_all
import pokerledger.models  # noqa: F401  # pyright: ignore[reportUnusedImport]


def create_db_engine(database_url: str) -> Engine:
    """Build an engine for the given URL. The caller owns its lifetime."""
    # Never log credentials
    logger.info(f"Initializing database engine with URL: {database_url.split('@')[-1]}")
    return create_engine(database_url)


def create_db_and_tables(engine: Engine) -> None:
    """Create database tables from SQLModel metadata."""
    logger.info("Creating database tables from SQLModel metadata...")
    SQLModel.metadata.create_all(engine)
    logger.success("Database tables created successfully")
