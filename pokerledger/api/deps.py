from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from loguru import logger
from sqlalchemy import Engine
from sqlmodel import Session


def get_engine(request: Request) -> Engine:
    """Return the engine owned by the running application."""
    return request.app.state.engine


def get_session(
    engine: Annotated[Engine, Depends(get_engine)],
) -> Generator[Session, None, None]:
    """Provide a database session for dependency injection."""
    logger.debug("Creating database session")
    with Session(engine) as session:
        yield session
    logger.debug("Database session closed")


SessionDep = Annotated[Session, Depends(get_session)]
