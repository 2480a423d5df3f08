"""Seed and reset helpers for a fresh pokerledger database."""

from decimal import Decimal

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import Session, SQLModel

from pokerledger.core.db import create_db_and_tables
from pokerledger.dao import player_dao, session_dao
from pokerledger.models import GameType, Player

DEFAULT_GAME_TYPES: dict[str, Decimal] = {
    "Crazy": Decimal(20),
    "Texas": Decimal(20),
    "PLO": Decimal(20),
    "Pineapple": Decimal(20),
}

DEFAULT_PLAYERS: list[str] = [
    "ALEX",
    "RICO",
    "CESAR",
    "GHADZ",
    "SIMON",
    "JIJ",
    "THOMAS",
    "EDDY",
]

GUEST_PLAYER = "Guest"


def seed_defaults(engine: Engine) -> tuple[int, int]:
    """Insert default game types, the regular roster and a guest slot.

    Rows that already exist are skipped, so seeding twice is harmless.

    Returns:
        (added, skipped) row counts.
    """
    added_count = 0
    skipped_count = 0

    with Session(engine) as session:
        for name, buy_in in DEFAULT_GAME_TYPES.items():
            if session_dao.get_game_type_by_name(session, name):
                skipped_count += 1
                continue
            session_dao.create_game_type(
                session, GameType(name=name, default_buy_in=buy_in)
            )
            added_count += 1

        roster = [(name, False) for name in DEFAULT_PLAYERS] + [(GUEST_PLAYER, True)]
        for name, is_guest in roster:
            if player_dao.get_player_by_name(session, name):
                skipped_count += 1
                continue
            player_dao.create_player(session, Player(name=name, is_guest=is_guest))
            added_count += 1

        session.commit()

    logger.success(f"Seeded {added_count} rows, skipped {skipped_count} existing.")
    return added_count, skipped_count


def reset_db(engine: Engine) -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database...")
    SQLModel.metadata.drop_all(engine)
    logger.info("Recreating tables...")
    create_db_and_tables(engine)
    logger.success("Database reset successfully.")
