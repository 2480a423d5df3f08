"""Script to create tables and seed default game types and players."""

import argparse

from loguru import logger

from pokerledger.core.config import get_database_url
from pokerledger.core.db import create_db_and_tables, create_db_engine
from pokerledger.core.logging_config import configure_logging
from pokerledger.services.seed_service import reset_db, seed_defaults


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the pokerledger database.")
    parser.add_argument(
        "--reset", action="store_true", help="drop and recreate all tables first"
    )
    args = parser.parse_args(argv)

    configure_logging()
    logger.info("Starting seed script...")
    engine = create_db_engine(get_database_url())
    try:
        if args.reset:
            reset_db(engine)
        else:
            create_db_and_tables(engine)
        seed_defaults(engine)
    finally:
        engine.dispose()
    logger.success("Seed script completed successfully")


if __name__ == "__main__":
    main()
