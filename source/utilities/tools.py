"""Module with utilities."""

import time
from sqlalchemy import Engine
from sqlalchemy.exc import OperationalError
from utilities.models import Base
from utilities.logger import Logger

logger = Logger.get_logger(__name__)


def wait_for_database(engine: Engine, max_retries: int, delay: int) -> bool:
    """Wait for the database to be available."""
    for i in range(max_retries):
        try:
            with engine.connect():
                logger.info("Successfully connected to the database")
                return True
        except OperationalError:
            logger.info(
                f"Waiting for the database to be available... ({i+1}/{max_retries})"
            )
            time.sleep(delay)

    logger.error("Failed to connect to the database after multiple attempts")
    return False


def setup_database(engine: Engine) -> None:
    """Create database tables."""
    Base.metadata.create_all(engine)
    logger.info("Database tables created successfully")


def drop_database(engine: Engine) -> None:
    """Drop database tables."""
    Base.metadata.drop_all(engine)
    logger.info("Database tables dropped")
