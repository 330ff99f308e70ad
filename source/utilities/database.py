"""Engine, session and transaction helpers."""

from typing import Callable, TypeVar
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import Session, sessionmaker

from utilities.logger import Logger

logger = Logger.get_logger(__name__)

T = TypeVar("T")


def create_db_engine(db_url: str, **kwargs) -> Engine:
    """Create an engine for the given database URL."""
    return create_engine(db_url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def execute_in_transaction(session: Session, action: Callable[[], T]) -> T:
    """Run action, commit on success, roll back and re-raise on any error."""
    try:
        result = action()
        session.commit()
        logger.debug("Transaction committed")
        return result
    except Exception:
        session.rollback()
        logger.debug("Transaction rolled back")
        raise
