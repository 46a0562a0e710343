"""Database session management."""
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from contextlib import contextmanager
from typing import Generator

from edconsult.core.config import settings
from edconsult.core.exceptions import StorageError
from edconsult.core.logging_config import get_logger

logger = get_logger(__name__)

DATABASE_URL = settings.get_database_url()

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context():
    """Context manager for getting database session outside of FastAPI."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Generator[Session, None, None]:
    """
    Run one all-or-nothing unit of work on ``db``.

    Commits when the block exits normally. Any exception rolls the
    transaction back first; database errors are re-raised as StorageError,
    everything else (domain errors included) propagates unchanged.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("transaction_failed", error=str(e), error_type=type(e).__name__)
        raise StorageError("A database error occurred. Please try again later.") from e
    except BaseException:
        db.rollback()
        raise
