"""Database package."""
from edconsult.db.session import engine, SessionLocal, get_db, get_db_context, transaction
from edconsult.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "transaction", "Base"]
