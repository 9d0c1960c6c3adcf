from ishaazi.db.base import Base
from ishaazi.db.session import get_db, engine, SessionLocal
from ishaazi.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "ALL_TABLE_NAMES"]
