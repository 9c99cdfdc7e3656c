"""Database session helpers."""

from commission_api.db.session import (
    AsyncSessionLocal,
    dispose_engine,
    engine,
    get_db,
    get_db_context,
)

__all__ = ["AsyncSessionLocal", "engine", "get_db", "get_db_context", "dispose_engine"]
