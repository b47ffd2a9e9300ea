from app.core.config import get_database_url, get_storage_dir, get_storage_url_prefix
from app.core.database import Base, SessionLocal, engine, get_db, init_db
from app.core.errors import (
    StoreFailure,
    TeamConflictError,
    TeamNotFoundError,
    TeamServiceError,
    TeamValidationError,
)

__all__ = [
    "get_database_url",
    "get_storage_dir",
    "get_storage_url_prefix",
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "init_db",
    "TeamServiceError",
    "TeamValidationError",
    "TeamNotFoundError",
    "TeamConflictError",
    "StoreFailure",
]
