"""SQLAlchemy engine, session e dependency."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import get_database_url

logger = logging.getLogger(__name__)

DATABASE_URL = get_database_url()

# check_same_thread solo per SQLite (sviluppo locale e test)
connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency that yields a DB session. Caller must close."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Crea la tabella teams se non esiste.
    I modelli devono essere importati prima per registrare i metadata.
    """
    from app.models import team  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("create_all completato (%s)", engine.url.get_backend_name())
