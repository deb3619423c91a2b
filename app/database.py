"""Database connection and session management."""
import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.exceptions import StoreError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_options(database_url: str) -> dict:
    """SQLite needs cross-thread access; in-memory SQLite also needs one shared connection."""
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}
    options = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
        options["poolclass"] = StaticPool
    return options


class Database:
    """Owns the engine and session factory for one application instance.

    Opened by the application lifespan on startup and disposed on shutdown.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = create_engine(database_url, **_engine_options(database_url))
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def connect(self) -> None:
        """Create tables and verify the database answers."""
        try:
            Base.metadata.create_all(bind=self.engine)
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Error connecting to the database: {e}")
            raise StoreError("connect", str(e)) from e
        logger.info("Database connection established")

    def disconnect(self) -> None:
        self.engine.dispose()
        logger.info("Database connection closed")

    def ping(self) -> bool:
        """Check database connectivity (for the health endpoint)."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def session(self) -> Session:
        return self._session_factory()


def get_database(request: Request) -> Database:
    """Dependency returning the application's Database."""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database sessions."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
