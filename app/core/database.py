"""PostgreSQL connection and session management."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import StoreError

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args={"connect_timeout": settings.DATABASE_CONNECT_TIMEOUT_SEC},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


@contextmanager
def store_operation(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into StoreError, logging the detail server-side."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            "Credential store operation failed",
            extra={"operation": operation, "error": str(e)[:500]},
        )
        raise StoreError(operation=operation) from e


def commit(db: Session) -> None:
    """Commit the session; a failed commit is rolled back and surfaces as StoreError."""
    try:
        with store_operation("commit"):
            db.commit()
    except StoreError:
        db.rollback()
        raise
