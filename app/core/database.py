"""In-memory SQLite store: engine, session factory and lifecycle helpers."""

import threading
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.models.base import Base

# One shared connection keeps the in-memory database alive for the whole process.
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Guards every commit and rollback on the shared connection. Held only for one
# synchronous unit of work, never across an await or a dependency.
store_lock = threading.RLock()


@contextmanager
def store_write(db: Session) -> Iterator[Session]:
    """Run a find-then-mutate unit under the store lock; roll back if it raises."""
    with store_lock:
        try:
            yield db
        except Exception:
            db.rollback()
            raise


def init_store() -> None:
    """Create all tables. Safe to call more than once."""
    import app.models  # noqa: F401  registers every table on Base.metadata

    Base.metadata.create_all(bind=engine)


def reset_store() -> None:
    """Drop and recreate every table, discarding all data and id counters."""
    import app.models  # noqa: F401

    with store_lock:
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)


def close_session(db: Session) -> None:
    """Close a session. Closing rolls back the shared connection, so it must not land inside a write."""
    with store_lock:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        close_session(db)


def store_status(db: Session) -> tuple[bool, dict[str, int], list[str]]:
    """
    Inspect the store: (reachable, row count per table, tables missing from the schema).
    A store that cannot be queried reports (False, {}, []).
    """
    import app.models  # noqa: F401

    try:
        existing = set(inspect(db.connection()).get_table_names())
        missing = sorted(name for name in Base.metadata.tables if name not in existing)
        counts = {
            name: db.scalar(select(func.count()).select_from(table)) or 0
            for name, table in sorted(Base.metadata.tables.items())
            if name in existing
        }
    except SQLAlchemyError:
        return False, {}, []
    return True, counts, missing
