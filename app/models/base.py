"""SQLAlchemy declarative Base and shared column types."""

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Timezone-aware creation timestamp for new rows."""
    return datetime.now(UTC)


class UTCDateTime(TypeDecorator):
    """DateTime stored as UTC and always loaded back timezone-aware.

    SQLite keeps no offset, so naive values read from it are tagged as UTC.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(UTC).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
