"""SQLAlchemy declarative schema for the document data store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.sqltypes import JSON

# SQL NULL (not JSON 'null') for documents without an author.
JSON_TYPE = JSON(none_as_null=True)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NAIVE_EPOCH = datetime(1970, 1, 1)
_MICROSECOND = timedelta(microseconds=1)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative mappings."""


class DbDocument(Base):
    """ORM mapping for a stored document.

    ``created`` holds microseconds since the Unix epoch and ``created_offset``
    the caller's UTC offset in microseconds. Timestamps at the edges of the
    ``datetime`` range cannot be shifted to UTC, so the instant and the offset
    are stored apart and recombined by ``from_db_time``.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    author: Mapped[dict[str, Any] | None] = mapped_column(JSON_TYPE, nullable=True)
    created: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_offset: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


def to_db_time(value: datetime) -> int:
    """Microseconds between the epoch and ``value``; naive values count as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _MICROSECOND


def to_db_offset(value: datetime) -> int:
    offset = value.utcoffset()
    return 0 if offset is None else offset // _MICROSECOND


def from_db_time(created: int, offset: int = 0) -> datetime:
    """Rebuild the aware datetime stored by ``to_db_time``/``to_db_offset``."""
    local = _NAIVE_EPOCH + timedelta(microseconds=created + offset)
    return local.replace(tzinfo=timezone(timedelta(microseconds=offset)))


def create_all(engine: Engine) -> None:
    """Create database tables for the schema."""
    Base.metadata.create_all(engine, checkfirst=True)


__all__ = [
    "Base",
    "DbDocument",
    "EPOCH",
    "JSON_TYPE",
    "create_all",
    "from_db_time",
    "to_db_offset",
    "to_db_time",
]
