"""Database engine helpers."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from document_data_store.repositories.errors import UnsupportedDatabaseError

DEFAULT_SQLITE_URL = "sqlite+pysqlite:///:memory:"


def create_engine(
    connection_string: str | None = None,
    *,
    echo: bool = False,
    connect_args: Mapping[str, Any] | None = None,
) -> Engine:
    """Create a SQLAlchemy engine bound to an in-memory SQLite database.

    Parameters
    ----------
    connection_string:
        Optional SQLAlchemy URL. Only in-memory SQLite URLs are accepted;
        anything that would persist data raises ``UnsupportedDatabaseError``.
    echo:
        Enable SQLAlchemy engine echo logging.
    connect_args:
        Optional mapping merged into the DBAPI connect arguments.

    Notes
    -----
    - An in-memory database lives inside a single DBAPI connection, so the
      engine uses ``StaticPool`` and disables SQLite's same-thread check. The
      repository serialises access to that connection.
    """
    url = make_url(connection_string or DEFAULT_SQLITE_URL)
    if url.get_backend_name() != "sqlite":
        raise UnsupportedDatabaseError(
            f"Only in-memory SQLite is supported, got backend '{url.get_backend_name()}'."
        )
    if url.database not in (None, "", ":memory:"):
        raise UnsupportedDatabaseError(
            f"Refusing file-backed SQLite database '{url.database}'; use ':memory:'."
        )

    merged_args: dict[str, Any] = {"check_same_thread": False}
    merged_args.update(connect_args or {})
    return sa_create_engine(
        url,
        echo=echo,
        poolclass=StaticPool,
        connect_args=merged_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a configured session factory bound to the given engine."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)
