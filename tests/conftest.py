from __future__ import annotations

from collections.abc import Iterator
from typing import Callable

import pytest
from sqlalchemy.engine import Engine

from document_data_store.config import StoreSettings
from document_data_store.db.engine import create_engine, create_session_factory
from document_data_store.db.schema import Base, create_all
from document_data_store.models.document import Author, Document
from document_data_store.repositories.document_repository import InMemoryDocumentRepository
from document_data_store.repositories.sql_repository import SqlDocumentRepository
from document_data_store.store import DocumentStore, create_document_store

BACKENDS = ("memory", "sqlite")


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Yield a fresh in-memory SQLite engine with the schema created."""
    engine = create_engine()
    create_all(engine)
    try:
        yield engine
    finally:
        with engine.begin() as connection:
            Base.metadata.drop_all(bind=connection)
        engine.dispose()


@pytest.fixture
def session_factory(engine: Engine):
    return create_session_factory(engine)


@pytest.fixture
def sql_repository(session_factory) -> SqlDocumentRepository:
    return SqlDocumentRepository(session_factory)


@pytest.fixture
def memory_repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture(params=BACKENDS)
def document_store(request) -> DocumentStore:
    """Run store-level tests once per repository backend."""
    return create_document_store(StoreSettings(_env_file=None), backend=request.param)


@pytest.fixture
def document_factory() -> Callable[..., Document]:
    def _factory(
        *,
        document_id=None,
        title=None,
        content=None,
        author_id=None,
        author_name=None,
        created=None,
    ) -> Document:
        author = None
        if author_id is not None or author_name is not None:
            author = Author(id=author_id, name=author_name)
        return Document(
            id=document_id,
            title=title,
            content=content,
            author=author,
            created=created,
        )

    return _factory
