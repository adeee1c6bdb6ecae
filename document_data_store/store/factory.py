"""Factory helpers for constructing the document store façade."""

from __future__ import annotations

import logging

from document_data_store.config import StoreSettings, get_settings
from document_data_store.db.engine import create_engine, create_session_factory
from document_data_store.db.schema import create_all
from document_data_store.repositories.document_repository import (
    InMemoryDocumentRepository,
)
from document_data_store.repositories.sql_repository import SqlDocumentRepository

from .document_store import DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)


def create_document_store(
    settings: StoreSettings | None = None,
    *,
    backend: str | None = None,
) -> DocumentStore:
    """Build a DocumentStore for the configured backend.

    ``backend`` overrides ``settings.backend`` when given. Each call returns a
    new, empty store.
    """
    if settings is None:
        settings = get_settings()
    backend = backend or settings.backend

    if backend == "memory":
        repository = InMemoryDocumentRepository()
    elif backend == "sqlite":
        engine = create_engine(echo=settings.sql_echo)
        create_all(engine)
        repository = SqlDocumentRepository(create_session_factory(engine))
    else:
        raise DocumentStoreError(f"Unsupported document store backend '{backend}'.")

    logger.debug("Created document store with %s backend", backend)
    return DocumentStore(repository)


__all__ = ["create_document_store"]
