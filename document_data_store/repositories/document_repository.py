"""Lock-protected in-memory repository for Document models."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from document_data_store.models.document import Document
from document_data_store.repositories.filters import SearchRequest, matches, sort_key

logger = logging.getLogger(__name__)


class DocumentRepository(Protocol):
    """Storage contract shared by the in-memory and SQLite repositories."""

    def get_document(self, document_id: str) -> Document | None: ...

    def upsert_document(self, document: Document) -> Document: ...

    def query_documents(self, request: SearchRequest) -> list[Document]: ...


class InMemoryDocumentRepository:
    """Repository backed by a ``dict`` keyed on document id.

    A single re-entrant lock makes each get/put atomic and keeps the
    read-before-write in ``upsert_document`` linearizable per key.
    """

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._lock = threading.RLock()

    def get_document(self, document_id: str) -> Document | None:
        with self._lock:
            return self._documents.get(document_id)

    def upsert_document(self, document: Document) -> Document:
        """Insert or replace ``document``, keeping the stored creation time.

        ``document.id`` and ``document.created`` must already be resolved.
        """
        with self._lock:
            existing = self._documents.get(document.id)
            if existing is not None:
                document = document.model_copy(update={"created": existing.created})
            self._documents[document.id] = document

        logger.debug(
            "%s document %s", "Updated" if existing is not None else "Inserted", document.id
        )
        return document

    def query_documents(self, request: SearchRequest) -> list[Document]:
        """Filter a snapshot of the stored documents outside the lock."""
        with self._lock:
            snapshot = list(self._documents.values())

        if not request.is_unconstrained:
            snapshot = [doc for doc in snapshot if matches(doc, request)]
        return sorted(snapshot, key=sort_key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)


__all__ = ["DocumentRepository", "InMemoryDocumentRepository"]
