"""Document store façade: id/creation-time resolution over a repository."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from document_data_store.models.document import Document
from document_data_store.repositories.document_repository import DocumentRepository
from document_data_store.repositories.filters import SearchRequest

logger = logging.getLogger(__name__)


class DocumentStoreError(RuntimeError):
    """Raised when a DocumentStore cannot be built or configured."""


class DocumentStore:
    """Thin façade that resolves identifiers and creation times before storage."""

    def __init__(self, repository: DocumentRepository):
        """Internal constructor; prefer ``create_document_store`` for public use."""
        self._repository = repository

    @property
    def repository(self) -> DocumentRepository:
        """Repository backing this store."""
        return self._repository

    # ----------------------------------------------------------- Mutating ops
    def save(self, document: Document) -> Document:
        """Create or update ``document`` and return the stored copy.

        A missing or empty id is replaced by a fresh UUID4 string and a missing
        ``created`` by the current UTC time. When the id already exists the
        stored ``created`` wins, whatever the incoming value.
        """
        update: dict[str, object] = {}
        if not document.id:
            update["id"] = str(uuid4())
        if document.created is None:
            update["created"] = datetime.now(timezone.utc)
        if update:
            document = document.model_copy(update=update)

        return self._repository.upsert_document(document)

    # ------------------------------------------------------------------ Queries
    def find_by_id(self, document_id: str) -> Document | None:
        """Return the stored document for ``document_id`` if present."""
        return self._repository.get_document(document_id)

    def search(self, request: SearchRequest | None = None) -> list[Document]:
        """Return documents matching every criterion set on ``request``.

        Results are ordered by creation time, then id.
        """
        request = request or SearchRequest()
        results = self._repository.query_documents(request)
        logger.debug("Search matched %d document(s)", len(results))
        return results


__all__ = [
    "DocumentStore",
    "DocumentStoreError",
]
