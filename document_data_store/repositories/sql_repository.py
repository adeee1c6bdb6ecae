"""SQLAlchemy-backed repository for Document models."""

from __future__ import annotations

import logging
import threading
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from document_data_store.db.schema import (
    DbDocument,
    from_db_time,
    to_db_offset,
    to_db_time,
)
from document_data_store.models.document import Author, Document
from document_data_store.repositories.filters import (
    SearchRequest,
    build_search_expression,
)

logger = logging.getLogger(__name__)


class SqlDocumentRepository:
    """Repository that persists and hydrates Document models via SQLAlchemy.

    The engine points at a single in-memory SQLite connection, so every
    session is opened under ``_lock``.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory
        self._lock = threading.RLock()

    def get_document(self, document_id: str) -> Document | None:
        with self._lock, self._session_factory() as session:
            row = session.get(DbDocument, document_id)
            return self._to_model(row) if row is not None else None

    def upsert_document(self, document: Document) -> Document:
        """Insert or replace ``document``, keeping the stored creation time."""
        with self._lock, self._session_factory() as session:
            existing = session.get(DbDocument, document.id)
            if existing is not None:
                document = document.model_copy(
                    update={"created": from_db_time(existing.created, existing.created_offset)}
                )
            session.merge(DbDocument(**self._to_record(document)))
            session.commit()

        logger.debug(
            "%s document %s", "Updated" if existing is not None else "Inserted", document.id
        )
        return document

    def query_documents(self, request: SearchRequest) -> list[Document]:
        """Return documents matching ``request`` ordered by creation time then id."""
        statement = select(DbDocument)
        expression = build_search_expression(DbDocument, request)
        if expression is not None:
            statement = statement.where(expression)
        statement = statement.order_by(DbDocument.created, DbDocument.id)

        with self._lock, self._session_factory() as session:
            rows = session.scalars(statement).all()
            return [self._to_model(row) for row in rows]

    # ----------------------------------------------------------------- Helpers
    @staticmethod
    def _to_record(document: Document) -> dict[str, Any]:
        return {
            "id": document.id,
            "title": document.title,
            "content": document.content,
            "author": document.author.model_dump() if document.author is not None else None,
            "created": to_db_time(document.created),
            "created_offset": to_db_offset(document.created),
        }

    @staticmethod
    def _to_model(row: DbDocument) -> Document:
        return Document(
            id=row.id,
            title=row.title,
            content=row.content,
            author=Author(**row.author) if row.author is not None else None,
            created=from_db_time(row.created, row.created_offset),
        )


__all__ = ["SqlDocumentRepository"]
