"""Top-level package for the in-memory document data store."""

__version__ = "0.1.0"

from .models import Author, Document  # noqa: E402
from .repositories.filters import SearchRequest  # noqa: E402
from .store import DocumentStore, DocumentStoreError, create_document_store  # noqa: E402

__all__ = [
    "__version__",
    "Author",
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    "SearchRequest",
    "create_document_store",
]
