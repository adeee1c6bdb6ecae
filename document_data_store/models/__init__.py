"""Document model exports."""

from .document import Author, Document

__all__ = ["Author", "Document"]
