"""Search criteria and helpers for document repository queries."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import and_, func, or_
from sqlalchemy.sql.elements import ColumnElement

from document_data_store.db.schema import to_db_time
from document_data_store.models.document import Author, Document, as_utc


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Optional search criteria; AND across fields, OR within each field.

    ``None`` and an empty collection both leave a dimension unconstrained.
    """

    title_prefixes: Collection[str] | None = None
    contains_contents: Collection[str] | None = None
    author_ids: Collection[str | None] | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None

    def __post_init__(self) -> None:
        for name in ("title_prefixes", "contains_contents", "author_ids"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                raise TypeError(
                    f"SearchRequest.{name} expects a non-string collection of strings."
                )
            values = tuple(value)
            # An author without an id is matched by a None entry.
            allowed = (str, type(None)) if name == "author_ids" else str
            if not all(isinstance(item, allowed) for item in values):
                raise TypeError(f"SearchRequest.{name} entries must be strings.")
            object.__setattr__(self, name, values)
        object.__setattr__(self, "created_from", as_utc(self.created_from))
        object.__setattr__(self, "created_to", as_utc(self.created_to))

    @property
    def is_unconstrained(self) -> bool:
        return (
            not self.title_prefixes
            and not self.contains_contents
            and not self.author_ids
            and self.created_from is None
            and self.created_to is None
        )


def matches_prefix(field: str | None, prefixes: Collection[str] | None) -> bool:
    if not prefixes:
        return True
    return field is not None and any(field.startswith(prefix) for prefix in prefixes)


def matches_substring(field: str | None, substrings: Collection[str] | None) -> bool:
    if not substrings:
        return True
    return field is not None and any(substring in field for substring in substrings)


def matches_author(author: Author | None, author_ids: Collection[str | None] | None) -> bool:
    if not author_ids:
        return True
    return author is not None and author.id in author_ids


def matches_date_range(
    created: datetime | None,
    created_from: datetime | None,
    created_to: datetime | None,
) -> bool:
    """Inclusive range check; a missing timestamp fails any bound that is set."""
    if created_from is not None and (created is None or created < created_from):
        return False
    if created_to is not None and (created is None or created > created_to):
        return False
    return True


def matches(document: Document, request: SearchRequest) -> bool:
    """Return True when ``document`` satisfies every dimension of ``request``."""
    return (
        matches_prefix(document.title, request.title_prefixes)
        and matches_substring(document.content, request.contains_contents)
        and matches_author(document.author, request.author_ids)
        and matches_date_range(document.created, request.created_from, request.created_to)
    )


def sort_key(document: Document) -> tuple[datetime | None, str]:
    """Deterministic ordering shared by every repository: created, then id."""
    return document.created, document.id or ""


def build_search_expression(model, request: SearchRequest) -> ColumnElement[bool] | None:
    """Construct a SQLAlchemy WHERE clause for ``request``.

    Returns ``None`` when the request carries no constraints. Text matching uses
    ``substr``/``instr`` rather than LIKE, which SQLite folds to lower case.
    """
    clauses: list[ColumnElement[bool]] = []

    if request.title_prefixes:
        clauses.append(
            or_(
                *(
                    func.substr(model.title, 1, len(prefix)) == prefix
                    for prefix in request.title_prefixes
                )
            )
        )
    if request.contains_contents:
        clauses.append(
            or_(
                *(
                    func.instr(model.content, substring) > 0
                    for substring in request.contains_contents
                )
            )
        )
    if request.author_ids:
        author_id = model.author["id"].as_string()
        author_ids = [value for value in request.author_ids if value is not None]
        alternatives = [author_id.in_(author_ids)] if author_ids else []
        if len(author_ids) != len(request.author_ids):
            # IN never matches NULL; authors stored without an id need IS NULL.
            alternatives.append(and_(model.author.is_not(None), author_id.is_(None)))
        clauses.append(or_(*alternatives))
    if request.created_from is not None:
        clauses.append(model.created >= to_db_time(request.created_from))
    if request.created_to is not None:
        clauses.append(model.created <= to_db_time(request.created_to))

    if not clauses:
        return None
    return and_(*clauses)


__all__ = [
    "SearchRequest",
    "build_search_expression",
    "matches",
    "matches_author",
    "matches_date_range",
    "matches_prefix",
    "matches_substring",
    "sort_key",
]
