"""Pydantic models for stored documents and their authors."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes; aware values are returned untouched."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class Author(BaseModel):
    """Identifier and display name embedded in a document."""

    id: str | None = None
    name: str | None = None

    model_config = ConfigDict(frozen=True)


class Document(BaseModel):
    """Immutable representation of a stored document.

    Every field is optional on input. ``DocumentStore.save`` resolves ``id`` and
    ``created`` and returns a copy; the instance handed in is never mutated.
    """

    id: str | None = None
    title: str | None = None
    content: str | None = None
    author: Author | None = None
    created: datetime | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("created")
    @classmethod
    def normalise_created(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


__all__ = ["Author", "Document", "as_utc"]
