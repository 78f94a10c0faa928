"""
Error types raised by the note index.

Every failure the engine surfaces is a NoteIndexError subclass. Wrapping
errors keep the underlying exception on `.cause` and are raised with
`raise ... from cause`, so tracebacks show both layers.
"""

from __future__ import annotations

from typing import Any, Iterable


class NoteIndexError(Exception):
    """Base class for all note index failures."""


class NotFound(NoteIndexError):
    """An id lookup matched zero documents."""

    def __init__(self, note_id: Any):
        self.note_id = note_id
        super().__init__(f"No document found for id {note_id}")


class AmbiguousId(NoteIndexError):
    """An id lookup matched more than one document (index corruption)."""

    def __init__(self, note_id: Any, count: int):
        self.note_id = note_id
        self.count = count
        super().__init__(f"Found {count} documents for id {note_id}, expected one")


class MalformedCoordinate(NoteIndexError, ValueError):
    """A coordinate field value could not be parsed."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed coordinate {value!r}: {reason}")


class DocumentDecodeError(NoteIndexError):
    """A single index document failed to map back to a Note."""

    def __init__(self, field: str, cause: Exception):
        self.field = field
        self.cause = cause
        super().__init__(f"Failed to decode field {field!r}: {cause}")


class IndexTransportError(NoteIndexError):
    """The index client could not complete a request."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Index request failed: {cause}")


class IndexWriteError(NoteIndexError):
    """Writing a document to the index failed."""

    def __init__(self, note_id: Any, cause: Exception):
        self.note_id = note_id
        self.cause = cause
        super().__init__(f"Failed to write document {note_id}: {cause}")


class DeleteFailed(NoteIndexError):
    """A bulk delete failed as a whole."""

    def __init__(self, ids: Iterable[Any], cause: Exception):
        self.ids = list(ids)
        self.cause = cause
        super().__init__(f"Failed to delete {len(self.ids)} documents: {cause}")


class MutationFetchFailed(NoteIndexError):
    """The fetch half of a flag mutation failed; nothing was written."""

    def __init__(self, note_id: Any, cause: Exception):
        self.note_id = note_id
        self.cause = cause
        super().__init__(f"Could not fetch document {note_id} for update: {cause}")
