"""
Core protocols defining the contracts between the engine and the index.

PATTERN:
- Protocol defines the contract
- Multiple implementations possible (Solr over HTTP, in-memory)
- Factory function for instantiation (index.client.get_index_client)
- Test doubles for fast unit tests
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Protocol, runtime_checkable
from uuid import UUID

if TYPE_CHECKING:
    from geonotes_index.notes.note import Note
    from geonotes_index.query.builder import SelectQuery


# ---------------------------------------------------------------------------
# INDEX CLIENT PROTOCOL
# ---------------------------------------------------------------------------


@dataclass
class SelectResult:
    """
    Raw rows returned by a select.

    num_found is the total number of matching documents, which can be larger
    than len(docs) when the query's row cap truncated the result.
    """
    docs: list[dict[str, Any]] = field(default_factory=list)
    num_found: int = 0


@runtime_checkable
class IndexClient(Protocol):
    """
    Contract for talking to the search index.

    Implementations:
    - SolrIndexClient (production, HTTP)
    - InMemoryIndexClient (testing/development)

    Both raise IndexTransportError when a request cannot be completed.
    """

    def select(self, query: SelectQuery) -> SelectResult:
        """Run a filtered select and return the raw rows."""
        ...

    def update(self, payload: dict[str, Any], commit: bool = True) -> None:
        """Apply an {"add": [...]} or {"delete": [...]} update."""
        ...

    def close(self) -> None:
        """Release any held connections."""
        ...


# ---------------------------------------------------------------------------
# NOTE INDEX PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class NoteIndex(Protocol):
    """
    Contract for the note index engine as seen by the application layer.

    Implementations:
    - NoteIndexEngine
    """

    def add_or_replace(self, note: Note) -> None:
        """Write the whole document for note, replacing any existing one."""
        ...

    def find_nearby(
        self,
        recipient: UUID,
        latitude: float,
        longitude: float,
        radius_km: float,
        max_rows: int = 10,
    ) -> list[Note]:
        """Non-deleted notes for recipient within radius_km of the point."""
        ...

    def get_by_id(self, note_id: UUID) -> Note:
        """Fetch exactly one note by id."""
        ...

    def purge(self, ids: Iterable[UUID]) -> None:
        """Permanently remove documents by id."""
        ...

    def mark_read(self, note_id: UUID) -> Note:
        """Set read=True on the stored note."""
        ...

    def mark_deleted(self, note_id: UUID) -> Note:
        """Set deleted=True on the stored note."""
        ...
