"""
Query builder - the three query shapes plus the write payload.

Stateless and pure: nothing here talks to the index.

Shapes:
1. by_id_query     - id == <id>, one row
2. nearby_query    - recipient == <r> AND NOT deleted AND within radius
3. delete_payload  - bulk delete by id list
plus add_payload for upserts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable
from uuid import UUID

from geonotes_index.codec.document import (
    DELETED,
    FIELDS,
    ID,
    LOCATION,
    RECIPIENT,
    to_document,
)
from geonotes_index.notes.note import Note
from geonotes_index.query.filters import Filter, GeoFilter, TermFilter


@dataclass(frozen=True)
class SelectQuery:
    """A filtered select: every filter must match (logical AND)."""

    filters: tuple[Filter, ...] = field(default_factory=tuple)
    rows: int = 10
    q: str = "*:*"

    def params(self) -> dict[str, Any]:
        """Request parameters for the index's select handler."""
        return {
            "q": self.q,
            "fq": [f.render() for f in self.filters],
            "fl": ",".join(FIELDS),
            "rows": self.rows,
            "wt": "json",
        }

    def matches(self, doc: dict[str, Any]) -> bool:
        return all(f.matches(doc) for f in self.filters)


# ---------------------------------------------------------------------------
# SELECT QUERIES
# ---------------------------------------------------------------------------


def by_id_query(note_id: UUID) -> SelectQuery:
    """Exact-id lookup capped at one row."""
    return SelectQuery(filters=(TermFilter(ID, str(note_id)),), rows=1)


def nearby_query(
    recipient: UUID,
    latitude: float,
    longitude: float,
    radius_km: float,
    max_rows: int,
) -> SelectQuery:
    """
    Non-deleted notes for recipient within radius_km of the point.

    Results beyond max_rows are dropped by the index. There is no cursor;
    callers that need more rows must ask for a larger cap.
    """
    if radius_km < 0:
        raise ValueError(f"radius_km must be >= 0, got {radius_km}")
    if max_rows < 0:
        raise ValueError(f"max_rows must be >= 0, got {max_rows}")

    return SelectQuery(
        filters=(
            TermFilter(RECIPIENT, str(recipient)),
            TermFilter(DELETED, True, negate=True),
            GeoFilter(LOCATION, latitude, longitude, radius_km),
        ),
        rows=max_rows,
    )


# ---------------------------------------------------------------------------
# UPDATE PAYLOADS
# ---------------------------------------------------------------------------


def add_payload(note: Note) -> dict[str, Any]:
    """Upsert envelope carrying the full document."""
    return {"add": [to_document(note)]}


def delete_payload(ids: Iterable[UUID]) -> dict[str, Any]:
    """Bulk delete envelope."""
    return {"delete": [str(note_id) for note_id in ids]}
