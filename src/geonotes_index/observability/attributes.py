"""
Semantic Conventions for Span Attributes

Attribute keys for note index spans, plus helpers that build the
attribute dicts passed to start_span().
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

# ---------------------------------------------------------------------------
# NOTE NAMESPACE
# ---------------------------------------------------------------------------

NOTE_ID = "note.id"
NOTE_RECIPIENT = "note.recipient"
NOTE_FLAG = "note.flag"  # "read" | "deleted"


# ---------------------------------------------------------------------------
# GEO NAMESPACE
# ---------------------------------------------------------------------------

GEO_LATITUDE = "geo.latitude"
GEO_LONGITUDE = "geo.longitude"
GEO_RADIUS_KM = "geo.radius_km"


# ---------------------------------------------------------------------------
# INDEX NAMESPACE
# ---------------------------------------------------------------------------

INDEX_OPERATION = "index.operation"
INDEX_ROWS_MAX = "index.rows.max"
INDEX_RESULT_COUNT = "index.result.count"
INDEX_RESULT_DROPPED = "index.result.dropped"
INDEX_PURGE_COUNT = "index.purge.count"
# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------
# index.operation is added by the tracer from the operation name.


def note_attributes(note_id: UUID, flag: str | None = None) -> dict[str, Any]:
    """Attributes for single-note operations."""
    attrs: dict[str, Any] = {NOTE_ID: str(note_id)}
    if flag is not None:
        attrs[NOTE_FLAG] = flag
    return attrs


def nearby_attributes(
    recipient: UUID,
    latitude: float,
    longitude: float,
    radius_km: float,
    max_rows: int,
) -> dict[str, Any]:
    """Attributes for a nearby search."""
    return {
        NOTE_RECIPIENT: str(recipient),
        GEO_LATITUDE: latitude,
        GEO_LONGITUDE: longitude,
        GEO_RADIUS_KM: radius_km,
        INDEX_ROWS_MAX: max_rows,
    }
