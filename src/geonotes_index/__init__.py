"""
geonotes_index - geospatial index of location-tagged notes.

USAGE:
------
from geonotes_index import NoteIndexEngine, get_index_client

engine = NoteIndexEngine(get_index_client(use_solr=True))
engine.add_or_replace(note)
nearby = engine.find_nearby(recipient, 40.8093, -73.9446, radius_km=0.5)
"""

from geonotes_index.core import (
    IndexClient,
    NoteIndex,
    SelectResult,
    NoteIndexError,
    NotFound,
    AmbiguousId,
    MalformedCoordinate,
    DocumentDecodeError,
    IndexTransportError,
    IndexWriteError,
    DeleteFailed,
    MutationFetchFailed,
)
from geonotes_index.notes import Note
from geonotes_index.index import (
    NoteIndexEngine,
    SolrConfig,
    SolrIndexClient,
    InMemoryIndexClient,
    get_index_client,
)

__all__ = [
    # Engine
    "NoteIndexEngine",
    "Note",
    # Clients
    "IndexClient",
    "NoteIndex",
    "SelectResult",
    "SolrConfig",
    "SolrIndexClient",
    "InMemoryIndexClient",
    "get_index_client",
    # Errors
    "NoteIndexError",
    "NotFound",
    "AmbiguousId",
    "MalformedCoordinate",
    "DocumentDecodeError",
    "IndexTransportError",
    "IndexWriteError",
    "DeleteFailed",
    "MutationFetchFailed",
]
