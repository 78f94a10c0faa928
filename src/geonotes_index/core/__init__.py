"""
Core module - shared protocols and error types.

USAGE:
------
from geonotes_index.core import IndexClient, NotFound

class MyIndexClient:
    '''Implements IndexClient protocol.'''
    ...
"""

from geonotes_index.core.errors import (
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
from geonotes_index.core.protocols import (
    # Protocols
    IndexClient,
    NoteIndex,
    # Data classes
    SelectResult,
)

__all__ = [
    # Protocols
    "IndexClient",
    "NoteIndex",
    # Data classes
    "SelectResult",
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
