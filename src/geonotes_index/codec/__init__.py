"""
Codec module - translating between Notes and index documents.

This module provides:
- Coordinate codec: "<lat>,<lon>" field values
- Document codec: Note <-> flat field/value dict
- Result decoder: best-effort decoding of raw result rows
"""

from geonotes_index.codec.coordinates import (
    format_coordinate,
    encode_coordinates,
    decode_coordinates,
)
from geonotes_index.codec.document import (
    ID,
    SENDER,
    RECIPIENT,
    LOCATION,
    TIME_SENT,
    READ,
    DELETED,
    FIELDS,
    format_timestamp,
    parse_timestamp,
    to_document,
    from_document,
)
from geonotes_index.codec.results import decode_results

__all__ = [
    # Coordinates
    "format_coordinate",
    "encode_coordinates",
    "decode_coordinates",
    # Field names
    "ID",
    "SENDER",
    "RECIPIENT",
    "LOCATION",
    "TIME_SENT",
    "READ",
    "DELETED",
    "FIELDS",
    # Documents
    "format_timestamp",
    "parse_timestamp",
    "to_document",
    "from_document",
    # Results
    "decode_results",
]
