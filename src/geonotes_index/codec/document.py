"""
Document codec - Note <-> flat index document.

The field names below are the wire contract with the index schema. Dynamic
field suffixes tell the index the type: _s string, _p point, _dt date,
_b boolean.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping
from uuid import UUID

from geonotes_index.codec.coordinates import decode_coordinates, encode_coordinates
from geonotes_index.core.errors import DocumentDecodeError
from geonotes_index.notes.note import Note, truncate_to_millis

# ---------------------------------------------------------------------------
# INDEX FIELD NAMES
# ---------------------------------------------------------------------------

ID = "id"
SENDER = "sender_s"
RECIPIENT = "recipient_s"
LOCATION = "location_p"
TIME_SENT = "timeSent_dt"
READ = "read_b"
DELETED = "deleted_b"

FIELDS = (ID, SENDER, RECIPIENT, LOCATION, TIME_SENT, READ, DELETED)


# ---------------------------------------------------------------------------
# TIMESTAMPS
# ---------------------------------------------------------------------------


def format_timestamp(value: datetime) -> str:
    """
    RFC 3339 in UTC with a trailing Z, e.g. 2009-11-10T23:00:00Z.

    A non-zero fraction is written as milliseconds (2009-11-10T23:00:00.123Z),
    the precision index date fields store. Anything finer is truncated.
    """
    if value.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    value = truncate_to_millis(value.astimezone(timezone.utc))
    timespec = "milliseconds" if value.microsecond else "seconds"
    return value.isoformat(timespec=timespec).replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; naive timestamps are rejected."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp {text!r} has no timezone")
    return parsed


# ---------------------------------------------------------------------------
# ENCODE / DECODE
# ---------------------------------------------------------------------------


def to_document(note: Note) -> dict[str, Any]:
    """Map a Note to its index document."""
    return {
        ID: str(note.id),
        SENDER: str(note.sender),
        RECIPIENT: str(note.recipient),
        LOCATION: encode_coordinates(note.latitude, note.longitude),
        TIME_SENT: format_timestamp(note.time_sent),
        READ: note.read,
        DELETED: note.deleted,
    }


def _parse_uuid(value: Any) -> UUID:
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return UUID(value)


def _parse_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return value


def _decode_field(doc: Mapping[str, Any], field: str, parse: Callable[[Any], Any]) -> Any:
    try:
        return parse(doc[field])
    except Exception as e:
        raise DocumentDecodeError(field, e) from e


def from_document(doc: Mapping[str, Any]) -> Note:
    """
    Map an index document back to a Note.

    Every field is parsed on its own. The first failure raises
    DocumentDecodeError naming the field; no partial Note is returned.
    """
    note_id = _decode_field(doc, ID, _parse_uuid)
    sender = _decode_field(doc, SENDER, _parse_uuid)
    recipient = _decode_field(doc, RECIPIENT, _parse_uuid)
    latitude, longitude = _decode_field(doc, LOCATION, decode_coordinates)
    return Note(
        id=note_id,
        sender=sender,
        recipient=recipient,
        latitude=latitude,
        longitude=longitude,
        time_sent=_decode_field(doc, TIME_SENT, parse_timestamp),
        read=_decode_field(doc, READ, _parse_bool),
        deleted=_decode_field(doc, DELETED, _parse_bool),
    )
