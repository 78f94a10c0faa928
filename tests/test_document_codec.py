"""
Unit Tests for the Document Codec

Tests the Note <-> index document mapping, including timestamps and
per-field decode failures.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from geonotes_index.codec.document import (
    DELETED,
    ID,
    LOCATION,
    READ,
    RECIPIENT,
    SENDER,
    TIME_SENT,
    format_timestamp,
    from_document,
    parse_timestamp,
    to_document,
)
from geonotes_index.core.errors import DocumentDecodeError, MalformedCoordinate
from geonotes_index.notes.note import Note


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def note():
    """A note with fixed field values."""
    return Note(
        id=uuid.UUID("6f1c7a3e-2b1d-4c8e-9a5f-0d3b2e1f4a6c"),
        sender=uuid.UUID("11111111-2222-3333-4444-555555555555"),
        recipient=uuid.UUID("aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"),
        latitude=42.4,
        longitude=69.9,
        time_sent=datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc),
        read=True,
        deleted=False,
    )


# ---------------------------------------------------------------------------
# NOTE MODEL
# ---------------------------------------------------------------------------


class TestNote:
    """Test the Note dataclass."""

    def test_flags_default_false(self, note):
        fresh = Note(
            id=note.id,
            sender=note.sender,
            recipient=note.recipient,
            latitude=note.latitude,
            longitude=note.longitude,
            time_sent=note.time_sent,
        )

        assert fresh.read is False
        assert fresh.deleted is False

    def test_naive_time_sent_rejected(self, note):
        """time_sent must carry a timezone."""
        with pytest.raises(ValueError):
            Note(
                id=note.id,
                sender=note.sender,
                recipient=note.recipient,
                latitude=1.0,
                longitude=2.0,
                time_sent=datetime(2009, 11, 10, 23, 0, 0),
            )

    def test_time_sent_truncated_to_milliseconds(self, note):
        precise = Note(
            id=note.id,
            sender=note.sender,
            recipient=note.recipient,
            latitude=1.0,
            longitude=2.0,
            time_sent=datetime(2009, 11, 10, 23, 0, 0, 123456, tzinfo=timezone.utc),
        )

        assert precise.time_sent == datetime(2009, 11, 10, 23, 0, 0, 123000, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# TIMESTAMPS
# ---------------------------------------------------------------------------


class TestTimestamps:
    """Test RFC 3339 formatting and parsing."""

    def test_format_utc_uses_z(self):
        value = datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2009-11-10T23:00:00Z"

    def test_format_converts_offset_to_utc(self):
        value = datetime(2009, 11, 11, 1, 30, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2009-11-10T23:30:00Z"

    def test_format_writes_milliseconds(self):
        value = datetime(2009, 11, 10, 23, 0, 0, 123000, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2009-11-10T23:00:00.123Z"

    def test_format_truncates_below_milliseconds(self):
        value = datetime(2009, 11, 10, 23, 0, 0, 123999, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2009-11-10T23:00:00.123Z"

    def test_format_sub_millisecond_only_fraction(self):
        value = datetime(2009, 11, 10, 23, 0, 0, 999, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2009-11-10T23:00:00Z"

    def test_parse_milliseconds(self):
        parsed = parse_timestamp("2009-11-10T23:00:00.123Z")
        assert parsed == datetime(2009, 11, 10, 23, 0, 0, 123000, tzinfo=timezone.utc)

    def test_format_rejects_naive(self):
        with pytest.raises(ValueError):
            format_timestamp(datetime(2009, 11, 10))

    def test_parse_z_suffix(self):
        parsed = parse_timestamp("2009-11-10T23:00:00Z")
        assert parsed == datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)

    def test_parse_explicit_offset(self):
        parsed = parse_timestamp("2009-11-10T18:00:00-05:00")
        assert parsed == datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)

    def test_parse_rejects_naive(self):
        with pytest.raises(ValueError):
            parse_timestamp("2009-11-10T23:00:00")


# ---------------------------------------------------------------------------
# ENCODE
# ---------------------------------------------------------------------------


class TestToDocument:
    """Test Note -> document mapping."""

    def test_field_mapping(self, note):
        doc = to_document(note)

        assert doc == {
            ID: "6f1c7a3e-2b1d-4c8e-9a5f-0d3b2e1f4a6c",
            SENDER: "11111111-2222-3333-4444-555555555555",
            RECIPIENT: "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee",
            LOCATION: "42.4,69.9",
            TIME_SENT: "2009-11-10T23:00:00Z",
            READ: True,
            DELETED: False,
        }

    def test_field_names_are_wire_contract(self):
        assert (ID, SENDER, RECIPIENT, LOCATION, TIME_SENT, READ, DELETED) == (
            "id", "sender_s", "recipient_s", "location_p", "timeSent_dt", "read_b", "deleted_b",
        )


# ---------------------------------------------------------------------------
# DECODE
# ---------------------------------------------------------------------------


class TestFromDocument:
    """Test document -> Note mapping."""

    def test_round_trip(self, note):
        assert from_document(to_document(note)) == note

    def test_round_trip_with_offset_time(self, note):
        """Non-UTC times come back as the same instant."""
        shifted = Note(
            id=note.id,
            sender=note.sender,
            recipient=note.recipient,
            latitude=40.810260,
            longitude=-73.94694,
            time_sent=datetime(2020, 3, 1, 8, 15, 30, 500, tzinfo=timezone(timedelta(hours=-5))),
            read=False,
            deleted=True,
        )

        assert from_document(to_document(shifted)) == shifted

    def test_ignores_extra_fields(self, note):
        doc = to_document(note)
        doc["_version_"] = 1790000000000000000

        assert from_document(doc) == note

    @pytest.mark.parametrize("field", [ID, SENDER, RECIPIENT, LOCATION, TIME_SENT, READ, DELETED])
    def test_missing_field(self, note, field):
        doc = to_document(note)
        del doc[field]

        with pytest.raises(DocumentDecodeError) as exc_info:
            from_document(doc)

        assert exc_info.value.field == field

    def test_bad_uuid(self, note):
        doc = to_document(note)
        doc[SENDER] = "not-a-uuid"

        with pytest.raises(DocumentDecodeError) as exc_info:
            from_document(doc)

        assert exc_info.value.field == SENDER

    def test_bad_coordinates_cause(self, note):
        doc = to_document(note)
        doc[LOCATION] = "42.4"

        with pytest.raises(DocumentDecodeError) as exc_info:
            from_document(doc)

        assert exc_info.value.field == LOCATION
        assert isinstance(exc_info.value.cause, MalformedCoordinate)

    def test_boolean_must_be_boolean(self, note):
        """A string "true" is not accepted for a boolean field."""
        doc = to_document(note)
        doc[READ] = "true"

        with pytest.raises(DocumentDecodeError) as exc_info:
            from_document(doc)

        assert exc_info.value.field == READ

    def test_naive_timestamp(self, note):
        doc = to_document(note)
        doc[TIME_SENT] = "2009-11-10T23:00:00"

        with pytest.raises(DocumentDecodeError) as exc_info:
            from_document(doc)

        assert exc_info.value.field == TIME_SENT
