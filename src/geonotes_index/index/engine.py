"""
Note index engine - the component callers use.

Orchestrates the codecs and query builder against an injected IndexClient:
add_or_replace, find_nearby, get_by_id, purge, mark_read, mark_deleted.

The engine holds no mutable state of its own, so one instance can be shared
by any number of threads. All state lives in the index.

MUTATIONS:
----------
The index has no partial update, so mark_read/mark_deleted fetch the whole
document, flip one flag and write the whole document back. Two concurrent
mutations of the same note are not serialized: the later write wins and the
other flag change is lost. There is no version check on the rewrite.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable
from uuid import UUID

from geonotes_index.codec.results import decode_results
from geonotes_index.core.errors import (
    AmbiguousId,
    DeleteFailed,
    IndexTransportError,
    IndexWriteError,
    MutationFetchFailed,
    NotFound,
)
from geonotes_index.core.protocols import IndexClient
from geonotes_index.notes.note import Note
from geonotes_index.observability.attributes import (
    INDEX_PURGE_COUNT,
    INDEX_RESULT_COUNT,
    INDEX_RESULT_DROPPED,
    nearby_attributes,
    note_attributes,
)
from geonotes_index.observability.tracer import TracerProtocol, get_tracer
from geonotes_index.query.builder import (
    add_payload,
    by_id_query,
    delete_payload,
    nearby_query,
)

logger = logging.getLogger(__name__)


class NoteIndexEngine:
    """
    Geospatial note index over an injected IndexClient.

    Dependencies are INJECTED, not created internally. Construct once and
    pass the instance to whoever needs it.
    """

    def __init__(
        self,
        client: IndexClient,
        tracer: TracerProtocol | None = None,
    ):
        """
        Initialize with injected dependencies.

        Args:
            client: Index client (Solr, in-memory, or any IndexClient)
            tracer: Tracer for spans (global tracer if not provided)
        """
        self._client = client
        self._tracer = tracer or get_tracer()

    @property
    def client(self) -> IndexClient:
        return self._client

    # -----------------------------------------------------------------------
    # WRITES
    # -----------------------------------------------------------------------

    def add_or_replace(self, note: Note) -> None:
        """
        Write the full document for note, replacing any document with its id.

        Raises:
            IndexWriteError: the index rejected or never received the write.
        """
        attrs = note_attributes(note.id)
        with self._tracer.start_span("add_or_replace", attributes=attrs) as span:
            try:
                self._client.update(add_payload(note), commit=True)
            except IndexTransportError as e:
                logger.error("Failed to add note %s to index: %s", note.id, e.cause)
                span.fail(e)
                raise IndexWriteError(note.id, e.cause) from e

            logger.debug("Indexed note %s", note.id)
            span.ok()

    def purge(self, ids: Iterable[UUID]) -> None:
        """
        Permanently remove the documents with the given ids.

        An empty id list is a no-op and never reaches the index.

        Raises:
            DeleteFailed: the delete failed as a whole.
        """
        ids = list(ids)
        if not ids:
            return

        with self._tracer.start_span(
            "purge", attributes={INDEX_PURGE_COUNT: len(ids)}
        ) as span:
            try:
                self._client.update(delete_payload(ids), commit=True)
            except IndexTransportError as e:
                logger.error("Failed to purge %d notes: %s", len(ids), e.cause)
                span.fail(e)
                raise DeleteFailed(ids, e.cause) from e

            logger.debug("Purged %d notes", len(ids))
            span.ok()

    # -----------------------------------------------------------------------
    # READS
    # -----------------------------------------------------------------------

    def get_by_id(self, note_id: UUID) -> Note:
        """
        Fetch exactly one note.

        Raises:
            NotFound: no document has this id, or the only one is undecodable.
            AmbiguousId: more than one document has this id.
            IndexTransportError: the select failed.
        """
        attrs = note_attributes(note_id)
        with self._tracer.start_span("get_by_id", attributes=attrs) as span:
            result = self._client.select(by_id_query(note_id))

            count = max(result.num_found, len(result.docs))
            span.set_attribute(INDEX_RESULT_COUNT, count)
            if count == 0:
                raise NotFound(note_id)
            if count > 1:
                logger.warning("Index holds %d documents for id %s", count, note_id)
                raise AmbiguousId(note_id, count)

            notes = decode_results(result.docs)
            if not notes:
                raise NotFound(note_id)

            span.ok()
            return notes[0]

    def find_nearby(
        self,
        recipient: UUID,
        latitude: float,
        longitude: float,
        radius_km: float,
        max_rows: int = 10,
    ) -> list[Note]:
        """
        Non-deleted notes for recipient within radius_km of the point.

        At most max_rows notes are returned; further matches are silently
        dropped (no pagination). Rows that fail to decode are skipped, so the
        result may be shorter than what the index matched.

        Raises:
            IndexTransportError: the select failed.
        """
        query = nearby_query(recipient, latitude, longitude, radius_km, max_rows)
        attrs = nearby_attributes(recipient, latitude, longitude, radius_km, max_rows)
        with self._tracer.start_span("find_nearby", attributes=attrs) as span:
            result = self._client.select(query)
            notes = decode_results(result.docs)

            span.set_attribute(INDEX_RESULT_COUNT, len(notes))
            span.set_attribute(INDEX_RESULT_DROPPED, len(result.docs) - len(notes))
            logger.debug(
                "find_nearby for %s returned %d of %d matches",
                recipient,
                len(notes),
                result.num_found,
            )
            span.ok()
            return notes

    # -----------------------------------------------------------------------
    # FLAG MUTATIONS (fetch -> mutate -> rewrite)
    # -----------------------------------------------------------------------

    def mark_read(self, note_id: UUID) -> Note:
        """Set read=True and return the rewritten note."""
        return self._set_flag(note_id, "read")

    def mark_deleted(self, note_id: UUID) -> Note:
        """Soft delete: set deleted=True and return the rewritten note."""
        return self._set_flag(note_id, "deleted")

    def _set_flag(self, note_id: UUID, flag: str) -> Note:
        attrs = note_attributes(note_id, flag=flag)
        with self._tracer.start_span(f"mark_{flag}", attributes=attrs) as span:
            try:
                current = self.get_by_id(note_id)
            except (NotFound, AmbiguousId, IndexTransportError) as e:
                logger.error("Cannot mark note %s %s: %s", note_id, flag, e)
                span.fail(e)
                raise MutationFetchFailed(note_id, e) from e

            updated = replace(current, **{flag: True})
            self.add_or_replace(updated)
            span.ok()
            return updated
