"""
Sample notes around Morningside Heights, Manhattan.

Two notes sit within half a kilometre of SEARCH_CENTER and one is down in
Midtown, several kilometres away. Useful for demos and smoke tests against a
real index.
"""

from __future__ import annotations

import concurrent.futures
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable

from geonotes_index.core.errors import NoteIndexError
from geonotes_index.notes.note import Note

if TYPE_CHECKING:
    from geonotes_index.core import NoteIndex

logger = logging.getLogger(__name__)

SEARCH_CENTER = (40.809322, -73.944587)
SEARCH_RADIUS_KM = 0.5

SAMPLE_LOCATIONS = [
    (40.810260, -73.94694),    # nearby
    (40.808612, -73.944443),   # nearby
    (40.758320, -73.988327),   # Midtown
]

SAMPLE_TIME_SENT = datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)

MAX_WORKERS = 4


def get_sample_notes(
    sender: uuid.UUID | None = None,
    recipient: uuid.UUID | None = None,
) -> list[Note]:
    """
    Build one unread note per sample location.

    Ids are fresh uuid4s on every call; sender and recipient are shared by
    all notes so a single nearby search sees them together.
    """
    sender = sender or uuid.uuid4()
    recipient = recipient or uuid.uuid4()
    return [
        Note(
            id=uuid.uuid4(),
            sender=sender,
            recipient=recipient,
            latitude=lat,
            longitude=lon,
            time_sent=SAMPLE_TIME_SENT,
        )
        for lat, lon in SAMPLE_LOCATIONS
    ]


@dataclass
class SeedReport:
    """Outcome of a seed run."""

    written: list[uuid.UUID] = field(default_factory=list)
    failed: list[uuid.UUID] = field(default_factory=list)

    @property
    def all_written(self) -> bool:
        return not self.failed


def seed_index(
    index: NoteIndex,
    notes: Iterable[Note] | None = None,
    max_workers: int = MAX_WORKERS,
) -> SeedReport:
    """
    Write notes into an index, one add_or_replace per note, in parallel.

    There is no ordering between the writes. A failed write is logged and
    recorded on the report; the other writes still go ahead.

    Args:
        index: Any NoteIndex implementation
        notes: Notes to write (get_sample_notes() if not provided)
        max_workers: Thread pool size

    Returns:
        SeedReport listing written and failed note ids
    """
    notes = list(notes) if notes is not None else get_sample_notes()
    report = SeedReport()

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(index.add_or_replace, note): note for note in notes}

        for future in concurrent.futures.as_completed(futures):
            note = futures[future]
            try:
                future.result()
                report.written.append(note.id)
            except NoteIndexError as e:
                logger.warning("Failed to seed note %s: %s", note.id, e)
                report.failed.append(note.id)

    return report
