"""
Note model for the index.

Single responsibility: Define the structure of the entity that is
synchronized into the search index. The relational store owns the note
text; the index only carries what it needs to answer geo queries.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision; index date fields keep milliseconds only."""
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


@dataclass(frozen=True)
class Note:
    """
    A location-tagged message between two users.

    Ids are supplied by the caller. Flag changes produce a new Note via
    dataclasses.replace; nothing flips a flag back to False.

    time_sent is truncated to millisecond precision on construction, so a
    Note compares equal to itself after a trip through the index.
    """
    id: UUID
    sender: UUID
    recipient: UUID
    latitude: float
    longitude: float
    time_sent: datetime
    read: bool = False
    deleted: bool = False

    def __post_init__(self) -> None:
        if self.time_sent.tzinfo is None or self.time_sent.utcoffset() is None:
            raise ValueError("time_sent must be timezone-aware")
        object.__setattr__(self, "time_sent", truncate_to_millis(self.time_sent))
