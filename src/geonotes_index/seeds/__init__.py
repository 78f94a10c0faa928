"""
Seed data for the note index.

Sample notes at fixed Manhattan coordinates plus a parallel bulk loader
that works with any NoteIndex implementation.
"""

from geonotes_index.seeds.sample_notes import (
    SAMPLE_LOCATIONS,
    SAMPLE_TIME_SENT,
    SEARCH_CENTER,
    SEARCH_RADIUS_KM,
    SeedReport,
    get_sample_notes,
    seed_index,
)

__all__ = [
    "SAMPLE_LOCATIONS",
    "SAMPLE_TIME_SENT",
    "SEARCH_CENTER",
    "SEARCH_RADIUS_KM",
    "SeedReport",
    "get_sample_notes",
    "seed_index",
]
