"""
Result decoder - raw index rows to Notes, one row at a time.

A row that fails to decode is logged and dropped; the rest of the result
set is still returned. Callers must not assume len(output) == len(rows).
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from geonotes_index.codec.document import ID, from_document
from geonotes_index.core.errors import DocumentDecodeError
from geonotes_index.notes.note import Note

logger = logging.getLogger(__name__)


def decode_results(rows: Iterable[Mapping[str, Any]]) -> list[Note]:
    """Decode every row that can be decoded, skipping the rest."""
    notes: list[Note] = []
    for position, row in enumerate(rows):
        try:
            notes.append(from_document(row))
        except DocumentDecodeError as e:
            logger.warning(
                "Skipping index row %d (id=%r): field %s: %s",
                position,
                row.get(ID),
                e.field,
                e.cause,
            )
    return notes
