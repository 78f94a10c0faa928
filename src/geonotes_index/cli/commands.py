"""
CLI commands - thin entry points over the note index engine.

Each command follows a consistent pattern:
1. Parse arguments
2. Build the engine from the environment
3. Run one engine operation
4. Print results as JSON
5. Return exit code
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from dotenv import load_dotenv

from geonotes_index.codec.document import parse_timestamp, to_document
from geonotes_index.core.errors import NoteIndexError
from geonotes_index.index.client import get_index_client
from geonotes_index.index.engine import NoteIndexEngine
from geonotes_index.notes.note import Note
from geonotes_index.observability import init_tracing, shutdown_tracing


def _load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def _use_solr() -> bool:
    return os.environ.get("GEONOTES_USE_SOLR", "true").lower() in ("true", "1", "yes")


def _build_engine() -> NoteIndexEngine:
    """Wire an engine from environment configuration."""
    init_tracing()
    return NoteIndexEngine(get_index_client(use_solr=_use_solr()))


@contextmanager
def _open_engine() -> Iterator[NoteIndexEngine]:
    """Engine for one command; its index client is closed on exit."""
    engine = _build_engine()
    try:
        yield engine
    finally:
        engine.client.close()


def _print_notes(notes: list[Note]) -> None:
    print(json.dumps([to_document(note) for note in notes], indent=2))


def _print_note(note: Note) -> None:
    print(json.dumps(to_document(note), indent=2))


# ---------------------------------------------------------------------------
# COMMANDS
# ---------------------------------------------------------------------------


def run_add_cli() -> int:
    """CLI entry point for adding (or replacing) a note."""
    parser = argparse.ArgumentParser(description="Add or replace a note in the index")
    parser.add_argument("--id", type=uuid.UUID, default=None, help="Note id (new uuid4 if omitted)")
    parser.add_argument("--sender", type=uuid.UUID, required=True)
    parser.add_argument("--recipient", type=uuid.UUID, required=True)
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="Longitude in degrees")
    parser.add_argument("--time-sent", type=parse_timestamp, default=None, help="RFC 3339 timestamp (now if omitted)")
    parser.add_argument("--read", action="store_true", help="Store as already read")
    parser.add_argument("--deleted", action="store_true", help="Store as soft-deleted")
    args = parser.parse_args()

    note = Note(
        id=args.id or uuid.uuid4(),
        sender=args.sender,
        recipient=args.recipient,
        latitude=args.lat,
        longitude=args.lon,
        time_sent=args.time_sent or datetime.now(timezone.utc),
        read=args.read,
        deleted=args.deleted,
    )

    with _open_engine() as engine:
        engine.add_or_replace(note)
    _print_note(note)
    return 0


def run_get_cli() -> int:
    """CLI entry point for fetching a note by id."""
    parser = argparse.ArgumentParser(description="Fetch a note by id")
    parser.add_argument("id", type=uuid.UUID)
    args = parser.parse_args()

    with _open_engine() as engine:
        _print_note(engine.get_by_id(args.id))
    return 0


def run_nearby_cli() -> int:
    """CLI entry point for a nearby search."""
    parser = argparse.ArgumentParser(description="Find a recipient's notes near a point")
    parser.add_argument("--recipient", type=uuid.UUID, required=True)
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="Longitude in degrees")
    parser.add_argument("--radius-km", type=float, default=0.5, help="Search radius (default: 0.5)")
    parser.add_argument("--max-rows", type=int, default=10, help="Result cap (default: 10)")
    args = parser.parse_args()

    with _open_engine() as engine:
        notes = engine.find_nearby(
            args.recipient, args.lat, args.lon, args.radius_km, args.max_rows
        )
    _print_notes(notes)
    return 0


def run_mark_read_cli() -> int:
    """CLI entry point for marking a note read."""
    parser = argparse.ArgumentParser(description="Mark a note as read")
    parser.add_argument("id", type=uuid.UUID)
    args = parser.parse_args()

    with _open_engine() as engine:
        _print_note(engine.mark_read(args.id))
    return 0


def run_mark_deleted_cli() -> int:
    """CLI entry point for soft-deleting a note."""
    parser = argparse.ArgumentParser(description="Mark a note as deleted")
    parser.add_argument("id", type=uuid.UUID)
    args = parser.parse_args()

    with _open_engine() as engine:
        _print_note(engine.mark_deleted(args.id))
    return 0


def run_purge_cli() -> int:
    """CLI entry point for permanently removing notes."""
    parser = argparse.ArgumentParser(description="Permanently remove notes by id")
    parser.add_argument("ids", type=uuid.UUID, nargs="*")
    args = parser.parse_args()

    with _open_engine() as engine:
        engine.purge(args.ids)
    print(f"Purged {len(args.ids)} note(s)")
    return 0


def run_seed_cli() -> int:
    """CLI entry point for loading the sample notes."""
    from geonotes_index.seeds import get_sample_notes, seed_index

    parser = argparse.ArgumentParser(description="Load sample notes into the index")
    parser.add_argument("--sender", type=uuid.UUID, default=None)
    parser.add_argument("--recipient", type=uuid.UUID, default=None)
    args = parser.parse_args()

    notes = get_sample_notes(sender=args.sender, recipient=args.recipient)
    with _open_engine() as engine:
        report = seed_index(engine, notes)

    print(f"Seeded {len(report.written)}/{len(notes)} notes for recipient {notes[0].recipient}")
    for note_id in report.failed:
        print(f"  [FAIL] {note_id}")
    return 0 if report.all_written else 1


def main() -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        geonotes-index add --sender S --recipient R --lat 40.8 --lon -73.9
        geonotes-index get ID
        geonotes-index nearby --recipient R --lat 40.8 --lon -73.9
        geonotes-index mark-read ID
        geonotes-index mark-deleted ID
        geonotes-index purge ID [ID ...]
        geonotes-index seed
    """
    _load_env()

    parser = argparse.ArgumentParser(
        description="Geospatial note index",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  add           Add or replace a note
  get           Fetch a note by id
  nearby        Find a recipient's notes near a point
  mark-read     Mark a note as read
  mark-deleted  Soft-delete a note
  purge         Permanently remove notes
  seed          Load the sample notes

Environment:
  GEONOTES_USE_SOLR   Use Solr (default: true); false uses an in-memory index
  SOLR_HOST, SOLR_PORT, SOLR_CORE, SOLR_TIMEOUT
        """,
    )

    parser.add_argument(
        "command",
        choices=["add", "get", "nearby", "mark-read", "mark-deleted", "purge", "seed"],
        help="Operation to run",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    # Parse just the command first
    args, remaining = parser.parse_known_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "add": run_add_cli,
        "get": run_get_cli,
        "nearby": run_nearby_cli,
        "mark-read": run_mark_read_cli,
        "mark-deleted": run_mark_deleted_cli,
        "purge": run_purge_cli,
        "seed": run_seed_cli,
    }

    # Re-inject remaining args for the subcommand
    sys.argv = [sys.argv[0]] + remaining

    try:
        return commands[args.command]()
    except NoteIndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    finally:
        # Flush spans still queued in the batch processor
        shutdown_tracing()


if __name__ == "__main__":
    sys.exit(main())
