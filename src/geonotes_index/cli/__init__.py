"""
CLI module - unified command-line interface.

Provides entry points for every note index operation plus seeding.
"""

from geonotes_index.cli.commands import (
    main,
    run_add_cli,
    run_get_cli,
    run_nearby_cli,
    run_mark_read_cli,
    run_mark_deleted_cli,
    run_purge_cli,
    run_seed_cli,
)

__all__ = [
    "main",
    "run_add_cli",
    "run_get_cli",
    "run_nearby_cli",
    "run_mark_read_cli",
    "run_mark_deleted_cli",
    "run_purge_cli",
    "run_seed_cli",
]
