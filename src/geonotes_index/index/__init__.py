"""
Index module - talking to the search index.

This module provides:
- NoteIndexEngine: the engine callers use
- SolrConfig: Configuration for the Solr client
- SolrIndexClient: Solr over HTTP (production)
- InMemoryIndexClient: Testing/development client
- get_index_client(): Factory function
"""

from geonotes_index.index.client import (
    SolrConfig,
    SolrIndexClient,
    InMemoryIndexClient,
    get_index_client,
)
from geonotes_index.index.engine import NoteIndexEngine

__all__ = [
    # Engine
    "NoteIndexEngine",
    # Config
    "SolrConfig",
    # Implementations
    "SolrIndexClient",
    "InMemoryIndexClient",
    # Factory
    "get_index_client",
]
