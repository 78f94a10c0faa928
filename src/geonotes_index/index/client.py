"""
Index client implementations.

Pattern: Protocol -> Production impl -> Test double -> Factory

This module contains:
1. SolrConfig - Configuration dataclass
2. SolrIndexClient - Solr over HTTP (production)
3. InMemoryIndexClient - In-memory index (testing/development)
4. get_index_client() - Factory function

Both clients implement core.protocols.IndexClient. The engine never knows
which one it is talking to.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geonotes_index.codec.document import ID
from geonotes_index.core.errors import IndexTransportError
from geonotes_index.core.protocols import SelectResult

if TYPE_CHECKING:
    from geonotes_index.query.builder import SelectQuery

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------


@dataclass
class SolrConfig:
    """Configuration for the Solr index client.

    Environment Variables:
        SOLR_SCHEME: http or https (default: http)
        SOLR_HOST: Solr host (default: localhost)
        SOLR_PORT: Solr port (default: 8983)
        SOLR_CORE: Core/collection holding the notes (default: geonotes)
        SOLR_TIMEOUT: Per-request timeout in seconds (default: 10)
    """

    host: str = "localhost"
    port: int = 8983
    core: str = "geonotes"
    timeout_s: float = 10.0
    scheme: str = "http"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}/solr/{self.core}"

    @classmethod
    def from_env(cls) -> "SolrConfig":
        """Load config from environment variables."""
        return cls(
            host=os.environ.get("SOLR_HOST", "localhost"),
            port=int(os.environ.get("SOLR_PORT", "8983")),
            core=os.environ.get("SOLR_CORE", "geonotes"),
            timeout_s=float(os.environ.get("SOLR_TIMEOUT", "10")),
            scheme=os.environ.get("SOLR_SCHEME", "http"),
        )


# ---------------------------------------------------------------------------
# SOLR RESPONSE SCHEMAS
# ---------------------------------------------------------------------------


class SolrResultSet(BaseModel):
    """The "response" block of a select response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    num_found: int = Field(alias="numFound")
    start: int = 0
    docs: list[dict[str, Any]] = Field(default_factory=list)


class SolrSelectResponse(BaseModel):
    """Top-level select response; only the result set is used."""

    model_config = ConfigDict(extra="ignore")

    response: SolrResultSet


# ---------------------------------------------------------------------------
# SOLR CLIENT (Production)
# ---------------------------------------------------------------------------


class SolrIndexClient:
    """
    Solr index client over HTTP.

    The requests session is INJECTABLE so tests can substitute a mock and
    callers can share a tuned connection pool. Retries and auth belong on the
    session, not here.
    """

    def __init__(
        self,
        config: SolrConfig,
        session: requests.Session | None = None,
    ):
        self.config = config
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def select(self, query: SelectQuery) -> SelectResult:
        """Run a select and validate the response shape."""
        url = f"{self.config.base_url}/select"
        try:
            response = self._session.get(
                url, params=query.params(), timeout=self.config.timeout_s
            )
            response.raise_for_status()
            parsed = SolrSelectResponse.model_validate(response.json())
        except (requests.RequestException, ValueError, ValidationError) as e:
            logger.error("Select against %s failed: %s", url, e)
            raise IndexTransportError(e) from e

        return SelectResult(docs=parsed.response.docs, num_found=parsed.response.num_found)

    def update(self, payload: dict[str, Any], commit: bool = True) -> None:
        """Post an update envelope, committing synchronously by default."""
        url = f"{self.config.base_url}/update"
        try:
            response = self._session.post(
                url,
                params={"commit": "true" if commit else "false", "wt": "json"},
                json=payload,
                timeout=self.config.timeout_s,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Update against %s failed: %s", url, e)
            raise IndexTransportError(e) from e


# ---------------------------------------------------------------------------
# IN-MEMORY CLIENT (Testing/Development)
# ---------------------------------------------------------------------------


class InMemoryIndexClient:
    """
    In-memory index for development/testing.

    Implements the same interface as SolrIndexClient but doesn't require a
    server. Filters are evaluated with each filter's matches(); documents keep
    insertion order. Safe to share between threads.
    """

    def __init__(self) -> None:
        self._documents: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def close(self) -> None:
        """No-op for in-memory client."""
        pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def load_raw_documents(self, docs: list[dict[str, Any]]) -> None:
        """
        Append raw documents as-is, skipping id uniqueness.

        Lets tests stage stale, malformed or duplicated documents the way
        they might exist in a long-lived index.
        """
        with self._lock:
            self._documents.extend(dict(doc) for doc in docs)

    def select(self, query: SelectQuery) -> SelectResult:
        """Filter documents and cap at query.rows."""
        with self._lock:
            matches = [doc for doc in self._documents if query.matches(doc)]
        return SelectResult(
            docs=[dict(doc) for doc in matches[: query.rows]],
            num_found=len(matches),
        )

    def update(self, payload: dict[str, Any], commit: bool = True) -> None:
        """Apply add/delete envelopes. Unknown commands are rejected."""
        unknown = set(payload) - {"add", "delete"}
        if unknown:
            raise IndexTransportError(
                ValueError(f"Unknown update command(s): {sorted(unknown)}")
            )

        with self._lock:
            for doc in payload.get("add", []):
                if ID not in doc:
                    raise IndexTransportError(ValueError("Document is missing an id"))
                self._replace(dict(doc))

            delete_ids = {str(note_id) for note_id in payload.get("delete", [])}
            if delete_ids:
                self._documents = [
                    doc for doc in self._documents if str(doc.get(ID)) not in delete_ids
                ]

    def _replace(self, doc: dict[str, Any]) -> None:
        for i, existing in enumerate(self._documents):
            if existing.get(ID) == doc[ID]:
                self._documents[i] = doc
                return
        self._documents.append(doc)


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_index_client(
    use_solr: bool = False,
    config: SolrConfig | None = None,
    session: requests.Session | None = None,
) -> SolrIndexClient | InMemoryIndexClient:
    """
    Factory function to get the appropriate index client.

    Args:
        use_solr: Use the Solr client (default: False for dev)
        config: Solr configuration (loaded from env if not provided)
        session: Optional requests session for the Solr client

    Returns:
        IndexClient implementation
    """
    if use_solr:
        return SolrIndexClient(config or SolrConfig.from_env(), session=session)
    return InMemoryIndexClient()
