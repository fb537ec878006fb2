"""Qdrant vector database search client."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

from qdrant_client import QdrantClient

from form_filler.exceptions import ConfigError, SearchError
from form_filler.utils.logger import get_logger

DEFAULT_QDRANT_PORT = 6333

# qdrant-client falls back to a 5 second REST timeout when given None
UNBOUNDED_TIMEOUT_SECONDS = 7 * 24 * 3600


@dataclass
class SearchResult:
    """A single ranked point returned by the vector search."""
    text: str
    score: float
    source: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


def parse_qdrant_url(url: str) -> Tuple[str, int]:
    """
    Split a Qdrant URL into host and port.

    Accepts both ``host:port`` and ``scheme://host:port``.

    Args:
        url: Qdrant URL

    Returns:
        Tuple of (host, port)

    Raises:
        ConfigError: If the URL has no host or an invalid port
    """
    if "://" not in url:
        url = f"http://{url}"

    parts = urlsplit(url)
    try:
        port = parts.port
    except ValueError as e:
        raise ConfigError(f"Invalid port number in Qdrant URL: {url}") from e

    if not parts.hostname:
        raise ConfigError(f"Invalid Qdrant URL, expected 'host:port': {url}")

    return parts.hostname, port or DEFAULT_QDRANT_PORT


def qdrant_timeout(timeout: Optional[float]) -> int:
    """Convert an optional timeout to the whole seconds qdrant-client expects."""
    if timeout is None:
        return UNBOUNDED_TIMEOUT_SECONDS
    return max(1, math.ceil(timeout))


class QdrantSearchClient:
    """Runs similarity queries against a Qdrant collection."""

    def __init__(
        self,
        host: str,
        port: int,
        collection_name: str,
        score_threshold: Optional[float] = 0.4,
        top_k: int = 10,
        text_field: str = "text",
        source_field: str = "source",
        timeout: Optional[float] = None,
        client: Optional[QdrantClient] = None,
        logger=None,
    ):
        """
        Initialize the search client.

        Args:
            host: Qdrant host
            port: Qdrant port
            collection_name: Collection to query
            score_threshold: Minimum relevance score (None disables filtering)
            top_k: Maximum number of results per query
            text_field: Payload key holding the snippet text
            source_field: Payload key holding the snippet source label
            timeout: Request timeout in seconds (None waits indefinitely)
            client: Pre-built Qdrant client, mainly for tests
            logger: Logger to use (defaults to the shared logger)
        """
        self.collection_name = collection_name
        self.score_threshold = score_threshold
        self.top_k = top_k
        self.text_field = text_field
        self.source_field = source_field
        self.logger = logger or get_logger()

        if client is None:
            self.logger.info(f"Connecting to Qdrant at {host}:{port}")
            client = QdrantClient(host=host, port=port, timeout=qdrant_timeout(timeout))
        self.client = client

    def search(self, vector: List[float]) -> List[SearchResult]:
        """
        Search the collection for points similar to ``vector``.

        Points scoring below the threshold are dropped, whether or not the
        server already filtered them. An empty list means nothing relevant
        was found.

        Args:
            vector: Query embedding

        Returns:
            Results ordered by descending score

        Raises:
            SearchError: If the query itself fails
        """
        self.logger.debug(
            f"Querying '{self.collection_name}' "
            f"(top_k={self.top_k}, threshold={self.score_threshold})"
        )

        try:
            points = self.client.query_points(
                collection_name=self.collection_name,
                query=vector,
                limit=self.top_k,
                score_threshold=self.score_threshold,
                with_payload=True,
            ).points
        except Exception as e:
            raise SearchError(f"Qdrant query failed: {e}") from e

        results = []
        for point in points:
            if self.score_threshold is not None and point.score < self.score_threshold:
                continue

            payload = point.payload or {}
            source = payload.get(self.source_field)
            results.append(SearchResult(
                text=str(payload.get(self.text_field) or ""),
                score=point.score,
                source=str(source) if source is not None else None,
                payload=payload,
            ))

        self.logger.debug(f"Found {len(results)} results")

        return results

    def close(self) -> None:
        """Close the underlying Qdrant client."""
        self.client.close()
