"""HTTP client for the text embedding API."""

from typing import List, Optional

import httpx

from form_filler.exceptions import EmbeddingError
from form_filler.utils.logger import get_logger


class EmbeddingClient:
    """
    Client for the embedding service.

    The service takes ``{"texts": [...]}`` and answers with
    ``{"vectors": [[...], ...]}``, one vector per input text.
    """

    def __init__(
        self,
        api_url: str,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        logger=None,
    ):
        """
        Initialize embedding client.

        Args:
            api_url: Full URL of the embedding endpoint
            timeout: Request timeout in seconds (None waits forever)
            http_client: Pre-built httpx client, mainly for tests
            logger: Logger to use (defaults to the shared logger)
        """
        self.api_url = api_url
        self.client = http_client or httpx.Client(timeout=timeout)
        self.logger = logger or get_logger()

    def embed(self, text: str) -> List[float]:
        """
        Generate the embedding of a single text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector

        Raises:
            EmbeddingError: On transport failure, error status, bad payload
                or an empty vector list
        """
        self.logger.debug(f"Generating embedding for text (length: {len(text)})")

        try:
            response = self.client.post(self.api_url, json={"texts": [text]})
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise EmbeddingError(f"Failed to reach embedding API: {e}") from e

        try:
            vectors = response.json()["vectors"]
        except (ValueError, KeyError, TypeError) as e:
            raise EmbeddingError(f"Invalid embedding response: {e}") from e

        if not isinstance(vectors, list):
            raise EmbeddingError(f"Invalid embedding response: 'vectors' is {type(vectors).__name__}")
        if not vectors or not vectors[0]:
            raise EmbeddingError("No embedding returned")

        embedding = vectors[0]
        if not isinstance(embedding, list) or not all(
            isinstance(value, (int, float)) and not isinstance(value, bool) for value in embedding
        ):
            raise EmbeddingError("Invalid embedding response: first vector is not a list of numbers")
        self.logger.debug(f"Successfully generated embedding (size: {len(embedding)})")

        return embedding

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()
