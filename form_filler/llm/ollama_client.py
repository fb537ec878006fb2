"""Ollama generate API client with conversation context threading."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import httpx
import ollama

from form_filler.exceptions import LLMError
from form_filler.utils.logger import get_logger

GENERATE_PATH = "/api/generate"


@dataclass
class LLMReply:
    """Raw model answer and the context to pass into the next call."""
    text: str
    context: List[int] = field(default_factory=list)


def ollama_host_from_url(url: str) -> str:
    """Return the server root of an Ollama URL, dropping a trailing generate path."""
    host = url.rstrip("/")
    if host.endswith(GENERATE_PATH):
        host = host[: -len(GENERATE_PATH)]
    return host


class OllamaLLMClient:
    """
    Client for the Ollama ``/api/generate`` endpoint.

    Every call returns the model's conversation context; passing it into the
    next call lets the model remember earlier turns (such as the system
    instruction) without resending them.
    """

    def __init__(
        self,
        llm_url: str,
        model: str = "deepseek-r1:8b",
        timeout: Optional[float] = None,
        client: Optional[ollama.Client] = None,
        logger=None,
    ):
        """
        Initialize LLM client.

        Args:
            llm_url: Ollama server URL, with or without the generate path
            model: Model name to generate with
            timeout: Request timeout in seconds (None waits forever)
            client: Pre-built ollama client, mainly for tests
            logger: Logger to use (defaults to the shared logger)
        """
        self.model = model
        self.host = ollama_host_from_url(llm_url)
        self.client = client or ollama.Client(host=self.host, timeout=timeout)
        self.logger = logger or get_logger()

    def initialize(self, system_instruction: str) -> List[int]:
        """
        Send the system instruction with an empty context.

        The acknowledgement text is discarded.

        Returns:
            Conversation context for the first turn

        Raises:
            LLMError: If the call fails
        """
        self.logger.info(f"Sending task instruction to LLM ({self.model})")
        reply = self.generate(system_instruction, context=None)
        self.logger.debug(f"LLM acknowledged instruction: {reply.text[:200]}")
        return reply.context

    def generate(self, prompt: str, context: Optional[Sequence[int]] = None) -> LLMReply:
        """
        Generate a completion for ``prompt`` continuing ``context``.

        Args:
            prompt: Prompt text
            context: Conversation context returned by the previous call

        Returns:
            LLMReply with the raw answer and the updated context

        Raises:
            LLMError: On transport failure, error status, undecodable
                response or an unfinished generation
        """
        self.logger.debug(f"Calling Ollama with model {self.model} (prompt length: {len(prompt)})")

        try:
            response = self.client.generate(
                model=self.model,
                prompt=prompt,
                context=list(context) if context else None,
                stream=False,
            )
        except ollama.ResponseError as e:
            raise LLMError(f"LLM responded with status {e.status_code}: {e.error}") from e
        except (httpx.HTTPError, ConnectionError) as e:
            raise LLMError(f"Failed to send request to LLM: {e}") from e
        except ValueError as e:
            raise LLMError(f"Failed to decode LLM response: {e}") from e

        if not response.done:
            raise LLMError(f"LLM response generation not done: {response.response}")

        return LLMReply(
            text=response.response or "",
            context=list(response.context or []),
        )

    def close(self) -> None:
        """Release the HTTP connection pool of the ollama client."""
        http_client = getattr(self.client, "_client", None)
        if http_client is not None:
            http_client.close()
