"""Shared fixtures and fakes for the form filler tests."""

from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from loguru import logger

from form_filler.exceptions import EmbeddingError, LLMError, SearchError
from form_filler.llm.ollama_client import LLMReply
from form_filler.vectorstore.qdrant_client import SearchResult

SAMPLE_EMBEDDING = [0.1] * 8


class FakeEmbedder:
    """Embedder returning a fixed vector, failing for selected questions."""

    def __init__(self, fail_on: Optional[List[str]] = None):
        self.fail_on = set(fail_on or [])
        self.calls: List[str] = []
        self._current: Optional[str] = None

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if text in self.fail_on:
            raise EmbeddingError("embedding service unavailable")
        self._current = text
        return SAMPLE_EMBEDDING

    def close(self):
        pass


class FakeSearcher:
    """Searcher answering with results keyed by the last embedded question."""

    def __init__(self, embedder: FakeEmbedder, results: Dict[str, List[SearchResult]],
                 fail_on: Optional[List[str]] = None):
        self.embedder = embedder
        self.results = results
        self.fail_on = set(fail_on or [])

    def search(self, vector: List[float]) -> List[SearchResult]:
        question = self.embedder._current
        if question in self.fail_on:
            raise SearchError("qdrant unavailable")
        return self.results.get(question, [])

    def close(self):
        pass


class FakeLLM:
    """LLM echoing a canned answer per call and growing the context."""

    def __init__(self, answers: Optional[List[str]] = None, fail_on_call: Optional[int] = None):
        self.answers = list(answers or [])
        self.fail_on_call = fail_on_call
        self.instructions: List[str] = []
        self.prompts: List[str] = []
        self.contexts: List[List[int]] = []
        self.closed = False

    def initialize(self, system_instruction: str) -> List[int]:
        self.instructions.append(system_instruction)
        return [1]

    def generate(self, prompt: str, context=None) -> LLMReply:
        self.prompts.append(prompt)
        self.contexts.append(list(context or []))
        if self.fail_on_call is not None and len(self.prompts) == self.fail_on_call:
            raise LLMError("LLM responded with status 500: internal error")
        text = self.answers.pop(0) if self.answers else f"Answer {len(self.prompts)}"
        return LLMReply(text=text, context=list(context or []) + [len(self.prompts) + 1])

    def close(self):
        self.closed = True


@pytest.fixture
def sample_results():
    return [
        SearchResult(
            text="Backups are taken nightly and kept for 30 days.",
            score=0.91,
            source="security-policy.pdf",
            payload={"text": "Backups are taken nightly and kept for 30 days.",
                     "source": "security-policy.pdf"},
        ),
        SearchResult(
            text="Restores are tested every quarter.",
            score=0.57,
            source=None,
            payload={"text": "Restores are tested every quarter."},
        ),
    ]


@pytest.fixture
def questions_file(tmp_path):
    path = tmp_path / "questions.txt"
    path.write_text(
        "  How do you handle data backups?  \n"
        "\n"
        "Do you encrypt data at rest?\n"
        "   \n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def fakes():
    """Fake pipeline collaborators."""
    return SimpleNamespace(Embedder=FakeEmbedder, Searcher=FakeSearcher, LLM=FakeLLM)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added by setup_logger so they do not outlive a test."""
    yield
    logger.remove()
