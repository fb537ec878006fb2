"""Per-question RAG answer loop."""

import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional

from form_filler.exceptions import EmbeddingError, SearchError
from form_filler.llm.ollama_client import OllamaLLMClient
from form_filler.llm.postprocess import strip_reasoning
from form_filler.rag.prompt_builder import SYSTEM_INSTRUCTION, build_prompt
from form_filler.utils.logger import get_logger
from form_filler.vectorstore.embedding_client import EmbeddingClient
from form_filler.vectorstore.qdrant_client import QdrantSearchClient

FALLBACK_ANSWER = "No information available"


@dataclass
class RunStats:
    """Statistics for an answering run."""
    questions: int = 0
    answered: int = 0
    fallback: int = 0
    skipped: int = 0
    duration_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


class FormAnswerer:
    """
    Answers form questions one at a time.

    For each question: embed, search, then either record the fallback answer
    (no relevant context) or assemble a prompt, generate and clean the
    answer. Embedding and search failures skip the question; LLM failures
    propagate and abort the run.
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        searcher: QdrantSearchClient,
        llm: OllamaLLMClient,
        system_instruction: str = SYSTEM_INSTRUCTION,
        fallback_answer: str = FALLBACK_ANSWER,
        logger=None,
    ):
        self.embedder = embedder
        self.searcher = searcher
        self.llm = llm
        self.system_instruction = system_instruction
        self.fallback_answer = fallback_answer
        self.logger = logger or get_logger()
        self.stats = RunStats()

    def answer_all(self, questions: Iterable[str]) -> Dict[str, str]:
        """
        Answer every question.

        Args:
            questions: Questions in processing order

        Returns:
            Mapping of question to answer; skipped questions are absent and a
            repeated question keeps its last answer

        Raises:
            LLMError: If the instruction or any turn call fails
        """
        questions = list(questions)
        start_time = time.monotonic()
        self.stats = RunStats(questions=len(questions))

        context = self.llm.initialize(self.system_instruction)

        answers: Dict[str, str] = {}
        self.logger.info(f"Searching for answers to {len(questions)} questions...")

        for question in questions:
            try:
                prompt = self._retrieve_prompt(question)
            except EmbeddingError as e:
                self.logger.error(f"Failed to vectorize question: {question} - {e}")
                self.stats.skipped += 1
                continue
            except SearchError as e:
                self.logger.error(f"Qdrant search failed for question: {question} - {e}")
                self.stats.skipped += 1
                continue

            if prompt is None:
                self.logger.warning(f"No relevant context found for question: {question}")
                answers[question] = self.fallback_answer
                self.stats.fallback += 1
                continue

            self.logger.debug(f"Sending prompt to LLM: {prompt}")
            reply = self.llm.generate(prompt, context)
            context = reply.context

            answers[question] = strip_reasoning(reply.text, logger=self.logger)
            self.stats.answered += 1
            self.logger.info(f"LLM response received for question: {question}")

        self.stats.duration_seconds = time.monotonic() - start_time
        self.logger.info(
            f"All questions processed: {self.stats.answered} answered, "
            f"{self.stats.fallback} without context, {self.stats.skipped} skipped "
            f"in {self.stats.duration_seconds:.2f}s"
        )

        return answers

    def _retrieve_prompt(self, question: str) -> Optional[str]:
        """Embed and search for a question, then assemble its prompt (None if no context)."""
        self.logger.info(f"Embedding question: {question}")
        vector = self.embedder.embed(question)

        results = self.searcher.search(vector)
        self.logger.debug(f"Qdrant returned {len(results)} results")

        return build_prompt(results, question)
