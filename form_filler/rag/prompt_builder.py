"""Prompt assembly from retrieved context."""

from typing import List, Optional

from form_filler.vectorstore.qdrant_client import SearchResult

SYSTEM_INSTRUCTION = (
    "You are a compliance assistant. For each of the following compliance questions, "
    "I want a single, ready-to-use answer that can be directly pasted into a form. "
    "Your response must be precise, formal, and short (no more than 7 lines). "
    "Do not repeat the question. Focus only on answering with factual and relevant information.\n\n"
    "Each question will be preceded by context entries like:\n"
    "\"Response 3: Backups are taken nightly and kept for 30 days. (score: 0.94) "
    "(source: security-policy.pdf)\"\n\n"
    "Only return the answer, nothing else.\n"
)

UNKNOWN_SOURCE = "unknown"


def format_context(results: List[SearchResult]) -> str:
    """
    Render search results as a ranked context block.

    Results without text are left out; ranks follow the result order.
    """
    parts = []

    for rank, result in enumerate((r for r in results if r.text), 1):
        source = result.source or UNKNOWN_SOURCE
        parts.append(
            f"Response {rank}: {result.text} (score: {result.score:.2f}) (source: {source})"
        )

    return "\n\n".join(parts)


def build_prompt(results: List[SearchResult], question: str) -> Optional[str]:
    """
    Build the LLM prompt for a question.

    Args:
        results: Ranked search results
        question: The form question

    Returns:
        The prompt, or None when no result carries usable context
    """
    context = format_context(results)
    if not context:
        return None

    return f"{context}\n\n{question}"
