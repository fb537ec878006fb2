"""Post-processing of raw LLM output."""

import re

from form_filler.utils.logger import get_logger

# Reasoning models wrap their chain of thought in these tags
REASONING_PATTERN = re.compile(r"<think>(.*?)</think>", re.DOTALL)


def strip_reasoning(response: str, logger=None) -> str:
    """
    Remove every ``<think>...</think>`` block from a model answer.

    Removed content is logged for audit, never returned. The result is
    trimmed once at the end.
    """
    logger = logger or get_logger()

    for match in REASONING_PATTERN.finditer(response):
        logger.info(f"Removed internal LLM content: \"{match.group(1)}\"")

    cleaned = REASONING_PATTERN.sub("", response).strip()
    logger.debug(f"Post-processed response: \"{cleaned}\"")

    return cleaned
