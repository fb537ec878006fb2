"""Question source file reader."""

from pathlib import Path
from typing import List, Union

from form_filler.exceptions import ReadError


def read_questions(path: Union[str, Path]) -> List[str]:
    """
    Read questions from a text file, one question per line.

    Surrounding whitespace is trimmed and blank lines are skipped. Order is
    preserved and duplicates are kept.

    Args:
        path: Path to a UTF-8 text file

    Returns:
        List of questions in file order

    Raises:
        ReadError: If the file cannot be opened or read
    """
    questions = []

    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                question = line.strip()
                if question:
                    questions.append(question)
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to read source file {path}: {e}") from e

    return questions
