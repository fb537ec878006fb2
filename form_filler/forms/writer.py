"""CSV writer for answered questions."""

import csv
from pathlib import Path
from typing import Mapping, Union

from form_filler.exceptions import WriteError


def write_answers(answers: Mapping[str, str], path: Union[str, Path]) -> None:
    """
    Write question/answer pairs to a CSV file.

    Two columns per row, no header. Every field is quoted and embedded
    quotes are doubled, so commas and newlines survive a round trip.

    Args:
        answers: Mapping of question to answer
        path: Destination CSV path

    Raises:
        WriteError: If the file cannot be created or written
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
            for question, answer in answers.items():
                writer.writerow([question, answer])
    except OSError as e:
        raise WriteError(f"Failed to write output file {path}: {e}") from e
