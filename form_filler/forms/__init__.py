"""Form input and output.

This module handles:
- Reading questions from a plain text file
- Writing question/answer pairs to CSV
"""

from form_filler.forms.reader import read_questions
from form_filler.forms.writer import write_answers

__all__ = ["read_questions", "write_answers"]
