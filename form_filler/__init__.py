"""Compliance form filler.

Answers compliance-form questions with retrieval-augmented generation:
- Questions are read from a text file
- Context is retrieved from a Qdrant collection
- Answers are generated by an Ollama LLM and written to CSV
"""

__version__ = "0.1.0"
