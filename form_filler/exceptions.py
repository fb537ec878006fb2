"""Exceptions raised by the form filler pipeline."""


class FormFillerError(Exception):
    """Base class for all form filler errors."""
    pass


class ConfigError(FormFillerError):
    """Invalid or missing configuration (flags, environment, file paths)."""
    pass


class ReadError(FormFillerError):
    """The question source file could not be read."""
    pass


class EmbeddingError(FormFillerError):
    """The embedding service failed for a single question."""
    pass


class SearchError(FormFillerError):
    """The vector search failed for a single question."""
    pass


class LLMError(FormFillerError):
    """The LLM generation service failed or returned an incomplete answer."""
    pass


class WriteError(FormFillerError):
    """The output CSV file could not be written."""
    pass
