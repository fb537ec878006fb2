"""Configuration management using environment variables and pydantic."""

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every value here is also the default of the matching CLI flag, so a run
    can be configured entirely through the environment (or a ``.env`` file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Input / Output
    source_file: str = ""
    output_file: str = ""

    # Service Endpoints
    qdrant_url: str = "http://localhost:6333"
    llm_url: str = ""
    embedding_api_url: str = ""

    # LLM Configuration
    llm_model: str = "deepseek-r1:8b"

    # Vector Database Configuration
    qdrant_collection_name: str = "compliance_corpus"
    qdrant_text_field: str = "text"
    qdrant_source_field: str = "source"

    # RAG Configuration
    rag_score_threshold: float = 0.4
    rag_top_k_results: int = 10
    fallback_answer: str = "No information available"

    # No timeout unless explicitly configured
    request_timeout_seconds: Optional[float] = None

    # Logging Configuration
    verbose: bool = False
    log_format: Literal["json", "text"] = "json"
    log_file_path: Optional[str] = None
    log_max_size_mb: int = 100
    log_backup_count: int = 5


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
