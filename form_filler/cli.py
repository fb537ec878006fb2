"""
Command-line entry point of the compliance form filler.

Usage:
    form-filler [--verbose] [--log-format text|json] answer \\
        --source-file questions.txt --output-file answers.csv \\
        --llm-url http://localhost:11434/api/generate \\
        --embedding-api-url http://localhost:8000/embed

Every flag defaults to the matching environment variable (SOURCE_FILE,
OUTPUT_FILE, QDRANT_URL, LLM_URL, EMBEDDING_API_URL, VERBOSE, LOG_FORMAT...).
"""

import argparse
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from form_filler.app import AnswerOptions, run_answer
from form_filler.exceptions import ConfigError, FormFillerError
from form_filler.utils.config import Settings, get_settings
from form_filler.utils.logger import LOG_FORMATS, get_logger, setup_logger


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from ``settings``."""
    parser = argparse.ArgumentParser(
        prog="form-filler",
        description="Compliance form filler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Answer questions with a local Qdrant and Ollama
  form-filler answer --source-file questions.txt --output-file results.csv \\
      --llm-url http://localhost:11434/api/generate \\
      --embedding-api-url http://localhost:8000/embed

  # Human readable debug logs
  form-filler --verbose --log-format text answer ...
        """
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        default=settings.verbose,
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-format',
        choices=LOG_FORMATS,
        default=settings.log_format,
        help=f'Log format (default: {settings.log_format})'
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    answer_parser = subparsers.add_parser(
        "answer",
        help="Answer the questions in the source file and save the questions/answers to the output file",
    )
    answer_parser.add_argument(
        '--source-file',
        default=settings.source_file,
        help='.txt file containing the questions (required)'
    )
    answer_parser.add_argument(
        '--output-file',
        default=settings.output_file,
        help='.csv file to save the answers to questions (required)'
    )
    answer_parser.add_argument(
        '--qdrant-url',
        default=settings.qdrant_url,
        help=f'Qdrant URL for vector database (default: {settings.qdrant_url})'
    )
    answer_parser.add_argument(
        '--llm-url',
        default=settings.llm_url,
        help='URL for the LLM service (required)'
    )
    answer_parser.add_argument(
        '--embedding-api-url',
        default=settings.embedding_api_url,
        help='URL for the embedding API (required)'
    )
    answer_parser.add_argument(
        '--llm-model',
        default=settings.llm_model,
        help=f'LLM model name (default: {settings.llm_model})'
    )
    answer_parser.add_argument(
        '--collection',
        default=settings.qdrant_collection_name,
        help=f'Qdrant collection to search (default: {settings.qdrant_collection_name})'
    )
    answer_parser.add_argument(
        '--score-threshold',
        type=float,
        default=settings.rag_score_threshold,
        help=f'Minimum relevance score of retrieved snippets (default: {settings.rag_score_threshold})'
    )
    answer_parser.add_argument(
        '--top-k',
        type=int,
        default=settings.rag_top_k_results,
        help=f'Maximum snippets retrieved per question (default: {settings.rag_top_k_results})'
    )

    return parser


def _has_extension(path: str, extension: str) -> bool:
    return Path(path).suffix == extension


def validate_answer_args(args: argparse.Namespace) -> None:
    """
    Check the ``answer`` flags before anything is processed.

    Raises:
        ConfigError: On a missing flag, a missing source file or a wrong extension
    """
    for flag in ("source_file", "output_file", "qdrant_url", "llm_url", "embedding_api_url"):
        if not getattr(args, flag):
            raise ConfigError(f"{flag.replace('_', '-')} is required")

    if not Path(args.source_file).is_file():
        raise ConfigError(f"Invalid source-file path: {args.source_file}")
    if not _has_extension(args.source_file, ".txt"):
        raise ConfigError(f"source-file must be a .txt file: {args.source_file}")
    if not _has_extension(args.output_file, ".csv"):
        raise ConfigError(f"output-file must be a .csv file: {args.output_file}")
    if args.top_k < 1:
        raise ConfigError(f"top-k must be positive: {args.top_k}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    try:
        settings = get_settings()
    except ValidationError as e:
        get_logger().critical(f"Invalid configuration: {e}")
        return 1

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logger = setup_logger(
        verbose=args.verbose,
        log_format=args.log_format,
        log_file_path=settings.log_file_path,
        log_max_size_mb=settings.log_max_size_mb,
        log_backup_count=settings.log_backup_count,
    )

    try:
        validate_answer_args(args)

        options = AnswerOptions(
            source_file=args.source_file,
            output_file=args.output_file,
            qdrant_url=args.qdrant_url,
            llm_url=args.llm_url,
            embedding_api_url=args.embedding_api_url,
            llm_model=args.llm_model,
            collection_name=args.collection,
            text_field=settings.qdrant_text_field,
            source_field=settings.qdrant_source_field,
            score_threshold=args.score_threshold,
            top_k=args.top_k,
            fallback_answer=settings.fallback_answer,
            timeout=settings.request_timeout_seconds,
        )

        stats = run_answer(options, logger=logger)
        logger.info(f"Run summary: {stats.to_dict()}")
        return 0

    except KeyboardInterrupt:
        logger.info("Run cancelled by user (Ctrl+C)")
        return 130

    except FormFillerError as e:
        logger.critical(f"Failed to run: {e}")
        return 1

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1
