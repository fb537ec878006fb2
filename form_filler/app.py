"""Wires the readers, clients and writer into a single answering run."""

from dataclasses import dataclass
from typing import Optional

from form_filler.forms.reader import read_questions
from form_filler.forms.writer import write_answers
from form_filler.llm.ollama_client import OllamaLLMClient
from form_filler.rag.pipeline import FALLBACK_ANSWER, FormAnswerer, RunStats
from form_filler.utils.logger import get_logger
from form_filler.vectorstore.embedding_client import EmbeddingClient
from form_filler.vectorstore.qdrant_client import QdrantSearchClient, parse_qdrant_url


@dataclass
class AnswerOptions:
    """Validated options of the ``answer`` command."""
    source_file: str
    output_file: str
    qdrant_url: str
    llm_url: str
    embedding_api_url: str
    llm_model: str = "deepseek-r1:8b"
    collection_name: str = "compliance_corpus"
    text_field: str = "text"
    source_field: str = "source"
    score_threshold: Optional[float] = 0.4
    top_k: int = 10
    fallback_answer: str = FALLBACK_ANSWER
    timeout: Optional[float] = None


def run_answer(options: AnswerOptions, logger=None) -> RunStats:
    """
    Answer the questions of the source file and save them as CSV.

    The output file is written only once every question has been processed;
    an LLM failure therefore leaves no output behind.

    Raises:
        ConfigError: If the Qdrant URL cannot be parsed
        ReadError: If the source file cannot be read
        LLMError: If the LLM fails
        WriteError: If the output file cannot be written
    """
    logger = logger or get_logger()

    qdrant_host, qdrant_port = parse_qdrant_url(options.qdrant_url)

    logger.info(f"Processing source file: {options.source_file} ...")
    questions = read_questions(options.source_file)
    logger.info(f"Questions parsed: {len(questions)}")

    embedder = EmbeddingClient(
        options.embedding_api_url,
        timeout=options.timeout,
        logger=logger,
    )
    searcher = QdrantSearchClient(
        host=qdrant_host,
        port=qdrant_port,
        collection_name=options.collection_name,
        score_threshold=options.score_threshold,
        top_k=options.top_k,
        text_field=options.text_field,
        source_field=options.source_field,
        timeout=options.timeout,
        logger=logger,
    )
    llm = OllamaLLMClient(
        options.llm_url,
        model=options.llm_model,
        timeout=options.timeout,
        logger=logger,
    )

    answerer = FormAnswerer(
        embedder=embedder,
        searcher=searcher,
        llm=llm,
        fallback_answer=options.fallback_answer,
        logger=logger,
    )

    try:
        answers = answerer.answer_all(questions)
    finally:
        embedder.close()
        searcher.close()
        llm.close()

    logger.info(f"Saving {len(answers)} answers to output file: {options.output_file} ...")
    write_answers(answers, options.output_file)
    logger.info("Answers saved successfully!")

    return answerer.stats
