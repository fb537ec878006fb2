"""Vector retrieval for RAG.

This module provides:
- Embedding generation through the embedding API
- Similarity search in Qdrant with score filtering
"""
