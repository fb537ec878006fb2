"""Retrieval-Augmented Generation (RAG) pipeline.

This module handles:
- Prompt preparation from retrieved snippets
- The per-question answer loop
"""
