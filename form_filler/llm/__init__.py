"""LLM generation.

This module contains:
- Ollama generate client with conversation context threading
- Post-processing of raw model output
"""
