"""Ports - interfaces for external dependencies."""

from .llm import LLMPort
from .storage import StoragePort
from .text import TextExtractionPort

__all__ = ["LLMPort", "StoragePort", "TextExtractionPort"]
