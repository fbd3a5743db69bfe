"""LLM port - interface for document analysis."""

from abc import ABC, abstractmethod


class LLMPort(ABC):
    """Interface for a language-model backend."""

    @abstractmethod
    def complete(self, system_prompt: str, prompt: str) -> str:
        """Send a prompt and return the raw response text.

        Transport failures are raised as ModelRequestError.
        """
        pass
