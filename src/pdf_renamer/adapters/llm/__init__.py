"""LLM adapters."""

from ...config import LLMConfig, LLMProvider
from ...ports.llm import LLMPort
from .claude_api import ClaudeAPIAdapter
from .ollama import OllamaAdapter

__all__ = ["ClaudeAPIAdapter", "OllamaAdapter", "create_llm_adapter"]


def create_llm_adapter(config: LLMConfig) -> LLMPort | None:
    """Create LLM adapter based on configuration, or None when disabled."""
    if config.provider == LLMProvider.NONE:
        return None
    elif config.provider == LLMProvider.OLLAMA:
        return OllamaAdapter(
            model=config.model, base_url=config.base_url, timeout=config.timeout
        )
    elif config.provider == LLMProvider.CLAUDE_API:
        return ClaudeAPIAdapter(model=config.model)
    else:
        raise ValueError(f"Unknown LLM provider: {config.provider}")
