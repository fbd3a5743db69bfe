"""LLM adapter using Claude API."""

import logging

from ...domain.errors import ModelRequestError
from ...ports.llm import LLMPort

logger = logging.getLogger(__name__)


class ClaudeAPIAdapter(LLMPort):
    """LLM implementation using Claude API (pay-as-you-go)."""

    def __init__(self, model: str = "claude-sonnet-4-20250514") -> None:
        import anthropic

        self.client = anthropic.Anthropic()
        self.model = model

    def complete(self, system_prompt: str, prompt: str) -> str:
        import anthropic

        logger.info("Analyzing PDF content with Claude API")

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=1024,
                system=system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise ModelRequestError(f"Claude API error: {e}") from e

        text = "".join(block.text for block in response.content if block.type == "text")
        logger.debug(f"Claude response: {text[:500]}")
        return text
