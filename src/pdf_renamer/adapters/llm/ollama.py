"""LLM adapter using Ollama."""

import logging
from urllib.parse import urlparse

import httpx

from ...domain.errors import ModelRequestError
from ...ports.llm import LLMPort

logger = logging.getLogger(__name__)


class OllamaAdapter(LLMPort):
    """LLM implementation using Ollama's generate endpoint."""

    def __init__(
        self,
        model: str = "llama3.2:latest",
        base_url: str = "http://localhost:11434",
        timeout: float = 120.0,
    ) -> None:
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid base_url scheme: {parsed.scheme}")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def complete(self, system_prompt: str, prompt: str) -> str:
        logger.info(f"Analyzing PDF content with Ollama ({self.model})")

        try:
            response = httpx.post(
                f"{self.base_url}/api/generate",
                json={
                    "model": self.model,
                    "prompt": prompt,
                    "system": system_prompt,
                    "stream": False,
                    "format": "json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ModelRequestError(
                f"Ollama API error: {e.response.status_code} {e.response.reason_phrase}",
                raw_response=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise ModelRequestError(f"Error querying Ollama: {e}") from e

        text = response.json().get("response") or ""
        logger.debug(f"Ollama response: {text[:500]}")
        return text
