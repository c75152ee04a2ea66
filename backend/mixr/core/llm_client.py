"""
LLM client for text-based AI operations.
Backend-agnostic interface used by the recipe generator.
"""
from typing import Any, Dict, List, Optional

from mixr.core.base_client import BaseAIClient
from mixr.core.config import GenerationBackend, get_settings
from mixr.core.exceptions import GenerationUnavailable
from mixr.core.logging import get_logger

logger = get_logger("core.llm_client")


class LLMClient(BaseAIClient):
    """Client for interacting with Language Models."""

    def _build_messages(self, prompt: str, system: Optional[str]) -> List[Dict[str, str]]:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def _call_chat_completions(
        self,
        prompt: str,
        system: Optional[str],
        model: str
    ) -> Optional[str]:
        """Call an OpenAI-compatible chat completions API (OpenAI, LM Studio)."""
        url = f"{self.config.base_url.rstrip('/')}/chat/completions"

        # LM Studio doesn't support the json_object response format, so the
        # system message alone asks for JSON output
        payload = {
            "model": model,
            "messages": self._build_messages(prompt, system),
            "temperature": self.config.temperature,
        }

        response_json = await self._make_request(url, payload, log_prefix="LLM Client")
        try:
            return response_json["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None

    async def _call_ollama(
        self,
        prompt: str,
        system: Optional[str],
        model: str
    ) -> Optional[str]:
        """Call Ollama chat API."""
        url = f"{self.config.base_url.rstrip('/')}/api/chat"

        payload: Dict[str, Any] = {
            "model": model,
            "messages": self._build_messages(prompt, system),
            "stream": False,
            "options": {
                "temperature": self.config.temperature
            }
        }

        response_json = await self._make_request(url, payload, log_prefix="LLM Client")
        try:
            return response_json["message"]["content"]
        except (KeyError, TypeError):
            return None

    async def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        model: Optional[str] = None
    ) -> str:
        """
        Send a single prompt and return the raw response text.

        Args:
            prompt: User prompt
            system: Optional system prompt
            model: Model identifier, defaults to the configured model

        Returns:
            Raw text of the backend's response, unvalidated

        Raises:
            GenerationUnavailable: If the backend call fails or returns no text
        """
        model = model or self.config.model
        logger.debug(f"Generating with backend={self.config.backend.value} model={model}")

        if self.config.backend == GenerationBackend.OLLAMA:
            content = await self._call_ollama(prompt, system, model)
        else:
            content = await self._call_chat_completions(prompt, system, model)

        if not content:
            logger.error("AI service returned empty response")
            raise GenerationUnavailable("AI service returned empty response")

        return content


# Global instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create global LLMClient instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient(get_settings().generation_config())
    return _llm_client
