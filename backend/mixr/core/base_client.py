"""
Base client for AI operations.
Provides the HTTP plumbing shared by every generation backend.
"""
from typing import Dict, Any, Optional
import httpx
from mixr.core.config import GenerationConfig
from mixr.core.constants import LimitsConstants
from mixr.core.exceptions import GenerationUnavailable
from mixr.core.logging import get_logger

logger = get_logger("core.base_client")

class BaseAIClient:
    """Base client for interacting with AI Models."""

    def __init__(
        self,
        config: GenerationConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config
        self.timeout = config.timeout_seconds
        # Injected in tests to stand in for the real backend
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def _make_request(
        self,
        url: str,
        payload: Dict[str, Any],
        log_prefix: str = "AI Client"
    ) -> Dict[str, Any]:
        """
        Make a generic HTTP POST request to the AI provider.

        Args:
            url: The full API endpoint URL.
            payload: The JSON payload to send.
            log_prefix: Prefix for log messages.

        Returns:
            The parsed JSON response.

        Raises:
            GenerationUnavailable: On transport errors, timeouts, error
                statuses or a non-JSON body. The backend's message is kept.
        """
        logger.debug(f"[{log_prefix}] Calling {url}")
        excerpt = LimitsConstants.LOG_EXCERPT_LENGTH

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            logger.error(f"[{log_prefix}] Request timed out after {self.timeout}s")
            raise GenerationUnavailable(f"AI service timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            logger.error(f"[{log_prefix}] Request failed: {e}")
            raise GenerationUnavailable(f"AI service error: {e}") from e

        logger.debug(f"[{log_prefix}] Response status: {response.status_code}")
        if response.status_code != 200:
            logger.error(f"[{log_prefix}] Error response: {response.text[:excerpt]}")
            raise GenerationUnavailable(
                f"AI service error: HTTP {response.status_code}: {response.text[:excerpt]}"
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"[{log_prefix}] Response body is not JSON: {response.text[:excerpt]}")
            raise GenerationUnavailable(f"AI service error: malformed response body: {e}") from e
