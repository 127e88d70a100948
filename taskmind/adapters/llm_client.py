"""
Completion oracle - the language model behind the AI suggestion tools.

The oracle takes a prompt and returns free text. Nothing about the reply
format is guaranteed; callers parse and default defensively.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from taskmind.config import Settings
from taskmind.exceptions import OracleError, OracleUnavailableError

logger = logging.getLogger(__name__)


class CompletionOracle(ABC):
    """Synchronous text completion."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Return the model's reply to ``prompt``; may raise OracleError."""
        pass


class HTTPCompletionOracle(CompletionOracle):
    """OpenAI-compatible chat completion client."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        timeout: float = 30.0,
        temperature: float = 0.3,
        max_tokens: int = 300,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "HTTPCompletionOracle":
        return cls(
            api_url=settings.llm_api_url,
            api_key=settings.llm_api_key,
            model=settings.llm_model,
            timeout=settings.llm_timeout_seconds,
            temperature=settings.llm_temperature,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_url and self.api_key)

    def complete(self, prompt: str) -> str:
        """
        Send ``prompt`` as a single user message.

        Raises:
            OracleUnavailableError: If no API URL/key is configured
            OracleError: On transport errors, non-2xx responses or malformed bodies
        """
        if not self.enabled:
            raise OracleUnavailableError("LLM_API_URL and LLM_API_KEY must be set to use AI features")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    f"{self.api_url.rstrip('/')}/v1/chat/completions",
                    headers=headers,
                    json=payload,
                )
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"LLM API request failed: {e}")
            raise OracleError(f"HTTP error calling LLM API: {e}") from e
        except ValueError as e:
            raise OracleError(f"LLM API returned invalid JSON: {e}") from e

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise OracleError("Invalid LLM API response format") from e
        if not isinstance(content, str):
            raise OracleError("Invalid LLM API response format")
        return content
