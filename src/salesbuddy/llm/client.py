"""
Chat-completions client for the external generative model.

Talks to any OpenAI-compatible ``/chat/completions`` endpoint over HTTP and
returns the assistant's text. Transport failures, HTTP errors and empty
answers are raised as ``LLMError`` so callers can decide whether to fall
back.

Example:
    >>> from salesbuddy.llm.client import LLMClient
    >>> client = LLMClient(api_key="sk-...", model="gpt-4o-mini")
    >>> text = client.complete([{"role": "user", "content": "Hello"}])
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from salesbuddy.config import Config
from salesbuddy.errors import LLMEmptyResponseError, LLMError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"


class LLMClient:
    """
    Minimal client for an OpenAI-compatible chat completions API.

    Attributes:
        api_key: Bearer token for the API
        model: Chat model identifier
        base_url: API root, without trailing slash
        timeout: Request timeout in seconds (None keeps the requests default)
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
    ) -> None:
        if not api_key:
            raise LLMError("An API key is required to call the generative model")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> Optional["LLMClient"]:
        """
        Build a client from configuration.

        Returns:
            LLMClient, or None when no API key is configured
        """
        if not config.llm_api_key:
            return None
        return cls(
            api_key=config.llm_api_key,
            model=config.llm_model,
            base_url=config.llm_base_url,
            timeout=config.llm_timeout,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def complete(
        self,
        messages: List[Dict[str, str]],
        max_tokens: int = 2500,
    ) -> str:
        """
        Send a chat completion request and return the first choice's text.

        Args:
            messages: Chat messages (``role`` / ``content`` dicts)
            max_tokens: Completion token budget

        Returns:
            Assistant message content

        Raises:
            LLMError: On transport or HTTP failure, or an empty answer
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_completion_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("Calling model %s (%d message(s))", self.model, len(messages))
        try:
            response = requests.post(
                self.endpoint,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as exc:
            raise LLMError(f"Model request timed out: {exc}") from exc
        except requests.exceptions.HTTPError as exc:
            raise LLMError(f"Model HTTP error: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise LLMError(f"Model request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise LLMError("Model response body is not JSON") from exc

        content = _first_choice_content(data)
        if not content:
            raise LLMEmptyResponseError("Model returned an empty completion")

        logger.debug("Model raw response: %s", content)
        return content


def _first_choice_content(data: Any) -> str:
    """Extract ``choices[0].message.content`` or return an empty string."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""
