"""
OpenAI API client with retry logic and error handling.

Provides a thin wrapper around the OpenAI chat completions API for recipe
generation.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI

from kondate.config import settings

logger = logging.getLogger(__name__)


class OpenAIClientError(Exception):
    """Base exception for OpenAI client errors."""

    pass


class OpenAIClient:
    """
    Client for interacting with OpenAI API.

    Provides methods for:
    - Plain text completions
    - Structured JSON responses
    - Automatic retry for transient failures (handled by the SDK)

    Example:
        >>> client = OpenAIClient()
        >>> recipe = client.parse_json(
        ...     system_prompt="You are a cooking expert...",
        ...     user_prompt="Suggest a dinner using: onion, egg",
        ... )
    """

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize the OpenAI client.

        Args:
            api_key: Optional key. Defaults to the OPENAI_API_KEY setting.
        """
        self._api_key = api_key or settings.openai_api_key
        self._client: Optional[OpenAI] = None

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self._api_key)

    def _ensure_initialized(self) -> OpenAI:
        """Lazily create the SDK client."""
        if self._client is not None:
            return self._client

        if not self._api_key:
            raise OpenAIClientError(
                "OpenAI API key not configured. "
                "Set OPENAI_API_KEY environment variable."
            )

        self._client = OpenAI(
            api_key=self._api_key,
            timeout=settings.openai_timeout_seconds,
            max_retries=settings.openai_max_retries,
        )
        return self._client

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Send a completion request to OpenAI.

        Args:
            system_prompt: Instructions for the model behavior.
            user_prompt: The user's input to process.
            response_format: Optional format specification (e.g., {"type": "json_object"}).

        Returns:
            The model's response content as a string.

        Raises:
            OpenAIClientError: If the API call fails or returns no content.
        """
        client = self._ensure_initialized()

        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        kwargs: Dict[str, Any] = {
            "model": settings.openai_model,
            "messages": messages,
            "temperature": settings.openai_temperature,
            "max_tokens": settings.openai_max_tokens,
        }

        if response_format:
            kwargs["response_format"] = response_format

        try:
            response = client.chat.completions.create(**kwargs)
        except Exception as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise OpenAIClientError(f"OpenAI API call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise OpenAIClientError("OpenAI returned an empty response")
        return content

    def parse_json(
        self,
        system_prompt: str,
        user_prompt: str,
    ) -> Dict[str, Any]:
        """
        Send a completion request and parse the JSON response.

        Args:
            system_prompt: Instructions for the model behavior.
            user_prompt: The user's input to process.

        Returns:
            Parsed JSON response as a dictionary.

        Raises:
            OpenAIClientError: If the API call fails or JSON parsing fails.
        """
        response = self.complete(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_format={"type": "json_object"},
        )

        try:
            data = json.loads(response)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            raise OpenAIClientError(f"Failed to parse JSON response: {e}") from e

        if not isinstance(data, dict):
            raise OpenAIClientError("Expected a JSON object from OpenAI")
        return data
