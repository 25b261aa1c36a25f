"""Client for an OpenAI-compatible chat completions endpoint."""

import logging
from typing import Any

import httpx

from weather_ai_assistant.advice.prompts import ChatMessage
from weather_ai_assistant.constants import OPENAI_CHAT_COMPLETIONS_PATH
from weather_ai_assistant.exceptions import AdviceServiceError, chain_exception
from weather_ai_assistant.models.config import AIConfig


class GenerativeClient:
    """Sends chat completion requests and returns the generated text.

    Every failure (transport error, timeout, non-success status or an
    unexpected body) surfaces as ``AdviceServiceError``.

    Attributes:
        config: Generative API configuration
        logger: Logger instance for tracking requests
    """

    def __init__(self, config: AIConfig, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize the client.

        Args:
            config: Generative API configuration including key, model and limits.
            http_client: Optional shared client. When omitted a short-lived
                client is opened per request.
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self._http_client = http_client

    @property
    def endpoint(self) -> str:
        """Full chat completions URL."""
        return self.config.base_url.rstrip("/") + OPENAI_CHAT_COMPLETIONS_PATH

    def _build_body(self, messages: list[ChatMessage]) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": messages,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "stream": False,
        }

    async def complete(self, messages: list[ChatMessage]) -> str:
        """Request a completion for ``messages``.

        Args:
            messages: System and user messages.

        Returns:
            Content of the first choice's message.

        Raises:
            AdviceServiceError: If the request fails for any reason.
        """
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        body = self._build_body(messages)
        self.logger.debug(f"Requesting completion from {self.endpoint} ({self.config.model})")

        try:
            if self._http_client is not None:
                response = await self._http_client.post(self.endpoint, headers=headers, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    response = await client.post(self.endpoint, headers=headers, json=body)
        except httpx.HTTPError as e:
            raise chain_exception(
                AdviceServiceError(
                    "AI request failed",
                    {"endpoint": self.endpoint, "error": str(e)},
                ),
                e
            ) from e

        if response.is_error:
            raise AdviceServiceError(
                f"OpenAI API error: {response.status_code}",
                {"endpoint": self.endpoint},
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise chain_exception(
                AdviceServiceError(
                    "Unexpected AI response format",
                    {"endpoint": self.endpoint, "expected_fields": ["choices[0].message.content"]},
                    status_code=response.status_code,
                    response_body=response.text,
                ),
                e
            ) from e

        # Refusals and tool calls answer with a null or empty content
        if not isinstance(content, str) or not content.strip():
            raise AdviceServiceError(
                "AI response has no text content",
                {"endpoint": self.endpoint, "content": content},
                status_code=response.status_code,
                response_body=response.text,
            )

        return content
