"""Custom exception hierarchy for the weather AI assistant.

This module defines domain-specific exceptions to provide better error handling,
clearer intent, and improved debugging capabilities throughout the application.

Exception Hierarchy:
    WeatherAssistantError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── MissingConfigError
    ├── MalformedPayloadError
    ├── AdviceError
    │   └── AdviceRateLimitError
    └── APIError
        ├── AdviceServiceError (also an AdviceError)
        └── UpstreamWeatherError
            ├── LocationNotFoundError
            ├── APIAuthenticationError
            ├── APIRateLimitError
            └── APITimeoutError

Only MalformedPayloadError, ConfigurationError and UpstreamWeatherError reach
callers. AdviceError subclasses are recovered inside the advisor.
"""

from typing import Any


# Base Exception
class WeatherAssistantError(Exception):
    """Base exception for all weather assistant errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(WeatherAssistantError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values."""
    pass


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing.

    Example:
        raise MissingConfigError(
            "OpenWeather API key not configured",
            {"field": "api_key", "config_section": "weather"}
        )
    """
    pass


# Normalization Exceptions
class MalformedPayloadError(WeatherAssistantError):
    """Raised when an upstream payload lacks fields required for normalization.

    Not retryable: the same payload will always fail the same way.

    Example:
        raise MalformedPayloadError(
            "Current weather payload is malformed",
            {"payload": "current", "errors": [{"loc": "main.temp", "msg": "Field required"}]}
        )
    """
    pass


# Advice Exceptions
class AdviceError(WeatherAssistantError):
    """Base exception for generative advice failures.

    The advisor recovers from these by falling back to rule-based advice.
    """
    pass


class AdviceRateLimitError(AdviceError):
    """Raised when the hourly generative request quota is exhausted.

    Example:
        raise AdviceRateLimitError(
            "Rate limit exceeded for AI requests",
            {"limit": 100, "window_seconds": 3600}
        )
    """
    pass


# API Exceptions
class APIError(WeatherAssistantError):
    """Base exception for API-related errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        response_body: str | None = None
    ) -> None:
        """Initialize API exception with additional context.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
            status_code: HTTP status code if applicable
            response_body: Raw response body for debugging
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.response_body = response_body


class AdviceServiceError(APIError, AdviceError):
    """Raised when the generative provider fails or answers with an error status.

    Example:
        raise AdviceServiceError(
            "OpenAI API error",
            {"endpoint": "https://api.openai.com/v1/chat/completions"},
            status_code=500,
            response_body="Internal Server Error"
        )
    """
    pass


class UpstreamWeatherError(APIError):
    """General weather provider error.

    Example:
        raise UpstreamWeatherError(
            "Weather API request failed",
            {"endpoint": "/data/2.5/weather", "lat": 51.5, "lon": -0.12},
            status_code=500,
            response_body="Internal Server Error"
        )
    """
    pass


class LocationNotFoundError(UpstreamWeatherError):
    """Raised when the weather provider answers 404 for a location query."""
    pass


class APIAuthenticationError(UpstreamWeatherError):
    """Raised when the weather provider rejects the API key."""
    pass


class APIRateLimitError(UpstreamWeatherError):
    """Raised when the weather provider's own rate limit is exceeded."""
    pass


class APITimeoutError(UpstreamWeatherError):
    """Raised when a weather provider request times out."""
    pass


# Utility function for exception chaining
def chain_exception(
    new_exception: WeatherAssistantError, cause: BaseException
) -> WeatherAssistantError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise chain_exception(
                UpstreamWeatherError("Failed to fetch weather", {"url": url}),
                e
            ) from e
    """
    new_exception.__cause__ = cause
    return new_exception
