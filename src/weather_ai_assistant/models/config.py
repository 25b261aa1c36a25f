"""Configuration models for the weather AI assistant.

Defines Pydantic models for application configuration including weather provider
credentials, generative advice settings, logging, and server configuration.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from weather_ai_assistant.constants import (
    DEFAULT_AI_MAX_TOKENS,
    DEFAULT_AI_MODEL,
    DEFAULT_AI_REQUESTS_PER_HOUR,
    DEFAULT_AI_TEMPERATURE,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    GEOCODING_RESULT_LIMIT,
    OPENAI_BASE_URL,
    PLACEHOLDER_KEY_PREFIX,
)


def is_configured_key(key: str | None) -> bool:
    """Check whether a credential is set to a real value.

    Args:
        key: The credential as read from configuration.

    Returns:
        False for empty keys and for placeholders such as ``YOUR_API_KEY``.
    """
    if not key:
        return False
    return not key.startswith(PLACEHOLDER_KEY_PREFIX)


class WeatherConfig(BaseModel):
    """Weather provider configuration."""

    api_key: str = ""
    language: str = "en"
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT
    geocoding_limit: int = GEOCODING_RESULT_LIMIT

    @property
    def is_valid(self) -> bool:
        """Whether an OpenWeatherMap key is configured."""
        return is_configured_key(self.api_key)

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate the request timeout is positive.

        Args:
            v: The timeout in seconds.

        Returns:
            The validated timeout.

        Raises:
            ValueError: If the timeout is zero or negative.
        """
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("geocoding_limit")
    @classmethod
    def validate_geocoding_limit(cls, v: int) -> int:
        """Validate the number of geocoding candidates requested.

        Args:
            v: The geocoding result limit.

        Returns:
            The validated limit.

        Raises:
            ValueError: If the limit is outside 1-5, the provider's accepted range.
        """
        if v < 1 or v > 5:
            raise ValueError("Geocoding limit must be between 1 and 5")
        return v


class AIConfig(BaseModel):
    """Generative advice configuration."""

    api_key: str = ""
    enabled: bool = True
    base_url: str = OPENAI_BASE_URL
    model: str = DEFAULT_AI_MODEL
    requests_per_hour: int = DEFAULT_AI_REQUESTS_PER_HOUR
    max_tokens: int = DEFAULT_AI_MAX_TOKENS
    temperature: float = DEFAULT_AI_TEMPERATURE
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT

    @field_validator("requests_per_hour")
    @classmethod
    def validate_requests_per_hour(cls, v: int) -> int:
        """Validate the hourly generative request quota.

        Args:
            v: Requests allowed per hour.

        Returns:
            The validated quota.

        Raises:
            ValueError: If the quota is less than 1.
        """
        if v < 1:
            raise ValueError("AI requests per hour must be at least 1")
        return v

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Validate the sampling temperature.

        Args:
            v: The sampling temperature.

        Returns:
            The validated temperature.

        Raises:
            ValueError: If the temperature is outside 0-2.
        """
        if v < 0 or v > 2:
            raise ValueError("AI temperature must be between 0 and 2")
        return v


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = DEFAULT_SERVER_HOST
    port: int = DEFAULT_SERVER_PORT


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "json"
    max_size_mb: int = 5
    backup_count: int = 3


class AppConfig(BaseModel):
    """Main application configuration."""

    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file.

        Returns:
            An initialized AppConfig object with values from the YAML file.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        path = Path(config_path)
        config_data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

        return cls.model_validate(config_data)
