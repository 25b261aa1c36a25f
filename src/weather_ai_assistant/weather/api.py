"""Weather API client for interacting with OpenWeatherMap services.

Fetches current conditions, forecasts, air quality and geocoding results and
hands the decoded payloads to the normalizer. Upstream failures are raised as
``UpstreamWeatherError`` subclasses; only air quality, which is optional, is
downgraded to ``None`` on failure.
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from weather_ai_assistant.constants import (
    OWM_AIR_POLLUTION_URL,
    OWM_CURRENT_WEATHER_URL,
    OWM_FORECAST_URL,
    OWM_GEOCODING_URL,
    OWM_UNITS,
)
from weather_ai_assistant.exceptions import (
    APIAuthenticationError,
    APIRateLimitError,
    APITimeoutError,
    LocationNotFoundError,
    MalformedPayloadError,
    MissingConfigError,
    UpstreamWeatherError,
    chain_exception,
)
from weather_ai_assistant.models.config import WeatherConfig
from weather_ai_assistant.models.owm import OWMGeocodingResult
from weather_ai_assistant.models.weather import (
    AirQuality,
    Forecast,
    GeocodedLocation,
    WeatherRecord,
)
from weather_ai_assistant.weather.normalizer import (
    attach_air_quality,
    normalize_air_quality,
    normalize_current,
    normalize_forecast,
)

CITY_NOT_FOUND_MESSAGE = "City not found. Please check the spelling and try again."
LOCATION_NOT_FOUND_MESSAGE = "Location not found."


class WeatherAPIClient:
    """Client for the OpenWeatherMap API.

    Attributes:
        config: Weather API configuration including API key and preferences
        logger: Logger instance for tracking API operations
        CURRENT_WEATHER_URL: Current conditions endpoint
        FORECAST_URL: 5 day / 3 hour forecast endpoint
        AIR_POLLUTION_URL: API endpoint for air quality data
        GEOCODING_URL: API endpoint for converting city names to coordinates
    """

    CURRENT_WEATHER_URL = OWM_CURRENT_WEATHER_URL
    FORECAST_URL = OWM_FORECAST_URL
    AIR_POLLUTION_URL = OWM_AIR_POLLUTION_URL
    GEOCODING_URL = OWM_GEOCODING_URL

    def __init__(self, config: WeatherConfig, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize the API client.

        Args:
            config: Weather API configuration including API key and language.
            http_client: Optional shared client. When omitted a short-lived
                client is opened per request.
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self._http_client = http_client

    def _ensure_configured(self) -> None:
        """Validate that an API key is configured.

        Raises:
            MissingConfigError: If the key is empty or a placeholder.
        """
        if not self.config.is_valid:
            raise MissingConfigError(
                "OpenWeather API key not configured",
                {"field": "api_key", "config_section": "weather"}
            )

    def _weather_params(self, **query: Any) -> dict[str, Any]:
        return {
            **query,
            "appid": self.config.api_key,
            "units": OWM_UNITS,
            "lang": self.config.language,
        }

    async def _send(self, url: str, params: dict[str, Any]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url, params=params)
        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            return await client.get(url, params=params)

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any],
        context: dict[str, Any],
        not_found_message: str = LOCATION_NOT_FOUND_MESSAGE,
    ) -> Any:
        """Perform a GET request and decode the JSON body.

        Args:
            url: Endpoint URL.
            params: Query parameters including the API key.
            context: Request details attached to raised errors.
            not_found_message: Message for a 404 answer.

        Returns:
            Decoded JSON body.

        Raises:
            MissingConfigError: If no API key is configured.
            LocationNotFoundError: On HTTP 404.
            APIAuthenticationError: On HTTP 401.
            APIRateLimitError: On HTTP 429.
            APITimeoutError: If the request times out.
            UpstreamWeatherError: On any other transport or status failure.
        """
        self._ensure_configured()
        details = {"endpoint": url, **context}

        try:
            response = await self._send(url, params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise self._status_error(e, details, not_found_message) from e
        except httpx.TimeoutException as e:
            self.logger.error(f"Timeout requesting {url}: {e}")
            raise chain_exception(
                APITimeoutError(
                    "Weather API request timed out",
                    {**details, "timeout": self.config.timeout_seconds}
                ),
                e
            ) from e
        except httpx.HTTPError as e:
            self.logger.error(f"Error requesting {url}: {e}")
            raise chain_exception(
                UpstreamWeatherError("Failed to fetch weather data", {**details, "error": str(e)}),
                e
            ) from e
        except ValueError as e:
            raise chain_exception(
                UpstreamWeatherError("Weather API returned invalid JSON", details),
                e
            ) from e

    def _status_error(
        self, error: httpx.HTTPStatusError, details: dict[str, Any], not_found_message: str
    ) -> UpstreamWeatherError:
        """Translate an HTTP error status into the matching domain exception."""
        status = error.response.status_code
        body = error.response.text
        self.logger.error(f"HTTP {status} from {details['endpoint']}")

        exc: UpstreamWeatherError
        if status == 404:
            exc = LocationNotFoundError(
                not_found_message, details, status_code=status, response_body=body
            )
        elif status == 401:
            exc = APIAuthenticationError(
                "Invalid API key for weather data",
                {**details, "api_key_prefix": self.config.api_key[:8] + "..."},
                status_code=status,
                response_body=body
            )
        elif status == 429:
            retry_after = error.response.headers.get("Retry-After", "3600")
            exc = APIRateLimitError(
                "Weather API rate limit exceeded",
                {**details, "retry_after": int(retry_after) if retry_after.isdigit() else 3600},
                status_code=status,
                response_body=body
            )
        else:
            exc = UpstreamWeatherError(
                f"Weather API request failed: HTTP {status}",
                details,
                status_code=status,
                response_body=body
            )
        chain_exception(exc, error)
        return exc

    async def get_current_weather(self, lat: float, lon: float) -> WeatherRecord:
        """Get current conditions by coordinates.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Normalized current weather, without air quality.

        Raises:
            UpstreamWeatherError: If the request fails.
            MalformedPayloadError: If the response lacks required fields.
        """
        data = await self._get_json(
            self.CURRENT_WEATHER_URL,
            self._weather_params(lat=lat, lon=lon),
            {"lat": lat, "lon": lon},
        )
        return normalize_current(data)

    async def get_current_weather_by_city(self, city_name: str) -> WeatherRecord:
        """Get current conditions by city name.

        Args:
            city_name: City name, optionally with country code ("London,GB").

        Returns:
            Normalized current weather, without air quality.

        Raises:
            LocationNotFoundError: If the provider does not know the city.
            UpstreamWeatherError: If the request fails otherwise.
            MalformedPayloadError: If the response lacks required fields.
        """
        data = await self._get_json(
            self.CURRENT_WEATHER_URL,
            self._weather_params(q=city_name),
            {"city": city_name},
            not_found_message=CITY_NOT_FOUND_MESSAGE,
        )
        return normalize_current(data)

    async def get_forecast(self, lat: float, lon: float) -> Forecast:
        """Get the hourly and daily forecast by coordinates.

        Raises:
            UpstreamWeatherError: If the request fails.
            MalformedPayloadError: If the response lacks required fields.
        """
        data = await self._get_json(
            self.FORECAST_URL,
            self._weather_params(lat=lat, lon=lon),
            {"lat": lat, "lon": lon},
        )
        return normalize_forecast(data)

    async def get_air_quality(self, lat: float, lon: float) -> AirQuality | None:
        """Get air quality by coordinates.

        Air quality is optional data, so every failure is logged and reported
        as ``None`` instead of raised.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Normalized air quality, or None when unavailable.
        """
        if not self.config.is_valid:
            self.logger.warning("Air quality skipped: OpenWeather API key not configured")
            return None

        try:
            data = await self._get_json(
                self.AIR_POLLUTION_URL,
                {"lat": lat, "lon": lon, "appid": self.config.api_key},
                {"lat": lat, "lon": lon},
            )
            return normalize_air_quality(data)
        except (UpstreamWeatherError, MalformedPayloadError) as e:
            self.logger.warning(f"Air quality data not available: {e}")
            return None

    async def geocode_city(self, city_name: str, limit: int | None = None) -> list[GeocodedLocation]:
        """Resolve a city name to candidate locations.

        Args:
            city_name: City name to look up.
            limit: Maximum candidates; defaults to the configured limit.

        Returns:
            Candidate locations, possibly empty.

        Raises:
            UpstreamWeatherError: If the request fails.
            MalformedPayloadError: If a candidate lacks name or coordinates.
        """
        data = await self._get_json(
            self.GEOCODING_URL,
            {
                "q": city_name,
                "limit": limit or self.config.geocoding_limit,
                "appid": self.config.api_key,
            },
            {"city": city_name},
        )

        try:
            results = [OWMGeocodingResult.model_validate(item) for item in data]
        except (ValidationError, TypeError) as e:
            raise chain_exception(
                MalformedPayloadError(
                    "Geocoding payload is malformed",
                    {"payload": "geocoding", "city": city_name}
                ),
                e
            ) from e

        return [
            GeocodedLocation(
                name=result.name,
                country=result.country,
                state=result.state or "",
                lat=result.lat,
                lon=result.lon,
            )
            for result in results
        ]

    async def get_weather_record(self, lat: float, lon: float) -> WeatherRecord:
        """Get current conditions with air quality attached when available.

        Raises:
            UpstreamWeatherError: If the current weather request fails.
            MalformedPayloadError: If the current weather response is malformed.
        """
        record, air_quality = await asyncio.gather(
            self.get_current_weather(lat, lon),
            self.get_air_quality(lat, lon),
        )
        self.logger.info(f"Weather data updated for {record.location.name or (lat, lon)}")
        return attach_air_quality(record, air_quality)

    async def get_weather_record_by_city(self, city_name: str) -> WeatherRecord:
        """Get current conditions for a city with air quality attached when available.

        Raises:
            LocationNotFoundError: If the provider does not know the city.
            UpstreamWeatherError: If the current weather request fails.
            MalformedPayloadError: If the current weather response is malformed.
        """
        record = await self.get_current_weather_by_city(city_name)
        coordinates = record.location.coordinates
        air_quality = await self.get_air_quality(coordinates.lat, coordinates.lon)
        self.logger.info(f"Weather data updated for {city_name}")
        return attach_air_quality(record, air_quality)
