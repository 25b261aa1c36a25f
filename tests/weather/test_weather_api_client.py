"""Tests for the OpenWeatherMap API client."""

# pyright: reportPrivateUsage=false

from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from weather_ai_assistant.exceptions import (
    APIAuthenticationError,
    APIRateLimitError,
    APITimeoutError,
    LocationNotFoundError,
    MalformedPayloadError,
    MissingConfigError,
    UpstreamWeatherError,
)
from weather_ai_assistant.models.config import WeatherConfig
from weather_ai_assistant.weather.api import CITY_NOT_FOUND_MESSAGE, WeatherAPIClient

JsonData = dict[str, Any]
Handler = Callable[[httpx.Request], httpx.Response]


def make_client(config: WeatherConfig, handler: Handler) -> WeatherAPIClient:
    """Create an API client whose HTTP traffic is answered by ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WeatherAPIClient(config, http_client=http_client)


def route(responses: dict[str, httpx.Response], seen: list[httpx.Request]) -> Handler:
    """Answer requests by URL path and record them."""

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return responses.get(request.url.path, httpx.Response(500, text="unexpected path"))

    return _handler


@pytest.mark.asyncio()
async def test_get_current_weather(
    weather_config: WeatherConfig, current_payload: JsonData
) -> None:
    """Test current weather is requested in metric units and normalized."""
    seen: list[httpx.Request] = []
    client = make_client(
        weather_config,
        route({"/data/2.5/weather": httpx.Response(200, json=current_payload)}, seen),
    )

    record = await client.get_current_weather(51.5085, -0.1257)

    assert record.location.name == "London"
    assert record.current.temperature == 13
    assert record.air_quality is None

    params = seen[0].url.params
    assert params["lat"] == "51.5085"
    assert params["lon"] == "-0.1257"
    assert params["units"] == "metric"
    assert params["appid"] == "owm-test-key-123456"
    assert params["lang"] == "en"


@pytest.mark.asyncio()
async def test_get_current_weather_by_city(
    weather_config: WeatherConfig, current_payload: JsonData
) -> None:
    """Test city queries send the name as ``q``."""
    seen: list[httpx.Request] = []
    client = make_client(
        weather_config,
        route({"/data/2.5/weather": httpx.Response(200, json=current_payload)}, seen),
    )

    record = await client.get_current_weather_by_city("London,GB")

    assert record.location.country == "GB"
    assert seen[0].url.params["q"] == "London,GB"


@pytest.mark.asyncio()
async def test_unknown_city(weather_config: WeatherConfig) -> None:
    """Test a 404 for a city query raises LocationNotFoundError."""
    client = make_client(
        weather_config,
        lambda request: httpx.Response(404, json={"cod": "404", "message": "city not found"}),
    )

    with pytest.raises(LocationNotFoundError) as exc_info:
        await client.get_current_weather_by_city("Atlantis")

    assert exc_info.value.message == CITY_NOT_FOUND_MESSAGE
    assert exc_info.value.status_code == 404
    assert exc_info.value.details["city"] == "Atlantis"
    assert isinstance(exc_info.value, UpstreamWeatherError)


@pytest.mark.asyncio()
async def test_invalid_api_key(weather_config: WeatherConfig) -> None:
    """Test a 401 raises APIAuthenticationError without leaking the full key."""
    client = make_client(weather_config, lambda request: httpx.Response(401, text="Invalid key"))

    with pytest.raises(APIAuthenticationError) as exc_info:
        await client.get_current_weather(1.0, 2.0)

    assert exc_info.value.details["api_key_prefix"] == "owm-test..."
    assert exc_info.value.response_body == "Invalid key"


@pytest.mark.asyncio()
async def test_rate_limited(weather_config: WeatherConfig) -> None:
    """Test a 429 raises APIRateLimitError with the Retry-After value."""
    client = make_client(
        weather_config,
        lambda request: httpx.Response(429, headers={"Retry-After": "120"}),
    )

    with pytest.raises(APIRateLimitError) as exc_info:
        await client.get_forecast(1.0, 2.0)

    assert exc_info.value.details["retry_after"] == 120


@pytest.mark.asyncio()
async def test_server_error(weather_config: WeatherConfig) -> None:
    """Test other error statuses raise UpstreamWeatherError."""
    client = make_client(weather_config, lambda request: httpx.Response(503, text="down"))

    with pytest.raises(UpstreamWeatherError) as exc_info:
        await client.get_current_weather(1.0, 2.0)

    assert exc_info.value.status_code == 503
    assert not isinstance(exc_info.value, LocationNotFoundError)


@pytest.mark.asyncio()
async def test_timeout(weather_config: WeatherConfig) -> None:
    """Test a timeout raises APITimeoutError chained to the transport error."""

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(weather_config, _handler)

    with pytest.raises(APITimeoutError) as exc_info:
        await client.get_current_weather(1.0, 2.0)

    assert exc_info.value.details["timeout"] == 5
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


@pytest.mark.asyncio()
async def test_connection_error(weather_config: WeatherConfig) -> None:
    """Test a transport failure raises UpstreamWeatherError."""

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(weather_config, _handler)

    with pytest.raises(UpstreamWeatherError, match="Failed to fetch weather data"):
        await client.get_current_weather(1.0, 2.0)


@pytest.mark.asyncio()
async def test_invalid_json(weather_config: WeatherConfig) -> None:
    """Test a non-JSON body raises UpstreamWeatherError."""
    client = make_client(weather_config, lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(UpstreamWeatherError, match="invalid JSON"):
        await client.get_current_weather(1.0, 2.0)


@pytest.mark.asyncio()
async def test_malformed_payload_propagates(weather_config: WeatherConfig) -> None:
    """Test a payload missing required fields raises MalformedPayloadError."""
    client = make_client(weather_config, lambda request: httpx.Response(200, json={"cod": 200}))

    with pytest.raises(MalformedPayloadError):
        await client.get_current_weather(1.0, 2.0)


@pytest.mark.asyncio()
@pytest.mark.parametrize("api_key", ["", "YOUR_OPENWEATHER_API_KEY"])
async def test_missing_api_key(api_key: str) -> None:
    """Test requests are refused without a configured key."""
    seen: list[httpx.Request] = []
    client = make_client(WeatherConfig(api_key=api_key), route({}, seen))

    with pytest.raises(MissingConfigError):
        await client.get_current_weather(1.0, 2.0)

    assert seen == []


@pytest.mark.asyncio()
async def test_get_forecast(weather_config: WeatherConfig, forecast_payload: JsonData) -> None:
    """Test the forecast is fetched and normalized."""
    seen: list[httpx.Request] = []
    client = make_client(
        weather_config,
        route({"/data/2.5/forecast": httpx.Response(200, json=forecast_payload)}, seen),
    )

    forecast = await client.get_forecast(51.5, -0.12)

    assert len(forecast.hourly) == 24
    assert len(forecast.daily) == 5
    assert seen[0].url.params["units"] == "metric"


class TestAirQuality:
    """Tests for the optional air quality lookup."""

    @pytest.mark.asyncio()
    async def test_success(
        self, weather_config: WeatherConfig, air_quality_payload: JsonData
    ) -> None:
        """Test air quality is normalized."""
        seen: list[httpx.Request] = []
        client = make_client(
            weather_config,
            route({"/data/2.5/air_pollution": httpx.Response(200, json=air_quality_payload)}, seen),
        )

        air = await client.get_air_quality(51.5, -0.12)

        assert air is not None
        assert air.label == "Fair"
        assert seen[0].url.params["appid"] == "owm-test-key-123456"

    @pytest.mark.asyncio()
    async def test_upstream_failure_returns_none(self, weather_config: WeatherConfig) -> None:
        """Test an HTTP failure is downgraded to None."""
        client = make_client(weather_config, lambda request: httpx.Response(500))

        with patch.object(client.logger, "warning") as mock_warning:
            assert await client.get_air_quality(51.5, -0.12) is None

        mock_warning.assert_called_once()

    @pytest.mark.asyncio()
    async def test_malformed_returns_none(self, weather_config: WeatherConfig) -> None:
        """Test an empty pollution list is downgraded to None."""
        client = make_client(weather_config, lambda request: httpx.Response(200, json={"list": []}))

        assert await client.get_air_quality(51.5, -0.12) is None

    @pytest.mark.asyncio()
    async def test_unconfigured_returns_none(self) -> None:
        """Test no request is made without an API key."""
        seen: list[httpx.Request] = []
        client = make_client(WeatherConfig(), route({}, seen))

        assert await client.get_air_quality(51.5, -0.12) is None
        assert seen == []


class TestGeocoding:
    """Tests for city name lookup."""

    @pytest.mark.asyncio()
    async def test_candidates(self, weather_config: WeatherConfig) -> None:
        """Test candidates are returned with display names."""
        payload = [
            {"name": "Springfield", "lat": 39.8, "lon": -89.6, "country": "US", "state": "Illinois"},
            {"name": "Springfield", "lat": 37.2, "lon": -93.3, "country": "US"},
        ]
        seen: list[httpx.Request] = []
        client = make_client(
            weather_config,
            route({"/geo/1.0/direct": httpx.Response(200, json=payload)}, seen),
        )

        results = await client.geocode_city("Springfield")

        assert [r.display_name for r in results] == [
            "Springfield, Illinois, US",
            "Springfield, US",
        ]
        assert results[0].lat == 39.8
        assert seen[0].url.params["limit"] == "5"
        assert seen[0].url.params["q"] == "Springfield"

    @pytest.mark.asyncio()
    async def test_explicit_limit(self, weather_config: WeatherConfig) -> None:
        """Test an explicit limit overrides the configured one."""
        seen: list[httpx.Request] = []
        client = make_client(
            weather_config, route({"/geo/1.0/direct": httpx.Response(200, json=[])}, seen)
        )

        assert await client.geocode_city("Nowhere", limit=2) == []
        assert seen[0].url.params["limit"] == "2"

    @pytest.mark.asyncio()
    async def test_failure_propagates(self, weather_config: WeatherConfig) -> None:
        """Test geocoding failures are raised rather than hidden."""
        client = make_client(weather_config, lambda request: httpx.Response(500))

        with pytest.raises(UpstreamWeatherError):
            await client.geocode_city("London")

    @pytest.mark.asyncio()
    async def test_malformed_candidate(self, weather_config: WeatherConfig) -> None:
        """Test a candidate without coordinates is malformed."""
        client = make_client(
            weather_config, lambda request: httpx.Response(200, json=[{"name": "London"}])
        )

        with pytest.raises(MalformedPayloadError):
            await client.geocode_city("London")


class TestWeatherRecord:
    """Tests for combined current weather and air quality."""

    @pytest.mark.asyncio()
    async def test_record_with_air_quality(
        self,
        weather_config: WeatherConfig,
        current_payload: JsonData,
        air_quality_payload: JsonData,
    ) -> None:
        """Test air quality is attached to the record."""
        seen: list[httpx.Request] = []
        client = make_client(
            weather_config,
            route(
                {
                    "/data/2.5/weather": httpx.Response(200, json=current_payload),
                    "/data/2.5/air_pollution": httpx.Response(200, json=air_quality_payload),
                },
                seen,
            ),
        )

        record = await client.get_weather_record(51.5085, -0.1257)

        assert record.air_quality is not None
        assert record.air_quality.aqi == 2
        assert len(seen) == 2

    @pytest.mark.asyncio()
    async def test_record_without_air_quality(
        self, weather_config: WeatherConfig, current_payload: JsonData
    ) -> None:
        """Test a failed air quality lookup leaves the record usable."""
        seen: list[httpx.Request] = []
        client = make_client(
            weather_config,
            route({"/data/2.5/weather": httpx.Response(200, json=current_payload)}, seen),
        )

        record = await client.get_weather_record(51.5085, -0.1257)

        assert record.air_quality is None
        assert record.current.temperature == 13

    @pytest.mark.asyncio()
    async def test_record_by_city_uses_resolved_coordinates(
        self,
        weather_config: WeatherConfig,
        current_payload: JsonData,
        air_quality_payload: JsonData,
    ) -> None:
        """Test the air quality lookup uses the city's coordinates."""
        seen: list[httpx.Request] = []
        client = make_client(
            weather_config,
            route(
                {
                    "/data/2.5/weather": httpx.Response(200, json=current_payload),
                    "/data/2.5/air_pollution": httpx.Response(200, json=air_quality_payload),
                },
                seen,
            ),
        )

        record = await client.get_weather_record_by_city("London")

        assert record.air_quality is not None
        air_request = seen[1]
        assert air_request.url.path == "/data/2.5/air_pollution"
        assert air_request.url.params["lat"] == "51.5085"
        assert air_request.url.params["lon"] == "-0.1257"
