# pyright: reportUnknownMemberType=false

"""Server application for the weather AI assistant.

Implements a FastAPI web server that the browser front-end calls for
normalized weather data, forecasts, air quality and advice.
"""

import argparse
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TypeVar

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from weather_ai_assistant.advice.advisor import WeatherAdvisor
from weather_ai_assistant.constants import DEFAULT_CONFIG_PATH
from weather_ai_assistant.exceptions import (
    LocationNotFoundError,
    MalformedPayloadError,
    MissingConfigError,
    UpstreamWeatherError,
    WeatherAssistantError,
)
from weather_ai_assistant.models.advice import AdviceCategory, AdviceResult, ChatResponse
from weather_ai_assistant.models.config import AppConfig
from weather_ai_assistant.models.weather import (
    AirQuality,
    Forecast,
    GeocodedLocation,
    WeatherRecord,
)
from weather_ai_assistant.utils.logging import setup_logging
from weather_ai_assistant.weather.api import WeatherAPIClient
from weather_ai_assistant.weather.wind_helper import wind_direction_label

T = TypeVar("T")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log application startup and shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting Weather AI Assistant server")

    yield

    logger.info("Shutting down Weather AI Assistant server")


class ChatRequest(BaseModel):
    """Chat message sent by the front-end, with the location it concerns."""

    message: str = Field(min_length=1)
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class WindDirection(BaseModel):
    """Compass label for a wind direction."""

    degrees: float
    label: str


class WeatherAssistantServer:
    """Main server application for the weather AI assistant.

    Attributes:
        config: Application configuration
        logger: Configured logger instance
        app: FastAPI application instance
        weather_client: Client for OpenWeatherMap API
        advisor: Generative advice with rule-based fallback
    """

    def __init__(
        self,
        config: AppConfig,
        weather_client: WeatherAPIClient | None = None,
        advisor: WeatherAdvisor | None = None,
        app_factory: Callable[[], FastAPI] = lambda: FastAPI(
            title="Weather AI Assistant", lifespan=lifespan
        ),
    ) -> None:
        """Initialize the server.

        Args:
            config: Application configuration.
            weather_client: Weather provider client; built from config when omitted.
            advisor: Advice service; built from config when omitted.
            app_factory: Optional factory function to create FastAPI app.
        """
        self.config = config
        self.logger = setup_logging(self.config.logging, "weather_ai_assistant")
        self.app = app_factory()
        self.weather_client = weather_client or WeatherAPIClient(config.weather)
        self.advisor = advisor or WeatherAdvisor(config.ai)

        if not self.advisor.is_available():
            self.logger.info("AI advice unavailable, serving rule-based advice only")

        self._setup_routes()
        self.logger.info("Weather AI Assistant server initialized")

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "WeatherAssistantServer":
        """Create a server from a YAML configuration file."""
        return cls(AppConfig.from_yaml(config_path))

    async def _call_upstream(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run a weather provider call and translate failures into HTTP errors.

        Raises:
            HTTPException: 404 for unknown locations, 503 for missing
                configuration, 502 for provider or payload failures.
        """
        try:
            return await operation()
        except LocationNotFoundError as e:
            raise HTTPException(status_code=404, detail=e.message) from e
        except MissingConfigError as e:
            self.logger.error(f"Configuration error: {e}")
            raise HTTPException(status_code=503, detail=e.message) from e
        except (UpstreamWeatherError, MalformedPayloadError) as e:
            self.logger.error(f"Weather provider error: {e}")
            raise HTTPException(status_code=502, detail=e.message) from e
        except WeatherAssistantError as e:
            self.logger.error(f"Unexpected weather error: {e}")
            raise HTTPException(status_code=500, detail=e.message) from e

    async def _get_record(
        self, lat: float | None, lon: float | None, city: str | None = None
    ) -> WeatherRecord:
        if city:
            return await self._call_upstream(
                lambda: self.weather_client.get_weather_record_by_city(city)
            )
        if lat is None or lon is None:
            raise HTTPException(status_code=400, detail="Provide either lat and lon or city")
        return await self._call_upstream(lambda: self.weather_client.get_weather_record(lat, lon))

    def _setup_routes(self) -> None:
        """Set up FastAPI routes.

        Registers route handlers for the API endpoints:
        - GET /: Server health check
        - GET /weather: Current conditions with air quality
        - GET /forecast: Hourly and daily forecast
        - GET /air-quality: Air quality index
        - GET /geocode: City name lookup
        - GET /advice and /advice/{category}: Weather advice
        - POST /chat: Free-form weather chat
        - GET /wind-direction/{degrees}: Compass label
        """

        @self.app.get("/")
        async def root() -> dict[str, str | bool]:
            """Root endpoint for health check."""
            return {
                "status": "ok",
                "service": "Weather AI Assistant",
                "ai_available": self.advisor.is_available(),
            }

        @self.app.get("/weather")
        async def get_weather(
            lat: float | None = Query(None, ge=-90, le=90),
            lon: float | None = Query(None, ge=-180, le=180),
            city: str | None = None,
        ) -> WeatherRecord:
            """Get normalized current weather by coordinates or city name."""
            return await self._get_record(lat, lon, city)

        @self.app.get("/forecast")
        async def get_forecast(
            lat: float = Query(..., ge=-90, le=90),
            lon: float = Query(..., ge=-180, le=180),
        ) -> Forecast:
            """Get the normalized hourly and daily forecast."""
            return await self._call_upstream(lambda: self.weather_client.get_forecast(lat, lon))

        @self.app.get("/air-quality")
        async def get_air_quality(
            lat: float = Query(..., ge=-90, le=90),
            lon: float = Query(..., ge=-180, le=180),
        ) -> AirQuality:
            """Get normalized air quality; 404 when the provider has none."""
            air_quality = await self.weather_client.get_air_quality(lat, lon)
            if air_quality is None:
                raise HTTPException(status_code=404, detail="Air quality data not available")
            return air_quality

        @self.app.get("/geocode")
        async def geocode(q: str = Query(..., min_length=1)) -> list[GeocodedLocation]:
            """Look up candidate locations for a city name."""
            return await self._call_upstream(lambda: self.weather_client.geocode_city(q))

        @self.app.get("/advice")
        async def get_all_advice(
            lat: float | None = Query(None, ge=-90, le=90),
            lon: float | None = Query(None, ge=-180, le=180),
            city: str | None = None,
        ) -> dict[str, AdviceResult]:
            """Get advice for every category, requested concurrently."""
            record = await self._get_record(lat, lon, city)
            advice = await self.advisor.get_all_advice(record)
            return {category.value: result for category, result in advice.items()}

        @self.app.get("/advice/{category}")
        async def get_advice(
            category: AdviceCategory,
            lat: float | None = Query(None, ge=-90, le=90),
            lon: float | None = Query(None, ge=-180, le=180),
            city: str | None = None,
        ) -> AdviceResult:
            """Get advice for one category."""
            record = await self._get_record(lat, lon, city)
            return await self.advisor.get_advice(category, record)

        @self.app.post("/chat")
        async def chat(request: ChatRequest) -> ChatResponse:
            """Answer a weather question for the given location."""
            record = await self._get_record(request.lat, request.lon)
            return await self.advisor.handle_chat_message(request.message, record)

        @self.app.get("/wind-direction/{degrees}")
        async def wind_direction(degrees: float) -> WindDirection:
            """Convert degrees to a 16-point compass label."""
            return WindDirection(degrees=degrees, label=wind_direction_label(degrees))

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Run the server.

        Args:
            host: Host to bind to. Defaults to the server config.
            port: Port to bind to. Defaults to the server config.
        """
        import uvicorn

        bind_host = host or self.config.server.host
        bind_port = port or self.config.server.port

        self.logger.info(f"Starting Weather AI Assistant on {bind_host}:{bind_port}")

        uvicorn.run(self.app, host=bind_host, port=bind_port)


def main() -> None:
    """Main entry point for the server.

    Parses command line arguments, initializes the server with the
    specified configuration, and starts it running.
    """
    parser = argparse.ArgumentParser(description="Weather AI Assistant Server")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_PATH),
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--host", type=str, help="Host to bind to (default: config value)")
    parser.add_argument("--port", type=int, help="Port to bind to (default: config value)")
    args = parser.parse_args()

    server = WeatherAssistantServer.from_yaml(args.config)
    server.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
