"""Common fixtures for testing the weather AI assistant."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from weather_ai_assistant.models.config import AIConfig, WeatherConfig
from weather_ai_assistant.models.weather import (
    Coordinates,
    CurrentConditions,
    Location,
    WeatherRecord,
    Wind,
)

# 2023-11-14 00:00:00 UTC
MIDNIGHT_UTC = 1699920000

JsonData = dict[str, Any]


class FakeClock:
    """Manually advanced clock for rate limiter tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def fake_clock() -> FakeClock:
    """Create a clock fixed at 2024-05-25 10:00 UTC."""
    return FakeClock(datetime(2024, 5, 25, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture()
def weather_config() -> WeatherConfig:
    """Create a weather configuration with a usable API key."""
    return WeatherConfig(api_key="owm-test-key-123456", timeout_seconds=5)


@pytest.fixture()
def ai_config() -> AIConfig:
    """Create an AI configuration that makes generative advice available."""
    return AIConfig(api_key="sk-test-key", enabled=True, requests_per_hour=3)


@pytest.fixture()
def current_payload() -> JsonData:
    """Raw current weather response for London in light rain."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "base": "stations",
        "main": {
            "temp": 12.6,
            "feels_like": 11.8,
            "temp_min": 11.2,
            "temp_max": 13.9,
            "pressure": 1012,
            "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 4.12, "deg": 250, "gust": 7.2},
        "rain": {"1h": 0.35},
        "clouds": {"all": 75},
        "dt": 1700000000,
        "sys": {"country": "GB", "sunrise": 1699946000, "sunset": 1699979000},
        "timezone": 0,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


@pytest.fixture()
def forecast_item() -> Callable[..., JsonData]:
    """Factory for one raw forecast step."""

    def _make(
        dt: int,
        temp: float = 10.0,
        temp_min: float | None = None,
        temp_max: float | None = None,
        pop: float | None = 0.0,
        humidity: int = 70,
        main: str = "Clouds",
        description: str = "overcast clouds",
        icon: str = "04d",
    ) -> JsonData:
        item: JsonData = {
            "dt": dt,
            "main": {
                "temp": temp,
                "feels_like": temp - 1,
                "temp_min": temp if temp_min is None else temp_min,
                "temp_max": temp if temp_max is None else temp_max,
                "pressure": 1015,
                "humidity": humidity,
            },
            "weather": [{"id": 804, "main": main, "description": description, "icon": icon}],
            "wind": {"speed": 3.0, "deg": 180},
            "dt_txt": "",
        }
        if pop is not None:
            item["pop"] = pop
        return item

    return _make


@pytest.fixture()
def forecast_payload(forecast_item: Callable[..., JsonData]) -> JsonData:
    """Raw forecast response: 40 steps of 3 hours covering 5 UTC days."""
    return {
        "cod": "200",
        "cnt": 40,
        "list": [
            forecast_item(MIDNIGHT_UTC + i * 3 * 3600, temp=10.0 + (i % 8)) for i in range(40)
        ],
        "city": {"name": "London", "country": "GB", "timezone": 0},
    }


@pytest.fixture()
def air_quality_payload() -> JsonData:
    """Raw air pollution response."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "list": [
            {
                "main": {"aqi": 2},
                "components": {
                    "co": 230.31,
                    "no": 0.1,
                    "no2": 12.85,
                    "o3": 54.36,
                    "so2": 1.76,
                    "pm2_5": 4.2,
                    "pm10": 6.1,
                    "nh3": 0.52,
                },
                "dt": 1700000000,
            }
        ],
    }


@pytest.fixture()
def make_record() -> Callable[..., WeatherRecord]:
    """Factory for canonical weather records with chosen conditions."""

    def _make(
        temperature: int = 20,
        condition: str = "Clouds",
        description: str = "few clouds",
        humidity: int = 50,
        wind_speed: int = 10,
        visibility: int | None = 10,
        name: str = "Springfield",
    ) -> WeatherRecord:
        return WeatherRecord(
            location=Location(
                name=name,
                country="US",
                coordinates=Coordinates(lat=39.8, lon=-89.6),
            ),
            current=CurrentConditions(
                temperature=temperature,
                feels_like=temperature,
                temp_min=temperature - 2,
                temp_max=temperature + 2,
                pressure=1013,
                humidity=humidity,
                visibility=visibility,
                condition=condition,
                description=description,
                icon="02d",
                wind=Wind(speed=wind_speed, direction=90),
            ),
            timestamp=datetime(2024, 5, 25, 10, 0, 0, tzinfo=timezone.utc),
        )

    return _make
