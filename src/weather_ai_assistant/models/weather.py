"""Canonical weather models used throughout the application.

Defines Pydantic models for normalized current conditions, forecasts and air
quality. These are decoupled from the provider's schema; see ``models.owm``
for the raw payload shapes.
"""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from weather_ai_assistant.weather.wind_helper import wind_direction_label


class Coordinates(BaseModel):
    """Geographic position in degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class Location(BaseModel):
    """Where an observation was taken."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str | None = None
    coordinates: Coordinates
    timezone_offset: int = 0  # Seconds from UTC
    sunrise: dt.datetime | None = None
    sunset: dt.datetime | None = None


class Wind(BaseModel):
    """Wind speed in km/h and direction in compass degrees."""

    model_config = ConfigDict(frozen=True)

    speed: int = 0
    direction: int = Field(default=0, ge=0, le=359)
    gust: int | None = None

    @property
    def cardinal(self) -> str:
        """16-point compass label for the wind direction."""
        return wind_direction_label(self.direction)


class Precipitation(BaseModel):
    """Rain and snow accumulated over the last hour, in mm."""

    model_config = ConfigDict(frozen=True)

    rain_1h: float = 0.0
    snow_1h: float = 0.0


class CurrentConditions(BaseModel):
    """Current weather data."""

    model_config = ConfigDict(frozen=True)

    temperature: int
    feels_like: int
    temp_min: int
    temp_max: int
    pressure: int
    humidity: int = Field(ge=0, le=100)
    visibility: int | None = None  # km, None when the provider omits it
    condition: str
    description: str
    icon: str
    wind: Wind
    clouds: int = 0
    precipitation: Precipitation = Field(default_factory=Precipitation)


class AirQualityComponents(BaseModel):
    """Pollutant concentrations in μg/m3."""

    model_config = ConfigDict(frozen=True)

    co: float | None = None
    no: float | None = None
    no2: float | None = None
    o3: float | None = None
    so2: float | None = None
    pm2_5: float | None = None
    pm10: float | None = None
    nh3: float | None = None


class AirQuality(BaseModel):
    """Air quality index with its label and pollutant breakdown."""

    model_config = ConfigDict(frozen=True)

    aqi: int = Field(ge=1, le=5)
    label: str
    components: AirQualityComponents
    timestamp: dt.datetime


class WeatherRecord(BaseModel):
    """Complete normalized observation handed to the advisor."""

    model_config = ConfigDict(frozen=True)

    location: Location
    current: CurrentConditions
    timestamp: dt.datetime
    air_quality: AirQuality | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)


class ForecastPrecipitation(BaseModel):
    """Precipitation chance (percent) and amount (mm) for one forecast step."""

    model_config = ConfigDict(frozen=True)

    probability: int = Field(ge=0, le=100)
    amount: float = 0.0


class ForecastEntry(BaseModel):
    """Hourly forecast data."""

    model_config = ConfigDict(frozen=True)

    time: dt.datetime
    temperature: int
    condition: str
    description: str
    icon: str
    precipitation: ForecastPrecipitation
    wind: Wind


class ForecastDay(BaseModel):
    """Daily forecast aggregated from the hourly steps of one calendar day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    temp_min: int
    temp_max: int
    condition: str
    description: str
    icon: str
    precipitation_probability: int = Field(ge=0, le=100)
    humidity: int


class Forecast(BaseModel):
    """Hourly and daily forecast sequences."""

    model_config = ConfigDict(frozen=True)

    hourly: list[ForecastEntry]
    daily: list[ForecastDay]


class GeocodedLocation(BaseModel):
    """A place returned by city name lookup."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    state: str = ""
    lat: float
    lon: float

    @property
    def display_name(self) -> str:
        """Name formatted as ``City, State, CC`` (state omitted when empty)."""
        state = f", {self.state}" if self.state else ""
        return f"{self.name}{state}, {self.country}"
