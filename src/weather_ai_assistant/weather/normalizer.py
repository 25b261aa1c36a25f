"""Normalization of raw OpenWeatherMap payloads into canonical models.

Every function here is a pure transformation. A payload is validated against
its input schema first; any missing required field, or any value the canonical
models reject, raises ``MalformedPayloadError`` and nothing is returned, so a
partially populated record never leaves this module.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from weather_ai_assistant.constants import (
    AQI_LEVELS,
    DAILY_FORECAST_DAYS,
    HOURLY_FORECAST_COUNT,
    METERS_PER_KILOMETER,
    PERCENT_MAX,
)
from weather_ai_assistant.exceptions import MalformedPayloadError, chain_exception
from weather_ai_assistant.models.owm import (
    OWMAirPollution,
    OWMCurrentWeather,
    OWMForecast,
    OWMForecastItem,
    OWMWind,
)
from weather_ai_assistant.models.weather import (
    AirQuality,
    AirQualityComponents,
    Coordinates,
    CurrentConditions,
    Forecast,
    ForecastDay,
    ForecastEntry,
    ForecastPrecipitation,
    Location,
    Precipitation,
    WeatherRecord,
    Wind,
)
from weather_ai_assistant.utils.clock import from_unix
from weather_ai_assistant.utils.rounding import round_half_up
from weather_ai_assistant.weather.wind_helper import WindHelper, wind_direction_label

SchemaT = TypeVar("SchemaT", bound=BaseModel)

__all__ = [
    "attach_air_quality",
    "normalize_air_quality",
    "normalize_current",
    "normalize_forecast",
    "wind_direction_label",
]


def _malformed(payload_name: str, error: ValidationError) -> MalformedPayloadError:
    """Build a chained MalformedPayloadError from a pydantic validation error."""
    errors = [
        {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in error.errors()
    ]
    exc = MalformedPayloadError(
        f"{payload_name.capitalize()} payload is malformed",
        {"payload": payload_name, "errors": errors},
    )
    chain_exception(exc, error)
    return exc


def _parse(schema: type[SchemaT], raw: Any, payload_name: str) -> SchemaT:
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise _malformed(payload_name, e) from e


def _wind(wind: OWMWind | None) -> Wind:
    """Convert a provider wind block, treating a missing block as calm."""
    if wind is None:
        return Wind()
    return Wind(
        speed=WindHelper.mps_to_kmh(wind.speed),
        direction=round_half_up(wind.deg) % 360 if wind.deg is not None else 0,
        gust=WindHelper.mps_to_kmh(wind.gust) if wind.gust else None,
    )


def _last_hour(block: dict[str, float] | None) -> float:
    return (block or {}).get("1h", 0.0)


def normalize_current(raw: Any) -> WeatherRecord:
    """Normalize a current weather response.

    Temperatures are rounded to whole degrees, wind is converted from m/s to
    km/h, visibility from metres to kilometres, and missing rain or snow
    blocks count as zero.

    Args:
        raw: Decoded JSON body of the current weather endpoint.

    Returns:
        A fully populated WeatherRecord that retains ``raw``.

    Raises:
        MalformedPayloadError: If coordinates, temperatures or the weather
            condition are missing, or a value is out of range.
    """
    payload = _parse(OWMCurrentWeather, raw, "current weather")
    condition = payload.weather[0]

    try:
        location = Location(
            name=payload.name,
            country=payload.sys.country,
            coordinates=Coordinates(lat=payload.coord.lat, lon=payload.coord.lon),
            timezone_offset=payload.timezone,
            sunrise=from_unix(payload.sys.sunrise) if payload.sys.sunrise is not None else None,
            sunset=from_unix(payload.sys.sunset) if payload.sys.sunset is not None else None,
        )
        current = CurrentConditions(
            temperature=round_half_up(payload.main.temp),
            feels_like=round_half_up(payload.main.feels_like),
            temp_min=round_half_up(payload.main.temp_min),
            temp_max=round_half_up(payload.main.temp_max),
            pressure=payload.main.pressure,
            humidity=payload.main.humidity,
            visibility=(
                round_half_up(payload.visibility / METERS_PER_KILOMETER)
                if payload.visibility is not None
                else None
            ),
            condition=condition.main,
            description=condition.description,
            icon=condition.icon,
            wind=_wind(payload.wind),
            clouds=payload.clouds.all if payload.clouds else 0,
            precipitation=Precipitation(
                rain_1h=_last_hour(payload.rain),
                snow_1h=_last_hour(payload.snow),
            ),
        )
        return WeatherRecord(
            location=location,
            current=current,
            timestamp=from_unix(payload.dt),
            raw=raw,
        )
    except ValidationError as e:
        raise _malformed("current weather", e) from e


def _precipitation_percent(pop: float | None) -> int:
    return round_half_up((pop or 0) * PERCENT_MAX)


def _forecast_entry(item: OWMForecastItem) -> ForecastEntry:
    condition = item.weather[0]
    amount = (item.rain or {}).get("3h") or (item.snow or {}).get("3h") or 0.0
    return ForecastEntry(
        time=from_unix(item.dt),
        temperature=round_half_up(item.main.temp),
        condition=condition.main,
        description=condition.description,
        icon=condition.icon,
        precipitation=ForecastPrecipitation(
            probability=_precipitation_percent(item.pop),
            amount=amount,
        ),
        wind=_wind(item.wind),
    )


@dataclass
class _DayAccumulator:
    """Running aggregate for one calendar day of forecast steps."""

    day: date
    first: OWMForecastItem
    temp_min: float
    temp_max: float
    pop: float

    def add(self, item: OWMForecastItem) -> None:
        self.temp_min = min(self.temp_min, item.main.temp_min)
        self.temp_max = max(self.temp_max, item.main.temp_max)
        self.pop = max(self.pop, item.pop or 0)

    def to_forecast_day(self) -> ForecastDay:
        condition = self.first.weather[0]
        return ForecastDay(
            date=self.day,
            temp_min=round_half_up(self.temp_min),
            temp_max=round_half_up(self.temp_max),
            condition=condition.main,
            description=condition.description,
            icon=condition.icon,
            precipitation_probability=_precipitation_percent(self.pop),
            humidity=self.first.main.humidity,
        )


def _local_date(timestamp: int, timezone_offset: int) -> date:
    return (from_unix(timestamp) + timedelta(seconds=timezone_offset)).date()


def _aggregate_daily(items: list[OWMForecastItem], timezone_offset: int) -> list[ForecastDay]:
    """Group forecast steps by local calendar day in first-seen order.

    Per day: minimum of ``temp_min``, maximum of ``temp_max``, maximum
    precipitation probability; condition and humidity come from the first step.
    """
    days: dict[date, _DayAccumulator] = {}
    for item in items:
        key = _local_date(item.dt, timezone_offset)
        accumulator = days.get(key)
        if accumulator is None:
            days[key] = _DayAccumulator(
                day=key,
                first=item,
                temp_min=item.main.temp_min,
                temp_max=item.main.temp_max,
                pop=item.pop or 0,
            )
        else:
            accumulator.add(item)

    return [acc.to_forecast_day() for acc in list(days.values())[:DAILY_FORECAST_DAYS]]


def normalize_forecast(raw: Any) -> Forecast:
    """Normalize a 5 day / 3 hour forecast response.

    The hourly sequence is the first 24 steps in arrival order. The daily
    sequence groups all steps by calendar day in the forecast city's local
    time and keeps the first 7 days.

    Args:
        raw: Decoded JSON body of the forecast endpoint.

    Returns:
        Forecast with hourly and daily sequences.

    Raises:
        MalformedPayloadError: If the list or a step's required fields are missing.
    """
    payload = _parse(OWMForecast, raw, "forecast")
    timezone_offset = payload.city.timezone if payload.city else 0

    try:
        hourly = [_forecast_entry(item) for item in payload.entries[:HOURLY_FORECAST_COUNT]]
        daily = _aggregate_daily(payload.entries, timezone_offset)
        return Forecast(hourly=hourly, daily=daily)
    except ValidationError as e:
        raise _malformed("forecast", e) from e


def normalize_air_quality(raw: Any) -> AirQuality:
    """Normalize an air pollution response.

    Args:
        raw: Decoded JSON body of the air pollution endpoint.

    Returns:
        AirQuality built from the first list entry.

    Raises:
        MalformedPayloadError: If the list is empty, fields are missing, or the
            index is outside 1-5.
    """
    payload = _parse(OWMAirPollution, raw, "air quality")
    entry = payload.entries[0]

    label = AQI_LEVELS.get(entry.main.aqi)
    if label is None:
        raise MalformedPayloadError(
            "Air quality index out of range",
            {"payload": "air quality", "aqi": entry.main.aqi, "expected": "1-5"},
        )

    return AirQuality(
        aqi=entry.main.aqi,
        label=label,
        components=AirQualityComponents(**entry.components.model_dump()),
        timestamp=from_unix(entry.dt),
    )


def attach_air_quality(record: WeatherRecord, air_quality: AirQuality | None) -> WeatherRecord:
    """Return a copy of ``record`` carrying ``air_quality``."""
    return record.model_copy(update={"air_quality": air_quality})
