"""Input schemas for raw OpenWeatherMap payloads.

These models describe only the fields the normalizer consumes. Unknown keys
are ignored, optional upstream fields default to ``None`` and required ones
fail validation, which the normalizer reports as a malformed payload.
"""

from pydantic import BaseModel, Field


class OWMCoordinates(BaseModel):
    """Coordinates block (``coord``)."""

    lat: float
    lon: float


class OWMCondition(BaseModel):
    """Weather condition information."""

    id: int | None = None
    main: str
    description: str = ""
    icon: str = ""


class OWMMain(BaseModel):
    """Main measurements of a current weather payload."""

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int


class OWMWind(BaseModel):
    """Wind block; every field may be omitted by the provider."""

    speed: float | None = None  # m/s
    deg: float | None = None
    gust: float | None = None  # m/s


class OWMClouds(BaseModel):
    """Cloud cover block."""

    all: int = 0


class OWMSys(BaseModel):
    """System block with country and sun times."""

    country: str | None = None
    sunrise: int | None = None
    sunset: int | None = None


class OWMCurrentWeather(BaseModel):
    """Response of the current weather endpoint."""

    coord: OWMCoordinates
    weather: list[OWMCondition] = Field(min_length=1)
    main: OWMMain
    dt: int
    name: str = ""
    timezone: int = 0
    sys: OWMSys = Field(default_factory=OWMSys)
    visibility: int | None = None  # metres
    wind: OWMWind | None = None
    clouds: OWMClouds | None = None
    rain: dict[str, float] | None = None  # {"1h": mm}
    snow: dict[str, float] | None = None  # {"1h": mm}


class OWMForecastMain(BaseModel):
    """Main measurements of a forecast entry."""

    temp: float
    temp_min: float
    temp_max: float
    humidity: int
    feels_like: float | None = None
    pressure: int | None = None


class OWMForecastItem(BaseModel):
    """One 3-hour forecast step."""

    dt: int
    main: OWMForecastMain
    weather: list[OWMCondition] = Field(min_length=1)
    wind: OWMWind | None = None
    pop: float | None = None  # Probability of precipitation, 0-1
    rain: dict[str, float] | None = None  # {"3h": mm}
    snow: dict[str, float] | None = None  # {"3h": mm}


class OWMCity(BaseModel):
    """City block of a forecast payload."""

    name: str = ""
    country: str | None = None
    timezone: int = 0  # Shift in seconds from UTC
    sunrise: int | None = None
    sunset: int | None = None


class OWMForecast(BaseModel):
    """Response of the 5 day / 3 hour forecast endpoint."""

    entries: list[OWMForecastItem] = Field(alias="list")
    city: OWMCity | None = None


class OWMAirQualityIndex(BaseModel):
    """AQI block."""

    aqi: int


class OWMAirComponents(BaseModel):
    """Pollutant concentrations in μg/m3."""

    co: float | None = None  # Carbon monoxide
    no: float | None = None  # Nitrogen monoxide
    no2: float | None = None  # Nitrogen dioxide
    o3: float | None = None  # Ozone
    so2: float | None = None  # Sulphur dioxide
    pm2_5: float | None = None  # Fine particles
    pm10: float | None = None  # Coarse particles
    nh3: float | None = None  # Ammonia


class OWMAirQualityEntry(BaseModel):
    """Air pollution data with timestamp."""

    dt: int
    main: OWMAirQualityIndex
    components: OWMAirComponents


class OWMAirPollution(BaseModel):
    """Response of the air pollution endpoint."""

    entries: list[OWMAirQualityEntry] = Field(alias="list", min_length=1)


class OWMGeocodingResult(BaseModel):
    """One candidate from the direct geocoding endpoint."""

    name: str
    lat: float
    lon: float
    country: str = ""
    state: str | None = None
