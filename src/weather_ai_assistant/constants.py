"""Application-wide constants for the weather AI assistant.

Constants are grouped into the following categories:
- OpenWeatherMap API: endpoints and request defaults for weather data
- Generative API: endpoint and sampling defaults for AI advice
- Normalization: unit conversion factors and forecast shaping limits
- Rate limiting: window size for generative requests
- Server: defaults for the HTTP surface
"""

# OpenWeatherMap API URLs
OWM_CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"  # Current conditions
OWM_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"  # 5 day / 3 hour forecast
OWM_AIR_POLLUTION_URL = "https://api.openweathermap.org/data/2.5/air_pollution"  # Air pollution API
OWM_GEOCODING_URL = "https://api.openweathermap.org/geo/1.0/direct"  # Geocoding API
OWM_UNITS = "metric"  # Normalization assumes Celsius and m/s
GEOCODING_RESULT_LIMIT = 5  # Limit parameter for geocoding API results
DEFAULT_HTTP_TIMEOUT = 30.0  # Seconds before an upstream request is abandoned

# Generative API
OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_CHAT_COMPLETIONS_PATH = "/chat/completions"
DEFAULT_AI_MODEL = "gpt-3.5-turbo"
DEFAULT_AI_MAX_TOKENS = 300
DEFAULT_AI_TEMPERATURE = 0.7
DEFAULT_AI_REQUESTS_PER_HOUR = 100
PLACEHOLDER_KEY_PREFIX = "YOUR_"  # Credentials starting with this are unconfigured

# Unit conversion constants
MPS_TO_KMH = 3.6  # Metres per second to kilometres per hour
METERS_PER_KILOMETER = 1000
PERCENT_MAX = 100

# Forecast shaping
HOURLY_FORECAST_COUNT = 24  # Entries kept for the hourly sequence
DAILY_FORECAST_DAYS = 7  # Distinct calendar days kept for the daily sequence

# AQI (Air Quality Index) levels and descriptions
AQI_LEVELS = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Poor",
    5: "Very Poor",
}

# Cardinal direction constants
CARDINAL_DIRECTIONS_COUNT = 16  # Number of cardinal directions (N, NNE, NE, etc.)
DEGREES_PER_CARDINAL = 22.5  # Degrees per cardinal direction (360/16)

# Rate limiting
SECONDS_PER_HOUR = 3600  # Fixed window length for generative requests

# Server constants
DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_SERVER_PORT = 8000
DEFAULT_CONFIG_PATH = "/etc/weather-ai-assistant/config.yaml"
