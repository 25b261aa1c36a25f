"""Module initialization."""

from weather_ai_assistant.utils.clock import Clock, from_unix, utc_now
from weather_ai_assistant.utils.rounding import round_half_up

__all__ = [
    # Time utilities
    "Clock",
    "from_unix",
    "utc_now",
    # Numeric utilities
    "round_half_up",
]
