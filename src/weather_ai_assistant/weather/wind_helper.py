"""Wind direction and speed utilities."""

from typing import ClassVar

from weather_ai_assistant.constants import (
    CARDINAL_DIRECTIONS_COUNT,
    DEGREES_PER_CARDINAL,
    MPS_TO_KMH,
)
from weather_ai_assistant.utils.rounding import round_half_up


class WindHelper:
    """Helper class for wind-related conversions."""

    # Define the 16 cardinal directions
    CARDINAL_DIRECTIONS: ClassVar[list[str]] = [
        "N",
        "NNE",
        "NE",
        "ENE",
        "E",
        "ESE",
        "SE",
        "SSE",
        "S",
        "SSW",
        "SW",
        "WSW",
        "W",
        "WNW",
        "NW",
        "NNW",
    ]

    @classmethod
    def mps_to_kmh(cls, speed: float | None) -> int:
        """Convert a provider wind speed to whole km/h.

        Args:
            speed: Wind speed in m/s, or None when the provider omitted it

        Returns:
            ``speed * 3.6`` rounded half up, or 0 for a missing speed
        """
        if speed is None:
            return 0
        return round_half_up(speed * MPS_TO_KMH)

    @classmethod
    def get_wind_direction_cardinal(cls, degrees: float) -> str:
        """Convert wind degrees to 16-point cardinal direction.

        Args:
            degrees: Wind direction in degrees (0-360)

        Returns:
            Cardinal direction as string (N, NNE, NE, etc.)
        """
        # Normalize the angle to 0-360 range
        degrees = degrees % 360

        index = round_half_up(degrees / DEGREES_PER_CARDINAL) % CARDINAL_DIRECTIONS_COUNT

        return cls.CARDINAL_DIRECTIONS[index]


def wind_direction_label(degrees: float) -> str:
    """Return the compass point for a wind direction, e.g. 180 -> "S"."""
    return WindHelper.get_wind_direction_cardinal(degrees)
