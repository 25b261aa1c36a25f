"""Deterministic rule-based advice.

Used whenever generative advice is unavailable or fails. Each rule table is
evaluated top to bottom and the first matching branch wins; the order encodes
priority between overlapping conditions and must not be rearranged.
"""

from collections.abc import Callable

from weather_ai_assistant.models.advice import (
    AdviceCategory,
    AdviceResult,
    AdviceSource,
    Confidence,
)
from weather_ai_assistant.models.weather import WeatherRecord

RAIN_NOTE = " Bring an umbrella or rain jacket."
ALLERGY_NOTE = " Allergy sufferers may want to limit outdoor time."


def _rules_result(advice: str) -> AdviceResult:
    return AdviceResult(advice=advice, confidence=Confidence.MEDIUM, source=AdviceSource.RULES)


def clothing_advice(record: WeatherRecord) -> AdviceResult:
    """Clothing advice keyed on temperature, with a note for rain.

    Args:
        record: Normalized weather observation.

    Returns:
        Rule-based advice.
    """
    temp = record.current.temperature
    condition = record.current.condition.lower()

    if temp < 0:
        advice = (
            "Bundle up! Wear multiple layers, a heavy coat, warm hat, gloves, and insulated boots."
        )
    elif temp < 10:
        advice = (
            "Dress warmly with a jacket, long pants, and closed-toe shoes. "
            "Consider a light scarf or hat."
        )
    elif temp < 20:
        advice = "Layer up! A light jacket or sweater over a t-shirt should be perfect."
    elif temp < 25:
        advice = "Comfortable weather! Light pants and a t-shirt or light long sleeves."
    elif temp < 30:
        advice = "Warm day! Shorts, t-shirt, and comfortable shoes. Stay hydrated!"
    else:
        advice = "Very hot! Lightweight, breathable clothing, sun hat, and plenty of sunscreen."

    if "rain" in condition:
        advice += RAIN_NOTE

    return _rules_result(advice)


def travel_advice(record: WeatherRecord) -> AdviceResult:
    """Travel advice keyed on condition, wind speed and visibility.

    An unknown visibility never triggers the low-visibility branch.

    Args:
        record: Normalized weather observation.

    Returns:
        Rule-based advice.
    """
    condition = record.current.condition.lower()
    visibility = record.current.visibility
    wind = record.current.wind.speed

    advice = "Current conditions are "

    if "clear" in condition and wind < 20:
        advice += "excellent for travel. Great visibility and calm conditions."
    elif "rain" in condition:
        advice += "wet. Drive carefully, use headlights, and allow extra time."
    elif "snow" in condition:
        advice += "snowy. Consider winter tires, carry emergency supplies, and drive slowly."
    elif wind > 30:
        advice += "windy. Be cautious with high-profile vehicles and outdoor activities."
    elif visibility is not None and visibility < 5:
        advice += "showing reduced visibility. Drive with caution and use fog lights."
    else:
        advice += "generally good for travel with normal precautions."

    return _rules_result(advice)


def health_advice(record: WeatherRecord) -> AdviceResult:
    """Health advice keyed on temperature and humidity, plus an allergy note.

    Args:
        record: Normalized weather observation.

    Returns:
        Rule-based advice.
    """
    temp = record.current.temperature
    humidity = record.current.humidity
    condition = record.current.condition.lower()

    if temp > 30:
        advice = "High temperatures! Stay hydrated, seek shade, and avoid prolonged sun exposure."
    elif temp < 0:
        advice = (
            "Cold weather! Protect exposed skin, stay dry, "
            "and warm up gradually when coming indoors."
        )
    elif humidity > 80:
        advice = "High humidity! Take it easy during physical activities and stay hydrated."
    else:
        advice = "Pleasant conditions! Perfect weather for outdoor activities and exercise."

    # Independent of the branch above
    if "allergens" in condition or humidity > 70:
        advice += ALLERGY_NOTE

    return _rules_result(advice)


def activity_suggestions(record: WeatherRecord) -> AdviceResult:
    """Activity suggestions keyed on condition and temperature.

    Args:
        record: Normalized weather observation.

    Returns:
        Rule-based advice.
    """
    temp = record.current.temperature
    condition = record.current.condition.lower()

    if "clear" in condition and 15 < temp < 25:
        advice = (
            "Perfect weather for hiking, cycling, or picnicking. "
            "Great for outdoor sports and sightseeing."
        )
    elif "rain" in condition:
        advice = (
            "Rainy day activities: visit museums, indoor shopping, cozy cafes, "
            "or enjoy a good book at home."
        )
    elif temp > 25:
        advice = (
            "Hot weather fun: swimming, water sports, early morning walks, "
            "or indoor activities during peak heat."
        )
    elif temp < 10:
        advice = (
            "Cool weather activities: indoor sports, museums, warm cafes, "
            "or brisk walks with proper clothing."
        )
    else:
        advice = (
            "Mild conditions are great for walking, shopping, casual outdoor dining, "
            "or light exercise."
        )

    return _rules_result(advice)


RULES: dict[AdviceCategory, Callable[[WeatherRecord], AdviceResult]] = {
    AdviceCategory.CLOTHING: clothing_advice,
    AdviceCategory.TRAVEL: travel_advice,
    AdviceCategory.HEALTH: health_advice,
    AdviceCategory.ACTIVITY: activity_suggestions,
}
