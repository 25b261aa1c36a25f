"""Prompt construction for generative advice.

Each category gets its own system message and a user prompt embedding the
subset of the observation relevant to it.
"""

from typing import TypedDict

from weather_ai_assistant.models.advice import AdviceCategory
from weather_ai_assistant.models.weather import WeatherRecord


class ChatMessage(TypedDict):
    """One message in a chat completions request."""

    role: str
    content: str


SYSTEM_PROMPTS: dict[AdviceCategory, str] = {
    AdviceCategory.CLOTHING: (
        "You are a weather-aware fashion assistant. "
        "Provide practical clothing advice based on weather conditions."
    ),
    AdviceCategory.TRAVEL: "You are a travel advisor specializing in weather-related travel tips.",
    AdviceCategory.HEALTH: (
        "You are a health advisor providing weather-related health tips. "
        "Focus on practical advice."
    ),
    AdviceCategory.ACTIVITY: (
        "You are an activity planner who suggests weather-appropriate activities."
    ),
}

CHAT_SYSTEM_PROMPT = (
    "You are a helpful weather AI assistant. "
    "Answer questions about weather and provide practical advice."
)


def _visibility(record: WeatherRecord) -> str:
    visibility = record.current.visibility
    return f"{visibility}km" if visibility is not None else "unknown"


def build_prompt(category: AdviceCategory, record: WeatherRecord) -> str:
    """Build the user prompt for one advice category.

    Args:
        category: Advice category.
        record: Normalized weather observation.

    Returns:
        Natural-language prompt text.
    """
    current = record.current
    name = record.location.name

    if category is AdviceCategory.CLOTHING:
        return (
            f"Current weather in {name}: {current.temperature}°C, {current.description}, "
            f"humidity {current.humidity}%, wind {current.wind.speed} km/h. "
            "What should someone wear today? "
            "Provide practical, specific clothing recommendations in 2-3 sentences."
        )
    if category is AdviceCategory.TRAVEL:
        return (
            f"Weather conditions in {name}: {current.temperature}°C, {current.description}, "
            f"visibility {_visibility(record)}, wind {current.wind.speed} km/h. "
            "What travel tips should someone consider for these conditions? "
            "Focus on practical advice in 2-3 sentences."
        )
    if category is AdviceCategory.HEALTH:
        air = (
            f"air quality {record.air_quality.label}"
            if record.air_quality is not None
            else "UV and air quality considerations"
        )
        return (
            f"Current conditions in {name}: {current.temperature}°C, {current.description}, "
            f"humidity {current.humidity}%, {air}. "
            "What health-related advice should people consider? "
            "Provide practical tips in 2-3 sentences."
        )
    return (
        f"Weather in {name}: {current.temperature}°C, {current.description}, "
        f"wind {current.wind.speed} km/h. "
        "What activities would be enjoyable and suitable for these conditions? "
        "Suggest 2-3 specific activities with brief explanations."
    )


def build_chat_prompt(message: str, record: WeatherRecord) -> str:
    """Build the user prompt for a chat question with weather context."""
    current = record.current
    return (
        f'User question: "{message}". Current weather context: {record.location.name}, '
        f"{current.temperature}°C, {current.description}. "
        "Provide a helpful, accurate response."
    )


def build_messages(system_prompt: str, user_prompt: str) -> list[ChatMessage]:
    """Pair a system and user prompt into a chat completions message list."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
