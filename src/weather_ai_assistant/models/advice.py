"""Advice models returned to the presentation layer."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class AdviceCategory(str, Enum):
    """Kinds of weather advice the advisor produces."""

    CLOTHING = "clothing"
    TRAVEL = "travel"
    HEALTH = "health"
    ACTIVITY = "activity"


class Confidence(str, Enum):
    """How much to trust a piece of advice."""

    HIGH = "high"  # Generated by the language model
    MEDIUM = "medium"  # Produced by the rule table


class AdviceSource(str, Enum):
    """Where a piece of advice or chat reply came from."""

    AI = "ai"
    RULES = "rules"
    FALLBACK = "fallback"  # Chat requested while AI is unavailable
    ERROR = "error"  # Chat attempted against the AI and failed


class AdviceResult(BaseModel):
    """Advice for one category."""

    model_config = ConfigDict(frozen=True)

    advice: str
    confidence: Confidence
    source: AdviceSource


class ChatResponse(BaseModel):
    """Reply to a free-form chat message."""

    model_config = ConfigDict(frozen=True)

    response: str
    source: AdviceSource
