"""Weather advice with generative first, rule-based fallback.

The advisor is the only entry point the presentation layer needs for advice.
Its advice methods are total: for any WeatherRecord they return a usable
result and never raise.
"""

import asyncio
import logging

from weather_ai_assistant.advice.generative import GenerativeClient
from weather_ai_assistant.advice.prompts import (
    CHAT_SYSTEM_PROMPT,
    SYSTEM_PROMPTS,
    build_chat_prompt,
    build_messages,
    build_prompt,
)
from weather_ai_assistant.advice.rate_limiter import RequestRateLimiter
from weather_ai_assistant.advice.rules import RULES
from weather_ai_assistant.exceptions import AdviceError
from weather_ai_assistant.models.advice import (
    AdviceCategory,
    AdviceResult,
    AdviceSource,
    ChatResponse,
    Confidence,
)
from weather_ai_assistant.models.config import AIConfig, is_configured_key
from weather_ai_assistant.models.weather import WeatherRecord
from weather_ai_assistant.utils.clock import Clock, utc_now

CHAT_UNAVAILABLE_MESSAGE = (
    "I'm sorry, but AI chat is not available right now. "
    "Please make sure your API key is configured."
)
CHAT_ERROR_MESSAGE = (
    "I'm having trouble processing your request right now. Please try again later."
)


class WeatherAdvisor:
    """Produces clothing, travel, health and activity advice plus chat replies.

    When generative advice is available each request goes through the rate
    limiter and the generative client; a denied or failed request falls back
    to the rule table for that category only. When it is unavailable the
    rule table answers directly and no request is made.

    Attributes:
        config: Generative advice configuration
        client: Generative API client
        rate_limiter: Hourly request quota shared by all categories and chat
        logger: Logger instance
    """

    def __init__(
        self,
        config: AIConfig,
        client: GenerativeClient | None = None,
        rate_limiter: RequestRateLimiter | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the advisor.

        Args:
            config: Generative advice configuration.
            client: Generative client; built from ``config`` when omitted.
            rate_limiter: Request quota; built from ``config.requests_per_hour``
                when omitted.
            clock: Time source for the default rate limiter.
        """
        self.config = config
        self.client = client or GenerativeClient(config)
        self.rate_limiter = rate_limiter or RequestRateLimiter(config.requests_per_hour, clock)
        self.logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        """Whether generative advice may be attempted.

        Returns:
            True when a real API key is configured and the feature is enabled.
        """
        return is_configured_key(self.config.api_key) and self.config.enabled

    async def _generate(self, system_prompt: str, user_prompt: str) -> str:
        """Run one generative request under the rate limit.

        Raises:
            AdviceRateLimitError: If the quota is exhausted.
            AdviceServiceError: If the request fails.
        """
        self.rate_limiter.acquire()
        return await self.client.complete(build_messages(system_prompt, user_prompt))

    async def get_advice(self, category: AdviceCategory, record: WeatherRecord) -> AdviceResult:
        """Get advice for one category.

        Args:
            category: Advice category.
            record: Normalized weather observation.

        Returns:
            Generated advice with high confidence, or rule-based advice with
            medium confidence when generation is unavailable or fails.
        """
        fallback = RULES[category]

        if not self.is_available():
            return fallback(record)

        try:
            text = await self._generate(SYSTEM_PROMPTS[category], build_prompt(category, record))
        except AdviceError as e:
            self.logger.warning(f"AI {category.value} advice failed, using fallback: {e}")
            return fallback(record)

        return AdviceResult(advice=text, confidence=Confidence.HIGH, source=AdviceSource.AI)

    async def get_clothing_advice(self, record: WeatherRecord) -> AdviceResult:
        """Get clothing advice for ``record``."""
        return await self.get_advice(AdviceCategory.CLOTHING, record)

    async def get_travel_advice(self, record: WeatherRecord) -> AdviceResult:
        """Get travel tips for ``record``."""
        return await self.get_advice(AdviceCategory.TRAVEL, record)

    async def get_health_advice(self, record: WeatherRecord) -> AdviceResult:
        """Get a health advisory for ``record``."""
        return await self.get_advice(AdviceCategory.HEALTH, record)

    async def get_activity_suggestions(self, record: WeatherRecord) -> AdviceResult:
        """Get activity suggestions for ``record``."""
        return await self.get_advice(AdviceCategory.ACTIVITY, record)

    async def get_all_advice(self, record: WeatherRecord) -> dict[AdviceCategory, AdviceResult]:
        """Request every category concurrently.

        Each category falls back independently, so one failure does not
        affect the others.

        Args:
            record: Normalized weather observation.

        Returns:
            Advice keyed by category.
        """
        categories = list(AdviceCategory)
        results = await asyncio.gather(
            *(self.get_advice(category, record) for category in categories)
        )
        return dict(zip(categories, results))

    async def handle_chat_message(self, message: str, record: WeatherRecord) -> ChatResponse:
        """Answer a free-form question with the current weather as context.

        Args:
            message: The user's question.
            record: Normalized weather observation.

        Returns:
            A generated reply (``ai``), a fixed notice when AI is unavailable
            (``fallback``), or a fixed apology when the attempt failed (``error``).
        """
        if not self.is_available():
            return ChatResponse(response=CHAT_UNAVAILABLE_MESSAGE, source=AdviceSource.FALLBACK)

        try:
            text = await self._generate(CHAT_SYSTEM_PROMPT, build_chat_prompt(message, record))
        except AdviceError as e:
            self.logger.error(f"AI chat failed: {e}")
            return ChatResponse(response=CHAT_ERROR_MESSAGE, source=AdviceSource.ERROR)

        return ChatResponse(response=text, source=AdviceSource.AI)
