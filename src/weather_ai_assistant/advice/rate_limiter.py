"""Hourly quota for generative requests."""

import logging
from datetime import datetime, timedelta

from weather_ai_assistant.constants import SECONDS_PER_HOUR
from weather_ai_assistant.exceptions import AdviceRateLimitError
from weather_ai_assistant.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class RequestRateLimiter:
    """Fixed-window counter bounding generative requests per hour.

    The counter resets once the most recent accepted request is more than an
    hour old, so a burst straddling the reset can briefly exceed the quota
    within a rolling hour. That approximation is accepted; this is not a
    sliding window.

    ``try_acquire`` contains no await, so on a single event loop the
    check-and-increment cannot interleave with another coroutine.

    Attributes:
        requests_per_hour: Quota for one window
        request_count: Requests accepted in the current window
        last_request_time: When the last request was accepted, None before the first
    """

    def __init__(self, requests_per_hour: int, clock: Clock = utc_now) -> None:
        """Initialize the limiter.

        Args:
            requests_per_hour: Maximum accepted requests per window.
            clock: Source of the current time.
        """
        self.requests_per_hour = requests_per_hour
        self.request_count = 0
        self.last_request_time: datetime | None = None
        self._clock = clock
        self._window = timedelta(seconds=SECONDS_PER_HOUR)

    def try_acquire(self) -> bool:
        """Record a request if the quota allows it.

        Returns:
            True if the request may proceed, False if the quota is exhausted.
            A denied request does not count against the quota.
        """
        now = self._clock()

        if self.last_request_time is None or self.last_request_time < now - self._window:
            self.request_count = 0

        if self.request_count >= self.requests_per_hour:
            return False

        self.request_count += 1
        self.last_request_time = now
        return True

    def acquire(self) -> None:
        """Record a request or raise when the quota is exhausted.

        Raises:
            AdviceRateLimitError: If the hourly quota has been reached.
        """
        if not self.try_acquire():
            logger.warning(
                f"AI request quota exhausted ({self.request_count}/{self.requests_per_hour})"
            )
            raise AdviceRateLimitError(
                "Rate limit exceeded for AI requests",
                {"limit": self.requests_per_hour, "window_seconds": SECONDS_PER_HOUR},
            )
