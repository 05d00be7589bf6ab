import asyncio
import logging
import random
from typing import Optional

from config import MOCK_FAILURE_RATE, MOCK_DELAY_SCALE

logger = logging.getLogger(__name__)


class TransientServiceError(Exception):
    """A simulated backend call failed; the caller may retry."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MockTransport:
    """Simulated network hop in front of the mock services.

    Each call sleeps for `base + random * jitter` milliseconds (times
    `delay_scale`) and then fails with `TransientServiceError` at
    `failure_rate`. There is no retry.
    """

    def __init__(self, failure_rate: float = MOCK_FAILURE_RATE, delay_scale: float = MOCK_DELAY_SCALE,
                 rng: Optional[random.Random] = None):
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.failure_rate = failure_rate
        self.delay_scale = max(0.0, delay_scale)
        self.rng = rng or random.Random()

    async def call(self, base_ms: float, jitter_ms: float, error_message: str) -> None:
        delay = (base_ms + self.rng.random() * jitter_ms) * self.delay_scale
        if delay > 0:
            await asyncio.sleep(delay / 1000)
        if self.failure_rate and self.rng.random() < self.failure_rate:
            logger.warning("Simulated failure: %s", error_message)
            raise TransientServiceError(error_message)


def instant_transport() -> MockTransport:
    """Zero-latency transport that never fails."""
    return MockTransport(failure_rate=0.0, delay_scale=0.0)
