"""Bounded exponential backoff with jitter."""

import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .logging import get_logger


@dataclass
class RetryPolicy:
    """Configuration for polling an idempotent check until it succeeds."""

    max_attempts: int = 10
    initial_delay: float = 1.0   # Seconds before the second attempt
    factor: float = 1.5          # Delay multiplier per attempt
    jitter: float = 0.2          # Jitter factor (0.2 = ±20%)

    def delay_for(self, attempt: int, rng: Callable[[float, float], float] = random.uniform) -> float:
        """
        Calculate the wait after a failed attempt.

        Args:
            attempt: Failed attempt number (0-indexed)
            rng: Returns a random float in [a, b]

        Returns:
            Time to wait in seconds
        """
        base_wait = self.initial_delay * (self.factor ** attempt)
        jitter_range = base_wait * self.jitter
        return max(0.0, base_wait + rng(-jitter_range, jitter_range))

    def poll(
        self,
        check: Callable[[], bool],
        sleep: Callable[[float], None] = time.sleep,
        description: Optional[str] = None,
    ) -> int:
        """
        Call `check` until it returns True or the attempt budget runs out.

        No sleep happens after the final attempt.

        Args:
            check: Predicate to evaluate on each attempt
            sleep: Sleep function (injectable for tests)
            description: What is being waited for, used in log lines

        Returns:
            Number of attempts made (1-based) if the check succeeded, 0 otherwise
        """
        logger = get_logger()
        what = description or "condition"

        for attempt in range(self.max_attempts):
            if check():
                return attempt + 1

            if attempt + 1 < self.max_attempts:
                wait_time = self.delay_for(attempt)
                logger.info(
                    f"{what} not ready (attempt {attempt + 1}/{self.max_attempts}), "
                    f"retrying in {wait_time:.1f}s"
                )
                sleep(wait_time)

        return 0


DEFAULT_FORK_RETRY = RetryPolicy()
