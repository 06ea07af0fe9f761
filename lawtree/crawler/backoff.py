# lawtree/crawler/backoff.py
"""
Exponential backoff schedule and Retry-After parsing for the fetcher.
"""
from __future__ import annotations

import math
import random
from typing import Callable, Optional

from lawtree.config import RetryPolicy


class ExponentialBackoff:
    """
    Delay grows geometrically from ``initial_interval`` to ``max_interval``.

    Each returned delay is jittered by +/- ``randomization_factor``. The
    schedule itself never gives up; the caller compares elapsed time with
    ``max_elapsed_time``.
    """

    def __init__(self, policy: RetryPolicy, rand: Callable[[], float] = random.random) -> None:
        self.policy = policy
        self._rand = rand
        self._current = policy.initial_interval

    def reset(self) -> None:
        self._current = self.policy.initial_interval

    def next_delay(self) -> float:
        """Return the next (jittered) delay and advance the schedule."""
        interval = self._current
        delta = self.policy.randomization_factor * interval
        delay = interval - delta + self._rand() * 2 * delta
        self._current = min(interval * self.policy.multiplier, self.policy.max_interval)
        return delay


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Seconds from a ``Retry-After`` header, or None when absent/unparseable."""
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        return None
    if seconds < 0 or not math.isfinite(seconds):
        return None
    return seconds
