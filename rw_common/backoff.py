"""Exponential backoff with an elapsed-time budget."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from rw_common.context import Context
from rw_common.errors import ExhaustedRetryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ExponentialBackoff:
    """Delay policy growing by ``multiplier`` until ``max_elapsed`` is spent."""

    initial_interval: float = 0.5
    multiplier: float = 1.5
    max_interval: float = 60.0
    max_elapsed: float = 900.0
    jitter: float = 0.5
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def __post_init__(self) -> None:
        self.initial_interval = max(0.0, self.initial_interval)
        self.multiplier = max(1.0, self.multiplier)
        self.jitter = min(max(0.0, self.jitter), 1.0)
        self.reset()

    def reset(self) -> None:
        self._current = self.initial_interval
        self._started = self.clock()

    @property
    def elapsed(self) -> float:
        return self.clock() - self._started

    def next_delay(self) -> float | None:
        """Return the next wait in seconds, or None once the budget is spent."""
        if self.max_elapsed > 0 and self.elapsed > self.max_elapsed:
            return None
        delta = self.jitter * self._current
        delay = random.uniform(self._current - delta, self._current + delta)
        if self._current >= self.max_interval / self.multiplier:
            self._current = self.max_interval
        else:
            self._current *= self.multiplier
        if self.max_elapsed > 0 and self.elapsed + delay > self.max_elapsed:
            return None
        return delay


def retry(
    operation: Callable[[], T],
    policy: ExponentialBackoff,
    ctx: Context,
    *,
    on_error: Callable[[Exception], None] | None = None,
) -> tuple[bool, T | None]:
    """Run ``operation`` until it succeeds.

    Returns ``(True, result)`` on success and ``(False, None)`` when the
    context is cancelled. Raises ExhaustedRetryError, chained to the last
    failure, once the policy has no delay left.
    """
    policy.reset()
    attempts = 0
    while True:
        if ctx.cancelled:
            return False, None
        attempts += 1
        try:
            return True, operation()
        except Exception as exc:
            if on_error is not None:
                on_error(exc)
            delay = policy.next_delay()
            if delay is None:
                raise ExhaustedRetryError(
                    f"Gave up after {attempts} attempts",
                    context={"attempts": attempts, "elapsed": round(policy.elapsed, 3)},
                    cause=exc,
                ) from exc
            logger.debug("Retrying in %.3fs (attempt %d)", delay, attempts)
            if ctx.wait(delay):
                return False, None
