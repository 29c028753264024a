"""Fetch guard: at most one request in flight, debounced.

The transition functions are pure so the guard can be exercised without
timers; ``FetchGuard`` binds them to a clock.
"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional

logger = logging.getLogger("TokoList.FetchGuard")

DEFAULT_MIN_INTERVAL = 0.5


@dataclass(frozen=True)
class FetchGuardState:
    is_fetching: bool = False
    last_call_timestamp: Optional[float] = None


def should_fetch(
    state: FetchGuardState, now: float, min_interval: float = DEFAULT_MIN_INTERVAL
) -> bool:
    if state.is_fetching:
        return False
    if state.last_call_timestamp is None:
        return True
    return now - state.last_call_timestamp >= min_interval


def begin(state: FetchGuardState, now: float) -> FetchGuardState:
    return replace(state, is_fetching=True, last_call_timestamp=now)


def release(state: FetchGuardState) -> FetchGuardState:
    return replace(state, is_fetching=False)


class FetchGuard:
    """Stateful wrapper around the guard transitions.

    Args:
        min_interval: Debounce window in seconds
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.min_interval = min_interval
        self.clock = clock
        self.state = FetchGuardState()

    @property
    def is_fetching(self) -> bool:
        return self.state.is_fetching

    def try_acquire(self) -> bool:
        now = self.clock()
        if not should_fetch(self.state, now, self.min_interval):
            logger.debug(
                "Skip fetch: %s",
                "already fetching" if self.state.is_fetching else "too soon",
            )
            return False
        self.state = begin(self.state, now)
        return True

    def release(self) -> None:
        self.state = release(self.state)
