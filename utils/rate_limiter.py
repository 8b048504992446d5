import time
from typing import Callable, Optional

from config import REQUEST_DELAY_MS


class RateLimiter:
    """
    Spaces consecutive outbound requests by a fixed minimum interval.

    One instance holds the single "time of last request" for every host it
    is used against; share it between the fetcher and any other network
    caller that should count toward the same budget.
    """

    def __init__(self, min_interval_ms: int = REQUEST_DELAY_MS,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.min_interval = min_interval_ms / 1000.0
        self.clock = clock
        self.sleep = sleep
        self._last_request: Optional[float] = None

    def wait(self) -> float:
        """Block until the interval since the last request has passed. Returns seconds slept."""
        slept = 0.0
        if self._last_request is not None:
            elapsed = self.clock() - self._last_request
            if elapsed < self.min_interval:
                slept = self.min_interval - elapsed
                self.sleep(slept)
        self._last_request = self.clock()
        return slept
