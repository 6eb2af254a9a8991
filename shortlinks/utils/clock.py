"""Wall clock helpers. All service timestamps are epoch milliseconds."""

import time
from typing import Callable

Clock = Callable[[], int]


def now_millis() -> int:
    """Current UTC time in whole milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
