"""Time helpers."""

import time
from collections.abc import Callable

Clock = Callable[[], int]


def now_millis() -> int:
    """Return the current time in epoch milliseconds."""
    return int(time.time() * 1000)
