"""Time sources used by the cache.

Defines the Clock protocol plus a wall-clock implementation and a manual
clock that only moves when told to, for deterministic tests.
"""

from __future__ import annotations

import math
import time
from typing import Protocol, Union

from aged_cache.errors import ValidationError

Millis = Union[int, float]


class Clock(Protocol):
    """Contract for anything that can tell the cache what time it is."""

    def millis(self) -> Millis:
        ...


class SystemClock:
    # Wall-clock UTC milliseconds since the epoch
    def millis(self) -> int:
        return time.time_ns() // 1_000_000

    def __repr__(self) -> str:
        return "SystemClock()"


class ManualClock:
    """Clock that stands still until advanced.

    The cache only ever reads it; tests and simulations move it forward
    with advance(), or jump anywhere (backwards included) with set().
    """

    def __init__(self, start: Millis = 0) -> None:
        self._now = start

    def millis(self) -> Millis:
        return self._now

    def advance(self, millis: Millis) -> Millis:
        if math.isnan(millis):
            raise ValidationError("Clock cannot advance by NaN")
        if millis < 0:
            raise ValidationError("Clock cannot move backwards")
        self._now += millis
        return self._now

    def set(self, millis: Millis) -> None:
        if math.isnan(millis):
            raise ValidationError("Clock cannot be set to NaN")
        self._now = millis

    def __repr__(self) -> str:
        return f"ManualClock(now={self._now!r})"
