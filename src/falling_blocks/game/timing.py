from __future__ import annotations

from typing import Union


Millis = Union[int, float]


class Timer:
    """Accumulates elapsed time and hands it out in fixed intervals.

    Excess time is kept after a tick, so a long frame yields several ticks
    when `tick` is called in a loop.
    """

    def __init__(self) -> None:
        self.time: Millis = 0

    def advance(self, time_passed: Millis) -> None:
        self.time += time_passed

    def tick(self, time_until_tick: Millis) -> bool:
        should_tick = self.time >= time_until_tick
        if should_tick:
            self.time -= time_until_tick
        return should_tick

    def reset(self) -> None:
        self.time = 0


class Clock:
    """Turns absolute timestamps into frame deltas."""

    def __init__(self, now: Millis = 0) -> None:
        self.time = now

    def update(self, now: Millis) -> Millis:
        time_passed = now - self.time
        self.time = now
        return time_passed
