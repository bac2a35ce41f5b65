"""Polling intervals for run lifecycle loops.

A `PollPolicy` yields the delay to wait before each re-fetch: it starts at
`initial_interval`, grows by `multiplier`, and is capped at `max_interval`.
Every delay is strictly positive, so a loop driven by a policy always waits
between polls.
"""

from dataclasses import dataclass

from assistantkit.core.errors import RestrictedValueError


@dataclass(frozen=True)
class PollPolicy:
    initial_interval: float = 1.0
    max_interval: float = 10.0
    multiplier: float = 1.5

    def __post_init__(self):
        if self.initial_interval <= 0:
            raise RestrictedValueError("initial_interval must be greater than zero")
        if self.max_interval < self.initial_interval:
            raise RestrictedValueError("max_interval must not be smaller than initial_interval")
        if self.multiplier < 1.0:
            raise RestrictedValueError("multiplier must be at least 1.0")

    @classmethod
    def fixed(cls, interval):
        """Poll at a constant `interval` seconds."""
        return cls(initial_interval=interval, max_interval=interval, multiplier=1.0)

    def intervals(self):
        """Yield an endless sequence of delays in seconds."""
        delay = self.initial_interval
        while True:
            yield delay
            delay = min(delay * self.multiplier, self.max_interval)
