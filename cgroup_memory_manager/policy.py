"""When to force a cgroup to give its page cache back"""

import dataclasses
import typing

from cgroup_memory_manager.threshold import Bytes, Percent


@dataclasses.dataclass
class ReclaimState:
    last_seen: typing.Optional[float] = None
    last_reclaimed: typing.Optional[float] = None
    last_error: typing.Optional[float] = None


class ReclaimPolicy:
    def __init__(self, threshold, cooldown):
        self.threshold = threshold
        self.cooldown = cooldown

    def needs_reclaim(self, stats):
        if isinstance(self.threshold, Bytes):
            return stats.cache >= self.threshold.value
        if isinstance(self.threshold, Percent):
            # Without a known limit a percentage means nothing.
            return stats.limit > 0 and stats.cache >= stats.limit * (
                self.threshold.value / 100
            )
        raise ValueError(f"Unrecognized threshold {self.threshold!r}")

    def can_reclaim(self, stats, state, now):
        if not self.needs_reclaim(stats):
            return False
        if state.last_reclaimed is None:
            return True
        return int(now - state.last_reclaimed) > self.cooldown
