"""Periodically force page cache reclaim on the leaf cgroups of a parent cgroup"""

import time

from cgroup_memory_manager.discovery import get_dir_leaves
from cgroup_memory_manager.policy import ReclaimPolicy, ReclaimState
from cgroup_memory_manager.reclaim import force_empty
from cgroup_memory_manager.stats import get_memory_stats
from cgroup_memory_manager.util import log, warn


class ReclaimLoop:
    def __init__(
        self,
        parent,
        threshold,
        interval,
        cooldown,
        journal=None,
        clock=time.monotonic,
        sleep=time.sleep,
    ):
        self.parent = parent
        self.threshold = threshold
        self.interval = interval
        self.cooldown = cooldown
        self.policy = ReclaimPolicy(threshold, cooldown)
        self.journal = journal
        self.clock = clock
        self.sleep = sleep

    def start(self, states=None):
        log(f"Parent: {self.parent}")
        log(
            f"Threshold: {self.threshold}, interval: {self.interval}s, cooldown: {self.cooldown}s"
        )

        states = {} if states is None else states
        while True:
            self.poll(states)

    def poll(self, states):
        """Run one reclaim cycle, then sleep for what is left of the interval."""
        start = self.clock()
        self.reclaim(states)
        self.cleanup(start, states)
        elapsed = self.clock() - start
        if elapsed > self.interval:
            warn(
                f"Reclaim loop took {elapsed * 1000:.0f}ms, longer than interval {self.interval * 1000}ms"
            )
        else:
            self.sleep(self.interval - elapsed)

    def reclaim(self, states):
        for cgroup in get_dir_leaves(self.parent):
            state = states.get(cgroup)
            if state is None:
                log(f"New cgroup: {cgroup}")
                state = states[cgroup] = ReclaimState()

            now = self.clock()
            try:
                self.reclaim_cgroup(cgroup, state, now)
            except OSError as e:
                if state.last_error is None:
                    warn(f"Failed to reclaim {cgroup}: {e}")
                state.last_error = now
            else:
                if state.last_error is not None:
                    log(f"Recovered {cgroup}")
                state.last_error = None
            state.last_seen = now

    def reclaim_cgroup(self, cgroup, state, now):
        stats = get_memory_stats(cgroup)
        if not self.policy.can_reclaim(stats, state, now):
            return

        log(f"Reclaiming {cgroup}: {stats}")
        force_empty(cgroup)
        state.last_reclaimed = now

        try:
            stats_after = get_memory_stats(cgroup)
        except OSError:
            stats_after = None
        else:
            log(f"Reclaimed  {cgroup}: {stats_after}")
        if self.journal is not None:
            self.journal.push(cgroup, stats, stats_after)

    def cleanup(self, now, states):
        """Forget the cgroups that weren't seen since `now`."""
        for cgroup in [
            cgroup
            for cgroup, state in states.items()
            if state.last_seen is None or state.last_seen < now
        ]:
            log(f"Old cgroup: {cgroup}")
            del states[cgroup]
