"""Record of the forced reclaims, appended to a csv file in batches"""

import os

from cgroup_memory_manager.util import log, now

COLUMNS = [
    "timestamp",
    "cgroup",
    "limit",
    "cache_before",
    "rss_before",
    "cache_after",
    "rss_after",
]


class ReclaimJournal:
    """Buffers reclaims in memory and appends them to `out` once `max_rows`
    are pending, and on `flush()`. At most `max_rows` rows are ever held.
    """

    def __init__(self, out, max_rows=100):
        if max_rows < 1:
            raise ValueError(f"max_rows must be positive, got {max_rows}")
        if not os.path.exists(os.path.dirname(os.path.realpath(out))):
            new_path = f"tmp-reclaim-journal-{now()}.csv"
            log(f"Path {out} doesn't exist! Writing reclaim journal to {new_path} instead!")
            out = new_path
        self.out = out
        self.max_rows = max_rows
        self.written = 0
        self.records = {c: [] for c in COLUMNS}

    def __len__(self):
        return len(self.records["timestamp"])

    def push(self, cgroup, before, after=None):
        self._add("timestamp", now())
        self._add("cgroup", cgroup)
        self._add("limit", before.limit)
        self._add("cache_before", before.cache)
        self._add("rss_before", before.rss)
        self._add("cache_after", after.cache if after is not None else None)
        self._add("rss_after", after.rss if after is not None else None)
        if len(self) >= self.max_rows:
            self.flush()

    def flush(self):
        import pandas

        header = not os.path.exists(self.out) or os.path.getsize(self.out) == 0
        if not header and not len(self):
            return

        df = pandas.DataFrame(self.records, columns=COLUMNS)
        # Keep byte counts integral when some after-reads failed.
        for c in ["cache_after", "rss_after"]:
            df[c] = df[c].astype("Int64")
        df.to_csv(self.out, mode="a", header=header, index=False)

        self.written += len(self)
        self.records = {c: [] for c in COLUMNS}

    def close(self):
        self.flush()
        log(f"Wrote {self.written} reclaims to {self.out}.")

    def _add(self, k, v):
        self.records[k].append(v)
