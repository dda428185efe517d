"""Memory accounting snapshots of a v1 memory cgroup"""

import dataclasses
import re

from cgroup_memory_manager.fs import FS, MEMORY_LIMIT, MEMORY_STAT

U64_MAX = (1 << 64) - 1

_U64_RE = re.compile(r"\d+")


@dataclasses.dataclass(frozen=True)
class MemoryStats:
    limit: int
    cache: int
    rss: int

    def __str__(self):
        return f"limit={self.limit} cache={self.cache} rss={self.rss}"


def parse_u64(value):
    if not _U64_RE.fullmatch(value):
        return None
    n = int(value)
    return n if n <= U64_MAX else None


def parse_u64_strip_prefix(prefix, line):
    line = line.strip()
    if line.startswith(prefix):
        return parse_u64(line[len(prefix):])
    return None


def get_memory_stats(cgroup):
    """Read cache, rss and limit of `cgroup`.

    A value that is missing or does not parse is reported as 0, a limit of 0
    meaning unknown. Raises OSError if the accounting files can't be read.
    """
    rss = None
    cache = None
    for line in FS.cg_read(cgroup, MEMORY_STAT).splitlines():
        if rss is None:
            rss = parse_u64_strip_prefix("rss ", line)
        if cache is None:
            cache = parse_u64_strip_prefix("cache ", line)
        if rss is not None and cache is not None:
            break

    limit = parse_u64(FS.cg_read(cgroup, MEMORY_LIMIT).strip())

    return MemoryStats(limit=limit or 0, cache=cache or 0, rss=rss or 0)
