"""Force page cache reclaim in memory cgroups before it turns into OOM kills"""

__version__ = "0.0.1"
