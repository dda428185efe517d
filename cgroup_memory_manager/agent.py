#!/usr/bin/env python3

"""Page cache reclaim agent"""

import argparse
import os
import signal
import sys

from cgroup_memory_manager import __version__
from cgroup_memory_manager.journal import ReclaimJournal
from cgroup_memory_manager.scheduler import ReclaimLoop
from cgroup_memory_manager.threshold import parse_threshold
from cgroup_memory_manager.util import LEVELS, log, set_level

argv = None


def get_parent(value):
    if os.path.isdir(value):
        return value
    raise ValueError(f"Invalid directory: '{value}', exiting")


def non_negative_int(value):
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"'{value}' is negative")
    return n


def parse_cmdline_flags(args=None):
    parser = argparse.ArgumentParser(
        prog="cgroup-memory-manager",
        description="Force page cache reclaim in the leaf cgroups of a memory cgroup "
        "once their cache grows past a threshold.",
    )
    parser.add_argument(
        "--parent",
        type=str,
        default="/sys/fs/cgroup/memory/docker",
        help="Path to the parent cgroup",
    )
    parser.add_argument(
        "--threshold",
        type=str,
        default="25%",
        help="Cache usage threshold in %% of memory limit, or bytes "
        "(units are also supported, e.g. 500MB or 1GiB)",
    )
    parser.add_argument(
        "--interval",
        type=non_negative_int,
        default=10,
        help="How frequently to check cache usage for all cgroups, in seconds",
    )
    parser.add_argument(
        "--cooldown",
        type=non_negative_int,
        default=30,
        help="The minimum time to wait between forcing page reclaim, in seconds",
    )
    parser.add_argument(
        "--journal",
        type=str,
        help="Path to a csv file the forced reclaims are appended to",
    )
    parser.add_argument("--log_level", choices=LEVELS, default="INFO")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    flags = parser.parse_args(args)
    try:
        flags.parent = get_parent(flags.parent)
        flags.threshold = parse_threshold(flags.threshold)
    except ValueError as e:
        parser.error(str(e))
    return flags


def terminate(signum, frame):
    sys.exit(0)


def splash():
    set_level(argv.log_level)
    journal = ReclaimJournal(argv.journal) if argv.journal else None
    loop = ReclaimLoop(
        parent=argv.parent,
        threshold=argv.threshold,
        interval=argv.interval,
        cooldown=argv.cooldown,
        journal=journal,
    )

    signal.signal(signal.SIGTERM, terminate)
    try:
        loop.start()
    except (KeyboardInterrupt, SystemExit):
        log("Stopping.")
    finally:
        if journal is not None:
            journal.close()


def main(args=None):
    global argv
    argv = parse_cmdline_flags(args)
    splash()


if __name__ == "__main__":
    main()
