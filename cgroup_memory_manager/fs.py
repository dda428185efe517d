"""Access to the files of a v1 memory cgroup"""

import os

MEMORY_STAT = "memory.stat"
MEMORY_LIMIT = "memory.limit_in_bytes"
MEMORY_FORCE_EMPTY = "memory.force_empty"


class FS:
    def read(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                return f.read()
            except UnicodeDecodeError as e:
                raise OSError(f"{path}: {e}") from e

    def write(path, value):
        with open(path, "w") as f:
            f.write(value)

    def cg_read(cgroup, cgroup_file):
        return FS.read(FS.cg_path(cgroup, cgroup_file))

    def cg_write(cgroup, cgroup_file, value):
        FS.write(FS.cg_path(cgroup, cgroup_file), value)

    def cg_path(cgroup, filename):
        return os.path.join(cgroup, filename)
