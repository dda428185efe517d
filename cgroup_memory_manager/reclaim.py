from cgroup_memory_manager.fs import FS, MEMORY_FORCE_EMPTY


def force_empty(cgroup):
    """Ask the kernel to drop the reclaimable memory of `cgroup` right away."""
    FS.cg_write(cgroup, MEMORY_FORCE_EMPTY, "1")
