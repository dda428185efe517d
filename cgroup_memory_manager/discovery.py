import os


def get_dir_leaves(root):
    """Return the absolute paths of all directories under `root` (itself included)
    that have no subdirectory.

    The walk is bottom-up, so every directory is seen after its children and
    has already been marked as a parent if it has any. Directories that
    vanish or can't be listed during the walk are skipped.
    """
    leaves = []
    parents = set()
    for dirpath, _, _ in os.walk(root, topdown=False):
        path = os.path.abspath(dirpath)
        if path in parents:
            continue
        leaves.append(path)
        while path not in parents:
            parents.add(path)
            parent = os.path.dirname(path)
            if parent == path:
                break
            path = parent
    return leaves
