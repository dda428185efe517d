from __future__ import annotations

import os
import tempfile
import unittest
from unittest import mock

from cgroup_memory_manager.discovery import get_dir_leaves


class TestGetDirLeaves(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = os.path.realpath(self._tmp.name)

    def _mkdirs(self, *rels: str) -> list[str]:
        paths = [os.path.join(self.root, rel) for rel in rels]
        for p in paths:
            os.makedirs(p)
        return paths

    def test_three_levels_returns_deepest_dirs(self) -> None:
        leaves = self._mkdirs("a/x", "a/y", "b/z")
        self.assertEqual(sorted(get_dir_leaves(self.root)), sorted(leaves))

    def test_uneven_depths(self) -> None:
        leaves = self._mkdirs("a/x/deep", "b", "c/y")
        self.assertEqual(sorted(get_dir_leaves(self.root)), sorted(leaves))

    def test_files_do_not_make_a_parent(self) -> None:
        (leaf,) = self._mkdirs("a")
        with open(os.path.join(leaf, "memory.stat"), "w") as f:
            f.write("cache 0\n")
        self.assertEqual(get_dir_leaves(self.root), [leaf])

    def test_root_without_subdirs_is_a_leaf(self) -> None:
        self.assertEqual(get_dir_leaves(self.root), [self.root])

    def test_relative_root(self) -> None:
        leaves = self._mkdirs("a", "b")
        cwd = os.getcwd()
        os.chdir(self.root)
        self.addCleanup(os.chdir, cwd)
        self.assertEqual(sorted(get_dir_leaves(".")), sorted(leaves))

    def test_unlistable_subdirectory_is_skipped(self) -> None:
        unlistable, listable, other = self._mkdirs("a/x", "a/y", "b")
        scandir = os.scandir

        def fake_scandir(path=".") -> object:
            if os.path.abspath(path) == unlistable:
                raise PermissionError(13, "Permission denied", path)
            return scandir(path)

        with mock.patch("os.scandir", side_effect=fake_scandir):
            leaves = get_dir_leaves(self.root)
        self.assertEqual(sorted(leaves), sorted([listable, other]))

    def test_subdirectory_removed_mid_walk_is_skipped(self) -> None:
        gone, kept = self._mkdirs("a/x", "b")
        scandir = os.scandir

        def fake_scandir(path=".") -> object:
            if os.path.abspath(path) == gone:
                os.rmdir(gone)
            return scandir(path)

        with mock.patch("os.scandir", side_effect=fake_scandir):
            leaves = get_dir_leaves(self.root)
        # a lost its only child, so it is a leaf now.
        self.assertEqual(sorted(leaves), sorted([os.path.join(self.root, "a"), kept]))

    def test_missing_root(self) -> None:
        self.assertEqual(get_dir_leaves(os.path.join(self.root, "gone")), [])


if __name__ == "__main__":
    unittest.main()
