"""
Unit tests for RootCache.
"""

import os

from svnbridge.core.models.roots import RootOrigin, WorkingCopyRoot
from svnbridge.services.roots.cache import RootCache, cache_key


def root(path: str) -> WorkingCopyRoot:
    return WorkingCopyRoot(path=path, origin=RootOrigin.DYNAMIC_DETECTED)


class TestRootCache:
    """Tests for RootCache."""

    def test_keys_are_normalized(self):
        cache = RootCache()
        cache.put("/ws/proj/../proj", root("/ws/proj"))

        assert cache.get("/ws/proj") is not None
        assert cache_key("/ws/proj/") == cache_key("/ws/proj")

    def test_put_if_absent_keeps_first(self):
        cache = RootCache()

        assert cache.put_if_absent("/ws/proj", root("/ws/proj")) is True
        assert cache.put_if_absent("/ws/proj", root("/ws/proj/sub")) is False
        assert cache.get("/ws/proj").path == os.path.abspath("/ws/proj")

    def test_candidates_longest_first(self):
        cache = RootCache()
        cache.put("/ws/proj", root("/ws/proj"))
        cache.put("/ws/proj/sub", root("/ws/proj/sub"))
        cache.put("/other", root("/other"))

        candidates = cache.candidates_for("/ws/proj/sub/file.txt")

        assert [c.path for c in candidates] == [
            os.path.abspath("/ws/proj/sub"),
            os.path.abspath("/ws/proj"),
        ]

    def test_candidates_deduplicated(self):
        cache = RootCache()
        cache.put("/ws/proj", root("/ws/proj"))
        cache.put("/ws/proj/docs", root("/ws/proj"))

        assert len(cache.candidates_for("/ws/proj/docs/a.md")) == 1

    def test_candidates_respect_component_boundaries(self):
        cache = RootCache()
        cache.put("/ws/pro", root("/ws/pro"))

        assert cache.candidates_for("/ws/proj/file.txt") == []

    def test_discard_root_removes_every_key(self):
        cache = RootCache()
        cache.put("/ws/proj", root("/ws/proj"))
        cache.put("/ws/proj/docs", root("/ws/proj"))
        cache.put("/other", root("/other"))

        cache.discard_root("/ws/proj")

        assert len(cache) == 1
        assert cache.get("/other") is not None

    def test_snapshot_is_a_copy(self):
        cache = RootCache()
        cache.put("/ws/proj", root("/ws/proj"))

        snapshot = cache.snapshot()
        cache.clear()

        assert len(snapshot) == 1
        assert len(cache) == 0
