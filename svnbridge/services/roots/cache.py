"""
Thread-safe cache of detected working-copy roots.
"""

from __future__ import annotations

import os
import threading

from ...core.models.roots import WorkingCopyRoot


def cache_key(path: str) -> str:
    """Canonical form of a context key (absolute, case-normalized)."""
    return os.path.normcase(os.path.abspath(path))


class RootCache:
    """
    Maps a context key (usually an open project folder) to a detected root.

    Entries are hints: the resolver re-validates them when a nested working
    copy may sit between the cached root and the path being resolved. The
    lock is never held while a subprocess runs.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[str, WorkingCopyRoot] = {}

    def get(self, key: str) -> WorkingCopyRoot | None:
        with self._lock:
            return self._entries.get(cache_key(key))

    def put(self, key: str, root: WorkingCopyRoot) -> None:
        with self._lock:
            self._entries[cache_key(key)] = root

    def put_if_absent(self, key: str, root: WorkingCopyRoot) -> bool:
        """Store ``root`` under ``key`` unless the key is taken. Returns True if stored."""
        with self._lock:
            normalized = cache_key(key)
            if normalized in self._entries:
                return False
            self._entries[normalized] = root
            return True

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(cache_key(key), None)

    def discard_root(self, root_path: str) -> None:
        """Drop every entry pointing at ``root_path``."""
        target = cache_key(root_path)
        with self._lock:
            stale = [k for k, v in self._entries.items() if cache_key(v.path) == target]
            for key in stale:
                del self._entries[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def snapshot(self) -> dict[str, WorkingCopyRoot]:
        """Copy of the current entries."""
        with self._lock:
            return dict(self._entries)

    def candidates_for(self, path: str) -> list[WorkingCopyRoot]:
        """
        Cached roots that contain ``path``, longest path first.

        Duplicate roots stored under several keys are returned once.
        """
        with self._lock:
            roots = list(self._entries.values())

        seen: set[str] = set()
        matches: list[WorkingCopyRoot] = []
        for root in roots:
            key = cache_key(root.path)
            if key in seen or not root.contains(path):
                continue
            seen.add(key)
            matches.append(root)
        matches.sort(key=lambda r: len(r.path), reverse=True)
        return matches

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
