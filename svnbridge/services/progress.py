"""
Checkout progress derived from streamed svn output.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable

from ..core.interfaces.observer import IOutputObserver, Stream

ProgressCallback = Callable[[str, int], None]

# Percent ranges: the file count lookup ends at START, the last file lands at END
START_PERCENT = 15
END_PERCENT = 95
UNKNOWN_TOTAL_CAP = 90


class CheckoutProgress(IOutputObserver):
    """
    Counts ``A    path`` lines of `svn checkout` and reports a percentage.

    With a known file total, progress moves linearly from 15% to 95%;
    without one it creeps up by one percent per file, capped at 90%.
    """

    def __init__(
        self,
        callback: ProgressCallback,
        total_files: int | None = None,
        forward: IOutputObserver | None = None,
    ) -> None:
        self._callback = callback
        self._total = total_files if total_files and total_files > 0 else None
        self._forward = forward
        self._lock = threading.Lock()
        self._pending = ""
        self._count = 0
        self._percent = START_PERCENT

    @property
    def count(self) -> int:
        return self._count

    @property
    def percent(self) -> int:
        return self._percent

    def on_output(self, stream: Stream, text: str) -> None:
        if self._forward is not None:
            self._forward.on_output(stream, text)
        if stream != "stdout":
            return

        with self._lock:
            lines = (self._pending + text).split("\n")
            self._pending = lines.pop()
            updates = [self._advance(line) for line in lines if line.startswith("A ")]

        for message, percent in updates:
            self._callback(message, percent)

    def _advance(self, line: str) -> tuple[str, int]:
        self._count += 1
        name = os.path.basename(line[2:].strip().rstrip("/\\")) or line[2:].strip()
        if self._total is not None:
            fraction = min(self._count / self._total, 1.0)
            self._percent = round(START_PERCENT + fraction * (END_PERCENT - START_PERCENT))
            return f"Checking out: {name} ({self._count}/{self._total})", self._percent

        self._percent = min(self._percent + 1, UNKNOWN_TOTAL_CAP)
        return f"Checking out: {name}", self._percent
