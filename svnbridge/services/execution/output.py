"""
Incremental capture of child-process output.
"""

from __future__ import annotations

import codecs
import threading
from collections.abc import Callable
from typing import IO

from ...core.interfaces.observer import IOutputObserver, Stream

READ_CHUNK_SIZE = 64 * 1024


class OutputAccumulator:
    """
    Collects stdout/stderr bytes while a process runs.

    Raw bytes are kept for the final decode; each chunk is also decoded
    incrementally (multi-byte sequences split across reads are held back)
    and forwarded to the observer.
    """

    def __init__(
        self,
        observer: IOutputObserver | None = None,
        normalize: Callable[[str], str] | None = None,
    ) -> None:
        self._observer = observer
        self._normalize = normalize
        self._lock = threading.Lock()
        self._buffers: dict[str, bytearray] = {"stdout": bytearray(), "stderr": bytearray()}
        self._decoders = {
            "stdout": codecs.getincrementaldecoder("utf-8")(errors="replace"),
            "stderr": codecs.getincrementaldecoder("utf-8")(errors="replace"),
        }

    def feed(self, stream: Stream, data: bytes, final: bool = False) -> None:
        """Append a chunk read from ``stream``."""
        with self._lock:
            self._buffers[stream].extend(data)
            text = self._decoders[stream].decode(data, final=final)

        if text and self._observer is not None:
            if self._normalize is not None:
                text = self._normalize(text)
            self._observer.on_output(stream, text)

    def getvalue(self, stream: Stream) -> bytes:
        with self._lock:
            return bytes(self._buffers[stream])

    def discard(self) -> None:
        """Drop everything captured so far."""
        with self._lock:
            for buffer in self._buffers.values():
                buffer.clear()


def pump(stream: Stream, pipe: IO[bytes], accumulator: OutputAccumulator) -> None:
    """Read ``pipe`` until EOF, feeding the accumulator. Runs in a reader thread."""
    try:
        while True:
            chunk = pipe.read1(READ_CHUNK_SIZE)  # type: ignore[attr-defined]
            if not chunk:
                break
            accumulator.feed(stream, chunk)
        accumulator.feed(stream, b"", final=True)
    except (OSError, ValueError):
        # Pipe closed underneath us after a kill
        pass
    finally:
        pipe.close()


def start_reader(stream: Stream, pipe: IO[bytes], accumulator: OutputAccumulator) -> threading.Thread:
    thread = threading.Thread(
        target=pump,
        args=(stream, pipe, accumulator),
        name=f"svn-{stream}-reader",
        daemon=True,
    )
    thread.start()
    return thread
