"""
Output observer interface.

Receives decoded output chunks while an svn process is still running, e.g.
to feed a live log or derive progress.
"""

from abc import ABC, abstractmethod
from typing import Literal

Stream = Literal["stdout", "stderr"]


class IOutputObserver(ABC):
    """Receives streamed output from a running svn command."""

    @abstractmethod
    def on_output(self, stream: Stream, text: str) -> None:
        """
        Handle a chunk of output.

        Called from reader threads; implementations must be thread-safe.

        Args:
            stream: Which pipe the chunk came from
            text: Decoded, normalized chunk text
        """
        pass
