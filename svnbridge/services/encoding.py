"""
Output encoding normalization.

The svn CLI is forced into a UTF-8 locale, but servers, hooks and older
clients still leak text that was decoded under the wrong codepage
(classic mojibake: UTF-8 bytes read as Latin-1). The normalizer detects
such text and re-decodes it under a list of fallback encodings.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..core.exceptions import EncodingRecoveryError
from ..core.interfaces.logger import ILogger

DEFAULT_FALLBACKS = ("utf-8", "gbk", "gb2312", "big5")

REPLACEMENT_CHAR = "\ufffd"

# Signatures of text decoded under the wrong codepage
GARBLED_PATTERNS = (
    re.compile(r"[\u00C0-\u00FF]{2,}"),
    re.compile(r"\?{2,}"),
    re.compile(REPLACEMENT_CHAR),
    re.compile(r"[\u0080-\u00FF]{3,}"),
)

CJK_PATTERN = re.compile(r"[\u4e00-\u9fff]")

# Signatures that accented Latin-1 text cannot carry; the legacy CJK codecs
# are only tried when one is present
LEGACY_SIGNATURES = (
    re.compile(r"[\u0080-\u009F]"),
    re.compile(r"\?{2,}"),
    re.compile(REPLACEMENT_CHAR),
)

UTF8_NAMES = frozenset({"utf-8", "utf8", "u8"})


def looks_garbled(text: str) -> bool:
    """Check whether text shows a mojibake signature."""
    return any(pattern.search(text) for pattern in GARBLED_PATTERNS)


def needs_legacy_codec(text: str) -> bool:
    """Check whether text carries a signature only a CJK codepage can explain."""
    return any(pattern.search(text) for pattern in LEGACY_SIGNATURES)


def _is_utf8(encoding: str) -> bool:
    return encoding.replace("_", "-").lower() in UTF8_NAMES


def _is_acceptable(candidate: str) -> bool:
    return bool(CJK_PATTERN.search(candidate)) and REPLACEMENT_CHAR not in candidate


class EncodingNormalizer:
    """
    Repairs mis-decoded CLI output.

    ``normalize`` is idempotent: repaired text contains CJK ideographs that
    cannot be re-encoded as Latin-1, so a second pass leaves it untouched.
    """

    def __init__(
        self,
        fallbacks: Iterable[str] = DEFAULT_FALLBACKS,
        repair: bool = True,
        logger: ILogger | None = None,
    ) -> None:
        self._fallbacks = tuple(fallbacks) or DEFAULT_FALLBACKS
        self._repair = repair
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            from ..core.di import default_logger

            self._logger = default_logger()
        return self._logger

    @property
    def fallbacks(self) -> tuple[str, ...]:
        return self._fallbacks

    def normalize(self, text: str) -> str:
        """
        Return ``text`` with mojibake repaired where possible.

        Text that does not look garbled, or that cannot be repaired, is
        returned unchanged.
        """
        return self._normalize(text, allow_legacy=True)

    def _normalize(self, text: str, allow_legacy: bool) -> str:
        if not text or not self._repair or not looks_garbled(text):
            return text

        try:
            return self._repair_text(text, allow_legacy and needs_legacy_codec(text))
        except EncodingRecoveryError as e:
            self.logger.debug("Leaving output as-is: %s", e)
            return text

    def _repair_text(self, text: str, allow_legacy: bool) -> str:
        try:
            raw = text.encode("latin-1")
        except UnicodeEncodeError:
            # Already holds characters outside Latin-1; nothing to undo
            return text

        # UTF-8 before any legacy codepage
        encodings = [e for e in self._fallbacks if _is_utf8(e)]
        if allow_legacy:
            encodings.extend(e for e in self._fallbacks if not _is_utf8(e))

        for encoding in encodings:
            try:
                candidate = raw.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                continue
            if _is_acceptable(candidate):
                self.logger.debug("Repaired garbled output using %s", encoding)
                return candidate

        raise EncodingRecoveryError(
            "Garbled output could not be re-decoded",
            encodings=encodings,
        )

    def decode(self, data: bytes) -> str:
        """
        Decode raw subprocess bytes and normalize the result.

        Tries strict UTF-8 first, then each fallback encoding (accepted only
        when it yields CJK text), then UTF-8 with replacement characters.
        Output that was valid UTF-8 is only ever repaired as UTF-8 mojibake.
        """
        if not data:
            return ""

        try:
            return self._normalize(data.decode("utf-8"), allow_legacy=False)
        except UnicodeDecodeError:
            pass

        for encoding in self._fallbacks:
            if _is_utf8(encoding):
                continue
            try:
                candidate = data.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                continue
            if _is_acceptable(candidate):
                self.logger.debug("Decoded output using fallback %s", encoding)
                return candidate

        return self.normalize(data.decode("utf-8", errors="replace"))
