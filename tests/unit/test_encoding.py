"""
Unit tests for EncodingNormalizer.

Tests mojibake detection, East-Asian repair, idempotency and raw byte decoding.
"""

from unittest.mock import MagicMock

import pytest

from svnbridge.services.encoding import EncodingNormalizer, looks_garbled, needs_legacy_codec


def mojibake(text: str, encoding: str) -> str:
    """Simulate bytes in ``encoding`` being read as Latin-1."""
    return text.encode(encoding).decode("latin-1")


SAMPLES = [
    "",
    "plain ascii output",
    "M       src/main.c\n?       notes.txt\n",
    "中文路径/文件.txt",
    mojibake("提交成功", "utf-8"),
    mojibake("中文", "gbk"),
    mojibake("丂中文", "gbk"),
    mojibake("繁體中文", "big5"),
    "????",
    "café crème",
    "M       Größe.txt\n",
    "ÀÁÂ not cjk",
    "broken � char",
]


class TestLooksGarbled:
    """Tests for the mojibake signatures."""

    def test_utf8_read_as_latin1_is_garbled(self):
        assert looks_garbled(mojibake("中文", "utf-8")) is True

    def test_question_mark_runs_are_garbled(self):
        assert looks_garbled("file ?? name") is True

    def test_replacement_char_is_garbled(self):
        assert looks_garbled("a�b") is True

    def test_plain_text_is_not_garbled(self):
        assert looks_garbled("Working Copy Root Path: /ws/proj") is False

    def test_single_accent_is_not_garbled(self):
        assert looks_garbled("café") is False

    def test_adjacent_accents_look_garbled(self):
        """Two accented letters in a row match the signature on their own."""
        assert looks_garbled("Größe") is True

    def test_accented_latin_needs_no_legacy_codec(self):
        assert needs_legacy_codec("Größe Übergröße") is False

    def test_control_bytes_need_legacy_codec(self):
        assert needs_legacy_codec(mojibake("丂中文", "gbk")) is True

    def test_question_mark_runs_need_legacy_codec(self):
        assert needs_legacy_codec("??") is True


class TestNormalize:
    """Tests for EncodingNormalizer.normalize."""

    @pytest.fixture
    def normalizer(self):
        return EncodingNormalizer()

    def test_repairs_utf8_mojibake(self, normalizer):
        """UTF-8 bytes decoded as Latin-1 come back as ideographs."""
        result = normalizer.normalize(mojibake("中文", "utf-8"))

        assert result == "中文"
        assert "�" not in result

    def test_repairs_gbk_mojibake(self, normalizer):
        """GBK bytes with a control-range byte are repaired via the gbk fallback."""
        result = normalizer.normalize(mojibake("丂中文", "gbk"))

        assert result == "丂中文"
        assert "�" not in result

    def test_repairs_mixed_line(self, normalizer):
        """ASCII around the garbled part survives the repair."""
        line = "A    " + mojibake("文档/说明.txt", "utf-8")

        assert normalizer.normalize(line) == "A    文档/说明.txt"

    def test_clean_text_unchanged(self, normalizer):
        text = "r42 | alice | 2024-01-01\n"
        assert normalizer.normalize(text) == text

    def test_cjk_text_unchanged(self, normalizer):
        assert normalizer.normalize("中文路径") == "中文路径"

    def test_german_file_name_unchanged(self, normalizer):
        line = "M       Größe.txt\n"

        assert normalizer.normalize(line) == line

    def test_french_file_name_unchanged(self, normalizer):
        line = "A       réservé/élève.txt\n"

        assert normalizer.normalize(line) == line

    def test_gb2312_mojibake_without_control_bytes_left_alone(self, normalizer):
        """Without a control byte, GBK mojibake is indistinguishable from Latin text."""
        garbled = mojibake("中文", "gbk")

        assert normalizer.normalize(garbled) == garbled

    def test_unrepairable_text_returned_as_is(self, normalizer):
        """Garbled-looking text with no CJK reading is left alone."""
        assert normalizer.normalize("????") == "????"

    def test_unrepairable_text_is_logged(self):
        logger = MagicMock()
        normalizer = EncodingNormalizer(logger=logger)

        normalizer.normalize("????")

        logger.debug.assert_called()

    def test_repair_can_be_disabled(self):
        normalizer = EncodingNormalizer(repair=False)
        garbled = mojibake("中文", "utf-8")

        assert normalizer.normalize(garbled) == garbled

    def test_custom_fallbacks_are_used(self):
        """Without gbk in the list, GBK mojibake cannot be repaired."""
        normalizer = EncodingNormalizer(fallbacks=["utf-8"])
        garbled = mojibake("丂中文", "gbk")

        assert normalizer.normalize(garbled) == garbled

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, normalizer, text):
        once = normalizer.normalize(text)
        assert normalizer.normalize(once) == once


class TestDecode:
    """Tests for EncodingNormalizer.decode on raw process output."""

    @pytest.fixture
    def normalizer(self):
        return EncodingNormalizer()

    def test_empty_bytes(self, normalizer):
        assert normalizer.decode(b"") == ""

    def test_utf8_bytes(self, normalizer):
        assert normalizer.decode("提交 r5".encode()) == "提交 r5"

    def test_gbk_bytes_use_fallback(self, normalizer):
        assert normalizer.decode("中文".encode("gbk")) == "中文"

    def test_undecodable_bytes_use_replacement(self, normalizer):
        result = normalizer.decode(b"ok \xff\xff")

        assert result.startswith("ok ")
        assert "�" in result

    def test_decoded_text_is_normalized(self, normalizer):
        """Mojibake already present in UTF-8 output is repaired too."""
        data = mojibake("中文", "utf-8").encode("utf-8")

        assert normalizer.decode(data) == "中文"

    def test_utf8_latin_output_unchanged(self, normalizer):
        """Valid UTF-8 with accented letters is never run through a CJK codec."""
        line = "?       Übergröße.txt\n"

        assert normalizer.decode(line.encode("utf-8")) == line

    def test_utf8_status_listing_unchanged(self, normalizer):
        listing = "M       Größe.txt\nA       café/crème.txt\n"

        assert normalizer.decode(listing.encode("utf-8")) == listing
