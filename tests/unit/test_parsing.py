"""
Unit tests for svn output parsing.
"""

import pytest

from svnbridge.services.parsing import (
    StatusEntry,
    count_listed_files,
    parse_status_text,
    parse_status_xml,
    summarize_info,
)

STATUS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<status>
<target path=".">
<entry path="src/main.c">
<wc-status item="modified" props="none" revision="12"/>
</entry>
<entry path="notes.txt">
<wc-status item="unversioned" props="none"/>
</entry>
<entry path="文档/说明.md">
<wc-status item="added" props="none" revision="-1"/>
</entry>
</target>
</status>
"""


class TestParseStatusXml:
    """Tests for parse_status_xml function."""

    def test_entries(self):
        entries = parse_status_xml(STATUS_XML)

        assert [e.path for e in entries] == ["src/main.c", "notes.txt", "文档/说明.md"]
        assert entries[0].item == "modified"
        assert entries[0].revision == "12"

    def test_empty_output(self):
        assert parse_status_xml("") == []

    def test_malformed_output(self):
        with pytest.raises(ValueError):
            parse_status_xml("<status><entry")


class TestParseStatusText:
    """Tests for parse_status_text function."""

    def test_entries(self):
        text = "M       src/main.c\n?       notes.txt\nA  +    docs/new.md\n"

        entries = parse_status_text(text)

        assert [(e.item, e.path) for e in entries] == [
            ("modified", "src/main.c"),
            ("unversioned", "notes.txt"),
            ("added", "docs/new.md"),
        ]

    def test_skips_noise(self):
        text = "Performing status on external item at 'ext':\n\n--- Changelist 'x':\nX       ext\n"

        assert [e.item for e in parse_status_text(text)] == ["external"]


class TestStatusEntry:
    """Tests for StatusEntry labels."""

    @pytest.mark.parametrize(
        "item,label,modified",
        [
            ("normal", "Unmodified", False),
            ("modified", "Modified", True),
            ("unversioned", "Unversioned", False),
            ("conflicted", "Conflicted", True),
            ("something-new", "Something-new", True),
        ],
    )
    def test_label(self, item, label, modified):
        entry = StatusEntry(path="a.txt", item=item)

        assert entry.label == label
        assert entry.is_modified is modified


class TestListAndInfo:
    """Tests for count_listed_files and summarize_info."""

    def test_count_listed_files(self):
        assert count_listed_files("trunk/\ntrunk/a.txt\ntrunk/docs/\ntrunk/docs/b.md\n\n") == 2

    def test_summarize_info(self):
        info = (
            "Path: .\n"
            "URL: https://svn.example.com/repo/trunk\n"
            "Repository Root: https://svn.example.com/repo\n"
            "Revision: 42\n"
            "Last Changed Date: 2024-01-01 10:00:00 +0000\n"
        )

        assert summarize_info(info).splitlines() == [
            "Repository Root: https://svn.example.com/repo",
            "Revision: 42",
            "Last Changed Date: 2024-01-01 10:00:00 +0000",
        ]
