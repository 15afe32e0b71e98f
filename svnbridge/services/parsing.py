"""
Parsing of the few svn outputs the engine interprets itself.

Everything else is handed to the caller as opaque text.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

# wc-status item values, as reported by `svn status --xml`
STATUS_LABELS = {
    "normal": "Unmodified",
    "none": "Unmodified",
    "modified": "Modified",
    "added": "Added",
    "deleted": "Deleted",
    "replaced": "Replaced",
    "conflicted": "Conflicted",
    "unversioned": "Unversioned",
    "missing": "Missing",
    "ignored": "Ignored",
    "obstructed": "Obstructed",
    "external": "External",
    "incomplete": "Incomplete",
}

# First column of plain `svn status` output
STATUS_CODES = {
    "M": "modified",
    "A": "added",
    "D": "deleted",
    "R": "replaced",
    "C": "conflicted",
    "?": "unversioned",
    "!": "missing",
    "I": "ignored",
    "~": "obstructed",
    "X": "external",
}


@dataclass(frozen=True)
class StatusEntry:
    """One entry of `svn status`."""

    path: str
    item: str
    props: str = "none"
    revision: str | None = None

    @property
    def label(self) -> str:
        return STATUS_LABELS.get(self.item, self.item.capitalize())

    @property
    def is_modified(self) -> bool:
        return self.item not in ("normal", "none", "unversioned", "ignored", "external")


def parse_status_xml(xml_text: str) -> list[StatusEntry]:
    """
    Parse `svn status --xml` output.

    Raises:
        ValueError: The output is not well-formed XML
    """
    if not xml_text.strip():
        return []
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ValueError(f"Malformed status XML: {e}") from e

    entries = []
    for entry in root.iter("entry"):
        wc_status = entry.find("wc-status")
        if wc_status is None:
            continue
        entries.append(
            StatusEntry(
                path=entry.get("path", ""),
                item=wc_status.get("item", "none"),
                props=wc_status.get("props", "none"),
                revision=wc_status.get("revision"),
            )
        )
    return entries


def parse_status_text(text: str) -> list[StatusEntry]:
    """Parse plain `svn status` output (first column is the item status)."""
    entries = []
    for line in text.splitlines():
        if len(line) < 8 or line.startswith(("Performing", "---", "  >")):
            continue
        item = STATUS_CODES.get(line[0])
        if item is None:
            continue
        entries.append(StatusEntry(path=line[8:].strip(), item=item))
    return entries


def count_listed_files(list_output: str) -> int:
    """Count file entries in `svn list -R` output (directories end with '/')."""
    return sum(1 for line in list_output.splitlines() if line.strip() and not line.rstrip().endswith("/"))


def summarize_info(info_output: str) -> str:
    """Keep the repository root, revision and last-change lines of `svn info`."""
    wanted = ("Repository Root:", "Revision:", "Last Changed Date:")
    lines = [line.strip() for line in info_output.splitlines() if line.strip().startswith(wanted)]
    return "\n".join(lines)
