"""Locate or create the marker-delimited region inside a pom.xml.

The document is treated as plain text. Only three structures matter:
the marker comments, an existing <modules> element and the closing
</project> tag. Which of them is present decides the Anchor used to place
the region.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rpkgtests.errors import StructuralAnchorNotFoundError
from rpkgtests.modules import MODULES_END, MODULES_START

INDENT_PATTERN = re.compile(r"<project[^>]*>[\r\n]+([ \t]*)<")
DEFAULT_INDENT = "    "

MODULES_OPEN = "<modules>"
MODULES_CLOSE = "</modules>"
PROJECT_CLOSE = "</project>"

_MODULE_ENTRY = re.compile(r"<module>\s*([^<]*?)\s*</module>")


def detect_eol(text: str) -> str:
    """CRLF if the document contains any carriage return, LF otherwise."""
    return "\r\n" if "\r" in text else "\n"


def detect_indent(text: str) -> str:
    """Indentation of the first child element of <project>."""
    m = INDENT_PATTERN.search(text)
    return m.group(1) if m else DEFAULT_INDENT


class Anchor(Enum):
    """Where the managed region lives, or will be created."""

    MARKERS = "markers"
    CONTAINER = "container"
    ROOT = "root"


def find_anchor(text: str) -> Anchor | None:
    if MODULES_START in text:
        return Anchor.MARKERS
    if MODULES_OPEN in text:
        return Anchor.CONTAINER
    if PROJECT_CLOSE in text:
        return Anchor.ROOT
    return None


def _skip_eol(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in "\r\n":
        pos += 1
    return pos


def _marker_lines(eol: str, indent: str) -> str:
    inner = indent * 2
    return f"{inner}{MODULES_START}{eol}{inner}{MODULES_END}{eol}"


@dataclass(frozen=True)
class MarkerDelimitedRegion:
    """Offsets of the start and end markers within one document text."""

    start: int
    end: int

    @property
    def inner_start(self) -> int:
        return self.start + len(MODULES_START)

    @classmethod
    def locate(cls, text: str, path: Path | str | None = None) -> MarkerDelimitedRegion | None:
        """Find the existing region, or None if there is no start marker.

        Raises:
            StructuralAnchorNotFoundError: If the start marker has no end marker after it.
        """
        start = text.find(MODULES_START)
        if start < 0:
            return None
        end = text.find(MODULES_END, start + len(MODULES_START))
        if end < 0:
            raise StructuralAnchorNotFoundError(
                f"Found {MODULES_START} but no {MODULES_END} after it in {path}", path
            )
        return cls(start, end)

    @classmethod
    def locate_or_create(
        cls,
        text: str,
        path: Path | str | None = None,
        eol: str | None = None,
        indent: str | None = None,
    ) -> tuple[str, MarkerDelimitedRegion]:
        """Return the (possibly modified) text and the region within it.

        When the markers are missing they are inserted right after an
        existing <modules> opening tag, or, failing that, inside a new
        <modules> element placed just before </project>.

        Raises:
            StructuralAnchorNotFoundError: If neither markers, <modules> nor
                </project> can be found.
        """
        eol = eol or detect_eol(text)
        indent = indent if indent is not None else detect_indent(text)

        anchor = find_anchor(text)
        if anchor is None:
            raise StructuralAnchorNotFoundError(f"Could not find {PROJECT_CLOSE} in {path}", path)

        if anchor is Anchor.CONTAINER:
            pos = _skip_eol(text, text.find(MODULES_OPEN) + len(MODULES_OPEN))
            text = text[:pos] + _marker_lines(eol, indent) + text[pos:]
        elif anchor is Anchor.ROOT:
            pos = text.rfind(PROJECT_CLOSE)
            container = (
                f"{indent}{MODULES_OPEN}{eol}"
                f"{_marker_lines(eol, indent)}"
                f"{indent}{MODULES_CLOSE}{eol}"
            )
            text = text[:pos] + container + text[pos:]

        region = cls.locate(text, path)
        if region is None:
            raise StructuralAnchorNotFoundError(f"Could not place {MODULES_START} in {path}", path)
        return text, region

    def contents(self, text: str) -> str:
        return text[self.inner_start:self.end]

    def replace_contents(self, text: str, inner: str) -> str:
        return text[:self.inner_start] + inner + text[self.end:]


def read_modules(text: str, path: Path | str | None = None) -> list[str]:
    """Module names currently listed inside the managed region."""
    region = MarkerDelimitedRegion.locate(text, path)
    if region is None:
        return []
    return _MODULE_ENTRY.findall(region.contents(text))
