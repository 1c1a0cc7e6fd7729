"""Synchronize the managed <modules> region of a parent pom.xml.

The sync process:
1. Sniff the line ending and indentation used by the document
2. Locate the marker region, creating it if needed
3. Replace the region's contents with one <module> line per entry

Running it twice with the same module list yields the same text.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rpkgtests.errors import GenerationIOError
from rpkgtests.modules.region import MarkerDelimitedRegion, detect_eol, detect_indent

log = logging.getLogger(__name__)


def format_modules_block(modules: Sequence[str], eol: str, indent: str) -> str:
    """Inner text of the managed region for the given module names."""
    inner = indent * 2
    lines = "".join(f"{eol}{inner}<module>{m}</module>" for m in modules)
    return f"{lines}{eol}{inner}"


def add_modules(text: str, path: Path | str | None, modules: Sequence[str]) -> str:
    """Return text with the managed region listing exactly ``modules``.

    Args:
        text: Current content of the parent pom.xml.
        path: Path of the document, only used in error messages.
        modules: Module directory names, in the order they should appear.

    Raises:
        StructuralAnchorNotFoundError: If the document has no markers, no
            <modules> element and no </project> tag.
    """
    eol = detect_eol(text)
    indent = detect_indent(text)
    text, region = MarkerDelimitedRegion.locate_or_create(text, path, eol, indent)
    return region.replace_contents(text, format_modules_block(modules, eol, indent))


def sync_modules_file(
    file_path: Path | str,
    modules: Sequence[str],
    encoding: str = "utf-8",
    dry_run: bool = False,
) -> str:
    """Update the managed region of a pom.xml on disk.

    Returns "updated" or "unchanged".
    """
    file_path = Path(file_path)
    try:
        # Bytes in, bytes out: text mode would normalize CRLF
        content = file_path.read_bytes().decode(encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise GenerationIOError(f"Could not read {file_path}: {e}", file_path) from e

    new_content = add_modules(content, file_path, modules)
    if new_content == content:
        log.debug("Modules of %s are up to date", file_path)
        return "unchanged"

    if not dry_run:
        try:
            file_path.write_bytes(new_content.encode(encoding))
        except (OSError, UnicodeEncodeError) as e:
            raise GenerationIOError(f"Could not write {file_path}: {e}", file_path) from e
    log.info("Updated %d module(s) in %s", len(modules), file_path)
    return "updated"
