"""Maven coordinates of a test jar or of a pom.xml."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, replace
from pathlib import Path

from rpkgtests.errors import ConfigError, GenerationIOError


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(element: ET.Element, name: str) -> str | None:
    for child in element:
        if _local_name(child.tag) == name:
            return (child.text or "").strip() or None
    return None


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


@dataclass(frozen=True)
class TestJar:
    """groupId:artifactId:version, plus the file it came from if any."""

    __test__ = False  # not a pytest test class

    group_id: str
    artifact_id: str
    version: str | None = None
    path: Path | None = None

    @property
    def gav(self) -> str:
        parts = [self.group_id, self.artifact_id]
        if self.version:
            parts.append(self.version)
        return ":".join(parts)

    def with_artifact_id(self, artifact_id: str) -> TestJar:
        return replace(self, artifact_id=artifact_id)

    @classmethod
    def read(cls, pom_path: Path | str, encoding: str = "utf-8") -> TestJar:
        """Read the coordinates declared in a pom.xml.

        groupId and version fall back to the <parent> element, as Maven
        inherits them.

        Raises:
            GenerationIOError: If the file can't be read.
            ConfigError: If the file is not well-formed or has no artifactId.
        """
        pom_path = Path(pom_path)
        try:
            source = pom_path.read_bytes().decode(encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise GenerationIOError(f"Could not read {pom_path}: {e}", pom_path) from e
        try:
            root = ET.fromstring(source)
        except ET.ParseError as e:
            raise ConfigError(f"{pom_path} is not well-formed XML: {e}") from e

        parent = _child(root, "parent")
        artifact_id = _child_text(root, "artifactId")
        if not artifact_id:
            raise ConfigError(f"No <artifactId> in {pom_path}")
        group_id = _child_text(root, "groupId")
        version = _child_text(root, "version")
        if parent is not None:
            group_id = group_id or _child_text(parent, "groupId")
            version = version or _child_text(parent, "version")
        if not group_id:
            raise ConfigError(f"No <groupId> in {pom_path} or its <parent>")
        return cls(group_id, artifact_id, version, pom_path)

    def __str__(self) -> str:
        return self.gav
