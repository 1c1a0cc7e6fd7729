"""Discover the test jars to generate modules for.

Test jars come from two configuration lists:
- GAV strings such as ``org.apache.camel:camel-core:3.0.0:tests``
- jar files, whose coordinates are read from the
  ``META-INF/maven/<groupId>/<artifactId>/pom.properties`` entry Maven
  embeds in every jar it builds
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterable
from pathlib import Path

from rpkgtests.errors import ConfigError, GenerationIOError
from rpkgtests.testjar.model import TestJar

log = logging.getLogger(__name__)


def parse_gav(gav: str) -> TestJar:
    """Parse groupId:artifactId[:version[:classifier]].

    A classifier is accepted and ignored; the generated module depends on
    the tests classifier regardless.
    """
    parts = gav.strip().split(":")
    if len(parts) < 2 or len(parts) > 4 or not all(parts[:2]):
        raise ConfigError(f"Expected groupId:artifactId[:version], found '{gav}'")
    version = parts[2] if len(parts) > 2 and parts[2] else None
    return TestJar(parts[0], parts[1], version)


def _parse_properties(text: str) -> dict[str, str]:
    props: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line[0] in "#!":
            continue
        key, sep, value = line.partition("=")
        if sep:
            props[key.strip()] = value.strip()
    return props


def read_test_jar_file(path: Path | str) -> TestJar:
    """Read Maven coordinates from the pom.properties embedded in a jar.

    Raises:
        GenerationIOError: If the jar can't be opened.
        ConfigError: If the jar has no pom.properties.
    """
    jar_path = Path(path)
    try:
        with zipfile.ZipFile(jar_path) as jar:
            entries = sorted(
                n for n in jar.namelist()
                if n.startswith("META-INF/maven/") and n.endswith("/pom.properties")
            )
            if not entries:
                raise ConfigError(f"No META-INF/maven/**/pom.properties in {jar_path}")
            props = _parse_properties(jar.read(entries[0]).decode("utf-8"))
    except (OSError, UnicodeDecodeError, zipfile.BadZipFile) as e:
        raise GenerationIOError(f"Could not read {jar_path}: {e}", jar_path) from e

    group_id = props.get("groupId")
    artifact_id = props.get("artifactId")
    if not group_id or not artifact_id:
        raise ConfigError(f"{entries[0]} in {jar_path} lacks groupId or artifactId")
    return TestJar(group_id, artifact_id, props.get("version"), jar_path)


def discover_test_jars(
    gavs: Iterable[str] = (),
    jar_files: Iterable[Path | str] = (),
    basedir: Path | str | None = None,
) -> list[TestJar]:
    """Collect test jars from GAV strings and jar files.

    Args:
        gavs: groupId:artifactId[:version] strings.
        jar_files: Paths to jar files, relative ones resolved against basedir.
        basedir: Base directory for relative jar paths. Defaults to the cwd.

    Returns:
        Test jars in configuration order, duplicates (same GAV) dropped.
    """
    base = Path(basedir) if basedir else Path.cwd()
    found: dict[str, TestJar] = {}

    for gav in gavs:
        jar = parse_gav(gav)
        found.setdefault(jar.gav, jar)

    for raw in jar_files:
        jar_path = Path(raw)
        if not jar_path.is_absolute():
            jar_path = base / jar_path
        jar = read_test_jar_file(jar_path)
        found.setdefault(jar.gav, jar)

    log.debug("Discovered %d test jar(s)", len(found))
    return list(found.values())
