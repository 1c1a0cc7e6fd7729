"""Generation settings and their YAML file.

The configuration file (rpkgtests.yaml by default) is a YAML mapping:

    test-modules-parent-dir: tests
    rpkg-module-pom-xml-path: tests/rpkg/pom.xml
    test-module-artifact-id-replacers: /-tests$/-run-tests/
    test-module-dir-replacers: /^camel-//, /-tests$//
    rpkgtests-plugin-version: 0.4.0
    test-jars:
      - org.apache.camel:camel-core-tests:3.0.0

Keys may be written in kebab-case or snake_case. Relative paths resolve
against the directory holding the file.

Environment variables:
    RPKGTESTS_CONFIG: configuration file (default: ./rpkgtests.yaml)
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from rpkgtests.errors import ConfigError
from rpkgtests.templates.loader import DEFAULT_TEMPLATES_URI_BASE

DEFAULT_CONFIG_NAME = "rpkgtests.yaml"

_PATH_FIELDS = ("test_modules_parent_dir", "rpkg_module_pom_xml_path")
_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def default_config_path() -> Path:
    """Return the configuration file path."""
    return Path(os.environ.get("RPKGTESTS_CONFIG", DEFAULT_CONFIG_NAME))


@dataclass(frozen=True)
class GenerateConfig:
    """Everything one generation run needs to know."""

    rpkg_module_pom_xml_path: Path
    basedir: Path = field(default_factory=Path.cwd)
    test_modules_parent_dir: Path | None = None
    templates_uri_base: str = DEFAULT_TEMPLATES_URI_BASE
    test_module_artifact_id_replacers: str | None = None
    test_module_dir_replacers: str | None = None
    clean: bool = True
    rpkgtests_plugin_version: str | None = None
    encoding: str = "utf-8"
    test_jars: tuple[str, ...] = ()
    test_jar_files: tuple[str, ...] = ()

    @property
    def parent_dir(self) -> Path:
        """Directory the test modules are generated under."""
        return self.test_modules_parent_dir or self.basedir

    @property
    def parent_pom_path(self) -> Path:
        return self.parent_dir / "pom.xml"

    def replace(self, **overrides: Any) -> GenerateConfig:
        """Copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


def _normalize_key(key: str) -> str:
    return key.strip().replace("-", "_")


def _parse_bool(key: str, value: Any) -> bool:
    """Accept YAML booleans and their quoted spellings, nothing else."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE:
            return True
        if word in _FALSE:
            return False
    raise ConfigError(f"{key} must be true or false, found {value!r}")


def config_from_mapping(data: dict[str, Any], basedir: Path | str) -> GenerateConfig:
    """Build a GenerateConfig from a parsed mapping.

    Raises:
        ConfigError: On unknown keys, a missing rpkg-module-pom-xml-path or
            a clean value that is not a boolean.
    """
    base = Path(basedir)
    known = {f.name for f in dataclasses.fields(GenerateConfig)}
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _normalize_key(str(raw_key))
        if key not in known:
            raise ConfigError(f"Unknown configuration key '{raw_key}'")
        values[key] = value

    values["basedir"] = base / values["basedir"] if "basedir" in values else base
    if not values.get("rpkg_module_pom_xml_path"):
        raise ConfigError("rpkg-module-pom-xml-path is required")
    for key in _PATH_FIELDS:
        if values.get(key) is not None:
            values[key] = values["basedir"] / values[key]
    for key in ("test_jars", "test_jar_files"):
        raw = values.get(key) or ()
        if isinstance(raw, str):
            raw = [raw]
        values[key] = tuple(str(v) for v in raw)
    if "clean" in values:
        values["clean"] = _parse_bool("clean", values["clean"])
    for key in ("rpkgtests_plugin_version", "test_module_artifact_id_replacers", "test_module_dir_replacers"):
        if values.get(key) is not None:
            values[key] = str(values[key])

    return GenerateConfig(**values)


def load_config(path: Path | str | None = None) -> GenerateConfig:
    """Read and parse a configuration file.

    Args:
        path: Path to the YAML file. Defaults to default_config_path().

    Raises:
        ConfigError: If the file can't be read, or its YAML is malformed
            or not a mapping.
    """
    config_path = Path(path) if path else default_config_path()
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{config_path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} is not a YAML mapping")

    return config_from_mapping(data, config_path.resolve().parent)
