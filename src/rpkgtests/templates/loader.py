"""Build the Jinja2 template loader from a templates URI base.

Supported URI schemes:
    package:/some/dir  a directory of package data inside rpkgtests
    file:some/dir      a filesystem directory, relative to basedir
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
)

from rpkgtests.errors import ConfigError

PACKAGE_PREFIX = "package:"
FILE_PREFIX = "file:"
DEFAULT_TEMPLATES_URI_BASE = f"{PACKAGE_PREFIX}/create-test-modules-templates"


def _package_loader(templates_uri_base: str) -> PackageLoader:
    package_path = templates_uri_base[len(PACKAGE_PREFIX):].strip("/")
    try:
        return PackageLoader("rpkgtests", package_path)
    except ValueError as e:
        raise ConfigError(f"Cannot load templates from '{templates_uri_base}': {e}") from e


def create_template_loader(basedir: Path | str, templates_uri_base: str) -> BaseLoader:
    """Return a loader for templates_uri_base backed by the bundled templates.

    Raises:
        ConfigError: If the URI scheme is not package: or file:, or the
            package directory does not exist.
    """
    default_loader = _package_loader(DEFAULT_TEMPLATES_URI_BASE)
    if templates_uri_base == DEFAULT_TEMPLATES_URI_BASE:
        return default_loader
    if templates_uri_base.startswith(PACKAGE_PREFIX):
        return ChoiceLoader([_package_loader(templates_uri_base), default_loader])
    if templates_uri_base.startswith(FILE_PREFIX):
        directory = Path(basedir) / templates_uri_base[len(FILE_PREFIX):]
        return ChoiceLoader([FileSystemLoader(str(directory)), default_loader])
    raise ConfigError(
        f"Cannot handle templatesUriBase '{templates_uri_base}'; only values starting "
        f"with '{PACKAGE_PREFIX}' or '{FILE_PREFIX}' are supported"
    )


def create_environment(basedir: Path | str, templates_uri_base: str = DEFAULT_TEMPLATES_URI_BASE) -> Environment:
    # Undefined variables fail the render instead of producing empty text
    return Environment(
        loader=create_template_loader(basedir, templates_uri_base),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
