"""Error types raised by rpkgtests.

Every error is fatal to a generation run. The CLI reports
RpkgtestsError subclasses as a single ERROR line and exits non-zero.
"""

from __future__ import annotations

from pathlib import Path


class RpkgtestsError(Exception):
    """Base class for all rpkgtests failures."""


class ConfigError(RpkgtestsError, ValueError):
    """Invalid or incomplete configuration."""


class MalformedRuleError(RpkgtestsError, ValueError):
    """A replacer token is not of the form /pattern/replacement/."""


class StructuralAnchorNotFoundError(RpkgtestsError):
    """No place to put the managed module list could be found in a document."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RenderError(RpkgtestsError):
    """A template could not be found or evaluated."""

    def __init__(self, message: str, template: str | None = None) -> None:
        super().__init__(message)
        self.template = template


class GenerationIOError(RpkgtestsError):
    """Reading, writing, creating or deleting a path failed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path
