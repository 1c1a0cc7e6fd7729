"""Chained /pattern/replacement/ rules for deriving module names.

A replacer spec is a comma or whitespace separated list of tokens such as

    /-tests$//, /^camel-/camel-itest-/

Each token is a regular expression and a replacement template in Python
``re.sub`` syntax (``\\1``, ``\\g<name>``). Rules are applied in order, each
one to the output of the previous one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from rpkgtests.errors import MalformedRuleError

_SEPARATOR = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class Replacer:
    """A single compiled /pattern/replacement/ rule."""

    pattern: re.Pattern
    replacement: str

    @classmethod
    def parse(cls, raw: str) -> Replacer:
        if not raw.startswith("/"):
            raise MalformedRuleError(f"Replacer must start with a slash; found {raw}")
        if len(raw) < 2 or not raw.endswith("/"):
            raise MalformedRuleError(f"Replacer must end with a slash; found {raw}")
        trimmed = raw[1:-1]
        slash_pos = trimmed.find("/")
        if slash_pos < 0:
            raise MalformedRuleError(f"Replacer must contain three slashes; found {raw}")
        try:
            pattern = re.compile(trimmed[:slash_pos])
        except re.error as e:
            raise MalformedRuleError(f"Invalid pattern in replacer {raw}: {e}") from e
        return cls(pattern, trimmed[slash_pos + 1:])

    def apply(self, value: str) -> str:
        try:
            return self.pattern.sub(self.replacement, value)
        except re.error as e:
            raise MalformedRuleError(
                f"Invalid replacement {self.replacement!r} for /{self.pattern.pattern}/: {e}"
            ) from e


@dataclass(frozen=True)
class Replacers:
    """An ordered chain of Replacer rules. The empty chain is the identity."""

    replacers: tuple[Replacer, ...] = ()

    @classmethod
    def parse(cls, spec: str | None) -> Replacers:
        """Parse a comma or whitespace separated list of replacer tokens.

        Args:
            spec: The raw spec string. None or blank yields an empty chain.

        Raises:
            MalformedRuleError: If any token is not /pattern/replacement/.
        """
        if spec is None:
            return cls()
        tokens = [t for t in _SEPARATOR.split(spec.strip()) if t]
        return cls(tuple(Replacer.parse(t) for t in tokens))

    def apply(self, value: str) -> str:
        for replacer in self.replacers:
            value = replacer.apply(value)
        return value

    def __len__(self) -> int:
        return len(self.replacers)
