"""Core types."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError

# Category tokens, used verbatim inside consistent placeholders
IPV4 = "ipv4"
IPV6 = "ipv6"
MAC = "mac"
DOMAIN = "domain"
KEYWORD = "keyword"

CATEGORIES = (IPV4, IPV6, MAC, DOMAIN, KEYWORD)


class ReplacementType(str, Enum):
    """How a matched value is turned into a placeholder."""
    STATIC = "static"            # one constant per category, no identity kept
    CONSISTENT = "consistent"    # numbered per distinct value, stable for the run

    @classmethod
    def parse(cls, value: str | ReplacementType) -> ReplacementType:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"unknown replacement type {value!r}, "
                f"expected one of: {', '.join(t.value for t in cls)}"
            ) from None


class Target(str, Enum):
    """Which inputs an obfuscator is applied to."""
    CONTENTS = "contents"
    PATH = "path"
    ALL = "all"

    @classmethod
    def parse(cls, value: str | Target) -> Target:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"unknown target {value!r}, "
                f"expected one of: {', '.join(t.value for t in cls)}"
            ) from None

    @property
    def contents(self) -> bool:
        return self in (Target.CONTENTS, Target.ALL)

    @property
    def path(self) -> bool:
        return self in (Target.PATH, Target.ALL)


@dataclass(frozen=True, slots=True)
class Match:
    """A single located occurrence inside an input buffer."""
    category: str          # e.g. "ipv4", "mac"
    start: int
    end: int
    text: str              # raw matched substring
    canonical: str         # normalized identity, e.g. "10.0.187.218" for "10-0-187-218"
